"""Utility functions shared by routes and services."""

import re
import unicodedata

from flask import jsonify, request

from app.exceptions import InvalidArgument

DIGITS_RE = re.compile(r'[0-9]+')

# Largest value a 64-bit INTEGER primary key can hold
MAX_ID = 2 ** 63 - 1


def normalize_text(value: str) -> str:
    """
    Fold text for diacritic-insensitive search.

    Args:
        value: Raw title or name

    Returns:
        Lower-cased text without combining marks, whitespace collapsed
    """
    if not value:
        return ''

    # NFKD does not decompose the Vietnamese stroked d
    text = str(value).replace('đ', 'd').replace('Đ', 'D')
    text = unicodedata.normalize('NFKD', text)
    text = ''.join(ch for ch in text if not unicodedata.combining(ch))
    text = re.sub(r'\s+', ' ', text).strip().lower()
    return text


def parse_digits(raw, message: str) -> int:
    """
    Parse a plain ASCII decimal string such as a query or path value.

    Signs, underscores, decimal points and non-ASCII digits are rejected.

    Raises:
        InvalidArgument: with ``message`` if the value is not all digits
    """
    text = str(raw).strip()
    if not DIGITS_RE.fullmatch(text):
        raise InvalidArgument(message)
    return int(text)


def parse_positive_int(raw, field: str = 'id') -> int:
    """
    Parse a path/body identifier.

    Accepts digit strings and JSON integers.

    Raises:
        InvalidArgument: if the value is not a positive integer that fits an id column
    """
    message = f'Invalid {field}'
    if isinstance(raw, str):
        value = parse_digits(raw, message)
    elif isinstance(raw, int) and not isinstance(raw, bool):
        value = raw
    else:
        raise InvalidArgument(message)
    if value < 1 or value > MAX_ID:
        raise InvalidArgument(message)
    return value


def respond(data=None, message: str = 'Success', status_code: int = 200, page: dict = None):
    """
    Build the uniform JSON envelope.

    Args:
        data: Payload for the ``data`` field (ignored when ``page`` is given)
        message: Human readable status message
        status_code: HTTP status code, echoed in the body
        page: Result of ``build_page``; adds the pagination fields

    Returns:
        (response, status_code) tuple for Flask
    """
    body = {
        'statusCode': status_code,
        'message': message,
        'data': data,
    }
    if page is not None:
        body['data'] = page['data']
        body['total'] = page['total']
        body['limit'] = page['limit']
        body['totalPages'] = page['totalPages']
        body['currentPage'] = page['currentPage']
    return jsonify(body), status_code


def json_body() -> dict:
    """Request JSON as a dict; a missing, malformed or non-object body reads as empty."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}
