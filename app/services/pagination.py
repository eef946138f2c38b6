"""
Pagination resolver and result envelope.

Every paginated endpoint goes through ``parse_pagination_params`` (raw query
strings) or ``resolve_pagination`` (already typed values), fetches
``take`` rows starting at ``skip``, then wraps them with ``build_page``.
"""

import math
from typing import NamedTuple

from app.exceptions import InvalidArgument
from app.utils import parse_digits

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
DEFAULT_MAX_LIMIT = 20


class Pagination(NamedTuple):
    skip: int
    take: int
    current_page: int


def _check_positive(value, message):
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise InvalidArgument(message)
    return value


def resolve_pagination(page=None, limit=None, max_limit=DEFAULT_MAX_LIMIT) -> Pagination:
    """
    Turn optional page/limit values into a bounded slice.

    ``limit`` is clamped to ``max_limit``, never rejected for being large.
    ``page`` has no upper bound; the requested page is echoed back even when
    it is past the end of the data.

    Raises:
        InvalidArgument: if page or limit is given but not a positive integer
    """
    if page is None:
        page = DEFAULT_PAGE
    else:
        _check_positive(page, 'Page must be a positive integer if provided.')

    if limit is None:
        limit = DEFAULT_LIMIT
    else:
        _check_positive(limit, 'Limit must be a positive integer if provided.')

    take = min(limit, max(1, max_limit))
    skip = (page - 1) * take
    return Pagination(skip=skip, take=take, current_page=page)


def parse_pagination_params(args, max_limit=None) -> Pagination:
    """
    Resolve pagination from a query-string mapping such as ``request.args``.

    The server-side ``max_limit`` is not overridable from the query string.
    """
    from config import config

    page = args.get('page')
    limit = args.get('limit')

    if page is not None:
        page = parse_digits(page, 'Page must be a positive integer if provided.')
    if limit is None:
        limit = config.PAGE_DEFAULT_LIMIT
    else:
        limit = parse_digits(limit, 'Limit must be a positive integer if provided.')

    if max_limit is None:
        max_limit = config.PAGE_MAX_LIMIT
    return resolve_pagination(page=page, limit=limit, max_limit=max_limit)


def build_page(rows, total: int, take: int, current_page: int) -> dict:
    """Wrap one page of rows with its paging metadata."""
    take = max(1, take)
    return {
        'data': list(rows),
        'limit': take,
        'total': total,
        'totalPages': math.ceil(total / take),
        'currentPage': current_page,
    }
