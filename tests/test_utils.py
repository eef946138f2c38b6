"""Tests for utility functions."""

import os
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from flask import Flask

from app.exceptions import InvalidArgument
from app.utils import MAX_ID, json_body, normalize_text, parse_digits, parse_positive_int, respond


class TestNormalizeText:
    """Test diacritic-insensitive folding."""

    def test_lowercases(self):
        assert normalize_text('Fix You') == 'fix you'

    def test_strips_diacritics(self):
        assert normalize_text('Lạc Trôi') == 'lac troi'
        assert normalize_text('Chúng Ta Của Hiện Tại') == 'chung ta cua hien tai'
        assert normalize_text('Beyoncé') == 'beyonce'

    def test_folds_stroked_d(self):
        assert normalize_text('Đừng Làm Trái Tim Anh Đau') == 'dung lam trai tim anh dau'

    def test_collapses_whitespace(self):
        assert normalize_text('  Blue   in\tGreen ') == 'blue in green'

    def test_empty_inputs(self):
        assert normalize_text('') == ''
        assert normalize_text(None) == ''


class TestParseDigits:
    """Test strict decimal parsing of query and path values."""

    def test_plain_digits(self):
        assert parse_digits('10', 'bad') == 10
        assert parse_digits(' 3 ', 'bad') == 3

    @pytest.mark.parametrize('raw', ['1_0', '+5', '-1', '1.0', '1e3', '٣', '３', '', ' '])
    def test_rejects_non_ascii_digit_strings(self, raw):
        with pytest.raises(InvalidArgument, match='bad value'):
            parse_digits(raw, 'bad value')

    def test_huge_values_are_parsed(self):
        assert parse_digits('99999999999999999999', 'bad') == 99999999999999999999


class TestParsePositiveInt:
    """Test identifier parsing."""

    def test_valid_values(self):
        assert parse_positive_int('42') == 42
        assert parse_positive_int(7) == 7
        assert parse_positive_int(str(MAX_ID)) == MAX_ID

    @pytest.mark.parametrize('raw', [
        'abc', '', None, '0', '-3', 0, True, '1.5', 1.0, '1_0', '+5', '٣',
        [1], {'id': 1}, str(MAX_ID + 1), MAX_ID + 1, '99999999999999999999',
    ])
    def test_invalid_values(self, raw):
        with pytest.raises(InvalidArgument):
            parse_positive_int(raw, 'song id')


    def test_message_names_field(self):
        with pytest.raises(InvalidArgument, match='Invalid playlist id'):
            parse_positive_int('x', 'playlist id')


class TestRespond:
    """Test the JSON envelope."""

    @pytest.fixture
    def app(self):
        return Flask(__name__)

    def test_plain_payload(self, app):
        with app.app_context():
            resp, status = respond({'id': 1}, message='Done', status_code=201)
        assert status == 201
        assert resp.get_json() == {'statusCode': 201, 'message': 'Done', 'data': {'id': 1}}

    def test_defaults(self, app):
        with app.app_context():
            resp, status = respond()
        assert status == 200
        assert resp.get_json() == {'statusCode': 200, 'message': 'Success', 'data': None}

    def test_pagination_fields_only_when_paged(self, app):
        page = {'data': [1, 2], 'limit': 2, 'total': 5, 'totalPages': 3, 'currentPage': 1}
        with app.app_context():
            resp, _ = respond(page=page)
        body = resp.get_json()
        assert body['data'] == [1, 2]
        assert body['total'] == 5
        assert body['limit'] == 2
        assert body['totalPages'] == 3
        assert body['currentPage'] == 1


class TestJsonBody:
    """Test request body reading."""

    @pytest.fixture
    def app(self):
        return Flask(__name__)

    @pytest.mark.parametrize('payload, expected', [
        ({'name': 'x'}, {'name': 'x'}),
        ([1, 2], {}),
        ('text', {}),
        (None, {}),
    ])
    def test_only_objects_are_returned(self, app, payload, expected):
        with app.test_request_context('/', method='POST', json=payload):
            assert json_body() == expected

    def test_malformed_json(self, app):
        with app.test_request_context('/', method='POST', data='{not json',
                                      content_type='application/json'):
            assert json_body() == {}
