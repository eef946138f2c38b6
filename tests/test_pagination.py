"""
Tests for the pagination resolver and page envelope.

Covers:
  - Defaults with no arguments
  - Clamping of oversized limits
  - Rejection of explicit non-positive / non-integer values
  - Out-of-range pages echo the requested page
  - Query-string parsing
  - build_page metadata
"""

import os
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from app.exceptions import InvalidArgument
from app.services.pagination import (
    Pagination,
    build_page,
    parse_pagination_params,
    resolve_pagination,
)


class TestResolvePagination:
    def test_defaults(self):
        assert resolve_pagination() == Pagination(skip=0, take=10, current_page=1)

    def test_skip_follows_page_and_take(self):
        assert resolve_pagination(page=3, limit=5) == Pagination(skip=10, take=5, current_page=3)

    @pytest.mark.parametrize('limit', [21, 50, 1000])
    def test_limit_clamped_to_max(self, limit):
        assert resolve_pagination(limit=limit).take == 20

    def test_custom_max_limit(self):
        result = resolve_pagination(page=2, limit=100, max_limit=50)
        assert result.take == 50
        assert result.skip == 50

    @pytest.mark.parametrize('page', [0, -1])
    def test_invalid_page_rejected(self, page):
        with pytest.raises(InvalidArgument, match='Page must be a positive integer'):
            resolve_pagination(page=page)

    @pytest.mark.parametrize('limit', [0, -5])
    def test_invalid_limit_rejected(self, limit):
        with pytest.raises(InvalidArgument, match='Limit must be a positive integer'):
            resolve_pagination(limit=limit)

    def test_non_integer_rejected(self):
        with pytest.raises(InvalidArgument):
            resolve_pagination(page='2')
        with pytest.raises(InvalidArgument):
            resolve_pagination(limit=2.5)

    def test_page_beyond_data_is_echoed(self):
        result = resolve_pagination(page=999, limit=10)
        assert result.current_page == 999
        assert result.skip == 9980


class TestParsePaginationParams:
    def test_empty_args_use_defaults(self):
        assert parse_pagination_params({}, max_limit=20) == Pagination(skip=0, take=10, current_page=1)

    def test_parses_strings(self):
        assert parse_pagination_params({'page': '2', 'limit': '5'}, max_limit=20) == \
            Pagination(skip=5, take=5, current_page=2)

    def test_oversized_limit_clamped(self):
        assert parse_pagination_params({'limit': '500'}, max_limit=20).take == 20

    @pytest.mark.parametrize('args', [
        {'page': 'abc'},
        {'page': ''},
        {'page': '0'},
        {'page': '-1'},
        {'limit': 'ten'},
        {'limit': '0'},
        {'page': '1_0'},
        {'page': '+5'},
        {'page': '2abc'},
        {'limit': '١٠'},
    ])
    def test_invalid_values_rejected(self, args):
        with pytest.raises(InvalidArgument):
            parse_pagination_params(args, max_limit=20)

    def test_huge_page_is_accepted(self):
        result = parse_pagination_params({'page': '99999999999999999999'}, max_limit=20)
        assert result.current_page == 99999999999999999999
        assert result.take == 10

    def test_max_limit_not_taken_from_query(self):
        result = parse_pagination_params({'limit': '100', 'maxLimit': '100'}, max_limit=20)
        assert result.take == 20


class TestBuildPage:
    def test_metadata(self):
        page = build_page(['a', 'b'], total=5, take=2, current_page=1)
        assert page == {
            'data': ['a', 'b'],
            'limit': 2,
            'total': 5,
            'totalPages': 3,
            'currentPage': 1,
        }

    def test_exact_multiple(self):
        assert build_page([], total=20, take=10, current_page=3)['totalPages'] == 2

    def test_empty_result(self):
        page = build_page([], total=0, take=10, current_page=1)
        assert page['totalPages'] == 0
        assert page['data'] == []

    def test_zero_take_does_not_divide_by_zero(self):
        page = build_page([], total=3, take=0, current_page=1)
        assert page['limit'] == 1
        assert page['totalPages'] == 3
