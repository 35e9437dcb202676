"""Tests for list query construction."""

import pytest

from articlehub.services.query_builder import build_article_query


class TestTypeFilter:
    @pytest.mark.parametrize("include_all", [None, "true", "false"])
    def test_explicit_type_wins_over_include_all(self, include_all) -> None:
        args = {"type": "updated"}
        if include_all is not None:
            args["includeAll"] = include_all
        assert build_article_query(args).filter == {"type": "updated"}

    def test_include_all_lifts_type_restriction(self) -> None:
        assert build_article_query({"includeAll": "true"}).filter == {}

    @pytest.mark.parametrize("include_all", [None, "false", "True", "1", "yes", ""])
    def test_defaults_to_originals(self, include_all) -> None:
        args = {} if include_all is None else {"includeAll": include_all}
        assert build_article_query(args).filter == {"type": "original"}

    def test_empty_type_is_ignored(self) -> None:
        assert build_article_query({"type": "", "includeAll": "true"}).filter == {}


class TestPagination:
    def test_defaults(self) -> None:
        query = build_article_query({})
        assert (query.page, query.limit, query.skip) == (1, 15, 0)

    def test_skip_from_page_and_limit(self) -> None:
        query = build_article_query({"page": "2", "limit": "10"})
        assert query.skip == 10

    def test_non_numeric_falls_back_to_defaults(self) -> None:
        query = build_article_query({"page": "abc", "limit": "many"})
        assert (query.page, query.limit) == (1, 15)

    def test_clamps_to_minimum_of_one(self) -> None:
        query = build_article_query({"page": "-3", "limit": "0"})
        assert (query.page, query.limit, query.skip) == (1, 1, 0)

    def test_limit_capped(self) -> None:
        assert build_article_query({"limit": "5000"}, max_limit=100).limit == 100

    def test_huge_page_keeps_skip_within_64_bits(self) -> None:
        query = build_article_query({"page": "99999999999999999999", "limit": "100"})
        assert query.skip == (2 ** 63 - 1) // 100 * 100

    def test_configured_default_limit(self) -> None:
        assert build_article_query({}, default_limit=25).limit == 25


def test_parameter_order_does_not_matter() -> None:
    forward = {"type": "original", "includeAll": "true", "page": "3", "limit": "4"}
    backward = dict(reversed(list(forward.items())))
    assert build_article_query(forward) == build_article_query(backward)
