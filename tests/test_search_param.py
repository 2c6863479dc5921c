"""Tests for query parameter parsing."""

from __future__ import annotations

from cuin.search_param import parse_as_string, parse_comma_separated, parse_prop_filters


def test_parse_comma_separated() -> None:
    assert parse_comma_separated(None) == []
    assert parse_comma_separated("") == []
    assert parse_comma_separated("a,,b") == ["a", "b"]
    assert parse_comma_separated(["a,b", "c"]) == ["a,b", "c"]


def test_parse_as_string() -> None:
    assert parse_as_string(None) == ""
    assert parse_as_string("query") == "query"
    assert parse_as_string(["first", "second"]) == "first"


def test_parse_prop_filters_groups_by_key() -> None:
    filters = parse_prop_filters(["variant=solid", "variant=outline", "size=", "broken", "=x"])

    assert filters == {"variant": ["solid", "outline"], "size": [""]}
