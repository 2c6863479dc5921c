"""Helpers for reading filter state from query parameters."""

from __future__ import annotations

from typing import List, Optional, Sequence, Union

ParamValue = Optional[Union[str, Sequence[str]]]


def parse_comma_separated(value: ParamValue) -> List[str]:
    """Split ``a,b`` into items; repeated parameters are taken as-is."""
    if not value:
        return []
    if isinstance(value, str):
        return [item for item in value.split(",") if item]
    return list(value)


def parse_as_string(value: ParamValue) -> str:
    if not value:
        return ""
    if isinstance(value, str):
        return value
    return value[0] or ""


def parse_prop_filters(values: Sequence[str]) -> dict[str, List[str]]:
    """Group ``key=value`` pairs by key, keeping every value of repeated keys."""
    filters: dict[str, List[str]] = {}
    for item in values:
        key, separator, value = item.partition("=")
        if not separator or not key:
            continue
        filters.setdefault(key, []).append(value)
    return filters


__all__ = ["parse_as_string", "parse_comma_separated", "parse_prop_filters"]
