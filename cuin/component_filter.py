"""Name/package filtering and ordering for the component listing."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Literal, Sequence, Set, Tuple, get_args

from .models import Component

SortOption = Literal["name-asc", "name-desc", "usage-asc", "usage-desc"]

DEFAULT_SORT: SortOption = "name-asc"

SORT_OPTIONS: Tuple[Tuple[SortOption, str], ...] = (
    ("name-asc", "Name (asc)"),
    ("name-desc", "Name (desc)"),
    ("usage-asc", "Usage (asc)"),
    ("usage-desc", "Usage (desc)"),
)

_SORT_FIELDS: Dict[str, Tuple[str, bool]] = {
    "name-asc": ("name", False),
    "name-desc": ("name", True),
    "usage-asc": ("instance_count", False),
    "usage-desc": ("instance_count", True),
}


@dataclass
class ComponentFilterState:
    name_query: str = ""
    excluded_packages: Set[str] = field(default_factory=set)
    sort_by: str = DEFAULT_SORT


def is_sort_option(value: object) -> bool:
    return value in get_args(SortOption)


def filter_components(
    components: Iterable[Component],
    name_query: str = "",
    excluded_packages: Iterable[str] = (),
) -> List[Component]:
    """Keep components matching the name query whose package is not excluded."""
    query = name_query.lower()
    excluded = set(excluded_packages)
    return [
        component
        for component in components
        if (not query or query in component.name.lower())
        and component.package.key not in excluded
    ]


def sort_components(components: Sequence[Component], sort_by: str) -> List[Component]:
    """Return a sorted copy; unknown sort keys keep the input order."""
    ordered = list(components)
    sort_field = _SORT_FIELDS.get(sort_by)
    if sort_field is None:
        return ordered
    attribute, descending = sort_field
    ordered.sort(key=lambda component: getattr(component, attribute), reverse=descending)
    return ordered


def apply_component_filters(
    components: Sequence[Component], state: ComponentFilterState
) -> List[Component]:
    filtered = filter_components(components, state.name_query, state.excluded_packages)
    return sort_components(filtered, state.sort_by)


__all__ = [
    "ComponentFilterState",
    "DEFAULT_SORT",
    "SORT_OPTIONS",
    "SortOption",
    "apply_component_filters",
    "filter_components",
    "is_sort_option",
    "sort_components",
]
