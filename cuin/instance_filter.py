"""Compile instance-detail filter selections into a single predicate."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import AbstractSet, Iterable, List, Mapping, Sequence

from .models import Instance
from .predicates import InstancePredicates as IP
from .predicates import Predicate, and_, or_
from .props_analyze import NO_VALUE


@dataclass(frozen=True)
class PackageInfo:
    name: str
    count: int


@dataclass(frozen=True)
class PropKeyInfo:
    key: str
    count: int


def get_instance_packages(instances: Iterable[Instance]) -> List[PackageInfo]:
    """Count instances per display package name, most used first."""
    counts = Counter(instance.package.display_name for instance in instances)
    return [PackageInfo(name=name, count=count) for name, count in counts.most_common()]


def get_instance_prop_keys(instances: Iterable[Instance]) -> List[PropKeyInfo]:
    """Count prop occurrences per key, most used first."""
    counts = Counter(prop.key for instance in instances for prop in instance.props)
    return [PropKeyInfo(key=key, count=count) for key, count in counts.most_common()]


def build_filter_predicate(
    excluded_packages: AbstractSet[str],
    prop_value_filters: Mapping[str, AbstractSet[str]],
    all_prop_values: Mapping[str, Sequence[str]],
) -> Predicate[Instance]:
    """Return the conjunction of the package and prop-value clauses.

    A prop whose checked values cover its whole value universe adds no clause,
    so "everything checked" filters exactly like "nothing selected".
    """
    predicates: List[Predicate[Instance]] = []

    if excluded_packages:
        predicates.append(IP.package_not_in(frozenset(excluded_packages)))

    for prop_key, checked_values in prop_value_filters.items():
        universe = all_prop_values.get(prop_key, ())
        if len(checked_values) >= len(universe):
            continue
        value_predicates = [_value_predicate(prop_key, value) for value in sorted(checked_values)]
        predicates.append(or_(*value_predicates))

    return and_(*predicates)


def filter_instances(
    instances: Iterable[Instance], predicate: Predicate[Instance]
) -> List[Instance]:
    return [instance for instance in instances if predicate(instance)]


def _value_predicate(prop_key: str, value: str) -> Predicate[Instance]:
    if value == NO_VALUE:
        return IP.prop_missing(prop_key)
    return IP.prop_equals(prop_key, value)


__all__ = [
    "PackageInfo",
    "PropKeyInfo",
    "build_filter_predicate",
    "filter_instances",
    "get_instance_packages",
    "get_instance_prop_keys",
]
