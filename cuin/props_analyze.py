"""Per-prop value distributions across a set of usage instances."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from .models import Instance, Prop

NO_VALUE = "(no value)"

_PERCENTAGE_MULTIPLIER = 100.0


@dataclass(frozen=True)
class PropValueDistribution:
    value: str
    count: int
    percentage: float


@dataclass(frozen=True)
class PropAnalysis:
    """Frequency table for one prop key.

    ``total_count`` is matched plus missing instances, ``coverage`` is the share
    of instances carrying the key at all.
    """

    key: str
    total_count: int
    total_percentage: float
    values: List[PropValueDistribution] = field(default_factory=list)
    no_value_count: int = 0
    coverage: float = 0.0

    @property
    def has_no_value(self) -> bool:
        return self.no_value_count > 0

    @property
    def matched_count(self) -> int:
        return self.total_count - self.no_value_count

    def value_names(self) -> List[str]:
        return [distribution.value for distribution in self.values]


def percentage(count: int, total: int) -> float:
    """Return ``count / total`` as a percentage, or 0 when ``total`` is zero."""
    if total == 0:
        return 0.0
    return count / total * _PERCENTAGE_MULTIPLIER


def first_prop(instance: Instance, key: str) -> Optional[Prop]:
    for prop in instance.props:
        if prop.key == key:
            return prop
    return None


def collect_prop_keys(instances: Sequence[Instance]) -> List[str]:
    """Return every prop key in first-seen order."""
    keys: Dict[str, None] = {}
    for instance in instances:
        for prop in instance.props:
            keys.setdefault(prop.key, None)
    return list(keys)


def analyze_props(instances: Sequence[Instance]) -> List[PropAnalysis]:
    """Build a value distribution for every prop key seen on ``instances``.

    Each instance contributes at most one value per key (its first prop with
    that key); instances without the key are counted under ``(no value)``.
    Results are ordered by ``total_count`` descending, ties in first-seen order.
    """
    keys = collect_prop_keys(instances)
    value_counts: Dict[str, Dict[str, int]] = {key: {} for key in keys}
    missing_counts: Dict[str, int] = {key: 0 for key in keys}

    for instance in instances:
        seen: Dict[str, str] = {}
        for prop in instance.props:
            seen.setdefault(prop.key, prop.raw)
        for key in keys:
            if key in seen:
                counts = value_counts[key]
                counts[seen[key]] = counts.get(seen[key], 0) + 1
            else:
                missing_counts[key] += 1

    analysis = [
        _build_analysis(key, value_counts[key], missing_counts[key], len(instances))
        for key in keys
    ]
    return sorted(analysis, key=lambda item: -item.total_count)


def analyze_props_with_filter(
    all_instances: Sequence[Instance],
    filtered_instances: Sequence[Instance],
) -> Dict[str, Dict[str, int]]:
    """Count values per key over ``filtered_instances``.

    The key set always comes from ``all_instances`` so that no key disappears
    when the filtered subset no longer carries it.
    """
    result: Dict[str, Dict[str, int]] = {}
    for key in collect_prop_keys(all_instances):
        counts: Dict[str, int] = {}
        for instance in filtered_instances:
            prop = first_prop(instance, key)
            value = prop.raw if prop is not None else NO_VALUE
            counts[value] = counts.get(value, 0) + 1
        result[key] = counts
    return result


def _build_analysis(
    key: str,
    value_counts: Dict[str, int],
    no_value_count: int,
    instance_count: int,
) -> PropAnalysis:
    matched = sum(value_counts.values())
    values = sorted(
        (
            PropValueDistribution(value=value, count=count, percentage=percentage(count, matched))
            for value, count in value_counts.items()
        ),
        key=lambda item: -item.count,
    )
    if no_value_count > 0:
        values.append(
            PropValueDistribution(
                value=NO_VALUE,
                count=no_value_count,
                percentage=percentage(no_value_count, matched + no_value_count),
            )
        )
    total = matched + no_value_count
    return PropAnalysis(
        key=key,
        total_count=total,
        total_percentage=percentage(total, instance_count),
        values=values,
        no_value_count=no_value_count,
        coverage=percentage(matched, instance_count),
    )


__all__ = [
    "NO_VALUE",
    "PropAnalysis",
    "PropValueDistribution",
    "analyze_props",
    "analyze_props_with_filter",
    "collect_prop_keys",
    "first_prop",
    "percentage",
]
