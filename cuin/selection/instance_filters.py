"""Selection state for the per-component instance view."""

from __future__ import annotations

from typing import Dict, FrozenSet, Iterable, List, Optional, Sequence

from ..instance_filter import (
    PackageInfo,
    build_filter_predicate,
    filter_instances,
    get_instance_packages,
)
from ..logging import get_logger
from ..models import Instance
from ..predicates import Predicate
from ..props_analyze import PropAnalysis, analyze_props, analyze_props_with_filter
from ..stores import DerivedCache, fingerprint, identities
from .checkbox import CheckboxGroup, CheckboxMode, Zone
from .debounce import DEFAULT_DELAY_MS, TimerFactory, _thread_timer
from .search import ValueSearch


class InstanceFilterStore:
    """Package exclusions and per-prop checked values for one component's usages.

    Every prop key starts with all of its observed values checked, which is the
    same as not filtering on that prop. Derived views are cached on the current
    selection so repeated reads between mutations are free.
    """

    def __init__(
        self,
        instances: Sequence[Instance],
        props_analysis: Optional[Sequence[PropAnalysis]] = None,
        *,
        search_delay_ms: int = DEFAULT_DELAY_MS,
        timer_factory: TimerFactory = _thread_timer,
        cache: Optional[DerivedCache] = None,
    ) -> None:
        self.instances = list(instances)
        self.props_analysis: List[PropAnalysis] = (
            list(props_analysis) if props_analysis is not None else analyze_props(self.instances)
        )
        self.packages: List[PackageInfo] = get_instance_packages(self.instances)
        self._package_group = CheckboxGroup(package.name for package in self.packages)
        self._value_groups: Dict[str, CheckboxGroup] = {
            analysis.key: CheckboxGroup(analysis.value_names()) for analysis in self.props_analysis
        }
        self._analysis_by_key = {analysis.key: analysis for analysis in self.props_analysis}
        self._searches: Dict[str, ValueSearch] = {}
        self._search_delay_ms = search_delay_ms
        self._timer_factory = timer_factory
        self._cache = cache or DerivedCache()
        self._logger = get_logger("selection.instances")

    # ------------------------------------------------------------------
    # Packages

    @property
    def excluded_packages(self) -> FrozenSet[str]:
        return self._package_group.unchecked

    def is_package_selected(self, name: str) -> bool:
        return self._package_group.is_selected(name)

    def toggle_package(self, name: str) -> None:
        self._package_group.toggle(name)

    def select_only_package(self, name: str) -> None:
        self._package_group.select_only(name)

    def select_all_packages(self) -> None:
        self._package_group.select_all()

    def package_mode(self, name: str, zone: Optional[Zone]) -> Optional[CheckboxMode]:
        return self._package_group.mode_for(name, zone)

    def activate_package(self, name: str, zone: Zone) -> CheckboxMode:
        return self._package_group.activate(name, zone)

    # ------------------------------------------------------------------
    # Prop values

    @property
    def prop_value_filters(self) -> Dict[str, FrozenSet[str]]:
        return {key: group.checked for key, group in self._value_groups.items()}

    @property
    def all_prop_values(self) -> Dict[str, Sequence[str]]:
        return {key: group.universe for key, group in self._value_groups.items()}

    def is_value_checked(self, prop_key: str, value: str) -> bool:
        group = self._value_groups.get(prop_key)
        return group is not None and group.is_selected(value)

    def toggle_value(self, prop_key: str, value: str) -> None:
        group = self._value_groups.get(prop_key)
        if group is not None:
            group.toggle(value)

    def select_only_value(self, prop_key: str, value: str) -> None:
        self.select_only_values(prop_key, [value])

    def select_only_values(self, prop_key: str, values: Iterable[str]) -> None:
        group = self._value_groups.get(prop_key)
        if group is not None:
            group.select_only_many(values)

    def select_all_values(self, prop_key: str) -> None:
        group = self._value_groups.get(prop_key)
        if group is not None:
            group.select_all()

    def clear_prop_filter(self, prop_key: str) -> None:
        self.select_all_values(prop_key)

    def is_prop_filtered(self, prop_key: str) -> bool:
        group = self._value_groups.get(prop_key)
        return group is not None and group.is_filtered()

    def get_checked_count(self, prop_key: str) -> int:
        group = self._value_groups.get(prop_key)
        return group.checked_count() if group is not None else 0

    def get_all_values_count(self, prop_key: str) -> int:
        group = self._value_groups.get(prop_key)
        return group.total_count() if group is not None else 0

    def value_mode(self, prop_key: str, value: str, zone: Optional[Zone]) -> Optional[CheckboxMode]:
        group = self._value_groups.get(prop_key)
        if group is None:
            return None
        return group.mode_for(value, zone)

    def activate_value(self, prop_key: str, value: str, zone: Zone) -> Optional[CheckboxMode]:
        group = self._value_groups.get(prop_key)
        if group is None:
            return None
        mode = group.activate(value, zone)
        self._logger.debug(
            "Value %s=%s activated via %s: %s", prop_key, value, zone.value, mode.value
        )
        return mode

    def search(self, prop_key: str) -> ValueSearch:
        """Return the value search for ``prop_key``, creating it on first use."""
        search = self._searches.get(prop_key)
        if search is None:
            search = ValueSearch(
                self._analysis_by_key[prop_key],
                self._value_groups[prop_key],
                delay_ms=self._search_delay_ms,
                timer_factory=self._timer_factory,
            )
            self._searches[prop_key] = search
        return search

    # ------------------------------------------------------------------
    # Whole-view operations

    def has_active_filters(self) -> bool:
        if self._package_group.is_filtered():
            return True
        return any(group.is_filtered() for group in self._value_groups.values())

    def clear_all_filters(self) -> None:
        self._package_group.select_all()
        for group in self._value_groups.values():
            group.select_all()

    def filter_predicate(self) -> Predicate[Instance]:
        return build_filter_predicate(
            self.excluded_packages, self.prop_value_filters, self.all_prop_values
        )

    def filtered_instances(self) -> List[Instance]:
        snapshot = tuple(self.instances)
        return self._cache.get_or_compute(
            "instances",
            self._selection_fingerprint(snapshot),
            lambda: filter_instances(snapshot, self.filter_predicate()),
            pin=snapshot,
        )

    def filtered_distribution(self) -> Dict[str, Dict[str, int]]:
        snapshot = tuple(self.instances)
        return self._cache.get_or_compute(
            "distribution",
            self._selection_fingerprint(snapshot),
            lambda: analyze_props_with_filter(snapshot, self.filtered_instances()),
            pin=snapshot,
        )

    def get_filtered_count(self, prop_key: str, value: str) -> int:
        return self.filtered_distribution().get(prop_key, {}).get(value, 0)

    def _selection_fingerprint(self, instances: Sequence[Instance]) -> str:
        return fingerprint(identities(instances), self.excluded_packages, self.prop_value_filters)
