"""Selection state for the component listing."""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from ..component_filter import ComponentFilterState, DEFAULT_SORT, apply_component_filters
from ..logging import get_logger
from ..models import Component, PackageWithCount
from ..stores import DerivedCache, fingerprint, identities
from .checkbox import CheckboxGroup, CheckboxMode, Zone


class ComponentFilterStore:
    """Name query, sort order and package exclusions for one listing view."""

    def __init__(
        self,
        packages: Sequence[PackageWithCount],
        *,
        name_query: str = "",
        excluded_packages: Iterable[str] = (),
        sort_by: str = DEFAULT_SORT,
        cache: Optional[DerivedCache] = None,
    ) -> None:
        self.packages = list(packages)
        excluded = set(excluded_packages)
        self._group = CheckboxGroup(
            (package.key for package in self.packages),
            checked=[package.key for package in self.packages if package.key not in excluded],
        )
        self.name_query = name_query
        self.sort_by = sort_by
        self._cache = cache or DerivedCache()
        self._logger = get_logger("selection.components")

    @property
    def excluded_packages(self) -> frozenset[str]:
        return self._group.unchecked

    @property
    def filters(self) -> ComponentFilterState:
        return ComponentFilterState(
            name_query=self.name_query,
            excluded_packages=set(self.excluded_packages),
            sort_by=self.sort_by,
        )

    def set_name_query(self, value: str) -> None:
        self.name_query = value

    def set_sort_by(self, value: str) -> None:
        self.sort_by = value

    def is_package_selected(self, key: str) -> bool:
        return self._group.is_selected(key)

    def toggle_package(self, key: str) -> None:
        self._group.toggle(key)

    def select_only_package(self, key: str) -> None:
        self._group.select_only(key)

    def select_all_packages(self) -> None:
        self._group.select_all()

    def package_mode(self, key: str, zone: Optional[Zone]) -> Optional[CheckboxMode]:
        return self._group.mode_for(key, zone)

    def activate_package(self, key: str, zone: Zone) -> CheckboxMode:
        mode = self._group.activate(key, zone)
        self._logger.debug("Package row %s activated via %s: %s", key, zone.value, mode.value)
        return mode

    def has_active_filters(self) -> bool:
        return bool(self.name_query) or self._group.is_filtered()

    def clear_all_filters(self) -> None:
        self.name_query = ""
        self._group.select_all()

    def apply(self, components: Sequence[Component]) -> List[Component]:
        """Filter then sort ``components``, reusing the last result for the same inputs.

        The cache key covers every element of ``components`` by identity, so a
        different list of the same length or a list edited in place is recomputed.
        """
        snapshot = tuple(components)
        key = fingerprint(
            identities(snapshot), self.name_query, self.excluded_packages, self.sort_by
        )
        return self._cache.get_or_compute(
            "components",
            key,
            lambda: apply_component_filters(snapshot, self.filters),
            pin=snapshot,
        )
