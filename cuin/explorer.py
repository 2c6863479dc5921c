"""Read-only access to a loaded usage payload and its derived views."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from .config import CuinConfig
from .logging import get_logger
from .models import Component, Meta, PackageWithCount, TransformedPayload
from .payload import find_component, read_document, transform_payload
from .props_analyze import PropAnalysis, analyze_props
from .schema import normalize_payload
from .selection import ComponentFilterStore, InstanceFilterStore


class UnknownComponentError(LookupError):
    """Raised when a component id is not present in the payload."""

    def __init__(self, component_id: str) -> None:
        super().__init__(f"Component not found: {component_id}")
        self.component_id = component_id


class UsageExplorer:
    """Holds one transformed payload and hands out filter stores over it."""

    def __init__(
        self,
        payload: TransformedPayload,
        *,
        config: Optional[CuinConfig] = None,
        document: Any = None,
    ) -> None:
        self.payload = payload
        self.config = config
        self.document = document
        self._analysis: Dict[str, List[PropAnalysis]] = {}
        self.logger = get_logger("explorer")

    @classmethod
    def from_file(cls, path: Path, *, config: Optional[CuinConfig] = None) -> "UsageExplorer":
        document = read_document(path)
        payload = transform_payload(normalize_payload(document))
        explorer = cls(payload, config=config, document=document)
        explorer.logger.info(
            "Loaded %d components and %d packages from %s",
            len(payload.components),
            len(payload.packages),
            path,
        )
        return explorer

    @property
    def meta(self) -> Meta:
        return self.payload.meta

    @property
    def components(self) -> List[Component]:
        return self.payload.components

    @property
    def packages(self) -> List[PackageWithCount]:
        return self.payload.packages

    def component(self, component_id: str) -> Component:
        component = find_component(self.components, component_id)
        if component is None:
            raise UnknownComponentError(component_id)
        return component

    def list_store(
        self,
        *,
        name_query: str = "",
        excluded_packages: Optional[Iterable[str]] = None,
        sort_by: Optional[str] = None,
    ) -> ComponentFilterStore:
        """Create listing state, seeded from configuration where not given."""
        listing = self.config.listing if self.config is not None else None
        if excluded_packages is None:
            excluded_packages = listing.excluded_packages if listing is not None else ()
        if sort_by is None and listing is not None:
            sort_by = listing.sort_by
        store = ComponentFilterStore(
            self.packages, name_query=name_query, excluded_packages=excluded_packages
        )
        if sort_by is not None:
            store.set_sort_by(sort_by)
        return store

    def list_components(
        self,
        *,
        name_query: str = "",
        excluded_packages: Optional[Iterable[str]] = None,
        sort_by: Optional[str] = None,
    ) -> List[Component]:
        store = self.list_store(
            name_query=name_query, excluded_packages=excluded_packages, sort_by=sort_by
        )
        return store.apply(self.components)

    def props_analysis(self, component_id: str) -> List[PropAnalysis]:
        analysis = self._analysis.get(component_id)
        if analysis is None:
            analysis = analyze_props(self.component(component_id).instances)
            self._analysis[component_id] = analysis
        return analysis

    def instance_store(
        self,
        component_id: str,
        *,
        excluded_packages: Iterable[str] = (),
        prop_filters: Optional[Mapping[str, Sequence[str]]] = None,
    ) -> InstanceFilterStore:
        """Create detail-view state, optionally narrowed to the given selections."""
        delay = self.config.detail.search_debounce_ms if self.config is not None else None
        options: Dict[str, Any] = {}
        if delay is not None:
            options["search_delay_ms"] = delay
        store = InstanceFilterStore(
            self.component(component_id).instances,
            self.props_analysis(component_id),
            **options,
        )
        for name in excluded_packages:
            if store.is_package_selected(name):
                store.toggle_package(name)
        for key, values in (prop_filters or {}).items():
            store.select_only_values(key, values)
        return store


__all__ = ["UnknownComponentError", "UsageExplorer"]
