"""Derivation of package keys and usage aggregates from normalized payloads."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Sequence

from .logging import get_logger
from .models import (
    Component,
    KeyedPackage,
    PackageIdentity,
    PackageWithCount,
    Payload,
    RawComponent,
    TransformedPayload,
)
from .schema import ValidationError, normalize_payload

NATIVE_KEY = "native"

# Higher ranks sort first in the package listing.
PACKAGE_TYPE_PRIORITY: Dict[str, int] = {
    "external": 2,
    "internal": 1,
    "native": 0,
}

_LOGGER = get_logger("payload")


def package_key(package: PackageIdentity) -> str:
    """Return the canonical grouping key for a package identity."""
    if package.type == "native":
        return NATIVE_KEY
    return f"{package.type}:{package.name}@{package.version}"


def transform_component(component: RawComponent) -> Component:
    return Component(
        id=component.id,
        name=component.name,
        package=KeyedPackage(key=package_key(component.package), identity=component.package),
        instances=list(component.instances),
    )


def derive_usage_stats(components: Iterable[Component]) -> List[PackageWithCount]:
    """Group components by package key and rank the groups.

    Groups are ordered by package type priority (external, internal, native),
    then by component count descending; ties keep first-seen order.
    """
    representatives: Dict[str, PackageWithCount] = {}
    counts: Dict[str, int] = {}
    for component in components:
        key = component.package.key
        if key not in representatives:
            representatives[key] = PackageWithCount(
                key=key, identity=component.package.identity, count=0
            )
            counts[key] = 0
        counts[key] += 1

    grouped = [
        PackageWithCount(key=key, identity=package.identity, count=counts[key])
        for key, package in representatives.items()
    ]
    return sorted(
        grouped,
        key=lambda package: (-PACKAGE_TYPE_PRIORITY.get(package.type, -1), -package.count),
    )


def transform_payload(payload: Payload) -> TransformedPayload:
    components = [transform_component(component) for component in payload.components]
    packages = derive_usage_stats(components)
    _LOGGER.debug(
        "Transformed payload with %d components across %d packages",
        len(components),
        len(packages),
    )
    return TransformedPayload(meta=payload.meta, components=components, packages=packages)


def read_document(path: Path) -> Any:
    """Read the raw analyzer JSON document without interpreting it."""
    source = Path(path).expanduser()
    text = source.read_text(encoding="utf-8")
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValidationError("", f"a JSON document ({exc.msg} at line {exc.lineno})") from exc


def load_payload(path: Path) -> TransformedPayload:
    """Read an analyzer JSON document from disk, normalize and transform it."""
    payload = normalize_payload(read_document(path))
    _LOGGER.info("Loaded %d components from %s", len(payload.components), path)
    return transform_payload(payload)


def find_component(components: Sequence[Component], component_id: str) -> Component | None:
    for component in components:
        if component.id == component_id:
            return component
    return None


__all__ = [
    "NATIVE_KEY",
    "PACKAGE_TYPE_PRIORITY",
    "derive_usage_stats",
    "find_component",
    "load_payload",
    "read_document",
    "package_key",
    "transform_component",
    "transform_payload",
]
