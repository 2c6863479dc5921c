"""In-memory cache for derived views keyed by an input fingerprint."""

from __future__ import annotations

from dataclasses import dataclass
from hashlib import sha256
import json
from typing import Any, Callable, Dict, Iterable, List, Mapping, TypeVar

from ..logging import get_logger

T = TypeVar("T")


@dataclass
class _Entry:
    fingerprint: str
    value: Any
    # Inputs whose object identity is part of the fingerprint stay alive so
    # their ids cannot be reused while the entry exists.
    pinned: Any = None


class DerivedCache:
    """Holds one computed value per view name, recomputed when its inputs change."""

    def __init__(self) -> None:
        self._entries: Dict[str, _Entry] = {}
        self._logger = get_logger("stores.derived_cache")
        self.hits = 0
        self.misses = 0

    def get_or_compute(
        self, name: str, fingerprint: str, compute: Callable[[], T], *, pin: Any = None
    ) -> T:
        entry = self._entries.get(name)
        if entry is not None and entry.fingerprint == fingerprint:
            self.hits += 1
            return entry.value
        self.misses += 1
        self._logger.debug("Recomputing derived view %s", name)
        value = compute()
        self._entries[name] = _Entry(fingerprint=fingerprint, value=value, pinned=pin)
        return value

    def invalidate(self, name: str) -> None:
        self._entries.pop(name, None)

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, name: object) -> bool:
        return name in self._entries


def fingerprint(*parts: Any) -> str:
    """Hash ``parts`` into a stable digest; sets and mappings are order-insensitive."""
    canonical = json.dumps([_canonical(part) for part in parts], sort_keys=True)
    return sha256(canonical.encode("utf-8")).hexdigest()


def identities(items: Iterable[Any]) -> List[int]:
    """Return the object ids of ``items`` in order, for identity-keyed fingerprints."""
    return [id(item) for item in items]


def _canonical(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {str(key): _canonical(item) for key, item in value.items()}
    if isinstance(value, (set, frozenset)):
        return sorted(_canonical(item) for item in value)
    if isinstance(value, (list, tuple)):
        return [_canonical(item) for item in value]
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    return repr(value)


__all__ = ["DerivedCache", "fingerprint", "identities"]
