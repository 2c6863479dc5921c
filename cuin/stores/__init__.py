"""Caches for derived filter views."""

from .derived_cache import DerivedCache, fingerprint, identities

__all__ = ["DerivedCache", "fingerprint", "identities"]
