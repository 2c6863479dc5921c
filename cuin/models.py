"""Core data models shared across cuin components."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal, Optional, Union

NATIVE_PACKAGE_LABEL = "(no package)"

PackageType = Literal["native", "internal", "external"]


@dataclass(frozen=True)
class NativePackage:
    """A component defined by the platform itself (e.g. an intrinsic element)."""

    type: Literal["native"] = "native"

    @property
    def display_name(self) -> str:
        return NATIVE_PACKAGE_LABEL


@dataclass(frozen=True)
class NonNativePackage:
    """A component imported from an internal workspace or external dependency."""

    type: Literal["internal", "external"]
    name: str
    version: str

    @property
    def display_name(self) -> str:
        return self.name


PackageIdentity = Union[NativePackage, NonNativePackage]


@dataclass(frozen=True)
class Span:
    """Byte offsets and line/column bounds of a usage site."""

    start: int
    end: int
    start_line: int
    end_line: int
    start_col: int
    end_col: int


@dataclass(frozen=True)
class Prop:
    """One attribute occurrence on a usage site."""

    key: str
    raw: str
    prop_type: str
    value: Optional[str] = None


@dataclass(frozen=True)
class Instance:
    """A single concrete usage of a component."""

    file_path: str
    raw: str
    span: Span
    import_specifier: Optional[str]
    resolved_path: str
    package: PackageIdentity
    props: List[Prop] = field(default_factory=list)


@dataclass(frozen=True)
class RawComponent:
    """Component entry as it appears in a normalized payload."""

    id: str
    name: str
    package: PackageIdentity
    instances: List[Instance] = field(default_factory=list)


@dataclass(frozen=True)
class Meta:
    base_path: str


@dataclass(frozen=True)
class Payload:
    """Normalized analyzer output."""

    meta: Meta
    components: List[RawComponent] = field(default_factory=list)


@dataclass(frozen=True)
class KeyedPackage:
    """Package identity paired with its derived key."""

    key: str
    identity: PackageIdentity

    @property
    def type(self) -> PackageType:
        return self.identity.type

    @property
    def name(self) -> Optional[str]:
        return getattr(self.identity, "name", None)

    @property
    def version(self) -> Optional[str]:
        return getattr(self.identity, "version", None)

    @property
    def display_name(self) -> str:
        return self.identity.display_name


@dataclass(frozen=True)
class Component:
    """Component enriched with its package key; instance count is derived."""

    id: str
    name: str
    package: KeyedPackage
    instances: List[Instance] = field(default_factory=list)

    @property
    def instance_count(self) -> int:
        return len(self.instances)


@dataclass(frozen=True)
class PackageWithCount:
    """A distinct package among a component collection and how many components use it."""

    key: str
    identity: PackageIdentity
    count: int

    @property
    def type(self) -> PackageType:
        return self.identity.type

    @property
    def name(self) -> Optional[str]:
        return getattr(self.identity, "name", None)

    @property
    def version(self) -> Optional[str]:
        return getattr(self.identity, "version", None)


@dataclass(frozen=True)
class TransformedPayload:
    meta: Meta
    components: List[Component]
    packages: List[PackageWithCount]
