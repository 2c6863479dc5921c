"""Helpers for building analyzer payloads and usage instances in tests."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from cuin.models import Instance, NativePackage, NonNativePackage, PackageIdentity, Prop, Span

NATIVE: Dict[str, Any] = {"type": "native"}


def external(name: str, version: str = "1.0.0") -> Dict[str, Any]:
    return {"type": "external", "name": name, "version": version}


def internal(name: str, version: str = "0.0.0") -> Dict[str, Any]:
    return {"type": "internal", "name": name, "version": version}


class PayloadBuilder:
    """Accumulates components and renders the snake_case JSON the analyzer emits."""

    def __init__(self, base_path: str = "/repo") -> None:
        self.base_path = base_path
        self._components: List[Dict[str, Any]] = []

    def component(
        self,
        component_id: str,
        name: str,
        package: Optional[Mapping[str, Any]] = None,
        instances: Optional[List[Dict[str, Any]]] = None,
    ) -> "PayloadBuilder":
        self._components.append(
            {
                "id": component_id,
                "name": name,
                "package": dict(package or NATIVE),
                "instances": list(instances or []),
            }
        )
        return self

    def build(self) -> Dict[str, Any]:
        return {"meta": {"base_path": self.base_path}, "components": list(self._components)}


def raw_instance(
    file_path: str = "src/App.tsx",
    props: Optional[Mapping[str, str]] = None,
    package: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    return {
        "file_path": file_path,
        "props": [
            {"key": key, "raw": value, "prop_type": "string"}
            for key, value in (props or {}).items()
        ],
        "raw": "<Button />",
        "span": {
            "start": 0,
            "end": 10,
            "start_line": 1,
            "end_line": 1,
            "start_col": 0,
            "end_col": 10,
        },
        "import_specifier": "Button",
        "resolved_path": "node_modules/ui/index.js",
        "package": dict(package or NATIVE),
    }


def make_instance(
    props: Optional[Mapping[str, str]] = None,
    package: Optional[PackageIdentity] = None,
    file_path: str = "src/App.tsx",
) -> Instance:
    return Instance(
        file_path=file_path,
        raw="<Button />",
        span=Span(start=0, end=10, start_line=1, end_line=1, start_col=0, end_col=10),
        import_specifier="Button",
        resolved_path="node_modules/ui/index.js",
        package=package or NativePackage(),
        props=[Prop(key=key, raw=value, prop_type="string") for key, value in (props or {}).items()],
    )


def ui_package(name: str = "ui", version: str = "1.0.0") -> NonNativePackage:
    return NonNativePackage(type="external", name=name, version=version)


__all__ = [
    "NATIVE",
    "PayloadBuilder",
    "external",
    "internal",
    "make_instance",
    "raw_instance",
    "ui_package",
]
