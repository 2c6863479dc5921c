"""Normalization and validation of raw analyzer payloads."""

from __future__ import annotations

import re
from typing import Any, Dict, List, Mapping, Optional

from .models import (
    Instance,
    Meta,
    NativePackage,
    NonNativePackage,
    PackageIdentity,
    Payload,
    Prop,
    RawComponent,
    Span,
)

_WORD_SEPARATOR = re.compile(r"[_\-\s]+")
_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")
_SPAN_FIELDS = ("start", "end", "startLine", "endLine", "startCol", "endCol")
_NON_NATIVE_TYPES = ("internal", "external")


class ValidationError(ValueError):
    """Raised when a payload does not conform to the expected shape."""

    def __init__(self, path: str, expected: str) -> None:
        super().__init__(f"{path or '<root>'}: expected {expected}")
        self.path = path
        self.expected = expected


def to_camel_case(key: str) -> str:
    parts = [part for part in _WORD_SEPARATOR.split(key) if part]
    if not parts:
        return key
    head = parts[0][:1].lower() + parts[0][1:]
    return head + "".join(part[:1].upper() + part[1:] for part in parts[1:])


def to_camel_case_keys(value: Any) -> Any:
    """Rewrite every mapping key in ``value`` to camelCase, recursively."""
    if isinstance(value, Mapping):
        return {
            (to_camel_case(key) if isinstance(key, str) else key): to_camel_case_keys(item)
            for key, item in value.items()
        }
    if isinstance(value, list):
        return [to_camel_case_keys(item) for item in value]
    return value


def normalize_payload(raw: Any) -> Payload:
    """Convert an untyped JSON value into a typed :class:`Payload`.

    Keys are camel-cased first, then the structure is validated. The first
    non-conforming field raises :class:`ValidationError`; nothing is recovered.
    """
    data = to_camel_case_keys(raw)
    root = _require_mapping(data, "")
    meta_data = _require_mapping(_field(root, "meta", ""), "meta")
    base_path = _require_str(_field(meta_data, "basePath", "meta"), _join("meta", "basePath"))
    meta = Meta(base_path=base_path)
    components_data = _require_list(_field(root, "components", ""), "components")
    components = [
        _parse_component(item, f"components[{index}]")
        for index, item in enumerate(components_data)
    ]
    return Payload(meta=meta, components=components)


# ----------------------------------------------------------------------
# Internal helpers


def _parse_component(value: Any, path: str) -> RawComponent:
    data = _require_mapping(value, path)
    instances_data = _require_list(_field(data, "instances", path), _join(path, "instances"))
    return RawComponent(
        id=_require_str(_field(data, "id", path), _join(path, "id")),
        name=_require_str(_field(data, "name", path), _join(path, "name")),
        package=_parse_package(_field(data, "package", path), _join(path, "package")),
        instances=[
            _parse_instance(item, f"{_join(path, 'instances')}[{index}]")
            for index, item in enumerate(instances_data)
        ],
    )


def _parse_instance(value: Any, path: str) -> Instance:
    data = _require_mapping(value, path)
    props_data = _require_list(_field(data, "props", path), _join(path, "props"))
    props = [
        _parse_prop(item, f"{_join(path, 'props')}[{index}]")
        for index, item in enumerate(props_data)
    ]
    return Instance(
        file_path=_require_str(_field(data, "filePath", path), _join(path, "filePath")),
        raw=_require_str(_field(data, "raw", path), _join(path, "raw")),
        span=_parse_span(_field(data, "span", path), _join(path, "span")),
        import_specifier=_optional_str(data.get("importSpecifier"), _join(path, "importSpecifier")),
        resolved_path=_require_str(_field(data, "resolvedPath", path), _join(path, "resolvedPath")),
        package=_parse_package(_field(data, "package", path), _join(path, "package")),
        props=props,
    )


def _parse_prop(value: Any, path: str) -> Prop:
    data = _require_mapping(value, path)
    return Prop(
        key=_require_str(_field(data, "key", path), _join(path, "key")),
        raw=_require_str(_field(data, "raw", path), _join(path, "raw")),
        prop_type=_require_str(_field(data, "propType", path), _join(path, "propType")),
        value=_optional_str(data.get("value"), _join(path, "value")),
    )


def _parse_span(value: Any, path: str) -> Span:
    data = _require_mapping(value, path)
    numbers: Dict[str, int] = {}
    for name in _SPAN_FIELDS:
        item = _field(data, name, path)
        if isinstance(item, float) and item.is_integer():
            item = int(item)
        if isinstance(item, bool) or not isinstance(item, int):
            raise ValidationError(_join(path, name), "an integer")
        numbers[name] = item
    return Span(
        start=numbers["start"],
        end=numbers["end"],
        start_line=numbers["startLine"],
        end_line=numbers["endLine"],
        start_col=numbers["startCol"],
        end_col=numbers["endCol"],
    )


def _parse_package(value: Any, path: str) -> PackageIdentity:
    data = _require_mapping(value, path)
    package_type = _field(data, "type", path)
    if package_type == "native":
        return NativePackage()
    if package_type not in _NON_NATIVE_TYPES:
        raise ValidationError(_join(path, "type"), 'one of "native", "internal", "external"')
    return NonNativePackage(
        type=package_type,
        name=_require_str(_field(data, "name", path), _join(path, "name")),
        version=_require_str(_field(data, "version", path), _join(path, "version")),
    )


def _field(data: Mapping[str, Any], name: str, path: str) -> Any:
    if name not in data:
        raise ValidationError(_join(path, name), "a value but the field is missing")
    return data[name]


def _require_mapping(value: Any, path: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ValidationError(path, "an object")
    return value


def _require_list(value: Any, path: str) -> List[Any]:
    if not isinstance(value, list):
        raise ValidationError(path, "an array")
    return value


def _require_str(value: Any, path: str) -> str:
    if not isinstance(value, str):
        raise ValidationError(path, "a string")
    return value


def _optional_str(value: Any, path: str) -> Optional[str]:
    if value is None:
        return None
    return _require_str(value, path)


def _join(path: str, name: str) -> str:
    # Report paths in the payload's snake_case spelling.
    snake = _CAMEL_BOUNDARY.sub("_", name).lower()
    return f"{path}.{snake}" if path else snake


__all__ = ["ValidationError", "normalize_payload", "to_camel_case", "to_camel_case_keys"]
