"""Configuration loading for cuin (.cuin.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .component_filter import DEFAULT_SORT, is_sort_option
from .selection.debounce import DEFAULT_DELAY_MS

CONFIG_FILENAME = ".cuin.yml"
DEFAULT_HOST = "localhost"
DEFAULT_PORT = 3214


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class ListConfig:
    """Initial state of the component listing."""

    sort_by: str = DEFAULT_SORT
    excluded_packages: List[str] = field(default_factory=list)


@dataclass
class DetailConfig:
    """Instance detail view settings."""

    search_debounce_ms: int = DEFAULT_DELAY_MS


@dataclass
class ServerConfig:
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT


@dataclass
class CuinConfig:
    """Represents the settings defined in .cuin.yml."""

    root: Path
    payload: Optional[Path] = None
    log_file: Optional[Path] = None
    listing: ListConfig = field(default_factory=ListConfig)
    detail: DetailConfig = field(default_factory=DetailConfig)
    server: ServerConfig = field(default_factory=ServerConfig)


def load_config(config_path: Path) -> CuinConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return CuinConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    payload_str = _as_str(data.get("payload"))
    log_file_str = _as_str(data.get("log_file"))

    list_config = ListConfig()
    list_data = _as_dict(data.get("list"))
    if list_data:
        sort_by = _as_str(list_data.get("sort_by"))
        if sort_by is not None and is_sort_option(sort_by):
            list_config.sort_by = sort_by
        list_config.excluded_packages = _as_str_list(list_data.get("excluded_packages"))

    detail_config = DetailConfig()
    detail_data = _as_dict(data.get("detail"))
    if detail_data:
        delay = _as_int(detail_data.get("search_debounce_ms"))
        if delay is not None and delay >= 0:
            detail_config.search_debounce_ms = delay

    server_config = ServerConfig()
    server_data = _as_dict(data.get("server"))
    if server_data:
        server_config.host = _as_str(server_data.get("host")) or DEFAULT_HOST
        server_config.port = _as_int(server_data.get("port")) or DEFAULT_PORT

    return CuinConfig(
        root=root,
        payload=root / payload_str if payload_str else None,
        log_file=root / log_file_str if log_file_str else None,
        listing=list_config,
        detail=detail_config,
        server=server_config,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "CuinConfig",
    "DetailConfig",
    "ListConfig",
    "ServerConfig",
    "load_config",
]
