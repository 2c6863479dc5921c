"""Tests for the payload explorer facade."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

import pytest

from cuin.config import CuinConfig, DetailConfig, ListConfig
from cuin.explorer import UnknownComponentError, UsageExplorer
from cuin.props_analyze import NO_VALUE


@pytest.fixture
def payload_file(tmp_path: Path, sample_document: Dict[str, Any]) -> Path:
    path = tmp_path / "payload.json"
    path.write_text(json.dumps(sample_document), encoding="utf-8")
    return path


def test_from_file_keeps_document_and_transformed_payload(
    payload_file: Path, sample_document: Dict[str, Any]
) -> None:
    explorer = UsageExplorer.from_file(payload_file)

    assert explorer.document == sample_document
    assert explorer.meta.base_path == "/repo"
    assert len(explorer.components) == 4
    assert [package.key for package in explorer.packages] == [
        "external:ui@1.0.0",
        "internal:app@0.0.0",
        "native",
    ]


def test_component_lookup(payload_file: Path) -> None:
    explorer = UsageExplorer.from_file(payload_file)

    assert explorer.component("card").name == "Card"
    with pytest.raises(UnknownComponentError):
        explorer.component("missing")


def test_list_components_uses_config_defaults(tmp_path: Path, payload_file: Path) -> None:
    config = CuinConfig(
        root=tmp_path,
        listing=ListConfig(sort_by="usage-desc", excluded_packages=["native"]),
    )
    explorer = UsageExplorer.from_file(payload_file, config=config)

    assert [c.name for c in explorer.list_components()] == ["Button", "Layout", "Card"]
    assert [c.name for c in explorer.list_components(excluded_packages=[])] == [
        "Button",
        "Layout",
        "Card",
        "div",
    ]
    assert [c.name for c in explorer.list_components(name_query="LAY")] == ["Layout"]


def test_props_analysis_is_memoized(payload_file: Path) -> None:
    explorer = UsageExplorer.from_file(payload_file)

    first = explorer.props_analysis("button")

    assert first is explorer.props_analysis("button")
    assert [item.key for item in first] == ["variant", "size"]


def test_instance_store_applies_initial_selection(tmp_path: Path, payload_file: Path) -> None:
    config = CuinConfig(root=tmp_path, detail=DetailConfig(search_debounce_ms=50))
    explorer = UsageExplorer.from_file(payload_file, config=config)

    store = explorer.instance_store("button", prop_filters={"variant": ["solid", NO_VALUE]})

    assert [instance.file_path for instance in store.filtered_instances()] == [
        "src/c.tsx",
        "src/d.tsx",
    ]
    assert store.search("variant")._debouncer.delay_ms == 50


def test_instance_store_package_exclusion(payload_file: Path) -> None:
    explorer = UsageExplorer.from_file(payload_file)

    store = explorer.instance_store("button", excluded_packages=["ui"])

    assert store.filtered_instances() == []
    assert store.get_filtered_count("variant", "outline") == 0
