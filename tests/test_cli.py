"""CLI parser and command behaviour tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List

import pytest

from cuin.cli import _build_parser, main
from cuin.explorer import UsageExplorer


@pytest.fixture
def payload_file(tmp_path: Path, sample_document: Dict[str, Any]) -> Path:
    path = tmp_path / "payload.json"
    path.write_text(json.dumps(sample_document), encoding="utf-8")
    return path


def test_cli_accepts_verbose_before_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["--verbose", "components", "payload.json"])
    assert args.verbose is True
    assert args.command == "components"


def test_cli_accepts_verbose_after_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["packages", "--verbose"])
    assert args.verbose is True
    assert args.payload is None


def test_cli_props_collects_repeated_filters() -> None:
    parser = _build_parser()
    args = parser.parse_args(
        ["props", "button", "payload.json", "--filter", "variant=solid", "--filter", "size=sm"]
    )
    assert args.component_id == "button"
    assert args.filter == ["variant=solid", "size=sm"]


def test_cli_rejects_unknown_sort() -> None:
    parser = _build_parser()
    with pytest.raises(SystemExit):
        parser.parse_args(["components", "--sort", "popularity"])


def test_components_command_prints_listing(
    payload_file: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    main(
        [
            "components",
            str(payload_file),
            "--config",
            str(tmp_path),
            "--exclude",
            "native,internal:app@0.0.0",
            "--sort",
            "usage-desc",
        ]
    )

    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "2 of 4 components in /repo"
    assert "Button" in lines[1]
    assert "Card" in lines[2]


def test_props_command_reports_filtered_counts(
    payload_file: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    main(
        [
            "props",
            "button",
            str(payload_file),
            "--config",
            str(tmp_path),
            "--filter",
            "variant=outline",
        ]
    )

    out = capsys.readouterr().out
    assert out.splitlines()[0] == "Button: 2 of 4 usages"
    assert "(1/3)" in out


def test_props_command_unknown_component_exits(payload_file: Path, tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["props", "missing", str(payload_file), "--config", str(tmp_path)])

    assert excinfo.value.code == 1


def test_invalid_payload_exits(tmp_path: Path) -> None:
    bad = tmp_path / "payload.json"
    bad.write_text(json.dumps({"meta": {}, "components": []}), encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        main(["packages", str(bad), "--config", str(tmp_path)])

    assert excinfo.value.code == 1


def test_missing_payload_exits(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["packages", "--config", str(tmp_path)])

    assert excinfo.value.code == 1


def test_serve_rejects_invalid_payload_before_starting(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    bad = tmp_path / "payload.json"
    bad.write_text(json.dumps({"meta": {"base_path": "/repo"}}), encoding="utf-8")
    started: List[Any] = []
    monkeypatch.setattr("cuin.service.run_service", lambda *a, **kw: started.append(a))

    with pytest.raises(SystemExit) as excinfo:
        main(["serve", str(bad), "--config", str(tmp_path)])

    assert excinfo.value.code == 1
    assert started == []


def test_serve_hands_loaded_payload_to_the_server(
    payload_file: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    calls: List[Dict[str, Any]] = []

    def fake_run_service(explorer: UsageExplorer, **kwargs: Any) -> None:
        calls.append({"explorer": explorer, **kwargs})

    monkeypatch.setattr("cuin.service.run_service", fake_run_service)

    main(["serve", str(payload_file), "--config", str(tmp_path), "--port", "4000"])

    assert len(calls) == 1
    assert [c.id for c in calls[0]["explorer"].components][:1] == ["button"]
    assert calls[0]["host"] == "localhost"
    assert calls[0]["port"] == 4000
