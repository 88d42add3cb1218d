"""Unit tests for config (default_config, load_config merging, save_config)."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from desktop_options.config import (
    CONFIG_DIR,
    DOCS_BUNDLE_TRAVERSAL,
    default_config,
    global_config_path,
    load_config,
    save_config,
)


def test_default_config() -> None:
    cfg = default_config()
    assert cfg["store"]["backend"] == "qt"
    assert cfg["store"]["file"].endswith("settings.json")
    assert cfg["paths"]["docs_bundle_traversal"] == DOCS_BUNDLE_TRAVERSAL
    assert cfg["logging"]["level"] == "INFO"


def test_global_config_path(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))
    assert global_config_path() == tmp_path / CONFIG_DIR / "config.json"


def test_load_config_missing_file_gives_defaults(tmp_path: Path) -> None:
    assert load_config(tmp_path / "nope.json") == default_config()


def test_load_config_invalid_json_gives_defaults(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text("{oops", encoding="utf-8")
    assert load_config(path) == default_config()


def test_load_config_deep_merges(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"store": {"backend": "json"}, "logging": {"level": "DEBUG"}}), encoding="utf-8")
    cfg = load_config(path)
    assert cfg["store"]["backend"] == "json"
    assert cfg["store"]["organization"] == default_config()["store"]["organization"]
    assert cfg["logging"]["level"] == "DEBUG"


def test_save_config_round_trip(tmp_path: Path) -> None:
    path = tmp_path / "sub" / "config.json"
    save_config(path, {"paths": {"docs_bundle_traversal": "../docs"}})
    assert load_config(path)["paths"]["docs_bundle_traversal"] == "../docs"
