"""Unit tests for settings stores (JSON backend, QSettings backend, typed coercions, open_store)."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from desktop_options.storage import JsonSettingsStore, SettingsStore, open_store
from desktop_options.storage.base import to_bool, to_float, to_str, to_str_list


@pytest.fixture
def store(tmp_path: Path) -> JsonSettingsStore:
    return JsonSettingsStore(tmp_path / "settings.json")


def test_json_store_is_settings_store(store: JsonSettingsStore) -> None:
    assert isinstance(store, SettingsStore)


def test_json_store_missing_key_returns_default(store: JsonSettingsStore) -> None:
    assert store.value("view.zoomLevel") is None
    assert store.value("view.zoomLevel", 1.0) == 1.0
    assert not store.contains("view.zoomLevel")


def test_json_store_read_does_not_create_file(store: JsonSettingsStore) -> None:
    store.get_bool("clipboard.monitoring", True)
    assert not store.path.exists()


def test_json_store_set_persists_immediately(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "settings.json"
    s = JsonSettingsStore(path)
    s.set_value("view.zoomLevel", 1.5)
    data = json.loads(path.read_text(encoding="utf-8"))
    assert data == {"view.zoomLevel": 1.5}
    reopened = JsonSettingsStore(path)
    assert reopened.get_float("view.zoomLevel", 1.0) == 1.5


def test_json_store_remove(store: JsonSettingsStore) -> None:
    store.set_value("font.fixedWidth", "Consolas")
    assert store.contains("font.fixedWidth")
    store.remove("font.fixedWidth")
    assert not store.contains("font.fixedWidth")
    store.remove("font.fixedWidth")  # no-op
    assert JsonSettingsStore(store.path).keys() == []


def test_json_store_tuple_saved_as_list(store: JsonSettingsStore) -> None:
    store.set_value("mainwindow/bounds", (1, 2, 3, 4))
    assert JsonSettingsStore(store.path).value("mainwindow/bounds") == [1, 2, 3, 4]


def test_json_store_invalid_file_starts_empty(tmp_path: Path) -> None:
    path = tmp_path / "settings.json"
    path.write_text("{not json", encoding="utf-8")
    s = JsonSettingsStore(path)
    assert s.keys() == []


@pytest.mark.parametrize(
    "raw,default,expected",
    [
        (None, True, True),
        (None, False, False),
        (True, False, True),
        ("true", False, True),
        ("false", True, False),
        ("1", False, True),
        (0, True, False),
        ("2", False, True),
        ("enabled", False, True),
        ("no", False, True),
        ("", True, False),
        ("FALSE", True, False),
        ("0", True, False),
    ],
)
def test_to_bool(raw: object, default: bool, expected: bool) -> None:
    assert to_bool(raw, default) is expected


def test_to_float() -> None:
    assert to_float("1.25", 1.0) == 1.25
    assert to_float(2, 1.0) == 2.0
    assert to_float(None, 1.0) == 1.0
    assert to_float("abc", 1.0) == 1.0


def test_to_str() -> None:
    assert to_str(None) == ""
    assert to_str(None, "x") == "x"
    assert to_str("gles") == "gles"


def test_to_str_list() -> None:
    assert to_str_list(None) == []
    assert to_str_list("") == []
    assert to_str_list("1.1.0") == ["1.1.0"]
    assert to_str_list(["1.1.0", "1.2.0"]) == ["1.1.0", "1.2.0"]


def test_open_store_explicit_file_is_json(tmp_path: Path) -> None:
    s = open_store({"backend": "qt"}, str(tmp_path / "s.json"))
    assert isinstance(s, JsonSettingsStore)


def test_open_store_json_backend(tmp_path: Path) -> None:
    s = open_store({"backend": "json", "file": str(tmp_path / "s.json")})
    assert isinstance(s, JsonSettingsStore)
    assert s.path == tmp_path / "s.json"


def test_open_store_unknown_backend() -> None:
    with pytest.raises(ValueError, match="Unknown settings store backend"):
        open_store({"backend": "registry"})


def test_qt_store_round_trip(tmp_path: Path) -> None:
    pytest.importorskip("PyQt6.QtCore")
    from desktop_options.storage.qt import QtSettingsStore

    path = tmp_path / "desktop.ini"
    s = QtSettingsStore.from_ini(path)
    assert not s.contains("view.accessibility")
    s.set_value("view.accessibility", True)
    s.set_value("view.zoomLevel", 1.25)
    s.set_value("ignoredUpdateVersions", ["1.1.0", "1.2.0"])
    assert path.is_file()

    reopened = QtSettingsStore.from_ini(path)
    assert reopened.get_bool("view.accessibility", False) is True
    assert reopened.get_float("view.zoomLevel", 1.0) == 1.25
    assert reopened.get_str_list("ignoredUpdateVersions") == ["1.1.0", "1.2.0"]

    reopened.remove("view.accessibility")
    assert not QtSettingsStore.from_ini(path).contains("view.accessibility")
