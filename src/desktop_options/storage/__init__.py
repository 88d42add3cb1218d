"""Settings store abstraction (Protocol, base class, QSettings and JSON backends)."""

from __future__ import annotations

from typing import Any

from desktop_options.storage.base import SettingsStore, SettingsStoreBase
from desktop_options.storage.json_store import JsonSettingsStore

__all__ = [
    "JsonSettingsStore",
    "SettingsStore",
    "SettingsStoreBase",
    "open_store",
]


def open_store(store_config: dict[str, Any], settings_file: str | None = None) -> SettingsStore:
    """
    Open the settings store described by the "store" config section.
    An explicit settings_file always selects the JSON backend.
    """
    if settings_file:
        return JsonSettingsStore(settings_file)
    backend = store_config.get("backend", "qt")
    if backend == "json":
        return JsonSettingsStore(store_config["file"])
    if backend == "qt":
        # QtCore only; no display needed for QSettings
        from desktop_options.storage.qt import QtSettingsStore

        return QtSettingsStore.for_application(
            store_config.get("organization", ""),
            store_config.get("application", ""),
        )
    raise ValueError(f"Unknown settings store backend: {backend!r}")
