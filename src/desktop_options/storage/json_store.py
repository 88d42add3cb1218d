"""JSON-file implementation of the settings store (flat object, rewritten on each write)."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from desktop_options.config import save_config
from desktop_options.storage.base import SettingsStoreBase

logger = logging.getLogger(__name__)


class JsonSettingsStore(SettingsStoreBase):
    """
    Settings persisted as a single JSON object keyed by the dotted setting names.

    The file is read once on construction and rewritten after every
    set_value/remove, so there is no separate commit step. A missing or
    unreadable file starts as an empty store.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self._data: dict[str, Any] = self._load()

    def _load(self) -> dict[str, Any]:
        if not self.path.is_file():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Ignoring unreadable settings file %s: %s", self.path, e)
            return {}
        return data if isinstance(data, dict) else {}

    def _flush(self) -> None:
        save_config(self.path, self._data)

    def value(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def set_value(self, key: str, value: Any) -> None:
        if isinstance(value, tuple):
            value = list(value)
        self._data[key] = value
        self._flush()

    def contains(self, key: str) -> bool:
        return key in self._data

    def remove(self, key: str) -> None:
        if key in self._data:
            del self._data[key]
            self._flush()

    def keys(self) -> list[str]:
        return sorted(self._data)
