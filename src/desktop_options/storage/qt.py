"""QSettings implementation of the settings store (registry on Windows, plist/INI elsewhere)."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from PyQt6.QtCore import QSettings

from desktop_options.storage.base import SettingsStoreBase


class QtSettingsStore(SettingsStoreBase):
    """Settings store backed by PyQt6 QSettings. Every write is followed by sync()."""

    def __init__(self, settings: QSettings) -> None:
        self._settings = settings

    @classmethod
    def for_application(cls, organization: str, application: str) -> QtSettingsStore:
        """Native-format user-scope settings for organization/application."""
        return cls(
            QSettings(
                QSettings.Format.NativeFormat,
                QSettings.Scope.UserScope,
                organization,
                application,
            )
        )

    @classmethod
    def from_ini(cls, path: Path | str) -> QtSettingsStore:
        """INI-file settings at an explicit path (used by tests and portable installs)."""
        return cls(QSettings(str(path), QSettings.Format.IniFormat))

    def value(self, key: str, default: Any = None) -> Any:
        return self._settings.value(key, default)

    def set_value(self, key: str, value: Any) -> None:
        self._settings.setValue(key, value)
        self._settings.sync()

    def contains(self, key: str) -> bool:
        return self._settings.contains(key)

    def remove(self, key: str) -> None:
        self._settings.remove(key)
        self._settings.sync()
