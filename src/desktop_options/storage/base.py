"""Abstract settings store interface with QVariant-style typed readers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Protocol, runtime_checkable

_FALSE_STRINGS = frozenset({"", "0", "false"})


@runtime_checkable
class SettingsStore(Protocol):
    """Protocol for persistent key-value settings backends (e.g. QSettings)."""

    def value(self, key: str, default: Any = None) -> Any:
        """Return the raw stored value for key, or default if the key is absent."""
        ...

    def set_value(self, key: str, value: Any) -> None:
        """Persist value under key immediately."""
        ...

    def contains(self, key: str) -> bool:
        """True if key has a stored value."""
        ...

    def remove(self, key: str) -> None:
        """Delete key. No-op if not present."""
        ...

    def get_bool(self, key: str, default: bool) -> bool:
        ...

    def get_float(self, key: str, default: float) -> float:
        ...

    def get_str(self, key: str, default: str = "") -> str:
        ...

    def get_str_list(self, key: str) -> list[str]:
        ...


def to_bool(raw: Any, default: bool) -> bool:
    """
    Convert a stored value to bool the way QVariant.toBool() does: a string is
    False only when empty, "0" or "false" (case-insensitive). INI-backed stores
    hand back strings for every bool.
    """
    if raw is None:
        return default
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, (int, float)):
        return raw != 0
    if isinstance(raw, str):
        return raw.lower() not in _FALSE_STRINGS
    return bool(raw)


def to_float(raw: Any, default: float) -> float:
    """Convert a stored value to float; unparseable values yield default."""
    if raw is None or isinstance(raw, bool):
        return default
    try:
        return float(raw)
    except (TypeError, ValueError):
        return default


def to_str(raw: Any, default: str = "") -> str:
    if raw is None:
        return default
    return str(raw)


def to_str_list(raw: Any) -> list[str]:
    """
    Convert a stored value to a list of strings. QSettings returns a bare
    string for one-element lists and None for empty ones.
    """
    if raw is None or raw == "":
        return []
    if isinstance(raw, str):
        return [raw]
    if isinstance(raw, (list, tuple)):
        return [str(item) for item in raw]
    return [str(raw)]


class SettingsStoreBase(ABC):
    """Abstract base class for settings backends. Subclasses supply raw access; typed readers are shared."""

    @abstractmethod
    def value(self, key: str, default: Any = None) -> Any:
        """Return the raw stored value for key, or default if the key is absent."""
        ...

    @abstractmethod
    def set_value(self, key: str, value: Any) -> None:
        """Persist value under key immediately."""
        ...

    @abstractmethod
    def contains(self, key: str) -> bool:
        """True if key has a stored value."""
        ...

    @abstractmethod
    def remove(self, key: str) -> None:
        """Delete key. No-op if not present."""
        ...

    def get_bool(self, key: str, default: bool) -> bool:
        return to_bool(self.value(key), default)

    def get_float(self, key: str, default: float) -> float:
        return to_float(self.value(key), default)

    def get_str(self, key: str, default: str = "") -> str:
        return to_str(self.value(key), default)

    def get_str_list(self, key: str) -> list[str]:
        return to_str_list(self.value(key))
