"""Configuration: tool defaults, config file locations, and config loading (defaults + global overrides)."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

CONFIG_DIR = ".desktop-options"
CONFIG_FILENAME = "config.json"
SETTINGS_FILENAME = "settings.json"

# Install-tree depth from a macOS bundle's Resources folder back to a developer checkout.
DOCS_BUNDLE_TRAVERSAL = "../../../../../gwt/www/docs"


def _global_config_dir() -> Path:
    return Path.home() / CONFIG_DIR


def global_config_path() -> Path:
    """Path to global config file (~/.desktop-options/config.json)."""
    return _global_config_dir() / CONFIG_FILENAME


def default_config() -> dict[str, Any]:
    """Default configuration."""
    return {
        "store": {
            "backend": "qt",
            "organization": "RStudio",
            "application": "desktop",
            "file": str(_global_config_dir() / SETTINGS_FILENAME),
        },
        "paths": {
            "docs_bundle_traversal": DOCS_BUNDLE_TRAVERSAL,
        },
        "logging": {
            "level": "INFO",
            "file": None,
        },
    }


def _load_json(path: Path) -> dict[str, Any] | None:
    """Load JSON from path; return None if file missing or invalid."""
    if not path.is_file():
        return None
    try:
        text = path.read_text(encoding="utf-8")
        return json.loads(text)
    except (json.JSONDecodeError, OSError):
        return None


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Merge override into base recursively. Mutates base; returns base."""
    for key, value in override.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value
    return base


def load_config(path: Path | None = None) -> dict[str, Any]:
    """
    Load merged configuration: defaults + config file.

    If path is None, the global config (~/.desktop-options/config.json) is used.
    A missing or invalid file leaves the defaults untouched.
    """
    data = _load_json(path if path is not None else global_config_path())
    if not isinstance(data, dict):
        return default_config()
    return _deep_merge(default_config(), data)


def save_config(path: Path, data: dict[str, Any]) -> None:
    """Write data as indented JSON to path, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
