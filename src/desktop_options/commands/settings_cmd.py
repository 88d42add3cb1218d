"""Get, set or unset individual settings (CLI command)."""

from __future__ import annotations

import json
import sys
from argparse import Namespace
from typing import Any

from desktop_options import options as opts
from desktop_options.fonts import FIXED_WIDTH_FONT_KEY, PROPORTIONAL_FONT_KEY
from desktop_options.options import Bounds, Options
from desktop_options.platform import UnsupportedPlatformError

# key -> (getter, setter) on Options; setters apply side effects such as the zoom sync
_ACCESSORS: dict[str, tuple[str, str]] = {
    opts.RENDERING_ENGINE_KEY: ("desktop_rendering_engine", "set_desktop_rendering_engine"),
    opts.ZOOM_LEVEL_KEY: ("zoom_level", "set_zoom_level"),
    opts.ACCESSIBILITY_KEY: ("enable_accessibility", "set_enable_accessibility"),
    opts.CLIPBOARD_MONITORING_KEY: ("clipboard_monitoring", "set_clipboard_monitoring"),
    opts.IGNORE_GPU_BLACKLIST_KEY: ("ignore_gpu_blacklist", "set_ignore_gpu_blacklist"),
    opts.DISABLE_GPU_WORKAROUNDS_KEY: (
        "disable_gpu_driver_bug_workarounds",
        "set_disable_gpu_driver_bug_workarounds",
    ),
    opts.IGNORED_UPDATE_VERSIONS_KEY: ("ignored_update_versions", "set_ignored_update_versions"),
    opts.R_BIN_DIR_KEY: ("r_bin_dir", "set_r_bin_dir"),
    PROPORTIONAL_FONT_KEY: ("proportional_font", "set_proportional_font"),
    FIXED_WIDTH_FONT_KEY: ("fixed_width_font", "set_fixed_width_font"),
}


def _parse_set_value(value_str: str) -> Any:
    """Parse KEY=VALUE value: try JSON (number, bool, list, quoted string), else use as string."""
    value_str = value_str.strip()
    try:
        return json.loads(value_str)
    except json.JSONDecodeError:
        return value_str


_BOOL_KEYS = (
    opts.ACCESSIBILITY_KEY,
    opts.CLIPBOARD_MONITORING_KEY,
    opts.IGNORE_GPU_BLACKLIST_KEY,
    opts.DISABLE_GPU_WORKAROUNDS_KEY,
)
_BOOL_WORDS = {"true": True, "yes": True, "on": True, "1": True, "false": False, "no": False, "off": False, "0": False}


def _parse_bool(key: str, value: Any) -> bool:
    """Accept a JSON bool or true/false, yes/no, on/off, 1/0; anything else is a ValueError."""
    if isinstance(value, bool):
        return value
    word = str(value).strip().lower()
    if word not in _BOOL_WORDS:
        raise ValueError(f"{key} expects true or false, got {json.dumps(value)}")
    return _BOOL_WORDS[word]


def _get(options: Options, key: str) -> Any:
    if key == opts.MAIN_WINDOW_BOUNDS_KEY:
        bounds = options.main_window_bounds()
        return bounds.to_list() if bounds else None
    getter, _ = _ACCESSORS[key]
    value = getattr(options, getter)()
    if key in (PROPORTIONAL_FONT_KEY, FIXED_WIDTH_FONT_KEY):
        return value.css()
    return value


def _set(options: Options, key: str, value: Any) -> None:
    if key == opts.MAIN_WINDOW_BOUNDS_KEY:
        bounds = Bounds.from_value(value)
        if bounds is None:
            raise ValueError(f"{key} expects [x, y, width, height], got {json.dumps(value)}")
        options.set_main_window_bounds(bounds)
        return
    _, setter = _ACCESSORS[key]
    if key in (PROPORTIONAL_FONT_KEY, FIXED_WIDTH_FONT_KEY, opts.RENDERING_ENGINE_KEY, opts.R_BIN_DIR_KEY):
        value = "" if value is None else str(value)
    elif key == opts.IGNORED_UPDATE_VERSIONS_KEY:
        if not isinstance(value, list):
            value = [value]
        value = [str(v) for v in value]
    elif key in _BOOL_KEYS:
        value = _parse_bool(key, value)
    elif key == opts.ZOOM_LEVEL_KEY:
        value = float(value)
    getattr(options, setter)(value)


def _known_key(key: str) -> bool:
    return key in _ACCESSORS or key == opts.MAIN_WINDOW_BOUNDS_KEY


def run(args: Namespace) -> None:
    """Run the get/set/unset command against the process Options."""
    options: Options = args.options
    action = getattr(args, "action", "get")

    if action == "set":
        key_str, sep, value_str = (args.assignment or "").partition("=")
        key_str = key_str.strip()
        if not sep or not key_str:
            print("Error: set requires KEY=VALUE (e.g. view.zoomLevel=1.25).", file=sys.stderr)
            sys.exit(1)
    else:
        key_str = args.key.strip()

    if not _known_key(key_str):
        print(f"Error: unknown setting {key_str!r}.", file=sys.stderr)
        sys.exit(1)

    try:
        if action == "get":
            print(json.dumps(_get(options, key_str)))
        elif action == "set":
            value = _parse_set_value(value_str)
            _set(options, key_str, value)
            print(f"Set {key_str} = {json.dumps(value)}.")
        elif action == "unset":
            options.store.remove(key_str)
            print(f"Removed {key_str}.")
    except (UnsupportedPlatformError, ValueError, TypeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
