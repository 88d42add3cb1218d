"""Options facade: typed accessors over the settings store plus the derived paths, fonts and endpoint."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from pathlib import Path
from typing import Any, MutableMapping, Sequence

from desktop_options.config import DOCS_BUNDLE_TRAVERSAL
from desktop_options.display import DesktopInfo, DisplayInfo
from desktop_options.endpoint import EndpointNamer
from desktop_options.fonts import FontChoice, FontProbe, FontSelector
from desktop_options.paths import PathResolver, ResolvedPath
from desktop_options.platform import Platform
from desktop_options.storage.base import SettingsStore

logger = logging.getLogger(__name__)

RUN_DIAGNOSTICS_OPTION = "--run-diagnostics"

MAIN_WINDOW_BOUNDS_KEY = "mainwindow/bounds"
RENDERING_ENGINE_KEY = "desktop.renderingEngine"
ZOOM_LEVEL_KEY = "view.zoomLevel"
ACCESSIBILITY_KEY = "view.accessibility"
CLIPBOARD_MONITORING_KEY = "clipboard.monitoring"
IGNORE_GPU_BLACKLIST_KEY = "general.ignoreGpuBlacklist"
DISABLE_GPU_WORKAROUNDS_KEY = "general.disableGpuDriverBugWorkarounds"
R_BIN_DIR_KEY = "RBinDir"
IGNORED_UPDATE_VERSIONS_KEY = "ignoredUpdateVersions"

DEFAULT_ZOOM_LEVEL = 1.0
DEFAULT_WINDOW_SIZE = (1200, 900)
MIN_DEFAULT_WINDOW_SIZE = (800, 500)


@dataclass(frozen=True)
class Bounds:
    """Main window rectangle as stored under mainwindow/bounds."""

    x: int
    y: int
    width: int
    height: int

    def to_list(self) -> list[int]:
        return [self.x, self.y, self.width, self.height]

    @classmethod
    def from_value(cls, raw: Any) -> Bounds | None:
        """Parse a stored [x, y, width, height]; None if malformed."""
        if not isinstance(raw, (list, tuple)) or len(raw) != 4:
            return None
        try:
            x, y, width, height = (int(v) for v in raw)
        except (TypeError, ValueError):
            return None
        return cls(x, y, width, height)


def default_window_size(available: tuple[int, int]) -> tuple[int, int] | None:
    """
    1200x900 bounded to the available screen size, or None when the result is
    too small to be a sensible default (let the window system pick instead).
    """
    width = min(DEFAULT_WINDOW_SIZE[0], available[0])
    height = min(DEFAULT_WINDOW_SIZE[1], available[1])
    if width > MIN_DEFAULT_WINDOW_SIZE[0] and height > MIN_DEFAULT_WINDOW_SIZE[1]:
        return width, height
    return None


class Options:
    """
    Desktop shell options. Construct once at startup and pass it to whatever
    needs it; it owns every derived cache for the life of the process.

    Setters write through to the store immediately. Construction pushes the
    persisted zoom level into the display-info collaborator.
    """

    def __init__(
        self,
        store: SettingsStore,
        platform: Platform | None = None,
        display_info: DisplayInfo | None = None,
        *,
        argv0: str | None = None,
        rng: random.Random | None = None,
        environ: MutableMapping[str, str] | None = None,
        font_probe: FontProbe | None = None,
        docs_bundle_traversal: str = DOCS_BUNDLE_TRAVERSAL,
    ) -> None:
        self.store = store
        self.platform = platform if platform is not None else Platform.current()
        self.display_info: DisplayInfo = display_info if display_info is not None else DesktopInfo()
        self.run_diagnostics = False

        profile = self.platform.profile
        self.paths = PathResolver(profile, argv0=argv0, docs_bundle_traversal=docs_bundle_traversal)
        self.fonts = FontSelector(store, profile, font_probe)
        self.endpoint = EndpointNamer(profile, rng=rng, environ=environ)

        # synchronize zoom level with the display
        self.display_info.set_zoom_level(self.zoom_level())

    def init_from_command_line(self, arguments: Sequence[str]) -> None:
        """Pick up recognized startup flags from argv (arguments[0] is the program)."""
        for arg in arguments[1:]:
            if arg == RUN_DIAGNOSTICS_OPTION:
                self.run_diagnostics = True
        if self.run_diagnostics:
            logger.info("Diagnostics mode enabled")

    # --- main window ---

    def main_window_bounds(self) -> Bounds | None:
        if not self.store.contains(MAIN_WINDOW_BOUNDS_KEY):
            return None
        return Bounds.from_value(self.store.value(MAIN_WINDOW_BOUNDS_KEY))

    def set_main_window_bounds(self, bounds: Bounds) -> None:
        self.store.set_value(MAIN_WINDOW_BOUNDS_KEY, bounds.to_list())

    # --- endpoint ---

    def port_number(self) -> int:
        return self.endpoint.port_number()

    def new_port_number(self) -> int:
        return self.endpoint.new_port_number()

    def local_peer(self) -> str | None:
        return self.endpoint.local_peer()

    # --- rendering ---

    def desktop_rendering_engine(self) -> str:
        return self.store.get_str(RENDERING_ENGINE_KEY)

    def set_desktop_rendering_engine(self, engine: str) -> None:
        self.store.set_value(RENDERING_ENGINE_KEY, engine)

    # --- fonts ---

    def proportional_font(self) -> FontChoice:
        return self.fonts.proportional_font()

    def set_proportional_font(self, font: str) -> None:
        self.fonts.set_proportional_font(font)

    def fixed_width_font(self) -> FontChoice:
        return self.fonts.fixed_width_font()

    def set_fixed_width_font(self, font: str) -> None:
        self.fonts.set_fixed_width_font(font)

    # --- view ---

    def zoom_level(self) -> float:
        return self.store.get_float(ZOOM_LEVEL_KEY, DEFAULT_ZOOM_LEVEL)

    def set_zoom_level(self, zoom_level: float) -> None:
        self.display_info.set_zoom_level(zoom_level)
        self.store.set_value(ZOOM_LEVEL_KEY, float(zoom_level))

    def enable_accessibility(self) -> bool:
        return self.store.get_bool(ACCESSIBILITY_KEY, False)

    def set_enable_accessibility(self, enable: bool) -> None:
        self.store.set_value(ACCESSIBILITY_KEY, bool(enable))

    def clipboard_monitoring(self) -> bool:
        return self.store.get_bool(CLIPBOARD_MONITORING_KEY, True)

    def set_clipboard_monitoring(self, monitoring: bool) -> None:
        self.store.set_value(CLIPBOARD_MONITORING_KEY, bool(monitoring))

    # --- GPU ---

    def ignore_gpu_blacklist(self) -> bool:
        return self.store.get_bool(IGNORE_GPU_BLACKLIST_KEY, False)

    def set_ignore_gpu_blacklist(self, ignore: bool) -> None:
        self.store.set_value(IGNORE_GPU_BLACKLIST_KEY, bool(ignore))

    def disable_gpu_driver_bug_workarounds(self) -> bool:
        return self.store.get_bool(DISABLE_GPU_WORKAROUNDS_KEY, False)

    def set_disable_gpu_driver_bug_workarounds(self, disable: bool) -> None:
        self.store.set_value(DISABLE_GPU_WORKAROUNDS_KEY, bool(disable))

    # --- R / updates ---

    def r_bin_dir(self) -> str:
        self.platform.profile.require(Platform.WINDOWS, R_BIN_DIR_KEY)
        return self.store.get_str(R_BIN_DIR_KEY)

    def set_r_bin_dir(self, path: str) -> None:
        self.platform.profile.require(Platform.WINDOWS, R_BIN_DIR_KEY)
        self.store.set_value(R_BIN_DIR_KEY, path)

    def ignored_update_versions(self) -> list[str]:
        return self.store.get_str_list(IGNORED_UPDATE_VERSIONS_KEY)

    def set_ignored_update_versions(self, versions: Sequence[str]) -> None:
        self.store.set_value(IGNORED_UPDATE_VERSIONS_KEY, list(versions))

    # --- paths ---

    def scripts_path(self) -> ResolvedPath:
        return self.paths.scripts_path()

    def set_scripts_path(self, path: Path | str) -> None:
        self.paths.set_scripts_path(path)

    def executable_path(self) -> ResolvedPath:
        return self.paths.executable_path()

    def supporting_file_path(self) -> ResolvedPath:
        return self.paths.supporting_file_path()

    def resources_path(self) -> ResolvedPath:
        return self.paths.resources_path()

    def docs_path(self) -> ResolvedPath:
        return self.paths.docs_path()

    def scratch_temp_dir(self, default: Path | None = None) -> ResolvedPath:
        return self.paths.scratch_temp_dir(default)

    def clean_up_scratch_temp_dir(self) -> None:
        self.paths.clean_up_scratch_temp_dir()

    def urlopener_path(self) -> Path:
        return self.paths.urlopener_path()

    def rsinverse_path(self) -> Path:
        return self.paths.rsinverse_path()

    # --- reporting ---

    def snapshot(self, include_fonts: bool = True) -> dict[str, Any]:
        """Every resolved value as plain JSON-serialisable data (used by the CLI)."""
        bounds = self.main_window_bounds()
        data: dict[str, Any] = {
            "platform": self.platform.value,
            "run_diagnostics": self.run_diagnostics,
            "settings": {
                MAIN_WINDOW_BOUNDS_KEY: bounds.to_list() if bounds else None,
                RENDERING_ENGINE_KEY: self.desktop_rendering_engine(),
                ZOOM_LEVEL_KEY: self.zoom_level(),
                ACCESSIBILITY_KEY: self.enable_accessibility(),
                CLIPBOARD_MONITORING_KEY: self.clipboard_monitoring(),
                IGNORE_GPU_BLACKLIST_KEY: self.ignore_gpu_blacklist(),
                DISABLE_GPU_WORKAROUNDS_KEY: self.disable_gpu_driver_bug_workarounds(),
                IGNORED_UPDATE_VERSIONS_KEY: self.ignored_update_versions(),
            },
            "paths": self.path_snapshot(),
            "endpoint": {
                "port": self.port_number(),
                "local_peer": self.local_peer(),
            },
        }
        if self.platform is Platform.WINDOWS:
            data["settings"][R_BIN_DIR_KEY] = self.r_bin_dir()
        if include_fonts:
            data["fonts"] = {
                "proportional": self.proportional_font().css(),
                "fixed_width": self.fixed_width_font().css(),
            }
        return data

    def path_snapshot(self) -> dict[str, dict[str, str]]:
        resolved = {
            "executable": self.executable_path(),
            "scripts": self.scripts_path(),
            "supporting_files": self.supporting_file_path(),
            "resources": self.resources_path(),
            "docs": self.docs_path(),
            "scratch_temp": self.scratch_temp_dir(),
        }
        return {
            name: {"path": str(rp), "strategy": rp.strategy.value}
            for name, rp in resolved.items()
        }
