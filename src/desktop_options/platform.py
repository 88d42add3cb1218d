"""Target platform selection and the per-platform profile driving font lists, IPC naming and bundle layout."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from enum import Enum


class UnsupportedPlatformError(RuntimeError):
    """Raised by accessors that only exist on one platform (e.g. RBinDir on Windows)."""


class Platform(str, Enum):
    WINDOWS = "windows"
    MACOS = "macos"
    LINUX = "linux"

    @classmethod
    def current(cls) -> Platform:
        """Platform of the running interpreter. Anything not Windows or macOS is treated as Linux."""
        return cls.from_sys_platform(sys.platform)

    @classmethod
    def from_sys_platform(cls, value: str) -> Platform:
        if value.startswith("win") or value == "cygwin":
            return cls.WINDOWS
        if value == "darwin":
            return cls.MACOS
        return cls.LINUX

    @property
    def profile(self) -> PlatformProfile:
        return _PROFILES[self]


@dataclass(frozen=True)
class PlatformProfile:
    """Everything that differs between platforms; the resolvers themselves are platform-agnostic."""

    platform: Platform
    proportional_fonts: tuple[str, ...]
    fixed_width_fonts: tuple[str, ...]
    uses_named_pipes: bool = False
    bundle_layout: bool = False

    def require(self, platform: Platform, what: str) -> None:
        """Raise UnsupportedPlatformError unless this profile is for platform."""
        if self.platform is not platform:
            raise UnsupportedPlatformError(
                f"{what} is only available on {platform.value} (running as {self.platform.value})"
            )


_PROFILES: dict[Platform, PlatformProfile] = {
    Platform.WINDOWS: PlatformProfile(
        platform=Platform.WINDOWS,
        proportional_fonts=(
            "Segoe UI",
            "Verdana",
            "Lucida Sans",
            "DejaVu Sans",
            "Lucida Grande",
            "Helvetica",
        ),
        fixed_width_fonts=("Lucida Console", "Consolas"),
        uses_named_pipes=True,
    ),
    Platform.MACOS: PlatformProfile(
        platform=Platform.MACOS,
        proportional_fonts=(
            "Lucida Grande",
            "Lucida Sans",
            "DejaVu Sans",
            "Segoe UI",
            "Verdana",
            "Helvetica",
        ),
        fixed_width_fonts=("Monaco",),
        bundle_layout=True,
    ),
    Platform.LINUX: PlatformProfile(
        platform=Platform.LINUX,
        proportional_fonts=(
            "Lucida Sans",
            "DejaVu Sans",
            "Lucida Grande",
            "Segoe UI",
            "Verdana",
            "Helvetica",
        ),
        fixed_width_fonts=("Ubuntu Mono", "Droid Sans Mono", "DejaVu Sans Mono", "Monospace"),
    ),
}
