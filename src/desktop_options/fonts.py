"""Font family selection: first installed match from a platform preference list, else a generic CSS token."""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from typing import Iterable, Protocol

from desktop_options.platform import PlatformProfile
from desktop_options.storage.base import SettingsStore

logger = logging.getLogger(__name__)

SANS_SERIF = "sans-serif"
MONOSPACE = "monospace"

PROPORTIONAL_FONT_KEY = "font.proportional"
FIXED_WIDTH_FONT_KEY = "font.fixedWidth"


@dataclass(frozen=True)
class FontChoice:
    """
    A selected font. Concrete families render quoted and generic keywords
    unquoted: a browser reads "monospace" (quoted) as a family literally
    named monospace rather than the default monospace font.
    """

    family: str
    generic: bool = False

    def css(self) -> str:
        if self.generic:
            return self.family
        return f'"{self.family}"'

    def __str__(self) -> str:
        return self.css()


class FontProbe(Protocol):
    """Host font system queries."""

    def has_exact_match(self, family: str) -> bool:
        """True if family is installed under exactly that name."""
        ...

    def is_fixed_width(self, family: str) -> bool:
        """True if family renders every glyph at the same advance."""
        ...


class QtFontProbe:
    """FontProbe backed by PyQt6. Creates a QGuiApplication if the host has not already."""

    def __init__(self) -> None:
        from PyQt6.QtGui import QGuiApplication

        app = QGuiApplication.instance()
        if app is None:
            # font matching needs no display; without one Qt aborts the process
            os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
            app = QGuiApplication(sys.argv[:1] or ["desktop-options"])
        self._app = app

    def has_exact_match(self, family: str) -> bool:
        from PyQt6.QtGui import QFont

        return QFont(family).exactMatch()

    def is_fixed_width(self, family: str) -> bool:
        from PyQt6.QtGui import QFont, QFontMetricsF

        metrics = QFontMetricsF(QFont(family))
        return metrics.horizontalAdvance("i") == metrics.horizontalAdvance("W")


def select_font(
    candidates: Iterable[str],
    generic_fallback: str,
    fixed_width_only: bool,
    probe: FontProbe,
) -> FontChoice:
    """First candidate installed (and monospaced if fixed_width_only); else generic_fallback."""
    for family in candidates:
        if not probe.has_exact_match(family):
            continue
        if fixed_width_only and not probe.is_fixed_width(family):
            continue
        return FontChoice(family)
    return FontChoice(generic_fallback, generic=True)


class FontSelector:
    """
    Proportional and fixed-width font choices for the current platform.

    A user override in the store wins and is read on every call. Detected
    fonts are computed once per process.
    """

    def __init__(self, store: SettingsStore, profile: PlatformProfile, probe: FontProbe | None = None) -> None:
        self._store = store
        self.profile = profile
        self._probe = probe
        self._proportional: FontChoice | None = None
        self._fixed_width: FontChoice | None = None

    @property
    def probe(self) -> FontProbe:
        if self._probe is None:
            self._probe = QtFontProbe()
        return self._probe

    def _override(self, key: str) -> FontChoice | None:
        font = self._store.get_str(key)
        if font:
            return FontChoice(font)
        return None

    def select_font(
        self,
        candidates: Iterable[str],
        generic_fallback: str,
        fixed_width_only: bool,
        override_key: str | None = None,
    ) -> FontChoice:
        """Like the module-level select_font, but a stored override under override_key wins outright."""
        if override_key is not None:
            override = self._override(override_key)
            if override is not None:
                return override
        return select_font(candidates, generic_fallback, fixed_width_only, self.probe)

    def proportional_font(self) -> FontChoice:
        override = self._override(PROPORTIONAL_FONT_KEY)
        if override is not None:
            return override
        if self._proportional is None:
            self._proportional = self.select_font(self.profile.proportional_fonts, SANS_SERIF, False)
            logger.debug("Detected proportional font: %s", self._proportional)
        return self._proportional

    def fixed_width_font(self) -> FontChoice:
        override = self._override(FIXED_WIDTH_FONT_KEY)
        if override is not None:
            return override
        if self._fixed_width is None:
            self._fixed_width = self.select_font(self.profile.fixed_width_fonts, MONOSPACE, True)
            logger.debug("Detected fixed-width font: %s", self._fixed_width)
        return self._fixed_width

    def _set_override(self, key: str, font: str) -> None:
        if font:
            self._store.set_value(key, font)
        else:
            self._store.remove(key)

    def set_proportional_font(self, font: str) -> None:
        """Store a proportional font override; an empty name removes it."""
        self._set_override(PROPORTIONAL_FONT_KEY, font)

    def set_fixed_width_font(self, font: str) -> None:
        """Store a fixed-width font override; an empty name removes it."""
        self._set_override(FIXED_WIDTH_FONT_KEY, font)
