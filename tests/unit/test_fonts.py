"""Unit tests for font selection (matching, generic fallback, overrides, memoization, platform order)."""

from __future__ import annotations

from pathlib import Path

import pytest

from desktop_options.fonts import (
    FIXED_WIDTH_FONT_KEY,
    MONOSPACE,
    PROPORTIONAL_FONT_KEY,
    SANS_SERIF,
    FontChoice,
    FontSelector,
    select_font,
)
from desktop_options.platform import Platform
from desktop_options.storage import JsonSettingsStore


class FakeProbe:
    """Pretends a fixed set of families is installed; counts queries."""

    def __init__(self, installed: set[str], monospaced: set[str] | None = None) -> None:
        self.installed = installed
        self.monospaced = monospaced or set()
        self.calls = 0

    def has_exact_match(self, family: str) -> bool:
        self.calls += 1
        return family in self.installed

    def is_fixed_width(self, family: str) -> bool:
        return family in self.monospaced


class ExplodingProbe:
    def has_exact_match(self, family: str) -> bool:
        raise AssertionError("font system must not be queried")

    def is_fixed_width(self, family: str) -> bool:
        raise AssertionError("font system must not be queried")


@pytest.fixture
def store(tmp_path: Path) -> JsonSettingsStore:
    return JsonSettingsStore(tmp_path / "settings.json")


def test_font_choice_quoting() -> None:
    assert FontChoice("DejaVu Sans").css() == '"DejaVu Sans"'
    assert str(FontChoice("DejaVu Sans")) == '"DejaVu Sans"'
    assert FontChoice(MONOSPACE, generic=True).css() == "monospace"
    assert str(FontChoice(SANS_SERIF, generic=True)) == "sans-serif"


def test_select_font_no_match_returns_generic() -> None:
    choice = select_font(["NoSuchFont123"], MONOSPACE, True, FakeProbe(set()))
    assert choice == FontChoice("monospace", generic=True)
    assert choice.css() == "monospace"


def test_select_font_first_match_in_order() -> None:
    probe = FakeProbe({"Verdana", "Helvetica"})
    choice = select_font(["Segoe UI", "Verdana", "Helvetica"], SANS_SERIF, False, probe)
    assert choice == FontChoice("Verdana")
    assert choice.css() == '"Verdana"'


def test_select_font_fixed_width_filter() -> None:
    probe = FakeProbe({"Lucida Console", "Consolas"}, monospaced={"Consolas"})
    assert select_font(["Lucida Console", "Consolas"], MONOSPACE, True, probe) == FontChoice("Consolas")
    # without the requirement the first installed family wins
    assert select_font(["Lucida Console", "Consolas"], MONOSPACE, False, probe) == FontChoice("Lucida Console")


def test_selector_override_short_circuits(store: JsonSettingsStore) -> None:
    store.set_value(FIXED_WIDTH_FONT_KEY, "Fira Code")
    selector = FontSelector(store, Platform.LINUX.profile, ExplodingProbe())
    choice = selector.select_font(["NoSuchFont123"], MONOSPACE, True, FIXED_WIDTH_FONT_KEY)
    assert choice.css() == '"Fira Code"'
    assert selector.fixed_width_font().css() == '"Fira Code"'


def test_proportional_override_is_quoted(store: JsonSettingsStore) -> None:
    store.set_value(PROPORTIONAL_FONT_KEY, "Source Sans Pro")
    selector = FontSelector(store, Platform.LINUX.profile, ExplodingProbe())
    assert selector.proportional_font().css() == '"Source Sans Pro"'


def test_override_read_fresh_each_call(store: JsonSettingsStore) -> None:
    probe = FakeProbe({"DejaVu Sans Mono"}, monospaced={"DejaVu Sans Mono"})
    selector = FontSelector(store, Platform.LINUX.profile, probe)
    assert selector.fixed_width_font() == FontChoice("DejaVu Sans Mono")
    selector.set_fixed_width_font("Hack")
    assert selector.fixed_width_font() == FontChoice("Hack")
    selector.set_fixed_width_font("")
    assert selector.fixed_width_font() == FontChoice("DejaVu Sans Mono")


def test_detected_font_memoized(store: JsonSettingsStore) -> None:
    probe = FakeProbe({"DejaVu Sans"})
    selector = FontSelector(store, Platform.LINUX.profile, probe)
    first = selector.proportional_font()
    calls = probe.calls
    second = selector.proportional_font()
    assert first == second == FontChoice("DejaVu Sans")
    assert probe.calls == calls
    # installed fonts changing later does not change the cached choice
    probe.installed.add("Lucida Sans")
    assert selector.proportional_font() == first


def test_empty_override_removes_key(store: JsonSettingsStore) -> None:
    selector = FontSelector(store, Platform.LINUX.profile, FakeProbe(set()))
    selector.set_fixed_width_font("Consolas")
    assert store.contains(FIXED_WIDTH_FONT_KEY)
    selector.set_fixed_width_font("")
    assert not store.contains(FIXED_WIDTH_FONT_KEY)
    assert selector.fixed_width_font() == FontChoice(MONOSPACE, generic=True)

    selector.set_proportional_font("Verdana")
    selector.set_proportional_font("")
    assert not store.contains(PROPORTIONAL_FONT_KEY)
    assert selector.proportional_font().css() == "sans-serif"


@pytest.mark.parametrize(
    "platform,expected",
    [
        (Platform.WINDOWS, "Segoe UI"),
        (Platform.MACOS, "Lucida Grande"),
        (Platform.LINUX, "Lucida Sans"),
    ],
)
def test_platform_order_decides_proportional_font(
    store: JsonSettingsStore, platform: Platform, expected: str
) -> None:
    everything = {"Segoe UI", "Verdana", "Lucida Sans", "DejaVu Sans", "Lucida Grande", "Helvetica"}
    selector = FontSelector(store, platform.profile, FakeProbe(everything))
    assert selector.proportional_font() == FontChoice(expected)


@pytest.mark.parametrize(
    "platform,expected",
    [
        (Platform.WINDOWS, "Lucida Console"),
        (Platform.MACOS, "Monaco"),
        (Platform.LINUX, "Ubuntu Mono"),
    ],
)
def test_platform_order_decides_fixed_width_font(
    store: JsonSettingsStore, platform: Platform, expected: str
) -> None:
    mono = {"Monaco", "Ubuntu Mono", "Droid Sans Mono", "DejaVu Sans Mono", "Monospace", "Lucida Console", "Consolas"}
    selector = FontSelector(store, platform.profile, FakeProbe(mono, monospaced=mono))
    assert selector.fixed_width_font() == FontChoice(expected)
