"""Live display-info collaborator that mirrors the persisted zoom level."""

from __future__ import annotations

from typing import Protocol


class DisplayInfo(Protocol):
    def set_zoom_level(self, zoom_level: float) -> None:
        ...


class DesktopInfo:
    """In-memory display state shared with the web frame (currently just the zoom level)."""

    def __init__(self) -> None:
        self.zoom_level = 1.0

    def set_zoom_level(self, zoom_level: float) -> None:
        self.zoom_level = zoom_level
