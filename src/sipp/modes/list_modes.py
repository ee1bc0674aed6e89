"""Browsing and viewing: the two read-only modes of the session."""

from __future__ import annotations

from typing import Optional

from sipp.session import BROWSING, VIEWING

from .keymap_helpers import KeymapMode


class BrowsingMode(KeymapMode):
    name = BROWSING


class ViewingMode(KeymapMode):
    name = VIEWING

    def on_enter(self, previous: Optional[str]) -> None:
        del previous
        self.session.scroll_offset = 0


__all__ = ["BrowsingMode", "ViewingMode"]
