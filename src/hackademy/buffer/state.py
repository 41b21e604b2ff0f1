"""Cursor and scroll state for the input surface."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ScrollOffset:
    """Scroll position of the input surface, in layout units."""

    top: float = 0
    left: float = 0


@dataclass(slots=True)
class CursorState:
    """Mutable caret offset and scroll position of the input surface."""

    offset: int = 0
    scroll: ScrollOffset = ScrollOffset()

    def move_to(self, offset: int) -> None:
        self.offset = offset

    def scroll_to(self, top: float, left: float) -> None:
        self.scroll = ScrollOffset(top=top, left=left)
