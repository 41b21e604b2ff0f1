"""Pixel placement of the suggestion popup from text-layout metrics."""

from __future__ import annotations

from dataclasses import dataclass

from hackademy.buffer import ScrollOffset, ensure_offset


@dataclass(frozen=True, slots=True)
class LayoutMetrics:
    """Fixed layout constants of a monospaced input surface.

    ``gutter_width`` is the space reserved for line numbers between the left
    padding and the first text column.
    """

    line_height: float
    padding_top: float
    padding_left: float
    gutter_width: float
    char_width: float

    @property
    def text_origin_left(self) -> float:
        return self.padding_left + self.gutter_width


@dataclass(frozen=True, slots=True)
class PopupAnchor:
    top: float
    left: float


# 16px padding, 32px line numbers + 16px margin, 24px lines, Fira Code ~8.5px.
WEB_METRICS = LayoutMetrics(
    line_height=24,
    padding_top=16,
    padding_left=16,
    gutter_width=48,
    char_width=8.5,
)

# Terminal cells: a 4-digit line number plus a separator column.
TERMINAL_METRICS = LayoutMetrics(
    line_height=1,
    padding_top=0,
    padding_left=0,
    gutter_width=5,
    char_width=1,
)


def caret_position(text: str, offset: int) -> tuple[int, int]:
    """Return ``(line_index, column)`` of ``offset`` within ``text``."""

    before = text[: ensure_offset(text, offset)]
    line_index = before.count("\n")
    column = len(before) - (before.rfind("\n") + 1)
    return line_index, column


def project(
    text: str,
    offset: int,
    scroll: ScrollOffset,
    metrics: LayoutMetrics,
) -> PopupAnchor:
    """Anchor the popup one line below the caret.

    Assumes every glyph is ``metrics.char_width`` wide. Both coordinates are
    clamped at zero so a scrolled surface pins the popup to its edge instead
    of pushing it off-screen.
    """

    line_index, column = caret_position(text, offset)
    top = metrics.padding_top + (line_index + 1) * metrics.line_height - scroll.top
    left = metrics.text_origin_left + column * metrics.char_width - scroll.left
    return PopupAnchor(top=max(0, top), left=max(0, left))


__all__ = [
    "LayoutMetrics",
    "PopupAnchor",
    "WEB_METRICS",
    "TERMINAL_METRICS",
    "caret_position",
    "project",
]
