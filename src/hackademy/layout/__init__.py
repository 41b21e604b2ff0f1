"""Layout projection for the floating suggestion popup."""

from hackademy.buffer import ScrollOffset

from .projector import (
    TERMINAL_METRICS,
    WEB_METRICS,
    LayoutMetrics,
    PopupAnchor,
    caret_position,
    project,
)

__all__ = [
    "ScrollOffset",
    "LayoutMetrics",
    "PopupAnchor",
    "WEB_METRICS",
    "TERMINAL_METRICS",
    "caret_position",
    "project",
]
