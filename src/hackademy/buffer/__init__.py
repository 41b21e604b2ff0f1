"""Immutable text buffer and cursor bookkeeping."""

from .buffer import Buffer, BufferDelta
from .state import CursorState, ScrollOffset
from .sync import BufferMirror, BufferSync, BufferValidationError
from .validation import ensure_offset

__all__ = [
    "Buffer",
    "BufferDelta",
    "CursorState",
    "ScrollOffset",
    "BufferMirror",
    "BufferSync",
    "BufferValidationError",
    "ensure_offset",
]
