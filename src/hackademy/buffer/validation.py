"""Validation helpers shared across buffer services."""

from __future__ import annotations

from .sync import BufferValidationError


def ensure_offset(text: str, offset: int) -> int:
    if offset < 0 or offset > len(text):
        raise BufferValidationError(
            f"Cursor offset {offset} outside 0..{len(text)}", offset=offset
        )
    return offset
