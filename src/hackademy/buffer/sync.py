"""Adapter boundary types for syncing the edit session with host widgets."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from .state import ScrollOffset


@dataclass(slots=True)
class BufferMirror:
    """Host-friendly snapshot of the buffer the display surface should render.

    ``scroll`` is the input surface's scroll state; the display surface copies
    it verbatim so gutter line numbers and text stay aligned.
    """

    text: str
    cursor: int
    version: int
    scroll: ScrollOffset = field(default_factory=ScrollOffset)


class BufferSync(Protocol):
    """How adapters exchange buffer contents with the session."""

    def pull_buffer(self) -> BufferMirror:
        """Return the latest buffer snapshot that the host should render."""
        ...

    def push_host_edit(self, text: str, cursor: int) -> object:
        """Submit an edit made outside key handling (paste, IME commit)."""
        ...


class BufferValidationError(RuntimeError):
    """Raised when a host or caller supplies an out-of-range cursor offset."""

    def __init__(self, message: str, *, offset: int | None = None) -> None:
        super().__init__(message)
        self.offset = offset
