"""Immutable-per-revision text buffer."""

from __future__ import annotations

from dataclasses import dataclass

from hackademy.runtime import telemetry

from .validation import ensure_offset


@dataclass(frozen=True, slots=True)
class BufferDelta:
    """Result of a single edit: the new buffer plus where the cursor lands."""

    buffer: "Buffer"
    cursor: int
    label: str
    start: int
    removed: str
    inserted: str


@dataclass(frozen=True, slots=True)
class Buffer:
    """A revision of the edited text.

    Every edit returns a new ``Buffer`` with ``version`` bumped; existing
    instances are never mutated, so snapshots handed to other components stay
    valid after later keystrokes.
    """

    text: str = ""
    version: int = 0
    name: str = "mission"

    @classmethod
    def from_text(cls, text: str, *, name: str = "mission") -> "Buffer":
        return cls(text=text, version=0, name=name)

    def __len__(self) -> int:
        return len(self.text)

    def replace_range(
        self, start: int, end: int, text: str, *, label: str
    ) -> BufferDelta:
        ensure_offset(self.text, start)
        ensure_offset(self.text, end)
        if start > end:
            start, end = end, start
        with telemetry.span(
            name=f"buffer::{label}",
            component=True,
            metadata={"buffer": self.name, "version": self.version},
        ):
            removed = self.text[start:end]
            updated = Buffer(
                text=self.text[:start] + text + self.text[end:],
                version=self.version + 1,
                name=self.name,
            )
        return BufferDelta(
            buffer=updated,
            cursor=start + len(text),
            label=label,
            start=start,
            removed=removed,
            inserted=text,
        )

