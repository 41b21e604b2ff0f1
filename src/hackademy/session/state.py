"""Ephemeral popup state and the read-only views handed to the host."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from hackademy.buffer import ScrollOffset
from hackademy.completion import TokenMatch
from hackademy.layout import PopupAnchor


@dataclass(slots=True)
class PopupState:
    suggestions: tuple[str, ...] = ()
    active_index: int = 0
    anchor: Optional[PopupAnchor] = None
    token: Optional[TokenMatch] = None

    @property
    def visible(self) -> bool:
        return bool(self.suggestions)

    @property
    def active(self) -> Optional[str]:
        if not self.suggestions:
            return None
        return self.suggestions[self.active_index]

    def show(
        self, suggestions: tuple[str, ...], token: TokenMatch, anchor: PopupAnchor
    ) -> None:
        self.suggestions = suggestions
        self.token = token
        self.anchor = anchor
        self.active_index = 0

    def cycle(self, step: int) -> int:
        if self.suggestions:
            self.active_index = (self.active_index + step) % len(self.suggestions)
        return self.active_index

    def clear(self) -> None:
        self.suggestions = ()
        self.active_index = 0
        self.anchor = None
        self.token = None


@dataclass(frozen=True, slots=True)
class PopupView:
    visible: bool = False
    anchor: Optional[PopupAnchor] = None
    suggestions: tuple[str, ...] = ()
    active_index: int = 0


@dataclass(frozen=True, slots=True)
class SessionView:
    """Everything the host needs to paint the editor after an event."""

    text: str
    cursor: int
    version: int
    state: str
    scroll: ScrollOffset = field(default_factory=ScrollOffset)
    popup: PopupView = field(default_factory=PopupView)

    @property
    def display_scroll(self) -> ScrollOffset:
        """Scroll state for the display surface; always the input's value."""

        return self.scroll


__all__ = ["PopupState", "PopupView", "SessionView"]
