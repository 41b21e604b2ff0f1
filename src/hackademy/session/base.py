"""Key events, handler results and the handler base class."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Callable, Dict, Optional, Tuple

if TYPE_CHECKING:  # pragma: no cover
    from .controller import EditSessionController


class SessionState(str, Enum):
    IDLE = "idle"
    SUGGESTING = "suggesting"


@dataclass(slots=True)
class KeyInput:
    """Normalized key event delivered by the host.

    ``key`` is either a printable character or an upper-case name such as
    ``DOWN``, ``ENTER`` or ``ESC``. ``cursor`` carries the host's selection
    offset when the host owns caret placement.
    """

    key: str
    modifiers: Tuple[str, ...] = ()
    text: Optional[str] = None
    cursor: Optional[int] = None

    @property
    def token(self) -> str:
        if self.modifiers:
            return "+".join(sorted(m.upper() for m in self.modifiers)) + f"+{self.key}"
        return self.key

    @property
    def printable(self) -> Optional[str]:
        if self.modifiers and set(self.modifiers) - {"SHIFT"}:
            return None
        if self.text and self.text.isprintable():
            return self.text
        if len(self.key) == 1 and self.key.isprintable():
            return self.key
        return None


@dataclass(slots=True)
class HandlerResult:
    """Outcome of one handler in the keystroke chain.

    ``consumed`` stops the chain and tells the host to suppress its default
    action. ``refresh`` asks the controller to re-derive suggestions because
    the buffer or the cursor changed.
    """

    consumed: bool
    status: str = "ok"
    message: Optional[str] = None
    refresh: bool = False


def passthrough() -> HandlerResult:
    return HandlerResult(consumed=False, status="pass")


class SessionBus:
    """Minimal event bus for session notifications."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def unsubscribe(self, event: str, callback: Callable[[object], None]) -> None:
        callbacks = self._subscribers.get(event, [])
        if callback in callbacks:
            callbacks.remove(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in list(self._subscribers.get(event, [])):
            callback(payload)


class KeyHandler:
    """One link in the controller's ordered keystroke chain."""

    name: str = "handler"

    def __init__(self, session: "EditSessionController") -> None:
        self.session = session

    def handle_key(self, key: KeyInput) -> HandlerResult:  # pragma: no cover
        raise NotImplementedError


__all__ = [
    "SessionState",
    "KeyInput",
    "HandlerResult",
    "passthrough",
    "SessionBus",
    "KeyHandler",
]
