"""Adapter that wires the edit session into Textual-style UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional

from hackademy.session import HandlerResult, KeyInput, SessionView
from hackademy.session.controller import EditSessionController

SESSION_EVENTS = (
    "buffer.change",
    "popup.open",
    "popup.close",
    "popup.navigate",
    "suggestion.commit",
    "autoclose.insert",
    "stage.reset",
    "scroll.sync",
)


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks the adapter invokes to repaint host widgets."""

    update_view: Callable[[SessionView], None]
    update_status: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    log: Callable[[str], None] = _noop


class TextualEditorAdapter:
    """Bridges host key/focus/pointer/scroll events to the session."""

    def __init__(self, session: EditSessionController, hooks: TextualUIHooks) -> None:
        self.session = session
        self.hooks = hooks
        self._subscribe_events()
        self.refresh()

    def handle_textual_key(
        self,
        key: str,
        *,
        text: Optional[str] = None,
        modifiers: Iterable[str] = (),
        cursor: Optional[int] = None,
    ) -> HandlerResult:
        normalized = tuple(str(mod).upper() for mod in modifiers)
        self._log_state("key ->", key=key, text=text, mods=normalized)
        result = self.session.handle_key(
            KeyInput(key=key, text=text, modifiers=normalized, cursor=cursor)
        )
        self._after_result(result)
        self._log_state(
            "result <-",
            consumed=result.consumed,
            status=result.status,
            message=result.message,
        )
        return result

    def select_suggestion(self, index: int) -> HandlerResult:
        result = self.session.select_suggestion(index)
        self._after_result(result)
        return result

    def set_cursor(self, offset: int) -> HandlerResult:
        result = self.session.set_cursor(offset)
        self._after_result(result)
        return result

    def paste(self, text: str) -> HandlerResult:
        """Insert pasted text at the caret as a single host edit."""

        mirror = self.session.pull_buffer()
        updated = mirror.text[: mirror.cursor] + text + mirror.text[mirror.cursor :]
        result = self.session.push_host_edit(updated, mirror.cursor + len(text))
        self._after_result(result)
        return result

    def scroll(self, top: float, left: float) -> None:
        self.session.set_scroll(top, left)
        self.refresh()

    def blur(self) -> None:
        self.session.blur()
        self._log_state("blur ->")

    def focus(self) -> None:
        self.session.focus()
        self._log_state("focus ->")

    def process_timeouts(self) -> Optional[HandlerResult]:
        """Fire the dismissal timer if it expired and repaint."""

        result = self.session.process_timeouts()
        if result is not None:
            self.hooks.update_status(f"popup:{result.status}")
            self._log_state("timeout ->", status=result.status)
            self.refresh()
        return result

    def _after_result(self, result: HandlerResult) -> None:
        status = result.message or result.status
        if status:
            self.hooks.update_status(status)
        self.refresh()

    def _subscribe_events(self) -> None:
        bus = self.session.bus
        for event in SESSION_EVENTS:
            bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name)
        self.hooks.handle_event(name, payload)

    def refresh(self) -> None:
        """Repaint from the current session snapshot."""

        self.hooks.update_view(self.session.snapshot())

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix] + [f"{key}={value!r}" for key, value in snapshot.items()]
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        session = self.session
        return {
            "state": session.state.value,
            "cursor": session.cursor,
            "version": session.buffer.version,
            "suggestions": len(session.popup.suggestions),
            "dismiss_pending": session.dismiss_pending,
        }


__all__ = ["SESSION_EVENTS", "TextualEditorAdapter", "TextualUIHooks"]
