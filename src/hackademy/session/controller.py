"""Edit session controller: owns the buffer and drives the popup state."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from hackademy.buffer import (
    Buffer,
    BufferMirror,
    CursorState,
    ScrollOffset,
    ensure_offset,
)
from hackademy.completion import (
    DEFAULT_VOCABULARY,
    MAX_SUGGESTIONS,
    VocabularyTable,
    completion_suffix,
    locate,
    suggest,
)
from hackademy.config import EditorSettings
from hackademy.keymaps import KeymapRegistry, load_default_keymaps
from hackademy.layout import LayoutMetrics, project
from hackademy.runtime import telemetry

from .base import HandlerResult, KeyHandler, KeyInput, SessionBus, SessionState
from .handlers import DEFAULT_HANDLERS
from .state import PopupState, PopupView, SessionView


@dataclass
class PendingDismiss:
    deadline: float
    delay_ms: int
    generation: int


class EditSessionController:
    """Single writer of the edit session.

    Keystrokes run through an ordered chain of handlers; the first one that
    consumes the key wins. Whenever a handler reports a buffer change or a
    caret move, the controller re-derives the token, the suggestion list and
    the popup anchor. Hosts read the result through ``snapshot()`` and the
    ``buffer.change`` / ``popup.*`` bus events.
    """

    def __init__(
        self,
        *,
        initial_text: str = "",
        vocabulary: VocabularyTable = DEFAULT_VOCABULARY,
        settings: EditorSettings | None = None,
        metrics: LayoutMetrics | None = None,
        keymap_registry: KeymapRegistry | None = None,
        handlers: Sequence[type[KeyHandler]] = DEFAULT_HANDLERS,
        bus: SessionBus | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.settings = settings or EditorSettings()
        self.vocabulary = vocabulary
        self.metrics = metrics or self.settings.metrics
        self.bus = bus or SessionBus()
        self.logger = telemetry.get_logger("hackademy.session")
        if keymap_registry is None:
            keymap_registry = load_default_keymaps(
                KeymapRegistry(logger_name="hackademy.keymaps")
            )
        self.keymap_registry = keymap_registry
        self._buffer = Buffer.from_text(initial_text)
        self._cursor = CursorState()
        self._popup = PopupState()
        self._state = SessionState.IDLE
        self._clock = clock
        self._pending_dismiss: Optional[PendingDismiss] = None
        self._timer_counter = 0
        self._handlers: list[KeyHandler] = [cls(self) for cls in handlers]

    @property
    def buffer(self) -> Buffer:
        return self._buffer

    @property
    def text(self) -> str:
        return self._buffer.text

    @property
    def cursor(self) -> int:
        return self._cursor.offset

    @property
    def scroll(self) -> ScrollOffset:
        return self._cursor.scroll

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def popup(self) -> PopupState:
        return self._popup

    @property
    def handlers(self) -> tuple[KeyHandler, ...]:
        return tuple(self._handlers)

    @property
    def dismiss_pending(self) -> bool:
        return self._pending_dismiss is not None

    # -- host events -------------------------------------------------------

    def handle_key(self, key: KeyInput) -> HandlerResult:
        if key.cursor is not None and key.cursor != self.cursor:
            # The popup must reflect the host caret before any binding resolves.
            self.move_cursor(key.cursor)
            self.refresh_suggestions()
        with telemetry.span(
            name="session::handle_key",
            component=True,
            metadata={"key": key.key, "state": self._state.value},
        ) as handle:
            for handler in self._handlers:
                result = handler.handle_key(key)
                if result.consumed:
                    handle.add_metadata("handler", handler.name)
                    break
            else:
                return HandlerResult(consumed=False, status="ignored")
        if result.refresh:
            self.refresh_suggestions()
        return result

    def set_cursor(self, offset: int) -> HandlerResult:
        """Caret placed by the host (pointer click, selection change)."""

        self.move_cursor(ensure_offset(self.text, offset))
        self.refresh_suggestions()
        return HandlerResult(consumed=True, status="move")

    def set_scroll(self, top: float, left: float) -> ScrollOffset:
        """Record the input surface scroll; the display surface mirrors it."""

        self._cursor.scroll_to(top, left)
        if self._popup.visible:
            self._popup.anchor = project(
                self.text, self.cursor, self.scroll, self.metrics
            )
        self.bus.emit("scroll.sync", self.scroll)
        return self.scroll

    def push_host_edit(self, text: str, cursor: int) -> HandlerResult:
        """Adopt an edit made by the host outside key handling."""

        ensure_offset(text, cursor)
        self.apply_edit(0, len(self.text), text, label="host_edit", cursor=cursor)
        self.refresh_suggestions()
        return HandlerResult(consumed=True, status="host_edit")

    def load_stage(self, initial_text: str) -> None:
        """Reset the session to a mission stage's starting snippet."""

        self._cancel_dismiss()
        self._buffer = Buffer.from_text(initial_text, name=self._buffer.name)
        self._cursor = CursorState()
        self._hide_popup(reason="stage_reset")
        self.bus.emit("stage.reset", initial_text)
        self.bus.emit("buffer.change", self.text)

    def focus(self) -> None:
        self._cancel_dismiss()

    def blur(self) -> None:
        """Schedule the popup dismissal.

        The delay leaves room for a pointer press on a suggestion, which
        blurs the input before ``select_suggestion`` arrives.
        """

        self._timer_counter += 1
        delay_ms = self.settings.dismiss_delay_ms
        self._pending_dismiss = PendingDismiss(
            deadline=self._clock() + delay_ms / 1000.0,
            delay_ms=delay_ms,
            generation=self._timer_counter,
        )

    def select_suggestion(self, index: int) -> HandlerResult:
        """Pointer selection of a popup entry; commits immediately."""

        self._cancel_dismiss()
        if not self._popup.visible:
            return HandlerResult(consumed=False, status="commit_empty")
        if not 0 <= index < len(self._popup.suggestions):
            raise IndexError(f"Suggestion index {index} out of range")
        self._popup.active_index = index
        committed = self.commit_active()
        return HandlerResult(consumed=True, status="commit", message=committed)

    def process_timeouts(self) -> Optional[HandlerResult]:
        timer = self._pending_dismiss
        if timer is None or timer.deadline > self._clock():
            return None
        return self._trigger_dismiss(timer.generation)

    def force_timeout(self) -> Optional[HandlerResult]:
        timer = self._pending_dismiss
        if timer is None:
            return None
        return self._trigger_dismiss(timer.generation)

    # -- operations used by handlers and actions ---------------------------

    def apply_edit(
        self,
        start: int,
        end: int,
        text: str,
        *,
        label: str,
        cursor: Optional[int] = None,
    ) -> None:
        delta = self._buffer.replace_range(start, end, text, label=label)
        self._buffer = delta.buffer
        self._cursor.move_to(delta.cursor if cursor is None else cursor)
        self.bus.emit("buffer.change", self.text)

    def move_cursor(self, offset: int) -> None:
        self._cursor.move_to(ensure_offset(self.text, offset))

    def refresh_suggestions(self) -> None:
        token = locate(self.text, self.cursor)
        suggestions = suggest(
            token.word if token else None,
            self.vocabulary,
            limit=min(self.settings.suggestion_limit, MAX_SUGGESTIONS),
        )
        if token is None or not suggestions:
            self._hide_popup(reason="no_match")
            return
        anchor = project(self.text, self.cursor, self.scroll, self.metrics)
        self._popup.show(suggestions, token, anchor)
        self._set_state(SessionState.SUGGESTING)
        self.bus.emit("popup.open", self.popup_view())

    def cycle_suggestion(self, step: int) -> int:
        index = self._popup.cycle(step)
        self.bus.emit("popup.navigate", index)
        return index

    def commit_active(self) -> Optional[str]:
        entry = self._popup.active
        if entry is None:
            return None
        token = locate(self.text, self.cursor)
        if token is None:
            self._hide_popup(reason="stale")
            return None
        suffix = completion_suffix(entry, token.word)
        self.apply_edit(self.cursor, self.cursor, suffix, label="commit_suggestion")
        self._hide_popup(reason="commit")
        self.bus.emit("suggestion.commit", entry)
        return entry

    def dismiss(self, *, reason: str = "dismiss") -> None:
        self._hide_popup(reason=reason)

    # -- views ---------------------------------------------------------------

    def popup_view(self) -> PopupView:
        popup = self._popup
        return PopupView(
            visible=popup.visible,
            anchor=popup.anchor,
            suggestions=popup.suggestions,
            active_index=popup.active_index,
        )

    def pull_buffer(self) -> BufferMirror:
        return BufferMirror(
            text=self.text,
            cursor=self.cursor,
            version=self._buffer.version,
            scroll=self.scroll,
        )

    def snapshot(self) -> SessionView:
        return SessionView(
            text=self.text,
            cursor=self.cursor,
            version=self._buffer.version,
            state=self._state.value,
            scroll=self.scroll,
            popup=self.popup_view(),
        )

    # -- internals -------------------------------------------------------------

    def _hide_popup(self, *, reason: str) -> None:
        was_visible = self._popup.visible
        self._popup.clear()
        self._set_state(SessionState.IDLE)
        if was_visible:
            self.bus.emit("popup.close", reason)

    def _set_state(self, state: SessionState) -> None:
        if state is self._state:
            return
        previous = self._state
        self._state = state
        telemetry.record_event(
            "session.state",
            level="debug",
            data={"from": previous.value, "to": state.value},
            logger_name="hackademy.session",
        )

    def _cancel_dismiss(self) -> None:
        self._pending_dismiss = None

    def _trigger_dismiss(self, generation: int) -> HandlerResult:
        timer = self._pending_dismiss
        if timer is None or timer.generation != generation:
            return HandlerResult(consumed=False, status="timeout")
        self._pending_dismiss = None
        with telemetry.span(
            name="session::dismiss_timeout",
            component=True,
            metadata={"delay_ms": timer.delay_ms},
        ):
            self._hide_popup(reason="blur")
        return HandlerResult(consumed=True, status="timeout", message="blur")


__all__ = ["EditSessionController", "PendingDismiss"]
