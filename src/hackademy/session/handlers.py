"""The keystroke handlers composed by the session controller, in order."""

from __future__ import annotations

from hackademy.completion import TRIGGER, auto_close
from hackademy.keymaps import (
    POPUP_SCOPE,
    SUGGESTING_FLAG,
    KeymapRegistry,
    ResolutionMatch,
)
from hackademy.layout import caret_position
from hackademy.runtime import telemetry

from .base import HandlerResult, KeyHandler, KeyInput, SessionState, passthrough

TAB_TEXT = "  "


class PopupKeyHandler(KeyHandler):
    """Navigation, commit and cancel keys while suggestions are showing."""

    name = "popup"

    def __init__(self, session, *, registry: KeymapRegistry | None = None) -> None:
        super().__init__(session)
        self._registry = registry or session.keymap_registry

    def handle_key(self, key: KeyInput) -> HandlerResult:
        flags = {SUGGESTING_FLAG: self.session.state is SessionState.SUGGESTING}
        result = self._registry.resolve(POPUP_SCOPE, key.token, context=flags)
        if result.status != "match" or result.match is None:
            return passthrough()
        return self._execute(result.match)

    def _execute(self, match: ResolutionMatch) -> HandlerResult:
        with telemetry.span(
            "keymaps::execute",
            component="keymaps",
            metadata={"binding_id": match.binding.id, "action": match.action.id},
        ):
            outcome = match.action(self.session, match)
        if isinstance(outcome, HandlerResult):
            return outcome
        return HandlerResult(consumed=True)


class AutoCloseHandler(KeyHandler):
    """Turns ``>`` after a bare tag name into ``></tag>``."""

    name = "autoclose"

    def handle_key(self, key: KeyInput) -> HandlerResult:
        if key.printable != TRIGGER:
            return passthrough()
        session = self.session
        edit = auto_close(session.text, session.cursor)
        if edit is None:
            return passthrough()
        session.apply_edit(
            session.cursor,
            session.cursor,
            edit.inserted,
            label="auto_close",
            cursor=edit.cursor,
        )
        session.bus.emit("autoclose.insert", edit.tag)
        return HandlerResult(
            consumed=True, status="auto_close", message=edit.tag, refresh=True
        )


class TextInputHandler(KeyHandler):
    """Default editing: character insertion, deletion and caret movement."""

    name = "text"

    def handle_key(self, key: KeyInput) -> HandlerResult:
        session = self.session
        char = key.printable
        if char is not None:
            return self._insert(char)
        if key.modifiers:
            return passthrough()
        if key.key == "ENTER":
            return self._insert("\n")
        if key.key == "TAB":
            return self._insert(TAB_TEXT)
        if key.key == "BACKSPACE":
            if session.cursor == 0:
                return HandlerResult(consumed=True, status="noop")
            session.apply_edit(session.cursor - 1, session.cursor, "", label="backspace")
            return HandlerResult(consumed=True, status="delete", refresh=True)
        if key.key == "DELETE":
            if session.cursor >= len(session.text):
                return HandlerResult(consumed=True, status="noop")
            session.apply_edit(session.cursor, session.cursor + 1, "", label="delete")
            return HandlerResult(consumed=True, status="delete", refresh=True)

        target = self._motion_target(key.key)
        if target is None:
            return passthrough()
        session.move_cursor(target)
        return HandlerResult(consumed=True, status="move", refresh=True)

    def _insert(self, text: str) -> HandlerResult:
        session = self.session
        session.apply_edit(session.cursor, session.cursor, text, label="insert_text")
        return HandlerResult(consumed=True, status="insert", refresh=True)

    def _motion_target(self, name: str) -> int | None:
        text = self.session.text
        cursor = self.session.cursor
        line_start = text.rfind("\n", 0, cursor) + 1
        line_end = text.find("\n", cursor)
        if line_end == -1:
            line_end = len(text)

        if name == "LEFT":
            return max(0, cursor - 1)
        if name == "RIGHT":
            return min(len(text), cursor + 1)
        if name == "HOME":
            return line_start
        if name == "END":
            return line_end
        if name in {"UP", "DOWN"}:
            return _vertical_target(text, cursor, -1 if name == "UP" else 1)
        return None


def _vertical_target(text: str, cursor: int, step: int) -> int:
    line_index, column = caret_position(text, cursor)
    lines = text.split("\n")
    target_line = line_index + step
    if target_line < 0:
        return 0
    if target_line >= len(lines):
        return len(text)
    start = sum(len(line) + 1 for line in lines[:target_line])
    return start + min(column, len(lines[target_line]))


DEFAULT_HANDLERS: tuple[type[KeyHandler], ...] = (
    PopupKeyHandler,
    AutoCloseHandler,
    TextInputHandler,
)

__all__ = [
    "PopupKeyHandler",
    "AutoCloseHandler",
    "TextInputHandler",
    "DEFAULT_HANDLERS",
]
