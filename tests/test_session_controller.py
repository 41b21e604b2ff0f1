from __future__ import annotations

from typing import Any, List, Tuple

import pytest

from hackademy.buffer import BufferValidationError
from hackademy.completion import VocabularyTable, locate, suggest
from hackademy.config import EditorSettings
from hackademy.session import KeyInput, SessionState
from hackademy.session.controller import EditSessionController


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def make_session(
    initial_text: str = "",
    *,
    vocabulary: VocabularyTable | None = None,
    clock: FakeClock | None = None,
) -> EditSessionController:
    kwargs: dict[str, Any] = {"initial_text": initial_text}
    if vocabulary is not None:
        kwargs["vocabulary"] = vocabulary
    if clock is not None:
        kwargs["clock"] = clock
    return EditSessionController(settings=EditorSettings(), **kwargs)


def type_text(session: EditSessionController, text: str) -> None:
    for char in text:
        session.handle_key(KeyInput(key=char, text=char))


def record_events(
    session: EditSessionController, *names: str
) -> List[Tuple[str, object]]:
    events: List[Tuple[str, object]] = []
    for name in names:
        session.bus.subscribe(
            name, lambda payload, name=name: events.append((name, payload))
        )
    return events


def test_typing_opens_popup_with_matches() -> None:
    session = make_session()
    events = record_events(session, "popup.open")

    type_text(session, "<bu")

    assert session.text == "<bu"
    assert session.state is SessionState.SUGGESTING
    assert session.popup.suggestions == ("button",)
    assert events and events[-1][0] == "popup.open"


def test_navigation_wraps_both_ways() -> None:
    session = make_session(vocabulary=VocabularyTable(["alpha", "alps", "altitude"]))
    type_text(session, "al")

    indices = [
        int(session.handle_key(KeyInput(key="DOWN")).message or -1) for _ in range(3)
    ]
    back = session.handle_key(KeyInput(key="UP"))

    assert indices == [1, 2, 0]
    assert back.message == "2"
    assert session.text == "al"
    assert session.cursor == 2


def test_enter_commits_active_suggestion() -> None:
    session = make_session()
    events = record_events(session, "suggestion.commit", "popup.close")
    type_text(session, "<butt")

    result = session.handle_key(KeyInput(key="ENTER"))

    assert result.consumed is True
    assert result.status == "commit"
    assert session.text == "<button"
    assert session.cursor == len("<button")
    assert session.state is SessionState.IDLE
    assert ("suggestion.commit", "button") in events
    assert ("popup.close", "commit") in events


def test_commit_is_not_repeated() -> None:
    session = make_session()
    type_text(session, "butt")
    session.handle_key(KeyInput(key="TAB"))

    again = session.select_suggestion(0)
    newline = session.handle_key(KeyInput(key="ENTER"))

    assert again.consumed is False
    assert again.status == "commit_empty"
    assert newline.status == "insert"
    assert session.text == "button\n"


def test_commit_keeps_typed_case() -> None:
    session = make_session()
    type_text(session, "Bu")

    session.handle_key(KeyInput(key="ENTER"))

    assert session.text == "Button"


def test_escape_closes_popup_without_editing() -> None:
    session = make_session()
    events = record_events(session, "popup.close")
    type_text(session, "di")

    closed = session.handle_key(KeyInput(key="ESC"))
    ignored = session.handle_key(KeyInput(key="ESC"))

    assert closed.consumed is True
    assert closed.status == "dismiss"
    assert session.text == "di"
    assert session.state is SessionState.IDLE
    assert events == [("popup.close", "cancel")]
    assert ignored.consumed is False
    assert ignored.status == "ignored"


def test_keys_fall_through_when_popup_closed() -> None:
    session = make_session()

    session.handle_key(KeyInput(key="TAB"))
    session.handle_key(KeyInput(key="ENTER"))

    assert session.text == "  \n"
    assert session.cursor == 3


def test_greater_than_auto_closes_tag() -> None:
    session = make_session()
    events = record_events(session, "autoclose.insert")

    type_text(session, "<div>")

    assert session.text == "<div></div>"
    assert session.cursor == 5
    assert events == [("autoclose.insert", "div")]


def test_greater_than_after_closing_tag_is_plain() -> None:
    session = make_session()

    type_text(session, "</div>")

    assert session.text == "</div>"


def test_blur_dismisses_after_delay() -> None:
    clock = FakeClock()
    session = make_session(clock=clock)
    type_text(session, "di")

    session.blur()
    clock.now = 0.1
    early = session.process_timeouts()
    clock.now = 0.25
    fired = session.process_timeouts()

    assert early is None
    assert fired is not None
    assert fired.status == "timeout"
    assert session.popup.visible is False
    assert session.dismiss_pending is False


def test_pointer_selection_beats_blur_timer() -> None:
    clock = FakeClock()
    session = make_session(vocabulary=VocabularyTable(["alpha", "alps"]), clock=clock)
    type_text(session, "al")

    session.blur()
    result = session.select_suggestion(1)
    clock.now = 1.0

    assert result.status == "commit"
    assert session.text == "alps"
    assert session.process_timeouts() is None


def test_focus_cancels_pending_dismiss() -> None:
    clock = FakeClock()
    session = make_session(clock=clock)
    type_text(session, "di")

    session.blur()
    session.focus()
    clock.now = 5.0

    assert session.process_timeouts() is None
    assert session.popup.visible is True


def test_select_suggestion_out_of_range() -> None:
    session = make_session()
    type_text(session, "<bu")

    with pytest.raises(IndexError):
        session.select_suggestion(5)


def test_load_stage_resets_session() -> None:
    clock = FakeClock()
    session = make_session(clock=clock)
    events = record_events(session, "stage.reset", "buffer.change")
    type_text(session, "di")
    session.blur()

    session.load_stage("<div>\n</div>")

    assert session.text == "<div>\n</div>"
    assert session.cursor == 0
    assert session.buffer.version == 0
    assert session.popup.visible is False
    assert session.dismiss_pending is False
    assert ("stage.reset", "<div>\n</div>") in events
    assert events[-1] == ("buffer.change", "<div>\n</div>")


def test_scroll_is_mirrored_and_moves_anchor() -> None:
    session = make_session(vocabulary=VocabularyTable(["alpha", "alps"]))
    type_text(session, "al")
    assert session.popup.anchor is not None
    assert session.popup.anchor.top == 40

    session.set_scroll(30, 0)
    view = session.snapshot()

    assert view.display_scroll == view.scroll
    assert view.scroll.top == 30
    assert view.popup.anchor is not None
    assert view.popup.anchor.top == 10


def test_cursor_move_recomputes_suggestions() -> None:
    session = make_session("div bu")

    session.set_cursor(6)
    assert session.popup.suggestions == ("button",)

    session.set_cursor(4)
    assert session.popup.visible is False

    session.handle_key(KeyInput(key="END"))
    assert session.popup.suggestions == ("button",)


def test_backspace_and_delete_edges() -> None:
    session = make_session("ab")

    start = session.handle_key(KeyInput(key="BACKSPACE"))
    session.handle_key(KeyInput(key="DELETE"))
    session.handle_key(KeyInput(key="END"))
    end = session.handle_key(KeyInput(key="DELETE"))

    assert start.status == "noop"
    assert end.status == "noop"
    assert session.text == "b"


def test_vertical_moves_clamp_column() -> None:
    session = make_session("abcdef\nxy")
    session.set_cursor(5)

    session.handle_key(KeyInput(key="DOWN"))
    assert session.cursor == len("abcdef\nxy")

    session.handle_key(KeyInput(key="UP"))
    assert session.cursor == 2


def test_host_cursor_is_validated() -> None:
    session = make_session("div")

    with pytest.raises(BufferValidationError):
        session.handle_key(KeyInput(key="a", text="a", cursor=9))


def test_host_edit_and_pull_buffer() -> None:
    session = make_session()

    session.push_host_edit("<butt", 5)
    mirror = session.pull_buffer()

    assert mirror.text == "<butt"
    assert mirror.cursor == 5
    assert mirror.version == 1
    assert session.popup.suggestions == ("button",)


def test_host_caret_recomputes_popup_before_commit() -> None:
    session = make_session()
    type_text(session, "di xy")
    session.set_cursor(2)
    assert session.popup.active == "div"

    result = session.handle_key(KeyInput(key="ENTER", cursor=5))

    assert result.status == "insert"
    assert session.text == "di xy\n"
    assert session.state is SessionState.IDLE


def test_host_caret_on_a_word_opens_its_suggestions() -> None:
    session = make_session("bu xy")

    session.handle_key(KeyInput(key="TAB", cursor=2))

    assert session.text == "button xy"
    assert session.cursor == len("button")


def test_commit_leaves_nothing_to_suggest() -> None:
    vocabulary = VocabularyTable(["alpha", "beta"])
    session = make_session(vocabulary=vocabulary)
    type_text(session, "al")

    session.handle_key(KeyInput(key="ENTER"))
    token = locate(session.text, session.cursor)

    assert session.text == "alpha"
    assert token is not None
    assert suggest(token.word, vocabulary) == ()
    session.refresh_suggestions()
    assert session.state is SessionState.IDLE
    assert session.popup.visible is False


def test_suggestion_list_never_exceeds_eight() -> None:
    session = EditSessionController(settings=EditorSettings(suggestion_limit=20))

    type_text(session, "b")

    assert len(session.popup.suggestions) == 8
