"""Executable Textual app hosting the tutorial editor."""

from __future__ import annotations

import argparse
import os
from dataclasses import replace
from typing import Any, Optional, Sequence, Tuple

try:  # pragma: no cover - imported only when the app is run
    from rich.markup import escape
    from rich.text import Text
    from textual import events
    from textual.app import App, ComposeResult
    from textual.containers import Container, Horizontal, Vertical, VerticalScroll
    from textual.widgets import Footer, Header, Input, OptionList, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use hackademy.adapters.textual.app"
    ) from exc

from hackademy.config import METRIC_PRESETS, EditorSettings, load_settings
from hackademy.layout import PopupAnchor
from hackademy.mentor import MentorChat, MentorService
from hackademy.missions import MissionTracker
from hackademy.preview import describe, render_preview
from hackademy.runtime import telemetry
from hackademy.session import SessionView
from hackademy.session.controller import EditSessionController

from .controller import TextualEditorAdapter, TextualUIHooks

GUTTER_FORMAT = "{:>4}│"


def render_buffer(view: SessionView) -> Text:
    """Line-numbered buffer with the caret shown as a reversed cell."""

    rendered = Text()
    offset = 0
    for number, line in enumerate(view.text.split("\n"), start=1):
        rendered.append(GUTTER_FORMAT.format(number), style="dim")
        line_end = offset + len(line)
        if offset <= view.cursor <= line_end:
            column = view.cursor - offset
            rendered.append(line[:column])
            rendered.append(line[column:column + 1] or " ", style="reverse")
            rendered.append(line[column + 1:])
        else:
            rendered.append(line)
        rendered.append("\n")
        offset = line_end + 1
    return rendered


class EditorSurface(Static, can_focus=True):
    """Focusable buffer display that forwards keys to the adapter."""

    def on_key(self, event: events.Key) -> None:
        app = self.app
        if not isinstance(app, HackademyApp) or app.adapter is None:
            return
        normalized = _normalize_key(event)
        if normalized is None:
            return
        key, text, modifiers = normalized
        result = app.adapter.handle_textual_key(key, text=text, modifiers=modifiers)
        if result.consumed:
            event.stop()
            event.prevent_default()

    def on_paste(self, event: events.Paste) -> None:
        app = self.app
        if isinstance(app, HackademyApp) and app.adapter and event.text:
            app.adapter.paste(event.text)
            event.stop()

    def on_focus(self) -> None:
        app = self.app
        if isinstance(app, HackademyApp) and app.adapter:
            app.adapter.focus()

    def on_blur(self) -> None:
        app = self.app
        if isinstance(app, HackademyApp) and app.adapter:
            app.adapter.blur()


class HackademyApp(App[None]):
    """Mission panel, editor with suggestion popup, preview and mentor."""

    CSS = """
    #mission { height: auto; padding: 0 1; border-bottom: solid $accent; }
    #editor-area { layers: base popup; height: 1fr; }
    #editor-scroll { layer: base; height: 1fr; }
    #buffer-view { width: auto; }
    #suggestions {
        layer: popup;
        position: absolute;
        width: 28;
        height: auto;
        max-height: 10;
        display: none;
    }
    #side { width: 50; border-left: solid $accent; }
    #preview { height: 1fr; padding: 0 1; }
    #mentor-log { height: 1fr; padding: 0 1; }
    #status-line { height: 1; background: $surface-darken-1; padding: 0 1; }
    """

    BINDINGS = [
        ("ctrl+q", "quit", "Quit"),
        ("ctrl+n", "next_level", "Next level"),
        ("ctrl+e", "toggle_explanation", "Explanation"),
    ]

    def __init__(self, *, settings: Optional[EditorSettings] = None) -> None:
        super().__init__()
        self.settings = settings or load_settings()
        self.session = EditSessionController(settings=self.settings)
        self.mentor = MentorService(self.settings)
        self.chat = MentorChat(self.mentor)
        self.adapter: TextualEditorAdapter | None = None
        self.tracker: MissionTracker | None = None
        self._show_explanation = False

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Horizontal():
            with Vertical():
                yield Static("", id="mission")
                with Container(id="editor-area"):
                    with VerticalScroll(id="editor-scroll"):
                        yield EditorSurface("", id="buffer-view")
                    yield OptionList(id="suggestions")
                yield Static("", id="status-line")
            with Vertical(id="side"):
                yield Static("", id="preview")
                yield Static("", id="mentor-log")
                yield Input(placeholder="Ask the mentor...", id="mentor-input")
        yield Footer()

    def on_mount(self) -> None:
        hooks = TextualUIHooks(
            update_view=self._update_view,
            update_status=self._update_status,
            handle_event=self._handle_event,
            log=self._log_line,
        )
        self.tracker = MissionTracker(
            self.session,
            reviewer=self.mentor.review_code,
            schedule=lambda coro: self.run_worker(coro, group="review"),
            on_feedback=lambda _text: self._render_mission(),
        )
        self.adapter = TextualEditorAdapter(self.session, hooks)
        self._render_mission()
        self._render_chat()
        scroll = self.query_one("#editor-scroll", VerticalScroll)
        self.watch(scroll, "scroll_y", self._on_editor_scroll, init=False)
        self.watch(scroll, "scroll_x", self._on_editor_scroll, init=False)
        self.query_one(EditorSurface).focus()
        self.set_interval(0.05, self._process_timeouts)

    def _process_timeouts(self) -> None:
        if self.adapter:
            self.adapter.process_timeouts()

    def _on_editor_scroll(self, _value: Any = None) -> None:
        if self.adapter is None:
            return
        scroll = self.query_one("#editor-scroll", VerticalScroll)
        self.adapter.scroll(scroll.scroll_y, scroll.scroll_x)

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        if self.adapter is None:
            return
        self.adapter.select_suggestion(event.option_index)
        self.query_one(EditorSurface).focus()

    async def on_input_submitted(self, event: Input.Submitted) -> None:
        question = event.value
        event.input.value = ""
        if self.tracker is None:
            return
        stage = self.tracker.progress.stage.value
        self.run_worker(self._ask_mentor(question, stage), group="mentor")

    async def _ask_mentor(self, question: str, stage: str) -> None:
        self._render_chat()
        await self.chat.send(question, self.session.text, stage)
        self._render_chat()

    def action_next_level(self) -> None:
        if self.tracker is None:
            return
        if not self.tracker.progress.is_success:
            self._update_status("Finish the mission first")
            return
        # next_level already reset the session buffer.
        if self.tracker.next_level() and self.adapter:
            self.adapter.refresh()
        self._render_mission()

    def action_toggle_explanation(self) -> None:
        self._show_explanation = not self._show_explanation
        self._render_mission()

    def _update_view(self, view: SessionView) -> None:
        self.query_one(EditorSurface).update(render_buffer(view))
        popup = self.query_one("#suggestions", OptionList)
        if view.popup.visible and view.popup.anchor is not None:
            popup.clear_options()
            popup.add_options(list(view.popup.suggestions))
            popup.highlighted = view.popup.active_index
            popup.styles.offset = _cell_offset(view.popup.anchor)
            popup.styles.display = "block"
        else:
            popup.styles.display = "none"
        if self.tracker is not None:
            model = render_preview(view.text, self.tracker.progress.stage)
            self.query_one("#preview", Static).update(Text(describe(model)))

    def _render_mission(self) -> None:
        if self.tracker is None:
            return
        progress = self.tracker.progress
        config = progress.config
        lines = [
            f"[b]{escape(config.title)}[/b]  Level {progress.level_number} / "
            f"{progress.playable_levels}",
            escape(config.description),
            f"MISSION: {escape(config.mission)}",
        ]
        if self._show_explanation:
            lines += ["", escape(config.explanation), "", escape(config.solution_hint)]
        if progress.is_success:
            lines.append(
                f"[green]{escape(config.success_message)}[/green] (ctrl+n: next)"
            )
            if progress.feedback:
                lines.append(f'[i]" {escape(progress.feedback)} "[/i]')
        self.query_one("#mission", Static).update(Text.from_markup("\n".join(lines)))

    def _render_chat(self) -> None:
        lines = [f"{m.role}: {m.content}" for m in self.chat.messages]
        if self.chat.loading:
            lines.append("model: ...")
        self.query_one("#mentor-log", Static).update(Text("\n".join(lines)))

    def _update_status(self, status: str) -> None:
        self.query_one("#status-line", Static).update(Text(status))

    def _handle_event(self, name: str, payload: Any | None) -> None:
        if name == "buffer.change":
            self._render_mission()
        elif name == "autoclose.insert":
            self._update_status(f"auto-closed <{payload}>")

    def _log_line(self, line: str) -> None:
        telemetry.record_event(
            "adapter.trace",
            level="debug",
            data={"line": line},
            logger_name="hackademy.adapters",
        )


def _cell_offset(anchor: PopupAnchor) -> Tuple[int, int]:
    return int(anchor.left), int(anchor.top)


def _normalize_key(
    event: events.Key,
) -> Optional[Tuple[str, Optional[str], Tuple[str, ...]]]:
    key = event.key
    if key in {"ctrl+q", "ctrl+n", "ctrl+e"}:
        return None
    named = {
        "escape": "ESC",
        "enter": "ENTER",
        "tab": "TAB",
        "backspace": "BACKSPACE",
        "delete": "DELETE",
        "up": "UP",
        "down": "DOWN",
        "left": "LEFT",
        "right": "RIGHT",
        "home": "HOME",
        "end": "END",
    }
    if key in named:
        return (named[key], None, ())
    if event.character and event.is_printable:
        return (event.character, event.character, ())
    if "+" in key:
        *mods, base = key.split("+")
        return (base.upper(), None, tuple(mod.upper() for mod in mods))
    return None


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the H5 Hacker Academy editor.")
    parser.add_argument(
        "--metrics",
        choices=sorted(METRIC_PRESETS),
        default=os.environ.get("HACKADEMY_METRICS", "terminal"),
        help="Layout metrics used to place the suggestion popup (default: terminal)",
    )
    parser.add_argument(
        "--dismiss-delay-ms",
        type=int,
        default=None,
        help="Delay before a blurred editor hides its popup",
    )
    parser.add_argument(
        "--log-preset",
        default="quiet",
        help="telelog preset: quiet, development or production (default: quiet)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    telemetry.configure(preset=args.log_preset)
    settings = replace(load_settings(), metrics_preset=args.metrics)
    if args.dismiss_delay_ms is not None and args.dismiss_delay_ms > 0:
        settings = replace(settings, dismiss_delay_ms=args.dismiss_delay_ms)
    HackademyApp(settings=settings).run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
