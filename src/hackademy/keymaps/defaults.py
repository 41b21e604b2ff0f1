"""Built-in bindings for the suggestion popup."""

from __future__ import annotations

from typing import Iterable

from hackademy.actions import popup as popup_actions

from .models import ActionRef, Binding, KeyStroke
from .registry import KeymapRegistry

POPUP_SCOPE = "popup"
SUGGESTING_FLAG = "suggesting"

DEFAULT_ACTIONS: tuple[ActionRef, ...] = (
    ActionRef(
        id="popup.next",
        handler=popup_actions.next_suggestion,
        description="Highlight the next suggestion",
    ),
    ActionRef(
        id="popup.previous",
        handler=popup_actions.previous_suggestion,
        description="Highlight the previous suggestion",
    ),
    ActionRef(
        id="popup.commit",
        handler=popup_actions.commit_suggestion,
        description="Insert the highlighted suggestion",
    ),
    ActionRef(
        id="popup.dismiss",
        handler=popup_actions.dismiss_suggestions,
        description="Close the suggestion popup",
    ),
)

_BINDINGS: tuple[tuple[str, str, str], ...] = (
    ("popup.down", "DOWN", "popup.next"),
    ("popup.up", "UP", "popup.previous"),
    ("popup.enter", "ENTER", "popup.commit"),
    ("popup.tab", "TAB", "popup.commit"),
    ("popup.escape", "ESC", "popup.dismiss"),
)


def default_bindings() -> Iterable[Binding]:
    for binding_id, key, action_id in _BINDINGS:
        yield Binding(
            id=binding_id,
            scope=POPUP_SCOPE,
            stroke=KeyStroke(key),
            action_id=action_id,
            when=(SUGGESTING_FLAG,),
        )


def load_default_keymaps(registry: KeymapRegistry) -> KeymapRegistry:
    for action in DEFAULT_ACTIONS:
        registry.register_action(action, replace=True)
    for binding in default_bindings():
        registry.register_binding(binding, replace=True)
    return registry


__all__ = [
    "POPUP_SCOPE",
    "SUGGESTING_FLAG",
    "DEFAULT_ACTIONS",
    "default_bindings",
    "load_default_keymaps",
]
