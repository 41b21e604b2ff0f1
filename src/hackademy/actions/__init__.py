"""Editing verbs dispatched through keymap bindings."""

from .popup import (
    commit_suggestion,
    dismiss_suggestions,
    next_suggestion,
    previous_suggestion,
)

__all__ = [
    "commit_suggestion",
    "dismiss_suggestions",
    "next_suggestion",
    "previous_suggestion",
]
