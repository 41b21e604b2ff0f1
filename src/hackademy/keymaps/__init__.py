"""Declarative key bindings for the suggestion popup."""

from .models import ActionRef, Binding, KeyStroke, WhenClause
from .registry import (
    KeymapConflictError,
    KeymapRegistry,
    ResolutionMatch,
    ResolutionResult,
)
from .defaults import POPUP_SCOPE, SUGGESTING_FLAG, load_default_keymaps

__all__ = [
    "ActionRef",
    "Binding",
    "KeyStroke",
    "WhenClause",
    "KeymapRegistry",
    "KeymapConflictError",
    "ResolutionMatch",
    "ResolutionResult",
    "POPUP_SCOPE",
    "SUGGESTING_FLAG",
    "load_default_keymaps",
]
