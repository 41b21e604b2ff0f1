"""Textual host for the tutorial editor.

Only the adapter is imported here; the app module needs ``textual`` and is
loaded on demand by the ``hackademy`` console script.
"""

from .controller import SESSION_EVENTS, TextualEditorAdapter, TextualUIHooks

__all__ = ["SESSION_EVENTS", "TextualEditorAdapter", "TextualUIHooks"]
