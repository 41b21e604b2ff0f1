"""Keystroke handling, popup state and the session controller.

``EditSessionController`` lives in :mod:`hackademy.session.controller` and the
handler chain in :mod:`hackademy.session.handlers`; import them from there.
"""

from .base import HandlerResult, KeyHandler, KeyInput, SessionBus, SessionState
from .state import PopupState, PopupView, SessionView

__all__ = [
    "HandlerResult",
    "KeyHandler",
    "KeyInput",
    "SessionBus",
    "SessionState",
    "PopupState",
    "PopupView",
    "SessionView",
]
