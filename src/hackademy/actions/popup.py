"""Actions bound to keys while the suggestion popup is open."""

from __future__ import annotations

from typing import TYPE_CHECKING

from hackademy.session.base import HandlerResult

if TYPE_CHECKING:  # pragma: no cover
    from hackademy.keymaps import ResolutionMatch
    from hackademy.session.controller import EditSessionController


def next_suggestion(
    session: "EditSessionController", match: ResolutionMatch
) -> HandlerResult:
    del match
    index = session.cycle_suggestion(1)
    return HandlerResult(consumed=True, status="navigate", message=str(index))


def previous_suggestion(
    session: "EditSessionController", match: ResolutionMatch
) -> HandlerResult:
    del match
    index = session.cycle_suggestion(-1)
    return HandlerResult(consumed=True, status="navigate", message=str(index))


def commit_suggestion(
    session: "EditSessionController", match: ResolutionMatch
) -> HandlerResult:
    del match
    committed = session.commit_active()
    if committed is None:
        return HandlerResult(consumed=False, status="commit_empty")
    return HandlerResult(consumed=True, status="commit", message=committed)


def dismiss_suggestions(
    session: "EditSessionController", match: ResolutionMatch
) -> HandlerResult:
    del match
    session.dismiss(reason="cancel")
    return HandlerResult(consumed=True, status="dismiss")


__all__ = [
    "next_suggestion",
    "previous_suggestion",
    "commit_suggestion",
    "dismiss_suggestions",
]
