"""Insert a matching closing tag when ``>`` finishes an opening tag name."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from hackademy.buffer import ensure_offset

TRIGGER = ">"

# Bare tag name only: ``<div`` matches, ``</div`` and ``<div class="x"`` do not.
_OPEN_TAG = re.compile(r"<([A-Za-z0-9]+)$")


@dataclass(frozen=True, slots=True)
class AutoCloseEdit:
    tag: str
    text: str
    cursor: int
    inserted: str


def open_tag_before(text: str, offset: int) -> Optional[str]:
    match = _OPEN_TAG.search(text[: ensure_offset(text, offset)])
    return match.group(1) if match else None


def auto_close(text: str, offset: int) -> Optional[AutoCloseEdit]:
    """Return the edit for typing ``>`` at ``offset``, or ``None``.

    ``None`` means no opening tag name sits directly before the cursor and
    the caller should insert a plain ``>``. On a match the cursor lands
    between the new ``>`` and the generated closing tag.
    """

    tag = open_tag_before(text, offset)
    if tag is None:
        return None
    inserted = f"{TRIGGER}</{tag}>"
    return AutoCloseEdit(
        tag=tag,
        text=text[:offset] + inserted + text[offset:],
        cursor=offset + len(TRIGGER),
        inserted=inserted,
    )


__all__ = ["TRIGGER", "AutoCloseEdit", "auto_close", "open_tag_before"]
