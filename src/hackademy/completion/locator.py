"""Find the partial word sitting directly before the cursor."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from hackademy.buffer import ensure_offset


def is_token_char(char: str) -> bool:
    # ASCII only, matching [A-Za-z0-9-].
    return char == "-" or ("a" <= char <= "z") or ("A" <= char <= "Z") or (
        "0" <= char <= "9"
    )


@dataclass(frozen=True, slots=True)
class TokenMatch:
    word: str
    start: int

    @property
    def end(self) -> int:
        return self.start + len(self.word)


def locate(text: str, offset: int) -> Optional[TokenMatch]:
    """Return the run of ``[A-Za-z0-9-]`` characters ending at ``offset``.

    Hyphens are part of the token so Tailwind names such as ``bg-blue-500``
    complete as a single word. Returns ``None`` when the character before
    the cursor is outside that class or the cursor is at the buffer start.
    """

    ensure_offset(text, offset)
    start = offset
    while start > 0 and is_token_char(text[start - 1]):
        start -= 1
    if start == offset:
        return None
    return TokenMatch(word=text[start:offset], start=start)


__all__ = ["TokenMatch", "is_token_char", "locate"]
