"""Rank vocabulary entries against a partial word."""

from __future__ import annotations

from typing import Optional

from .vocabulary import VocabularyTable

MAX_SUGGESTIONS = 8


def suggest(
    word: Optional[str],
    vocabulary: VocabularyTable,
    *,
    limit: int = MAX_SUGGESTIONS,
) -> tuple[str, ...]:
    """Return up to ``limit`` tokens that extend ``word``.

    Matching is a case-insensitive prefix test. A token equal to ``word``
    (ignoring case) is skipped so the popup never offers what is already
    typed. Results keep vocabulary order, not alphabetical order.
    """

    if not word or limit <= 0:
        return ()
    folded_word = word.lower()
    matches: list[str] = []
    for token, folded in vocabulary.folded_pairs():
        if folded == folded_word or not folded.startswith(folded_word):
            continue
        matches.append(token)
        if len(matches) == limit:
            break
    return tuple(matches)


def completion_suffix(entry: str, word: str) -> str:
    """Text to insert after ``word`` so the buffer reads ``entry``.

    The typed prefix is kept as-is, so ``Di`` completed with ``div`` becomes
    ``Div``.
    """

    return entry[len(word):]


__all__ = ["MAX_SUGGESTIONS", "completion_suffix", "suggest"]
