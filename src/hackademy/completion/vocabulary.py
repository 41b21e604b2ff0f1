"""The fixed table of completable tokens."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Literal, Sequence

Category = Literal["tag", "react", "css", "attribute", "class"]


@dataclass(frozen=True, slots=True)
class VocabularyEntry:
    token: str
    category: Category = "tag"

    def __post_init__(self) -> None:
        if not self.token:
            raise ValueError("token cannot be empty")


class VocabularyTable:
    """Ordered, deduplicated set of tokens.

    Registration order is the ranking order used by the suggestion engine.
    A token that repeats an earlier one (ignoring case) is dropped, so the
    first registration wins.
    """

    __slots__ = ("_entries", "_folded")

    def __init__(self, entries: Iterable[VocabularyEntry | str]) -> None:
        seen: set[str] = set()
        kept: list[VocabularyEntry] = []
        for entry in entries:
            if isinstance(entry, str):
                entry = VocabularyEntry(entry)
            folded = entry.token.lower()
            if folded in seen:
                continue
            seen.add(folded)
            kept.append(entry)
        self._entries: tuple[VocabularyEntry, ...] = tuple(kept)
        self._folded: tuple[str, ...] = tuple(e.token.lower() for e in kept)

    @classmethod
    def from_groups(
        cls, groups: Sequence[tuple[Category, Sequence[str]]]
    ) -> "VocabularyTable":
        return cls(
            VocabularyEntry(token, category)
            for category, tokens in groups
            for token in tokens
        )

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return (entry.token for entry in self._entries)

    def __contains__(self, token: object) -> bool:
        return isinstance(token, str) and token.lower() in self._folded

    @property
    def entries(self) -> tuple[VocabularyEntry, ...]:
        return self._entries

    def folded_pairs(self) -> Iterator[tuple[str, str]]:
        """Yield ``(token, token.lower())`` in registration order."""

        return zip((e.token for e in self._entries), self._folded)


_GROUPS: tuple[tuple[Category, tuple[str, ...]], ...] = (
    (
        "tag",
        (
            "div", "p", "h1", "h2", "h3", "span", "button", "img", "input",
            "form", "ul", "li", "section", "header", "footer", "a", "nav",
            "main",
        ),
    ),
    (
        "react",
        (
            "import", "export", "return", "const", "function", "default",
            "useState", "useEffect", "console", "log", "map", "onClick",
            "onChange", "onSubmit",
        ),
    ),
    (
        "css",
        (
            "color", "cursor", "content", "columns", "clear", "clip",
            "background", "border", "margin", "padding", "width", "height",
            "font-size", "display", "position", "top", "left", "flex", "grid",
        ),
    ),
    (
        "attribute",
        (
            "className", "src", "alt", "href", "type", "placeholder", "value",
            "key", "id",
        ),
    ),
    (
        "class",
        (
            "flex", "items-center", "justify-center", "flex-col", "grid",
            "hidden", "block",
            "bg-white", "bg-black", "bg-gray-100", "bg-blue-500", "bg-red-500",
            "bg-green-500", "bg-indigo-600", "bg-yellow-400",
            "text-white", "text-black", "text-gray-500", "text-center",
            "text-xl", "text-2xl", "text-sm", "text-lg", "font-bold",
            "p-2", "p-4", "p-6", "p-8", "px-4", "py-2",
            "m-2", "m-4", "mb-4", "mt-4", "mx-auto",
            "rounded", "rounded-lg", "rounded-xl", "rounded-full",
            "shadow", "shadow-lg", "shadow-md",
            "border", "border-gray-300", "w-full", "h-screen", "h-full",
        ),
    ),
)

DEFAULT_VOCABULARY = VocabularyTable.from_groups(_GROUPS)

__all__ = ["Category", "VocabularyEntry", "VocabularyTable", "DEFAULT_VOCABULARY"]
