"""Token location, suggestion ranking and tag auto-closing."""

from .autoclose import TRIGGER, AutoCloseEdit, auto_close, open_tag_before
from .engine import MAX_SUGGESTIONS, completion_suffix, suggest
from .locator import TokenMatch, is_token_char, locate
from .vocabulary import (
    DEFAULT_VOCABULARY,
    VocabularyEntry,
    VocabularyTable,
)

__all__ = [
    "TRIGGER",
    "AutoCloseEdit",
    "auto_close",
    "open_tag_before",
    "MAX_SUGGESTIONS",
    "completion_suffix",
    "suggest",
    "TokenMatch",
    "is_token_char",
    "locate",
    "DEFAULT_VOCABULARY",
    "VocabularyEntry",
    "VocabularyTable",
]
