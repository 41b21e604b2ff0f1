from hackademy.completion import (
    DEFAULT_VOCABULARY,
    VocabularyEntry,
    VocabularyTable,
    completion_suffix,
    suggest,
)


def make_vocabulary(*tokens: str) -> VocabularyTable:
    return VocabularyTable(VocabularyEntry(token) for token in tokens)


def test_suggest_matches_prefix_case_insensitively() -> None:
    vocabulary = make_vocabulary("div", "display", "button")

    assert suggest("DI", vocabulary) == ("div", "display")


def test_suggest_skips_exact_match_ignoring_case() -> None:
    vocabulary = make_vocabulary("div", "display")

    assert suggest("Div", vocabulary) == ()
    assert suggest("di", vocabulary) == ("div", "display")


def test_suggest_keeps_vocabulary_order_and_limit() -> None:
    vocabulary = make_vocabulary(*(f"p-{n}" for n in range(12)))

    result = suggest("p-", vocabulary)

    assert len(result) == 8
    assert result[0] == "p-0"
    assert result[-1] == "p-7"
    assert suggest("p-", vocabulary, limit=3) == ("p-0", "p-1", "p-2")


def test_suggest_empty_word_yields_nothing() -> None:
    assert suggest("", DEFAULT_VOCABULARY) == ()
    assert suggest(None, DEFAULT_VOCABULARY) == ()


def test_default_vocabulary_dedups_case_insensitively() -> None:
    tokens = [token.lower() for token in DEFAULT_VOCABULARY]

    assert len(tokens) == len(set(tokens))
    assert "flex" in DEFAULT_VOCABULARY
    assert "FLEX" in DEFAULT_VOCABULARY


def test_vocabulary_first_registration_wins() -> None:
    vocabulary = VocabularyTable(
        [VocabularyEntry("border", "css"), VocabularyEntry("Border", "class")]
    )

    assert len(vocabulary) == 1
    assert vocabulary.entries[0].category == "css"


def test_default_vocabulary_offers_tailwind_colors() -> None:
    result = suggest("bg-b", DEFAULT_VOCABULARY)

    assert result == ("bg-black", "bg-blue-500")


def test_completion_suffix_preserves_typed_prefix() -> None:
    assert completion_suffix("div", "Di") == "v"
    assert completion_suffix("button", "butt") == "on"
