import pytest

from hackademy.layout import (
    TERMINAL_METRICS,
    WEB_METRICS,
    ScrollOffset,
    caret_position,
    project,
)


def test_caret_position_counts_lines_and_columns() -> None:
    text = "<div>\n  <p>"

    assert caret_position(text, 0) == (0, 0)
    assert caret_position(text, 5) == (0, 5)
    assert caret_position(text, 6) == (1, 0)
    assert caret_position(text, len(text)) == (1, 5)


def test_project_first_line_sits_one_line_below_caret() -> None:
    anchor = project("<di", 3, ScrollOffset(), WEB_METRICS)

    assert anchor.top == 40
    assert anchor.left == pytest.approx(16 + 48 + 3 * 8.5)


def test_project_accounts_for_line_index() -> None:
    text = "<div>\n  <p"

    anchor = project(text, len(text), ScrollOffset(), WEB_METRICS)

    assert anchor.top == 16 + 2 * 24
    assert anchor.left == pytest.approx(64 + 4 * 8.5)


def test_project_subtracts_scroll_and_clamps_at_zero() -> None:
    text = "a\n" * 10 + "b"

    scrolled = project(text, len(text), ScrollOffset(top=100, left=0), WEB_METRICS)
    pinned = project("ab", 2, ScrollOffset(top=500, left=500), WEB_METRICS)

    assert scrolled.top == 16 + 11 * 24 - 100
    assert pinned.top == 0
    assert pinned.left == 0


def test_project_terminal_metrics_use_cells() -> None:
    anchor = project("ab\ncd", 4, ScrollOffset(), TERMINAL_METRICS)

    assert anchor.top == 2
    assert anchor.left == 6
