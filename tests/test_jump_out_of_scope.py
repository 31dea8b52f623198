from __future__ import annotations

import pytest

from pair_engine.engine import (
    PairEngine,
    find_enclosing_opener,
    find_inner_symmetric_closer,
    find_matching_closer,
)
from pair_engine.text import DelimiterTable, EditResult, InvalidCursorError, NoOp

TABLE = DelimiterTable.default()


def jump(text: str, position: int, *, trailing_space: bool = False):
    return PairEngine(TABLE, trailing_space=trailing_space).jump_out_of_scope(
        text, position
    )


def test_jump_lands_after_closer() -> None:
    result = jump("(foo)", 4)

    assert isinstance(result, EditResult)
    assert result.text == "(foo)"
    assert result.cursor == (5, 5)


def test_jump_inserts_trailing_space_under_convention() -> None:
    result = jump("(foo)", 4, trailing_space=True)

    assert result.text == "(foo) "
    assert result.cursor == (6, 6)


def test_jump_reuses_existing_trailing_space() -> None:
    result = jump("(foo) bar", 2, trailing_space=True)

    assert result.text == "(foo) bar"
    assert result.cursor == (6, 6)


def test_jump_before_line_break_adds_no_space() -> None:
    result = jump("(foo)\nbar", 4, trailing_space=True)

    assert result.text == "(foo)\nbar"
    assert result.cursor == (5, 5)


def test_jump_steps_over_existing_tab_separator() -> None:
    result = jump("(foo)\tbar", 4, trailing_space=True)

    assert result.text == "(foo)\tbar"
    assert result.cursor == (6, 6)


def test_jump_without_convention_stops_before_space() -> None:
    result = jump("(foo) bar", 2)

    assert result.cursor == (5, 5)


def test_unterminated_pair_is_noop() -> None:
    assert jump("(foo", 4) == NoOp("no_scope")
    assert jump("(foo", 4, trailing_space=True) == NoOp("no_scope")


def test_nested_pair_matches_inner_closer() -> None:
    result = jump("([foo])", 3)

    assert result.cursor == (6, 6)
    assert result.text == "([foo])"


def test_nested_pair_does_not_insert_space_before_outer_closer() -> None:
    result = jump("([foo])", 3, trailing_space=True)

    assert result.text == "([foo])"
    assert result.cursor == (6, 6)


def test_backward_scan_skips_completed_inner_pair() -> None:
    result = jump("(a [b] c)", 8)

    assert result.cursor == (9, 9)


def test_forward_scan_skips_nested_pair() -> None:
    result = jump("(x [y] z)", 2)

    assert result.cursor == (9, 9)


@pytest.mark.parametrize("text", ['("foo")', "(*foo*)"])
def test_quote_inside_brackets_closes_before_the_bracket(text: str) -> None:
    result = jump(text, 5)

    assert result.cursor == (6, 6)
    assert result.text == text


def test_quote_inside_brackets_with_trailing_space_stays_nested() -> None:
    result = jump('("foo")', 5, trailing_space=True)

    assert result.text == '("foo")'
    assert result.cursor == (6, 6)


def test_closed_quote_inside_brackets_does_not_stop_the_jump() -> None:
    result = jump('("a" b)', 5)

    assert result.cursor == (7, 7)


def test_quote_opened_before_caret_is_found_further_on() -> None:
    assert find_inner_symmetric_closer(TABLE, '("a b")', 1, 2, 6) == 5
    assert find_inner_symmetric_closer(TABLE, '("a" b)', 1, 5, 6) is None


def test_symmetric_marker_fallback() -> None:
    result = jump("*bold*", 5)

    assert result.cursor == (6, 6)
    assert result.text == "*bold*"


def test_symmetric_marker_fallback_with_trailing_space() -> None:
    result = jump("*bold*", 5, trailing_space=True)

    assert result.text == "*bold* "
    assert result.cursor == (7, 7)


def test_quote_fallback() -> None:
    result = jump('say "hi"', 7)

    assert result.cursor == (8, 8)


def test_marker_without_earlier_occurrence_is_noop() -> None:
    assert isinstance(jump("abc*", 3), NoOp)


@pytest.mark.parametrize("text,position", [("", 0), ("(foo)", 0), ("foo", 3)])
def test_no_enclosing_pair_is_noop(text: str, position: int) -> None:
    assert isinstance(jump(text, position), NoOp)


def test_jump_rejects_out_of_range_caret() -> None:
    with pytest.raises(InvalidCursorError):
        jump("(a)", 4)


def test_find_enclosing_opener_ignores_mismatched_openers() -> None:
    # the stray "{" inside the brackets never closes the pending "]"
    assert find_enclosing_opener(TABLE, "([{]x", 5) == 0


def test_find_matching_closer_returns_none_when_unbalanced() -> None:
    assert find_matching_closer(TABLE, "([x)", 1, 2) is None


def test_stray_closer_does_not_hide_enclosing_opener() -> None:
    result = jump("(see 1] here)", 12)

    assert result.cursor == (13, 13)
    assert find_enclosing_opener(TABLE, "(see 1] here)", 12) == 0


def test_opener_drops_stray_closers_stacked_above_its_match() -> None:
    # the "]" has no opener; the "(" still pairs with the ")" before it
    assert find_enclosing_opener(TABLE, "{(a])x", 5) == 0
