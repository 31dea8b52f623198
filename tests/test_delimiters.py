from __future__ import annotations

import pytest

from pair_engine.text import DelimiterConfigError, DelimiterTable


def test_default_table_order_and_roles() -> None:
    table = DelimiterTable.default()

    assert table.openers == ("(", "[", "{", '"', "*")
    assert table.closers == (")", "]", "}", '"', "*")
    assert len(table) == 5
    assert table.closer_for("(") == ")"
    assert table.opener_for("]") == "["
    assert table.closer_for(")") is None


def test_symmetric_entries_map_to_themselves() -> None:
    table = DelimiterTable.default()

    assert table.is_symmetric('"')
    assert table.is_symmetric("*")
    assert not table.is_symmetric("(")
    assert table.is_opener("*") and table.is_closer("*")


def test_custom_marker() -> None:
    table = DelimiterTable.default("~")

    assert table.is_symmetric("~")
    assert "*" not in table
    assert "~" in table


def test_tables_compare_by_content() -> None:
    assert DelimiterTable.default() == DelimiterTable.default("*")
    assert DelimiterTable.default() != DelimiterTable.default("~")
    assert hash(DelimiterTable.default()) == hash(DelimiterTable.default())


def test_pairs_view_is_read_only() -> None:
    table = DelimiterTable.default()

    with pytest.raises(TypeError):
        table.pairs["<"] = ">"  # type: ignore[index]


@pytest.mark.parametrize(
    "pairs",
    [
        [("(", ")"), ("(", "]")],
        [("(", ")"), ("[", ")")],
        [("(", ")"), (")", "]")],
        [("((", "))")],
        [(" ", " ")],
        [],
    ],
)
def test_invalid_tables_are_rejected(pairs) -> None:
    with pytest.raises(DelimiterConfigError):
        DelimiterTable(pairs)


def test_marker_cannot_shadow_a_bracket() -> None:
    with pytest.raises(DelimiterConfigError):
        DelimiterTable.default('"')
    with pytest.raises(DelimiterConfigError):
        DelimiterTable.default(")")
