"""Nesting-aware scans used to find the pair enclosing a caret."""

from __future__ import annotations

from typing import Optional

from pair_engine.text import DelimiterTable


def find_enclosing_opener(
    table: DelimiterTable, text: str, position: int
) -> Optional[int]:
    """Index of the nearest unmatched opener strictly before ``position``.

    Walks backward keeping a stack of closers still waiting for their
    opener. Symmetric delimiters carry no direction and are skipped. An
    opener whose closer sits deeper in the stack drops the stray closers
    above it. An opener nothing pending can close is remembered and used
    only when the scan ends with stray closers left over.
    """

    pending: list[str] = []
    stray_opener: Optional[int] = None
    for index in range(position - 1, -1, -1):
        char = text[index]
        if table.is_symmetric(char):
            continue
        if table.is_closer(char):
            pending.append(char)
            continue
        closer = table.closer_for(char)
        if closer is None:
            continue
        if not pending:
            return index
        if closer in pending:
            while pending.pop() != closer:
                pass
        elif stray_opener is None:
            stray_opener = index
    return stray_opener


def find_matching_closer(
    table: DelimiterTable, text: str, opener_index: int, position: int
) -> Optional[int]:
    """Index of the closer balancing ``text[opener_index]``, scanning from ``position``."""

    first = table.closer_for(text[opener_index])
    if first is None:
        return None
    expected = [first]
    for index in range(position, len(text)):
        char = text[index]
        if table.is_symmetric(char):
            continue
        nested = table.closer_for(char)
        if nested is not None:
            expected.append(nested)
        elif char == expected[-1]:
            expected.pop()
            if not expected:
                return index
    return None


def find_symmetric_closer(
    table: DelimiterTable, text: str, position: int
) -> Optional[int]:
    """``position`` when it holds a symmetric marker already seen earlier."""

    char = text[position : position + 1]
    if not char or not table.is_symmetric(char):
        return None
    if char not in text[:position]:
        return None
    return position


def find_inner_symmetric_closer(
    table: DelimiterTable, text: str, start: int, position: int, stop: int
) -> Optional[int]:
    """First symmetric closer in ``text[position:stop]`` opened inside the span.

    A quote or marker counts as open when it occurs an odd number of times
    in ``text[start:position]``.
    """

    for index in range(position, stop):
        char = text[index]
        if table.is_symmetric(char) and text.count(char, start, position) % 2:
            return index
    return None


__all__ = [
    "find_enclosing_opener",
    "find_inner_symmetric_closer",
    "find_matching_closer",
    "find_symmetric_closer",
]
