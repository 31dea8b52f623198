"""Convert between flat offsets and TextArea ``(row, column)`` locations."""

from __future__ import annotations

from typing import Sequence, Tuple

Location = Tuple[int, int]


def offset_for_location(lines: Sequence[str], location: Location) -> int:
    row, col = location
    offset = 0
    for index in range(row):
        offset += len(lines[index]) + 1  # newline
    return offset + col


def location_for_offset(lines: Sequence[str], offset: int) -> Location:
    running = 0
    for row, line in enumerate(lines):
        if offset <= running + len(line):
            return (row, offset - running)
        running += len(line) + 1
    if not lines:
        return (0, 0)
    return (len(lines) - 1, len(lines[-1]))


def ordered_offsets(
    lines: Sequence[str], start: Location, end: Location
) -> Tuple[int, int]:
    """Selection offsets with the anchor/cursor order flattened out."""

    first = offset_for_location(lines, start)
    second = offset_for_location(lines, end)
    return (first, second) if first <= second else (second, first)


__all__ = [
    "Location",
    "offset_for_location",
    "location_for_offset",
    "ordered_offsets",
]
