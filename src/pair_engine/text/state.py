"""Offsets, spans and the result shapes returned by the engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple, Union

Span = Tuple[int, int]  # [start, end) offsets into a buffer


@dataclass(frozen=True, slots=True)
class EditResult:
    """Buffer and cursor the host should apply in place of the default key.

    ``highlight`` is a span to select briefly before collapsing the selection
    to ``(cursor_start, cursor_end)``.
    """

    text: str
    cursor_start: int
    cursor_end: int
    highlight: Optional[Span] = None
    action: str = ""

    @property
    def consumed(self) -> bool:
        return True

    @property
    def cursor(self) -> Span:
        return (self.cursor_start, self.cursor_end)


@dataclass(frozen=True, slots=True)
class NoOp:
    """Nothing to do; the host falls back to its default key handling."""

    reason: str = "default"

    @property
    def consumed(self) -> bool:
        return False


EditOutcome = Union[EditResult, NoOp]


__all__ = ["Span", "EditResult", "NoOp", "EditOutcome"]
