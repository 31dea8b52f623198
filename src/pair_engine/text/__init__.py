"""Delimiter table, result types and input validation."""

from .delimiters import BRACKETS, DEFAULT_MARKER, DelimiterTable
from .errors import (
    DelimiterConfigError,
    InvalidCursorError,
    PairEngineError,
    UnknownDelimiterError,
)
from .state import EditOutcome, EditResult, NoOp, Span
from .validation import ensure_caret, ensure_closer, ensure_cursor, ensure_opener

__all__ = [
    "BRACKETS",
    "DEFAULT_MARKER",
    "DelimiterTable",
    "DelimiterConfigError",
    "InvalidCursorError",
    "PairEngineError",
    "UnknownDelimiterError",
    "EditOutcome",
    "EditResult",
    "NoOp",
    "Span",
    "ensure_caret",
    "ensure_closer",
    "ensure_cursor",
    "ensure_opener",
]
