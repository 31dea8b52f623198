"""Validation helpers shared by the engine operations."""

from __future__ import annotations

from .delimiters import DelimiterTable
from .errors import InvalidCursorError, UnknownDelimiterError
from .state import Span


def ensure_cursor(text: str, start: int, end: int) -> Span:
    length = len(text)
    if start < 0 or end < 0:
        raise InvalidCursorError(
            "Cursor offsets cannot be negative", cursor=(start, end), length=length
        )
    if start > end:
        raise InvalidCursorError(
            "Cursor start is after its end", cursor=(start, end), length=length
        )
    if end > length:
        raise InvalidCursorError(
            "Cursor offset past end of buffer", cursor=(start, end), length=length
        )
    return (start, end)


def ensure_caret(text: str, position: int) -> int:
    ensure_cursor(text, position, position)
    return position


def ensure_opener(table: DelimiterTable, key: str) -> str:
    closer = table.closer_for(key)
    if closer is None:
        raise UnknownDelimiterError(key, "opener")
    return closer


def ensure_closer(table: DelimiterTable, key: str) -> str:
    if not table.is_closer(key):
        raise UnknownDelimiterError(key, "closer")
    return key
