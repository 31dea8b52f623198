"""Exceptions raised when callers step outside the engine's input domain."""

from __future__ import annotations

from typing import Optional, Tuple


class PairEngineError(Exception):
    """Base class for every error raised by ``pair_engine``."""


class InvalidCursorError(PairEngineError, ValueError):
    """Raised when a host passes offsets that do not fit the buffer."""

    def __init__(
        self,
        message: str,
        *,
        cursor: Optional[Tuple[int, int]] = None,
        length: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.cursor = cursor
        self.length = length


class UnknownDelimiterError(PairEngineError, ValueError):
    """Raised when an operation receives a key missing from the table."""

    def __init__(self, key: str, role: str) -> None:
        super().__init__(f"{key!r} is not a registered {role}")
        self.key = key
        self.role = role


class DelimiterConfigError(PairEngineError, ValueError):
    """Raised when a delimiter table breaks its own invariants."""


__all__ = [
    "PairEngineError",
    "InvalidCursorError",
    "UnknownDelimiterError",
    "DelimiterConfigError",
]
