"""Ordered opener -> closer table used by every pairing operation."""

from __future__ import annotations

from types import MappingProxyType
from typing import Iterable, Iterator, Mapping, Optional, Tuple

from .errors import DelimiterConfigError

BRACKETS: Tuple[Tuple[str, str], ...] = (
    ("(", ")"),
    ("[", "]"),
    ("{", "}"),
    ('"', '"'),
)
DEFAULT_MARKER = "*"


class DelimiterTable:
    """Immutable delimiter mapping.

    Symmetric entries (``'"'``, the marker) map to themselves. The closer of
    an asymmetric pair can never be registered as an opener, otherwise
    scanning could not tell nesting direction apart.
    """

    __slots__ = ("_pairs", "_by_closer")

    def __init__(self, pairs: Iterable[Tuple[str, str]]) -> None:
        ordered: dict[str, str] = {}
        for opener, closer in pairs:
            if len(opener) != 1 or len(closer) != 1:
                raise DelimiterConfigError(
                    f"delimiters must be single characters, got {opener!r}/{closer!r}"
                )
            if opener.isspace() or closer.isspace():
                raise DelimiterConfigError("whitespace cannot be a delimiter")
            if opener in ordered:
                raise DelimiterConfigError(f"opener {opener!r} registered twice")
            ordered[opener] = closer

        by_closer: dict[str, str] = {}
        for opener, closer in ordered.items():
            if closer in by_closer:
                raise DelimiterConfigError(
                    f"closer {closer!r} shared by {by_closer[closer]!r} and {opener!r}"
                )
            if opener != closer and closer in ordered:
                raise DelimiterConfigError(
                    f"closer {closer!r} of {opener!r} is also an opener"
                )
            by_closer[closer] = opener

        if not ordered:
            raise DelimiterConfigError("delimiter table cannot be empty")

        self._pairs: Mapping[str, str] = MappingProxyType(ordered)
        self._by_closer: Mapping[str, str] = MappingProxyType(by_closer)

    @classmethod
    def default(cls, marker: str = DEFAULT_MARKER) -> "DelimiterTable":
        return cls(BRACKETS + ((marker, marker),))

    @property
    def pairs(self) -> Mapping[str, str]:
        return self._pairs

    @property
    def openers(self) -> Tuple[str, ...]:
        return tuple(self._pairs)

    @property
    def closers(self) -> Tuple[str, ...]:
        return tuple(self._by_closer)

    def is_opener(self, char: str) -> bool:
        return char in self._pairs

    def is_closer(self, char: str) -> bool:
        return char in self._by_closer

    def is_symmetric(self, char: str) -> bool:
        return self._pairs.get(char) == char

    def closer_for(self, opener: str) -> Optional[str]:
        return self._pairs.get(opener)

    def opener_for(self, closer: str) -> Optional[str]:
        return self._by_closer.get(closer)

    def __iter__(self) -> Iterator[Tuple[str, str]]:
        return iter(self._pairs.items())

    def __len__(self) -> int:
        return len(self._pairs)

    def __contains__(self, char: object) -> bool:
        return char in self._pairs or char in self._by_closer

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DelimiterTable):
            return NotImplemented
        return list(self) == list(other)

    def __hash__(self) -> int:
        return hash(tuple(self))

    def __repr__(self) -> str:
        body = ", ".join(f"{o}{c}" for o, c in self)
        return f"DelimiterTable({body})"


__all__ = ["BRACKETS", "DEFAULT_MARKER", "DelimiterTable"]
