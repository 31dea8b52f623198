"""Stateless auto-pairing operations."""

from __future__ import annotations

from typing import Optional

from pair_engine.runtime.settings import EngineSettings, load_settings
from pair_engine.text import (
    DelimiterTable,
    EditOutcome,
    EditResult,
    NoOp,
    ensure_caret,
    ensure_closer,
    ensure_cursor,
    ensure_opener,
)

from .scope import (
    find_enclosing_opener,
    find_inner_symmetric_closer,
    find_matching_closer,
    find_symmetric_closer,
)

SPACE = " "
LINE_BREAKS = ("\n", "\r")


class PairEngine:
    """Bracket/quote pairing over ``(text, cursor, key)`` triples.

    The engine keeps only its configuration: the delimiter table and
    whether a single space follows every inserted pair. With
    ``trailing_space`` on, backspace removes that space along with an empty
    pair and ``jump_out_of_scope`` lands after it.
    """

    __slots__ = ("table", "trailing_space")

    def __init__(
        self,
        table: Optional[DelimiterTable] = None,
        *,
        trailing_space: bool = True,
    ) -> None:
        self.table = table or DelimiterTable.default()
        self.trailing_space = trailing_space

    @classmethod
    def from_settings(cls, settings: Optional[EngineSettings] = None) -> "PairEngine":
        settings = settings or load_settings()
        return cls(
            DelimiterTable.default(settings.marker),
            trailing_space=settings.trailing_space,
        )

    def __repr__(self) -> str:
        return f"PairEngine({self.table!r}, trailing_space={self.trailing_space})"

    def insert_pair(
        self, text: str, cursor_start: int, cursor_end: int, key: str
    ) -> EditResult:
        """Insert ``key`` and its closer, wrapping the selection if any."""

        ensure_cursor(text, cursor_start, cursor_end)
        closer = ensure_opener(self.table, key)
        tail = SPACE if self.trailing_space else ""
        selected = text[cursor_start:cursor_end]

        new_text = (
            text[:cursor_start] + key + selected + closer + tail + text[cursor_end:]
        )
        span_end = cursor_start + len(selected) + 2
        caret = span_end if selected else cursor_start + 1
        return EditResult(
            text=new_text,
            cursor_start=caret,
            cursor_end=caret,
            highlight=(cursor_start, span_end),
            action="insert_pair",
        )

    def maybe_skip_closing(self, text: str, cursor_pos: int, key: str) -> EditOutcome:
        """Step over ``key`` when it is already the next character."""

        ensure_caret(text, cursor_pos)
        ensure_closer(self.table, key)
        if text[cursor_pos : cursor_pos + 1] != key:
            return NoOp("no_closer")
        return EditResult(
            text=text,
            cursor_start=cursor_pos + 1,
            cursor_end=cursor_pos + 1,
            action="skip_closing",
        )

    def maybe_smart_backspace(self, text: str, cursor_pos: int) -> EditOutcome:
        """Delete an empty pair around the caret in one step."""

        ensure_caret(text, cursor_pos)
        if cursor_pos == 0:
            return NoOp("no_pair")
        closer = self.table.closer_for(text[cursor_pos - 1])
        if closer is None or text[cursor_pos : cursor_pos + 1] != closer:
            return NoOp("no_pair")

        end = cursor_pos + 1
        if self.trailing_space and text[end : end + 1] == SPACE:
            end += 1
        return EditResult(
            text=text[: cursor_pos - 1] + text[end:],
            cursor_start=cursor_pos - 1,
            cursor_end=cursor_pos - 1,
            action="smart_backspace",
        )

    def jump_out_of_scope(self, text: str, cursor_pos: int) -> EditOutcome:
        """Move the caret past the closer of the innermost enclosing pair."""

        ensure_caret(text, cursor_pos)
        closer_index: Optional[int] = None
        opener_index = find_enclosing_opener(self.table, text, cursor_pos)
        if opener_index is not None:
            closer_index = find_matching_closer(
                self.table, text, opener_index, cursor_pos
            )
        if opener_index is not None and closer_index is not None:
            # a quote or marker opened inside the brackets closes first
            inner = find_inner_symmetric_closer(
                self.table, text, opener_index + 1, cursor_pos, closer_index
            )
            closer_index = closer_index if inner is None else inner
        if closer_index is None:
            closer_index = find_symmetric_closer(self.table, text, cursor_pos)
        if closer_index is None:
            return NoOp("no_scope")
        return self._land_after(text, closer_index)

    def _land_after(self, text: str, closer_index: int) -> EditResult:
        target = closer_index + 1
        if self.trailing_space:
            following = text[target : target + 1]
            if following.isspace():
                # a line break already separates the pair from what follows
                if following not in LINE_BREAKS:
                    target += 1
            elif not self.table.is_closer(following):
                # another closer right after means we are still nested
                text = text[:target] + SPACE + text[target:]
                target += 1
        return EditResult(
            text=text,
            cursor_start=target,
            cursor_end=target,
            action="jump_out_of_scope",
        )


def default_engine(settings: Optional[EngineSettings] = None) -> PairEngine:
    """Engine configured from ``settings`` or the ``PAIR_ENGINE_*`` environment."""

    return PairEngine.from_settings(settings)


__all__ = ["PairEngine", "default_engine"]
