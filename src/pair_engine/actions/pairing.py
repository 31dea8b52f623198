"""Action handlers that translate a key request into an engine call."""

from __future__ import annotations

from dataclasses import dataclass

from pair_engine.engine import PairEngine
from pair_engine.text import EditOutcome, NoOp


@dataclass(frozen=True, slots=True)
class KeyRequest:
    """Field text and selection at the moment ``key`` was pressed."""

    text: str
    selection_start: int
    selection_end: int
    key: str

    @property
    def has_selection(self) -> bool:
        return self.selection_start != self.selection_end


def insert_pair(engine: PairEngine, request: KeyRequest) -> EditOutcome:
    return engine.insert_pair(
        request.text, request.selection_start, request.selection_end, request.key
    )


def skip_closing(engine: PairEngine, request: KeyRequest) -> EditOutcome:
    if request.has_selection:
        return NoOp("selection")
    return engine.maybe_skip_closing(request.text, request.selection_start, request.key)


def type_symmetric(engine: PairEngine, request: KeyRequest) -> EditOutcome:
    """Quotes and markers close themselves: step over first, else pair up."""

    if not request.has_selection:
        skipped = engine.maybe_skip_closing(
            request.text, request.selection_start, request.key
        )
        if skipped.consumed:
            return skipped
    return insert_pair(engine, request)


def smart_backspace(engine: PairEngine, request: KeyRequest) -> EditOutcome:
    if request.has_selection:
        return NoOp("selection")
    return engine.maybe_smart_backspace(request.text, request.selection_start)


def jump_out(engine: PairEngine, request: KeyRequest) -> EditOutcome:
    if request.has_selection:
        return NoOp("selection")
    return engine.jump_out_of_scope(request.text, request.selection_start)


__all__ = [
    "KeyRequest",
    "insert_pair",
    "skip_closing",
    "type_symmetric",
    "smart_backspace",
    "jump_out",
]
