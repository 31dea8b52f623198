"""Built-in bindings derived from a delimiter table."""

from __future__ import annotations

from typing import Iterable, Iterator, Optional, Sequence

from pair_engine.actions import pairing as pairing_actions
from pair_engine.text import DelimiterTable

from .models import ActionRef, Binding, KeyStroke
from .registry import KeymapRegistry

NO_SELECTION = "!selection"
JUMP_BINDING = "jump"
BACKSPACE_BINDING = "backspace"

DEFAULT_ACTIONS: tuple[ActionRef, ...] = (
    ActionRef(
        "pairs.insert",
        pairing_actions.insert_pair,
        "Insert a pair or wrap the selection",
    ),
    ActionRef(
        "pairs.skip_closing",
        pairing_actions.skip_closing,
        "Step over an already typed closer",
    ),
    ActionRef(
        "pairs.symmetric",
        pairing_actions.type_symmetric,
        "Step over or insert a quote/marker pair",
    ),
    ActionRef(
        "pairs.smart_backspace",
        pairing_actions.smart_backspace,
        "Delete an empty pair in one keystroke",
    ),
    ActionRef(
        "pairs.jump_out",
        pairing_actions.jump_out,
        "Move past the closer of the enclosing pair",
    ),
)


def _delimiter_bindings(table: DelimiterTable) -> Iterator[Binding]:
    for opener, closer in table:
        if opener == closer:
            yield Binding(f"symmetric:{opener}", KeyStroke(opener), "pairs.symmetric")
            continue
        yield Binding(f"insert:{opener}", KeyStroke(opener), "pairs.insert")
        yield Binding(
            f"skip:{closer}",
            KeyStroke(closer),
            "pairs.skip_closing",
            when=frozenset({NO_SELECTION}),
        )


def default_bindings(table: DelimiterTable) -> tuple[Binding, ...]:
    """One binding per delimiter key, plus Backspace and the jump key (Tab)."""

    return (
        *_delimiter_bindings(table),
        Binding(
            BACKSPACE_BINDING,
            KeyStroke("BACKSPACE"),
            "pairs.smart_backspace",
            when=frozenset({NO_SELECTION}),
        ),
        Binding(
            JUMP_BINDING,
            KeyStroke("TAB"),
            "pairs.jump_out",
            when=frozenset({NO_SELECTION}),
        ),
    )


def load_default_keymaps(
    registry: KeymapRegistry,
    table: Optional[DelimiterTable] = None,
    *,
    replace: bool = False,
    extra_bindings: Iterable[Binding] | None = None,
    exclude_bindings: Sequence[str] | None = None,
) -> None:
    """Register the pairing actions and the bindings for ``table``."""

    excluded = set(exclude_bindings or ())
    for action in DEFAULT_ACTIONS:
        registry.add_action(action, replace=replace)
    bindings = default_bindings(table or DelimiterTable.default())
    for binding in (*bindings, *(extra_bindings or ())):
        if binding.id not in excluded:
            registry.bind(binding, replace=replace)


__all__ = [
    "BACKSPACE_BINDING",
    "DEFAULT_ACTIONS",
    "JUMP_BINDING",
    "NO_SELECTION",
    "default_bindings",
    "load_default_keymaps",
]
