"""Key strokes, gating conditions and the bindings that join them to actions."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Callable, Iterable, Mapping, Union

# Keys hosts report by name; everything else is a single typed character.
NAMED_KEYS = frozenset({"BACKSPACE", "TAB", "ENTER", "ESC", "DELETE"})


def normalize_key(key: str) -> str:
    """Printable characters stay as typed; named keys are upper-cased."""

    if len(key) == 1:
        return key
    upper = key.upper()
    return upper if upper in NAMED_KEYS else key


@dataclass(frozen=True, slots=True)
class KeyStroke:
    """One key press. ``token`` is the lookup key, e.g. ``"ctrl+TAB"``."""

    key: str
    modifiers: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("key cannot be empty")
        mods = {m.strip().lower() for m in self.modifiers} - {""}
        object.__setattr__(self, "key", normalize_key(self.key))
        object.__setattr__(self, "modifiers", tuple(sorted(mods)))

    @property
    def token(self) -> str:
        return "+".join((*self.modifiers, self.key))

    @classmethod
    def parse(cls, token: str) -> "KeyStroke":
        """``"ctrl+tab"`` -> ``KeyStroke("TAB", ("ctrl",))``; ``"ctrl++"`` keeps ``+``."""

        head, sep, key = token.rpartition("+")
        if not sep or len(token) == 1:
            return cls(token)
        if not key:
            head, key = head[:-1], "+"
        return cls(key, tuple(head.split("+")) if head else ())


@dataclass(frozen=True, slots=True)
class WhenClause:
    """A context flag a binding needs set (``selection``) or clear (``!selection``)."""

    flag: str
    expected: bool = True

    def __post_init__(self) -> None:
        if not self.flag:
            raise ValueError("flag cannot be empty")

    @classmethod
    def parse(cls, expression: str) -> "WhenClause":
        expr = expression.strip()
        negated = expr.startswith("!")
        return cls(expr[1:] if negated else expr, not negated)

    def holds(self, context: Mapping[str, bool]) -> bool:
        return bool(context.get(self.flag, False)) is self.expected

    def __str__(self) -> str:
        return self.flag if self.expected else f"!{self.flag}"


Condition = Union[WhenClause, str]


@dataclass(frozen=True, slots=True)
class ActionRef:
    """Named pairing handler, called as ``handler(engine, request)``."""

    id: str
    handler: Callable[..., object]
    description: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("ActionRef id cannot be empty")
        if not callable(self.handler):
            raise TypeError("handler must be callable")

    def __call__(self, *args: object) -> object:
        return self.handler(*args)


@dataclass(frozen=True, slots=True)
class Binding:
    """Routes ``stroke`` to ``action_id`` while every ``when`` clause holds.

    ``when`` is stored as a frozenset so two bindings compare their
    conditions regardless of the order they were written in.
    """

    id: str
    stroke: KeyStroke
    action_id: str
    when: frozenset[WhenClause] = frozenset()
    priority: int = 0

    def __post_init__(self) -> None:
        if not self.id or not self.action_id:
            raise ValueError("binding needs both an id and an action_id")
        if isinstance(self.stroke, str):
            object.__setattr__(self, "stroke", KeyStroke.parse(self.stroke))
        object.__setattr__(self, "when", _clauses(self.when))

    @property
    def token(self) -> str:
        return self.stroke.token

    @property
    def slot(self) -> tuple[str, frozenset[WhenClause]]:
        """Bindings sharing a slot can never be told apart by the resolver."""

        return self.token, self.when

    def allows(self, context: Mapping[str, bool]) -> bool:
        return all(clause.holds(context) for clause in self.when)

    def moved_to(self, stroke: KeyStroke) -> "Binding":
        return replace(self, stroke=stroke)


def _clauses(conditions: Iterable[Condition]) -> frozenset[WhenClause]:
    return frozenset(
        c if isinstance(c, WhenClause) else WhenClause.parse(c) for c in conditions
    )


__all__ = [
    "NAMED_KEYS",
    "normalize_key",
    "KeyStroke",
    "WhenClause",
    "Condition",
    "ActionRef",
    "Binding",
]
