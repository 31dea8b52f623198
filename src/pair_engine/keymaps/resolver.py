"""Resolve a key stroke plus context flags to a single binding."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Mapping, Optional

from pair_engine.runtime.telemetry import span

from .models import ActionRef, Binding, KeyStroke
from .registry import KeymapRegistry


@dataclass(frozen=True, slots=True)
class ResolutionMatch:
    binding: Binding
    action: ActionRef


@dataclass(frozen=True, slots=True)
class ResolutionResult:
    """``match`` carries the winning binding; ``miss`` means the host keeps the key."""

    status: Literal["match", "miss"]
    match: Optional[ResolutionMatch] = None
    token: str = ""


class KeymapResolver:
    """Picks the first binding on a token whose clauses hold for the context."""

    def __init__(
        self, registry: KeymapRegistry, *, logger_name: str | None = None
    ) -> None:
        self._registry = registry
        self._logger_name = logger_name

    def resolve(
        self,
        stroke: KeyStroke | str,
        *,
        context: Optional[Mapping[str, bool]] = None,
    ) -> ResolutionResult:
        if isinstance(stroke, str):
            stroke = KeyStroke.parse(stroke)
        token = stroke.token
        with span(
            "keymaps::resolve",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"token": token},
        ) as handle:
            winner = next(
                (b for b in self._registry.bindings_for(token) if b.allows(context or {})),
                None,
            )
            if winner is None:
                handle.add_metadata("status", "miss")
                return ResolutionResult(status="miss", token=token)
            handle.add_metadata("binding_id", winner.id)
            match = ResolutionMatch(winner, self._registry.action(winner.action_id))
            return ResolutionResult(status="match", match=match, token=token)


__all__ = [
    "KeymapResolver",
    "ResolutionResult",
    "ResolutionMatch",
]
