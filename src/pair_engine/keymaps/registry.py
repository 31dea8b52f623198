"""Registry of pairing actions and the key bindings that trigger them."""

from __future__ import annotations

from typing import Dict, Iterator, Optional

from pair_engine.runtime.telemetry import span

from .models import ActionRef, Binding, KeyStroke


class KeymapConflictError(RuntimeError):
    """Raised when a binding would take a slot another binding already holds."""

    def __init__(self, binding: Binding, conflicts: tuple[Binding, ...]):
        ids = ", ".join(existing.id for existing in conflicts)
        super().__init__(f"Binding '{binding.id}' ({binding.token}) collides with {ids}")
        self.binding = binding
        self.conflicts = conflicts


def _precedence(binding: Binding) -> tuple[int, str]:
    return -binding.priority, binding.id


class KeymapRegistry:
    """Actions by id and bindings grouped by stroke token.

    Two bindings collide only when they share a stroke and the exact same
    ``when`` clauses. Narrower or disjoint conditions coexist and the
    resolver tries them in priority order. Every change bumps ``revision``.
    """

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._actions: Dict[str, ActionRef] = {}
        self._bindings: Dict[str, Binding] = {}
        self._by_token: Optional[Dict[str, tuple[Binding, ...]]] = None
        self._logger_name = logger_name
        self._revision = 0

    def __iter__(self) -> Iterator[Binding]:
        return iter(tuple(self._bindings.values()))

    def __contains__(self, binding_id: object) -> bool:
        return binding_id in self._bindings

    def revision(self) -> int:
        return self._revision

    def action(self, action_id: str) -> ActionRef:
        if action_id not in self._actions:
            raise KeyError(f"Action '{action_id}' is not registered")
        return self._actions[action_id]

    def binding(self, binding_id: str) -> Binding:
        if binding_id not in self._bindings:
            raise KeyError(f"Binding '{binding_id}' is not registered")
        return self._bindings[binding_id]

    def add_action(self, action: ActionRef, *, replace: bool = False) -> ActionRef:
        if action.id in self._actions and not replace:
            raise ValueError(f"Action '{action.id}' already registered")
        self._actions[action.id] = action
        return action

    def bind(self, binding: Binding, *, replace: bool = False) -> Binding:
        """Add ``binding``; ``replace`` evicts whatever holds its id or slot."""

        with span(
            "keymaps::bind",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"binding_id": binding.id, "token": binding.token},
        ) as handle:
            self.action(binding.action_id)
            if binding.id in self._bindings and not replace:
                raise ValueError(f"Binding id '{binding.id}' already registered")
            conflicts = self.collisions(binding)
            if conflicts and not replace:
                handle.add_metadata("conflicts", [c.id for c in conflicts])
                raise KeymapConflictError(binding, conflicts)
            for evicted in conflicts:
                del self._bindings[evicted.id]
            self._store(binding)
            return binding

    def rebind(self, binding_id: str, stroke: KeyStroke) -> Binding:
        """Move an existing binding to ``stroke``, keeping its action and clauses."""

        with span(
            "keymaps::rebind",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"binding_id": binding_id, "token": stroke.token},
        ) as handle:
            moved = self.binding(binding_id).moved_to(stroke)
            conflicts = self.collisions(moved)
            if conflicts:
                handle.add_metadata("conflicts", [c.id for c in conflicts])
                raise KeymapConflictError(moved, conflicts)
            self._store(moved)
            return moved

    def collisions(self, binding: Binding) -> tuple[Binding, ...]:
        return tuple(
            existing
            for existing in self._bindings.values()
            if existing.id != binding.id and existing.slot == binding.slot
        )

    def bindings_for(self, token: str) -> tuple[Binding, ...]:
        """Bindings on ``token``, highest priority first, ties by id."""

        if self._by_token is None:
            grouped: Dict[str, list[Binding]] = {}
            for binding in self._bindings.values():
                grouped.setdefault(binding.token, []).append(binding)
            self._by_token = {
                key: tuple(sorted(group, key=_precedence))
                for key, group in grouped.items()
            }
        return self._by_token.get(token, ())

    def _store(self, binding: Binding) -> None:
        self._bindings[binding.id] = binding
        self._by_token = None
        self._revision += 1


__all__ = ["KeymapConflictError", "KeymapRegistry"]
