"""Session service implementing the focus/blur/key capability set."""

from __future__ import annotations

from typing import Hashable, Iterable, Optional, Protocol

from pair_engine.actions import KeyRequest
from pair_engine.engine import PairEngine, default_engine
from pair_engine.keymaps import (
    JUMP_BINDING,
    Binding,
    KeymapRegistry,
    KeymapResolver,
    KeyStroke,
    load_default_keymaps,
)
from pair_engine.runtime import telemetry
from pair_engine.runtime.settings import EngineSettings, load_settings
from pair_engine.text import EditOutcome, EditResult, NoOp

from .bus import SessionBus
from .state import SessionState, TextField


class FieldHost(Protocol):
    """What a host surface calls into as the user works in a field."""

    def on_focus(self, field: TextField, style: object | None = None) -> bool:
        ...

    def on_blur(self, field: TextField) -> Optional[object]:
        ...

    def on_key(
        self, field: TextField, key: str, modifiers: Iterable[str] = ()
    ) -> EditOutcome:
        ...


class PairSession:
    """Routes key presses from focused fields through keymaps to the engine.

    The session owns the enable flag, which field has focus and each field's
    pre-focus style. It never touches widgets; hosts apply the returned
    ``EditResult`` and subscribe to ``bus`` for ``session.toggled``,
    ``field.focus``, ``field.blur``, ``edit.applied`` and ``edit.deferred``.
    """

    def __init__(
        self,
        engine: Optional[PairEngine] = None,
        *,
        settings: Optional[EngineSettings] = None,
        keymap_registry: Optional[KeymapRegistry] = None,
        keymap_resolver: Optional[KeymapResolver] = None,
        bus: Optional[SessionBus] = None,
        load_defaults: bool = True,
    ) -> None:
        settings = settings or load_settings()
        self.engine = engine or default_engine(settings)
        self.bus = bus or SessionBus()
        self.state = SessionState(enabled=settings.start_enabled)
        self.keymap_registry = keymap_registry or KeymapRegistry(
            logger_name="pair_engine.keymaps"
        )
        if load_defaults and keymap_registry is None:
            load_default_keymaps(self.keymap_registry, self.engine.table)
            self.rebind(JUMP_BINDING, settings.jump_key)
        self.keymap_resolver = keymap_resolver or KeymapResolver(
            self.keymap_registry, logger_name="pair_engine.keymaps"
        )

    @property
    def enabled(self) -> bool:
        return self.state.enabled

    @property
    def focused(self) -> Optional[Hashable]:
        return self.state.focused

    def enable(self) -> None:
        self._set_enabled(True)

    def disable(self) -> None:
        self._set_enabled(False)

    def toggle(self) -> bool:
        self._set_enabled(not self.state.enabled)
        return self.state.enabled

    def _set_enabled(self, value: bool) -> None:
        if self.state.enabled is value:
            return
        self.state.enabled = value
        telemetry.record_event("session.toggled", data={"enabled": value})
        self.bus.emit("session.toggled", value)

    def on_focus(self, field: TextField, style: object | None = None) -> bool:
        """Track ``field`` as focused; True when the host should restyle it."""

        if not field.editable:
            return False
        self.state.focused = field
        self.bus.emit("field.focus", field)
        if not self.state.enabled:
            return False
        if style is not None:
            self.state.remember_style(field, style)
        return True

    def on_blur(self, field: TextField) -> Optional[object]:
        """Forget focus and hand back the style saved on focus, if any."""

        if self.state.focused is field:
            self.state.focused = None
        self.bus.emit("field.blur", field)
        return self.state.forget_style(field)

    def rebind(self, binding_id: str, key: str) -> Binding:
        """Move a binding to ``key`` (``"ctrl+j"`` style); a no-op when already there."""

        stroke = KeyStroke.parse(key)
        current = self.keymap_registry.binding(binding_id)
        if current.stroke == stroke:
            return current
        moved = self.keymap_registry.rebind(binding_id, stroke)
        telemetry.record_event(
            "keymap.rebound", data={"binding_id": binding_id, "token": stroke.token}
        )
        return moved

    def remember_style(self, field: TextField, style: object) -> None:
        self.state.remember_style(field, style)

    def forget_style(self, field: TextField) -> Optional[object]:
        return self.state.forget_style(field)

    def on_key(
        self, field: TextField, key: str, modifiers: Iterable[str] = ()
    ) -> EditOutcome:
        if not self.state.enabled:
            return NoOp("disabled")
        if not field.editable:
            return NoOp("not_editable")

        stroke = KeyStroke(key, tuple(modifiers))
        snapshot = field.snapshot()
        flags = {"selection": snapshot.has_selection, "enabled": True}
        with telemetry.span(
            "session::key",
            component="session",
            metadata={"key": stroke.token},
        ) as handle:
            resolution = self.keymap_resolver.resolve(stroke, context=flags)
            if resolution.match is None:
                outcome: EditOutcome = NoOp("unbound")
            else:
                request = KeyRequest(
                    text=snapshot.text,
                    selection_start=snapshot.selection_start,
                    selection_end=snapshot.selection_end,
                    key=stroke.key,
                )
                produced = resolution.match.action(self.engine, request)
                if not isinstance(produced, (EditResult, NoOp)):
                    raise TypeError(
                        f"Action '{resolution.match.action.id}' returned {produced!r}"
                    )
                outcome = produced
            handle.add_metadata("consumed", outcome.consumed)

        if isinstance(outcome, EditResult):
            self.bus.emit("edit.applied", {"field": field, "result": outcome})
        else:
            self.bus.emit("edit.deferred", {"field": field, "reason": outcome.reason})
        return outcome


__all__ = ["FieldHost", "PairSession"]
