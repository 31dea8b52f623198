"""Textual-facing controller wiring widget events into a PairSession."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional

from pair_engine.session import PairSession, TextField
from pair_engine.text import EditOutcome, EditResult


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


def _no_style(_field: TextField) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks the controller uses to touch real widgets."""

    apply_edit: Callable[[TextField, str, int, int], None]
    select: Callable[[TextField, int, int], None]
    schedule: Callable[[Callable[[], None]], None]
    capture_style: Callable[[TextField], object | None] = _no_style
    apply_active_style: Callable[[TextField], None] = _noop
    restore_style: Callable[[TextField, object], None] = _noop
    update_status: Callable[[str], None] = _noop
    log: Callable[[str], None] = _noop


def status_label(enabled: bool) -> str:
    return "pairing: on" if enabled else "pairing: off"


def normalize_key(key: str, character: Optional[str]) -> str:
    """Printable characters win over Textual key names (``left_parenthesis``)."""

    if character and len(character) == 1 and character.isprintable():
        return character
    return key.upper()


class TextualPairAdapter:
    """Applies session outcomes to widgets and owns the highlight collapse."""

    def __init__(self, session: PairSession, hooks: TextualUIHooks) -> None:
        self.session = session
        self.hooks = hooks
        self.session.bus.subscribe("session.toggled", self._on_toggled)
        self.hooks.update_status(status_label(session.enabled))

    def handle_focus(self, field: TextField) -> None:
        style = self.hooks.capture_style(field) if field.editable else None
        if self.session.on_focus(field, style):
            self.hooks.apply_active_style(field)
        self._log_state("focus ->", field=field)

    def handle_blur(self, field: TextField) -> None:
        saved = self.session.on_blur(field)
        if saved is not None:
            self.hooks.restore_style(field, saved)
        self._log_state("blur ->", field=field)

    def handle_key(
        self,
        field: TextField,
        key: str,
        *,
        character: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> EditOutcome:
        """Run one key press; a consumed outcome means suppress the default."""

        normalized = normalize_key(key, character)
        mods = tuple(str(mod).lower() for mod in modifiers)
        self._log_state("key ->", key=normalized, mods=mods or None)
        outcome = self.session.on_key(field, normalized, mods)
        if isinstance(outcome, EditResult):
            self._apply(field, outcome)
        self._log_state(
            "result <-",
            consumed=outcome.consumed,
            action=getattr(outcome, "action", None),
            reason=getattr(outcome, "reason", None),
        )
        return outcome

    def toggle(self) -> bool:
        return self.session.toggle()

    def _apply(self, field: TextField, result: EditResult) -> None:
        self.hooks.apply_edit(field, result.text, result.cursor_start, result.cursor_end)
        if result.highlight is None:
            return
        start, end = result.highlight
        self.hooks.select(field, start, end)
        self.hooks.schedule(lambda: self._collapse(field, result))

    def _collapse(self, field: TextField, result: EditResult) -> None:
        if self.session.focused is not field or result.highlight is None:
            return
        current = field.snapshot()
        still_highlighted = (
            current.text == result.text
            and (current.selection_start, current.selection_end) == result.highlight
        )
        if not still_highlighted:
            return
        self.hooks.select(field, result.cursor_start, result.cursor_end)

    def _on_toggled(self, payload: object | None) -> None:
        enabled = bool(payload)
        field = self.session.focused
        if field is not None:
            if enabled:
                style = self.hooks.capture_style(field)
                if style is not None:
                    self.session.remember_style(field, style)
                self.hooks.apply_active_style(field)
            else:
                saved = self.session.forget_style(field)
                if saved is not None:
                    self.hooks.restore_style(field, saved)
        self.hooks.update_status(status_label(enabled))
        self._log_state("toggle ->", enabled=enabled)

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        return {
            "enabled": self.session.enabled,
            "focused": self.session.focused is not None,
            "trailing_space": self.session.engine.trailing_space,
        }


__all__ = ["TextualPairAdapter", "TextualUIHooks", "normalize_key", "status_label"]
