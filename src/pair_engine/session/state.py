"""Field snapshots and the host-owned state a session carries."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Hashable, Optional, Protocol, runtime_checkable


@dataclass(frozen=True, slots=True)
class FieldSnapshot:
    """Text and selection read from a live widget."""

    text: str
    selection_start: int
    selection_end: int

    @property
    def has_selection(self) -> bool:
        return self.selection_start != self.selection_end


@runtime_checkable
class TextField(Protocol):
    """Opaque, hashable handle for one editable widget."""

    @property
    def editable(self) -> bool:
        ...

    def snapshot(self) -> FieldSnapshot:
        ...


@dataclass(slots=True)
class SessionState:
    """Enabled flag, focused field and saved styles keyed by field handle."""

    enabled: bool = True
    focused: Optional[Hashable] = None
    styles: Dict[Hashable, object] = field(default_factory=dict)

    def remember_style(self, handle: Hashable, style: object) -> None:
        # first capture wins
        self.styles.setdefault(handle, style)

    def forget_style(self, handle: Hashable) -> Optional[object]:
        return self.styles.pop(handle, None)


__all__ = ["FieldSnapshot", "TextField", "SessionState"]
