"""Minimal event bus used by sessions to notify their hosts."""

from __future__ import annotations

from typing import Callable, Dict

Listener = Callable[[object], None]


class SessionBus:
    """Synchronous publish/subscribe keyed by event name."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Listener]] = {}

    def subscribe(self, event: str, callback: Listener) -> Callable[[], None]:
        """Register ``callback``; the returned function removes it again."""

        listeners = self._subscribers.setdefault(event, [])
        listeners.append(callback)

        def unsubscribe() -> None:
            if callback in listeners:
                listeners.remove(callback)

        return unsubscribe

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in list(self._subscribers.get(event, ())):
            callback(payload)


__all__ = ["SessionBus", "Listener"]
