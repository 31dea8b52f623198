"""Host-side session state and the field capability interface."""

from .bus import SessionBus
from .host import FieldHost, PairSession
from .state import FieldSnapshot, SessionState, TextField

__all__ = [
    "FieldHost",
    "FieldSnapshot",
    "PairSession",
    "SessionBus",
    "SessionState",
    "TextField",
]
