"""Key strokes, bindings and the registry/resolver pair."""

from .models import ActionRef, Binding, KeyStroke, WhenClause, normalize_key
from .registry import KeymapConflictError, KeymapRegistry
from .resolver import KeymapResolver, ResolutionMatch, ResolutionResult
from .defaults import (
    DEFAULT_ACTIONS,
    JUMP_BINDING,
    default_bindings,
    load_default_keymaps,
)

__all__ = [
    "ActionRef",
    "Binding",
    "KeyStroke",
    "WhenClause",
    "normalize_key",
    "KeymapRegistry",
    "KeymapConflictError",
    "KeymapResolver",
    "ResolutionResult",
    "ResolutionMatch",
    "DEFAULT_ACTIONS",
    "JUMP_BINDING",
    "default_bindings",
    "load_default_keymaps",
]
