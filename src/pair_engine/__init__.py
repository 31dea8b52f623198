"""Stateless bracket/quote auto-pairing engine for plain-text fields."""

from .engine import PairEngine
from .text import DelimiterTable, EditResult, NoOp

__all__ = [
    "PairEngine",
    "DelimiterTable",
    "EditResult",
    "NoOp",
    "actions",
    "adapters",
    "engine",
    "keymaps",
    "runtime",
    "session",
    "text",
]

__version__ = "0.1.0"
