"""Pairing engine: insert, skip, smart backspace and scope jumps."""

from .pairing import PairEngine, default_engine
from .scope import (
    find_enclosing_opener,
    find_inner_symmetric_closer,
    find_matching_closer,
    find_symmetric_closer,
)

__all__ = [
    "PairEngine",
    "default_engine",
    "find_enclosing_opener",
    "find_inner_symmetric_closer",
    "find_matching_closer",
    "find_symmetric_closer",
]
