"""Pairing verbs bound to keys by the default keymaps."""

from .pairing import (
    KeyRequest,
    insert_pair,
    jump_out,
    skip_closing,
    smart_backspace,
    type_symmetric,
)

__all__ = [
    "KeyRequest",
    "insert_pair",
    "skip_closing",
    "type_symmetric",
    "smart_backspace",
    "jump_out",
]
