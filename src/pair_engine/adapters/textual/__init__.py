"""Textual adapter: controller plus the runnable demo in ``app``."""

from .controller import TextualPairAdapter, TextualUIHooks, normalize_key, status_label

__all__ = ["TextualPairAdapter", "TextualUIHooks", "normalize_key", "status_label"]
