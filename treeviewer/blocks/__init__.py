"""Interactive-region (block) derivation from live node trees."""

from __future__ import annotations

from .consolidate import consolidate_blocks
from .text import collect_text, is_text_bearing

__all__ = [
    "collect_text",
    "consolidate_blocks",
    "is_text_bearing",
]
