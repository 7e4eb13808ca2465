"""Terminal display surface for log pages and the block grid."""

from __future__ import annotations

from .grid import GRID_COLUMNS, GRID_ROWS, MAX_GRID_BLOCKS, GridGeometry, describe_block, visible_blocks
from .screen import ScreenLayout, render_plain_report, render_screen
from .theme import DEFAULT_THEME, PLAIN_THEME, UITheme

__all__ = [
    "DEFAULT_THEME",
    "GRID_COLUMNS",
    "GRID_ROWS",
    "GridGeometry",
    "MAX_GRID_BLOCKS",
    "PLAIN_THEME",
    "ScreenLayout",
    "UITheme",
    "describe_block",
    "render_plain_report",
    "render_screen",
    "visible_blocks",
]
