"""Tree log rendering and the bounded, paginated line buffer."""

from __future__ import annotations

from .buffer import DEFAULT_MAX_LINES, DEFAULT_PAGE_SIZE, LogBuffer, LogPage
from .formatting import (
    LEGEND,
    banner_lines,
    format_node_label,
    format_refresh_lines,
    format_tree_lines,
    no_root_line,
    timestamp,
)

__all__ = [
    "DEFAULT_MAX_LINES",
    "DEFAULT_PAGE_SIZE",
    "LEGEND",
    "LogBuffer",
    "LogPage",
    "banner_lines",
    "format_node_label",
    "format_refresh_lines",
    "format_tree_lines",
    "no_root_line",
    "timestamp",
]
