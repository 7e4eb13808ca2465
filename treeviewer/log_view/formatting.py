"""Indented box-drawing rendering of live trees into log lines."""

from __future__ import annotations

from datetime import datetime

from ..node_model import LiveNode, NodeSnapshot

TEXT_MAX_CHARS = 50
DESCRIPTION_MAX_CHARS = 40
ROOT_CHILD_PREFIX = "   "

BRANCH = "├── "
LAST_BRANCH = "└── "
PIPE_PREFIX = "│   "
BLANK_PREFIX = "    "

LEGEND = "[CLICK]=clickable  [EDIT]=editable  [SCROLL]=scrollable  [L-CLICK]=long-clickable"


def timestamp(now: datetime | None = None) -> str:
    """Format a wall-clock time as ``HH:MM:SS.mmm``."""
    moment = now or datetime.now()
    return moment.strftime("%H:%M:%S.") + f"{moment.microsecond // 1000:03d}"


def _truncate(value: str, limit: int) -> str:
    if len(value) <= limit:
        return value
    return value[:limit] + "..."


def flag_tags(snapshot: NodeSnapshot) -> list[str]:
    tags: list[str] = []
    if snapshot.clickable:
        tags.append("[CLICK]")
    if snapshot.editable:
        tags.append("[EDIT]")
    if snapshot.scrollable:
        tags.append("[SCROLL]")
    if snapshot.long_clickable:
        tags.append("[L-CLICK]")
    return tags


def format_node_label(snapshot: NodeSnapshot) -> str:
    """Render one node's class, text, description, flags and id suffix."""
    parts = [snapshot.short_class_name or "?"]
    if snapshot.text is not None:
        parts.append(f'"{_truncate(snapshot.text, TEXT_MAX_CHARS)}"')
    if snapshot.content_description is not None:
        parts.append(f'cd="{_truncate(snapshot.content_description, DESCRIPTION_MAX_CHARS)}"')
    tags = flag_tags(snapshot)
    if tags:
        parts.append(" ".join(tags))
    suffix = snapshot.resource_id_suffix
    if suffix is not None:
        parts.append(f"#{suffix}")
    return " ".join(parts)


def format_tree_lines(node: LiveNode, prefix: str = ROOT_CHILD_PREFIX) -> list[str]:
    """Render ``node``'s descendants (not ``node`` itself) as tree lines.

    The last child at each level uses the closing connector and a blank
    continuation prefix; earlier siblings keep the vertical pipe.
    """
    lines: list[str] = []
    stack: list[tuple[LiveNode, str, bool]] = []

    def push_children(parent: LiveNode, child_prefix: str) -> None:
        count = len(parent.children)
        for index in range(count - 1, -1, -1):
            stack.append((parent.children[index], child_prefix, index == count - 1))

    push_children(node, prefix)
    while stack:
        child, child_prefix, last = stack.pop()
        connector = LAST_BRANCH if last else BRANCH
        lines.append(f"{child_prefix}{connector}{format_node_label(child.snapshot)}")
        if child.children:
            push_children(child, child_prefix + (BLANK_PREFIX if last else PIPE_PREFIX))
    return lines


def format_refresh_lines(tree: LiveNode, package_name: str | None, now: datetime | None = None) -> list[str]:
    """Build the full log entry appended for one changed snapshot."""
    lines = [
        f"--- {timestamp(now)} ---",
        f"── {tree.snapshot.short_class_name} [{package_name or 'unknown'}]",
    ]
    lines.extend(format_tree_lines(tree))
    return lines


def no_root_line(now: datetime | None = None) -> str:
    return f"--- {timestamp(now)} --- (no root window)"


def banner_lines(version: str, now: datetime | None = None) -> list[str]:
    return [
        f"=== Tree Viewer {version} ===",
        f"--- Service connected {timestamp(now)} ---",
    ]


__all__ = [
    "DESCRIPTION_MAX_CHARS",
    "LEGEND",
    "TEXT_MAX_CHARS",
    "banner_lines",
    "flag_tags",
    "format_node_label",
    "format_refresh_lines",
    "format_tree_lines",
    "no_root_line",
    "timestamp",
]
