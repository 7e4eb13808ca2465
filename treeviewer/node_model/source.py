"""Node-source protocol consumed by the tree builder and block actions."""

from __future__ import annotations

from typing import Protocol

from .types import NodeAction


class SourceError(Exception):
    """Raised by source adapters when the backing host cannot be read at all."""


class NodeAccessError(SourceError):
    """A single node could not be read because it went away mid-walk."""


class NodeSource(Protocol):
    """Read-only view over an externally owned node tree.

    Handles are opaque to callers. ``root`` returns ``None`` when no tree is
    currently available and ``child`` returns ``None`` (or raises
    ``NodeAccessError``) when a child vanished between calls.
    """

    def root(self) -> object | None: ...

    def child_count(self, handle: object) -> int: ...

    def child(self, handle: object, index: int) -> object | None: ...

    def class_name(self, handle: object) -> str | None: ...

    def text(self, handle: object) -> str | None: ...

    def content_description(self, handle: object) -> str | None: ...

    def resource_id(self, handle: object) -> str | None: ...

    def package_name(self, handle: object) -> str | None: ...

    def is_clickable(self, handle: object) -> bool: ...

    def is_long_clickable(self, handle: object) -> bool: ...

    def is_editable(self, handle: object) -> bool: ...

    def is_scrollable(self, handle: object) -> bool: ...

    def invoke(self, handle: object, action: NodeAction) -> None: ...


__all__ = [
    "NodeAccessError",
    "NodeSource",
    "SourceError",
]
