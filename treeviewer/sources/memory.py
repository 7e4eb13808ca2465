"""In-process node source over plain Python (or JSON-loaded) trees."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

from ..node_model import NodeAccessError, NodeAction, SourceError

logger = logging.getLogger(__name__)


class InvalidTreeError(SourceError):
    """Raised when a JSON tree description cannot be turned into nodes."""


@dataclass(eq=False)
class MemoryNode:
    """Mutable node handle owned by a ``MemoryNodeSource``.

    ``stale`` simulates a node that the host invalidated concurrently: reading
    or invoking it raises ``NodeAccessError``.
    """

    class_name: str = ""
    text: str | None = None
    content_description: str | None = None
    resource_id: str | None = None
    package_name: str | None = None
    clickable: bool = False
    long_clickable: bool = False
    editable: bool = False
    scrollable: bool = False
    children: list["MemoryNode"] = field(default_factory=list)
    stale: bool = False
    invocations: list[NodeAction] = field(default_factory=list)

    @classmethod
    def _from_fields(cls, data: object) -> tuple["MemoryNode", list]:
        if not isinstance(data, dict):
            raise InvalidTreeError(f"node must be an object, got {type(data).__name__}")
        raw_children = data.get("children", [])
        if not isinstance(raw_children, list):
            raise InvalidTreeError("'children' must be a list")

        def optional_str(key: str) -> str | None:
            value = data.get(key)
            return value if isinstance(value, str) else None

        node = cls(
            class_name=optional_str("class") or "",
            text=optional_str("text"),
            content_description=optional_str("content_desc"),
            resource_id=optional_str("resource_id"),
            package_name=optional_str("package"),
            clickable=data.get("clickable") is True,
            long_clickable=data.get("long_clickable") is True,
            editable=data.get("editable") is True,
            scrollable=data.get("scrollable") is True,
        )
        return node, raw_children

    @classmethod
    def from_dict(cls, data: object) -> "MemoryNode":
        """Build a node tree from a JSON-style mapping, top-down without recursion."""
        root, raw_children = cls._from_fields(data)
        pending = [(root, raw_children)]
        while pending:
            parent, raw_children = pending.pop()
            for raw_child in raw_children:
                child, grandchildren = cls._from_fields(raw_child)
                parent.children.append(child)
                pending.append((child, grandchildren))
        return root


class MemoryNodeSource:
    """``NodeSource`` reading ``MemoryNode`` handles directly."""

    def __init__(self, root: MemoryNode | None = None) -> None:
        self.root_node = root

    @classmethod
    def from_json_file(cls, path: Path) -> "MemoryNodeSource":
        source = cls()
        source.load_file(path)
        return source

    def load_file(self, path: Path) -> None:
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError, RecursionError) as exc:
            raise InvalidTreeError(f"cannot read tree from {path}: {exc}") from exc
        self.root_node = MemoryNode.from_dict(data) if data is not None else None

    def _node(self, handle: object) -> MemoryNode:
        if not isinstance(handle, MemoryNode) or handle.stale:
            raise NodeAccessError("node is no longer available")
        return handle

    def root(self) -> object | None:
        if self.root_node is None or self.root_node.stale:
            return None
        return self.root_node

    def child_count(self, handle: object) -> int:
        return len(self._node(handle).children)

    def child(self, handle: object, index: int) -> object | None:
        children = self._node(handle).children
        if not 0 <= index < len(children):
            return None
        child = children[index]
        if child.stale:
            raise NodeAccessError(f"child {index} was invalidated")
        return child

    def class_name(self, handle: object) -> str | None:
        return self._node(handle).class_name

    def text(self, handle: object) -> str | None:
        return self._node(handle).text

    def content_description(self, handle: object) -> str | None:
        return self._node(handle).content_description

    def resource_id(self, handle: object) -> str | None:
        return self._node(handle).resource_id

    def package_name(self, handle: object) -> str | None:
        return self._node(handle).package_name

    def is_clickable(self, handle: object) -> bool:
        return self._node(handle).clickable

    def is_long_clickable(self, handle: object) -> bool:
        return self._node(handle).long_clickable

    def is_editable(self, handle: object) -> bool:
        return self._node(handle).editable

    def is_scrollable(self, handle: object) -> bool:
        return self._node(handle).scrollable

    def invoke(self, handle: object, action: NodeAction) -> None:
        node = self._node(handle)
        logger.debug("memory node %s received %s", node.class_name, action.value)
        node.invocations.append(action)


__all__ = [
    "InvalidTreeError",
    "MemoryNode",
    "MemoryNodeSource",
]
