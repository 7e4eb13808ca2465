"""Build a live node tree plus its value snapshot in one walk."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field

from .source import NodeAccessError, NodeSource
from .types import LiveNode, NodeSnapshot

logger = logging.getLogger(__name__)


def resolve_root(source: NodeSource) -> object | None:
    """Return the source's root handle, or ``None`` when none is available."""
    try:
        return source.root()
    except NodeAccessError:
        logger.debug("root handle vanished while resolving", exc_info=True)
        return None


@dataclass
class _BuildFrame:
    handle: object
    child_count: int
    index: int = 0
    next_child: int = 0
    children: list[LiveNode] = field(default_factory=list)


def _finish_node(source: NodeSource, frame: _BuildFrame) -> LiveNode:
    handle = frame.handle
    children = tuple(frame.children)
    snapshot = NodeSnapshot(
        class_name=source.class_name(handle) or "",
        text=source.text(handle),
        content_description=source.content_description(handle),
        resource_id=source.resource_id(handle),
        clickable=bool(source.is_clickable(handle)),
        long_clickable=bool(source.is_long_clickable(handle)),
        editable=bool(source.is_editable(handle)),
        scrollable=bool(source.is_scrollable(handle)),
        children=tuple(child.snapshot for child in children),
    )
    return LiveNode(snapshot=snapshot, handle=handle, children=children)


def build_live_tree(source: NodeSource, handle: object) -> LiveNode:
    """Mirror ``handle`` and its reachable children in one walk.

    A child that cannot be read is skipped on its own, together with its
    subtree; its siblings and the rest of the walk continue. Snapshots are
    assembled bottom-up from the children that were actually built. The walk
    keeps an explicit stack, so depth is not bounded by the recursion limit.
    ``NodeAccessError`` raised while reading ``handle`` itself propagates to
    the caller.
    """
    stack = [_BuildFrame(handle=handle, child_count=source.child_count(handle))]
    while True:
        frame = stack[-1]
        if frame.next_child < frame.child_count:
            index = frame.next_child
            frame.next_child += 1
            try:
                child_handle = source.child(frame.handle, index)
                if child_handle is None:
                    continue
                child_frame = _BuildFrame(
                    handle=child_handle,
                    child_count=source.child_count(child_handle),
                    index=index,
                )
            except NodeAccessError:
                logger.debug("skipping child %d: node invalidated mid-walk", index)
                continue
            stack.append(child_frame)
            continue

        stack.pop()
        try:
            node = _finish_node(source, frame)
        except NodeAccessError:
            if not stack:
                raise
            logger.debug("skipping child %d: node invalidated mid-walk", frame.index)
            continue
        if not stack:
            return node
        stack[-1].children.append(node)


def iter_post_order(root: LiveNode) -> Iterator[tuple[LiveNode, LiveNode | None]]:
    """Yield ``(node, parent)`` pairs with children before parents.

    Iterative so deep hierarchies do not hit the recursion limit; siblings are
    yielded in document order.
    """
    stack: list[tuple[LiveNode, LiveNode | None, bool]] = [(root, None, False)]
    while stack:
        node, parent, expanded = stack.pop()
        if expanded:
            yield node, parent
            continue
        stack.append((node, parent, True))
        for child in reversed(node.children):
            stack.append((child, node, False))


__all__ = [
    "build_live_tree",
    "iter_post_order",
    "resolve_root",
]
