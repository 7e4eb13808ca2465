"""Value and live datatypes for observed UI node trees."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class NodeAction(Enum):
    """The two actions a node handle can be asked to perform."""

    CLICK = "click"
    LONG_CLICK = "long_click"


@dataclass(frozen=True)
class NodeSnapshot:
    """Immutable copy of one node's attributes and children.

    Two snapshots are the same tree only when every field of every node
    matches by position. Use ``snapshot_changed`` to compare whole trees; the
    generated ``==`` recurses and is only safe for shallow ones.
    """

    class_name: str
    text: str | None = None
    content_description: str | None = None
    resource_id: str | None = None
    clickable: bool = False
    long_clickable: bool = False
    editable: bool = False
    scrollable: bool = False
    children: tuple["NodeSnapshot", ...] = ()

    @property
    def interactive(self) -> bool:
        return self.clickable or self.long_clickable

    @property
    def short_class_name(self) -> str:
        return self.class_name.rsplit(".", 1)[-1]

    @property
    def resource_id_suffix(self) -> str | None:
        if self.resource_id is None:
            return None
        return self.resource_id.split("/", 1)[-1]


@dataclass(eq=False)
class LiveNode:
    """One snapshot paired with the external handle it was read from.

    Compared and hashed by identity; the handle is only borrowed from the node
    source and is never inspected here.
    """

    snapshot: NodeSnapshot
    handle: object
    children: tuple["LiveNode", ...] = ()

    def __repr__(self) -> str:
        return f"LiveNode({self.snapshot.short_class_name!r}, children={len(self.children)})"


@dataclass(frozen=True)
class Block:
    """Consolidated interactive region with one click and one long-click slot."""

    label: str
    click_handle: object | None = None
    long_click_handle: object | None = None
    multi_click: bool = False
    multi_long_click: bool = False

    def handle_for(self, action: NodeAction) -> object | None:
        if action is NodeAction.CLICK:
            return self.click_handle
        return self.long_click_handle


ConsumedSet = set[LiveNode]


__all__ = [
    "Block",
    "ConsumedSet",
    "LiveNode",
    "NodeAction",
    "NodeSnapshot",
]
