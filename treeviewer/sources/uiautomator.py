"""Node source backed by Android ``uiautomator dump`` XML."""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from pathlib import Path

from ..node_model import NodeAccessError, NodeAction, SourceError
from .adb import AdbActionQueue, AdbClient

logger = logging.getLogger(__name__)


class DumpParseError(SourceError):
    """Raised when dump text is not a uiautomator hierarchy."""


@dataclass(eq=False)
class UiNode:
    """One ``<node>`` element of a hierarchy dump."""

    class_name: str
    text: str | None
    content_description: str | None
    resource_id: str | None
    package_name: str | None
    clickable: bool
    long_clickable: bool
    editable: bool
    scrollable: bool
    bounds: tuple[int, int, int, int]
    children: list["UiNode"] = field(default_factory=list)

    @property
    def center(self) -> tuple[int, int]:
        left, top, right, bottom = self.bounds
        return (left + right) // 2, (top + bottom) // 2


def parse_bounds(raw: str) -> tuple[int, int, int, int]:
    """Parse ``[left,top][right,bottom]``; malformed input yields zeros."""
    try:
        parts = raw.replace("[", "").replace("]", ",").split(",")
        left, top, right, bottom = [int(p) for p in parts if p]
    except ValueError:
        return 0, 0, 0, 0
    return left, top, right, bottom


def _optional(element: ET.Element, key: str) -> str | None:
    value = element.get(key)
    return value if value else None


def _flag(element: ET.Element, key: str) -> bool:
    return element.get(key) == "true"


def _node_fields(element: ET.Element) -> UiNode:
    class_name = element.get("class") or ""
    return UiNode(
        class_name=class_name,
        text=_optional(element, "text"),
        content_description=_optional(element, "content-desc"),
        resource_id=_optional(element, "resource-id"),
        package_name=_optional(element, "package"),
        clickable=_flag(element, "clickable"),
        long_clickable=_flag(element, "long-clickable"),
        editable="EditText" in class_name,
        scrollable=_flag(element, "scrollable"),
        bounds=parse_bounds(element.get("bounds") or ""),
    )


def node_from_element(element: ET.Element) -> UiNode:
    """Convert a ``<node>`` element and its descendants without recursion."""
    root = _node_fields(element)
    pending = [(root, element)]
    while pending:
        parent, parent_element = pending.pop()
        for child_element in parent_element:
            if child_element.tag != "node":
                continue
            child = _node_fields(child_element)
            parent.children.append(child)
            pending.append((child, child_element))
    return root


def parse_hierarchy(xml_text: str) -> UiNode | None:
    """Parse dump text and return its first top-level node, if any."""
    start = xml_text.find("<")
    if start < 0:
        raise DumpParseError("dump contains no XML")
    try:
        root = ET.fromstring(xml_text[start:])
    except ET.ParseError as exc:
        raise DumpParseError(f"malformed hierarchy dump: {exc}") from exc
    if root.tag == "node":
        return node_from_element(root)
    for element in root:
        if element.tag == "node":
            return node_from_element(element)
    return None


class UiAutomatorNodeSource:
    """``NodeSource`` over the most recently loaded hierarchy dump.

    Actions are delivered by tapping the node's bounds center through ``adb``.
    With an action queue they run on its worker thread, otherwise inline
    through the client. Without either they fail with ``SourceError``.
    """

    def __init__(
        self,
        root: UiNode | None = None,
        client: AdbClient | None = None,
        actions: AdbActionQueue | None = None,
    ) -> None:
        self.root_node = root
        self.client = client
        self.actions = actions

    def load_dump(self, xml_text: str) -> None:
        self.root_node = parse_hierarchy(xml_text)

    def load_file(self, path: Path) -> None:
        try:
            xml_text = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise DumpParseError(f"cannot read dump {path}: {exc}") from exc
        self.load_dump(xml_text)

    @staticmethod
    def _node(handle: object) -> UiNode:
        if not isinstance(handle, UiNode):
            raise NodeAccessError("handle does not belong to a hierarchy dump")
        return handle

    def root(self) -> object | None:
        return self.root_node

    def child_count(self, handle: object) -> int:
        return len(self._node(handle).children)

    def child(self, handle: object, index: int) -> object | None:
        children = self._node(handle).children
        if not 0 <= index < len(children):
            return None
        return children[index]

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
        x, y = node.center
        if self.actions is not None:
            self.actions.submit(action, x, y)
            return
        if self.client is None:
            raise SourceError("no device attached; cannot deliver actions")
        if action is NodeAction.CLICK:
            self.client.tap(x, y)
        else:
            self.client.long_press(x, y)


__all__ = [
    "DumpParseError",
    "UiAutomatorNodeSource",
    "UiNode",
    "parse_bounds",
    "parse_hierarchy",
]
