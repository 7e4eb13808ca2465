"""Label text collection over live subtrees."""

from __future__ import annotations

from ..node_model import ConsumedSet, LiveNode, NodeSnapshot

TEXT_CLASS_MARKERS = ("TextView", "EditText")
LABEL_SEPARATOR = " | "


def is_text_bearing(snapshot: NodeSnapshot) -> bool:
    """Return whether the node's class displays or edits text."""
    return any(marker in snapshot.class_name for marker in TEXT_CLASS_MARKERS)


def _format_entry(snapshot: NodeSnapshot, value: str) -> str:
    suffix = snapshot.resource_id_suffix
    if suffix is None:
        return value
    return f"<{suffix}> {value}"


def _entry(node: LiveNode) -> str | None:
    snapshot = node.snapshot
    text_bearing = is_text_bearing(snapshot)
    if text_bearing and snapshot.text:
        return _format_entry(snapshot, snapshot.text)
    if not text_bearing and not node.children and snapshot.content_description:
        return _format_entry(snapshot, snapshot.content_description)
    return None


def collect_text(node: LiveNode, consumed: ConsumedSet) -> str:
    """Join text entries of ``node``'s subtree in pre-order.

    Consumed children are skipped together with their whole subtree, which
    keeps a label limited to material no nested block has claimed. Returns an
    empty string when nothing was collected.
    """
    parts: list[str] = []
    stack = [node]
    while stack:
        current = stack.pop()
        entry = _entry(current)
        if entry is not None:
            parts.append(entry)
        stack.extend(child for child in reversed(current.children) if child not in consumed)
    return LABEL_SEPARATOR.join(parts)


__all__ = [
    "LABEL_SEPARATOR",
    "TEXT_CLASS_MARKERS",
    "collect_text",
    "is_text_bearing",
]
