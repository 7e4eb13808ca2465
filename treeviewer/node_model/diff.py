"""Structural change detection between consecutive tree snapshots."""

from __future__ import annotations

from dataclasses import fields

from .types import NodeSnapshot

_OWN_FIELDS = tuple(f.name for f in fields(NodeSnapshot) if f.name != "children")


def _own_values(snapshot: NodeSnapshot) -> tuple[object, ...]:
    return tuple(getattr(snapshot, name) for name in _OWN_FIELDS)


def snapshot_changed(previous: NodeSnapshot | None, current: NodeSnapshot) -> bool:
    """Return whether ``current`` differs structurally from ``previous``.

    Comparison is by value only and stops at the first mismatching field at
    any depth. A missing previous snapshot always counts as a change. Pairs
    are compared from an explicit stack rather than through the recursive
    dataclass ``==``, so arbitrarily deep trees compare safely.
    """
    if previous is None:
        return True
    pending = [(previous, current)]
    while pending:
        before, after = pending.pop()
        if before is after:
            continue
        if _own_values(before) != _own_values(after) or len(before.children) != len(after.children):
            return True
        pending.extend(zip(before.children, after.children))
    return False


__all__ = ["snapshot_changed"]
