"""Domain model for observed UI node trees.

This package contains non-UI tree primitives:
- value snapshots and live (handle-bearing) tree nodes
- the node-source protocol and its access errors
- the fault-tolerant tree builder
- structural snapshot diffing
"""

from __future__ import annotations

from .build import build_live_tree, iter_post_order, resolve_root
from .diff import snapshot_changed
from .source import NodeAccessError, NodeSource, SourceError
from .types import Block, ConsumedSet, LiveNode, NodeAction, NodeSnapshot

__all__ = [
    "Block",
    "ConsumedSet",
    "LiveNode",
    "NodeAccessError",
    "NodeAction",
    "NodeSnapshot",
    "NodeSource",
    "SourceError",
    "build_live_tree",
    "iter_post_order",
    "resolve_root",
    "snapshot_changed",
]
