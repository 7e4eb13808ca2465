"""Post-order consolidation of interactive nodes into blocks.

Children are processed before their parent. The first parent that sees an
unconsumed interactive child claims it (together with all of its siblings),
so every interactive node ends up in at most one block and labelled containers
absorb the controls they wrap. An interactive node whose own children are not
interactive becomes a block of its own; an interactive leaf is left for its
parent to claim unless it is the root.
"""

from __future__ import annotations

import logging

from ..node_model import Block, ConsumedSet, LiveNode, iter_post_order
from .text import collect_text

logger = logging.getLogger(__name__)


def _parent_block(node: LiveNode, consumed: ConsumedSet) -> tuple[bool, Block | None]:
    """Try to consolidate ``node``'s direct interactive children.

    Returns ``(claimed, block)``; ``claimed`` is false when no child is an
    unconsumed candidate.
    """
    click_candidates = [c for c in node.children if c.snapshot.clickable and c not in consumed]
    long_click_candidates = [c for c in node.children if c.snapshot.long_clickable and c not in consumed]
    if not click_candidates and not long_click_candidates:
        return False, None

    block: Block | None = None
    label = collect_text(node, consumed)
    if label.strip():
        block = Block(
            label=label,
            click_handle=click_candidates[0].handle if click_candidates else None,
            long_click_handle=long_click_candidates[0].handle if long_click_candidates else None,
            multi_click=len(click_candidates) > 1,
            multi_long_click=len(long_click_candidates) > 1,
        )
    else:
        # Children are still consumed below, so these actions stay unreachable
        # for the rest of this pass.
        logger.debug(
            "blank label under %s: dropping %d click and %d long-click candidates",
            node.snapshot.short_class_name or "?",
            len(click_candidates),
            len(long_click_candidates),
        )

    consumed.update(node.children)
    return True, block


def _self_block(node: LiveNode, parent: LiveNode | None, consumed: ConsumedSet) -> Block | None:
    snapshot = node.snapshot
    if node in consumed or not snapshot.interactive:
        return None
    if parent is not None and not node.children:
        return None
    if any(child.snapshot.interactive for child in node.children):
        return None

    block: Block | None = None
    label = collect_text(node, consumed)
    if label.strip():
        block = Block(
            label=label,
            click_handle=node.handle if snapshot.clickable else None,
            long_click_handle=node.handle if snapshot.long_clickable else None,
        )
    consumed.add(node)
    return block


def consolidate_blocks(root: LiveNode, consumed: ConsumedSet | None = None) -> list[Block]:
    """Compute the ordered block list for one live tree.

    Every node is visited exactly once, after all of its descendants. The
    optional ``consumed`` set is filled in place and is only meaningful for
    this one pass.
    """
    if consumed is None:
        consumed = set()
    blocks: list[Block] = []
    for node, parent in iter_post_order(root):
        claimed, block = _parent_block(node, consumed)
        if not claimed:
            block = _self_block(node, parent, consumed)
        if block is not None:
            blocks.append(block)
    return blocks


__all__ = ["consolidate_blocks"]
