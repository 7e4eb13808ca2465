"""Refresh cycle and view state for one observed node source.

``ViewerSession`` is mutated only from the runtime loop. A refresh walks the
source once, compares the new snapshot with the previous one, and only on a
real change appends log lines and recomputes blocks.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime

from ..blocks import consolidate_blocks
from ..log_view import LogBuffer, banner_lines, format_refresh_lines, no_root_line
from ..node_model import (
    Block,
    NodeAccessError,
    NodeAction,
    NodeSnapshot,
    NodeSource,
    build_live_tree,
    resolve_root,
    snapshot_changed,
)

logger = logging.getLogger(__name__)


@dataclass
class ViewerSession:
    source: NodeSource
    version: str
    buffer: LogBuffer = field(default_factory=LogBuffer)
    blocks_enabled: bool = True
    clock: Callable[[], datetime] = datetime.now
    last_snapshot: NodeSnapshot | None = None
    blocks: list[Block] = field(default_factory=list)
    blocks_stale: bool = False
    dirty: bool = True

    def start(self) -> None:
        """Append the one-time banner shown at the top of the log."""
        self.buffer.extend(banner_lines(self.version, self.clock()))
        self.dirty = True

    def _append_no_root(self) -> None:
        self.buffer.append(no_root_line(self.clock()))
        self.dirty = True

    def _package_name(self, root: object) -> str | None:
        try:
            return self.source.package_name(root)
        except NodeAccessError:
            return None

    def refresh(self) -> bool:
        """Run one refresh cycle and return whether the tree changed."""
        root = resolve_root(self.source)
        if root is None:
            logger.info("no root window available")
            self._append_no_root()
            return False
        try:
            tree = build_live_tree(self.source, root)
        except NodeAccessError:
            logger.info("root window vanished during walk")
            self._append_no_root()
            return False

        if not snapshot_changed(self.last_snapshot, tree.snapshot):
            if self.blocks_enabled and self.blocks_stale:
                self.blocks = consolidate_blocks(tree)
                self.blocks_stale = False
                self.dirty = True
            return False
        self.last_snapshot = tree.snapshot

        self.buffer.extend(format_refresh_lines(tree, self._package_name(root), self.clock()))
        self.buffer.jump_to_bottom()
        if self.blocks_enabled:
            self.blocks = consolidate_blocks(tree)
            self.blocks_stale = False
        else:
            self.blocks_stale = True
        self.dirty = True
        logger.debug("tree changed: %d buffered lines, %d blocks", len(self.buffer), len(self.blocks))
        return True

    def toggle_blocks(self) -> bool:
        """Flip block derivation on or off and return the new setting.

        Turning blocks on marks them stale so the next refresh recomputes them
        even when the tree itself has not changed.
        """
        self.blocks_enabled = not self.blocks_enabled
        if self.blocks_enabled:
            self.blocks_stale = True
        else:
            self.blocks = []
        self.dirty = True
        return self.blocks_enabled

    def invoke_block(self, block: Block, action: NodeAction) -> bool:
        """Fire ``action`` on ``block``'s handle; failures are swallowed.

        Returns whether the action was delivered to the source without error.
        """
        handle = block.handle_for(action)
        if handle is None:
            return False
        try:
            self.source.invoke(handle, action)
        except Exception:
            logger.debug("%s on block %r failed", action.value, block.label, exc_info=True)
            return False
        return True

    def page_up(self) -> None:
        self.buffer.page_up()
        self.dirty = True

    def page_down(self) -> None:
        self.buffer.page_down()
        self.dirty = True

    def jump_to_top(self) -> None:
        self.buffer.jump_to_top()
        self.dirty = True

    def jump_to_bottom(self) -> None:
        self.buffer.jump_to_bottom()
        self.dirty = True

    def shutdown(self) -> None:
        self.blocks = []
        self.last_snapshot = None
        self.dirty = True


__all__ = ["ViewerSession"]
