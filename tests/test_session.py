"""Refresh cycle behavior of ``ViewerSession``."""

from __future__ import annotations

import sys
import unittest
from datetime import datetime

from treeviewer.log_view import LogBuffer
from treeviewer.node_model import Block, NodeAction
from treeviewer.runtime import ViewerSession
from treeviewer.sources import MemoryNode, MemoryNodeSource

NOW = datetime(2024, 5, 1, 12, 0, 0)


def _screen(title: str = "Settings") -> MemoryNode:
    return MemoryNode(
        class_name="android.widget.FrameLayout",
        package_name="com.android.settings",
        children=[
            MemoryNode(class_name="android.widget.TextView", text=title),
            MemoryNode(
                class_name="android.widget.LinearLayout",
                children=[
                    MemoryNode(class_name="android.widget.TextView", text="OK", clickable=True),
                    MemoryNode(class_name="android.widget.TextView", text="Cancel", clickable=True),
                ],
            ),
        ],
    )


def _session(source: MemoryNodeSource, **kwargs) -> ViewerSession:
    session = ViewerSession(source=source, version="0.1.0", clock=lambda: NOW, **kwargs)
    session.start()
    return session


class RefreshTests(unittest.TestCase):
    def test_start_appends_banner(self) -> None:
        session = _session(MemoryNodeSource(None))

        self.assertEqual(
            session.buffer.lines,
            ["=== Tree Viewer 0.1.0 ===", "--- Service connected 12:00:00.000 ---"],
        )

    def test_first_refresh_logs_tree_and_derives_blocks(self) -> None:
        session = _session(MemoryNodeSource(_screen()))

        changed = session.refresh()

        self.assertTrue(changed)
        self.assertEqual(session.buffer.lines[2], "--- 12:00:00.000 ---")
        self.assertEqual(session.buffer.lines[3], "── FrameLayout [com.android.settings]")
        self.assertEqual(len(session.buffer), 8)
        self.assertEqual([block.label for block in session.blocks], ["OK | Cancel"])

    def test_identical_tree_appends_nothing_and_keeps_blocks(self) -> None:
        source = MemoryNodeSource(_screen())
        session = _session(source)
        session.refresh()
        lines_before = list(session.buffer.lines)
        blocks_before = session.blocks

        source.root_node = _screen()
        changed = session.refresh()

        self.assertFalse(changed)
        self.assertEqual(session.buffer.lines, lines_before)
        self.assertIs(session.blocks, blocks_before)

    def test_changed_tree_appends_entry_and_recomputes_blocks(self) -> None:
        source = MemoryNodeSource(_screen())
        session = _session(source)
        session.refresh()
        first_count = len(session.buffer)

        source.root_node = _screen("Network")
        changed = session.refresh()

        self.assertTrue(changed)
        self.assertEqual(len(session.buffer), first_count + 6)
        self.assertIn('   ├── TextView "Network"', session.buffer.lines)
        self.assertIs(session.blocks[0].click_handle, source.root_node.children[1].children[0])

    def test_refresh_jumps_to_bottom(self) -> None:
        source = MemoryNodeSource(_screen())
        session = _session(source, buffer=LogBuffer(page_size=3))
        session.refresh()

        self.assertEqual(session.buffer.scroll_offset, len(session.buffer) - 3)

    def test_missing_root_logs_no_root_line(self) -> None:
        session = _session(MemoryNodeSource(None))

        changed = session.refresh()

        self.assertFalse(changed)
        self.assertEqual(session.buffer.lines[-1], "--- 12:00:00.000 --- (no root window)")
        self.assertEqual(session.blocks, [])

    def test_stale_root_logs_no_root_line(self) -> None:
        root = _screen()
        source = MemoryNodeSource(root)
        session = _session(source)
        root.stale = True

        session.refresh()

        self.assertEqual(session.buffer.lines[-1], "--- 12:00:00.000 --- (no root window)")

    def test_no_root_keeps_previous_snapshot(self) -> None:
        source = MemoryNodeSource(_screen())
        session = _session(source)
        session.refresh()
        count = len(session.buffer)

        saved = source.root_node
        source.root_node = None
        session.refresh()
        source.root_node = saved
        changed = session.refresh()

        self.assertFalse(changed)
        self.assertEqual(len(session.buffer), count + 1)


class BlockToggleTests(unittest.TestCase):
    def test_disabled_blocks_are_not_derived(self) -> None:
        session = _session(MemoryNodeSource(_screen()), blocks_enabled=False)

        session.refresh()

        self.assertEqual(session.blocks, [])
        self.assertTrue(session.blocks_stale)

    def test_enabling_blocks_recomputes_on_unchanged_refresh(self) -> None:
        session = _session(MemoryNodeSource(_screen()), blocks_enabled=False)
        session.refresh()
        count = len(session.buffer)

        self.assertTrue(session.toggle_blocks())
        changed = session.refresh()

        self.assertFalse(changed)
        self.assertEqual(len(session.buffer), count)
        self.assertEqual([block.label for block in session.blocks], ["OK | Cancel"])
        self.assertFalse(session.blocks_stale)

    def test_disabling_blocks_clears_grid(self) -> None:
        session = _session(MemoryNodeSource(_screen()))
        session.refresh()

        self.assertFalse(session.toggle_blocks())

        self.assertEqual(session.blocks, [])


class InvokeBlockTests(unittest.TestCase):
    def test_click_reaches_first_candidate(self) -> None:
        root = _screen()
        session = _session(MemoryNodeSource(root))
        session.refresh()

        delivered = session.invoke_block(session.blocks[0], NodeAction.CLICK)

        self.assertTrue(delivered)
        self.assertEqual(root.children[1].children[0].invocations, [NodeAction.CLICK])

    def test_missing_action_is_not_delivered(self) -> None:
        session = _session(MemoryNodeSource(_screen()))
        session.refresh()

        self.assertFalse(session.invoke_block(session.blocks[0], NodeAction.LONG_CLICK))

    def test_stale_handle_failure_is_swallowed(self) -> None:
        root = _screen()
        session = _session(MemoryNodeSource(root))
        session.refresh()
        root.children[1].children[0].stale = True

        self.assertFalse(session.invoke_block(session.blocks[0], NodeAction.CLICK))

    def test_unexpected_source_error_is_swallowed(self) -> None:
        class ExplodingSource(MemoryNodeSource):
            def invoke(self, handle, action):
                raise RuntimeError("boom")

        session = _session(ExplodingSource(_screen()))
        block = Block(label="x", click_handle=object())

        self.assertFalse(session.invoke_block(block, NodeAction.CLICK))


class NavigationTests(unittest.TestCase):
    def test_paging_marks_session_dirty(self) -> None:
        session = _session(MemoryNodeSource(_screen()), buffer=LogBuffer(page_size=2))
        session.refresh()
        session.dirty = False

        session.jump_to_top()

        self.assertTrue(session.dirty)
        self.assertEqual(session.buffer.scroll_offset, 0)
        session.page_down()
        self.assertEqual(session.buffer.scroll_offset, 2)
        session.page_up()
        self.assertEqual(session.buffer.scroll_offset, 0)
        session.jump_to_bottom()
        self.assertEqual(session.buffer.scroll_offset, len(session.buffer) - 2)

    def test_shutdown_drops_blocks_and_snapshot(self) -> None:
        session = _session(MemoryNodeSource(_screen()))
        session.refresh()

        session.shutdown()

        self.assertEqual(session.blocks, [])
        self.assertIsNone(session.last_snapshot)


class DeepTreeTests(unittest.TestCase):
    def _deep_screen(self, depth: int, text: str) -> tuple[MemoryNode, MemoryNode]:
        leaf = MemoryNode(class_name="android.widget.TextView", text=text, clickable=True)
        node = MemoryNode(class_name="android.widget.LinearLayout", children=[leaf])
        for _ in range(depth):
            node = MemoryNode(class_name="android.widget.FrameLayout", children=[node])
        return node, leaf

    def test_refresh_handles_trees_deeper_than_recursion_limit(self) -> None:
        root, leaf = self._deep_screen(sys.getrecursionlimit() + 50, "Deep")
        session = _session(MemoryNodeSource(root))

        self.assertTrue(session.refresh())
        self.assertEqual([block.label for block in session.blocks], ["Deep"])
        self.assertFalse(session.refresh())

        leaf.text = "Deeper"

        self.assertTrue(session.refresh())
        self.assertEqual([block.label for block in session.blocks], ["Deeper"])
        self.assertEqual(session.buffer.lines[-1].strip(), '└── TextView "Deeper" [CLICK]')


if __name__ == "__main__":
    unittest.main()
