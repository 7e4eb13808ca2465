"""Block consolidation and label text collection."""

from __future__ import annotations

import sys
import unittest
from unittest import mock

from treeviewer.blocks import collect_text, consolidate_blocks
from treeviewer.node_model import LiveNode, NodeSnapshot, build_live_tree, iter_post_order
from treeviewer.sources import MemoryNode, MemoryNodeSource


def _live(root: MemoryNode) -> LiveNode:
    source = MemoryNodeSource(root)
    return build_live_tree(source, source.root())


def _text(text: str, **kwargs) -> MemoryNode:
    return MemoryNode(class_name="android.widget.TextView", text=text, **kwargs)


class CollectTextTests(unittest.TestCase):
    def test_text_entries_are_joined_in_pre_order(self) -> None:
        tree = _live(
            MemoryNode(
                class_name="android.widget.LinearLayout",
                children=[
                    _text("Wi-Fi", resource_id="com.android.settings:id/title"),
                    MemoryNode(class_name="android.widget.FrameLayout", children=[_text("Connected")]),
                ],
            )
        )

        self.assertEqual(collect_text(tree, set()), "<title> Wi-Fi | Connected")

    def test_content_description_only_counts_on_non_text_leaves(self) -> None:
        tree = _live(
            MemoryNode(
                class_name="android.widget.LinearLayout",
                content_description="row",
                children=[
                    MemoryNode(class_name="android.widget.ImageView", content_description="Back"),
                    MemoryNode(class_name="android.widget.TextView", content_description="ignored"),
                ],
            )
        )

        self.assertEqual(collect_text(tree, set()), "Back")

    def test_edit_text_counts_as_text_bearing(self) -> None:
        tree = _live(MemoryNode(class_name="android.widget.EditText", text="hello", editable=True))

        self.assertEqual(collect_text(tree, set()), "hello")

    def test_consumed_children_are_skipped_with_their_subtree(self) -> None:
        tree = _live(
            MemoryNode(
                class_name="android.widget.LinearLayout",
                children=[
                    MemoryNode(class_name="android.widget.FrameLayout", children=[_text("Taken")]),
                    _text("Free"),
                ],
            )
        )

        self.assertEqual(collect_text(tree, {tree.children[0]}), "Free")

    def test_empty_subtree_collects_nothing(self) -> None:
        tree = _live(MemoryNode(class_name="android.view.View", children=[_text("")]))

        self.assertEqual(collect_text(tree, set()), "")

    def test_deep_subtree_text_is_collected(self) -> None:
        node = _text("bottom")
        for _ in range(sys.getrecursionlimit() + 50):
            node = MemoryNode(class_name="android.widget.FrameLayout", children=[node])
        tree = _live(MemoryNode(class_name="android.widget.LinearLayout", children=[_text("top"), node]))

        self.assertEqual(collect_text(tree, set()), "top | bottom")


class ConsolidateBlocksTests(unittest.TestCase):
    def test_container_absorbs_clickable_leaves(self) -> None:
        ok = _text("OK", clickable=True)
        cancel = _text("Cancel", clickable=True)
        tree = _live(
            MemoryNode(
                class_name="android.widget.FrameLayout",
                children=[MemoryNode(class_name="android.widget.LinearLayout", children=[ok, cancel])],
            )
        )

        blocks = consolidate_blocks(tree)

        self.assertEqual(len(blocks), 1)
        self.assertEqual(blocks[0].label, "OK | Cancel")
        self.assertIs(blocks[0].click_handle, ok)
        self.assertTrue(blocks[0].multi_click)
        self.assertIsNone(blocks[0].long_click_handle)
        self.assertFalse(blocks[0].multi_long_click)

    def test_clickable_leaf_defers_to_its_parent(self) -> None:
        go = _text("Go", clickable=True)
        tree = _live(
            MemoryNode(
                class_name="android.widget.FrameLayout",
                children=[MemoryNode(class_name="android.widget.LinearLayout", children=[_text("Header"), go])],
            )
        )
        consumed: set = set()

        blocks = consolidate_blocks(tree, consumed)

        self.assertEqual([block.label for block in blocks], ["Header | Go"])
        self.assertIs(blocks[0].click_handle, go)
        self.assertNotIn(tree, consumed)
        self.assertIn(tree.children[0].children[1], consumed)

    def test_single_clickable_leaf_becomes_one_block(self) -> None:
        settings = _text("Settings", clickable=True)
        tree = _live(MemoryNode(class_name="android.widget.FrameLayout", children=[settings]))

        blocks = consolidate_blocks(tree)

        self.assertEqual(len(blocks), 1)
        self.assertEqual(blocks[0].label, "Settings")
        self.assertIs(blocks[0].click_handle, settings)
        self.assertFalse(blocks[0].multi_click)

    def test_interactive_row_with_passive_children_self_blocks(self) -> None:
        row = MemoryNode(
            class_name="android.widget.LinearLayout",
            clickable=True,
            long_clickable=True,
            children=[_text("Bluetooth"), _text("Off")],
        )
        tree = _live(MemoryNode(class_name="android.widget.ListView", children=[row]))

        blocks = consolidate_blocks(tree)

        self.assertEqual(len(blocks), 1)
        self.assertEqual(blocks[0].label, "Bluetooth | Off")
        self.assertIs(blocks[0].click_handle, row)
        self.assertIs(blocks[0].long_click_handle, row)

    def test_rows_each_self_block_and_list_does_not_reclaim_them(self) -> None:
        rows = [
            MemoryNode(class_name="android.widget.LinearLayout", clickable=True, children=[_text(name)])
            for name in ("Network", "Display", "Sound")
        ]
        tree = _live(MemoryNode(class_name="androidx.recyclerview.widget.RecyclerView", children=rows))

        blocks = consolidate_blocks(tree)

        self.assertEqual([block.label for block in blocks], ["Network", "Display", "Sound"])
        self.assertEqual([block.click_handle for block in blocks], rows)

    def test_click_and_long_click_candidates_are_tracked_separately(self) -> None:
        first = _text("Play", clickable=True)
        second = _text("Queue", long_clickable=True)
        third = _text("Share", long_clickable=True)
        tree = _live(MemoryNode(class_name="android.widget.LinearLayout", children=[first, second, third]))

        blocks = consolidate_blocks(tree)

        self.assertEqual(len(blocks), 1)
        self.assertIs(blocks[0].click_handle, first)
        self.assertFalse(blocks[0].multi_click)
        self.assertIs(blocks[0].long_click_handle, second)
        self.assertTrue(blocks[0].multi_long_click)

    def test_blank_label_consumes_candidates_without_a_block(self) -> None:
        icon = MemoryNode(class_name="android.widget.ImageButton", clickable=True)
        inner = MemoryNode(class_name="android.widget.FrameLayout", children=[icon])
        tree = _live(MemoryNode(class_name="android.widget.LinearLayout", children=[inner, _text("Header")]))

        consumed: set[LiveNode] = set()
        blocks = consolidate_blocks(tree, consumed)

        self.assertEqual(blocks, [])
        self.assertIn(tree.children[0].children[0], consumed)

    def test_each_interactive_node_lands_in_at_most_one_block(self) -> None:
        tree = _live(
            MemoryNode(
                class_name="android.widget.FrameLayout",
                children=[
                    MemoryNode(
                        class_name="android.widget.LinearLayout",
                        children=[_text("A", clickable=True), _text("B", clickable=True)],
                    ),
                    MemoryNode(class_name="android.widget.LinearLayout", clickable=True, children=[_text("C")]),
                    _text("D", clickable=True),
                ],
            )
        )

        blocks = consolidate_blocks(tree)

        handles = [block.click_handle for block in blocks if block.click_handle is not None]
        self.assertEqual(len(handles), len({id(handle) for handle in handles}))
        self.assertEqual([block.label for block in blocks], ["A | B", "C", "D"])

    def test_outer_label_excludes_text_claimed_by_nested_blocks(self) -> None:
        tree = _live(
            MemoryNode(
                class_name="android.widget.FrameLayout",
                children=[
                    MemoryNode(
                        class_name="android.widget.LinearLayout",
                        children=[_text("Inner", clickable=True)],
                    ),
                    _text("Outer", clickable=True),
                ],
            )
        )

        blocks = consolidate_blocks(tree)

        self.assertEqual([block.label for block in blocks], ["Inner", "Outer"])

    def test_interactive_root_leaf_blocks_itself(self) -> None:
        root = _text("Only", clickable=True)
        tree = _live(root)

        blocks = consolidate_blocks(tree)

        self.assertEqual(len(blocks), 1)
        self.assertIs(blocks[0].click_handle, root)

    def test_every_node_is_visited_once(self) -> None:
        tree = _live(
            MemoryNode(
                class_name="android.widget.FrameLayout",
                children=[
                    MemoryNode(class_name="android.widget.LinearLayout", children=[_text("X", clickable=True)]),
                    _text("Y"),
                ],
            )
        )
        visited: list[LiveNode] = []

        def recording(root: LiveNode):
            for node, parent in iter_post_order(root):
                visited.append(node)
                yield node, parent

        with mock.patch("treeviewer.blocks.consolidate.iter_post_order", recording):
            consolidate_blocks(tree)

        self.assertEqual(len(visited), 4)
        self.assertEqual(len({id(node) for node in visited}), 4)

    def test_no_interactive_nodes_yields_no_blocks(self) -> None:
        tree = _live(MemoryNode(class_name="android.widget.FrameLayout", children=[_text("Static")]))

        self.assertEqual(consolidate_blocks(tree), [])

    def test_consolidation_never_queries_the_source(self) -> None:
        snapshot = NodeSnapshot(class_name="android.widget.TextView", text="Go", clickable=True)
        leaf = LiveNode(snapshot=snapshot, handle=object())
        root = LiveNode(
            snapshot=NodeSnapshot(class_name="android.widget.FrameLayout", children=(snapshot,)),
            handle=object(),
            children=(leaf,),
        )

        blocks = consolidate_blocks(root)

        self.assertEqual(blocks[0].label, "Go")
        self.assertIs(blocks[0].click_handle, leaf.handle)


if __name__ == "__main__":
    unittest.main()
