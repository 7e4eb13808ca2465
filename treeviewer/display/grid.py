"""Fixed 4x10 block grid: geometry, hit-testing, and cell rendering.

Blocks beyond the grid capacity are not shown. Each cell is split in two
halves: the left half carries the click action and the right half the
long-click action.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..node_model import Block, NodeAction
from .text_width import fit_columns, split_columns
from .theme import DEFAULT_THEME, UITheme

logger = logging.getLogger(__name__)

GRID_COLUMNS = 4
GRID_ROWS = 10
MAX_GRID_BLOCKS = GRID_COLUMNS * GRID_ROWS


def visible_blocks(blocks: list[Block]) -> list[Block]:
    """Return the blocks that fit on the grid, in order."""
    if len(blocks) > MAX_GRID_BLOCKS:
        logger.debug("block grid full: %d of %d blocks not shown", len(blocks) - MAX_GRID_BLOCKS, len(blocks))
    return blocks[:MAX_GRID_BLOCKS]


@dataclass(frozen=True)
class GridGeometry:
    """Placement of the grid in 0-based screen columns/rows."""

    left: int
    top: int
    cell_width: int
    cell_height: int

    @classmethod
    def for_screen(cls, left: int, width: int, height: int) -> "GridGeometry":
        return cls(
            left=left,
            top=0,
            cell_width=max(2, width // GRID_COLUMNS),
            cell_height=max(1, height // GRID_ROWS),
        )

    def hit_test(self, col: int, row: int, block_count: int) -> tuple[int, NodeAction] | None:
        """Map a 1-based terminal position to ``(block_index, action)``."""
        x = col - 1 - self.left
        y = row - 1 - self.top
        if x < 0 or y < 0:
            return None
        grid_col = x // self.cell_width
        grid_row = y // self.cell_height
        if grid_col >= GRID_COLUMNS or grid_row >= GRID_ROWS:
            return None
        index = grid_row * GRID_COLUMNS + grid_col
        if index >= min(block_count, MAX_GRID_BLOCKS):
            return None
        in_cell = x - grid_col * self.cell_width
        action = NodeAction.CLICK if in_cell < self.cell_width // 2 else NodeAction.LONG_CLICK
        return index, action


def _half_color(handle: object | None, ambiguous: bool, ready: str, theme: UITheme) -> str:
    if handle is None:
        return theme.action_missing
    if ambiguous:
        return theme.action_ambiguous
    return ready


def render_cell_row(block: Block, width: int, line_in_cell: int, cell_height: int, theme: UITheme) -> str:
    """Render one screen row of one cell, label centered vertically."""
    left_width = width // 2
    label_row = (cell_height - 1) // 2
    text = block.label if line_in_cell == label_row else ""
    head, tail = split_columns(fit_columns(" " + text, width), left_width)
    tail = fit_columns(tail, width - left_width)
    left_color = _half_color(block.click_handle, block.multi_click, theme.click_ready, theme)
    right_color = _half_color(block.long_click_handle, block.multi_long_click, theme.long_click_ready, theme)
    return (
        f"{left_color}{theme.block_label}{head}{theme.reset}"
        f"{right_color}{theme.block_label}{tail}{theme.reset}"
    )


def render_grid_rows(
    blocks: list[Block],
    geometry: GridGeometry,
    height: int,
    theme: UITheme | None = None,
) -> list[str]:
    """Render the grid as ``height`` screen rows (blank past the last block)."""
    active_theme = theme or DEFAULT_THEME
    shown = visible_blocks(blocks)
    blank = " " * (geometry.cell_width * GRID_COLUMNS)
    rows: list[str] = []
    for screen_row in range(height):
        grid_row = (screen_row - geometry.top) // geometry.cell_height
        line_in_cell = (screen_row - geometry.top) % geometry.cell_height
        if screen_row < geometry.top or grid_row >= GRID_ROWS:
            rows.append(blank)
            continue
        parts: list[str] = []
        for grid_col in range(GRID_COLUMNS):
            index = grid_row * GRID_COLUMNS + grid_col
            if index < len(shown):
                parts.append(
                    render_cell_row(shown[index], geometry.cell_width, line_in_cell, geometry.cell_height, active_theme)
                )
            else:
                parts.append(" " * geometry.cell_width)
        rows.append("".join(parts))
    return rows


def describe_block(index: int, block: Block) -> str:
    """One-line plain description used by non-interactive output."""
    click = "none" if block.click_handle is None else ("multi" if block.multi_click else "yes")
    long_click = "none" if block.long_click_handle is None else ("multi" if block.multi_long_click else "yes")
    return f"{index + 1:2d}. {block.label}  [click:{click} long-click:{long_click}]"


__all__ = [
    "GRID_COLUMNS",
    "GRID_ROWS",
    "GridGeometry",
    "MAX_GRID_BLOCKS",
    "describe_block",
    "render_cell_row",
    "render_grid_rows",
    "visible_blocks",
]
