"""Full-screen composition: log page on the left, block grid on the right."""

from __future__ import annotations

from dataclasses import dataclass

from ..log_view import LEGEND, LogPage
from ..node_model import Block
from .grid import GridGeometry, describe_block, render_grid_rows, visible_blocks
from .text_width import fit_columns
from .theme import DEFAULT_THEME, UITheme


@dataclass(frozen=True)
class ScreenLayout:
    """Column split for one terminal size."""

    width: int
    height: int
    log_width: int
    grid: GridGeometry | None

    @classmethod
    def for_terminal(cls, width: int, height: int, show_blocks: bool) -> "ScreenLayout":
        width = max(1, width)
        height = max(1, height)
        if not show_blocks or width < 8:
            return cls(width=width, height=height, log_width=width, grid=None)
        log_width = width // 2
        grid_width = width - log_width - 1
        return cls(
            width=width,
            height=height,
            log_width=log_width,
            grid=GridGeometry.for_screen(log_width + 1, grid_width, height),
        )


def log_pane_rows(page: LogPage, width: int, height: int, theme: UITheme) -> list[str]:
    """Legend, optional pinned banner, header, then as many page lines as fit."""
    rows = [f"{theme.legend}{fit_columns(LEGEND, width)}{theme.reset}"]
    if page.pinned is not None:
        rows.append(f"{theme.header}{fit_columns(page.pinned, width)}{theme.reset}")
    rows.append(f"{theme.header}{fit_columns(page.header, width)}{theme.reset}")
    for line in page.lines:
        if len(rows) >= height:
            break
        rows.append(f"{theme.log_text}{fit_columns(line, width)}{theme.reset}")
    while len(rows) < height:
        rows.append(" " * width)
    return rows[:height]


def render_screen(
    page: LogPage,
    blocks: list[Block],
    layout: ScreenLayout,
    theme: UITheme | None = None,
) -> str:
    """Return the escape-sequence payload that repaints the whole screen."""
    active_theme = theme or DEFAULT_THEME
    left = log_pane_rows(page, layout.log_width, layout.height, active_theme)
    right: list[str] = []
    if layout.grid is not None:
        right = render_grid_rows(blocks, layout.grid, layout.height, active_theme)

    out: list[str] = ["\033[H"]
    for row_index in range(layout.height):
        out.append(left[row_index])
        if right:
            out.append(f"{active_theme.divider}│{active_theme.reset}")
            out.append(right[row_index])
        out.append("\033[K")
        if row_index < layout.height - 1:
            out.append("\r\n")
    return "".join(out)


def render_plain_report(page: LogPage, blocks: list[Block]) -> str:
    """Non-interactive output: the log page followed by a numbered block list."""
    parts = [page.render()]
    shown = visible_blocks(blocks)
    if shown:
        parts.append("")
        parts.append(f"Blocks ({len(shown)} of {len(blocks)}):")
        parts.extend(describe_block(index, block) for index, block in enumerate(shown))
    return "\n".join(parts) + "\n"


__all__ = [
    "ScreenLayout",
    "log_pane_rows",
    "render_plain_report",
    "render_screen",
]
