"""Key and mouse dispatch for the interactive viewer."""

from __future__ import annotations

import logging
from collections.abc import Callable

from ..display import ScreenLayout, visible_blocks
from .debounce import RefreshDebouncer
from .session import ViewerSession

logger = logging.getLogger(__name__)

QUIT_KEYS = frozenset({"q", "Q", "ESC", "CTRL_C"})


def parse_mouse_click(key: str) -> tuple[int, int] | None:
    """Return the 1-based ``(col, row)`` of a left-button press token."""
    if not key.startswith("MOUSE_LEFT_DOWN:"):
        return None
    try:
        _, col_s, row_s = key.split(":")
        return int(col_s), int(row_s)
    except ValueError:
        return None


class ViewerKeyHandler:
    """Translate key tokens into session commands.

    Paging keys only move the log cursor. ``r`` toggles the block grid and
    persists the choice; a mouse press on a grid cell half fires that block's
    click or long-click action.
    """

    def __init__(
        self,
        session: ViewerSession,
        debouncer: RefreshDebouncer,
        save_show_blocks: Callable[[bool], None],
    ) -> None:
        self.session = session
        self.debouncer = debouncer
        self._save_show_blocks = save_show_blocks
        self._bindings: dict[str, Callable[[], None]] = {}
        for combos, handler in (
            (("PAGE_UP", "u", "b", "UP"), session.page_up),
            (("PAGE_DOWN", "d", " ", "DOWN"), session.page_down),
            (("HOME", "g"), session.jump_to_top),
            (("END", "G"), session.jump_to_bottom),
            (("r",), self.toggle_blocks),
        ):
            for combo in combos:
                self._bindings[combo] = handler

    def toggle_blocks(self) -> None:
        enabled = self.session.toggle_blocks()
        self._save_show_blocks(enabled)
        if enabled:
            self.debouncer.schedule()

    def click(self, col: int, row: int, layout: ScreenLayout) -> bool:
        if layout.grid is None:
            return False
        shown = visible_blocks(self.session.blocks)
        hit = layout.grid.hit_test(col, row, len(shown))
        if hit is None:
            return False
        index, action = hit
        delivered = self.session.invoke_block(shown[index], action)
        logger.info("%s on block %d (%s): %s", action.value, index + 1, shown[index].label, "sent" if delivered else "dropped")
        if delivered:
            self.debouncer.schedule()
        return delivered

    def handle(self, key: str, layout: ScreenLayout) -> bool:
        """Handle one key token; returns ``False`` when the viewer should quit."""
        if key in QUIT_KEYS:
            return False
        position = parse_mouse_click(key)
        if position is not None:
            self.click(position[0], position[1], layout)
            return True
        handler = self._bindings.get(key)
        if handler is not None:
            handler()
        return True


__all__ = [
    "QUIT_KEYS",
    "ViewerKeyHandler",
    "parse_mouse_click",
]
