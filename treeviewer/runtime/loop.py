"""Main interactive event loop for the terminal viewer.

This is the single processing queue: change notifications, debounced
refreshes, key input, and repaints all happen here, one after another.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from dataclasses import dataclass

from ..display import ScreenLayout, UITheme, render_screen
from .debounce import RefreshDebouncer
from .input import read_key
from .keymap import ViewerKeyHandler
from .session import ViewerSession
from .terminal import TerminalController

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RuntimeLoopTiming:
    """Timing constants controlling interactive loop behavior."""

    key_poll_ms: int = 50


@dataclass(frozen=True)
class RuntimeLoopCallbacks:
    """Injected operations used by ``run_main_loop``."""

    drain_events: Callable[[], int]
    terminal_size: Callable[[], tuple[int, int]]
    save_show_blocks: Callable[[bool], None]


def run_refresh_tick(session: ViewerSession, debouncer: RefreshDebouncer, drain_events: Callable[[], int]) -> bool:
    """Fold new notifications into the debouncer and run a due refresh.

    Returns whether a refresh ran this tick.
    """
    if drain_events() > 0:
        debouncer.schedule()
    pending = debouncer.pop_due()
    if pending is None:
        return False
    logger.debug("running debounced refresh %d", pending.token)
    session.refresh()
    return True


def key_timeout_ms(debouncer: RefreshDebouncer, timing: RuntimeLoopTiming) -> int:
    """Bound the key wait so a pending refresh runs as soon as it is due."""
    remaining = debouncer.seconds_until_due()
    if remaining is None:
        return timing.key_poll_ms
    return min(timing.key_poll_ms, math.ceil(remaining * 1000))


def run_main_loop(
    session: ViewerSession,
    debouncer: RefreshDebouncer,
    terminal: TerminalController,
    stdin_fd: int,
    timing: RuntimeLoopTiming,
    callbacks: RuntimeLoopCallbacks,
    theme: UITheme | None = None,
) -> None:
    """Run until a quit key arrives, then cancel any pending refresh."""
    keys = ViewerKeyHandler(session, debouncer, callbacks.save_show_blocks)
    last_size: tuple[int, int] | None = None
    try:
        with terminal.raw_mode():
            while True:
                run_refresh_tick(session, debouncer, callbacks.drain_events)

                size = callbacks.terminal_size()
                if size != last_size:
                    last_size = size
                    session.dirty = True
                layout = ScreenLayout.for_terminal(size[0], size[1], session.blocks_enabled)
                if session.dirty:
                    terminal.write(render_screen(session.buffer.page(), session.blocks, layout, theme))
                    session.dirty = False

                key = read_key(stdin_fd, timeout_ms=key_timeout_ms(debouncer, timing))
                if not key:
                    continue
                if not keys.handle(key, layout):
                    break
    finally:
        debouncer.cancel()
        session.shutdown()
        logger.info("viewer loop stopped")


__all__ = [
    "RuntimeLoopCallbacks",
    "RuntimeLoopTiming",
    "key_timeout_ms",
    "run_main_loop",
    "run_refresh_tick",
]
