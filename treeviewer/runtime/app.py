"""Runtime bootstrap: wire a node source, its change events, and the loop."""

from __future__ import annotations

import logging
import os
import shutil
import sys
import time
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from .. import __version__
from ..display import DEFAULT_THEME, PLAIN_THEME, render_plain_report
from ..log_view import LogBuffer
from ..node_model import NodeSource
from ..sources import (
    AdbActionQueue,
    AdbClient,
    AdbDumpEventSource,
    AdbError,
    EventSource,
    FileWatchEventSource,
    MemoryNodeSource,
    UiAutomatorNodeSource,
)
from .config import ViewerSettings, save_show_blocks
from .debounce import RefreshDebouncer
from .loop import RuntimeLoopCallbacks, RuntimeLoopTiming, run_main_loop
from .session import ViewerSession
from .terminal import TerminalController

logger = logging.getLogger(__name__)


@dataclass
class SourceBinding:
    """A node source together with the event source that watches it."""

    source: NodeSource
    events: EventSource
    description: str
    start: Callable[[], None]
    stop: Callable[[], None]


def _noop() -> None:
    return None


def open_file_source(path: Path, settings: ViewerSettings) -> SourceBinding:
    """Bind a JSON tree or uiautomator XML dump on disk, reloaded on change."""
    path = path.resolve()
    source: MemoryNodeSource | UiAutomatorNodeSource
    if path.suffix.lower() == ".json":
        source = MemoryNodeSource.from_json_file(path)
    else:
        source = UiAutomatorNodeSource()
        source.load_file(path)
    events = FileWatchEventSource(
        path,
        source.load_file,
        poll_seconds=settings.poll_seconds,
        monotonic=time.monotonic,
    )
    return SourceBinding(source=source, events=events, description=str(path), start=_noop, stop=_noop)


def open_device_source(settings: ViewerSettings, serial: str | None = None, adb: str = "adb") -> SourceBinding:
    """Bind a connected device; the first dump is loaded before returning."""
    client = AdbClient(adb=adb, serial=serial)
    if not client.device_available():
        raise AdbError("no device/emulator detected")
    actions = AdbActionQueue(client)
    source = UiAutomatorNodeSource(client=client, actions=actions)
    source.load_dump(client.dump_hierarchy())
    events = AdbDumpEventSource(client, source.load_dump, poll_seconds=settings.poll_seconds)

    def start() -> None:
        events.start()
        actions.start()

    def stop() -> None:
        events.stop()
        actions.stop()

    return SourceBinding(
        source=source,
        events=events,
        description=f"device {serial or 'default'}",
        start=start,
        stop=stop,
    )


def build_session(binding: SourceBinding, settings: ViewerSettings) -> ViewerSession:
    session = ViewerSession(
        source=binding.source,
        version=__version__,
        buffer=LogBuffer(max_lines=settings.max_lines, page_size=settings.page_size),
        blocks_enabled=settings.show_blocks,
    )
    session.start()
    return session


def run_once(binding: SourceBinding, settings: ViewerSettings) -> str:
    """Refresh once and return the plain-text report."""
    session = build_session(binding, settings)
    session.refresh()
    return render_plain_report(session.buffer.page(), session.blocks)


def _terminal_size() -> tuple[int, int]:
    size = shutil.get_terminal_size((80, 24))
    return size.columns, size.lines


def run_viewer(binding: SourceBinding, settings: ViewerSettings, *, no_color: bool = False) -> None:
    """Run the interactive viewer until the user quits."""
    session = build_session(binding, settings)
    debouncer = RefreshDebouncer(settings.debounce_seconds, monotonic=time.monotonic)
    debouncer.schedule()

    binding.start()
    logger.info("watching %s", binding.description)

    terminal = TerminalController(sys.stdin.fileno(), sys.stdout.fileno())
    try:
        run_main_loop(
            session,
            debouncer,
            terminal,
            sys.stdin.fileno(),
            RuntimeLoopTiming(),
            RuntimeLoopCallbacks(
                drain_events=binding.events.drain_events,
                terminal_size=_terminal_size,
                save_show_blocks=save_show_blocks,
            ),
            PLAIN_THEME if no_color or os.environ.get("NO_COLOR") else DEFAULT_THEME,
        )
    finally:
        binding.stop()


__all__ = [
    "SourceBinding",
    "build_session",
    "open_device_source",
    "open_file_source",
    "run_once",
    "run_viewer",
]
