"""Change-notification sources for file-backed and device-backed trees.

File sources compare a cheap stat signature on a poll interval. Device
sources pull dumps on a background thread and hash them; only the runtime
loop thread ever applies a new dump to its node source.
"""

from __future__ import annotations

import hashlib
import logging
import threading
from collections.abc import Callable
from pathlib import Path
from queue import Empty, Queue
from typing import Protocol

from ..node_model import SourceError
from .adb import AdbClient, AdbError

logger = logging.getLogger(__name__)


class EventSource(Protocol):
    """Anything that can report how many change notifications arrived."""

    def drain_events(self) -> int: ...


def path_stat_signature(path: Path) -> tuple[str, int, int, int]:
    """Return a stable stat tuple describing ``path`` existence and metadata."""
    try:
        st = path.stat()
    except FileNotFoundError:
        return ("missing", 0, 0, 0)
    except OSError:
        return ("error", 0, 0, 0)
    return ("ok", st.st_mtime_ns, st.st_size, st.st_mode)


def dump_signature(xml_text: str) -> str:
    digest = hashlib.blake2b(digest_size=20)
    digest.update(xml_text.encode("utf-8", errors="surrogateescape"))
    return digest.hexdigest()


class FileWatchEventSource:
    """Poll a dump file and reload it whenever its stat signature changes."""

    def __init__(
        self,
        path: Path,
        reload: Callable[[Path], None],
        *,
        poll_seconds: float,
        monotonic: Callable[[], float],
    ) -> None:
        self.path = path
        self._reload = reload
        self._poll_seconds = poll_seconds
        self._monotonic = monotonic
        self._last_poll = monotonic()
        self._signature = path_stat_signature(path)

    def drain_events(self) -> int:
        now = self._monotonic()
        if (now - self._last_poll) < self._poll_seconds:
            return 0
        self._last_poll = now

        signature = path_stat_signature(self.path)
        if signature == self._signature:
            return 0
        self._signature = signature
        if signature[0] != "ok":
            logger.info("watched dump %s is %s", self.path, signature[0])
            return 0
        try:
            self._reload(self.path)
        except SourceError as exc:
            logger.warning("ignoring unreadable dump %s: %s", self.path, exc)
            return 0
        return 1


class AdbDumpEventSource:
    """Background poller that queues device dumps whose content changed."""

    def __init__(
        self,
        client: AdbClient,
        apply_dump: Callable[[str], None],
        *,
        poll_seconds: float,
    ) -> None:
        self._client = client
        self._apply_dump = apply_dump
        self._poll_seconds = poll_seconds
        self._dumps: Queue[str] = Queue()
        self._stop = threading.Event()
        self._worker: threading.Thread | None = None
        self._last_signature: str | None = None
        self._failing = False

    def _poll_once(self) -> None:
        try:
            xml_text = self._client.dump_hierarchy()
        except AdbError as exc:
            if not self._failing:
                logger.warning("device dump failed: %s", exc)
            self._failing = True
            return
        if self._failing:
            logger.info("device dump recovered")
        self._failing = False

        signature = dump_signature(xml_text)
        if signature == self._last_signature:
            return
        self._last_signature = signature
        self._dumps.put(xml_text)

    def _run(self) -> None:
        while not self._stop.is_set():
            self._poll_once()
            self._stop.wait(self._poll_seconds)

    def start(self) -> None:
        if self._worker is not None:
            return
        self._worker = threading.Thread(
            target=self._run,
            name="treeviewer-adb-dump-poller",
            daemon=True,
        )
        self._worker.start()

    def stop(self) -> None:
        self._stop.set()

    def drain_events(self) -> int:
        """Apply the newest queued dump and return how many arrived."""
        latest: str | None = None
        count = 0
        while True:
            try:
                latest = self._dumps.get_nowait()
            except Empty:
                break
            count += 1
        if latest is None:
            return 0
        try:
            self._apply_dump(latest)
        except SourceError as exc:
            logger.warning("ignoring unparsable device dump: %s", exc)
            return 0
        return count


__all__ = [
    "AdbDumpEventSource",
    "EventSource",
    "FileWatchEventSource",
    "dump_signature",
    "path_stat_signature",
]
