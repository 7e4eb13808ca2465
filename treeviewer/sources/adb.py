"""Thin ``adb`` subprocess wrappers for dumping and poking a device UI."""

from __future__ import annotations

import logging
import subprocess
import threading
from queue import Queue

from ..node_model import NodeAction, SourceError

logger = logging.getLogger(__name__)

DEVICE_DUMP_PATH = "/sdcard/window_dump.xml"
LONG_PRESS_MS = 800


class AdbError(SourceError):
    """Raised when an ``adb`` command is missing, times out, or fails."""


class AdbClient:
    """Run ``adb`` commands against one (optionally selected) device."""

    def __init__(self, adb: str = "adb", serial: str | None = None, timeout_seconds: float = 10.0) -> None:
        self.adb = adb
        self.serial = serial
        self.timeout_seconds = timeout_seconds

    def _command(self, *args: str) -> list[str]:
        cmd = [self.adb]
        if self.serial:
            cmd.extend(["-s", self.serial])
        cmd.extend(args)
        return cmd

    def run(self, *args: str) -> str:
        cmd = self._command(*args)
        try:
            proc = subprocess.run(
                cmd,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
                check=False,
                timeout=self.timeout_seconds,
            )
        except FileNotFoundError as exc:
            raise AdbError(f"adb executable not found: {self.adb}") from exc
        except subprocess.TimeoutExpired as exc:
            raise AdbError(f"adb timed out: {' '.join(cmd)}") from exc
        if proc.returncode != 0:
            raise AdbError(f"adb failed ({proc.returncode}): {proc.stderr.strip() or proc.stdout.strip()}")
        return proc.stdout

    def device_available(self) -> bool:
        try:
            state = self.run("get-state")
        except AdbError:
            return False
        return state.strip() == "device"

    def dump_hierarchy(self) -> str:
        """Dump the foreground window hierarchy and return the XML text."""
        self.run("shell", "uiautomator", "dump", "--compressed", DEVICE_DUMP_PATH)
        return self.run("shell", "cat", DEVICE_DUMP_PATH)

    def tap(self, x: int, y: int) -> None:
        logger.debug("adb tap at %d,%d", x, y)
        self.run("shell", "input", "tap", str(int(x)), str(int(y)))

    def long_press(self, x: int, y: int, duration_ms: int = LONG_PRESS_MS) -> None:
        logger.debug("adb long-press at %d,%d for %dms", x, y, duration_ms)
        self.run("shell", "input", "swipe", str(int(x)), str(int(y)), str(int(x)), str(int(y)), str(int(duration_ms)))


class AdbActionQueue:
    """Deliver taps and long presses on a background thread.

    Each ``adb shell input`` call can block for up to the client timeout, so
    the runtime loop only enqueues requests. Delivery failures are logged at
    warning level and never reach the caller.
    """

    def __init__(self, client: AdbClient) -> None:
        self._client = client
        self._requests: Queue[tuple[NodeAction, int, int] | None] = Queue()
        self._worker: threading.Thread | None = None

    def submit(self, action: NodeAction, x: int, y: int) -> None:
        self._requests.put((action, x, y))

    def deliver(self, action: NodeAction, x: int, y: int) -> None:
        try:
            if action is NodeAction.CLICK:
                self._client.tap(x, y)
            else:
                self._client.long_press(x, y)
        except AdbError as exc:
            logger.warning("%s at %d,%d failed: %s", action.value, x, y, exc)

    def _run(self) -> None:
        while True:
            request = self._requests.get()
            if request is None:
                return
            self.deliver(*request)

    def start(self) -> None:
        if self._worker is not None:
            return
        self._worker = threading.Thread(
            target=self._run,
            name="treeviewer-adb-actions",
            daemon=True,
        )
        self._worker.start()

    def stop(self) -> None:
        """Let queued requests finish, then end the worker."""
        self._requests.put(None)


__all__ = [
    "AdbActionQueue",
    "AdbClient",
    "AdbError",
    "LONG_PRESS_MS",
]
