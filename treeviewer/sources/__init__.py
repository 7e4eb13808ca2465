"""Concrete node sources and the change-notification sources that drive them."""

from __future__ import annotations

from .adb import AdbActionQueue, AdbClient, AdbError
from .memory import InvalidTreeError, MemoryNode, MemoryNodeSource
from .uiautomator import DumpParseError, UiAutomatorNodeSource, UiNode, parse_hierarchy
from .watch import AdbDumpEventSource, EventSource, FileWatchEventSource

__all__ = [
    "AdbActionQueue",
    "AdbClient",
    "AdbDumpEventSource",
    "AdbError",
    "DumpParseError",
    "EventSource",
    "FileWatchEventSource",
    "InvalidTreeError",
    "MemoryNode",
    "MemoryNodeSource",
    "UiAutomatorNodeSource",
    "UiNode",
    "parse_hierarchy",
]
