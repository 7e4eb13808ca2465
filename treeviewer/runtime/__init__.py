"""Public runtime orchestration entry points.

This package groups the refresh session, debounce scheduling, and the
interactive loop plus the bootstrap helpers that bind node sources to it.
"""

from __future__ import annotations

from .debounce import PendingRefresh, RefreshDebouncer
from .session import ViewerSession


def run_viewer(*args, **kwargs):
    """Lazily import the interactive bootstrap to keep package imports light."""
    from .app import run_viewer as _run_viewer

    return _run_viewer(*args, **kwargs)


__all__ = [
    "PendingRefresh",
    "RefreshDebouncer",
    "ViewerSession",
    "run_viewer",
]
