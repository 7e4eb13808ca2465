"""Cooperative debounce scheduling for tree refreshes."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

DEFAULT_DEBOUNCE_SECONDS = 0.5


@dataclass(frozen=True)
class PendingRefresh:
    """Handle for one scheduled refresh; superseded handles never run."""

    token: int
    due_at: float


class RefreshDebouncer:
    """Coalesce bursts of change notifications into one refresh.

    Every ``schedule`` call replaces the pending refresh with a new one due
    ``delay_seconds`` later. The owner polls ``pop_due`` from its single
    processing loop, so a refresh is never interrupted by a newer schedule.
    """

    def __init__(
        self,
        delay_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
        *,
        monotonic: Callable[[], float],
    ) -> None:
        self.delay_seconds = delay_seconds
        self._monotonic = monotonic
        self._next_token = 1
        self._pending: PendingRefresh | None = None

    @property
    def pending(self) -> PendingRefresh | None:
        return self._pending

    def schedule(self) -> PendingRefresh:
        pending = PendingRefresh(token=self._next_token, due_at=self._monotonic() + self.delay_seconds)
        self._next_token += 1
        self._pending = pending
        return pending

    def cancel(self) -> None:
        self._pending = None

    def pop_due(self) -> PendingRefresh | None:
        """Return and clear the pending refresh once its quiet period elapsed."""
        pending = self._pending
        if pending is None or self._monotonic() < pending.due_at:
            return None
        self._pending = None
        return pending

    def seconds_until_due(self) -> float | None:
        if self._pending is None:
            return None
        return max(0.0, self._pending.due_at - self._monotonic())


__all__ = [
    "DEFAULT_DEBOUNCE_SECONDS",
    "PendingRefresh",
    "RefreshDebouncer",
]
