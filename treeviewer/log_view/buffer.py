"""Bounded log-line history with a paginated read cursor."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

DEFAULT_MAX_LINES = 3000
DEFAULT_PAGE_SIZE = 40
BANNER_PREFIX = "==="


@dataclass(frozen=True)
class LogPage:
    """One visible window over the buffer."""

    start: int
    end: int
    total: int
    lines: tuple[str, ...]
    pinned: str | None = None

    @property
    def header(self) -> str:
        return f"[{self.start + 1}-{self.end} of {self.total}]"

    def render(self) -> str:
        """Join pinned banner, header and page lines as display text."""
        parts: list[str] = []
        if self.pinned is not None:
            parts.append(self.pinned)
        parts.append(self.header)
        parts.extend(self.lines)
        return "\n".join(parts)


@dataclass
class LogBuffer:
    """Append-only line history capped at ``max_lines``.

    Overflow drops the oldest lines and moves ``scroll_offset`` back by the
    same amount so the reader keeps looking at the same content.
    """

    max_lines: int = DEFAULT_MAX_LINES
    page_size: int = DEFAULT_PAGE_SIZE
    lines: list[str] = field(default_factory=list)
    scroll_offset: int = 0

    def __len__(self) -> int:
        return len(self.lines)

    @property
    def max_offset(self) -> int:
        return max(0, len(self.lines) - self.page_size)

    def append(self, line: str) -> None:
        self.lines.append(line)
        self._trim()

    def extend(self, new_lines: Iterable[str]) -> None:
        self.lines.extend(new_lines)
        self._trim()

    def _trim(self) -> None:
        excess = len(self.lines) - self.max_lines
        if excess <= 0:
            return
        del self.lines[:excess]
        self.scroll_offset = max(0, self.scroll_offset - excess)

    def _clamp(self, offset: int) -> None:
        self.scroll_offset = max(0, min(offset, self.max_offset))

    def page_up(self) -> None:
        self._clamp(self.scroll_offset - self.page_size)

    def page_down(self) -> None:
        self._clamp(self.scroll_offset + self.page_size)

    def jump_to_top(self) -> None:
        self.scroll_offset = 0

    def jump_to_bottom(self) -> None:
        self.scroll_offset = self.max_offset

    def pinned_line(self) -> str | None:
        """Return the version banner when it is still the first buffered line."""
        if self.lines and self.lines[0].startswith(BANNER_PREFIX):
            return self.lines[0]
        return None

    def page(self) -> LogPage:
        """Return the page at the current offset.

        The banner is pinned above the page whenever the page does not
        already start with it.
        """
        total = len(self.lines)
        end = min(self.scroll_offset + self.page_size, total)
        start = max(0, min(self.scroll_offset, end))
        pinned = self.pinned_line() if start > 0 else None
        return LogPage(
            start=start,
            end=end,
            total=total,
            lines=tuple(self.lines[start:end]),
            pinned=pinned,
        )


__all__ = [
    "DEFAULT_MAX_LINES",
    "DEFAULT_PAGE_SIZE",
    "LogBuffer",
    "LogPage",
]
