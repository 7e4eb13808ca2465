"""Terminal column measurement for plain (un-styled) text."""

from __future__ import annotations

import unicodedata


def char_display_width(ch: str) -> int:
    """Return terminal column width for one character.

    Combining marks and control characters consume no columns, East Asian
    wide/fullwidth characters consume two.
    """
    if unicodedata.combining(ch) or unicodedata.category(ch) == "Cc":
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def display_width(text: str) -> int:
    return sum(char_display_width(ch) for ch in text)


def fit_columns(text: str, width: int) -> str:
    """Clip ``text`` to ``width`` columns and pad the remainder with spaces."""
    if width <= 0:
        return ""
    out: list[str] = []
    col = 0
    for ch in text:
        if ch in "\r\n\t":
            ch = " "
        w = char_display_width(ch)
        if w == 0:
            continue
        if col + w > width:
            break
        out.append(ch)
        col += w
    out.append(" " * (width - col))
    return "".join(out)


def split_columns(text: str, width: int) -> tuple[str, str]:
    """Split ``text`` after ``width`` columns; a straddling wide char moves right."""
    col = 0
    for index, ch in enumerate(text):
        w = char_display_width(ch)
        if col + w > width:
            return text[:index] + " " * (width - col), text[index:]
        col += w
    return text + " " * max(0, width - col), ""


__all__ = [
    "char_display_width",
    "display_width",
    "fit_columns",
    "split_columns",
]
