"""ANSI palette used by the terminal display."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    reset: str
    legend: str
    header: str
    log_text: str
    divider: str
    block_label: str
    click_ready: str
    long_click_ready: str
    action_ambiguous: str
    action_missing: str


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    legend="\033[2;38;5;250m",
    header="\033[1;38;5;81m",
    log_text="\033[38;5;46m",
    divider="\033[2m",
    block_label="\033[1;97m",
    click_ready="\033[48;5;28m",
    long_click_ready="\033[48;5;25m",
    action_ambiguous="\033[48;5;124m",
    action_missing="\033[48;5;240m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="",
    legend="",
    header="",
    log_text="",
    divider="",
    block_label="",
    click_ready="",
    long_click_ready="",
    action_ambiguous="",
    action_missing="",
)


__all__ = [
    "DEFAULT_THEME",
    "PLAIN_THEME",
    "UITheme",
]
