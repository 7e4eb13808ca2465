"""Persistent JSON config helpers.

Stores refresh timing, log-buffer sizing, and the block-grid preference.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

from ..log_view import DEFAULT_MAX_LINES, DEFAULT_PAGE_SIZE
from .debounce import DEFAULT_DEBOUNCE_SECONDS

logger = logging.getLogger(__name__)

APP_NAME = "treeviewer"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

DEFAULT_POLL_SECONDS = 1.0


@dataclass(frozen=True)
class ViewerSettings:
    """Resolved runtime settings after config defaults are applied."""

    debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS
    page_size: int = DEFAULT_PAGE_SIZE
    max_lines: int = DEFAULT_MAX_LINES
    poll_seconds: float = DEFAULT_POLL_SECONDS
    show_blocks: bool = True


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except Exception:
        logger.warning("ignoring unreadable config at %s", CONFIG_PATH, exc_info=True)
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Filesystem/serialization errors are logged and otherwise ignored so an
    unwritable config never interrupts a session.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except Exception:
        logger.warning("could not write config to %s", CONFIG_PATH, exc_info=True)


def _positive_int(value: object, default: int) -> int:
    """Accept strictly positive JSON integers; booleans count as invalid."""
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        return default
    return value


def _positive_float(value: object, default: float) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        return default
    return float(value)


def load_settings() -> ViewerSettings:
    """Read every setting from config, falling back per key to defaults."""
    data = load_config()
    debounce_ms = data.get("debounce_ms")
    debounce_seconds = DEFAULT_DEBOUNCE_SECONDS
    if not isinstance(debounce_ms, bool) and isinstance(debounce_ms, (int, float)) and debounce_ms >= 0:
        debounce_seconds = float(debounce_ms) / 1000.0
    show_blocks = data.get("show_blocks")
    return ViewerSettings(
        debounce_seconds=debounce_seconds,
        page_size=_positive_int(data.get("page_size"), DEFAULT_PAGE_SIZE),
        max_lines=_positive_int(data.get("max_lines"), DEFAULT_MAX_LINES),
        poll_seconds=_positive_float(data.get("poll_seconds"), DEFAULT_POLL_SECONDS),
        show_blocks=show_blocks if isinstance(show_blocks, bool) else True,
    )


def save_show_blocks(show_blocks: bool) -> None:
    """Persist block-grid visibility preference as a boolean."""
    config = load_config()
    config["show_blocks"] = bool(show_blocks)
    save_config(config)


__all__ = [
    "CONFIG_PATH",
    "DEFAULT_POLL_SECONDS",
    "ViewerSettings",
    "load_config",
    "load_settings",
    "save_config",
    "save_show_blocks",
]
