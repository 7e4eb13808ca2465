"""Logging bootstrap for treeviewer runs.

All ``treeviewer.*`` module loggers propagate to one package logger that owns
a rotating file handler and, outside raw terminal mode, a stderr handler.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from logging.handlers import RotatingFileHandler
from pathlib import Path

from platformdirs import user_log_dir

LOGGER_NAME = "treeviewer"
LOG_FILENAME = "treeviewer.log"


@dataclass(frozen=True)
class LoggingRuntime:
    """Resolved runtime logging configuration."""

    level_name: str
    level: int
    file_path: str
    stream: bool


_RUNTIME: LoggingRuntime | None = None


def parse_level(raw: str | None) -> tuple[str, int]:
    normalized = str(raw or "INFO").strip().upper()
    level = getattr(logging, normalized, None)
    if not isinstance(level, int):
        level = logging.INFO
    return logging.getLevelName(level), level


def default_log_path() -> Path:
    return Path(user_log_dir("treeviewer", appauthor=False)) / LOG_FILENAME


def _make_stream_handler(level: int) -> logging.Handler:
    handler = logging.StreamHandler()
    handler.setLevel(max(level, logging.WARNING))
    handler.setFormatter(logging.Formatter("[%(name)s] %(levelname)s %(message)s"))
    return handler


def _make_file_handler(level: int, file_path: str) -> logging.Handler:
    handler = RotatingFileHandler(
        file_path,
        maxBytes=5 * 1024 * 1024,
        backupCount=3,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s [%(threadName)s] %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
    )
    return handler


def configure(*, level: str | None = None, log_file: str | None = None, stream: bool = True) -> LoggingRuntime:
    """Wire the package logger; repeated calls return the first runtime.

    ``stream`` must be false while the terminal is in raw mode, otherwise
    stderr output would tear the screen.
    """
    global _RUNTIME
    if _RUNTIME is not None:
        return _RUNTIME

    level_name, level_value = parse_level(level or os.environ.get("TREEVIEWER_LOG_LEVEL"))
    file_path = log_file or os.environ.get("TREEVIEWER_LOG_FILE") or str(default_log_path())
    Path(file_path).parent.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level_value)
    logger.propagate = False
    logger.handlers.clear()
    logger.addHandler(_make_file_handler(level_value, file_path))
    if stream:
        logger.addHandler(_make_stream_handler(level_value))

    logging.captureWarnings(True)

    _RUNTIME = LoggingRuntime(level_name=level_name, level=level_value, file_path=file_path, stream=stream)
    return _RUNTIME


def reset() -> None:
    """Drop handlers installed by ``configure`` so it can run again."""
    global _RUNTIME
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    _RUNTIME = None


__all__ = [
    "LoggingRuntime",
    "configure",
    "default_log_path",
    "parse_level",
    "reset",
]
