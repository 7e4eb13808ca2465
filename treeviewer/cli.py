"""Command-line front door for treeviewer.

Parses CLI options, resolves settings and the node source to observe, then
either prints a one-shot report or dispatches into the interactive viewer.
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path

from . import __version__, logging_setup
from .node_model import SourceError
from .runtime.app import open_device_source, open_file_source, run_once, run_viewer
from .runtime.config import ViewerSettings, load_settings

logger = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def _nonnegative_float(value: str) -> float:
    try:
        parsed = float(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}") from exc
    if parsed < 0:
        raise argparse.ArgumentTypeError("value must be >= 0")
    return parsed


def _stdio_is_tty() -> bool:
    return sys.stdin.isatty() and sys.stdout.isatty()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="treeviewer",
        description="Watch a UI node tree, log its structure on change, and derive clickable blocks.",
    )
    parser.add_argument(
        "path",
        nargs="?",
        default=None,
        help="uiautomator XML dump or JSON tree to watch. Omit with --adb.",
    )
    parser.add_argument("--adb", action="store_true", help="Poll the hierarchy of a connected Android device.")
    parser.add_argument("--serial", default=None, help="Device serial passed to adb -s.")
    parser.add_argument("--adb-path", default="adb", help="adb executable (default: adb on PATH).")
    parser.add_argument("--once", action="store_true", help="Refresh once, print the log and blocks, and exit.")
    parser.add_argument("--no-blocks", action="store_true", help="Do not derive or show interactive blocks.")
    parser.add_argument("--debounce-ms", type=_nonnegative_float, default=None, help="Quiet period before a refresh.")
    parser.add_argument("--poll-seconds", type=_nonnegative_float, default=None, help="Source polling interval.")
    parser.add_argument("--page-size", type=_positive_int, default=None, help="Log lines per page.")
    parser.add_argument("--no-color", action="store_true", help="Disable ANSI colors in the viewer.")
    parser.add_argument("--log-level", default=None, help="Log level for the treeviewer log file.")
    parser.add_argument("--log-file", default=None, help="Write logs here instead of the default location.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def resolve_settings(args: argparse.Namespace) -> ViewerSettings:
    """Apply one-run CLI overrides on top of persisted settings."""
    settings = load_settings()
    if args.debounce_ms is not None:
        settings = replace(settings, debounce_seconds=args.debounce_ms / 1000.0)
    if args.poll_seconds is not None and args.poll_seconds > 0:
        settings = replace(settings, poll_seconds=args.poll_seconds)
    if args.page_size is not None:
        settings = replace(settings, page_size=args.page_size)
    if args.no_blocks:
        settings = replace(settings, show_blocks=False)
    return settings


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and run the viewer or a one-shot report."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.adb and args.path is not None:
        raise SystemExit("Cannot combine a dump path with --adb.")
    if not args.adb and args.path is None:
        raise SystemExit("Provide a dump path or --adb.")

    interactive = not args.once and _stdio_is_tty()
    logging_setup.configure(level=args.log_level, log_file=args.log_file, stream=not interactive)
    settings = resolve_settings(args)
    logger.info("treeviewer %s starting (interactive=%s)", __version__, interactive)

    try:
        if args.adb:
            binding = open_device_source(settings, serial=args.serial, adb=args.adb_path)
        else:
            path = Path(args.path)
            if not path.exists():
                raise SystemExit(f"Path not found: {path}")
            binding = open_file_source(path, settings)
    except SourceError as exc:
        raise SystemExit(str(exc)) from exc

    if not interactive:
        sys.stdout.write(run_once(binding, settings))
        return
    run_viewer(binding, settings, no_color=args.no_color)


if __name__ == "__main__":
    main()
