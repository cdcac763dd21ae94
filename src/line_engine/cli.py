"""Console entry point: ``line-engine PATH``."""

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence

from line_engine.runtime import telemetry
from line_engine.runtime.settings import load_settings
from line_engine.session import ConsoleDisplay, Session
from line_engine.store import FileStore

ERROR_FILE_READ = "Cannot open file for reading"


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="line-engine", description="Edit a text file one command at a time."
    )
    parser.add_argument("path", help="File to edit (created if missing)")
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Work on an in-memory copy; never read or write the file",
    )
    parser.add_argument(
        "--tui", action="store_true", help="Run the Textual interface instead"
    )
    parser.add_argument(
        "--no-color",
        dest="color",
        action="store_false",
        default=None,
        help="Disable ANSI colours in console output",
    )
    parser.add_argument(
        "--log-preset",
        choices=telemetry.preset_names(),
        help="Telemetry preset (default: LINE_ENGINE_LOG_* environment)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    if args.log_preset:
        telemetry.configure(preset=args.log_preset)
    settings = load_settings(color=args.color)

    if args.tui:
        from line_engine.adapters.textual.app import run

        run(args.path, debug=args.debug, settings=settings)
        return 0

    display = ConsoleDisplay(color=settings.color)
    try:
        store = FileStore.open(args.path, debug=args.debug, encoding=settings.encoding)
    except IsADirectoryError as exc:
        display.error(str(exc))
        return 1
    except OSError:
        display.error(ERROR_FILE_READ)
        return 1

    Session(store, display, settings=settings).run()
    return 0


if __name__ == "__main__":  # pragma: no cover - manual entry point
    sys.exit(main())
