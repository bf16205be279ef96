"""CLI entry point for the calendar engine."""

import argparse
import sys
from pathlib import Path
from typing import Iterator, Optional, Sequence

from .config import StartupConfig, config
from .controller import MultiCalendarController
from .engine.registry import CalendarRegistry
from .utils.exceptions import CalendarEngineError
from .utils.logging import setup_logging
from .views.text_view import TextView

PROMPT = "Enter command: "


def build_registry(startup: StartupConfig) -> CalendarRegistry:
    """Create the default calendar, then the ones listed in the startup file."""
    registry = CalendarRegistry()
    registry.add_calendar(config.default_calendar_name, config.default_timezone)
    if startup.has_config:
        startup.apply(registry)
    return registry


def _interactive_lines() -> Iterator[str]:
    while True:
        try:
            yield input(PROMPT)
        except EOFError:
            return


def _file_lines(path: Path) -> Iterator[str]:
    with open(path, encoding="utf-8") as f:
        for line in f:
            yield line.rstrip("\n")


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Calendar Engine - Manage calendars of single and recurring events"
    )
    parser.add_argument(
        "--mode",
        choices=["interactive", "headless"],
        default="interactive",
        help="Read commands from stdin (interactive) or from a file (headless)",
    )
    parser.add_argument(
        "file",
        nargs="?",
        type=Path,
        help="Command file (headless mode)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=Path("calendars.yaml"),
        help="Startup calendars file (default: calendars.yaml)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Verbose output",
    )

    args = parser.parse_args(argv)

    # Setup logging
    log_level = "DEBUG" if args.verbose else config.log_level
    logger = setup_logging(level=log_level, log_file=config.log_file)

    if args.mode == "headless" and args.file is None:
        parser.error("headless mode requires a command file")

    try:
        startup = StartupConfig(args.config, default_timezone=config.default_timezone)
        registry = build_registry(startup)
        logger.info(
            f"Started with calendars {registry.get_all_calendar_names()}, "
            f"using '{registry.active_calendar_name}'"
        )

        controller = MultiCalendarController(registry, TextView(), export_dir=config.export_dir)

        if args.mode == "headless":
            if not args.file.exists():
                logger.error(f"Command file not found: {args.file}")
                return 1
            failures = controller.run(_file_lines(args.file))
            return 1 if failures else 0

        controller.run(_interactive_lines())
        return 0

    except CalendarEngineError as e:
        logger.error(f"Calendar engine error: {e}")
        return 1
    except Exception as e:
        logger.exception(f"Unexpected error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
