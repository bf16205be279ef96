"""Routes command lines to the calendar and event dispatchers."""

import logging
from pathlib import Path
from typing import Iterable, Optional

from .commands.base import CalendarView
from .commands.dispatcher import CommandDispatcher, calendar_dispatcher, event_dispatcher
from .engine.registry import CalendarRegistry
from .utils.exceptions import CalendarEngineError, UnknownCommandError

logger = logging.getLogger(__name__)

EXIT_COMMAND = "exit"


class MultiCalendarController:
    """
    Two-tier command router.

    Calendar commands run against the registry. Anything else is handed to
    the event dispatcher together with the active calendar.
    """

    def __init__(
        self,
        registry: CalendarRegistry,
        view: CalendarView,
        export_dir: Path = Path("exports"),
        calendar_commands: Optional[CommandDispatcher] = None,
        event_commands: Optional[CommandDispatcher] = None,
    ):
        """
        Initialize controller.

        Args:
            registry: Calendars the commands operate on
            view: Output surface
            export_dir: Directory export commands write into
            calendar_commands: Dispatcher for registry commands
            event_commands: Dispatcher for active-calendar commands
        """
        self.registry = registry
        self.view = view
        self.calendar_commands = calendar_commands or calendar_dispatcher()
        self.event_commands = event_commands or event_dispatcher(export_dir)

    def process_command(self, command: str) -> None:
        """
        Execute one command line.

        Raises:
            NotFoundError: If an event command arrives with no active calendar
            UnknownCommandError: If neither dispatcher accepts the command
            CalendarEngineError: If the command is rejected
        """
        command = command.strip()
        if self.calendar_commands.can_handle(command):
            self.calendar_commands.execute_command(command, self.registry, self.view)
            return

        if not self.event_commands.can_handle(command):
            raise UnknownCommandError(f"Unknown command: {command}")

        calendar = self.registry.require_active_calendar()
        self.event_commands.execute_command(command, calendar, self.view)

    def run(self, lines: Iterable[str]) -> int:
        """
        Process command lines until they run out or ``exit`` is read.

        Errors are reported through the view and processing continues.

        Returns:
            Number of commands that failed
        """
        failures = 0
        for line in lines:
            command = line.strip()
            if not command:
                continue
            if command.lower() == EXIT_COMMAND:
                self.view.display_exit()
                break

            try:
                self.process_command(command)
            except CalendarEngineError as e:
                failures += 1
                logger.warning(f"Command failed: {command!r}: {e}")
                self.view.display_error(str(e))
            except Exception as e:
                failures += 1
                logger.exception(f"Unexpected error running {command!r}")
                self.view.display_error(f"Unexpected error: {e}")

        logger.debug(f"Command stream finished with {failures} failure(s)")
        return failures
