"""Ordered first-match command dispatch."""

import logging
from pathlib import Path
from typing import Any, Iterable, Optional

from ..utils.exceptions import UnknownCommandError
from .base import CalendarView, CommandHandler
from .calendar_commands import (
    CopyEventCommand,
    CopyEventsCommand,
    CreateCalendarCommand,
    EditCalendarCommand,
    UseCalendarCommand,
)
from .event_commands import (
    CreateEventCommand,
    EditEventCommand,
    ExportCommand,
    PrintEventsCommand,
    ShowStatusCommand,
)

logger = logging.getLogger(__name__)


class CommandDispatcher:
    """
    Routes command text to the first handler that accepts it.

    Handlers are tried in registration order, so a handler registered
    earlier wins when two prefixes overlap.
    """

    def __init__(self, handlers: Iterable[CommandHandler] = ()):
        self._handlers: list[CommandHandler] = list(handlers)

    @property
    def handlers(self) -> tuple[CommandHandler, ...]:
        return tuple(self._handlers)

    def register(self, handler: CommandHandler) -> None:
        """Append a handler with the lowest priority."""
        self._handlers.append(handler)

    def find_handler(self, command: str) -> Optional[CommandHandler]:
        for handler in self._handlers:
            if handler.can_handle(command):
                return handler
        return None

    def can_handle(self, command: str) -> bool:
        return self.find_handler(command) is not None

    def execute_command(self, command: str, target: Any, view: CalendarView) -> None:
        """
        Execute a command with the first matching handler.

        Raises:
            UnknownCommandError: If no handler accepts the command
        """
        handler = self.find_handler(command)
        if handler is None:
            raise UnknownCommandError(f"Unknown command: {command}")

        logger.debug(f"Dispatching {command!r} to {handler.verb!r}")
        handler.execute(command, target, view)


def event_dispatcher(export_dir: Path = Path("exports")) -> CommandDispatcher:
    """Dispatcher for commands run against one calendar."""
    return CommandDispatcher(
        [
            CreateEventCommand(),
            EditEventCommand(),
            PrintEventsCommand(),
            ShowStatusCommand(),
            ExportCommand(export_dir),
        ]
    )


def calendar_dispatcher() -> CommandDispatcher:
    """Dispatcher for commands run against the calendar registry."""
    return CommandDispatcher(
        [
            CreateCalendarCommand(),
            EditCalendarCommand(),
            UseCalendarCommand(),
            CopyEventsCommand(),
            CopyEventCommand(),
        ]
    )
