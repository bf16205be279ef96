"""Abstract base classes for command handlers."""

import re
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Protocol

from ..engine.calendar import Calendar
from ..engine.registry import CalendarRegistry
from ..models.event import BusyStatus
from ..utils.exceptions import InvalidFormatError


class CalendarView(Protocol):
    """Output surface command handlers report through."""

    def display_message(self, message: str) -> None:
        ...

    def display_success(self, message: str) -> None:
        ...

    def display_error(self, message: str) -> None:
        ...

    def display_status(self, status: BusyStatus) -> None:
        ...

    def display_export_result(self, path: Path) -> None:
        ...

    def display_exit(self) -> None:
        ...


class CommandHandler(ABC):
    """
    Handler for one command verb.

    ``prefix`` decides whether the handler owns a command; ``grammar`` is
    the full shape the command must then have.
    """

    verb: str
    prefix: re.Pattern
    grammar: re.Pattern
    usage: str

    def can_handle(self, command: str) -> bool:
        """Whether this handler owns the command."""
        return self.prefix.match(command) is not None

    def parse(self, command: str) -> re.Match:
        """
        Match the command against the full grammar.

        Raises:
            InvalidFormatError: If the command is malformed
        """
        match = self.grammar.match(command)
        if match is None:
            raise InvalidFormatError(f"Invalid {self.verb} command. Usage: {self.usage}")
        return match

    @abstractmethod
    def execute(self, command: str, target: Any, view: CalendarView) -> None:
        """
        Run the command against its target model.

        Args:
            command: Raw command text
            target: Calendar or registry the command operates on
            view: Output surface

        Raises:
            CalendarEngineError: If the command is invalid or the model
                rejects the operation
        """


class EventCommand(CommandHandler):
    """Handler operating on a single calendar."""

    @abstractmethod
    def execute(self, command: str, target: Calendar, view: CalendarView) -> None:
        ...


class CalendarCommand(CommandHandler):
    """Handler operating on the calendar registry."""

    @abstractmethod
    def execute(self, command: str, target: CalendarRegistry, view: CalendarView) -> None:
        ...
