"""Command handlers operating on the calendar registry."""

import logging
import re

from ..engine.registry import CalendarRegistry
from ..utils.date_utils import parse_date, parse_datetime
from .base import CalendarCommand, CalendarView
from .parsing import TEXT, option, require_option, unquote

logger = logging.getLogger(__name__)


class CreateCalendarCommand(CalendarCommand):
    verb = "create calendar"
    prefix = re.compile(r"^\s*create\s+calendar\b", re.IGNORECASE)
    grammar = re.compile(r"^\s*create\s+calendar\s+--", re.IGNORECASE)
    usage = "create calendar --name <name> --timezone <zone>"

    def execute(self, command: str, target: CalendarRegistry, view: CalendarView) -> None:
        self.parse(command)
        name = require_option(command, "name")
        timezone = require_option(command, "timezone")
        target.add_calendar(name, timezone)
        logger.info(f"Calendar '{name}' created in {timezone}")
        view.display_success(f"Calendar '{name}' created")


class EditCalendarCommand(CalendarCommand):
    """edit calendar --name <name> --property <name|timezone> [--value] <value>"""

    verb = "edit calendar"
    prefix = re.compile(r"^\s*edit\s+calendar\b", re.IGNORECASE)
    grammar = re.compile(r"^\s*edit\s+calendar\s+--", re.IGNORECASE)
    usage = "edit calendar --name <name> --property <name|timezone> --value <value>"

    # Value given positionally right after the property
    positional_value = re.compile(rf"--property\s+\S+\s+(?!--)({TEXT})", re.IGNORECASE)

    def execute(self, command: str, target: CalendarRegistry, view: CalendarView) -> None:
        self.parse(command)
        name = require_option(command, "name")
        prop = require_option(command, "property")

        value = option(command, "value")
        if value is None:
            match = self.positional_value.search(command)
            value = unquote(match.group(1)) if match else require_option(command, "value")

        target.edit_calendar(name, prop, value)
        logger.info(f"Calendar '{name}' {prop.lower()} set to {value}")
        view.display_success(f"Calendar '{name}' updated")


class UseCalendarCommand(CalendarCommand):
    verb = "use calendar"
    prefix = re.compile(r"^\s*use\s+calendar\b", re.IGNORECASE)
    grammar = re.compile(r"^\s*use\s+calendar\s+--", re.IGNORECASE)
    usage = "use calendar --name <name>"

    def execute(self, command: str, target: CalendarRegistry, view: CalendarView) -> None:
        self.parse(command)
        name = require_option(command, "name")
        target.use_calendar(name)
        view.display_success(f"Using calendar '{name}'")


class CopyEventCommand(CalendarCommand):
    verb = "copy event"
    prefix = re.compile(r"^\s*copy\s+event\b", re.IGNORECASE)
    grammar = re.compile(
        rf"^\s*copy\s+event\s+(?P<subject>{TEXT})\s+on\s+(?P<start>\S+)\s+"
        rf"--target\s+(?P<target>{TEXT})\s+to\s+(?P<to>\S+)\s*$",
        re.IGNORECASE,
    )
    usage = "copy event <subject> on <start> --target <calendar> to <start>"

    def execute(self, command: str, target: CalendarRegistry, view: CalendarView) -> None:
        match = self.parse(command)
        subject = unquote(match["subject"])
        target_name = unquote(match["target"])
        target.copy_event(
            subject,
            parse_datetime(match["start"]),
            target_name,
            parse_datetime(match["to"]),
        )
        view.display_success(f"Event '{subject}' copied to '{target_name}'")


class CopyEventsCommand(CalendarCommand):
    """
    copy events on <date> --target <calendar> to <date>
    copy events between <date> and <date> --target <calendar> to <date>
    """

    verb = "copy events"
    prefix = re.compile(r"^\s*copy\s+events\b", re.IGNORECASE)
    grammar = re.compile(
        r"^\s*copy\s+events\s+"
        r"(?:on\s+(?P<on>\S+)|between\s+(?P<start>\S+)\s+and\s+(?P<end>\S+))\s+"
        rf"--target\s+(?P<target>{TEXT})\s+to\s+(?P<to>\S+)\s*$",
        re.IGNORECASE,
    )
    usage = (
        "copy events (on <date> | between <date> and <date>) "
        "--target <calendar> to <date>"
    )

    def execute(self, command: str, target: CalendarRegistry, view: CalendarView) -> None:
        match = self.parse(command)
        target_name = unquote(match["target"])
        target_date = parse_date(match["to"])

        if match["on"] is not None:
            copied = target.copy_events_on_date(parse_date(match["on"]), target_name, target_date)
        else:
            copied = target.copy_events_between(
                parse_date(match["start"]), parse_date(match["end"]), target_name, target_date
            )
        view.display_success(f"{len(copied)} event(s) copied to '{target_name}'")
