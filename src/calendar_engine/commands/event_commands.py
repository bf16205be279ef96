"""Command handlers operating on the active calendar."""

import logging
import re
from pathlib import Path

from ..engine.calendar import Calendar
from ..exporters import resolve_exporter
from ..models.series import format_weekdays
from ..utils.date_utils import parse_date, parse_datetime
from ..utils.exceptions import InvalidFormatError
from .base import CalendarView, EventCommand
from .parsing import TEXT, parse_count, parse_weekdays, unquote

logger = logging.getLogger(__name__)


class CreateEventCommand(EventCommand):
    """create event <subject> (from <start> to <end> | on <date>) [repeats ...]"""

    verb = "create event"
    prefix = re.compile(r"^\s*create\s+event\b", re.IGNORECASE)
    grammar = re.compile(
        rf"^\s*create\s+event\s+(?P<subject>{TEXT})\s+"
        r"(?:from\s+(?P<start>\S+)\s+to\s+(?P<end>\S+)|on\s+(?P<on>\S+))"
        r"(?:\s+repeats\s+(?P<weekdays>\S+)\s+"
        r"(?:for\s+(?P<count>\S+)\s+times|until\s+(?P<until>\S+)))?\s*$",
        re.IGNORECASE,
    )
    usage = (
        "create event <subject> (from <start> to <end> | on <date>) "
        "[repeats <weekdays> (for <N> times | until <date>)]"
    )

    def execute(self, command: str, target: Calendar, view: CalendarView) -> None:
        match = self.parse(command)
        subject = unquote(match["subject"])

        if match["weekdays"] is None:
            if match["on"] is not None:
                target.create_all_day_event(subject, parse_date(match["on"]))
            else:
                target.create_single_event(
                    subject, parse_datetime(match["start"]), parse_datetime(match["end"])
                )
            view.display_success(f"Event '{subject}' created")
            return

        weekdays = parse_weekdays(match["weekdays"])
        occurrences = parse_count(match["count"]) if match["count"] else None
        until = parse_date(match["until"]) if match["until"] else None

        if match["on"] is not None:
            events = target.create_all_day_series(
                subject, parse_date(match["on"]), weekdays, occurrences=occurrences, until=until
            )
        else:
            events = target.create_series(
                subject,
                parse_datetime(match["start"]),
                parse_datetime(match["end"]),
                weekdays,
                occurrences=occurrences,
                until=until,
            )
        logger.debug(
            f"Series '{subject}' on {format_weekdays(weekdays)} expanded to {len(events)} events"
        )
        view.display_success(f"Event series '{subject}' created with {len(events)} occurrences")


class EditEventCommand(EventCommand):
    """
    edit (event | events | series) <property> <subject> from <start> [to <end>] with <value>

    ``event`` edits one occurrence, ``events`` edits an occurrence and the
    ones following it in its series, ``series`` edits the whole series.
    """

    verb = "edit event"
    prefix = re.compile(r"^\s*edit\s+(?:events?|series)\b", re.IGNORECASE)
    grammar = re.compile(
        rf"^\s*edit\s+(?P<scope>events|event|series)\s+(?P<property>\S+)\s+"
        rf"(?P<subject>{TEXT})\s+from\s+(?P<start>\S+)"
        r"(?:\s+to\s+(?P<end>\S+))?\s+with\s+(?P<value>.+?)\s*$",
        re.IGNORECASE,
    )
    usage = "edit (event|events|series) <property> <subject> from <start> [to <end>] with <value>"

    def execute(self, command: str, target: Calendar, view: CalendarView) -> None:
        match = self.parse(command)
        scope = match["scope"].lower()
        prop = match["property"]
        subject = unquote(match["subject"])
        start = parse_datetime(match["start"])
        value = unquote(match["value"])

        if scope == "event":
            if match["end"] is not None:
                target.edit_single_event(subject, prop, start, parse_datetime(match["end"]), value)
            else:
                target.edit_event_from(subject, prop, start, value)
            view.display_success(f"Event '{subject}' updated")
            return

        if match["end"] is not None:
            raise InvalidFormatError(f"edit {scope} does not take an end time")

        if scope == "events":
            updated = target.edit_series_from(subject, prop, start, value)
        else:
            updated = target.edit_series_all(subject, prop, start, value)
        view.display_success(f"{len(updated)} event(s) of '{subject}' updated")


class PrintEventsCommand(EventCommand):
    """print events (on <date> | from <start> to <end>)"""

    verb = "print events"
    prefix = re.compile(r"^\s*print\s+events\b", re.IGNORECASE)
    grammar = re.compile(
        r"^\s*print\s+events\s+"
        r"(?:on\s+(?P<on>\S+)|from\s+(?P<start>\S+)\s+to\s+(?P<end>\S+))\s*$",
        re.IGNORECASE,
    )
    usage = "print events (on <date> | from <start> to <end>)"

    def execute(self, command: str, target: Calendar, view: CalendarView) -> None:
        match = self.parse(command)
        if match["on"] is not None:
            listing = target.get_events_on_date(parse_date(match["on"]))
        else:
            listing = target.get_events_in_range(
                parse_datetime(match["start"]), parse_datetime(match["end"])
            )
        view.display_message(listing)


class ShowStatusCommand(EventCommand):
    """show status on <date-time>"""

    verb = "show status"
    prefix = re.compile(r"^\s*show\s+status\b", re.IGNORECASE)
    grammar = re.compile(r"^\s*show\s+status\s+on\s+(?P<at>\S+)\s*$", re.IGNORECASE)
    usage = "show status on <date-time>"

    def execute(self, command: str, target: Calendar, view: CalendarView) -> None:
        match = self.parse(command)
        view.display_status(target.is_busy(parse_datetime(match["at"])))


class ExportCommand(EventCommand):
    """export <format> <filename>

    ``format`` is csv, ics or ical; ``cal`` picks the format from the
    filename extension.
    """

    verb = "export"
    prefix = re.compile(r"^\s*export\b", re.IGNORECASE)
    grammar = re.compile(rf"^\s*export\s+(?P<format>\S+)\s+(?P<filename>{TEXT})\s*$", re.IGNORECASE)
    usage = "export <csv|ics|cal> <filename>"

    def __init__(self, export_dir: Path = Path("exports")):
        self.export_dir = export_dir

    def execute(self, command: str, target: Calendar, view: CalendarView) -> None:
        match = self.parse(command)
        filename = unquote(match["filename"])
        exporter = resolve_exporter(match["format"], filename, self.export_dir)
        path = exporter.export(target.get_all_events_read_only(), filename)
        view.display_export_result(path)
