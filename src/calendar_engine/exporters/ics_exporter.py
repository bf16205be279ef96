"""iCalendar (RFC 5545) exporter."""

import re
from datetime import datetime
from pathlib import Path
from typing import Sequence

import pytz
from icalendar import Calendar as ICalendar
from icalendar import Event as ICalEvent

from ..models.event import Event
from .base import CalendarExporter

ICS_DATETIME_FORMAT = "%Y%m%dT%H%M%S"
PRODID = "-//Calendar Engine//EN"


def event_uid(event: Event) -> str:
    """Stable identifier derived from the event's natural key."""
    subject = re.sub(r"[^a-zA-Z0-9]", "", event.subject)
    return f"{subject}-{event.start.strftime(ICS_DATETIME_FORMAT)}@calendar-engine"


class IcsCalendarExporter(CalendarExporter):
    """One VEVENT per event; free text is escaped by icalendar."""

    format_name = "ics"

    def write(self, events: Sequence[Event], path: Path) -> None:
        ical = ICalendar()
        ical.add("prodid", PRODID)
        ical.add("version", "2.0")
        ical.add("calscale", "GREGORIAN")
        ical.add("method", "PUBLISH")

        stamp = datetime.now(pytz.utc)
        for event in events:
            ical.add_component(to_component(event, stamp))

        path.write_bytes(ical.to_ical())


def to_component(event: Event, stamp: datetime) -> ICalEvent:
    """Build the VEVENT for one event."""
    component = ICalEvent()
    component.add("uid", event_uid(event))
    # Naive timestamps serialize as floating local time (yyyyMMddTHHmmss)
    component.add("dtstart", event.start)
    component.add("dtend", event.end)
    component.add("summary", event.subject)
    if event.description:
        component.add("description", event.description)
    if event.location:
        component.add("location", event.location)
    component.add("class", "PRIVATE" if event.is_private else "PUBLIC")
    component.add("dtstamp", stamp)
    return component
