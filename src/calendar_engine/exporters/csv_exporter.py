"""Tabular CSV exporter."""

import csv
from pathlib import Path
from typing import Sequence

from ..models.event import Event
from ..utils.date_utils import format_time
from .base import CalendarExporter

HEADER = [
    "Subject",
    "Start Date",
    "Start Time",
    "End Date",
    "End Time",
    "Description",
    "Location",
    "Private",
]


class CsvCalendarExporter(CalendarExporter):
    """One row per event, in the column layout calendar apps import."""

    format_name = "csv"

    def write(self, events: Sequence[Event], path: Path) -> None:
        with open(path, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow(HEADER)
            for event in events:
                writer.writerow(to_row(event))


def to_row(event: Event) -> list[str]:
    """Map an event onto the CSV columns."""
    return [
        event.subject,
        event.start.date().isoformat(),
        format_time(event.start.time()),
        event.end.date().isoformat(),
        format_time(event.end.time()),
        event.description or "",
        event.location or "",
        "TRUE" if event.is_private else "FALSE",
    ]
