"""File exporters for calendar events."""

from pathlib import Path

from ..utils.exceptions import InvalidEnumError
from .base import CalendarExporter
from .csv_exporter import CsvCalendarExporter
from .ics_exporter import IcsCalendarExporter

EXPORTERS: dict[str, type[CalendarExporter]] = {
    "csv": CsvCalendarExporter,
    "ics": IcsCalendarExporter,
    "ical": IcsCalendarExporter,
}


def resolve_exporter(
    format_name: str, filename: str, export_dir: Path = Path("exports")
) -> CalendarExporter:
    """
    Pick an exporter by format name, or by extension when the format is ``cal``.

    Raises:
        InvalidEnumError: If the format is not supported
    """
    key = format_name.lower()
    if key == "cal":
        key = Path(filename).suffix.lstrip(".").lower()

    exporter_cls = EXPORTERS.get(key)
    if exporter_cls is None:
        raise InvalidEnumError(f"Unsupported export format: {key or format_name}")
    return exporter_cls(export_dir)


__all__ = [
    "CalendarExporter",
    "CsvCalendarExporter",
    "EXPORTERS",
    "IcsCalendarExporter",
    "resolve_exporter",
]
