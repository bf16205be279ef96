"""Tests for CSV and iCalendar exporters."""

import csv
from datetime import datetime

import pytest
from icalendar import Calendar as ICalendar

from calendar_engine.exporters import (
    CsvCalendarExporter,
    IcsCalendarExporter,
    resolve_exporter,
)
from calendar_engine.exporters.ics_exporter import event_uid
from calendar_engine.models.event import EventStatus
from calendar_engine.utils.date_utils import parse_datetime
from calendar_engine.utils.exceptions import ExportError, InvalidEnumError


@pytest.fixture
def populated(calendar):
    calendar.create_single_event(
        "Design review",
        datetime(2025, 3, 3, 9, 0),
        datetime(2025, 3, 3, 10, 30),
        description="Agenda: API, schema; rollout",
        location="Room 1, Floor 2",
        status=EventStatus.PRIVATE,
    )
    calendar.create_all_day_event("Holiday", datetime(2025, 3, 4).date())
    return calendar


class TestResolveExporter:
    @pytest.mark.parametrize(
        "fmt, filename, expected",
        [
            ("csv", "out.csv", CsvCalendarExporter),
            ("ICS", "out.ics", IcsCalendarExporter),
            ("ical", "out.ical", IcsCalendarExporter),
            ("cal", "out.CSV", CsvCalendarExporter),
            ("cal", "out.ics", IcsCalendarExporter),
        ],
    )
    def test_formats(self, tmp_path, fmt, filename, expected):
        exporter = resolve_exporter(fmt, filename, tmp_path)
        assert isinstance(exporter, expected)
        assert exporter.export_dir == tmp_path

    @pytest.mark.parametrize("fmt, filename", [("xml", "out.xml"), ("cal", "out.txt"), ("cal", "out")])
    def test_unsupported(self, tmp_path, fmt, filename):
        with pytest.raises(InvalidEnumError):
            resolve_exporter(fmt, filename, tmp_path)


class TestCsvExporter:
    def test_round_trip(self, populated, tmp_path):
        events = populated.get_all_events_read_only()
        path = CsvCalendarExporter(tmp_path).export(events, "work.csv")

        assert path == (tmp_path / "work.csv").resolve()
        with open(path, newline="", encoding="utf-8") as f:
            rows = list(csv.DictReader(f))

        assert len(rows) == len(events)
        for row, event in zip(rows, events):
            assert row["Subject"] == event.subject
            assert parse_datetime(f"{row['Start Date']}T{row['Start Time']}") == event.start
            assert parse_datetime(f"{row['End Date']}T{row['End Time']}") == event.end
            assert row["Description"] == (event.description or "")
            assert row["Location"] == (event.location or "")
            assert row["Private"] == ("TRUE" if event.is_private else "FALSE")

    def test_header(self, calendar, tmp_path):
        path = CsvCalendarExporter(tmp_path).export(calendar.get_all_events_read_only(), "empty.csv")
        assert path.read_text(encoding="utf-8").splitlines() == [
            "Subject,Start Date,Start Time,End Date,End Time,Description,Location,Private"
        ]

    def test_creates_export_dir(self, populated, tmp_path):
        path = CsvCalendarExporter(tmp_path / "nested" / "dir").export(
            populated.get_all_events_read_only(), "work.csv"
        )
        assert path.exists()

    def test_write_failure(self, populated, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        with pytest.raises(ExportError):
            CsvCalendarExporter(blocker).export(populated.get_all_events_read_only(), "work.csv")


class TestIcsExporter:
    def test_events_parse_back(self, populated, tmp_path):
        events = populated.get_all_events_read_only()
        path = IcsCalendarExporter(tmp_path).export(events, "work.ics")

        parsed = ICalendar.from_ical(path.read_bytes())
        components = list(parsed.walk("VEVENT"))
        assert len(components) == 2

        review = components[0]
        assert str(review["summary"]) == "Design review"
        assert str(review["description"]) == "Agenda: API, schema; rollout"
        assert str(review["location"]) == "Room 1, Floor 2"
        assert str(review["class"]) == "PRIVATE"
        assert review.decoded("dtstart") == datetime(2025, 3, 3, 9, 0)
        assert review.decoded("dtend") == datetime(2025, 3, 3, 10, 30)
        assert "dtstamp" in review

        holiday = components[1]
        assert str(holiday["class"]) == "PUBLIC"
        assert "description" not in holiday

    def test_special_characters_are_escaped(self, populated, tmp_path):
        path = IcsCalendarExporter(tmp_path).export(populated.get_all_events_read_only(), "work.ics")
        text = path.read_bytes().decode("utf-8")
        assert "Room 1\\, Floor 2" in text
        assert "schema\\; rollout" in text
        assert "DTSTART:20250303T090000" in text

    def test_uid_is_stable(self, populated):
        event = populated.get_all_events_read_only()[0]
        assert event_uid(event) == "Designreview-20250303T090000@calendar-engine"
