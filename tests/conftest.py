"""Shared fixtures for the calendar engine tests."""

import io
from datetime import datetime
from pathlib import Path

import pytest

from calendar_engine.engine.calendar import Calendar
from calendar_engine.engine.registry import CalendarRegistry
from calendar_engine.models.event import BusyStatus
from calendar_engine.models.series import Weekday

MWF = frozenset({Weekday.MONDAY, Weekday.WEDNESDAY, Weekday.FRIDAY})


class RecordingView:
    """View that keeps what handlers report."""

    def __init__(self):
        self.messages: list[str] = []
        self.successes: list[str] = []
        self.errors: list[str] = []
        self.statuses: list[BusyStatus] = []
        self.exports: list[Path] = []
        self.exited = False

    def display_message(self, message: str) -> None:
        self.messages.append(message)

    def display_success(self, message: str) -> None:
        self.successes.append(message)

    def display_error(self, message: str) -> None:
        self.errors.append(message)

    def display_status(self, status: BusyStatus) -> None:
        self.statuses.append(status)

    def display_export_result(self, path: Path) -> None:
        self.exports.append(path)

    def display_exit(self) -> None:
        self.exited = True


@pytest.fixture
def calendar() -> Calendar:
    return Calendar("Work", "UTC")


@pytest.fixture
def team_sync(calendar):
    """MWF 09:00-10:00 series of six, Mar 3 to Mar 14 2025."""
    return calendar.create_series(
        "Team sync",
        datetime(2025, 3, 3, 9, 0),
        datetime(2025, 3, 3, 10, 0),
        MWF,
        occurrences=6,
    )


@pytest.fixture
def registry() -> CalendarRegistry:
    registry = CalendarRegistry()
    registry.add_calendar("Work", "UTC")
    registry.add_calendar("Home", "America/New_York")
    return registry


@pytest.fixture
def view() -> RecordingView:
    return RecordingView()


@pytest.fixture
def output() -> io.StringIO:
    return io.StringIO()
