"""Recurrence rule model for event series."""

import uuid
from datetime import date, datetime, time, timedelta
from enum import IntEnum
from typing import Iterator, Optional

from pydantic import BaseModel, Field

from .event import Event


class Weekday(IntEnum):
    """Days of the week, numbered like ``date.weekday()``."""

    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6

    @property
    def code(self) -> str:
        """One-letter code used by the command grammar."""
        return "MTWRFSU"[self.value]

    @classmethod
    def of(cls, day: date) -> "Weekday":
        return cls(day.weekday())

    @classmethod
    def from_code(cls, letter: str) -> "Weekday":
        return cls("MTWRFSU".index(letter.upper()))


def format_weekdays(weekdays: frozenset[Weekday]) -> str:
    """Render weekdays as their codes in week order."""
    return "".join(day.code for day in sorted(weekdays))


class SeriesRule(BaseModel):
    """
    Recurrence rule shared by the events of one series.

    Exactly one of ``occurrences`` and ``until`` terminates the series.
    """

    series_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    weekdays: frozenset[Weekday]
    occurrences: Optional[int] = None
    until: Optional[date] = None

    model_config = {"frozen": True}

    def dates(self, anchor: date) -> Iterator[date]:
        """
        Walk forward from the anchor date, yielding matching dates.

        Args:
            anchor: First date considered

        Yields:
            Dates whose weekday belongs to the rule, in increasing order
        """
        current = anchor
        emitted = 0
        while True:
            if self.occurrences is not None and emitted >= self.occurrences:
                return
            if self.until is not None and current > self.until:
                return
            if Weekday.of(current) in self.weekdays:
                emitted += 1
                yield current
            current += timedelta(days=1)

    def expand(
        self,
        subject: str,
        start: datetime,
        end_time: time,
    ) -> list[Event]:
        """
        Generate the series events.

        Args:
            subject: Subject shared by every occurrence
            start: Anchor date and start time of day
            end_time: End time of day of every occurrence

        Returns:
            One Event per matching date, all carrying this series id
        """
        return [
            Event(
                subject=subject,
                start=datetime.combine(day, start.time()),
                end=datetime.combine(day, end_time),
                series_id=self.series_id,
            )
            for day in self.dates(start.date())
        ]

    def renewed(self, **changes) -> "SeriesRule":
        """Copy of this rule under a freshly generated series id."""
        changes.setdefault("series_id", str(uuid.uuid4()))
        return self.model_copy(update=changes)
