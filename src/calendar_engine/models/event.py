"""Immutable calendar event data model."""

from datetime import date, datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel

from ..utils.date_utils import ALL_DAY_END, ALL_DAY_START, convert_wall_time
from ..utils.exceptions import InvalidEnumError

EventKey = tuple[str, datetime]


class EventStatus(str, Enum):
    """Event visibility status."""

    PUBLIC = "public"
    PRIVATE = "private"

    @classmethod
    def parse(cls, token: str) -> "EventStatus":
        """
        Parse a visibility token case-insensitively.

        Raises:
            InvalidEnumError: If the token is neither public nor private
        """
        try:
            return cls(token.strip().lower())
        except (AttributeError, ValueError) as e:
            raise InvalidEnumError(
                f"Invalid status: {token!r} (expected public or private)"
            ) from e


class EventProperty(str, Enum):
    """Mutable event attributes addressed by edit commands."""

    SUBJECT = "subject"
    START = "start"
    END = "end"
    DESCRIPTION = "description"
    LOCATION = "location"
    STATUS = "status"

    @classmethod
    def parse(cls, token: "str | EventProperty") -> "EventProperty":
        """
        Parse a property token case-insensitively.

        Raises:
            InvalidEnumError: If the token names no editable property
        """
        if isinstance(token, cls):
            return token
        try:
            return cls(token.strip().lower())
        except (AttributeError, ValueError) as e:
            choices = ", ".join(p.value for p in cls)
            raise InvalidEnumError(
                f"Invalid property: {token!r} (expected one of {choices})"
            ) from e


class BusyStatus(str, Enum):
    """Result of an instant-in-time conflict query."""

    BUSY = "busy"
    FREE = "free"


class Event(BaseModel):
    """One calendar occurrence.

    Timestamps are naive wall-clock values in the owning calendar's zone.
    Instances are frozen; every change produces a new Event.
    """

    subject: str
    start: datetime
    end: datetime
    description: Optional[str] = None
    location: Optional[str] = None
    status: EventStatus = EventStatus.PUBLIC

    # Weak reference to the series this event was generated by
    series_id: Optional[str] = None

    model_config = {"frozen": True}

    @property
    def key(self) -> EventKey:
        """Natural key used to locate an occurrence."""
        return (self.subject, self.start)

    @property
    def is_all_day(self) -> bool:
        return (
            self.start.date() == self.end.date()
            and self.start.time() == ALL_DAY_START
            and self.end.time() == ALL_DAY_END
        )

    @property
    def is_private(self) -> bool:
        return self.status != EventStatus.PUBLIC

    def contains(self, moment: datetime) -> bool:
        """Inclusive test of whether ``moment`` falls inside the event."""
        return self.start <= moment <= self.end

    def overlaps(self, window_start: datetime, window_end: datetime) -> bool:
        """Inclusive test of whether the event intersects a window."""
        return self.start <= window_end and self.end >= window_start

    def occurs_on(self, day: date) -> bool:
        return self.start.date() <= day <= self.end.date()

    def to_zone(self, from_zone: str, to_zone: str) -> "Event":
        """
        Re-express event times in another zone.

        Args:
            from_zone: Zone the current timestamps are expressed in
            to_zone: Target zone name

        Returns:
            New Event with converted times
        """
        return self.model_copy(
            update={
                "start": convert_wall_time(self.start, from_zone, to_zone),
                "end": convert_wall_time(self.end, from_zone, to_zone),
            }
        )
