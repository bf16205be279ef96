"""Data models for calendar events."""

from .calendar import CalendarInfo
from .event import BusyStatus, Event, EventKey, EventProperty, EventStatus
from .series import SeriesRule, Weekday

__all__ = [
    "BusyStatus",
    "CalendarInfo",
    "Event",
    "EventKey",
    "EventProperty",
    "EventStatus",
    "SeriesRule",
    "Weekday",
]
