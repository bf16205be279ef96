"""Registry of named calendars with one active selection."""

from datetime import date, datetime, timedelta
from typing import Optional

from ..models.calendar import CalendarInfo
from ..models.event import Event
from ..utils.exceptions import (
    DuplicateCalendarError,
    InvalidEnumError,
    InvalidFormatError,
    InvalidRangeError,
    NotFoundError,
)
from .calendar import Calendar

CALENDAR_PROPERTIES = ("name", "timezone")


class CalendarRegistry:
    """Owns every calendar and tracks which one is active."""

    def __init__(self) -> None:
        self._calendars: dict[str, Calendar] = {}
        self._active_name: Optional[str] = None

    def __contains__(self, name: object) -> bool:
        return name in self._calendars

    def __len__(self) -> int:
        return len(self._calendars)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def add_calendar(self, name: str, timezone: str) -> Calendar:
        """
        Create an empty calendar.

        The first calendar created becomes the active one.

        Args:
            name: Unique, case-sensitive calendar name
            timezone: Named zone identifier

        Returns:
            The new calendar

        Raises:
            DuplicateCalendarError: If the name is taken
            InvalidFormatError: If the name is empty or the zone unknown
        """
        if not name or not name.strip():
            raise InvalidFormatError("Calendar name cannot be empty")
        if name in self._calendars:
            raise DuplicateCalendarError(f"Calendar already exists: {name}")

        calendar = Calendar(name, timezone)
        self._calendars[name] = calendar
        if self._active_name is None:
            self._active_name = name
        return calendar

    def edit_calendar(self, name: str, prop: str, new_value: str) -> Calendar:
        """
        Rename a calendar or change its zone.

        A zone change re-expresses every event in the new zone.

        Raises:
            NotFoundError: If the calendar does not exist
            InvalidEnumError: If the property is not name or timezone
            DuplicateCalendarError: If renaming onto an existing name
        """
        calendar = self.get_calendar(name)
        prop = (prop or "").strip().lower()
        if prop not in CALENDAR_PROPERTIES:
            raise InvalidEnumError(
                f"Invalid calendar property: {prop!r} (expected name or timezone)"
            )

        if prop == "name":
            self._rename(name, new_value)
        else:
            calendar.shift_timezone(new_value)
        return calendar

    def _rename(self, old_name: str, new_name: str) -> None:
        if not new_name or not new_name.strip():
            raise InvalidFormatError("Calendar name cannot be empty")
        if new_name in self._calendars:
            raise DuplicateCalendarError(f"Calendar already exists: {new_name}")

        # Rebuild to keep creation order with the new key in place
        self._calendars = {
            (new_name if key == old_name else key): calendar
            for key, calendar in self._calendars.items()
        }
        self._calendars[new_name].name = new_name
        if self._active_name == old_name:
            self._active_name = new_name

    def use_calendar(self, name: str) -> Calendar:
        """
        Make a calendar active.

        Raises:
            NotFoundError: If the calendar does not exist; the active
                calendar is left unchanged
        """
        calendar = self.get_calendar(name)
        self._active_name = name
        return calendar

    # ------------------------------------------------------------------
    # Access
    # ------------------------------------------------------------------

    @property
    def active_calendar_name(self) -> Optional[str]:
        return self._active_name

    def get_active_calendar(self) -> Optional[Calendar]:
        """Active calendar, or None when none is selected."""
        if self._active_name is None:
            return None
        return self._calendars[self._active_name]

    def require_active_calendar(self) -> Calendar:
        calendar = self.get_active_calendar()
        if calendar is None:
            raise NotFoundError("No calendar in use. Use 'use calendar --name <name>' first")
        return calendar

    def get_calendar(self, name: str) -> Calendar:
        try:
            return self._calendars[name]
        except KeyError:
            raise NotFoundError(f"Calendar not found: {name}") from None

    def get_all_calendar_names(self) -> list[str]:
        return list(self._calendars)

    def get_calendar_timezone(self, name: str) -> str:
        return self.get_calendar(name).timezone

    def list_calendars(self) -> list[CalendarInfo]:
        return [
            CalendarInfo(
                name=name,
                timezone=calendar.timezone,
                is_active=name == self._active_name,
                event_count=len(calendar),
            )
            for name, calendar in self._calendars.items()
        ]

    # ------------------------------------------------------------------
    # Cross-calendar copy
    # ------------------------------------------------------------------

    def copy_event(
        self,
        subject: str,
        source_start: datetime,
        target_calendar_name: str,
        target_start: datetime,
    ) -> Event:
        """
        Copy one event of the active calendar into another calendar.

        The copy starts at ``target_start`` (wall clock of the target zone)
        and keeps the wall-clock duration of the original.

        Raises:
            NotFoundError: If there is no active calendar, no such event or
                no such target calendar
            DuplicateEventError: If the copy collides in the target
        """
        source = self.require_active_calendar()
        event = source.find_event(subject, source_start)
        target = self.get_calendar(target_calendar_name)

        copied = event.model_copy(
            update={"start": target_start, "end": target_start + (event.end - event.start)}
        )
        return target.import_events([copied])[0]

    def copy_events_on_date(
        self,
        on: date,
        target_calendar_name: str,
        target_date: date,
    ) -> list[Event]:
        """
        Copy every event of the active calendar touching ``on``.

        Events are converted to the target zone, then moved by the number
        of days between ``on`` and ``target_date``.
        """
        source = self.require_active_calendar()
        target = self.get_calendar(target_calendar_name)
        events = source.events_on_date(on)
        if not events:
            raise NotFoundError(f"No events found on {on.isoformat()}")

        shift = target_date - on
        return target.import_events(
            [_shifted(e, source.timezone, target.timezone, shift) for e in events]
        )

    def copy_events_between(
        self,
        start_date: date,
        end_date: date,
        target_calendar_name: str,
        target_start_date: date,
    ) -> list[Event]:
        """
        Copy every event of the active calendar within a date interval.

        Series members stay grouped as series in the target calendar.
        """
        if end_date < start_date:
            raise InvalidRangeError("Interval ends before it starts")
        source = self.require_active_calendar()
        target = self.get_calendar(target_calendar_name)

        events = [
            e
            for e in source.get_all_events_read_only()
            if e.start.date() <= end_date and e.end.date() >= start_date
        ]
        if not events:
            raise NotFoundError(
                f"No events found between {start_date.isoformat()} and {end_date.isoformat()}"
            )

        shift = target_start_date - start_date
        singles, groups = source.series_groups(events)
        return target.import_events(
            [_shifted(e, source.timezone, target.timezone, shift) for e in singles],
            [
                [_shifted(e, source.timezone, target.timezone, shift) for e in group]
                for group in groups
            ],
        )


def _shifted(event: Event, from_zone: str, to_zone: str, shift: timedelta) -> Event:
    converted = event.to_zone(from_zone, to_zone)
    return converted.model_copy(
        update={"start": converted.start + shift, "end": converted.end + shift}
    )
