"""Calendar holding single and recurring events."""

from datetime import date, datetime
from typing import Iterable, Optional

from ..models.event import BusyStatus, Event, EventKey, EventProperty, EventStatus
from ..models.series import SeriesRule, Weekday
from ..utils.date_utils import (
    all_day_bounds,
    format_datetime,
    get_timezone,
    parse_datetime,
)
from ..utils.exceptions import (
    DuplicateEventError,
    InvalidFormatError,
    InvalidRangeError,
    InvalidWeekdayError,
    NotFoundError,
)
from .printer import render_events, sort_events
from .series_index import SeriesIndex
from .strategies import apply_property

Replacement = tuple[Event, Event]


class Calendar:
    """
    A named calendar owning its events.

    Every mutating call validates before it touches state, so a rejected
    mutation leaves the calendar unchanged.
    """

    def __init__(self, name: str, timezone: str = "UTC"):
        """
        Initialize an empty calendar.

        Args:
            name: Calendar name, unique within its registry
            timezone: Named zone identifier (e.g. "America/New_York")
        """
        get_timezone(timezone)
        self.name = name
        self.timezone = timezone
        self._events: dict[EventKey, Event] = {}
        self._series = SeriesIndex()

    def __len__(self) -> int:
        return len(self._events)

    def __contains__(self, key: object) -> bool:
        return key in self._events

    def __repr__(self) -> str:
        return f"Calendar(name={self.name!r}, timezone={self.timezone!r}, events={len(self)})"

    # ------------------------------------------------------------------
    # Creation
    # ------------------------------------------------------------------

    def create_single_event(
        self,
        subject: str,
        start: datetime,
        end: datetime,
        description: Optional[str] = None,
        location: Optional[str] = None,
        status: EventStatus = EventStatus.PUBLIC,
    ) -> Event:
        """
        Create one event.

        Raises:
            InvalidRangeError: If the event ends before it starts
            DuplicateEventError: If (subject, start) is already taken
        """
        _require_subject(subject)
        if end < start:
            raise InvalidRangeError("Event ends before starting")

        event = Event(
            subject=subject,
            start=start,
            end=end,
            description=description,
            location=location,
            status=status,
        )
        self._insert([event])
        return event

    def create_all_day_event(self, subject: str, on: date) -> Event:
        """Create an event covering the whole of ``on``."""
        start, end = all_day_bounds(on)
        return self.create_single_event(subject, start, end)

    def create_series(
        self,
        subject: str,
        start: datetime,
        end: datetime,
        weekdays: Iterable[Weekday],
        occurrences: Optional[int] = None,
        until: Optional[date] = None,
    ) -> list[Event]:
        """
        Create a recurring series.

        Args:
            subject: Subject of every occurrence
            start: Anchor date and start time of day
            end: End of the first occurrence, on the anchor date
            weekdays: Days the series repeats on
            occurrences: Number of occurrences to generate
            until: Last date (inclusive) an occurrence may fall on

        Returns:
            The generated events, ordered by start

        Raises:
            InvalidWeekdayError: If no weekday is given
            InvalidRangeError: If the interval or the termination is invalid
            DuplicateEventError: If any occurrence collides; nothing is inserted
        """
        _require_subject(subject)
        if end < start:
            raise InvalidRangeError("Event ends before starting")
        if start.date() != end.date():
            raise InvalidRangeError("Series events cannot span more than one day")

        rule = _build_rule(weekdays, occurrences, until, start.date())
        events = rule.expand(subject, start, end.time())
        if not events:
            raise InvalidRangeError("Series has no occurrences before its until date")

        self._insert(events)
        self._series.add(rule, [event.key for event in events])
        return events

    def create_all_day_series(
        self,
        subject: str,
        on: date,
        weekdays: Iterable[Weekday],
        occurrences: Optional[int] = None,
        until: Optional[date] = None,
    ) -> list[Event]:
        """Create a series of all-day events anchored at ``on``."""
        start, end = all_day_bounds(on)
        return self.create_series(
            subject, start, end, weekdays, occurrences=occurrences, until=until
        )

    # ------------------------------------------------------------------
    # Lookup and editing
    # ------------------------------------------------------------------

    def find_event(
        self, subject: str, start: datetime, end: Optional[datetime] = None
    ) -> Event:
        """
        Locate an event by subject and start, optionally checking its end.

        Raises:
            NotFoundError: If no event matches
        """
        event = self._events.get((subject, start))
        if event is None or (end is not None and event.end != end):
            raise NotFoundError(
                f"Event not found: {subject!r} starting {format_datetime(start)}"
            )
        return event

    def edit_single_event(
        self,
        subject: str,
        prop: "EventProperty | str",
        start: datetime,
        end: Optional[datetime],
        new_value: str,
    ) -> Event:
        """
        Edit exactly one event.

        Args:
            subject: Subject of the event to edit
            prop: Property to change
            start: Start of the event to edit
            end: Optional end used to disambiguate
            new_value: Raw new value

        Returns:
            The replacement event
        """
        prop = EventProperty.parse(prop)
        target = self.find_event(subject, start, end)
        updated = apply_property(target, prop, new_value)

        # A member moved to another time of day no longer follows its rule
        if (
            prop is EventProperty.START
            and target.series_id is not None
            and updated.start.time() != target.start.time()
        ):
            updated = updated.model_copy(update={"series_id": None})

        self._replace([(target, updated)])
        return updated

    def edit_event_from(
        self,
        subject: str,
        prop: "EventProperty | str",
        start: datetime,
        new_value: str,
    ) -> Event:
        """Edit the one event located by subject and start."""
        return self.edit_single_event(subject, prop, start, None, new_value)

    def edit_series_from(
        self,
        subject: str,
        prop: "EventProperty | str",
        start: datetime,
        new_value: str,
    ) -> list[Event]:
        """
        Edit an occurrence and every later occurrence of its series.

        Events outside any series are edited on their own.

        Returns:
            The replacement events
        """
        prop = EventProperty.parse(prop)
        anchor = self.find_event(subject, start)
        if self._series.rule(anchor.series_id) is None:
            return [self.edit_single_event(subject, prop, start, None, new_value)]

        keys = self._series.members_from(anchor.series_id, anchor.start)
        return self._edit_series(anchor, prop, new_value, keys, split=True)

    def edit_series_all(
        self,
        subject: str,
        prop: "EventProperty | str",
        start: datetime,
        new_value: str,
    ) -> list[Event]:
        """Edit every occurrence of the series the located event belongs to."""
        prop = EventProperty.parse(prop)
        anchor = self.find_event(subject, start)
        if self._series.rule(anchor.series_id) is None:
            return [self.edit_single_event(subject, prop, start, None, new_value)]

        keys = self._series.members(anchor.series_id)
        return self._edit_series(anchor, prop, new_value, keys, split=False)

    def _edit_series(
        self,
        anchor: Event,
        prop: EventProperty,
        new_value: str,
        keys: list[EventKey],
        split: bool,
    ) -> list[Event]:
        targets = [self._events[key] for key in keys]

        if prop in (EventProperty.START, EventProperty.END):
            moment = parse_datetime(new_value)
            if moment.date() != anchor.start.date():
                raise InvalidRangeError(
                    "Series edits cannot move occurrences to another date"
                )
            field = prop.value
            delta = moment - getattr(anchor, field)
            replacements = [
                (old, apply_property(old, prop, format_datetime(getattr(old, field) + delta)))
                for old in targets
            ]
        else:
            replacements = [(old, apply_property(old, prop, new_value)) for old in targets]

        self._validate(replacements)

        if split and prop is EventProperty.START:
            tail_rule = self._series.split(anchor.series_id, anchor.start)
            if tail_rule is not None:
                replacements = [
                    (old, new.model_copy(update={"series_id": tail_rule.series_id}))
                    for old, new in replacements
                ]

        self._apply(replacements)
        return sort_events(new for _, new in replacements)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def events_on_date(self, day: date) -> list[Event]:
        """Events touching ``day``, in presentation order."""
        return sort_events(e for e in self._events.values() if e.occurs_on(day))

    def events_in_range(self, start: datetime, end: datetime) -> list[Event]:
        """Events intersecting the inclusive window [start, end]."""
        if end < start:
            raise InvalidRangeError("Range ends before it starts")
        return sort_events(e for e in self._events.values() if e.overlaps(start, end))

    def get_events_on_date(self, day: date) -> str:
        """Rendered listing of the events on ``day``."""
        return render_events(self.events_on_date(day), "No events scheduled on this date")

    def get_events_in_range(self, start: datetime, end: datetime) -> str:
        """Rendered listing of the events intersecting [start, end]."""
        return render_events(
            self.events_in_range(start, end), "No events scheduled between this range"
        )

    def is_busy(self, moment: datetime) -> BusyStatus:
        """Busy when any event interval contains ``moment`` (inclusive)."""
        if any(event.contains(moment) for event in self._events.values()):
            return BusyStatus.BUSY
        return BusyStatus.FREE

    def get_all_events_read_only(self) -> tuple[Event, ...]:
        """Snapshot of every event, ordered by start."""
        return tuple(sort_events(self._events.values()))

    # ------------------------------------------------------------------
    # Series introspection
    # ------------------------------------------------------------------

    def _rule_for(self, event: Event) -> Optional[SeriesRule]:
        stored = self._events.get(event.key)
        if stored is None:
            return None
        return self._series.rule(stored.series_id)

    def is_series_event(self, event: Event) -> bool:
        return self._rule_for(event) is not None

    def get_series_weekdays(self, event: Event) -> frozenset[Weekday]:
        rule = self._rule_for(event)
        return rule.weekdays if rule else frozenset()

    def get_series_until_end(self, event: Event) -> Optional[date]:
        rule = self._rule_for(event)
        return rule.until if rule else None

    def get_series_occurrence_count(self, event: Event) -> Optional[int]:
        rule = self._rule_for(event)
        return rule.occurrences if rule else None

    # ------------------------------------------------------------------
    # Registry support
    # ------------------------------------------------------------------

    def import_events(
        self,
        singles: Iterable[Event],
        series_groups: Iterable[list[Event]] = (),
    ) -> list[Event]:
        """
        Insert copied events atomically.

        Singles lose any series reference; each group in ``series_groups``
        becomes a new series whose weekdays are those its events fall on.

        Grouped events may cross midnight once converted to this zone.

        Raises:
            DuplicateEventError: If any event collides; nothing is inserted
        """
        inserted = [event.model_copy(update={"series_id": None}) for event in singles]
        rules: list[tuple[SeriesRule, list[Event]]] = []
        for group in series_groups:
            if not group:
                continue
            rule = SeriesRule(
                weekdays=frozenset(Weekday.of(e.start.date()) for e in group),
                occurrences=len(group),
            )
            members = [e.model_copy(update={"series_id": rule.series_id}) for e in group]
            rules.append((rule, members))
            inserted.extend(members)

        self._insert(inserted)
        for rule, members in rules:
            self._series.add(rule, [e.key for e in members])
        return sort_events(inserted)

    def series_groups(self, events: Iterable[Event]) -> tuple[list[Event], list[list[Event]]]:
        """Partition events into singles and per-series groups."""
        singles: list[Event] = []
        groups: dict[str, list[Event]] = {}
        for event in events:
            if self._series.rule(event.series_id) is None:
                singles.append(event)
            else:
                groups.setdefault(event.series_id, []).append(event)
        return singles, [sort_events(group) for group in groups.values()]

    def shift_timezone(self, new_zone: str) -> None:
        """
        Re-express every event in a new zone, keeping the same instants.

        Raises:
            InvalidFormatError: If the zone is unknown
            DuplicateEventError: If two events would collide after conversion
        """
        get_timezone(new_zone)
        replacements = [
            (event, event.to_zone(self.timezone, new_zone))
            for event in self._events.values()
        ]
        self._validate(replacements, same_day=False)
        self._apply(replacements)
        self.timezone = new_zone

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _insert(self, events: list[Event]) -> None:
        seen: set[EventKey] = set()
        for event in events:
            if event.key in self._events or event.key in seen:
                raise DuplicateEventError(
                    f"Event already exists: {event.subject!r} starting "
                    f"{format_datetime(event.start)}"
                )
            seen.add(event.key)
        for event in events:
            self._events[event.key] = event

    def _validate(self, replacements: list[Replacement], same_day: bool = True) -> None:
        replaced = {old.key for old, _ in replacements}
        seen: set[EventKey] = set()
        for old, new in replacements:
            if new.end < new.start:
                raise InvalidRangeError("Event end cannot be before start")
            # Only a move is held to the one-day rule; zone shifts may cross midnight
            moved = (new.start, new.end) != (old.start, old.end)
            if (
                same_day
                and moved
                and new.series_id is not None
                and new.start.date() != new.end.date()
            ):
                raise InvalidRangeError("A series event must not span more than one day")
            taken = new.key in self._events and new.key not in replaced
            if taken or new.key in seen:
                raise DuplicateEventError(
                    f"Event already exists: {new.subject!r} starting "
                    f"{format_datetime(new.start)}"
                )
            seen.add(new.key)

    def _apply(self, replacements: list[Replacement]) -> None:
        rekeys: dict[str, dict[EventKey, EventKey]] = {}
        for old, new in replacements:
            del self._events[old.key]
            if new.series_id is not None:
                rekeys.setdefault(new.series_id, {})[old.key] = new.key
            elif old.series_id is not None:
                self._series.detach(old.series_id, old.key)
        for _, new in replacements:
            self._events[new.key] = new
        for series_id, mapping in rekeys.items():
            self._series.rekey(series_id, mapping)

    def _replace(self, replacements: list[Replacement]) -> None:
        self._validate(replacements)
        self._apply(replacements)


def _require_subject(subject: str) -> None:
    if not subject or not subject.strip():
        raise InvalidFormatError("Event subject cannot be empty")


def _build_rule(
    weekdays: Iterable[Weekday],
    occurrences: Optional[int],
    until: Optional[date],
    anchor: date,
) -> SeriesRule:
    days = frozenset(weekdays)
    if not days:
        raise InvalidWeekdayError("At least one weekday must be specified")
    if (occurrences is None) == (until is None):
        raise InvalidRangeError("Series needs either an occurrence count or an until date")
    if occurrences is not None and occurrences < 1:
        raise InvalidRangeError("Series occurrence count must be at least 1")
    if until is not None and until < anchor:
        raise InvalidRangeError("Series until date is before its start date")
    return SeriesRule(weekdays=days, occurrences=occurrences, until=until)
