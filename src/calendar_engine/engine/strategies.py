"""Field-mutation strategies for editing events."""

from typing import Protocol

from ..models.event import Event, EventProperty, EventStatus
from ..utils.date_utils import parse_datetime
from ..utils.exceptions import InvalidFormatError


class FieldStrategy(Protocol):
    """Protocol for field-mutation strategies."""

    def apply(self, event: Event, raw_value: str) -> Event:
        """
        Produce a new event with one field replaced.

        Args:
            event: Event to derive from
            raw_value: Raw string value from the command

        Returns:
            New Event; every other field is copied unchanged
        """
        ...


class SubjectStrategy:
    """Replace the subject with any non-empty text."""

    def apply(self, event: Event, raw_value: str) -> Event:
        if raw_value is None or not raw_value.strip():
            raise InvalidFormatError("Subject cannot be empty")
        return event.model_copy(update={"subject": raw_value})


class DescriptionStrategy:
    """Replace the description; empty text is allowed."""

    def apply(self, event: Event, raw_value: str) -> Event:
        return event.model_copy(update={"description": raw_value})


class LocationStrategy:
    """Replace the location; empty text is allowed."""

    def apply(self, event: Event, raw_value: str) -> Event:
        return event.model_copy(update={"location": raw_value})


class StartStrategy:
    """Replace the start timestamp.

    The interval is not re-validated here; callers check start <= end.
    """

    def apply(self, event: Event, raw_value: str) -> Event:
        return event.model_copy(update={"start": parse_datetime(raw_value)})


class EndStrategy:
    """Replace the end timestamp."""

    def apply(self, event: Event, raw_value: str) -> Event:
        return event.model_copy(update={"end": parse_datetime(raw_value)})


class StatusStrategy:
    """Replace the visibility status (public or private)."""

    def apply(self, event: Event, raw_value: str) -> Event:
        return event.model_copy(update={"status": EventStatus.parse(raw_value)})


STRATEGIES: dict[EventProperty, FieldStrategy] = {
    EventProperty.SUBJECT: SubjectStrategy(),
    EventProperty.START: StartStrategy(),
    EventProperty.END: EndStrategy(),
    EventProperty.DESCRIPTION: DescriptionStrategy(),
    EventProperty.LOCATION: LocationStrategy(),
    EventProperty.STATUS: StatusStrategy(),
}


def apply_property(
    event: Event, prop: "EventProperty | str", raw_value: str
) -> Event:
    """
    Apply the strategy registered for a property.

    Raises:
        InvalidEnumError: If the property is unknown
        InvalidFormatError: If the value cannot be parsed
    """
    return STRATEGIES[EventProperty.parse(prop)].apply(event, raw_value)
