"""Plain-text rendering of event listings."""

from typing import Iterable

from ..models.event import Event
from ..utils.date_utils import format_time


def sort_events(events: Iterable[Event]) -> list[Event]:
    """Order events by start timestamp, ties broken by subject."""
    return sorted(events, key=lambda e: (e.start, e.subject))


def format_event(event: Event) -> str:
    """Render one event as a listing line."""
    line = (
        f"subject {event.subject} "
        f"starting on {event.start.date().isoformat()} at {format_time(event.start.time())}, "
        f"ending on {event.end.date().isoformat()} at {format_time(event.end.time())}"
    )
    if event.location:
        line += f" at {event.location}"
    return line


def render_events(events: Iterable[Event], empty_message: str) -> str:
    """
    Render events one per line in presentation order.

    Args:
        events: Events to render
        empty_message: Text returned when there is nothing to list

    Returns:
        Rendered listing
    """
    ordered = sort_events(events)
    if not ordered:
        return empty_message
    return "\n".join(format_event(event) for event in ordered)
