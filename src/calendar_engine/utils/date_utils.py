"""Date and time utilities for the calendar engine."""

from datetime import date, datetime, time

import pytz

from .exceptions import InvalidFormatError

DATE_FORMAT = "%Y-%m-%d"
DATETIME_FORMATS = ("%Y-%m-%dT%H:%M", "%Y-%m-%dT%H:%M:%S")

ALL_DAY_START = time(0, 0)
ALL_DAY_END = time(23, 59, 59)


def parse_date(value: str) -> date:
    """
    Parse a literal ``YYYY-MM-DD`` date.

    Raises:
        InvalidFormatError: If the token is not a valid date
    """
    try:
        return datetime.strptime(value.strip(), DATE_FORMAT).date()
    except (AttributeError, ValueError) as e:
        raise InvalidFormatError(f"Invalid date: {value!r} (expected YYYY-MM-DD)") from e


def parse_datetime(value: str) -> datetime:
    """
    Parse a literal ``YYYY-MM-DDTHH:MM[:SS]`` date-time.

    Raises:
        InvalidFormatError: If the token is not a valid date-time
    """
    token = value.strip() if isinstance(value, str) else value
    for fmt in DATETIME_FORMATS:
        try:
            return datetime.strptime(token, fmt)
        except (TypeError, ValueError):
            continue
    raise InvalidFormatError(
        f"Invalid date-time: {value!r} (expected YYYY-MM-DDTHH:MM)"
    )


def format_time(value: time) -> str:
    """Render a time of day as HH:MM, adding seconds only when present."""
    if value.second or value.microsecond:
        return value.strftime("%H:%M:%S")
    return value.strftime("%H:%M")


def format_datetime(value: datetime) -> str:
    """Render a wall-clock timestamp in the literal command grammar."""
    return f"{value.date().isoformat()}T{format_time(value.time())}"


def all_day_bounds(day: date) -> tuple[datetime, datetime]:
    """Return the start and end timestamps of an all-day event on ``day``."""
    return datetime.combine(day, ALL_DAY_START), datetime.combine(day, ALL_DAY_END)


def get_timezone(zone_id: str) -> pytz.BaseTzInfo:
    """
    Resolve a named zone identifier.

    Raises:
        InvalidFormatError: If the zone is unknown
    """
    try:
        return pytz.timezone(zone_id)
    except pytz.exceptions.UnknownTimeZoneError as e:
        raise InvalidFormatError(f"Unknown timezone: {zone_id}") from e


def convert_wall_time(value: datetime, from_zone: str, to_zone: str) -> datetime:
    """
    Re-express a naive wall-clock timestamp of one zone in another zone.

    Args:
        value: Naive timestamp interpreted in ``from_zone``
        from_zone: Source zone identifier
        to_zone: Target zone identifier

    Returns:
        Naive timestamp for the same instant in ``to_zone``
    """
    source = get_timezone(from_zone)
    target = get_timezone(to_zone)
    return source.localize(value).astimezone(target).replace(tzinfo=None)
