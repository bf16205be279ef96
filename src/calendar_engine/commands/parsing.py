"""Token helpers shared by command handlers."""

import re
from typing import Optional

from ..models.series import Weekday
from ..utils.exceptions import InvalidFormatError, InvalidWeekdayError

# A subject, calendar name or value: double-quoted text or one bare word
TEXT = r'"[^"]*"|\S+'

WEEKDAY_LETTERS = "MTWRFSU"


def unquote(token: Optional[str]) -> Optional[str]:
    """Strip one pair of surrounding double quotes."""
    if token is not None and len(token) >= 2 and token[0] == token[-1] == '"':
        return token[1:-1]
    return token


def parse_weekdays(token: str) -> frozenset[Weekday]:
    """
    Parse a weekday specification such as ``MWF`` or ``tr``.

    Letters are case-insensitive (R is Thursday, U is Sunday) and
    duplicates are ignored.

    Raises:
        InvalidWeekdayError: On an unknown letter or an empty specification
    """
    days = set()
    for letter in (token or "").upper():
        if letter not in WEEKDAY_LETTERS:
            raise InvalidWeekdayError(f"Invalid weekday character: {letter}")
        days.add(Weekday.from_code(letter))

    if not days:
        raise InvalidWeekdayError("At least one weekday must be specified")
    return frozenset(days)


def parse_count(token: str) -> int:
    """Parse a positive occurrence count."""
    if not token.isdigit():
        raise InvalidFormatError(f"Invalid occurrence count: {token!r}")
    return int(token)


def option(command: str, name: str) -> Optional[str]:
    """
    Extract the value following a ``--name`` option.

    Returns:
        The unquoted value, or None if the option is absent
    """
    match = re.search(rf"--{name}\s+(?!--)({TEXT})", command, re.IGNORECASE)
    if match is None:
        return None
    return unquote(match.group(1))


def require_option(command: str, name: str) -> str:
    value = option(command, name)
    if value is None:
        raise InvalidFormatError(f"Option --{name} is required")
    return value
