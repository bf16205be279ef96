"""Custom exceptions for the calendar engine."""


class CalendarEngineError(Exception):
    """Base exception for calendar engine errors."""


class DuplicateCalendarError(CalendarEngineError):
    """Raised when a calendar name is already taken."""


class DuplicateEventError(CalendarEngineError):
    """Raised when an event with the same subject and start already exists."""


class NotFoundError(CalendarEngineError):
    """Raised when a calendar, an event or the active calendar is missing."""


class InvalidFormatError(CalendarEngineError):
    """Raised when a date, time or command token cannot be parsed."""


class InvalidEnumError(InvalidFormatError):
    """Raised when a token is not one of the accepted enum values."""


class InvalidRangeError(CalendarEngineError):
    """Raised when an interval or a series termination is invalid."""


class InvalidWeekdayError(CalendarEngineError):
    """Raised when a weekday specification is invalid."""


class UnknownCommandError(CalendarEngineError):
    """Raised when no command handler accepts a command."""


class ExportError(CalendarEngineError):
    """Raised when writing an export file fails."""


class ConfigurationError(CalendarEngineError):
    """Raised when the startup configuration is invalid."""
