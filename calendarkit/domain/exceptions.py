"""
Domain-specific exception hierarchy for the calendar utilities.
"""


class CalendarKitError(Exception):
    """Base class for all library-level errors."""


class InvalidDateInput(CalendarKitError, ValueError):
    """Raised when a value cannot be turned into a valid instant."""


class InvalidSchedulePattern(CalendarKitError, ValueError):
    """Raised when a work/off day pattern is not usable."""


class ConfigError(CalendarKitError):
    """Raised when the configuration file is missing or invalid."""


class InvalidTimezone(CalendarKitError, ValueError):
    """Raised when a timezone name cannot be resolved."""
