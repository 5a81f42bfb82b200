"""
Turning loosely typed date values into pendulum instants.

All text goes through one rule: ISO-8601 first, then the free-form
RFC-2822 style understood by dateutil. Date-only ISO strings are UTC,
other text without an offset is local.
"""

import functools
import logging
import math
import re
from datetime import date, datetime, tzinfo
from typing import Any, Callable, Optional

import pendulum
from dateutil import parser as dateutil_parser
from pendulum import Date, DateTime

from .exceptions import InvalidDateInput, InvalidTimezone

logger = logging.getLogger(__name__)

INVALID_DATE = "Invalid Date"

LOCAL = "local"

# Same year, different month and day: a missing year becomes 2001,
# a missing month or day changes the result between the two
FREE_FORM_DEFAULTS = (datetime(2001, 1, 1), datetime(2001, 2, 2))

# All-numeric ISO-shaped text; dateutil would swap its out-of-range fields
ISO_NUMERIC = re.compile(r"^[+-]?\d{4}-[\d\-T:.,+Z ]*$")


def resolve_timezone(tz: Optional[str] = None) -> tzinfo:
    """
    Resolve an IANA timezone name.

    ``None`` and ``"local"`` both mean the host's timezone.

    Raises:
        InvalidTimezone: If the name is unknown
    """
    if tz is None or tz == LOCAL:
        return pendulum.local_timezone()

    try:
        return pendulum.timezone(tz)
    except (KeyError, ValueError) as exc:
        raise InvalidTimezone(f"Unknown timezone: '{tz}'") from exc


def parse_date(text: str, tz: Optional[str] = None) -> DateTime:
    """
    Parse a textual date into an aware DateTime.

    ISO-8601 text is tried first. A date-only ISO string is UTC midnight,
    a date-time without an offset is placed in ``tz`` (local by default).
    Anything else goes through dateutil. Free-form text must name at least
    a month and a day; a missing year is 2001 and a missing zone is ``tz``.
    The clock is never read, so ``"now"`` and bare weekday names are
    rejected.

    Args:
        text: ISO-8601 or RFC-2822-like date string
        tz: IANA timezone for text without an offset

    Returns:
        pendulum DateTime

    Raises:
        InvalidDateInput: If the text does not describe a point in time
    """
    if not isinstance(text, str):
        raise TypeError(f"Expected a date string, got {type(text).__name__}")

    text = text.strip()
    if text.lower() == "now":
        raise InvalidDateInput("'now' depends on the clock")

    zone = resolve_timezone(tz)

    try:
        parsed = pendulum.parse(text, tz=zone, exact=True)
    except (ValueError, OverflowError) as exc:
        if ISO_NUMERIC.match(text):
            raise InvalidDateInput(f"Could not parse date {text!r}: {exc}") from exc
        return _parse_free_form(text, zone)

    if isinstance(parsed, DateTime):
        return parsed
    if isinstance(parsed, Date):
        return pendulum.datetime(parsed.year, parsed.month, parsed.day, tz="UTC")

    raise InvalidDateInput(f"{text!r} does not describe a point in time")


def _parse_free_form(text: str, zone: tzinfo) -> DateTime:
    try:
        first, second = (
            dateutil_parser.parse(text, default=default) for default in FREE_FORM_DEFAULTS
        )
    except (ValueError, OverflowError) as exc:
        raise InvalidDateInput(f"Could not parse date {text!r}: {exc}") from exc

    if first != second:
        raise InvalidDateInput(f"{text!r} is missing its month or day")

    return pendulum.instance(first, tz=zone)


def coerce_instant(value: Any, tz: Optional[str] = None) -> DateTime:
    """
    Turn any supported date value into an aware DateTime.

    Naive datetimes and plain dates are placed in ``tz`` (local by
    default), epoch milliseconds are converted into ``tz``, strings are
    parsed with ``parse_date`` in ``tz``.

    Raises:
        InvalidDateInput: If the value is not a valid instant
        TypeError: If the value has an unsupported type
    """
    if isinstance(value, DateTime) and value.tzinfo is not None:
        return value

    if isinstance(value, datetime):
        return pendulum.instance(value, tz=resolve_timezone(tz))

    if isinstance(value, date):
        return pendulum.datetime(value.year, value.month, value.day, tz=resolve_timezone(tz))

    if isinstance(value, str):
        return parse_date(value, tz)

    # bool is an int, but never a timestamp
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        if not math.isfinite(value):
            raise InvalidDateInput(f"Timestamp {value!r} is not finite")
        try:
            return pendulum.from_timestamp(value / 1000, tz=resolve_timezone(tz))
        except (OverflowError, OSError, ValueError) as exc:
            raise InvalidDateInput(f"Timestamp {value!r} is out of range") from exc

    raise TypeError(f"Unsupported date value of type {type(value).__name__}")


def to_epoch_millis(dt: DateTime) -> int:
    """Milliseconds since 1970-01-01T00:00:00 UTC, floored."""
    return dt.int_timestamp * 1000 + dt.microsecond // 1000


def returns_on_invalid(sentinel: Any) -> Callable:
    """
    Make a function return ``sentinel`` instead of raising InvalidDateInput.

    A callable sentinel (e.g. ``list``) is called to build a fresh value
    on every failure.
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except InvalidDateInput as exc:
                logger.debug("%s got an invalid date: %s", func.__name__, exc)
                return sentinel() if callable(sentinel) else sentinel
        return wrapper
    return decorator
