"""
Domain models for date periods and work schedule patterns.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date
from typing import Any, Union

from pendulum import DateTime

from .exceptions import InvalidSchedulePattern

# Weekday indices, 0=Sunday through 6=Saturday
SUNDAY = 0
FRIDAY = 5
SATURDAY = 6

DAYS_IN_WEEK = 7

WEEKDAY_NAMES = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)

# Anything the parsing layer can turn into an instant
DateInput = Union[DateTime, date, str, int, float]


def weekday_index(dt: date) -> int:
    """Return the weekday of ``dt`` with Sunday as 0."""
    return dt.isoweekday() % DAYS_IN_WEEK


@dataclass(frozen=True)
class DatePeriod:
    """
    Represents an inclusive period between two dates.

    Both ends may be instants or date strings; they are parsed lazily by
    the functions that consume the period. ``start <= end`` is assumed by
    callers and not checked here.
    """
    start: DateInput
    end: DateInput

    @classmethod
    def coerce(cls, value: Any) -> "DatePeriod":
        """
        Build a period from a ``DatePeriod``, a ``{start, end}`` mapping
        or a ``(start, end)`` pair.

        Raises:
            TypeError: If the value has none of these shapes
        """
        if isinstance(value, cls):
            return value

        if isinstance(value, Mapping):
            try:
                return cls(start=value["start"], end=value["end"])
            except KeyError as exc:
                raise TypeError(f"Period mapping is missing the {exc} key") from exc

        if isinstance(value, (tuple, list)) and len(value) == 2:
            return cls(start=value[0], end=value[1])

        raise TypeError(f"Cannot build a DatePeriod from {type(value).__name__}")


@dataclass(frozen=True)
class WorkSchedulePattern:
    """
    A repeating cycle of consecutive working days followed by days off.

    Invariant: at least one working day per cycle, never a negative
    number of days off.
    """
    work_days: int
    off_days: int

    def __post_init__(self):
        if self.work_days < 1:
            raise InvalidSchedulePattern(
                f"work_days must be at least 1, got {self.work_days}"
            )
        if self.off_days < 0:
            raise InvalidSchedulePattern(
                f"off_days must not be negative, got {self.off_days}"
            )

    def __str__(self) -> str:
        return f"{self.work_days} on / {self.off_days} off"
