"""
Calendar arithmetic over single dates and date periods.

Every function here is pure: the result depends only on the arguments.
Functions working in local time take a ``tz`` keyword (IANA name); when it
is omitted the host timezone is used. ``format_date`` always works in UTC
and ``get_week_number_by_date`` takes the year from UTC but anchors the
year start in local time. That mix is kept for compatibility with
existing callers.

Invalid date input never raises. Each function returns the invalid value
of its own return type instead: ``"Invalid Date"`` for strings, ``nan``
for numbers, ``False`` for booleans, ``None`` for dates and ``[]`` for the
work schedule.
"""

import math
from typing import Any, Iterator, List, Mapping, Optional, Union

import pendulum
from pendulum import DateTime

from .models import (
    DAYS_IN_WEEK,
    FRIDAY,
    SATURDAY,
    SUNDAY,
    WEEKDAY_NAMES,
    DateInput,
    DatePeriod,
    WorkSchedulePattern,
    weekday_index,
)
from .exceptions import InvalidDateInput
from .parsing import (
    INVALID_DATE,
    LOCAL,
    coerce_instant,
    resolve_timezone,
    returns_on_invalid,
    to_epoch_millis,
)
from .work_schedule import WorkScheduleCalculator, parse_schedule_date

MS_PER_DAY = 1000 * 60 * 60 * 24

PeriodInput = Union[DatePeriod, Mapping[str, Any]]


def _local(value: DateInput, tz: Optional[str]) -> DateTime:
    moment = coerce_instant(value, tz)
    try:
        return moment.in_timezone(resolve_timezone(tz))
    except (ValueError, OverflowError) as exc:
        raise InvalidDateInput(f"{moment} is out of range in {tz or LOCAL}") from exc


def _shift(moment: DateTime, **delta: int) -> DateTime:
    try:
        return moment.add(**delta)
    except (ValueError, OverflowError) as exc:
        raise InvalidDateInput(f"{moment} shifted by {delta} is out of range") from exc


def _inclusive_day_count(start: DateTime, end: DateTime) -> int:
    elapsed = abs(to_epoch_millis(end) - to_epoch_millis(start))
    return math.ceil(elapsed / MS_PER_DAY) + 1


@returns_on_invalid(math.nan)
def date_to_timestamp(date: DateInput) -> int:
    """
    Milliseconds elapsed since 1970-01-01T00:00:00 UTC.

    Example:
        '01 Jan 1970 00:00:00 UTC' -> 0
        '04 Dec 1995 00:12:00 UTC' -> 818035920000
    """
    return to_epoch_millis(coerce_instant(date))


@returns_on_invalid(INVALID_DATE)
def get_time(date: DateInput, tz: Optional[str] = None) -> str:
    """Local time of day as zero-padded ``HH:MM:SS``."""
    return _local(date, tz).format("HH:mm:ss")


@returns_on_invalid(INVALID_DATE)
def get_day_name(date: DateInput, tz: Optional[str] = None) -> str:
    """Full English name of the local weekday, e.g. ``'Thursday'``."""
    return WEEKDAY_NAMES[weekday_index(_local(date, tz))]


@returns_on_invalid(None)
def get_next_friday(date: DateInput, tz: Optional[str] = None) -> Optional[DateTime]:
    """
    The first Friday strictly after the given date, at the same time of day.

    A Friday moves a whole week ahead.

    Example:
        2024-02-03T00:00:00Z -> 2024-02-09T00:00:00Z
        2024-02-16T00:00:00Z -> 2024-02-23T00:00:00Z
    """
    local = _local(date, tz)
    weekday = weekday_index(local)

    if weekday < FRIDAY:
        days = FRIDAY - weekday
    else:
        days = DAYS_IN_WEEK - weekday + FRIDAY

    return _shift(local, days=days)


def get_count_days_in_month(month: int, year: int) -> int:
    """
    Number of days in a month (1 for January, 12 for December).

    Months outside 1-12 roll over into neighbouring years.
    """
    return pendulum.date(year, 1, 1).add(months=month - 1).days_in_month


@returns_on_invalid(math.nan)
def get_count_days_on_period(date_start: DateInput, date_end: DateInput) -> int:
    """
    Days between two dates, counting both ends.

    Partial days round up and the order of the dates does not matter.

    Example:
        '2024-02-01T00:00:00.000Z', '2024-02-12T00:00:00.000Z' -> 12
    """
    return _inclusive_day_count(coerce_instant(date_start), coerce_instant(date_end))


@returns_on_invalid(False)
def is_date_in_period(date: DateInput, period: PeriodInput) -> bool:
    """
    Check if a date lies within a period, both ends included.

    ``period`` is a DatePeriod or a mapping with ``start`` and ``end`` keys.
    """
    period = DatePeriod.coerce(period)
    moment = coerce_instant(date)

    return coerce_instant(period.start) <= moment <= coerce_instant(period.end)


@returns_on_invalid(INVALID_DATE)
def format_date(date: DateInput) -> str:
    """
    Format a date as ``M/D/YYYY, h:mm:ss AM/PM`` in UTC.

    Only hours after noon are shifted down, so midnight reads ``0`` and
    noon reads ``12``.

    Example:
        '2024-02-01T15:00:00.000Z' -> '2/1/2024, 3:00:00 PM'
        '1999-01-05T02:20:00.000Z' -> '1/5/1999, 2:20:00 AM'
    """
    moment = coerce_instant(date).in_timezone("UTC")
    hour = moment.hour
    display_hour = hour - 12 if hour > 12 else hour
    meridiem = "PM" if hour >= 12 else "AM"

    return (
        f"{moment.month}/{moment.day}/{moment.year}, "
        f"{display_hour}:{moment.minute:02d}:{moment.second:02d} {meridiem}"
    )


def get_count_weekends_in_month(month: int, year: int) -> int:
    """
    Number of Saturdays and Sundays in a month.

    Example:
        5, 2022 -> 9
        12, 2023 -> 10
    """
    total_days = get_count_days_in_month(month, year)
    first_weekday = weekday_index(pendulum.date(year, 1, 1).add(months=month - 1))

    weekend_days = 0
    for weekend_day in (SATURDAY, SUNDAY):
        first_occurrence = (weekend_day - first_weekday) % DAYS_IN_WEEK + 1
        weekend_days += math.ceil((total_days - first_occurrence + 1) / DAYS_IN_WEEK)

    return weekend_days


@returns_on_invalid(math.nan)
def get_week_number_by_date(date: DateInput, tz: Optional[str] = None) -> int:
    """
    Week of the year, where week 1 is the (possibly partial) week of Jan 1.

    The year comes from the UTC date, Jan 1 is local midnight.

    Example:
        2024-01-03 -> 1
        2024-02-23 -> 8
    """
    moment = coerce_instant(date, tz)
    year_start = pendulum.datetime(
        moment.in_timezone("UTC").year, 1, 1, tz=resolve_timezone(tz)
    )

    days_from_year_start = _inclusive_day_count(moment, year_start)
    return math.ceil(abs(days_from_year_start + weekday_index(year_start)) / DAYS_IN_WEEK)


@returns_on_invalid(None)
def get_next_friday_the_13th(date: DateInput, tz: Optional[str] = None) -> Optional[DateTime]:
    """
    The next Friday the 13th from a date, at the same time of day.

    The search starts with the current month while its 13th is still
    ahead, otherwise with the next month, and runs across year ends.

    Example:
        2024-01-13 -> 2024-09-13
        2023-02-01 -> 2023-10-13
    """
    local = _local(date, tz)
    candidate = local.set(day=13)

    if local.day >= 13:
        candidate = _shift(candidate, months=1)

    while weekday_index(candidate) != FRIDAY:
        candidate = _shift(candidate, months=1)

    return candidate


@returns_on_invalid(math.nan)
def get_quarter(date: DateInput, tz: Optional[str] = None) -> int:
    """Quarter of the year (1-4) of the local date."""
    return _local(date, tz).quarter


def iter_work_schedule(
    period: PeriodInput,
    count_work_days: int,
    count_off_days: int,
) -> Iterator[DateTime]:
    """
    Lazily yield the working days of a shift pattern.

    Unlike ``get_work_schedule`` this raises InvalidDateInput for a bad
    period instead of returning an empty result.
    """
    period = DatePeriod.coerce(period)
    calculator = WorkScheduleCalculator(WorkSchedulePattern(count_work_days, count_off_days))

    return calculator.iter_days(
        parse_schedule_date(period.start),
        parse_schedule_date(period.end),
    )


@returns_on_invalid(list)
def get_work_schedule(
    period: PeriodInput,
    count_work_days: int,
    count_off_days: int,
) -> List[str]:
    """
    Working days of a shift pattern within a period, as ``DD-MM-YYYY``.

    The pattern starts on the first day of the period: ``count_work_days``
    working days, then ``count_off_days`` days off, repeated.

    Example:
        {start: '01-01-2024', end: '15-01-2024'}, 1, 3
        -> ['01-01-2024', '05-01-2024', '09-01-2024', '13-01-2024']
    """
    calculator = WorkScheduleCalculator(WorkSchedulePattern(count_work_days, count_off_days))
    return calculator.schedule(DatePeriod.coerce(period))


@returns_on_invalid(False)
def is_leap_year(date: DateInput, tz: Optional[str] = None) -> bool:
    """
    Check if the local year of a date is a leap year.

    Divisible by 4 but not by 100, unless also divisible by 400.
    """
    return _local(date, tz).is_leap_year()
