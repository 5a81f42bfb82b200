"""
Domain layer - Pure calendar logic on top of pendulum, with no I/O.
"""

from .calendar_utils import (
    date_to_timestamp,
    format_date,
    get_count_days_in_month,
    get_count_days_on_period,
    get_count_weekends_in_month,
    get_day_name,
    get_next_friday,
    get_next_friday_the_13th,
    get_quarter,
    get_time,
    get_week_number_by_date,
    get_work_schedule,
    is_date_in_period,
    is_leap_year,
    iter_work_schedule,
)
from .exceptions import (
    CalendarKitError,
    ConfigError,
    InvalidDateInput,
    InvalidSchedulePattern,
    InvalidTimezone,
)
from .models import DatePeriod, WorkSchedulePattern, WEEKDAY_NAMES
from .parsing import INVALID_DATE, coerce_instant, parse_date
from .work_schedule import WorkScheduleCalculator

__all__ = [
    "date_to_timestamp",
    "format_date",
    "get_count_days_in_month",
    "get_count_days_on_period",
    "get_count_weekends_in_month",
    "get_day_name",
    "get_next_friday",
    "get_next_friday_the_13th",
    "get_quarter",
    "get_time",
    "get_week_number_by_date",
    "get_work_schedule",
    "is_date_in_period",
    "is_leap_year",
    "iter_work_schedule",
    "CalendarKitError",
    "ConfigError",
    "InvalidDateInput",
    "InvalidSchedulePattern",
    "InvalidTimezone",
    "DatePeriod",
    "WorkSchedulePattern",
    "WEEKDAY_NAMES",
    "INVALID_DATE",
    "coerce_instant",
    "parse_date",
    "WorkScheduleCalculator",
]
