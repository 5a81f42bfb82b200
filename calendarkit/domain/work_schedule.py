"""
Work schedule generation from a repeating work/off day pattern.

Pure domain logic: no I/O, no clock access.
"""

from typing import Iterator, List

import pendulum
from pendulum import DateTime

from .exceptions import InvalidDateInput
from .models import DateInput, DatePeriod, WorkSchedulePattern
from .parsing import coerce_instant

SCHEDULE_DATE_FORMAT = "DD-MM-YYYY"


def parse_schedule_date(value: DateInput) -> DateTime:
    """
    Parse a ``DD-MM-YYYY`` string (or any instant) into a UTC midnight.

    Raises:
        InvalidDateInput: If the value is not a valid date
    """
    if isinstance(value, str):
        try:
            return pendulum.from_format(value.strip(), SCHEDULE_DATE_FORMAT, tz="UTC")
        except ValueError as exc:
            raise InvalidDateInput(
                f"Expected a {SCHEDULE_DATE_FORMAT} date, got {value!r}"
            ) from exc

    return coerce_instant(value, tz="UTC").start_of("day")


class WorkScheduleCalculator:
    """
    Lists the working days of a shift pattern over a period.

    Algorithm:
    1. Anchor the pattern on the first day of the period
    2. Walk every day up to and including the last one
    3. Emit days while the current cycle has working days left
    4. Skip the off days, then start the next cycle

    A period whose end lies before its start has no days.
    """

    def __init__(self, pattern: WorkSchedulePattern):
        self.pattern = pattern

    def iter_days(self, start: DateTime, end: DateTime) -> Iterator[DateTime]:
        """
        Lazily yield every working day between start and end, inclusive.

        Args:
            start: First day of the period (the pattern anchor)
            end: Last day of the period

        Yields:
            Working days, in order, at the start of the day
        """
        remaining_work = self.pattern.work_days
        remaining_off = 0

        current = start.start_of("day")
        last = end.start_of("day")

        while current <= last:
            if remaining_off > 0:
                remaining_off -= 1
            else:
                yield current
                remaining_work -= 1

                if remaining_work == 0:
                    remaining_work = self.pattern.work_days
                    remaining_off = self.pattern.off_days

            if current == last:
                break
            current = current.add(days=1)

    def schedule(self, period: DatePeriod) -> List[str]:
        """
        Build the working days of a period as ``DD-MM-YYYY`` strings.

        Raises:
            InvalidDateInput: If either end of the period is not a valid date
        """
        start = parse_schedule_date(period.start)
        end = parse_schedule_date(period.end)

        return [day.format(SCHEDULE_DATE_FORMAT) for day in self.iter_days(start, end)]
