"""
Main CLI application using Typer.
"""

import logging
import math
from contextlib import contextmanager
from pathlib import Path
from typing import Annotated, Any, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from ..config import AppConfig, get_default_config_path
from ..domain import calendar_utils as cal
from ..domain.exceptions import CalendarKitError
from ..domain.models import DatePeriod, WEEKDAY_NAMES, WorkSchedulePattern, weekday_index
from ..domain.parsing import INVALID_DATE
from ..domain.work_schedule import parse_schedule_date

app = typer.Typer(
    name="calendarkit",
    help="Date and calendar arithmetic from the command line",
    add_completion=False
)

console = Console()

logger = logging.getLogger(__name__)

DateArg = Annotated[str, typer.Argument(help="Date, e.g. 2024-02-01T15:00:00Z or '04 Dec 1995 00:12:00 UTC'")]
MonthArg = Annotated[int, typer.Argument(min=1, max=12, help="Month (1 for January)")]
YearArg = Annotated[int, typer.Argument(help="Four-digit year")]
TzOption = Annotated[Optional[str], typer.Option("--tz", help="IANA timezone for local time. Defaults to the config timezone.")]


@contextmanager
def _cli_errors():
    """Turn library errors into a red message and exit status 1."""
    try:
        yield
    except CalendarKitError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


def _is_invalid(value: Any) -> bool:
    if value is None or value == INVALID_DATE:
        return True
    return isinstance(value, float) and math.isnan(value)


def _show(value: Any) -> None:
    """Print a result, exiting with status 1 on an invalid-date sentinel."""
    if _is_invalid(value):
        console.print(f"[red]{INVALID_DATE}[/red]")
        raise typer.Exit(1)

    if hasattr(value, "to_iso8601_string"):
        value = value.to_iso8601_string()
    elif isinstance(value, bool):
        value = str(value).lower()

    console.print(str(value), markup=False, highlight=False)


def _timezone(ctx: typer.Context, tz: Optional[str]) -> str:
    config: AppConfig = ctx.obj
    return tz or config.timezone


@app.callback()
def main(
    ctx: typer.Context,
    config_file: Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to config file. Defaults to ./calendarkit.yaml")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log parse failures and other details.")] = False,
):
    """
    Pure date and calendar arithmetic.
    """
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)]
        )

    with _cli_errors():
        if config_file:
            ctx.obj = AppConfig.load_from_yaml(config_file)
        else:
            ctx.obj = AppConfig.load_or_default(get_default_config_path())

    logger.debug("Using timezone %s", ctx.obj.timezone)


@app.command("timestamp")
def timestamp(date: DateArg):
    """
    Milliseconds since 1970-01-01T00:00:00 UTC.
    """
    _show(cal.date_to_timestamp(date))


@app.command("time")
def time_of_day(ctx: typer.Context, date: DateArg, tz: TzOption = None):
    """
    Local time of day as HH:MM:SS.
    """
    with _cli_errors():
        _show(cal.get_time(date, tz=_timezone(ctx, tz)))


@app.command("day-name")
def day_name(ctx: typer.Context, date: DateArg, tz: TzOption = None):
    """
    English name of the local weekday.
    """
    with _cli_errors():
        _show(cal.get_day_name(date, tz=_timezone(ctx, tz)))


@app.command("next-friday")
def next_friday(ctx: typer.Context, date: DateArg, tz: TzOption = None):
    """
    First Friday strictly after the date.
    """
    with _cli_errors():
        _show(cal.get_next_friday(date, tz=_timezone(ctx, tz)))


@app.command("days-in-month")
def days_in_month(month: MonthArg, year: YearArg):
    """
    Number of days in a month.
    """
    _show(cal.get_count_days_in_month(month, year))


@app.command("days-in-period")
def days_in_period(start: DateArg, end: DateArg):
    """
    Days between two dates, counting both ends.
    """
    _show(cal.get_count_days_on_period(start, end))


@app.command("in-period")
def in_period(date: DateArg, start: DateArg, end: DateArg):
    """
    Check if a date lies within a period, both ends included.
    """
    _show(cal.is_date_in_period(date, DatePeriod(start=start, end=end)))


@app.command("format")
def format_command(date: DateArg):
    """
    Format a date as M/D/YYYY, h:mm:ss AM/PM in UTC.
    """
    _show(cal.format_date(date))


@app.command("weekends")
def weekends(month: MonthArg, year: YearArg):
    """
    Number of Saturdays and Sundays in a month.
    """
    _show(cal.get_count_weekends_in_month(month, year))


@app.command("week-number")
def week_number(ctx: typer.Context, date: DateArg, tz: TzOption = None):
    """
    Week of the year of a date.
    """
    with _cli_errors():
        _show(cal.get_week_number_by_date(date, tz=_timezone(ctx, tz)))


@app.command("friday-13th")
def friday_13th(ctx: typer.Context, date: DateArg, tz: TzOption = None):
    """
    Next Friday the 13th from a date.
    """
    with _cli_errors():
        _show(cal.get_next_friday_the_13th(date, tz=_timezone(ctx, tz)))


@app.command("quarter")
def quarter(ctx: typer.Context, date: DateArg, tz: TzOption = None):
    """
    Quarter of the year (1-4).
    """
    with _cli_errors():
        _show(cal.get_quarter(date, tz=_timezone(ctx, tz)))


@app.command("leap-year")
def leap_year(ctx: typer.Context, date: DateArg, tz: TzOption = None):
    """
    Check if the year of a date is a leap year.
    """
    with _cli_errors():
        _show(cal.is_leap_year(date, tz=_timezone(ctx, tz)))


@app.command("schedule")
def schedule(
    ctx: typer.Context,
    start: Annotated[str, typer.Argument(help="First day (DD-MM-YYYY)")],
    end: Annotated[str, typer.Argument(help="Last day (DD-MM-YYYY)")],
    work_days: Annotated[Optional[int], typer.Option("--work", "-w", help="Consecutive working days")] = None,
    off_days: Annotated[Optional[int], typer.Option("--off", "-o", help="Consecutive days off")] = None,
):
    """
    Working days of a shift pattern within a period.

    Examples:

        # One day on, three days off
        calendarkit schedule 01-01-2024 15-01-2024 --work 1 --off 3

        # Pattern from the config file
        calendarkit schedule 01-01-2024 31-01-2024
    """
    config: AppConfig = ctx.obj
    default = config.schedule.to_pattern()

    with _cli_errors():
        pattern = WorkSchedulePattern(
            work_days=work_days if work_days is not None else default.work_days,
            off_days=off_days if off_days is not None else default.off_days,
        )
        # Reject malformed dates before building the schedule
        parse_schedule_date(start)
        parse_schedule_date(end)
        days = cal.get_work_schedule(DatePeriod(start=start, end=end), pattern.work_days, pattern.off_days)

    if not days:
        console.print("[yellow]⚠ No working days in this period.[/yellow]")
        return

    table = Table(
        title=f"Work schedule ({pattern})",
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("#", style="dim", justify="right")
    table.add_column("Date", style="bold yellow")
    table.add_column("Weekday")

    for idx, day in enumerate(days, 1):
        weekday = WEEKDAY_NAMES[weekday_index(parse_schedule_date(day))]
        table.add_row(str(idx), day, weekday)

    console.print(table)


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"[bold cyan]calendarkit[/bold cyan] version [bold]{__version__}[/bold]")


if __name__ == "__main__":
    app()
