#
# For licensing see accompanying LICENSE file.
# Copyright © 2025 Apple Inc. All Rights Reserved.
#
import datetime

from rich.console import Console
from rich.table import Table

from repeatcal.recurrence import describe_repeat
from repeatcal.time_utils import (
    days_in_month,
    format_date,
    format_month,
    format_week,
    get_events_for_day,
    get_week_dates,
    get_weeks_at_month,
    is_date_in_range,
)
from repeatcal.work_calendar import MarkedEvent

REPEAT_MARKER = "↻"
WEEKDAY_HEADERS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")


def _cell(day: int | None, events: list[MarkedEvent]) -> str:
    if day is None:
        return ""
    marks = "".join(
        REPEAT_MARKER if event.is_repeat_event else "•"
        for event in get_events_for_day(events, day)
    )
    return f"{day} {marks}".strip()


def display_events(events: list[MarkedEvent], console: Console | None = None):
    """Display events as a rich table with the following format

    ┏━━━┳━━━━━━━━━━━━┳━━━━━━━━━━━━━┳━━━━━━━┳━━━━━━━━━━━━━━━━━━━━━┳━━━━━━━━━┓
    ┃ # ┃ Date       ┃ Time        ┃ Title ┃ Week                ┃ Repeats ┃
    ┡━━━╇━━━━━━━━━━━━╇━━━━━━━━━━━━━╇━━━━━━━╇━━━━━━━━━━━━━━━━━━━━━╇━━━━━━━━━┩
    """  # noqa

    console = console or Console()
    table = Table(show_header=True, header_style="bold magenta")

    table.add_column("#", justify="right", style="cyan", no_wrap=True)
    table.add_column("Date", no_wrap=True)
    table.add_column("Time", no_wrap=True)
    table.add_column("Title", style="white")
    table.add_column("Week", style="dim")
    table.add_column("Repeats", style="green")

    for i, event in enumerate(events):
        repeats = (
            f"{REPEAT_MARKER} {describe_repeat(event.repeat)}"
            if event.is_repeat_event
            else describe_repeat(event.repeat)
        )
        table.add_row(
            str(i),
            format_date(event.date),
            f"{event.start_time:%H:%M}-{event.end_time:%H:%M}",
            event.title,
            format_week(event.date),
            repeats,
        )

    console.print(table)


def display_month(
    month: datetime.date,
    events: list[MarkedEvent],
    console: Console | None = None,
):
    """Display the month containing `month` as a grid, marking the days with
    events. Repeating events are marked with `REPEAT_MARKER`."""

    console = console or Console()
    first = month.replace(day=1)
    last = first.replace(day=days_in_month(first.year, first.month))
    in_month = [e for e in events if is_date_in_range(e.date, first, last)]

    table = Table(title=format_month(first), show_header=True)
    for header in WEEKDAY_HEADERS:
        table.add_column(header, justify="right", no_wrap=True)
    for week in get_weeks_at_month(first):
        table.add_row(*[_cell(day, in_month) for day in week])

    console.print(table)


def display_week(
    day: datetime.date,
    events: list[MarkedEvent],
    console: Console | None = None,
):
    """Display the Sunday-started week containing `day`."""

    console = console or Console()
    dates = get_week_dates(day)
    table = Table(title=format_week(day), show_header=True)
    for header, date in zip(WEEKDAY_HEADERS, dates):
        table.add_column(f"{header} {date.day}", no_wrap=False)
    table.add_row(
        *[
            "\n".join(
                f"{REPEAT_MARKER if e.is_repeat_event else '•'} {e.title}"
                for e in events
                if e.date == date
            )
            for date in dates
        ]
    )

    console.print(table)
