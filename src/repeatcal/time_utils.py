#
# For licensing see accompanying LICENSE file.
# Copyright © 2025 Apple Inc. All Rights Reserved.
#
"""Calendar arithmetic shared by the recurrence generator, together with
the small month/week helpers used to lay generated occurrences out on a grid."""

import calendar
import datetime
from collections.abc import Iterable
from typing import Protocol, TypeVar

from dateutil.parser import isoparse

DateLike = datetime.date | datetime.datetime | str


class _HasDate(Protocol):
    date: datetime.date


T = TypeVar("T", bound=_HasDate)


def days_in_month(year: int, month: int) -> int:
    """Return the number of days in `month` (1 for January, 12 for December)
    of `year`. Leap years are handled by the `calendar` module."""
    return calendar.monthrange(year, month)[1]


def strip_time(value: datetime.date | datetime.datetime) -> datetime.date:
    """Reduce `value` to its local calendar date so that comparisons
    ignore the time of day."""
    if isinstance(value, datetime.datetime):
        return value.date()
    return value


def to_date(value: DateLike) -> datetime.date:
    """Coerce a date, datetime or ISO 8601 string into a calendar date.

    Raises
    ------
    ValueError if `value` is a string which is not a valid ISO date.
    """
    if isinstance(value, str):
        return isoparse(value).date()
    return strip_time(value)


def is_date_in_range(
    date: DateLike, range_start: DateLike, range_end: DateLike
) -> bool:
    """Check whether `date` falls within [`range_start`, `range_end`], comparing
    calendar days only."""
    return to_date(range_start) <= to_date(date) <= to_date(range_end)


def fill_zero(value: int, size: int = 2) -> str:
    return str(value).zfill(size)


def format_date(date: datetime.date, day: int | None = None) -> str:
    """Render `date` as a zero-padded `YYYY-MM-DD` string. If `day` is
    given it replaces the day of the month."""
    return "-".join(
        [
            fill_zero(date.year, 4),
            fill_zero(date.month),
            fill_zero(day if day is not None else date.day),
        ]
    )


def _js_weekday(date: datetime.date) -> int:
    # 0 for Sunday, 6 for Saturday
    return (date.weekday() + 1) % 7


def get_week_dates(date: datetime.date) -> list[datetime.date]:
    """The seven dates of the week containing `date`. Weeks start on Sunday."""
    sunday = date - datetime.timedelta(days=_js_weekday(date))
    return [sunday + datetime.timedelta(days=i) for i in range(7)]


def get_weeks_at_month(date: datetime.date) -> list[list[int | None]]:
    """Lay out the month containing `date` as a list of Sunday-started weeks.

    Each week has seven entries holding the day of the month, or `None` for
    the days which belong to the previous or next month.
    """
    n_days = days_in_month(date.year, date.month)
    first_weekday = _js_weekday(date.replace(day=1))
    weeks = []
    week: list[int | None] = [None] * 7
    for day in range(1, n_days + 1):
        day_index = (first_weekday + day - 1) % 7
        week[day_index] = day
        if day_index == 6 or day == n_days:
            weeks.append(week)
            week = [None] * 7
    return weeks


def get_events_for_day(events: Iterable[T], day: int) -> list[T]:
    """Return the events falling on the given day of the month."""
    return [event for event in events if event.date.day == day]


def format_month(date: datetime.date) -> str:
    return f"{calendar.month_name[date.month]} {date.year}"


def format_week(date: datetime.date) -> str:
    """Name the week containing `date`, eg "January 2024, week 2".

    A week belongs to the month in which its Thursday falls and the first
    week of a month is the one containing its first Thursday.
    """
    thursday = date + datetime.timedelta(days=4 - _js_weekday(date))
    first_of_month = thursday.replace(day=1)
    first_thursday = first_of_month + datetime.timedelta(
        days=(4 - _js_weekday(first_of_month) + 7) % 7
    )
    week_number = (thursday - first_thursday).days // 7 + 1
    return f"{format_month(thursday)}, week {week_number}"
