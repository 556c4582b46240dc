#
# For licensing see accompanying LICENSE file.
# Copyright © 2025 Apple Inc. All Rights Reserved.
#
import datetime

import pytest

from repeatcal.recurrence import RepeatRule, RepeatType
from repeatcal.work_calendar import Event, EventDraft


def make_series(
    prefix: str,
    dates: list[datetime.date],
    repeat: RepeatRule,
    **fields,
) -> list[Event]:
    return [
        Event(id=f"{prefix}-{i}", date=date, repeat=repeat, **fields)
        for i, date in enumerate(dates, start=1)
    ]


@pytest.fixture
def monthly_draft() -> EventDraft:
    return EventDraft(
        title="Monthly sync",
        date=datetime.date(2024, 1, 15),
        start_time=datetime.time(10, 0),
        end_time=datetime.time(11, 0),
        description="Monthly team sync",
        location="Room A",
        category="Work",
        notification_time=10,
        repeat=RepeatRule(
            type=RepeatType.MONTHLY,
            interval=1,
            end_date=datetime.date(2024, 4, 15),
        ),
    )


@pytest.fixture
def weekly_events() -> list[Event]:
    return make_series(
        "repeat",
        [
            datetime.date(2024, 1, 1),
            datetime.date(2024, 1, 8),
            datetime.date(2024, 1, 15),
        ],
        RepeatRule(type=RepeatType.WEEKLY, interval=1),
        title="Weekly workout",
        start_time=datetime.time(7, 0),
        end_time=datetime.time(8, 0),
        description="Gym session",
        location="Gym",
        category="Health",
        notification_time=30,
    )


@pytest.fixture
def daily_events() -> list[Event]:
    return make_series(
        "daily",
        [
            datetime.date(2024, 1, 1),
            datetime.date(2024, 1, 2),
            datetime.date(2024, 1, 3),
        ],
        RepeatRule(type=RepeatType.DAILY, interval=1),
        title="Daily reading",
        start_time=datetime.time(20, 0),
        end_time=datetime.time(21, 0),
        description="Reading time",
        location="Home",
        category="Self development",
        notification_time=15,
    )
