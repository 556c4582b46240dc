#
# For licensing see accompanying LICENSE file.
# Copyright © 2025 Apple Inc. All Rights Reserved.
#
import datetime

import pytest
from pydantic import ValidationError

from repeatcal.exceptions import EventDefinitionError, UnboundedRepeatError
from repeatcal.recurrence import RepeatRule, RepeatType
from repeatcal.work_calendar import (
    Event,
    EventDraft,
    MarkedEvent,
    create_repeat_events,
    delete_single_repeat_event,
    mark_repeat_events,
    update_single_repeat_event,
)

SHARED_FIELDS = (
    "title",
    "start_time",
    "end_time",
    "description",
    "location",
    "category",
    "notification_time",
)


def test_create_repeat_events(monthly_draft: EventDraft):

    events = create_repeat_events(monthly_draft)

    assert [e.date for e in events] == [
        datetime.date(2024, 1, 15),
        datetime.date(2024, 2, 15),
        datetime.date(2024, 3, 15),
        datetime.date(2024, 4, 15),
    ]
    assert len({e.id for e in events}) == len(events)
    for event in events:
        for field in SHARED_FIELDS:
            assert getattr(event, field) == getattr(monthly_draft, field)
        assert event.repeat == monthly_draft.repeat


def test_create_single_event():

    draft = EventDraft(
        title="One-off",
        date=datetime.date(2024, 1, 15),
        start_time=datetime.time(14, 0),
        end_time=datetime.time(15, 0),
        location="Cafe",
    )

    events = create_repeat_events(draft, horizon_end=datetime.date(2024, 12, 31))

    assert len(events) == 1
    assert events[0].date == draft.date
    assert events[0].title == draft.title
    assert events[0].repeat.type == RepeatType.NONE


def test_create_uses_horizon_when_rule_has_no_end(monthly_draft: EventDraft):

    draft = monthly_draft.model_copy(
        update={"repeat": RepeatRule(type=RepeatType.WEEKLY)}
    )
    events = create_repeat_events(draft, horizon_end="2024-02-05")
    assert [e.date.isoformat() for e in events] == [
        "2024-01-15",
        "2024-01-22",
        "2024-01-29",
        "2024-02-05",
    ]
    with pytest.raises(UnboundedRepeatError):
        create_repeat_events(draft)


def test_create_ignores_horizon_when_rule_has_end(monthly_draft: EventDraft):

    events = create_repeat_events(monthly_draft, horizon_end="2024-02-01")
    assert len(events) == 4


def test_created_events_are_independent(monthly_draft: EventDraft):

    events = create_repeat_events(monthly_draft)
    assert all(e.repeat is not events[0].repeat for e in events[1:])
    assert all(e.repeat is not monthly_draft.repeat for e in events)


def test_update_single_repeat_event(weekly_events: list[Event]):

    updates = {
        "title": "Special workout",
        "start_time": "08:00",
        "end_time": datetime.time(9, 30),
        "description": "Edited on its own",
    }

    updated_events = update_single_repeat_event(weekly_events, "repeat-2", updates)

    [updated] = [e for e in updated_events if e.id == "repeat-2"]
    assert updated.repeat.type == RepeatType.NONE
    assert updated.title == "Special workout"
    assert updated.start_time == datetime.time(8, 0)
    assert updated.end_time == datetime.time(9, 30)
    assert updated.description == "Edited on its own"
    # fields not in the update are kept
    assert updated.location == "Gym"
    assert updated.date == datetime.date(2024, 1, 8)
    # the other events are not changed
    others = [e for e in updated_events if e.id != "repeat-2"]
    assert len(others) == 2
    for event in others:
        assert event.repeat.type == RepeatType.WEEKLY
        assert event.title == "Weekly workout"
    # nor is the input
    assert weekly_events[1].repeat.type == RepeatType.WEEKLY
    assert weekly_events[1].title == "Weekly workout"
    assert [e.id for e in updated_events] == [e.id for e in weekly_events]


def test_update_unknown_id_is_a_no_op(weekly_events: list[Event]):

    updated = update_single_repeat_event(weekly_events, "missing", {"title": "x"})
    assert updated == weekly_events


@pytest.mark.parametrize(
    "updates",
    [
        {"id": "x"},
        {"repeat": RepeatRule(type=RepeatType.DAILY)},
    ],
)
def test_update_unknown_id_ignores_protected_fields(
    weekly_events: list[Event], updates: dict
):

    updated = update_single_repeat_event(weekly_events, "missing", updates)
    assert updated == weekly_events


def test_update_detaches_already_detached_event(weekly_events: list[Event]):

    once = update_single_repeat_event(weekly_events, "repeat-1", {"title": "a"})
    twice = update_single_repeat_event(once, "repeat-1", {"title": "b"})
    [event] = [e for e in twice if e.id == "repeat-1"]
    assert event.repeat.type == RepeatType.NONE
    assert event.title == "b"


@pytest.mark.parametrize(
    "updates",
    [
        {"id": "other"},
        {"repeat": RepeatRule(type=RepeatType.DAILY)},
    ],
)
def test_update_protected_fields_raises(weekly_events: list[Event], updates: dict):

    with pytest.raises(EventDefinitionError):
        update_single_repeat_event(weekly_events, "repeat-1", updates)


def test_update_invalid_value_raises(weekly_events: list[Event]):

    with pytest.raises(ValidationError):
        update_single_repeat_event(
            weekly_events, "repeat-1", {"notification_time": "soon"}
        )
    with pytest.raises(ValidationError):
        update_single_repeat_event(weekly_events, "repeat-1", {"colour": "red"})


def test_delete_single_repeat_event(daily_events: list[Event]):

    remaining = delete_single_repeat_event(daily_events, "daily-2")

    assert len(remaining) == len(daily_events) - 1
    assert [e.id for e in remaining] == ["daily-1", "daily-3"]
    assert all(e.repeat.type == RepeatType.DAILY for e in remaining)
    assert len(daily_events) == 3


def test_delete_unknown_id_is_a_no_op(daily_events: list[Event]):

    assert delete_single_repeat_event(daily_events, "missing") == daily_events


def test_delete_detached_event(daily_events: list[Event]):

    events = update_single_repeat_event(daily_events, "daily-1", {"title": "x"})
    remaining = delete_single_repeat_event(events, "daily-1")
    assert [e.id for e in remaining] == ["daily-2", "daily-3"]


def test_mark_repeat_events(weekly_events: list[Event]):

    single = Event(
        id="single-1",
        title="One-off",
        date=datetime.date(2024, 1, 2),
        start_time=datetime.time(14, 0),
        end_time=datetime.time(15, 0),
    )

    marked = mark_repeat_events(weekly_events + [single])

    flags = {e.id: e.is_repeat_event for e in marked}
    assert flags == {
        "repeat-1": True,
        "repeat-2": True,
        "repeat-3": True,
        "single-1": False,
    }
    # marking does not change the events themselves
    assert [e.date for e in marked] == [e.date for e in weekly_events + [single]]


def test_detached_event_loses_repeat_mark(weekly_events: list[Event]):

    marked = mark_repeat_events(weekly_events)
    assert all(e.is_repeat_event for e in marked)

    updated = update_single_repeat_event(marked, "repeat-3", {"title": "Moved"})
    # the edited event loses its mark, the others are passed through as given
    assert [type(e) for e in updated] == [MarkedEvent, MarkedEvent, Event]
    assert updated[0] is marked[0]
    assert updated[1] is marked[1]
    remarked = mark_repeat_events(updated)

    flags = {e.id: e.is_repeat_event for e in remarked}
    assert flags == {"repeat-1": True, "repeat-2": True, "repeat-3": False}


def test_event_json_serialisation(weekly_events: list[Event]):

    serialised = weekly_events[0].model_dump(mode="json")

    assert serialised["date"] == "2024-01-01"
    assert serialised["start_time"] == "07:00"
    assert serialised["end_time"] == "08:00"
    assert serialised["repeat"] == {"type": "weekly", "interval": 1, "end_date": None}
    assert Event.model_validate(serialised) == weekly_events[0]


def test_draft_rejects_unknown_fields():

    with pytest.raises(ValidationError):
        EventDraft(
            title="x",
            date=datetime.date(2024, 1, 1),
            start_time=datetime.time(9, 0),
            end_time=datetime.time(10, 0),
            colour="red",
        )
