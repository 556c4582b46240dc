#
# For licensing see accompanying LICENSE file.
# Copyright © 2025 Apple Inc. All Rights Reserved.
#
"""Expansion of repeating event drafts into concrete calendar events and the
per-occurrence edits which detach a single event from its series.

All functions take a snapshot of the events and return a new list; neither the
input list nor the events it holds are modified.
"""

import datetime
import logging
import uuid
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, field_serializer

from repeatcal.exceptions import EventDefinitionError
from repeatcal.recurrence import RepeatRule, iter_repeat_dates
from repeatcal.time_utils import DateLike, format_date

EventId = str

# fields owned by the instance manager, which cannot be set through updates
PROTECTED_FIELDS = ("id", "repeat")

logger = logging.getLogger(__name__)


class EventDraft(BaseModel):
    """A user-authored event, possibly repeating.

    Parameters
    ----------
    date
        The day of the first occurrence. Monthly and yearly repeats keep its
        day (and month).
    start_time, end_time
        Time of day at which each occurrence starts and ends.
    notification_time
        How many minutes before the start of an occurrence to notify the user.
    repeat
        The repetition rule. Defaults to a one-off event.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    title: str
    date: datetime.date
    start_time: datetime.time
    end_time: datetime.time
    description: str = ""
    location: str = ""
    category: str = ""
    notification_time: int = 0
    repeat: RepeatRule = RepeatRule()

    @field_serializer("start_time", "end_time", when_used="json")
    def serialise_time(self, value: datetime.time) -> str:
        return value.strftime("%H:%M")

    @field_serializer("date", when_used="json")
    def serialise_date(self, value: datetime.date) -> str:
        return format_date(value)

    def __str__(self) -> str:
        display = (
            f"'{self.title}' on {format_date(self.date)} "
            f"{self.start_time:%H:%M}-{self.end_time:%H:%M}"
        )
        if self.location:
            display += f" (location: {self.location})"
        return display


class Event(EventDraft):
    """A single occurrence in the calendar.

    Parameters
    ----------
    id
        Unique identifier of the occurrence.
    repeat
        The rule of the series this occurrence was created from. It is set
        to `none` once the occurrence is edited on its own.
    """

    id: EventId


class MarkedEvent(Event):
    """An event annotated for display.

    Parameters
    ----------
    is_repeat_event
        True if the event still belongs to a repeating series. Derived from
        `repeat.type` every time events are marked.
    """

    is_repeat_event: bool


def _event_fields(event: Event) -> dict[str, Any]:
    return event.model_dump(include=set(Event.model_fields))


def create_repeat_events(
    draft: EventDraft, horizon_end: DateLike | None = None
) -> list[Event]:
    """Create one event for every occurrence of `draft`.

    Parameters
    ----------
    draft
        The event to expand.
    horizon_end
        Last day to generate occurrences for when the draft's rule has no end
        date of its own. Ignored otherwise.

    Raises
    ------
    UnboundedRepeatError if the draft repeats, its rule has no end date and
    `horizon_end` is not given.
    """
    horizon = draft.repeat.end_date if draft.repeat.end_date is not None else horizon_end
    fields = draft.model_dump(include=set(EventDraft.model_fields) - {"date", "repeat"})
    events = [
        Event(
            **fields,
            date=occurrence,
            repeat=draft.repeat.model_copy(),
            id=str(uuid.uuid4()),
        )
        for occurrence in iter_repeat_dates(draft.date, draft.repeat, horizon)
    ]
    logger.debug(f"Expanded {draft} into {len(events)} events")
    return events


def update_single_repeat_event(
    events: Iterable[Event], event_id: EventId, updates: Mapping[str, Any]
) -> list[Event]:
    """Edit one occurrence and detach it from its series.

    The fields in `updates` overwrite those of the event with `event_id`
    and its repeat type is set to `none`, whatever it was before. Other
    events are returned as they are. If no event has `event_id`, the
    events are returned unchanged.

    Notes
    -----
    1. The edited event is always returned as a plain `Event`. Other events
    are passed through as given, so `MarkedEvent`s keep their stale
    `is_repeat_event` flags; call `mark_repeat_events` again to refresh them.

    Raises
    ------
    EventDefinitionError if `updates` attempts to change the ID or the repeat
    rule of the event with `event_id`.
    """
    events = list(events)
    updated, found = [], False
    for event in events:
        if event.id != event_id:
            updated.append(event)
            continue
        if protected := [f for f in PROTECTED_FIELDS if f in updates]:
            raise EventDefinitionError(
                f"Cannot update {', '.join(protected)} of a single occurrence"
            )
        found = True
        data = _event_fields(event) | dict(updates)
        data["repeat"] = event.repeat.detached()
        updated.append(Event.model_validate(data))
    if not found:
        logger.debug(f"No event with ID {event_id} to update")
        return events
    return updated


def delete_single_repeat_event(
    events: Iterable[Event], event_id: EventId
) -> list[Event]:
    """Remove the occurrence with `event_id`, leaving its series intact.
    The events are returned unchanged if none has `event_id`."""
    events = list(events)
    remaining = [event for event in events if event.id != event_id]
    if len(remaining) == len(events):
        logger.debug(f"No event with ID {event_id} to delete")
    return remaining


def mark_repeat_events(events: Iterable[Event]) -> list[MarkedEvent]:
    """Flag the events which still belong to a repeating series."""
    return [
        MarkedEvent(**_event_fields(event), is_repeat_event=event.repeat.repeats)
        for event in events
    ]
