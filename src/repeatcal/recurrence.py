#
# For licensing see accompanying LICENSE file.
# Copyright © 2025 Apple Inc. All Rights Reserved.
#
"""Recurrence rules and the generator which expands them into calendar dates."""

import datetime
import itertools
import logging
from collections.abc import Iterator
from enum import StrEnum, auto
from typing import Protocol

from dateutil import rrule
from pydantic import BaseModel, ConfigDict, Field, StrictInt

from repeatcal.exceptions import RepeatRuleError, UnboundedRepeatError
from repeatcal.time_utils import DateLike, days_in_month, format_date, to_date

logger = logging.getLogger(__name__)


class RepeatType(StrEnum):
    NONE = auto()
    DAILY = auto()
    WEEKLY = auto()
    MONTHLY = auto()
    YEARLY = auto()


_UNIT_NAMES = {
    RepeatType.DAILY: ("Daily", "days"),
    RepeatType.WEEKLY: ("Weekly", "weeks"),
    RepeatType.MONTHLY: ("Monthly", "months"),
    RepeatType.YEARLY: ("Yearly", "years"),
}


class RepeatRule(BaseModel):
    """How often an event repeats.

    Parameters
    ----------
    type
        The repetition frequency. `none` means the event occurs once.
    interval
        Number of frequency units between two occurrences. For example, a
        weekly rule with an interval of 2 repeats every other week.
    end_date
        The last calendar day on which an occurrence may fall (inclusive).
        Ignored by rules of type `none`.
    """

    model_config = ConfigDict(frozen=True)

    type: RepeatType = RepeatType.NONE
    interval: StrictInt = Field(default=1, ge=1)
    end_date: datetime.date | None = None

    @property
    def repeats(self) -> bool:
        return self.type != RepeatType.NONE

    def detached(self) -> "RepeatRule":
        """A copy of this rule downgraded to a one-off occurrence."""
        return self.model_copy(update={"type": RepeatType.NONE})

    def to_rrule(self, start: DateLike) -> rrule.rrule:
        """The equivalent RFC 5545 rule, starting at midnight on `start`."""
        freq_map = {
            RepeatType.DAILY: rrule.DAILY,
            RepeatType.WEEKLY: rrule.WEEKLY,
            RepeatType.MONTHLY: rrule.MONTHLY,
            RepeatType.YEARLY: rrule.YEARLY,
        }
        dtstart = datetime.datetime.combine(to_date(start), datetime.time())
        if not self.repeats:
            return rrule.rrule(rrule.DAILY, dtstart=dtstart, count=1)
        rule_params = {
            "interval": self.interval,
            "dtstart": dtstart,
            "until": (
                datetime.datetime.combine(self.end_date, datetime.time())
                if self.end_date is not None
                else None
            ),
        }
        return rrule.rrule(
            freq_map[self.type],
            **{k: v for k, v in rule_params.items() if v is not None},
        )


class Repeatable(Protocol):
    date: datetime.date
    repeat: RepeatRule


def describe_repeat(rule: RepeatRule) -> str:
    """Human-readable summary of a rule, eg "Every 2 weeks, until 2024-03-01"."""
    if not rule.repeats:
        return "Does not repeat"
    head, unit = _UNIT_NAMES[rule.type]
    if rule.interval != 1:
        head = f"Every {rule.interval} {unit}"
    if rule.end_date is not None:
        head += f", until {format_date(rule.end_date)}"
    return head


def validate_rule(rule: RepeatRule) -> None:
    """Reject rules which bypassed model validation (eg built with
    `model_construct`) before any date is generated.

    Raises
    ------
    RepeatRuleError if the rule type is unknown or the interval is not
    a positive integer.
    """
    try:
        RepeatType(rule.type)
    except ValueError as e:
        raise RepeatRuleError(f"Unrecognised repeat type: {rule.type!r}") from e
    if isinstance(rule.interval, bool) or not isinstance(rule.interval, int):
        raise RepeatRuleError(f"Repeat interval must be an integer: {rule.interval!r}")
    if rule.interval < 1:
        raise RepeatRuleError(f"Repeat interval must be positive: {rule.interval}")


def effective_end(
    rule: RepeatRule, horizon_end: DateLike | None
) -> datetime.date | None:
    """The earlier of the rule's own end date and `horizon_end`."""
    bounds = [to_date(d) for d in (rule.end_date, horizon_end) if d is not None]
    return min(bounds) if bounds else None


def _step_days(
    start: datetime.date, days: int, end: datetime.date
) -> Iterator[datetime.date]:
    for k in itertools.count(1):
        try:
            candidate = start + datetime.timedelta(days=k * days)
        except OverflowError:
            return
        if candidate > end:
            return
        yield candidate


def _step_months(
    start: datetime.date, months: int, end: datetime.date
) -> Iterator[datetime.date]:
    anchor_day = start.day
    for k in itertools.count(1):
        year, month_index = divmod(start.month - 1 + k * months, 12)
        year += start.year
        month = month_index + 1
        if year > datetime.MAXYEAR or datetime.date(year, month, 1) > end:
            return
        if anchor_day > days_in_month(year, month):
            logger.debug(f"Skipping {year}-{month:02d}: no day {anchor_day}")
            continue
        candidate = datetime.date(year, month, anchor_day)
        if candidate <= end:
            yield candidate


def _step_years(
    start: datetime.date, years: int, end: datetime.date
) -> Iterator[datetime.date]:
    anchor_month, anchor_day = start.month, start.day
    for k in itertools.count(1):
        year = start.year + k * years
        if year > datetime.MAXYEAR or datetime.date(year, anchor_month, 1) > end:
            return
        if anchor_day > days_in_month(year, anchor_month):
            logger.debug(f"Skipping {year}: no {anchor_month:02d}-{anchor_day:02d}")
            continue
        candidate = datetime.date(year, anchor_month, anchor_day)
        if candidate <= end:
            yield candidate


def iter_repeat_dates(
    start: DateLike, rule: RepeatRule, horizon_end: DateLike | None = None
) -> Iterator[datetime.date]:
    """Lazily yield the occurrence dates of `rule`, starting with `start`.

    Occurrences are bounded by the earlier of `rule.end_date` and
    `horizon_end`, both inclusive. Monthly and yearly rules keep the
    anchor day (and month) of `start` and skip the periods in which it
    does not exist rather than clamping to the end of the month.

    Raises
    ------
    RepeatRuleError if the rule is invalid.
    UnboundedRepeatError if a repeating rule has neither an end date nor
    a horizon.
    """
    validate_rule(rule)
    start = to_date(start)
    rule_type = RepeatType(rule.type)
    if rule_type == RepeatType.NONE:
        return iter([start])
    end = effective_end(rule, horizon_end)
    if end is None:
        raise UnboundedRepeatError(
            f"A {rule_type} rule without an end date requires a horizon"
        )
    if rule_type == RepeatType.DAILY:
        following = _step_days(start, rule.interval, end)
    elif rule_type == RepeatType.WEEKLY:
        following = _step_days(start, rule.interval * 7, end)
    elif rule_type == RepeatType.MONTHLY:
        following = _step_months(start, rule.interval, end)
    else:
        following = _step_years(start, rule.interval, end)
    return itertools.chain([start], following)


def generate_repeat_dates(
    event: Repeatable, horizon_end: DateLike | None
) -> list[str]:
    """Expand the repeat rule of `event` into `YYYY-MM-DD` date strings.

    Parameters
    ----------
    event
        Any object with a `date` (the first occurrence) and a `repeat` rule,
        typically an `EventDraft` or an `Event`.
    horizon_end
        The last day the caller is interested in. The rule's own end date
        wins when it is earlier.

    Notes
    -----
    1. The first element is always `event.date`, even if it falls after
    the effective end.
    """
    return [
        format_date(d) for d in iter_repeat_dates(event.date, event.repeat, horizon_end)
    ]
