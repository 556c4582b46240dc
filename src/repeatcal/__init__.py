#
# For licensing see accompanying LICENSE file.
# Copyright © 2025 Apple Inc. All Rights Reserved.
#
import datetime
from importlib.metadata import PackageNotFoundError, version  # pragma: no cover

from omegaconf import OmegaConf

try:
    # Change here if project is renamed and does not equal the package name
    dist_name = "repeatcal"
    __version__ = version(dist_name)
except PackageNotFoundError:  # pragma: no cover
    __version__ = "unknown"
finally:
    del version, PackageNotFoundError


if not OmegaConf.has_resolver("today"):
    OmegaConf.register_new_resolver(
        "today", lambda: datetime.date.today().isoformat()
    )

from repeatcal.recurrence import (  # noqa: E402
    RepeatRule,
    RepeatType,
    generate_repeat_dates,
)
from repeatcal.work_calendar import (  # noqa: E402
    Event,
    EventDraft,
    MarkedEvent,
    create_repeat_events,
    delete_single_repeat_event,
    mark_repeat_events,
    update_single_repeat_event,
)

__all__ = [
    "Event",
    "EventDraft",
    "MarkedEvent",
    "RepeatRule",
    "RepeatType",
    "create_repeat_events",
    "delete_single_repeat_event",
    "generate_repeat_dates",
    "mark_repeat_events",
    "update_single_repeat_event",
]
