#
# For licensing see accompanying LICENSE file.
# Copyright © 2025 Apple Inc. All Rights Reserved.
#
import logging

import hydra
from omegaconf import DictConfig, OmegaConf

from repeatcal.display import display_events, display_month, display_week
from repeatcal.exceptions import EventDefinitionError
from repeatcal.recurrence import describe_repeat
from repeatcal.settings import draft_from_config, horizon_from_config
from repeatcal.time_utils import to_date
from repeatcal.work_calendar import (
    MarkedEvent,
    create_repeat_events,
    delete_single_repeat_event,
    mark_repeat_events,
    update_single_repeat_event,
)

logger = logging.getLogger(__name__)


def expand_from_config(cfg: DictConfig) -> list[MarkedEvent]:
    """Expand the configured draft, then apply the configured single
    occurrence edits and deletions.

    Raises
    ------
    EventDefinitionError if an edit or deletion refers to a position outside
    the expanded series.
    """
    draft = draft_from_config(cfg.draft)
    horizon = horizon_from_config(cfg, draft.date)
    events = create_repeat_events(draft, horizon_end=horizon)
    logger.info(
        f"{draft.title}: {describe_repeat(draft.repeat)}, {len(events)} occurrences"
    )
    # positions refer to the series as first expanded
    ids = [event.id for event in events]

    def occurrence_id(index: int) -> str:
        if not 0 <= index < len(ids):
            raise EventDefinitionError(
                f"No occurrence at position {index}, the series has {len(ids)}"
            )
        return ids[index]

    for edit in cfg.get("edits") or []:
        updates = OmegaConf.to_container(edit.updates, resolve=True)
        events = update_single_repeat_event(events, occurrence_id(edit.index), updates)
        logger.info(f"Detached occurrence {edit.index} from the series")
    for index in cfg.get("deletions") or []:
        events = delete_single_repeat_event(events, occurrence_id(index))
        logger.info(f"Deleted occurrence {index}")
    return mark_repeat_events(events)


@hydra.main(
    config_name="expand_series",
    config_path="pkg://repeatcal.configs",
    version_base=None,
)
def main(cfg: DictConfig):
    if cfg.debug:
        logger.info(OmegaConf.to_yaml(cfg, resolve=True))
    events = expand_from_config(cfg)
    display_events(events)
    if cfg.show_months:
        seen = []
        for event in events:
            month = event.date.replace(day=1)
            if month not in seen:
                seen.append(month)
                display_month(month, events)
    if cfg.show_week_of is not None:
        display_week(to_date(cfg.show_week_of), events)


if __name__ == "__main__":
    main()
