#
# For licensing see accompanying LICENSE file.
# Copyright © 2025 Apple Inc. All Rights Reserved.
#
"""Helpers turning hydra/OmegaConf configuration nodes into domain objects."""

import datetime
import logging
from typing import Any

from omegaconf import DictConfig, OmegaConf

from repeatcal.exceptions import RepeatRuleError
from repeatcal.work_calendar import EventDraft

logger = logging.getLogger(__name__)


def horizon_from_config(
    cfg: DictConfig, anchor: datetime.date
) -> datetime.date | None:
    """The default horizon for rules without an end date: `horizon_days`
    after `anchor`. Returns None if `horizon_days` is null or missing.

    Raises
    ------
    RepeatRuleError if `horizon_days` is negative.
    """
    horizon_days = cfg.get("horizon_days")
    if horizon_days is None:
        return None
    if horizon_days < 0:
        raise RepeatRuleError(f"horizon_days must not be negative: {horizon_days}")
    return anchor + datetime.timedelta(days=int(horizon_days))


def draft_from_config(cfg: DictConfig) -> EventDraft:
    data: Any = OmegaConf.to_container(cfg, resolve=True)
    draft = EventDraft.model_validate(data)
    logger.debug(f"Loaded draft {draft}")
    return draft
