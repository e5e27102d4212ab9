"""Commit proposed session adjustments into a plan."""

from __future__ import annotations

import logging
from typing import Iterable

from race_planner.models.plan import TrainingPlan
from race_planner.models.session import SessionAdjustment

logger = logging.getLogger(__name__)


def apply_adjustments(adjustments: Iterable[SessionAdjustment], plan: TrainingPlan) -> int:
    """Overwrite target distance and/or run type of each referenced session.

    Adjustments whose session no longer exists are stale and skipped; the
    rest of the batch still applies.

    Returns:
        Number of adjustments applied.
    """
    applied = 0
    for adjustment in adjustments:
        session = plan.session_by_id(adjustment.session_id)
        if session is None:
            logger.debug("Skipping stale adjustment for session %s", adjustment.session_id)
            continue
        if adjustment.new_target_distance is not None:
            session.target_distance = adjustment.new_target_distance
        if adjustment.new_run_type is not None:
            session.run_type = adjustment.new_run_type
        applied += 1
    return applied
