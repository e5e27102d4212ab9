"""Plan generator: backwards-plans a full calendar of sessions from race day."""

from __future__ import annotations

import logging
from datetime import timedelta

from race_planner.math.distribution import build_week
from race_planner.math.periodization import allocate_phases, weekly_mileage
from race_planner.models.enums import DAYS_PER_WEEK, MIN_PLAN_WEEKS
from race_planner.models.plan import TrainingPlan
from race_planner.models.session import TrainingSession

logger = logging.getLogger(__name__)


def generate_sessions(plan: TrainingPlan) -> list[TrainingSession]:
    """Generate one session per day for every whole week of the plan.

    Phase allocation -> weekly volume -> day assignment, week by week.
    The plan itself is not modified; callers attach the result to
    ``plan.sessions``.

    Args:
        plan: Plan with race distance, dates, baseline mileage and rest days.

    Returns:
        ``total_weeks * 7`` sessions in date order, or an empty list when
        the plan is shorter than two weeks.
    """
    total_weeks = plan.total_weeks
    if total_weeks < MIN_PLAN_WEEKS:
        logger.info(
            "Planning horizon of %d week(s) is below the %d-week minimum; no sessions generated",
            total_weeks,
            MIN_PLAN_WEEKS,
        )
        return []

    allocation = allocate_phases(total_weeks, plan.race_distance)
    logger.debug(
        "Allocated %d weeks: base=%d build=%d peak=%d taper=%d",
        total_weeks,
        allocation.base_weeks,
        allocation.build_weeks,
        allocation.peak_weeks,
        allocation.taper_weeks,
    )

    sessions: list[TrainingSession] = []
    for week_index, phase in enumerate(allocation.schedule):
        week_start = plan.start_date + timedelta(days=DAYS_PER_WEEK * week_index)
        miles = weekly_mileage(plan.weekly_mileage, week_index, allocation, plan.race_distance)
        sessions.extend(
            build_week(week_start, miles, phase, plan.race_distance, plan.rest_days)
        )

    return sessions
