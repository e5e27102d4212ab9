"""Upcoming sessions that adaptation is allowed to touch."""

from __future__ import annotations

from datetime import date

from race_planner.models.plan import TrainingPlan
from race_planner.models.session import TrainingSession


def adaptable_sessions(
    plan: TrainingPlan, count: int, today: date
) -> list[TrainingSession]:
    """The next *count* running sessions, minus any inside the taper window.

    Taper sessions are never adjustment targets, even when the lookahead
    reaches into them from an earlier phase.
    """
    return [
        s for s in plan.next_running_sessions(count, today) if not plan.is_taper_date(s.date)
    ]
