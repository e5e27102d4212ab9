"""Life happens: push every remaining session back by a few days."""

from __future__ import annotations

from datetime import date, timedelta

from race_planner.models.plan import TrainingPlan


def can_shift_schedule(plan: TrainingPlan, days: int, today: date | None = None) -> bool:
    """Whether shifting keeps the last remaining session on or before race day.

    Only forward shifts of at least one day are allowed; moving sessions
    back would stack them onto days already in the calendar.
    """
    if days < 1:
        return False

    today = today if today is not None else date.today()

    remaining = [s for s in plan.sessions if s.date >= today and not s.is_completed]
    if not remaining:
        return True

    last = max(remaining, key=lambda s: s.date)
    return last.date + timedelta(days=days) <= plan.race_date


def shift_schedule(plan: TrainingPlan, days: int, today: date | None = None) -> int:
    """Move every session dated today or later that is not completed, in place.

    Completed sessions are history and never move. No feasibility check is
    made here; call ``can_shift_schedule()`` first.

    Returns:
        Number of sessions moved.
    """
    today = today if today is not None else date.today()

    moved = 0
    for session in plan.sessions:
        if session.date >= today and not session.is_completed:
            session.date = session.date + timedelta(days=days)
            moved += 1
    return moved
