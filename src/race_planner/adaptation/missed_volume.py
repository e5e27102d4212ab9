"""Weekly sweep of missed runs into the upcoming easy days."""

from __future__ import annotations

from datetime import date, timedelta

from race_planner.adaptation.lookahead import adaptable_sessions
from race_planner.models.enums import (
    MISSED_SWEEP_MAX_INCREASE_PCT,
    MISSED_SWEEP_WINDOW_DAYS,
    MISSED_VOLUME_DIVISOR,
    UNDERACHIEVE_LOOKAHEAD,
    UNDERACHIEVE_MAX_SESSIONS,
    RunType,
)
from race_planner.models.plan import TrainingPlan
from race_planner.models.session import SessionAdjustment, TrainingSession


def missed_sessions(plan: TrainingPlan, today: date) -> list[TrainingSession]:
    """Runs missed within the last week whose volume has not been swept yet."""
    window_start = today - timedelta(days=MISSED_SWEEP_WINDOW_DAYS)
    return [
        s
        for s in plan.sessions
        if window_start <= s.date < today
        and s.run_type.counts_as_mileage
        and s.was_missed(today)
        and not s.volume_redistributed
    ]


def missed_volume(plan: TrainingPlan, today: date) -> float:
    """Target miles of runs missed within the last week and not yet swept."""
    return sum(s.target_distance for s in missed_sessions(plan, today))


def redistribute_missed_volume(
    plan: TrainingPlan, today: date | None = None
) -> list[SessionAdjustment]:
    """Spread last week's missed volume over the next three easy runs.

    Each receiving run gets an equal share of the missed total, capped at
    +15% of its own target. Whatever exceeds the caps is let go. Callers
    mark the swept runs ``volume_redistributed`` after applying, so a
    second sweep does not count them again.
    """
    today = today if today is not None else date.today()

    if plan.is_taper_locked(today):
        return []

    total_missed = missed_volume(plan, today)
    if total_missed <= 0:
        return []

    share = total_missed / MISSED_VOLUME_DIVISOR
    easy_runs = [
        s
        for s in adaptable_sessions(plan, UNDERACHIEVE_LOOKAHEAD, today)
        if s.run_type in (RunType.RECOVERY, RunType.BASE)
    ][:UNDERACHIEVE_MAX_SESSIONS]

    adjustments = []
    for session in easy_runs:
        add_on = min(share, session.target_distance * MISSED_SWEEP_MAX_INCREASE_PCT)
        if add_on <= 0:
            continue
        adjustments.append(
            SessionAdjustment(
                session_id=session.id,
                new_target_distance=session.target_distance + add_on,
                reason=f"Missed-run catch-up: +{add_on:.1f} mi spread from last week.",
            )
        )
    return adjustments
