"""Post-run adaptation: propose changes to future sessions after a completed run.

Completion ratio (actual / target) picks the branch:
- above 120%: protect against back-to-back hard days, otherwise reward an
  easy-feeling overperformance with a bigger next long run
- below 80%: push most of the missed volume onto upcoming easy runs
- otherwise: on target, nothing to change

Proposals only; ``apply_adjustments()`` commits them.
"""

from __future__ import annotations

from datetime import date, timedelta

from race_planner.adaptation.lookahead import adaptable_sessions
from race_planner.models.enums import (
    DEFAULT_PERCEIVED_EFFORT,
    HARD_EFFORT,
    LONG_RUN_BOOST_FACTOR,
    MISSED_VOLUME_DIVISOR,
    MISSED_VOLUME_SHARE,
    OVERACHIEVE_LOOKAHEAD,
    OVERACHIEVE_RATIO,
    UNDERACHIEVE_LOOKAHEAD,
    UNDERACHIEVE_MAX_SESSIONS,
    UNDERACHIEVE_RATIO,
    RunType,
)
from race_planner.models.plan import TrainingPlan
from race_planner.models.session import SessionAdjustment, TrainingSession


def adapt_plan(
    plan: TrainingPlan,
    completed_session: TrainingSession,
    effort: int,
    today: date | None = None,
) -> list[SessionAdjustment]:
    """Propose adjustments to future sessions based on a completed run.

    Args:
        plan: The plan the session belongs to. Not modified.
        completed_session: Session with ``actual_distance`` recorded.
        effort: Reported effort, 1 easy / 2 moderate / 3 hard.
        today: Reference date; defaults to ``date.today()``.

    Returns:
        Proposed adjustments, empty when taper-locked, when no actual
        distance is recorded, for zero-target sessions and for on-target
        runs.
    """
    today = today if today is not None else date.today()

    if plan.is_taper_locked(today):
        return []

    actual = completed_session.actual_distance
    if actual is None:
        return []

    target = completed_session.target_distance
    if target <= 0:
        return []

    if actual > target * OVERACHIEVE_RATIO:
        return _handle_over_achiever(plan, completed_session, effort, today)
    if actual < target * UNDERACHIEVE_RATIO:
        return _handle_under_achiever(plan, target - actual, today)
    return []


def _was_hard_day_before(plan: TrainingPlan, session: TrainingSession) -> bool:
    day_before = session.date - timedelta(days=1)
    return any(
        s.date == day_before
        and s.is_completed
        and (s.perceived_effort if s.perceived_effort is not None else DEFAULT_PERCEIVED_EFFORT)
        >= HARD_EFFORT
        for s in plan.sessions
    )


def _handle_over_achiever(
    plan: TrainingPlan,
    completed_session: TrainingSession,
    effort: int,
    today: date,
) -> list[SessionAdjustment]:
    upcoming = adaptable_sessions(plan, OVERACHIEVE_LOOKAHEAD, today)

    if _was_hard_day_before(plan, completed_session):
        if not upcoming:
            return []
        return [
            SessionAdjustment(
                session_id=upcoming[0].id,
                new_target_distance=0.0,
                new_run_type=RunType.RECOVERY,
                reason="Back-to-back hard efforts. Recovery day recommended.",
            )
        ]

    # A hard effort that was not back-to-back gets no boost and no caution
    if effort > DEFAULT_PERCEIVED_EFFORT:
        return []

    for session in upcoming:
        if session.run_type == RunType.LONG_RUN:
            return [
                SessionAdjustment(
                    session_id=session.id,
                    new_target_distance=session.target_distance * LONG_RUN_BOOST_FACTOR,
                    reason=(
                        "Strong performance. Long run boosted by "
                        f"{LONG_RUN_BOOST_FACTOR - 1:.0%}."
                    ),
                )
            ]
    return []


def _handle_under_achiever(
    plan: TrainingPlan, missed_volume: float, today: date
) -> list[SessionAdjustment]:
    redistribute_amount = missed_volume * MISSED_VOLUME_SHARE
    add_on = redistribute_amount / MISSED_VOLUME_DIVISOR

    easy_runs = [
        s
        for s in adaptable_sessions(plan, UNDERACHIEVE_LOOKAHEAD, today)
        if s.run_type in (RunType.RECOVERY, RunType.BASE)
    ][:UNDERACHIEVE_MAX_SESSIONS]

    return [
        SessionAdjustment(
            session_id=s.id,
            new_target_distance=s.target_distance + add_on,
            reason=f"Volume redistribution: +{add_on:.1f} mi from missed run.",
        )
        for s in easy_runs
    ]
