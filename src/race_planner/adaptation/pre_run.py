"""Pre-run check-in: scale today's run by how the runner feels."""

from __future__ import annotations

import uuid
from datetime import date
from typing import NamedTuple

from race_planner.adaptation.lookahead import adaptable_sessions
from race_planner.models.enums import (
    FEELING_GOOD_THRESHOLD,
    FEELING_MAX_REDUCTION,
    FEELING_TIRED_THRESHOLD,
    FEELING_VERY_TIRED_FACTOR,
    PRE_RUN_LOOKAHEAD,
    PRE_RUN_MAX_SESSIONS,
    PRE_RUN_REDISTRIBUTION_THRESHOLD,
    RunType,
)
from race_planner.models.plan import TrainingPlan
from race_planner.models.session import SessionAdjustment, TrainingSession

_REDISTRIBUTION_TYPES = frozenset({RunType.BASE, RunType.RECOVERY, RunType.LONG_RUN})


class PreRunResult(NamedTuple):
    adjusted_distance: float
    message: str


def pre_run_adjustment(session: TrainingSession, feeling_score: float) -> PreRunResult:
    """Adjust today's target from a 0-1 "how do you feel" score.

    - >= 0.7: unchanged
    - 0.3-0.7: linear 0-20% reduction
    - < 0.3: halved, with a suggestion to swap for recovery or rest
    """
    feeling = min(max(feeling_score, 0.0), 1.0)
    target = session.target_distance

    if feeling >= FEELING_GOOD_THRESHOLD:
        return PreRunResult(target, "Feeling great! Stick to the plan.")

    if feeling >= FEELING_TIRED_THRESHOLD:
        span = FEELING_GOOD_THRESHOLD - FEELING_TIRED_THRESHOLD
        reduction_factor = 1.0 - ((FEELING_GOOD_THRESHOLD - feeling) / span) * FEELING_MAX_REDUCTION
        adjusted = target * reduction_factor
        return PreRunResult(
            adjusted,
            f"Adjusted to {adjusted:.1f} mi. Volume moves to your next easy run.",
        )

    return PreRunResult(
        target * FEELING_VERY_TIRED_FACTOR,
        "Take it easy today. Consider a light recovery run or rest.",
    )


def redistribute_pre_run_reduction(
    original_target: float,
    adjusted_target: float,
    plan: TrainingPlan,
    today: date | None = None,
    exclude_id: uuid.UUID | None = None,
) -> list[SessionAdjustment]:
    """Spread a pre-run reduction over the next couple of easy or long runs.

    Deficits of a quarter mile or less are absorbed, not redistributed.
    The reduced session itself (``exclude_id``) never receives volume back.
    """
    today = today if today is not None else date.today()

    deficit = original_target - adjusted_target
    if deficit <= PRE_RUN_REDISTRIBUTION_THRESHOLD:
        return []

    candidates = [
        s
        for s in adaptable_sessions(plan, PRE_RUN_LOOKAHEAD, today)
        if s.run_type in _REDISTRIBUTION_TYPES and s.id != exclude_id
    ][:PRE_RUN_MAX_SESSIONS]

    add_on = deficit / max(1, len(candidates))
    return [
        SessionAdjustment(
            session_id=s.id,
            new_target_distance=s.target_distance + add_on,
            reason=f"Pre-run adjustment redistribution: +{add_on:.1f} mi.",
        )
        for s in candidates
    ]
