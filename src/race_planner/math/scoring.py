"""Compliance and confidence scores over a plan's session history.

Both scores are pure functions of the session list and a reference date;
they are recomputed on demand and never stored authoritatively.
"""

from __future__ import annotations

from datetime import date, timedelta

import numpy as np

from race_planner.models.enums import (
    COMPLIANCE_WINDOW_DAYS,
    CONFIDENCE_ACCURACY_WEIGHT,
    CONFIDENCE_COMPLETION_WEIGHT,
    CONFIDENCE_PROGRESS_WEIGHT,
    NEUTRAL_SCORE,
    OVERPERFORMANCE_CAP,
    STATUS_CRUSHING_IT_THRESHOLD,
    STATUS_ON_TRACK_THRESHOLD,
    RunType,
    TrainingStatus,
)
from race_planner.models.plan import TrainingPlan
from race_planner.models.session import TrainingSession


def capped_completion(session: TrainingSession) -> float:
    """Completion ratio capped at 150% and normalised to [0, 1]."""
    ratio = session.completion_ratio or 0.0
    return min(ratio, OVERPERFORMANCE_CAP) / OVERPERFORMANCE_CAP


def session_compliance(session: TrainingSession, today: date) -> float:
    """Score one session: skipped or missed 0, upcoming neutral, done by ratio."""
    if session.is_skipped:
        return 0.0
    if not session.is_completed and session.was_missed(today):
        return 0.0
    if not session.is_completed:
        return NEUTRAL_SCORE
    return capped_completion(session)


def calculate_compliance_score(plan: TrainingPlan, today: date | None = None) -> float:
    """Rolling 7-day adherence score in [0, 1].

    Rest days are excluded. An empty window scores 1.0.
    """
    today = today if today is not None else date.today()
    window_start = today - timedelta(days=COMPLIANCE_WINDOW_DAYS)

    scores = [
        session_compliance(s, today)
        for s in plan.sessions
        if window_start <= s.date <= today and s.run_type != RunType.REST
    ]
    if not scores:
        return 1.0
    return float(np.mean(scores))


def calculate_confidence_score(plan: TrainingPlan, today: date | None = None) -> float:
    """Cumulative readiness score in [0, 1].

    Blends completion rate (50%), volume accuracy (30%) and elapsed plan
    progress (20%). Returns the neutral 0.5 until a run has been scheduled
    in the past.
    """
    today = today if today is not None else date.today()

    completed_runs = [
        s for s in plan.sessions if s.is_completed and s.run_type != RunType.REST
    ]
    past_scheduled = [
        s for s in plan.sessions if s.run_type != RunType.REST and s.date < today
    ]
    if not past_scheduled:
        return NEUTRAL_SCORE

    completion_rate = len(completed_runs) / len(past_scheduled)

    accuracies = [capped_completion(s) for s in completed_runs if s.target_distance > 0]
    volume_accuracy = float(np.mean(accuracies)) if accuracies else NEUTRAL_SCORE

    confidence = (
        completion_rate * CONFIDENCE_COMPLETION_WEIGHT
        + volume_accuracy * CONFIDENCE_ACCURACY_WEIGHT
        + plan.progress_percentage(today) * CONFIDENCE_PROGRESS_WEIGHT
    )
    return float(np.clip(confidence, 0.0, 1.0))


def classify_training_status(compliance: float) -> TrainingStatus:
    if compliance >= STATUS_CRUSHING_IT_THRESHOLD:
        return TrainingStatus.CRUSHING_IT
    if compliance >= STATUS_ON_TRACK_THRESHOLD:
        return TrainingStatus.ON_TRACK
    return TrainingStatus.STRUGGLING
