"""Data models for the race planner."""

from race_planner.models.enums import RaceDistance, RunType, TrainingPhase, TrainingStatus
from race_planner.models.plan import TrainingPlan
from race_planner.models.session import SessionAdjustment, TrainingSession

__all__ = [
    "RaceDistance",
    "RunType",
    "SessionAdjustment",
    "TrainingPhase",
    "TrainingPlan",
    "TrainingSession",
    "TrainingStatus",
]
