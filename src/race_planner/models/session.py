"""Training sessions and proposed session adjustments."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import date

from race_planner.models.enums import OVERACHIEVE_RATIO, UNDERACHIEVE_RATIO, RunType


@dataclass(eq=False)
class TrainingSession:
    """A single calendar day within a race plan.

    Sessions are mutable: adaptation rewrites ``target_distance`` and
    ``run_type``, the schedule shifter moves ``date``. Identity is the
    ``id`` field, which never changes.
    """

    date: date
    run_type: RunType
    target_distance: float
    actual_distance: float | None = None
    perceived_effort: int | None = None  # 1 easy, 2 moderate, 3 hard
    pre_run_feeling: float | None = None
    is_completed: bool = False
    is_skipped: bool = False
    notes: str | None = None
    volume_redistributed: bool = False  # missed volume already swept forward
    id: uuid.UUID = field(default_factory=uuid.uuid4)

    @property
    def completion_ratio(self) -> float | None:
        """Actual over target distance; None without an actual or a target."""
        if self.actual_distance is None or self.target_distance <= 0:
            return None
        return self.actual_distance / self.target_distance

    @property
    def was_over_achieved(self) -> bool:
        ratio = self.completion_ratio
        return ratio is not None and ratio > OVERACHIEVE_RATIO

    @property
    def was_under_achieved(self) -> bool:
        """Completed short of 80% of target; a completed run with no ratio counts as 0."""
        if not self.is_completed:
            return False
        return (self.completion_ratio or 0.0) < UNDERACHIEVE_RATIO

    def was_missed(self, today: date) -> bool:
        """True when the day has passed without completion or an explicit skip."""
        return not self.is_completed and not self.is_skipped and self.date < today


@dataclass(frozen=True)
class SessionAdjustment:
    """A proposed, not-yet-applied change to a future session."""

    session_id: uuid.UUID
    new_target_distance: float | None = None
    new_run_type: RunType | None = None
    reason: str = ""
