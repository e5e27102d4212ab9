"""PlanCoach: orchestrates one runner's active plan through its check-in flows.

The coach owns the single active TrainingPlan and is its only writer. Every
flow follows the same shape: propose adjustments with a pure engine
function, commit them with ``apply_adjustments()``, then refresh the cached
compliance and confidence scores.

Usage::

    coach = PlanCoach()
    plan = coach.create_plan(RaceDistance.HALF_MARATHON, date(2027, 4, 18), 20.0, 8.0)
    coach.complete_session(session.id, actual_distance=6.5, effort=2)
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from datetime import date
from typing import Callable, Iterable

from race_planner.adaptation import (
    PreRunResult,
    adapt_plan,
    apply_adjustments,
    can_shift_schedule,
    missed_sessions,
    pre_run_adjustment,
    redistribute_missed_volume,
    redistribute_pre_run_reduction,
    shift_schedule,
)
from race_planner.config import Settings, load_settings
from race_planner.exceptions import (
    InsufficientHorizonError,
    NoActivePlanError,
    SessionNotFoundError,
)
from race_planner.generator import generate_sessions
from race_planner.math.scoring import (
    calculate_compliance_score,
    calculate_confidence_score,
    classify_training_status,
)
from race_planner.models.enums import (
    CRUSHING_IT_RATIO,
    DEFAULT_PERCEIVED_EFFORT,
    MIN_PLAN_WEEKS,
    NEUTRAL_SCORE,
    RaceDistance,
    RunType,
    TrainingStatus,
)
from race_planner.models.plan import TrainingPlan
from race_planner.models.session import SessionAdjustment, TrainingSession

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _SessionBaseline:
    target_distance: float
    run_type: RunType


@dataclass(frozen=True)
class _AutoCompletionSnapshot:
    """Plan state captured before an auto-completion, restored on refinement."""

    baselines: dict[uuid.UUID, _SessionBaseline] = field(default_factory=dict)
    actual_distance: float | None = None
    perceived_effort: int | None = None
    is_completed: bool = False
    summary: str | None = None


class PlanCoach:
    """Single-writer manager for the active training plan.

    Args:
        settings: Runtime settings; read from the environment when omitted.
        clock: Returns "today"; injectable for deterministic tests.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        clock: Callable[[], date] = date.today,
    ) -> None:
        self.settings = settings or load_settings()
        self.clock = clock
        self.active_plan: TrainingPlan | None = None
        self.last_adaptation_summary: str | None = None
        self.compliance_score: float = 1.0
        self.confidence_score: float = NEUTRAL_SCORE
        self._snapshots: dict[uuid.UUID, _AutoCompletionSnapshot] = {}

    # -- Plan lifecycle ---------------------------------------------------

    def create_plan(
        self,
        race_distance: RaceDistance,
        race_date: date,
        weekly_mileage: float,
        longest_run: float,
        rest_days: Iterable[int] = (),
        start_date: date | None = None,
    ) -> TrainingPlan:
        """Create a plan, generate its calendar and make it the active plan.

        Raises:
            InsufficientHorizonError: If the race is less than two weeks out.
        """
        plan = TrainingPlan(
            race_distance=race_distance,
            race_date=race_date,
            start_date=start_date or self.clock(),
            weekly_mileage=weekly_mileage,
            longest_recent_run=longest_run,
            rest_days=frozenset(rest_days),
        )

        sessions = generate_sessions(plan)
        if not sessions:
            raise InsufficientHorizonError(plan.total_weeks, MIN_PLAN_WEEKS)

        if plan.total_weeks < race_distance.minimum_weeks_needed:
            logger.warning(
                "%d-week plan is shorter than the recommended %d weeks for a %s",
                plan.total_weeks,
                race_distance.minimum_weeks_needed,
                race_distance.display_name,
            )

        plan.sessions.extend(sessions)
        self.active_plan = plan
        self.last_adaptation_summary = None
        self._snapshots.clear()
        self._refresh_scores()

        logger.info(
            "Created %s plan: %d weeks, %d sessions, race on %s",
            race_distance.display_name,
            plan.total_weeks,
            len(sessions),
            race_date.isoformat(),
        )
        return plan

    def cancel_plan(self) -> None:
        """Deactivate the current plan."""
        plan = self._require_plan()
        plan.is_active = False
        self.active_plan = None
        self._snapshots.clear()
        logger.info("Cancelled plan %s", plan.id)

    @property
    def todays_session(self) -> TrainingSession | None:
        if self.active_plan is None:
            return None
        return self.active_plan.todays_session(self.clock())

    # -- Session completion -----------------------------------------------

    def complete_session(
        self, session_id: uuid.UUID, actual_distance: float, effort: int
    ) -> list[SessionAdjustment]:
        """Record a finished run and adapt the rest of the plan."""
        self._snapshots.pop(session_id, None)
        return self._apply_completion(self._require_session(session_id), actual_distance, effort)

    def auto_complete_session(
        self,
        session_id: uuid.UUID,
        actual_distance: float,
        default_effort: int | None = None,
    ) -> list[SessionAdjustment]:
        """Complete a run straight after a guided workout, before check-in.

        The plan is snapshotted first so ``refine_completed_session()`` can
        undo this adaptation instead of compounding it.
        """
        plan = self._require_plan()
        session = self._require_session(session_id)
        effort = default_effort if default_effort is not None else self.settings.default_effort

        self._snapshots[session_id] = _AutoCompletionSnapshot(
            baselines={
                s.id: _SessionBaseline(s.target_distance, s.run_type) for s in plan.sessions
            },
            actual_distance=session.actual_distance,
            perceived_effort=session.perceived_effort,
            is_completed=session.is_completed,
            summary=self.last_adaptation_summary,
        )
        return self._apply_completion(session, actual_distance, effort)

    def refine_completed_session(
        self, session_id: uuid.UUID, actual_distance: float, effort: int
    ) -> list[SessionAdjustment]:
        """Replace an auto-completion with the runner's check-in answers."""
        plan = self._require_plan()
        session = self._require_session(session_id)

        snapshot = self._snapshots.pop(session_id, None)
        if snapshot is not None:
            for planned in plan.sessions:
                baseline = snapshot.baselines.get(planned.id)
                if baseline is None:
                    continue
                planned.target_distance = baseline.target_distance
                planned.run_type = baseline.run_type
            session.actual_distance = snapshot.actual_distance
            session.perceived_effort = snapshot.perceived_effort
            session.is_completed = snapshot.is_completed
            self.last_adaptation_summary = snapshot.summary

        return self._apply_completion(session, actual_distance, effort)

    def mark_cross_training_complete(
        self, session_id: uuid.UUID, activity_name: str, duration_minutes: int
    ) -> None:
        """Log a cross-training day; no adaptation, scores refreshed."""
        session = self._require_session(session_id)
        if session.actual_distance is None:
            session.actual_distance = 0.0
        if session.perceived_effort is None:
            session.perceived_effort = DEFAULT_PERCEIVED_EFFORT
        session.is_completed = True
        session.notes = f"{activity_name} - {duration_minutes} min"

        self._snapshots.pop(session_id, None)
        self._refresh_scores()
        self.last_adaptation_summary = f"{activity_name} logged. Great consistency."

    def _apply_completion(
        self, session: TrainingSession, actual_distance: float, effort: int
    ) -> list[SessionAdjustment]:
        plan = self._require_plan()
        today = self.clock()

        session.actual_distance = actual_distance
        session.perceived_effort = effort
        session.is_completed = True

        adjustments = adapt_plan(plan, session, effort, today=today)
        apply_adjustments(adjustments, plan)
        self._refresh_scores()

        self.last_adaptation_summary = adjustments[0].reason if adjustments else None
        if actual_distance > session.target_distance * CRUSHING_IT_RATIO and effort <= DEFAULT_PERCEIVED_EFFORT:
            self.last_adaptation_summary = "Crushing it! Your confidence score just got a boost."

        if plan.race_date < today:
            plan.is_completed = True

        logger.info(
            "Completed %s on %s: %.2f of %.2f mi, effort %d, %d adjustment(s)",
            session.run_type.display_name,
            session.date.isoformat(),
            actual_distance,
            session.target_distance,
            effort,
            len(adjustments),
        )
        return adjustments

    # -- Check-in adjustments ---------------------------------------------

    def apply_pre_run_adjustment(self, session_id: uuid.UUID, feeling_score: float) -> PreRunResult:
        """Scale a session by the runner's feeling and move the deficit forward."""
        plan = self._require_plan()
        session = self._require_session(session_id)

        result = pre_run_adjustment(session, feeling_score)
        original_target = session.target_distance
        session.target_distance = result.adjusted_distance
        session.pre_run_feeling = feeling_score

        redistributions = redistribute_pre_run_reduction(
            original_target,
            result.adjusted_distance,
            plan,
            today=self.clock(),
            exclude_id=session.id,
        )
        apply_adjustments(redistributions, plan)

        self.last_adaptation_summary = result.message
        return result

    def life_happens(self, days: int | None = None) -> bool:
        """Push remaining sessions later; False for non-positive days or past race day."""
        plan = self._require_plan()
        days = days if days is not None else self.settings.shift_days
        today = self.clock()

        if not can_shift_schedule(plan, days, today=today):
            logger.info(
                "Cannot shift schedule by %d day(s): not a forward shift or past race day",
                days,
            )
            return False

        moved = shift_schedule(plan, days, today=today)
        logger.info("Shifted %d session(s) by %d day(s)", moved, days)
        return True

    def distribute_missed_volume(self) -> list[SessionAdjustment]:
        """Move last week's missed miles onto the next easy runs."""
        plan = self._require_plan()
        today = self.clock()
        adjustments = redistribute_missed_volume(plan, today=today)
        if not adjustments:
            return []
        for missed in missed_sessions(plan, today):
            missed.volume_redistributed = True
        apply_adjustments(adjustments, plan)
        self.last_adaptation_summary = adjustments[0].reason
        return adjustments

    # -- Scores -----------------------------------------------------------

    def _refresh_scores(self) -> None:
        plan = self._require_plan()
        today = self.clock()
        self.compliance_score = calculate_compliance_score(plan, today)
        self.confidence_score = calculate_confidence_score(plan, today)

    @property
    def training_status(self) -> TrainingStatus:
        if self.active_plan is None:
            return TrainingStatus.ON_TRACK
        return classify_training_status(self.compliance_score)

    @property
    def confidence_display(self) -> str:
        if self.active_plan is None:
            return "0%"
        return f"{int(self.confidence_score * 100)}%"

    # -- Lookups ----------------------------------------------------------

    def _require_plan(self) -> TrainingPlan:
        if self.active_plan is None:
            raise NoActivePlanError()
        return self.active_plan

    def _require_session(self, session_id: uuid.UUID) -> TrainingSession:
        session = self._require_plan().session_by_id(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session
