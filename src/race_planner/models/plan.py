"""TrainingPlan: the single owned calendar of sessions for one goal race."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import TYPE_CHECKING

from race_planner.models.enums import DAYS_PER_WEEK, MIN_PLAN_WEEKS, RaceDistance, RunType, TrainingPhase
from race_planner.models.session import TrainingSession

if TYPE_CHECKING:
    from race_planner.math.periodization import PhaseAllocation


def _resolve_today(today: date | None) -> date:
    return today if today is not None else date.today()


@dataclass(eq=False)
class TrainingPlan:
    """A race training plan and the sessions it owns.

    ``rest_days`` holds Python weekday numbers (0 = Monday ... 6 = Sunday).
    Every "today"-dependent value takes an optional ``today`` argument so
    callers (and tests) can evaluate the plan at a fixed point in time.
    """

    race_distance: RaceDistance
    race_date: date
    start_date: date
    weekly_mileage: float
    longest_recent_run: float = 0.0
    rest_days: frozenset[int] = field(default_factory=frozenset)
    sessions: list[TrainingSession] = field(default_factory=list)
    is_active: bool = True
    is_completed: bool = False
    id: uuid.UUID = field(default_factory=uuid.uuid4)

    def __post_init__(self) -> None:
        self.rest_days = frozenset(self.rest_days)

    # -- Calendar geometry ------------------------------------------------

    @property
    def total_weeks(self) -> int:
        return max(1, (self.race_date - self.start_date).days // DAYS_PER_WEEK)

    @property
    def total_days(self) -> int:
        return max(1, (self.race_date - self.start_date).days)

    @property
    def phase_allocation(self) -> PhaseAllocation:
        # Import here to avoid a models <-> math import cycle
        from race_planner.math.periodization import allocate_phases

        return allocate_phases(self.total_weeks, self.race_distance)

    @property
    def phase_schedule(self) -> tuple[TrainingPhase, ...]:
        """One phase per plan week, race week last."""
        return self.phase_allocation.schedule

    @property
    def taper_start_date(self) -> date | None:
        """First day of the taper window, or None below the planning horizon."""
        if self.total_weeks < MIN_PLAN_WEEKS:
            return None
        allocation = self.phase_allocation
        weeks_before_taper = allocation.total_weeks - allocation.taper_weeks
        return self.start_date + timedelta(days=DAYS_PER_WEEK * weeks_before_taper)

    def is_taper_date(self, on_date: date) -> bool:
        taper_start = self.taper_start_date
        return taper_start is not None and on_date >= taper_start

    def current_week(self, today: date | None = None) -> int:
        """1-based week number, clamped to the plan."""
        elapsed = (_resolve_today(today) - self.start_date).days
        return min(max(1, elapsed // DAYS_PER_WEEK + 1), self.total_weeks)

    def current_day(self, today: date | None = None) -> int:
        """1-based day number, clamped to the plan."""
        elapsed = (_resolve_today(today) - self.start_date).days
        return min(max(1, elapsed + 1), self.total_days)

    def progress_percentage(self, today: date | None = None) -> float:
        return self.current_day(today) / self.total_days

    def current_phase(self, today: date | None = None) -> TrainingPhase:
        return self.phase_allocation.phase_for_week(self.current_week(today) - 1)

    def is_taper_locked(self, today: date | None = None) -> bool:
        """True once today falls inside the taper window."""
        return self.is_taper_date(_resolve_today(today))

    # -- Session queries --------------------------------------------------

    @property
    def sorted_sessions(self) -> list[TrainingSession]:
        return sorted(self.sessions, key=lambda s: s.date)

    @property
    def completed_sessions(self) -> list[TrainingSession]:
        return [s for s in self.sessions if s.is_completed]

    def session_by_id(self, session_id: uuid.UUID) -> TrainingSession | None:
        for session in self.sessions:
            if session.id == session_id:
                return session
        return None

    def session_on(self, on_date: date) -> TrainingSession | None:
        for session in self.sessions:
            if session.date == on_date:
                return session
        return None

    def todays_session(self, today: date | None = None) -> TrainingSession | None:
        return self.session_on(_resolve_today(today))

    def upcoming_sessions(self, today: date | None = None) -> list[TrainingSession]:
        """Today's and future sessions that are not completed, by date."""
        today = _resolve_today(today)
        return sorted(
            (s for s in self.sessions if s.date >= today and not s.is_completed),
            key=lambda s: s.date,
        )

    def next_running_sessions(
        self, count: int, today: date | None = None
    ) -> list[TrainingSession]:
        """The next *count* non-rest sessions strictly after today."""
        today = _resolve_today(today)
        future = sorted(
            (
                s
                for s in self.sessions
                if s.date > today and not s.is_completed and s.run_type != RunType.REST
            ),
            key=lambda s: s.date,
        )
        return future[:count]

    def current_week_mileage(self, today: date | None = None) -> float:
        """Actual miles completed in the Monday-based calendar week of today."""
        today = _resolve_today(today)
        week_start = today - timedelta(days=today.weekday())
        week_end = week_start + timedelta(days=DAYS_PER_WEEK)
        return sum(
            s.actual_distance
            for s in self.sessions
            if week_start <= s.date < week_end
            and s.is_completed
            and s.actual_distance is not None
        )
