"""Shared test fixtures: fixed dates, generated plans, hand-built calendars."""

from __future__ import annotations

from datetime import date
from typing import Callable

import pytest

from race_planner.generator import generate_sessions
from race_planner.models.enums import RaceDistance, RunType
from race_planner.models.plan import TrainingPlan
from race_planner.models.session import TrainingSession

# Monday 5 Jan 2026 -> Monday 6 Apr 2026: 91 days, 13 whole weeks.
# Half marathon allocation: base 3, build 5, peak 3, taper 2 (taper from 23 Mar).
PLAN_START = date(2026, 1, 5)
HALF_RACE_DATE = date(2026, 4, 6)
TAPER_START = date(2026, 3, 23)

# Tuesday in the build phase, well clear of the taper window
TODAY = date(2026, 2, 10)


def make_session(
    on: date,
    run_type: RunType = RunType.BASE,
    target: float = 5.0,
    **kwargs: object,
) -> TrainingSession:
    return TrainingSession(date=on, run_type=run_type, target_distance=target, **kwargs)


@pytest.fixture
def half_plan() -> TrainingPlan:
    """13-week half marathon plan from 20 mi/week, Mondays off, sessions generated."""
    plan = TrainingPlan(
        race_distance=RaceDistance.HALF_MARATHON,
        race_date=HALF_RACE_DATE,
        start_date=PLAN_START,
        weekly_mileage=20.0,
        longest_recent_run=8.0,
        rest_days=frozenset({0}),
    )
    plan.sessions.extend(generate_sessions(plan))
    return plan


@pytest.fixture
def marathon_plan() -> TrainingPlan:
    """16-week marathon plan from 30 mi/week with no rest days."""
    start = date(2026, 3, 2)
    plan = TrainingPlan(
        race_distance=RaceDistance.MARATHON,
        race_date=date(2026, 6, 22),
        start_date=start,
        weekly_mileage=30.0,
        longest_recent_run=12.0,
    )
    plan.sessions.extend(generate_sessions(plan))
    return plan


@pytest.fixture
def plan_factory() -> Callable[..., TrainingPlan]:
    """Factory for a half marathon plan around hand-built sessions.

    Usage:
        plan = plan_factory([make_session(TODAY, RunType.BASE, 5.0)])
    """

    def factory(
        sessions: list[TrainingSession],
        race_date: date = HALF_RACE_DATE,
        start_date: date = PLAN_START,
    ) -> TrainingPlan:
        return TrainingPlan(
            race_distance=RaceDistance.HALF_MARATHON,
            race_date=race_date,
            start_date=start_date,
            weekly_mileage=20.0,
            longest_recent_run=8.0,
            sessions=list(sessions),
        )

    return factory
