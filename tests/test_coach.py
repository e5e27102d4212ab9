"""Tests for PlanCoach orchestration flows."""

from __future__ import annotations

import logging
import uuid
from datetime import date

import pytest

from conftest import HALF_RACE_DATE, PLAN_START
from race_planner.coach import PlanCoach
from race_planner.config import Settings
from race_planner.exceptions import (
    InsufficientHorizonError,
    NoActivePlanError,
    SessionNotFoundError,
)
from race_planner.models.enums import RaceDistance, RunType, TrainingStatus
from race_planner.models.plan import TrainingPlan

TUESDAY = date(2026, 1, 6)
WEDNESDAY = date(2026, 1, 7)
SATURDAY = date(2026, 1, 10)


class FakeClock:
    def __init__(self, today: date) -> None:
        self.today = today

    def __call__(self) -> date:
        return self.today


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(TUESDAY)


@pytest.fixture
def coach(clock: FakeClock) -> PlanCoach:
    coach = PlanCoach(settings=Settings(), clock=clock)
    coach.create_plan(
        RaceDistance.HALF_MARATHON,
        HALF_RACE_DATE,
        weekly_mileage=20.0,
        longest_run=8.0,
        rest_days={0},
        start_date=PLAN_START,
    )
    return coach


def _plan(coach: PlanCoach) -> TrainingPlan:
    assert coach.active_plan is not None
    return coach.active_plan


class TestPlanLifecycle:
    def test_create_plan_generates_calendar(self, coach: PlanCoach) -> None:
        plan = _plan(coach)
        assert len(plan.sessions) == 91
        assert plan.is_active
        assert coach.todays_session is not None
        assert coach.todays_session.run_type == RunType.RECOVERY
        assert coach.todays_session.target_distance == 1.75

    def test_create_plan_rejects_short_horizon(self, clock: FakeClock) -> None:
        coach = PlanCoach(settings=Settings(), clock=clock)
        with pytest.raises(InsufficientHorizonError) as exc_info:
            coach.create_plan(RaceDistance.FIVE_K, date(2026, 1, 12), 10.0, 3.0)
        assert exc_info.value.minimum_weeks == 2
        assert coach.active_plan is None

    def test_create_plan_warns_below_recommended_weeks(
        self, clock: FakeClock, caplog: pytest.LogCaptureFixture
    ) -> None:
        coach = PlanCoach(settings=Settings(), clock=clock)
        with caplog.at_level(logging.WARNING, logger="race_planner.coach"):
            plan = coach.create_plan(RaceDistance.MARATHON, date(2026, 3, 17), 30.0, 12.0)
        assert plan.total_weeks == 10
        assert "recommended 16 weeks" in caplog.text

    def test_start_date_defaults_to_clock(self, clock: FakeClock) -> None:
        coach = PlanCoach(settings=Settings(), clock=clock)
        plan = coach.create_plan(RaceDistance.TEN_K, date(2026, 3, 3), 15.0, 5.0)
        assert plan.start_date == TUESDAY

    def test_cancel_plan(self, coach: PlanCoach) -> None:
        plan = _plan(coach)
        coach.cancel_plan()
        assert coach.active_plan is None
        assert not plan.is_active
        assert coach.todays_session is None

    def test_operations_need_a_plan(self, clock: FakeClock) -> None:
        coach = PlanCoach(settings=Settings(), clock=clock)
        with pytest.raises(NoActivePlanError):
            coach.life_happens()
        with pytest.raises(NoActivePlanError):
            coach.complete_session(uuid.uuid4(), 5.0, 2)

    def test_unknown_session(self, coach: PlanCoach) -> None:
        with pytest.raises(SessionNotFoundError):
            coach.complete_session(uuid.uuid4(), 5.0, 2)


class TestCompletion:
    def test_easy_overperformance(self, coach: PlanCoach) -> None:
        plan = _plan(coach)
        today = coach.todays_session
        assert today is not None

        adjustments = coach.complete_session(today.id, actual_distance=2.275, effort=1)

        assert len(adjustments) == 1
        assert plan.session_on(SATURDAY).target_distance == pytest.approx(5.25)
        assert coach.last_adaptation_summary == "Crushing it! Your confidence score just got a boost."
        assert today.is_completed
        assert today.perceived_effort == 1

    def test_auto_complete_then_refine_does_not_compound(self, coach: PlanCoach) -> None:
        plan = _plan(coach)
        today = coach.todays_session
        assert today is not None

        coach.auto_complete_session(today.id, actual_distance=0.5)
        assert today.perceived_effort == 2
        assert plan.session_on(WEDNESDAY).target_distance == pytest.approx(3.25 + 1.25 * 0.8 / 3)

        adjustments = coach.refine_completed_session(today.id, actual_distance=1.75, effort=2)

        assert adjustments == []
        assert plan.session_on(WEDNESDAY).target_distance == pytest.approx(3.25)
        assert today.actual_distance == 1.75
        assert coach.last_adaptation_summary is None

    def test_refine_without_snapshot_adapts_normally(self, coach: PlanCoach) -> None:
        plan = _plan(coach)
        today = coach.todays_session
        assert today is not None

        coach.refine_completed_session(today.id, actual_distance=0.5, effort=2)

        assert plan.session_on(WEDNESDAY).target_distance == pytest.approx(3.25 + 1.25 * 0.8 / 3)

    def test_auto_complete_uses_configured_effort(self, clock: FakeClock) -> None:
        coach = PlanCoach(settings=Settings(default_effort=3), clock=clock)
        coach.create_plan(RaceDistance.HALF_MARATHON, HALF_RACE_DATE, 20.0, 8.0, {0}, PLAN_START)
        today = coach.todays_session
        assert today is not None

        coach.auto_complete_session(today.id, actual_distance=1.75)

        assert today.perceived_effort == 3

    def test_cross_training(self, coach: PlanCoach) -> None:
        today = coach.todays_session
        assert today is not None

        coach.mark_cross_training_complete(today.id, "Swim", 30)

        assert today.is_completed
        assert today.actual_distance == 0.0
        assert today.notes == "Swim - 30 min"
        assert coach.last_adaptation_summary == "Swim logged. Great consistency."

    def test_completing_after_race_day_closes_plan(self, coach: PlanCoach, clock: FakeClock) -> None:
        plan = _plan(coach)
        last = plan.sorted_sessions[-1]
        clock.today = date(2026, 4, 7)

        assert coach.complete_session(last.id, last.target_distance, 2) == []
        assert plan.is_completed


class TestCheckIns:
    def test_pre_run_adjustment_moves_deficit(self, coach: PlanCoach) -> None:
        plan = _plan(coach)
        today = coach.todays_session
        assert today is not None

        result = coach.apply_pre_run_adjustment(today.id, 0.1)

        assert result.adjusted_distance == pytest.approx(0.875)
        assert today.target_distance == pytest.approx(0.875)
        assert today.pre_run_feeling == 0.1
        assert plan.session_on(WEDNESDAY).target_distance == pytest.approx(3.25 + 0.4375)
        assert plan.session_on(date(2026, 1, 8)).target_distance == pytest.approx(3.25 + 0.4375)
        assert coach.last_adaptation_summary == result.message

    def test_pre_run_on_later_session_moves_deficit_forward(self, coach: PlanCoach) -> None:
        plan = _plan(coach)
        thursday = plan.session_on(date(2026, 1, 8))
        assert thursday is not None

        result = coach.apply_pre_run_adjustment(thursday.id, 0.1)

        assert result.adjusted_distance == pytest.approx(1.625)
        assert thursday.target_distance == pytest.approx(1.625)
        assert plan.session_on(WEDNESDAY).target_distance == pytest.approx(3.25 + 0.8125)
        assert plan.session_on(date(2026, 1, 9)).target_distance == pytest.approx(3.25 + 0.8125)

    def test_life_happens_until_race_day(self, coach: PlanCoach) -> None:
        plan = _plan(coach)
        assert coach.life_happens()
        assert plan.sorted_sessions[-1].date == HALF_RACE_DATE
        assert not coach.life_happens()
        assert plan.sorted_sessions[-1].date == HALF_RACE_DATE

    @pytest.mark.parametrize("days", [0, -3])
    def test_life_happens_rejects_non_forward_shift(self, coach: PlanCoach, days: int) -> None:
        plan = _plan(coach)
        before = {s.id: s.date for s in plan.sessions}

        assert not coach.life_happens(days)

        assert {s.id: s.date for s in plan.sessions} == before
        assert len({s.date for s in plan.sessions}) == len(plan.sessions)

    def test_missed_volume_swept_once(self, coach: PlanCoach, clock: FakeClock) -> None:
        plan = _plan(coach)
        clock.today = date(2026, 1, 12)

        assert len(coach.distribute_missed_volume()) == 3
        assert coach.distribute_missed_volume() == []

        assert plan.session_on(date(2026, 1, 13)).target_distance == pytest.approx(1.75 * 1.15)
        assert plan.session_on(date(2026, 1, 6)).volume_redistributed
        assert not plan.session_on(date(2026, 1, 5)).volume_redistributed

    def test_distribute_missed_volume(self, coach: PlanCoach, clock: FakeClock) -> None:
        plan = _plan(coach)
        clock.today = date(2026, 1, 12)

        adjustments = coach.distribute_missed_volume()

        assert len(adjustments) == 3
        assert plan.session_on(date(2026, 1, 13)).target_distance == pytest.approx(1.75 * 1.15)
        assert plan.session_on(date(2026, 1, 14)).target_distance == pytest.approx(3.25 * 1.15)
        assert coach.last_adaptation_summary == adjustments[0].reason


class TestScores:
    def test_defaults_without_plan(self, clock: FakeClock) -> None:
        coach = PlanCoach(settings=Settings(), clock=clock)
        assert coach.training_status == TrainingStatus.ON_TRACK
        assert coach.confidence_display == "0%"

    def test_fresh_plan(self, coach: PlanCoach) -> None:
        # Only today's pending run is in the window
        assert coach.compliance_score == 0.5
        assert coach.training_status == TrainingStatus.STRUGGLING
        assert coach.confidence_display == "50%"

    def test_scores_refresh_after_completion(self, coach: PlanCoach) -> None:
        today = coach.todays_session
        assert today is not None
        coach.complete_session(today.id, 1.75, 2)
        assert coach.compliance_score == pytest.approx(1 / 1.5)
        assert coach.training_status == TrainingStatus.ON_TRACK
