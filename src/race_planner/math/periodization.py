"""Periodization math: backwards phase allocation and weekly volume targets.

Phases are carved from race day backwards:
- TAPER: the distance's typical taper, leaving at least one week before it
- PEAK: the distance's peak block, again leaving at least one week
- BUILD / BASE: the remainder split 2:1, BASE never empty

Weekly volume holds at the base level, compounds ~10% per build week,
plateaus at the fully compounded build ceiling through PEAK, then steps
down through fixed taper fractions.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from race_planner.models.enums import (
    BASE_MIN_RACE_FRACTION,
    BUILD_SHARE_DENOMINATOR,
    BUILD_SHARE_NUMERATOR,
    DAYS_PER_WEEK,
    TAPER_FRACTIONS,
    WEEKLY_GROWTH_RATE,
    RaceDistance,
    TrainingPhase,
)


@dataclass(frozen=True)
class PhaseAllocation:
    """Week counts per phase for one plan, in chronological order."""

    base_weeks: int
    build_weeks: int
    peak_weeks: int
    taper_weeks: int

    @property
    def total_weeks(self) -> int:
        return self.base_weeks + self.build_weeks + self.peak_weeks + self.taper_weeks

    @property
    def schedule(self) -> tuple[TrainingPhase, ...]:
        """One phase per week: BASE..., BUILD..., PEAK..., TAPER..."""
        return (
            (TrainingPhase.BASE,) * self.base_weeks
            + (TrainingPhase.BUILD,) * self.build_weeks
            + (TrainingPhase.PEAK,) * self.peak_weeks
            + (TrainingPhase.TAPER,) * self.taper_weeks
        )

    def phase_for_week(self, week_index: int) -> TrainingPhase:
        """Phase of a 0-based week index.

        Raises:
            ValueError: If the index is outside the plan.
        """
        schedule = self.schedule
        if not 0 <= week_index < len(schedule):
            raise ValueError(
                f"Week index {week_index} is outside plan range (0-{len(schedule) - 1})"
            )
        return schedule[week_index]

    def week_in_phase(self, week_index: int) -> int:
        """0-based position of a week within its own phase."""
        phase = self.phase_for_week(week_index)
        if phase == TrainingPhase.BASE:
            return week_index
        if phase == TrainingPhase.BUILD:
            return week_index - self.base_weeks
        if phase == TrainingPhase.PEAK:
            return week_index - self.base_weeks - self.build_weeks
        return week_index - self.base_weeks - self.build_weeks - self.peak_weeks


def weeks_between(start_date: date, race_date: date) -> int:
    """Whole weeks from start to race day, never less than 1."""
    return max(1, (race_date - start_date).days // DAYS_PER_WEEK)


def allocate_phases(total_weeks: int, race_distance: RaceDistance) -> PhaseAllocation:
    """Allocate weeks to phases backwards from race day.

    Args:
        total_weeks: Whole weeks in the plan (see ``weeks_between``).
        race_distance: Goal race; supplies taper and peak lengths.

    Returns:
        PhaseAllocation whose week counts sum to ``max(1, total_weeks)``.
    """
    total_weeks = max(1, total_weeks)

    taper_weeks = min(race_distance.typical_taper_weeks, total_weeks - 1)
    peak_weeks = min(race_distance.peak_weeks, max(0, total_weeks - taper_weeks - 1))
    remaining = total_weeks - taper_weeks - peak_weeks
    build_weeks = remaining * BUILD_SHARE_NUMERATOR // BUILD_SHARE_DENOMINATOR
    base_weeks = max(1, remaining - build_weeks)

    return PhaseAllocation(
        base_weeks=base_weeks,
        build_weeks=build_weeks,
        peak_weeks=peak_weeks,
        taper_weeks=taper_weeks,
    )


def peak_mileage(base_mileage: float, allocation: PhaseAllocation) -> float:
    """Fully compounded build ceiling, held flat through PEAK."""
    return base_mileage * WEEKLY_GROWTH_RATE ** allocation.build_weeks


def taper_fraction(taper_week_number: int) -> float:
    """Fraction of peak volume for a 0-based taper week, clamped at the last step."""
    if taper_week_number < len(TAPER_FRACTIONS):
        return TAPER_FRACTIONS[taper_week_number]
    return TAPER_FRACTIONS[-1]


def weekly_mileage(
    base_mileage: float,
    week_index: int,
    allocation: PhaseAllocation,
    race_distance: RaceDistance,
) -> float:
    """Target total distance (miles) for a 0-based plan week.

    Args:
        base_mileage: The plan's baseline weekly mileage.
        week_index: 0-based week within the plan.
        allocation: Phase allocation from ``allocate_phases()``.
        race_distance: Goal race; sets the base-phase floor.

    Returns:
        Unrounded weekly volume in miles.
    """
    phase = allocation.phase_for_week(week_index)

    if phase == TrainingPhase.BASE:
        return max(base_mileage, race_distance.distance_in_miles * BASE_MIN_RACE_FRACTION)

    if phase == TrainingPhase.BUILD:
        build_week_number = allocation.week_in_phase(week_index)
        return base_mileage * WEEKLY_GROWTH_RATE ** (build_week_number + 1)

    peak = peak_mileage(base_mileage, allocation)
    if phase == TrainingPhase.PEAK:
        return peak

    return peak * taper_fraction(allocation.week_in_phase(week_index))
