"""Day assignment and weekly mileage distribution.

Turns one week's target volume into seven dated sessions:
1. User rest days become REST immediately
2. Remaining days get phase-specific run types
3. Types are re-sequenced onto day slots (hard work mid-week, long run late)
4. Volume is split by run-type weight, the long run is capped and any
   excess moves to the easy days
5. Distances are rounded to the nearest quarter mile
"""

from __future__ import annotations

import math
from datetime import date, timedelta
from typing import Collection

from race_planner.models.enums import (
    DAYS_PER_WEEK,
    DISTANCE_ROUNDING_STEPS_PER_MILE,
    RaceDistance,
    RunType,
    TrainingPhase,
)
from race_planner.models.session import TrainingSession

# Types placed by fixed slot in reorder_for_week(); the rest keep their order
_SLOTTED_TYPES = frozenset({RunType.LONG_RUN, RunType.SPEED_WORK, RunType.TEMPO})

# Long-run excess is spread over these types
_EASY_TYPES = frozenset({RunType.BASE, RunType.RECOVERY})


def round_to_quarter(miles: float) -> float:
    """Round half-up to the nearest 0.25 mile."""
    steps = DISTANCE_ROUNDING_STEPS_PER_MILE
    return math.floor(miles * steps + 0.5) / steps


def assign_run_types(available_days: int, phase: TrainingPhase) -> list[RunType]:
    """Pick run types for the non-rest days of a week, already slot-ordered.

    Args:
        available_days: Number of non-rest days in the week.
        phase: Training phase of the week.

    Returns:
        One RunType per available day, in day order.
    """
    if available_days <= 0:
        return []

    n = available_days
    types = [RunType.LONG_RUN]

    if phase == TrainingPhase.BASE:
        if n > 2:
            types.append(RunType.RECOVERY)
        filler = RunType.BASE
    elif phase == TrainingPhase.BUILD:
        if n > 1:
            types.append(RunType.SPEED_WORK)
        if n > 3:
            types.append(RunType.RECOVERY)
        filler = RunType.BASE
    elif phase == TrainingPhase.PEAK:
        if n > 1:
            types.append(RunType.SPEED_WORK)
        if n > 2:
            types.append(RunType.TEMPO)
        if n > 4:
            types.append(RunType.RECOVERY)
        filler = RunType.BASE
    else:
        if n > 2:
            types.append(RunType.SPEED_WORK)
        filler = RunType.RECOVERY

    types.extend([filler] * (n - len(types)))
    return reorder_for_week(types)


def _first_free_slot(count: int, placed: set[int]) -> int:
    for i in range(count):
        if i not in placed:
            return i
    return 0


def reorder_for_week(types: list[RunType]) -> list[RunType]:
    """Re-sequence run types onto day slots.

    The long run goes to the second-to-last slot, speed work to slot 2
    (slot 1 in short weeks) and tempo right after it. A taken slot falls
    back to the first free one. Easy types fill the untouched slots in
    their original order.
    """
    count = len(types)
    if count == 0:
        return []

    long_run_index = max(0, count - 2)
    speed_index = 2 if count > 3 else (1 if count > 1 else 0)
    tempo_index = 3 if count > 3 else (2 if count > 2 else 0)

    result = [RunType.BASE] * count
    placed: set[int] = set()

    for run_type, preferred in (
        (RunType.LONG_RUN, long_run_index),
        (RunType.SPEED_WORK, speed_index),
        (RunType.TEMPO, tempo_index),
    ):
        if run_type not in types:
            continue
        index = _first_free_slot(count, placed) if preferred in placed else preferred
        result[index] = run_type
        placed.add(index)

    remaining = iter(t for t in types if t not in _SLOTTED_TYPES)
    for i in range(count):
        if i not in placed:
            result[i] = next(remaining, RunType.BASE)

    return result


def distribute_mileage(
    weekly_miles: float,
    assignments: list[RunType],
    long_run_cap: float,
) -> list[float]:
    """Split a week's volume across its assigned run types.

    Args:
        weekly_miles: Target volume for the week.
        assignments: Run type per available day.
        long_run_cap: Maximum long-run distance in miles.

    Returns:
        Distance per assignment, rounded to 0.25 mi; zero for REST and
        CROSS_TRAINING. When the long run is capped and the week has no
        BASE or RECOVERY day, the excess is dropped.
    """
    if not assignments:
        return []

    weights = [t.mileage_weight for t in assignments]
    total_weight = sum(weights)
    if total_weight <= 0:
        return [0.0] * len(assignments)

    distances = [(w / total_weight) * weekly_miles for w in weights]

    easy_indices = [i for i, t in enumerate(assignments) if t in _EASY_TYPES]
    for i, run_type in enumerate(assignments):
        if run_type != RunType.LONG_RUN or distances[i] <= long_run_cap:
            continue
        excess = distances[i] - long_run_cap
        distances[i] = long_run_cap
        if easy_indices:
            add_on = excess / len(easy_indices)
            for idx in easy_indices:
                distances[idx] += add_on

    return [
        round_to_quarter(d) if t.counts_as_mileage else 0.0
        for d, t in zip(distances, assignments)
    ]


def build_week(
    week_start: date,
    weekly_miles: float,
    phase: TrainingPhase,
    race_distance: RaceDistance,
    rest_days: Collection[int],
) -> list[TrainingSession]:
    """Generate the seven dated sessions of one plan week.

    Args:
        week_start: First calendar day of the week.
        weekly_miles: Target volume for the week.
        phase: Training phase of the week.
        race_distance: Goal race; sets the long-run cap.
        rest_days: Weekday numbers (0 = Monday) that are always REST.

    Returns:
        Seven sessions in date order.
    """
    days = [week_start + timedelta(days=offset) for offset in range(DAYS_PER_WEEK)]
    available = [d for d in days if d.weekday() not in rest_days]

    assignments = assign_run_types(len(available), phase)
    distances = distribute_mileage(weekly_miles, assignments, race_distance.long_run_cap)
    planned = {
        day: (run_type, distance)
        for day, run_type, distance in zip(available, assignments, distances)
    }

    sessions: list[TrainingSession] = []
    for day in days:
        run_type, distance = planned.get(day, (RunType.REST, 0.0))
        sessions.append(TrainingSession(date=day, run_type=run_type, target_distance=distance))
    return sessions
