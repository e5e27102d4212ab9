"""Weekly roll-ups of a plan's calendar as a pandas DataFrame."""

from __future__ import annotations

import pandas as pd

from race_planner.models.enums import DAYS_PER_WEEK, RunType
from race_planner.models.plan import TrainingPlan

WEEKLY_COLUMNS = [
    "week",
    "phase",
    "week_start",
    "target_miles",
    "actual_miles",
    "completed",
    "long_run_miles",
]


def sessions_frame(plan: TrainingPlan) -> pd.DataFrame:
    """One row per session, with its 1-based plan week."""
    rows = [
        {
            "date": s.date,
            "week": (s.date - plan.start_date).days // DAYS_PER_WEEK + 1,
            "run_type": s.run_type.name,
            "target_miles": s.target_distance,
            "actual_miles": s.actual_distance if s.actual_distance is not None else 0.0,
            "completed": s.is_completed,
            "long_run_miles": s.target_distance if s.run_type == RunType.LONG_RUN else 0.0,
        }
        for s in plan.sorted_sessions
    ]
    return pd.DataFrame(
        rows,
        columns=[
            "date",
            "week",
            "run_type",
            "target_miles",
            "actual_miles",
            "completed",
            "long_run_miles",
        ],
    )


def weekly_volume_table(plan: TrainingPlan) -> pd.DataFrame:
    """Aggregate the calendar into per-week totals.

    Weeks are counted from ``plan.start_date``; sessions shifted past the
    original calendar land in later week numbers. The phase column comes
    from the plan's allocation and is blank for weeks beyond it.
    """
    frame = sessions_frame(plan)
    if frame.empty:
        return pd.DataFrame(columns=WEEKLY_COLUMNS)

    weekly = (
        frame.groupby("week")
        .agg(
            week_start=("date", "min"),
            target_miles=("target_miles", "sum"),
            actual_miles=("actual_miles", "sum"),
            completed=("completed", "sum"),
            long_run_miles=("long_run_miles", "max"),
        )
        .reset_index()
    )

    schedule = plan.phase_allocation.schedule
    weekly["phase"] = [
        schedule[w - 1].name if 1 <= w <= len(schedule) else "" for w in weekly["week"]
    ]
    weekly["completed"] = weekly["completed"].astype(int)
    return weekly[WEEKLY_COLUMNS]
