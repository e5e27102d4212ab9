"""Plan adaptation: propose adjustments, then apply them."""

from race_planner.adaptation.applier import apply_adjustments
from race_planner.adaptation.missed_volume import missed_sessions, redistribute_missed_volume
from race_planner.adaptation.post_run import adapt_plan
from race_planner.adaptation.pre_run import (
    PreRunResult,
    pre_run_adjustment,
    redistribute_pre_run_reduction,
)
from race_planner.adaptation.schedule_shift import can_shift_schedule, shift_schedule

__all__ = [
    "PreRunResult",
    "adapt_plan",
    "apply_adjustments",
    "can_shift_schedule",
    "missed_sessions",
    "pre_run_adjustment",
    "redistribute_missed_volume",
    "redistribute_pre_run_reduction",
    "shift_schedule",
]
