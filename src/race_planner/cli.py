"""Command-line entry point: preview a generated plan or a pre-run check-in.

Usage:
    race-planner generate --distance half_marathon --race-date 2027-04-18 --weekly-mileage 20
    race-planner generate --distance marathon --race-date 2027-10-10 --weekly-mileage 30 \\
        --rest-day 0 --rest-day 4 --daily
    race-planner prerun --target 8 --feeling 0.4
"""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import date

from race_planner.adaptation.pre_run import pre_run_adjustment
from race_planner.coach import PlanCoach
from race_planner.config import Settings, load_settings
from race_planner.exceptions import ConfigurationError, InsufficientHorizonError
from race_planner.math.weekly_totals import weekly_volume_table
from race_planner.models.enums import RaceDistance, RunType
from race_planner.models.plan import TrainingPlan
from race_planner.models.session import TrainingSession

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_USAGE = 2


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Not an ISO date (YYYY-MM-DD): {value!r}") from None


def _parse_distance(value: str) -> RaceDistance:
    try:
        return RaceDistance.from_name(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from None


def _parse_weekday(value: str) -> int:
    day = int(value)
    if not 0 <= day <= 6:
        raise argparse.ArgumentTypeError(f"Weekday must be 0 (Monday) to 6 (Sunday), got {day}")
    return day


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="race-planner", description="Race training plan generator")
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate = subparsers.add_parser("generate", help="Generate and print a training plan")
    generate.add_argument("--distance", type=_parse_distance, required=True,
                          help="5k, 10k, half_marathon, marathon or custom")
    generate.add_argument("--race-date", type=_parse_date, required=True)
    generate.add_argument("--weekly-mileage", type=float, required=True)
    generate.add_argument("--longest-run", type=float, default=0.0)
    generate.add_argument("--start-date", type=_parse_date, default=None)
    generate.add_argument("--rest-day", type=_parse_weekday, action="append", default=[],
                          help="Weekday never scheduled (0=Monday); repeatable")
    generate.add_argument("--daily", action="store_true", help="Also print every session")

    prerun = subparsers.add_parser("prerun", help="Preview a pre-run feeling adjustment")
    prerun.add_argument("--target", type=float, required=True, help="Planned distance in miles")
    prerun.add_argument("--feeling", type=float, required=True, help="0.0 (awful) to 1.0 (great)")

    return parser


def _format_session(session: TrainingSession) -> str:
    if session.run_type == RunType.REST:
        return f"{session.date.isoformat()} {session.date:%a}  {session.run_type.display_name}"
    return (
        f"{session.date.isoformat()} {session.date:%a}  "
        f"{session.run_type.display_name:<14} {session.target_distance:5.2f} mi"
    )


def _print_plan(plan: TrainingPlan, daily: bool) -> None:
    allocation = plan.phase_allocation
    print(
        f"{plan.race_distance.display_name} on {plan.race_date.isoformat()}: "
        f"{plan.total_weeks} weeks (base {allocation.base_weeks}, build {allocation.build_weeks}, "
        f"peak {allocation.peak_weeks}, taper {allocation.taper_weeks})"
    )
    table = weekly_volume_table(plan)
    print(table.to_string(index=False, columns=["week", "phase", "week_start", "target_miles", "long_run_miles"]))

    if daily:
        print()
        for session in plan.sorted_sessions:
            print(_format_session(session))


def _run_generate(args: argparse.Namespace, settings: Settings) -> int:
    coach = PlanCoach(settings=settings)
    try:
        plan = coach.create_plan(
            race_distance=args.distance,
            race_date=args.race_date,
            weekly_mileage=args.weekly_mileage,
            longest_run=args.longest_run,
            rest_days=args.rest_day,
            start_date=args.start_date,
        )
    except InsufficientHorizonError as exc:
        logger.error("%s", exc)
        return EXIT_USAGE

    _print_plan(plan, args.daily)
    return EXIT_OK


def _run_prerun(args: argparse.Namespace) -> int:
    session = TrainingSession(date=date.today(), run_type=RunType.BASE, target_distance=args.target)
    result = pre_run_adjustment(session, args.feeling)
    print(f"{result.adjusted_distance:.2f} mi - {result.message}")
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings()
    except ConfigurationError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return EXIT_USAGE

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    if args.command == "generate":
        return _run_generate(args, settings)
    return _run_prerun(args)


if __name__ == "__main__":
    sys.exit(main())
