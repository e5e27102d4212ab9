"""Exception hierarchy for the plan coach and its configuration.

The planning engine itself does not raise for edge cases; it degrades to
"no change". These errors belong to the orchestration layer on top of it.
"""

from __future__ import annotations

import uuid


class RacePlannerError(Exception):
    """Base exception for all race_planner errors."""


class ConfigurationError(RacePlannerError):
    """An environment setting is missing or malformed."""


class NoActivePlanError(RacePlannerError):
    """The operation needs an active training plan and there is none."""

    def __init__(self, message: str = "No active training plan") -> None:
        super().__init__(message)


class SessionNotFoundError(RacePlannerError):
    """A session id does not belong to the active plan."""

    def __init__(self, session_id: uuid.UUID) -> None:
        super().__init__(f"Session {session_id} is not part of the active plan")
        self.session_id = session_id


class InsufficientHorizonError(RacePlannerError):
    """The race is too close to generate a training calendar."""

    def __init__(self, total_weeks: int, minimum_weeks: int) -> None:
        super().__init__(
            f"Plan must span at least {minimum_weeks} weeks, got {total_weeks}"
        )
        self.total_weeks = total_weeks
        self.minimum_weeks = minimum_weeks
