"""Environment-variable-based configuration."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping

from race_planner.exceptions import ConfigurationError


@dataclass(frozen=True)
class Settings:
    log_level: str = "INFO"
    default_effort: int = 2  # effort assumed for auto-completed runs
    shift_days: int = 1  # "life happens" shift


def _int_setting(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from None


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Read settings from *environ* (defaults to ``os.environ``).

    Raises:
        ConfigurationError: If a value is malformed or out of range.
    """
    environ = os.environ if environ is None else environ

    log_level = environ.get("RACE_PLANNER_LOG_LEVEL", "INFO").strip().upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise ConfigurationError(f"RACE_PLANNER_LOG_LEVEL is not a log level: {log_level!r}")

    default_effort = _int_setting(environ, "RACE_PLANNER_DEFAULT_EFFORT", 2)
    if not 1 <= default_effort <= 3:
        raise ConfigurationError(
            f"RACE_PLANNER_DEFAULT_EFFORT must be 1-3, got {default_effort}"
        )

    shift_days = _int_setting(environ, "RACE_PLANNER_SHIFT_DAYS", 1)
    if shift_days < 1:
        raise ConfigurationError(f"RACE_PLANNER_SHIFT_DAYS must be positive, got {shift_days}")

    return Settings(log_level=log_level, default_effort=default_effort, shift_days=shift_days)
