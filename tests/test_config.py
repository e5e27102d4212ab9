"""Tests for environment-based settings."""

from __future__ import annotations

import pytest

from race_planner.config import Settings, load_settings
from race_planner.exceptions import ConfigurationError, RacePlannerError


class TestLoadSettings:
    def test_defaults(self) -> None:
        assert load_settings({}) == Settings()

    def test_reads_values(self) -> None:
        settings = load_settings(
            {
                "RACE_PLANNER_LOG_LEVEL": "debug",
                "RACE_PLANNER_DEFAULT_EFFORT": "3",
                "RACE_PLANNER_SHIFT_DAYS": "2",
            }
        )
        assert settings == Settings(log_level="DEBUG", default_effort=3, shift_days=2)

    def test_blank_values_fall_back(self) -> None:
        settings = load_settings({"RACE_PLANNER_DEFAULT_EFFORT": " ", "RACE_PLANNER_SHIFT_DAYS": ""})
        assert settings.default_effort == 2
        assert settings.shift_days == 1

    def test_reads_os_environ(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("RACE_PLANNER_SHIFT_DAYS", "4")
        assert load_settings().shift_days == 4

    @pytest.mark.parametrize(
        "environ",
        [
            {"RACE_PLANNER_LOG_LEVEL": "LOUD"},
            {"RACE_PLANNER_DEFAULT_EFFORT": "hard"},
            {"RACE_PLANNER_DEFAULT_EFFORT": "5"},
            {"RACE_PLANNER_SHIFT_DAYS": "0"},
        ],
    )
    def test_rejects_bad_values(self, environ: dict[str, str]) -> None:
        with pytest.raises(ConfigurationError):
            load_settings(environ)

    def test_error_is_a_planner_error(self) -> None:
        with pytest.raises(RacePlannerError, match="RACE_PLANNER_SHIFT_DAYS"):
            load_settings({"RACE_PLANNER_SHIFT_DAYS": "-1"})
