"""
Tests for split-timer settings and timer construction.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from split_timer import ErrorMode, SplitTimer, SplitTimerSettings, create_timer


class TestSplitTimerSettings:
    def test_defaults(self):
        s = SplitTimerSettings()
        assert s.error_mode is ErrorMode.STRICT
        assert s.suppress_errors is False
        assert s.log_level == "WARNING"
        assert s.json_logs is None

    def test_custom_values(self):
        s = SplitTimerSettings(error_mode="suppress", log_level="DEBUG", json_logs=True)
        assert s.error_mode is ErrorMode.SUPPRESS
        assert s.suppress_errors is True
        assert s.log_level == "DEBUG"
        assert s.json_logs is True

    def test_env_prefix(self):
        assert SplitTimerSettings.model_config["env_prefix"] == "SPLIT_TIMER_"

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("SPLIT_TIMER_ERROR_MODE", "suppress")
        assert SplitTimerSettings().error_mode is ErrorMode.SUPPRESS

    def test_rejects_unknown_mode(self):
        with pytest.raises(ValidationError):
            SplitTimerSettings(error_mode="loud")


class TestTimerConstruction:
    def test_strict_by_default(self):
        assert SplitTimer().error_mode is ErrorMode.STRICT

    def test_suppress_errors_flag(self):
        assert SplitTimer(suppress_errors=True).suppress_errors is True
        assert SplitTimer(suppress_errors=False).suppress_errors is False

    def test_string_mode(self):
        assert SplitTimer("suppress").error_mode is ErrorMode.SUPPRESS

    def test_explicit_mode_wins_over_flag(self):
        assert SplitTimer(ErrorMode.STRICT, suppress_errors=True).suppress_errors is False

    def test_from_settings(self):
        timer = SplitTimer(settings=SplitTimerSettings(error_mode=ErrorMode.SUPPRESS))
        assert timer.suppress_errors is True

    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("SPLIT_TIMER_ERROR_MODE", "suppress")
        assert SplitTimer().suppress_errors is True

    def test_invalid_mode(self):
        with pytest.raises(ValueError):
            SplitTimer("loud")

    def test_instances_independent(self):
        strict = create_timer()
        lenient = create_timer(suppress_errors=True)
        assert strict is not lenient
        with pytest.raises(TypeError):
            strict.split()
        lenient.split()
