"""Settings for split-timer.

A timer is configured once, at construction. The only behavioural knob is the
error mode: ``strict`` (default) raises on misuse, ``suppress`` turns misuse
into a logged warning and a no-op. Logging knobs live here too so a host
application can drive everything from the environment.

All values can be overridden via environment variables prefixed with
``SPLIT_TIMER_`` or a ``.env`` file.

Examples:
    >>> from split_timer.settings import SplitTimerSettings
    >>> SplitTimerSettings(error_mode="suppress").error_mode
    <ErrorMode.SUPPRESS: 'suppress'>

Tags:
    settings, configuration, pydantic, environment, split-timer

Doc-Types:
    - API Reference
    - Configuration Guide
"""

from __future__ import annotations

from enum import Enum

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ErrorMode(str, Enum):
    """How the timer reacts to misuse."""

    STRICT = "strict"
    SUPPRESS = "suppress"


class SplitTimerSettings(BaseSettings):
    """Settings for a :class:`~split_timer.timer.SplitTimer`.

    Order of precedence (highest → lowest):
        1. Constructor arguments
        2. Environment variables (``SPLIT_TIMER_ERROR_MODE``, etc.)
        3. ``.env`` file
        4. Defaults below
    """

    model_config = SettingsConfigDict(
        env_prefix="SPLIT_TIMER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Behaviour ────────────────────────────────────────────────
    error_mode: ErrorMode = Field(
        default=ErrorMode.STRICT,
        description="strict raises on misuse, suppress logs and ignores it",
    )

    # ── Observability ────────────────────────────────────────────
    log_level: str = Field(default="WARNING", description="Diagnostic log level")
    json_logs: bool | None = Field(
        default=None,
        description="JSON diagnostics; None auto-detects from the stderr tty",
    )

    @property
    def suppress_errors(self) -> bool:
        return self.error_mode is ErrorMode.SUPPRESS
