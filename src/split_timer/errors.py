"""
Structured error types for split-timer.

Every misuse of the timer (wrong argument count, non-string checkpoint key,
splitting a request that was never started, missing hook middleware) is a
programmer error, not an environmental failure. Each one gets its own type so
callers can catch exactly what they mean, and each one also subclasses the
builtin exception a Python developer would expect (``TypeError`` for bad
arguments, ``RuntimeError`` for bad state).

Manifesto:
    - **Typed hierarchy:** One base class, one subclass per misuse
    - **Builtin-compatible:** ``except TypeError`` still works
    - **Loggable:** ``to_dict()`` feeds structured warnings in suppressed mode
    - **Never retryable:** Integration mistakes do not fix themselves

Architecture:
    ::

        ┌──────────────────────────────────────────────────────────┐
        │                    SplitTimerError                        │
        │                 (category, to_dict())                     │
        ├──────────────────────────────────────────────────────────┤
        │  SplitArityError      SplitKeyError                      │
        │  (ARITY, TypeError)   (TYPE, TypeError)                  │
        │                                                          │
        │  TimerNotStartedError HookUnavailableError               │
        │  (STATE, RuntimeError)(STATE, RuntimeError)              │
        └──────────────────────────────────────────────────────────┘

Examples:
    >>> err = SplitKeyError("key for timer split must be a string")
    >>> isinstance(err, TypeError)
    True
    >>> err.category
    <ErrorCategory.TYPE: 'TYPE'>

Tags:
    error-handling, exception-hierarchy, split-timer

Doc-Types:
    - API Reference
"""

from __future__ import annotations

from enum import Enum
from typing import Any

MESSAGE_PREFIX = "split-timer: "


class ErrorCategory(str, Enum):
    """Classification of timer misuse."""

    ARITY = "ARITY"
    TYPE = "TYPE"
    STATE = "STATE"


class SplitTimerError(Exception):
    """Base exception for all split-timer errors.

    Subclasses set ``default_category``. The message is prefixed with
    ``split-timer:`` so errors are recognisable in host framework tracebacks.
    """

    default_category: ErrorCategory = ErrorCategory.STATE

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        cause: Exception | None = None,
    ):
        if not message.startswith(MESSAGE_PREFIX):
            message = MESSAGE_PREFIX + message
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging."""
        result: dict[str, Any] = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
        }
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


class SplitArityError(SplitTimerError, TypeError):
    """``split`` called with other than two arguments."""

    default_category = ErrorCategory.ARITY


class SplitKeyError(SplitTimerError, TypeError):
    """Checkpoint key is not a string."""

    default_category = ErrorCategory.TYPE


class TimerNotStartedError(SplitTimerError, RuntimeError):
    """``split`` called for a request whose timer was never started."""

    default_category = ErrorCategory.STATE


class HookUnavailableError(SplitTimerError, RuntimeError):
    """The before-send hook middleware did not run for this request."""

    default_category = ErrorCategory.STATE


__all__ = [
    "ErrorCategory",
    "SplitTimerError",
    "SplitArityError",
    "SplitKeyError",
    "TimerNotStartedError",
    "HookUnavailableError",
]
