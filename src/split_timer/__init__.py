"""split-timer - named request checkpoints for FastAPI / Starlette.

Usage::

    from fastapi import Depends, FastAPI, Request
    from split_timer import SplitTimer, SplitTimerMiddleware

    timer = SplitTimer()
    app = FastAPI()
    app.add_middleware(SplitTimerMiddleware)

    @app.get("/", dependencies=[Depends(timer.start(print)), Depends(timer.split_route("auth"))])
    async def index(request: Request):
        timer.split(request, "work")
        return {"ok": True}
"""

from split_timer.errors import (
    ErrorCategory,
    HookUnavailableError,
    SplitArityError,
    SplitKeyError,
    SplitTimerError,
    TimerNotStartedError,
)
from split_timer.logging import configure_from_settings, configure_logging, get_logger
from split_timer.middleware import SplitTimerMiddleware, register_before_send
from split_timer.settings import ErrorMode, SplitTimerSettings
from split_timer.state import END_TIME_KEY, START_TIME_KEY, RequestTimingState
from split_timer.timer import SplitTimer, create_timer, finalize

__version__ = "0.1.0"

__all__ = [
    # Timer
    "SplitTimer",
    "create_timer",
    "finalize",
    "RequestTimingState",
    "START_TIME_KEY",
    "END_TIME_KEY",
    # Hooks
    "SplitTimerMiddleware",
    "register_before_send",
    # Configuration
    "ErrorMode",
    "SplitTimerSettings",
    "configure_logging",
    "configure_from_settings",
    "get_logger",
    # Errors
    "ErrorCategory",
    "SplitTimerError",
    "SplitArityError",
    "SplitKeyError",
    "TimerNotStartedError",
    "HookUnavailableError",
]
