"""
Split timer - per-request checkpoints reported when the response goes out.

``SplitTimer`` hands out FastAPI dependencies. ``start()`` marks the start of
a request's timer, ``split_route(key)`` and ``split(request, key)`` record
named checkpoints, and the registered callback receives every checkpoint once
the response is about to be sent.

Manifesto:
    Timing a request should take one line per checkpoint and never touch the
    response.  The timer object holds configuration only; every number it
    produces lives on the request it measures and disappears with it.

Architecture:
    ::

        @app.get("/", dependencies=[
            Depends(timer.start(report)),        # reset + register hook once
            Depends(timer.split_route("auth")),  # checkpoint
        ])
        async def handler(request):
            ...
            timer.split(request, "db")           # checkpoint
            return ...
                │
                ▼
        SplitTimerMiddleware (response produced, headers not yet sent)
            → finalize: __end_time, __start_time = 0
            → report({"auth": 0.4, "db": 12.9, "__start_time": 0, "__end_time": 13.2})
            → detach state from request

Guardrails:
    ❌ DON'T: Call ``split()`` before ``start()`` ran for the request
    ✅ DO: Put ``start()`` first in the dependency list

    ❌ DON'T: Forget ``app.add_middleware(SplitTimerMiddleware)``
    ✅ DO: Install the middleware once, at application construction

Tags:
    timing, latency, middleware, fastapi, split-timer

Doc-Types:
    - API Reference
"""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable
from functools import partial
from typing import Any

from starlette.requests import Request

from split_timer.errors import (
    HookUnavailableError,
    SplitArityError,
    SplitKeyError,
    SplitTimerError,
    TimerNotStartedError,
)
from split_timer.logging import get_logger
from split_timer.middleware import register_before_send
from split_timer.settings import ErrorMode, SplitTimerSettings
from split_timer.state import (
    TimingCallback,
    detach_state,
    ensure_state,
    get_state,
)

logger = get_logger(__name__)

TimerDependency = Callable[[Request], Awaitable[None]]


class SplitTimer:
    """Factory for request-timing dependencies.

    Args:
        error_mode: ``ErrorMode.STRICT`` (raise on misuse) or
            ``ErrorMode.SUPPRESS`` (log a warning and ignore the call).
            Defaults to :class:`SplitTimerSettings`, i.e. the environment.
        suppress_errors: Boolean shorthand for ``error_mode``.
        settings: Explicit settings object used when no mode is given.

    Instances are immutable after construction and safe to share across
    concurrent requests.
    """

    def __init__(
        self,
        error_mode: ErrorMode | str | None = None,
        *,
        suppress_errors: bool | None = None,
        settings: SplitTimerSettings | None = None,
    ) -> None:
        if error_mode is None and suppress_errors is not None:
            error_mode = ErrorMode.SUPPRESS if suppress_errors else ErrorMode.STRICT
        if error_mode is None:
            error_mode = (settings or SplitTimerSettings()).error_mode
        self._error_mode = ErrorMode(error_mode)

    @property
    def error_mode(self) -> ErrorMode:
        return self._error_mode

    @property
    def suppress_errors(self) -> bool:
        return self._error_mode is ErrorMode.SUPPRESS

    def _fail(self, error: SplitTimerError) -> None:
        """Raise ``error``, or log it when errors are suppressed."""
        if not self.suppress_errors:
            raise error
        logger.warning("split_timer_error_suppressed", **error.to_dict())

    # ── start ────────────────────────────────────────────────────

    def start(self, callback: TimingCallback | None = None) -> TimerDependency:
        """Return a dependency that (re)starts the request's timer.

        ``callback`` receives the timing report once the response is about to
        be sent. A later ``start()`` without a callback keeps the one
        registered earlier in the chain; a later ``start(other)`` replaces it.
        """

        async def start_timer(request: Request) -> None:
            self._start(request, callback)

        return start_timer

    def _start(self, request: Any, callback: TimingCallback | None) -> None:
        state = ensure_state(request)

        if not callable(callback):
            callback = None
        if callback is None and state.callback is None and not state.hook_registered:
            logger.warning(
                "no_callback_registered",
                detail="Register a callback to process results.",
            )

        if callback is not None:
            state.callback = callback

        if not state.hook_registered:
            try:
                register_before_send(request, partial(finalize, request))
            except HookUnavailableError as exc:
                self._fail(exc)
            else:
                state.hook_registered = True

        state.restart()

    # ── splits ───────────────────────────────────────────────────

    def split_route(self, key: Any = None) -> TimerDependency:
        """Return a dependency that records a checkpoint named ``key``.

        The key is validated here, when the route is declared, not per request.
        """
        if not isinstance(key, str):
            self._fail(SplitKeyError("key for timer split must be a string"))

            async def skip_split(request: Request) -> None:
                return None

            return skip_split

        async def split_checkpoint(request: Request) -> None:
            self.split(request, key)

        return split_checkpoint

    def split(self, *args: Any) -> None:
        """split(request, key)

        Record the milliseconds elapsed since the request's timer started
        under ``key``. Re-using a key overwrites the earlier value.

        Raises:
            SplitArityError: not called with exactly two arguments
            SplitKeyError: ``key`` is not a string
            TimerNotStartedError: ``start()`` never ran for this request
        """
        if len(args) != 2:
            self._fail(
                SplitArityError(
                    f"wrong number of arguments for split(request, key): "
                    f"expected 2, got {len(args)}"
                )
            )
            return

        request, key = args
        if not isinstance(key, str):
            self._fail(SplitKeyError("key for timer split must be a string"))
            return

        state = get_state(request)
        if state is None or not state.running:
            self._fail(
                TimerNotStartedError(
                    "split() called for unstarted timer. Ensure that the "
                    "SplitTimer.start() dependency runs prior to calling split()"
                )
            )
            return

        if key in state.checkpoints:
            logger.warning("duplicate_split_key", key=key, detail="It will be overwritten.")

        state.record(key)


async def finalize(request: Any) -> None:
    """Stop the request's timer, report it and detach it from the request.

    Runs as the request's before-send hook. The state is looked up when the
    hook fires, so a ``start()`` later in the chain is honoured.
    """
    state = get_state(request)
    if state is None:
        return

    end_elapsed = state.stop()
    callback = state.callback
    logger.debug(
        "timer_finalized",
        end_elapsed_ms=round(end_elapsed, 3),
        checkpoints=len(state.checkpoints),
        reported=callback is not None,
    )

    try:
        if callback is not None:
            result = callback(state.report())
            if inspect.isawaitable(result):
                await result
    finally:
        detach_state(request)


def create_timer(**kwargs: Any) -> SplitTimer:
    """Build an independent :class:`SplitTimer`; see its arguments."""
    return SplitTimer(**kwargs)
