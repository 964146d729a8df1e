"""Per-request timing state.

A :class:`RequestTimingState` lives on exactly one request, stored in the
request's own ``state`` namespace (the ASGI scope), so it is released together
with the request even when the response never gets sent.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

START_TIME_KEY = "__start_time"
END_TIME_KEY = "__end_time"

# Attribute name on ``request.state``
STATE_ATTR = "split_timer"

TimingCallback = Callable[[dict[str, float]], Any]


def elapsed_ms(since: float) -> float:
    """Milliseconds elapsed on the performance counter since ``since``."""
    return (time.perf_counter() - since) * 1000


@dataclass
class RequestTimingState:
    """Timing record for a single in-flight request.

    Attributes:
        start_reference: perf_counter value at the latest ``start``; 0 once finalized
        checkpoints: checkpoint name -> elapsed milliseconds since start_reference
        end_elapsed: elapsed milliseconds at finalization, None until then
        callback: completion callback receiving the report mapping
        hook_registered: whether the finalize hook is installed for this request
    """

    start_reference: float = 0.0
    checkpoints: dict[str, float] = field(default_factory=dict)
    end_elapsed: float | None = None
    callback: TimingCallback | None = None
    hook_registered: bool = False

    @property
    def running(self) -> bool:
        return self.start_reference != 0

    def restart(self) -> None:
        """(Re)initialize the start reference and drop recorded checkpoints."""
        self.start_reference = time.perf_counter()
        self.checkpoints = {}
        self.end_elapsed = None

    def record(self, key: str) -> float:
        """Store elapsed milliseconds under ``key``, replacing any earlier value."""
        value = elapsed_ms(self.start_reference)
        self.checkpoints[key] = value
        return value

    def stop(self) -> float:
        """Capture the end elapsed time and zero the start reference."""
        self.end_elapsed = elapsed_ms(self.start_reference)
        self.start_reference = 0
        return self.end_elapsed

    def report(self) -> dict[str, float]:
        """Build the mapping handed to the completion callback."""
        result: dict[str, float] = dict(self.checkpoints)
        result[START_TIME_KEY] = self.start_reference
        if self.end_elapsed is not None:
            result[END_TIME_KEY] = self.end_elapsed
        return result


def get_state(request: Any) -> RequestTimingState | None:
    """Return the timing state attached to ``request``, if any.

    Anything without a ``state`` namespace (or with one that holds no timer)
    counts as not started.
    """
    namespace = getattr(request, "state", None)
    if namespace is None:
        return None
    state = getattr(namespace, STATE_ATTR, None)
    return state if isinstance(state, RequestTimingState) else None


def ensure_state(request: Any) -> RequestTimingState:
    """Return the request's timing state, creating it if absent."""
    state = get_state(request)
    if state is None:
        state = RequestTimingState()
        setattr(request.state, STATE_ATTR, state)
    return state


def detach_state(request: Any) -> None:
    """Remove the timing state from ``request``."""
    namespace = getattr(request, "state", None)
    if namespace is not None and hasattr(namespace, STATE_ATTR):
        delattr(namespace, STATE_ATTR)
