"""
Test support utilities for split-timer tests.

This module provides helper functions that don't fit as pytest fixtures
but are useful across multiple test files.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from fastapi import Depends, FastAPI, Request

from split_timer import SplitTimerMiddleware


def build_app(
    *dependencies: Callable[..., Any],
    handler: Callable[..., Any] | None = None,
    middleware: bool = True,
) -> FastAPI:
    """
    Create a minimal app whose ``/`` route runs ``dependencies`` in order.

    Args:
        *dependencies: Route dependencies, executed before the handler
        handler: Route handler; defaults to one returning ``{"status": "ok"}``
        middleware: Install ``SplitTimerMiddleware``

    Returns:
        FastAPI application
    """
    app = FastAPI()
    if middleware:
        app.add_middleware(SplitTimerMiddleware)

    async def send_ok(request: Request) -> dict[str, str]:
        return {"status": "ok"}

    app.add_api_route(
        "/",
        handler or send_ok,
        methods=["GET"],
        dependencies=[Depends(dep) for dep in dependencies],
    )
    return app


def warnings_in(logs: list[dict[str, Any]], event: str | None = None) -> list[dict[str, Any]]:
    """Filter captured structlog entries down to warnings, optionally for one event."""
    return [
        entry
        for entry in logs
        if entry["log_level"] == "warning" and (event is None or entry["event"] == event)
    ]
