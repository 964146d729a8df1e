"""
Shared pytest fixtures for split-timer tests.

This module provides:
- Timer fixtures (strict and suppressed)
- Callback spies
- A TestClient factory wiring dependencies into a FastAPI route
- structlog / environment isolation between tests

Usage:
    def test_something(make_client, timer, callback):
        client = make_client(timer.start(callback))
        client.get("/")
"""

import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any, Generator
from unittest.mock import Mock

import pytest
import structlog
from fastapi.testclient import TestClient

# Ensure split_timer and tests._support are importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
sys.path.insert(0, str(Path(__file__).parent.parent))

from split_timer import SplitTimer
from tests._support import build_app


@pytest.fixture(autouse=True)
def reset_structlog() -> Generator[None, None, None]:
    """Restore structlog defaults so configure_logging() in one test can't leak."""
    structlog.reset_defaults()
    yield
    structlog.reset_defaults()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's environment out of settings resolution."""
    for name in ("SPLIT_TIMER_ERROR_MODE", "SPLIT_TIMER_LOG_LEVEL", "SPLIT_TIMER_JSON_LOGS"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def timer() -> SplitTimer:
    """A strict timer."""
    return SplitTimer()


@pytest.fixture
def lenient_timer() -> SplitTimer:
    """A timer with errors suppressed."""
    return SplitTimer(suppress_errors=True)


@pytest.fixture
def callback() -> Mock:
    return Mock(name="callback")


@pytest.fixture
def make_client() -> Callable[..., TestClient]:
    """Factory: ``make_client(*dependencies, handler=None, middleware=True)``."""

    def _make(*dependencies: Callable[..., Any], **kwargs: Any) -> TestClient:
        return TestClient(build_app(*dependencies, **kwargs))

    return _make
