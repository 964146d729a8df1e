"""Before-send hook middleware.

``SplitTimerMiddleware`` gives every HTTP request a single-fire hook list.
Code running inside the request registers callables with
:func:`register_before_send`; once the downstream app has produced its
response, and before the response headers go out to the client, the hooks run
once each, in registration order.

Manifesto:
    Finalizing per-request work must not depend on the handler remembering to
    do it.  The middleware owns the "response is about to be sent" moment so
    handlers and dependencies only ever register interest in it.

Tags:
    split-timer, middleware, hooks, starlette

Doc-Types:
    api-reference
"""

from __future__ import annotations

import inspect
from collections.abc import Callable
from typing import Any

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from split_timer.errors import HookUnavailableError

HOOKS_ATTR = "split_timer_before_send"

BeforeSendHook = Callable[[], Any]


def register_before_send(request: Any, hook: BeforeSendHook) -> None:
    """Run ``hook`` once, right before this request's response headers are sent.

    Raises:
        HookUnavailableError: ``SplitTimerMiddleware`` is not installed, or the
            request has already been answered.
    """
    namespace = getattr(request, "state", None)
    hooks = getattr(namespace, HOOKS_ATTR, None) if namespace is not None else None
    if hooks is None:
        raise HookUnavailableError(
            "no before-send hook available for this request. "
            "Ensure that SplitTimerMiddleware is added to the application"
        )
    hooks.append(hook)


class SplitTimerMiddleware(BaseHTTPMiddleware):
    """Fire registered before-send hooks exactly once per request."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        hooks: list[BeforeSendHook] = []
        setattr(request.state, HOOKS_ATTR, hooks)
        try:
            response = await call_next(request)
        finally:
            # Late registrations must fail instead of silently never firing
            if hasattr(request.state, HOOKS_ATTR):
                delattr(request.state, HOOKS_ATTR)

        for hook in hooks:
            result = hook()
            if inspect.isawaitable(result):
                await result
        return response
