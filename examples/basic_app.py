#!/usr/bin/env python3
"""Split Timer — per-request checkpoints in a FastAPI app.

WHY SPLIT TIMING
────────────────
A single "request took 180 ms" number says nothing about *where* the
time went.  Named checkpoints recorded along the dependency chain and
inside the handler show which stage is slow, per request, without a
tracing backend.

REQUEST FLOW
────────────
    GET /orders/42
         │
         ▼
    start(report)          → timer reset, before-send hook registered
    split_route("auth")    → {"auth": 0.3}
    handler
      split(req, "db")     → {"auth": 0.3, "db": 12.8}
         │
         ▼
    SplitTimerMiddleware   → report({"auth": 0.3, "db": 12.8,
                                     "__start_time": 0, "__end_time": 13.1})

Run: uvicorn examples.basic_app:app
"""

import asyncio

from fastapi import Depends, FastAPI, Request

from split_timer import SplitTimer, SplitTimerMiddleware, configure_logging, get_logger

configure_logging(level="INFO")
log = get_logger("orders_api")

timer = SplitTimer()

app = FastAPI(title="split-timer example")
app.add_middleware(SplitTimerMiddleware)


def report(timings: dict[str, float]) -> None:
    log.info("request_timings", **{k: round(v, 2) for k, v in timings.items()})


async def authenticate(request: Request) -> None:
    request.state.user = "demo"


@app.get(
    "/orders/{order_id}",
    dependencies=[
        Depends(timer.start(report)),
        Depends(authenticate),
        Depends(timer.split_route("auth")),
    ],
)
async def get_order(order_id: int, request: Request):
    await asyncio.sleep(0.01)  # stand-in for a database query
    timer.split(request, "db")
    return {"id": order_id, "user": request.state.user}
