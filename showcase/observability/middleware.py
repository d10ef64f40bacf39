from __future__ import annotations

from datetime import datetime, timezone
from time import perf_counter
from typing import Any, Callable

import fastapi
import structlog
from starlette.datastructures import MutableHeaders

from showcase.context import STATE_KEY, RequestContext
from showcase.observability.request_ids import get_request_ids


class RequestContextMiddleware:
    """Stamps request id + start time on each request and timing headers on each response."""

    def __init__(self, app: Callable[..., Any]) -> None:
        self.app = app

    async def __call__(self, scope: dict[str, Any], receive: Callable[..., Any], send: Callable[..., Any]) -> None:
        if scope.get("type") != "http":
            await self.app(scope, receive, send)
            return

        ctx = RequestContext(
            request_id=get_request_ids().next_id(),
            started_at=datetime.now(timezone.utc),
            started_monotonic=perf_counter(),
        )
        scope.setdefault("state", {})[STATE_KEY] = ctx

        structlog.contextvars.bind_contextvars(
            request_id=ctx.request_id,
            path=scope.get("path"),
            method=scope.get("method"),
        )

        status_code: int = 500

        async def send_wrapper(message: dict[str, Any]) -> None:
            nonlocal status_code

            if message.get("type") == "http.response.start":
                status_code = int(message.get("status", 500))
                headers = MutableHeaders(scope=message)
                headers["X-Request-Id"] = ctx.request_id
                headers["X-Powered-By"] = "FastAPI"
                headers["X-Framework-Version"] = fastapi.__version__
                # Streamed bodies start here too, so this is time-to-first-byte for them.
                headers["X-Response-Time"] = f"{ctx.elapsed_ms():.2f}ms"

            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        finally:
            structlog.get_logger("access").info(
                "http_request",
                status_code=status_code,
                elapsed_ms=round(ctx.elapsed_ms(), 2),
            )

            structlog.contextvars.clear_contextvars()
