from __future__ import annotations

from typing import Any, Callable

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.requests import ClientDisconnect

from showcase.models.schemas import ErrorDetail, ErrorEnvelope

GENERIC_MESSAGE = "Internal server error"

logger = structlog.get_logger("errors")


def _envelope(detail: ErrorDetail, tip: str) -> dict[str, Any]:
    return ErrorEnvelope(error=detail, tip=tip).model_dump(exclude_none=True)


def fault_response(exc: Exception, scope: dict[str, Any] | None = None) -> JSONResponse:
    """Collapse any raised exception into the structured JSON error response."""
    scope = scope or {}

    if isinstance(exc, StarletteHTTPException):
        if exc.status_code == 404 and scope.get("endpoint") is None:
            detail = ErrorDetail(
                code="NOT_FOUND",
                message=f"Route {scope.get('method', 'GET')} {scope.get('path', '/')} not found",
            )
            tip = "Unmatched routes fall through to the 404 handler"
        else:
            detail = ErrorDetail(code="HTTP_EXCEPTION", status=exc.status_code, message=str(exc.detail))
            tip = "Raise HTTPException anywhere; the app-level handler returns a consistent JSON error"
        logger.warning("known_fault", status_code=exc.status_code, message=detail.message)
        return JSONResponse(_envelope(detail, tip), status_code=exc.status_code, headers=exc.headers)

    if isinstance(exc, RequestValidationError):
        fields = [".".join(str(part) for part in err.get("loc", ())) for err in exc.errors()]
        detail = ErrorDetail(
            code="VALIDATION_ERROR",
            status=422,
            message=f"Invalid request parameters: {', '.join(fields)}",
        )
        logger.warning("known_fault", status_code=422, message=detail.message)
        return JSONResponse(
            _envelope(detail, "FastAPI validates typed path, query and body parameters before the handler runs"),
            status_code=422,
        )

    logger.exception("request_failed", error_type=type(exc).__name__, exc_info=exc)
    detail = ErrorDetail(code="INTERNAL_ERROR", message=GENERIC_MESSAGE)
    return JSONResponse(
        _envelope(detail, "Unknown errors are logged server-side and answered with a generic 500"),
        status_code=500,
    )


async def _handle_known_fault(request: Request, exc: Exception) -> JSONResponse:
    return fault_response(exc, request.scope)


def register_fault_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, _handle_known_fault)
    app.add_exception_handler(RequestValidationError, _handle_known_fault)


class FaultBoundaryMiddleware:
    """Turns any exception that escapes the routes into a generic 500 response.

    A client that disconnects mid-request only ends the response; it is not a fault.
    """

    def __init__(self, app: Callable[..., Any]) -> None:
        self.app = app

    async def __call__(self, scope: dict[str, Any], receive: Callable[..., Any], send: Callable[..., Any]) -> None:
        if scope.get("type") != "http":
            await self.app(scope, receive, send)
            return

        response_started = False
        send_failed = False

        async def send_wrapper(message: dict[str, Any]) -> None:
            nonlocal response_started, send_failed
            if message.get("type") == "http.response.start":
                response_started = True
            try:
                await send(message)
            except OSError:
                send_failed = True
                raise

        try:
            await self.app(scope, receive, send_wrapper)
        except Exception as exc:
            if isinstance(exc, ClientDisconnect) or send_failed:
                # Nobody is listening any more, so there is nothing left to send.
                logger.info(
                    "client_disconnected",
                    response_started=response_started,
                    error_type=type(exc).__name__,
                )
                return
            if response_started:
                # Headers are already on the wire; the body can only be cut short.
                logger.exception("request_failed_mid_response", error_type=type(exc).__name__, exc_info=exc)
                await send({"type": "http.response.body", "body": b"", "more_body": False})
                return
            response = fault_response(exc, scope)
            await response(scope, receive, send)
