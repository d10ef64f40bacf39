"""Showcase handlers: each endpoint demonstrates one framework feature."""

from __future__ import annotations

from typing import Any

import structlog
from fastapi import APIRouter, Depends, Header, HTTPException, Query, Request
from fastapi.responses import JSONResponse

from showcase.config import get_settings
from showcase.context import RequestContext, get_request_context
from showcase.cors import cors_options
from showcase.streaming import ClosingStreamingResponse, event_stream, line_stream
from showcase.validation import validate_payload

router = APIRouter(prefix="/api/showcase", tags=["showcase"])

logger = structlog.get_logger("showcase")

METHOD_TIPS = {
    "GET": "GET: read data",
    "POST": "POST: create data",
    "PUT": "PUT: update data",
    "DELETE": "DELETE: remove data",
}

ERROR_TYPES = ["http", "notfound", "server"]


def read_bearer_token(authorization: str | None = Header(default=None)) -> str | None:
    """Return the bearer token if one was sent. It is never checked."""
    if authorization and authorization.lower().startswith("bearer "):
        return authorization[7:].strip() or None
    return None


@router.get("/routing/basic")
async def routing_basic(request: Request) -> dict[str, Any]:
    return {
        "feature": "routing",
        "method": request.method,
        "path": request.url.path,
        "message": "Basic route matched!",
        "tip": "@router.get() / .post() / .put() / .delete() define routes by method and path",
    }


@router.get("/routing/query")
async def routing_query(request: Request) -> dict[str, Any]:
    multi: dict[str, list[str]] = {}
    for key, value in request.query_params.multi_items():
        multi.setdefault(key, []).append(value)
    return {
        "feature": "routing.query",
        "query": dict(request.query_params),
        "query_multi": multi,
        "tip": "Declare typed Query() parameters, or read request.query_params for everything",
    }


@router.api_route("/routing/methods", methods=list(METHOD_TIPS))
async def routing_methods(request: Request) -> dict[str, Any]:
    return {
        "method": request.method,
        "tip": METHOD_TIPS[request.method],
        "feature": "routing.methods",
    }


@router.get("/routing/{version}/{id}")
async def routing_params(version: str, id: str, request: Request) -> dict[str, Any]:
    return {
        "feature": "routing.params",
        "params": {"version": version, "id": id},
        "matched": request.url.path,
        "tip": "Use {param} in route paths; FastAPI passes it as a function argument",
    }


@router.get("/middleware")
async def middleware_demo(ctx: RequestContext = Depends(get_request_context)) -> dict[str, Any]:
    return {
        "feature": "middleware",
        "context_from_middleware": {
            "requestId": ctx.request_id,
            "elapsed": f"{ctx.elapsed_ms():.2f}ms",
            "showcaseUser": ctx.user.as_dict(),
        },
        "tip": "Middleware builds a RequestContext before the handler runs; handlers receive it via Depends().",
        "middleware_chain": [
            "CORSMiddleware: built-in CORS handling",
            "RequestContextMiddleware: sets request_id, started_at, user",
            "FaultBoundaryMiddleware: turns escaped errors into JSON 500s",
            "this handler: reads those values",
        ],
        "check_response_headers": ["X-Request-Id", "X-Response-Time", "X-Powered-By", "X-Framework-Version"],
        "timing_note": (
            "X-Response-Time is stamped when the headers are sent: full handler time for JSON routes, "
            "time-to-first-byte for /streaming and /sse"
        ),
    }


@router.get("/context")
async def context_demo(
    request: Request,
    ctx: RequestContext = Depends(get_request_context),
    token: str | None = Depends(read_bearer_token),
) -> dict[str, Any]:
    return {
        "feature": "context",
        "what_is_context": "The request carries method, url, headers and per-request state through the whole lifecycle",
        "context_properties": {
            "request.method": request.method,
            "request.url.path": request.url.path,
            "request.url": str(request.url),
            "context.request_id": ctx.request_id,
            "context.started_at": ctx.started_at.isoformat(),
            "context.user": ctx.user.as_dict(),
        },
        "context_snapshot": ctx.snapshot(),
        "incoming_headers": dict(request.headers),
        "authorization_present": token is not None,
        "tip": "RequestContext is a frozen dataclass: middleware creates it, handlers only read it",
    }


@router.post("/validation")
async def validation_demo(request: Request) -> JSONResponse:
    result = validate_payload(await request.body())

    if not result.valid:
        payload: dict[str, Any] = {
            "feature": "validation",
            "valid": False,
            "errors": [err.model_dump() for err in result.errors],
            "tip": "Send Content-Type: application/json with a JSON object body",
        }
        if result.received is not None:
            payload["received"] = result.received
            payload["tip"] = "In production: declare a pydantic model as the body parameter"
        return JSONResponse(payload, status_code=400)

    return JSONResponse(
        {
            "feature": "validation",
            "valid": True,
            "data": result.data,
            "message": "All fields passed validation!",
            "production_code": (
                "class User(BaseModel):\n"
                "    name: str = Field(min_length=2)\n"
                "    email: EmailStr\n\n"
                "@app.post('/users')\n"
                "async def create_user(user: User): ..."
            ),
        }
    )


@router.get("/streaming")
async def streaming_demo(token: str | None = Depends(read_bearer_token)) -> ClosingStreamingResponse:
    logger.info("stream_opened", kind="lines", auth_header_present=token is not None)
    return ClosingStreamingResponse(
        line_stream(interval=get_settings().stream_interval),
        media_type="text/plain",
    )


@router.get("/sse")
async def sse_demo(token: str | None = Depends(read_bearer_token)) -> ClosingStreamingResponse:
    logger.info("stream_opened", kind="sse", auth_header_present=token is not None)
    return ClosingStreamingResponse(
        event_stream(interval=get_settings().sse_interval),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
    )


@router.get("/error")
async def error_demo(fault_type: str = Query(default="http", alias="type")) -> dict[str, Any]:
    if fault_type == "http":
        raise HTTPException(status_code=422, detail="Unprocessable Entity: intentional HTTPException demo")
    if fault_type == "notfound":
        raise HTTPException(status_code=404, detail="Resource not found: intentional 404")
    if fault_type == "server":
        raise RuntimeError("Unhandled server error: caught by the fault boundary")

    return {
        "tip": "Add ?type=http, ?type=notfound or ?type=server to trigger errors",
        "available": ERROR_TYPES,
    }


@router.api_route("/cors", methods=["GET", "OPTIONS"])
async def cors_demo() -> dict[str, Any]:
    options = cors_options(get_settings())
    return {
        "feature": "cors",
        "message": "CORS is handled by CORSMiddleware; check the response headers!",
        "config_used": {
            "allowOrigins": options["allow_origins"],
            "allowMethods": options["allow_methods"],
            "allowHeaders": options["allow_headers"],
            "exposeHeaders": options["expose_headers"],
        },
        "setup_code": (
            "from fastapi.middleware.cors import CORSMiddleware\n"
            "app.add_middleware(CORSMiddleware, allow_origins=[FRONTEND_URL],\n"
            "                   allow_methods=['GET', 'POST', 'PUT', 'DELETE'])"
        ),
        "check_headers": ["Access-Control-Allow-Origin", "Access-Control-Expose-Headers"],
        "tip": "Open the Network tab in DevTools to see the CORS headers on this response",
        "docs": "https://fastapi.tiangolo.com/tutorial/cors/",
    }
