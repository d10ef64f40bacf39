from __future__ import annotations

import asyncio
import json
from collections.abc import AsyncIterator
from datetime import datetime, timezone
from typing import Any

import structlog
from starlette.responses import StreamingResponse
from starlette.types import Send

SSE_EVENT_COUNT = 6

logger = structlog.get_logger("streaming")


class ClosingStreamingResponse(StreamingResponse):
    """StreamingResponse that always closes its body iterator when sending stops."""

    async def stream_response(self, send: Send) -> None:
        try:
            await super().stream_response(send)
        finally:
            aclose = getattr(self.body_iterator, "aclose", None)
            if aclose is not None:
                await aclose()


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def format_sse(
    data: Any,
    event: str | None = None,
    event_id: str | int | None = None,
    retry: int | None = None,
) -> str:
    """Encode one Server-Sent Events frame.

    Non-string data is JSON encoded. Multi-line data is split across several
    ``data:`` fields so the browser joins it back with newlines.
    """
    payload = data if isinstance(data, str) else json.dumps(data, ensure_ascii=False)
    lines: list[str] = []
    if event:
        lines.append(f"event: {event}")
    if event_id is not None:
        lines.append(f"id: {event_id}")
    if retry is not None:
        lines.append(f"retry: {int(retry)}")
    for part in payload.splitlines() or [""]:
        lines.append(f"data: {part}")
    return "\n".join(lines) + "\n\n"


def stream_lines() -> list[str]:
    return [
        "FastAPI streaming started...",
        f"Chunk 1 streamed at {_now_iso()}",
        "Chunk 2 from an async generator handed to StreamingResponse",
        "Chunk 3 pauses with asyncio.sleep, so no worker thread is blocked",
        "Stream complete!",
    ]


async def line_stream(interval: float) -> AsyncIterator[str]:
    """Yield five text lines, ``interval`` seconds apart."""
    lines = stream_lines()
    sent = 0
    try:
        for line in lines:
            if sent:
                await asyncio.sleep(interval)
            sent += 1
            yield line + "\n"
    except (asyncio.CancelledError, GeneratorExit):
        logger.info("stream_cancelled", kind="lines", sent=sent)
        raise
    logger.info("stream_completed", kind="lines", sent=len(lines))


async def event_stream(interval: float, count: int = SSE_EVENT_COUNT) -> AsyncIterator[str]:
    """Yield ``count`` numbered ``message`` events then a closing ``done`` event."""
    sent = 0
    try:
        for number in range(1, count + 1):
            if sent:
                await asyncio.sleep(interval)
            sent = number
            yield format_sse(
                {"count": number, "ts": _now_iso(), "msg": f"Server-sent event #{number}"},
                event="message",
            )
        await asyncio.sleep(interval)
        yield format_sse({"msg": "Stream ended"}, event="done")
    except (asyncio.CancelledError, GeneratorExit):
        logger.info("stream_cancelled", kind="sse", sent=sent)
        raise
    logger.info("stream_completed", kind="sse", sent=sent)
