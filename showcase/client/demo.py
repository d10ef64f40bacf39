from __future__ import annotations

from collections.abc import AsyncIterator
from dataclasses import dataclass, field
from time import perf_counter
from typing import Any

import httpx

from showcase.client.sse import SSEDecoder, SSEEvent

HIGHLIGHT_HEADERS = (
    "content-type",
    "x-request-id",
    "x-response-time",
    "x-powered-by",
    "x-framework-version",
    "access-control-allow-origin",
)


@dataclass
class DemoResult:
    status_code: int
    elapsed_ms: float
    headers: dict[str, str] = field(default_factory=dict)
    body: Any = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class DemoClient:
    """Calls the showcase endpoints and decodes streamed bodies as they arrive."""

    def __init__(
        self,
        base_url: str = "http://localhost:3001",
        *,
        token: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = 30.0,
    ) -> None:
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        self._client = httpx.AsyncClient(base_url=base_url, headers=headers, transport=transport, timeout=timeout)

    async def __aenter__(self) -> DemoClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def call(
        self,
        method: str,
        path: str,
        *,
        json: Any | None = None,
        content: str | bytes | None = None,
        headers: dict[str, str] | None = None,
    ) -> DemoResult:
        request_headers = dict(headers or {})
        if content is not None:
            request_headers.setdefault("Content-Type", "application/json")

        start = perf_counter()
        resp = await self._client.request(method, path, json=json, content=content, headers=request_headers)
        elapsed_ms = (perf_counter() - start) * 1000.0

        try:
            body: Any = resp.json()
        except ValueError:
            body = resp.text

        return DemoResult(
            status_code=resp.status_code,
            elapsed_ms=round(elapsed_ms, 2),
            headers={name: resp.headers[name] for name in HIGHLIGHT_HEADERS if name in resp.headers},
            body=body,
        )

    async def stream_lines(self, path: str) -> AsyncIterator[str]:
        async with self._client.stream("GET", path) as resp:
            resp.raise_for_status()
            async for line in resp.aiter_lines():
                if line:
                    yield line

    async def stream_events(self, path: str) -> AsyncIterator[SSEEvent]:
        decoder = SSEDecoder()
        async with self._client.stream("GET", path, headers={"Accept": "text/event-stream"}) as resp:
            resp.raise_for_status()
            async for line in resp.aiter_lines():
                event = decoder.feed(line)
                if event is not None:
                    yield event
        tail = decoder.flush()
        if tail is not None:
            yield tail
