from __future__ import annotations

from collections.abc import AsyncIterator

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from showcase.config import get_settings
from showcase.main import create_app
from showcase.observability.request_ids import reset_request_ids


FRONTEND_ORIGIN = "http://localhost:5173"


@pytest.fixture(autouse=True)
def test_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FRONTEND_URL", f"{FRONTEND_ORIGIN}, http://example.test")
    monkeypatch.setenv("SERVICE_NAME", "showcase-test")
    monkeypatch.setenv("DEV_BYPASS_AUTH", "true")
    monkeypatch.setenv("STREAM_INTERVAL_MS", "1")
    monkeypatch.setenv("SSE_INTERVAL_MS", "1")
    get_settings.cache_clear()
    reset_request_ids()

    yield

    get_settings.cache_clear()


@pytest.fixture
def app(test_environment) -> FastAPI:
    return create_app()


@pytest.fixture
async def api_client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
