from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter

from showcase.config import get_settings
from showcase.models.schemas import HealthResponse

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    settings = get_settings()
    return HealthResponse(
        status="healthy",
        service=settings.service_name,
        timestamp=datetime.now(timezone.utc).isoformat(),
        dev_mode=settings.dev_bypass_auth,
    )
