"""RequestContext: the immutable per-request state built by the annotator middleware."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from time import perf_counter
from typing import Any

from fastapi import Request

STATE_KEY = "request_context"


@dataclass(frozen=True)
class ShowcaseUser:
    id: str = "demo"
    role: str = "viewer"

    def as_dict(self) -> dict[str, str]:
        return {"id": self.id, "role": self.role}


@dataclass(frozen=True)
class RequestContext:
    request_id: str
    started_at: datetime
    started_monotonic: float
    user: ShowcaseUser = field(default_factory=ShowcaseUser)

    def elapsed_ms(self, now: float | None = None) -> float:
        current = perf_counter() if now is None else now
        return max(0.0, (current - self.started_monotonic) * 1000.0)

    def snapshot(self) -> dict[str, Any]:
        return {
            "request_id": self.request_id,
            "started_at": self.started_at.isoformat(),
            "user": self.user.as_dict(),
        }


def get_request_context(request: Request) -> RequestContext:
    ctx = request.scope.get("state", {}).get(STATE_KEY)
    if not isinstance(ctx, RequestContext):
        raise RuntimeError("RequestContextMiddleware is not installed")
    return ctx
