from __future__ import annotations

from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from showcase.config import Settings

ALLOW_METHODS = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
ALLOW_HEADERS = ["Content-Type", "Authorization"]
EXPOSE_HEADERS = ["X-Request-Id", "X-Response-Time", "X-Powered-By", "X-Framework-Version"]


def cors_options(settings: Settings) -> dict[str, Any]:
    return {
        "allow_origins": settings.allowed_origins,
        "allow_methods": ALLOW_METHODS,
        "allow_headers": ALLOW_HEADERS,
        "expose_headers": EXPOSE_HEADERS,
    }


def install_cors(app: FastAPI, settings: Settings) -> None:
    app.add_middleware(CORSMiddleware, **cors_options(settings))
