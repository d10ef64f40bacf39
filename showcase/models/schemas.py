from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class HealthResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    status: str
    service: str
    timestamp: str
    dev_mode: bool = Field(alias="devMode")


class FieldError(BaseModel):
    field: str
    message: str


class ValidationResult(BaseModel):
    valid: bool
    errors: list[FieldError] = Field(default_factory=list)
    data: dict[str, Any] | None = None
    received: Any | None = None


class ErrorDetail(BaseModel):
    code: str
    status: int | None = None
    message: str


class ErrorEnvelope(BaseModel):
    feature: str = "error-handling"
    error: ErrorDetail
    tip: str
