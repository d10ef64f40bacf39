from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    host: str = Field(default="127.0.0.1", alias="BACKEND_HOST")
    port: int = Field(default=3001, alias="BACKEND_PORT")
    frontend_url: str = Field(default="http://localhost:5173", alias="FRONTEND_URL")
    service_name: str = Field(default="framework-showcase-backend", alias="SERVICE_NAME")
    dev_bypass_auth: bool = Field(default=False, alias="DEV_BYPASS_AUTH")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_format: Literal["json", "console"] = Field(default="json", alias="LOG_FORMAT")

    stream_interval_ms: int = Field(default=350, ge=0, alias="STREAM_INTERVAL_MS")
    sse_interval_ms: int = Field(default=500, ge=0, alias="SSE_INTERVAL_MS")

    @property
    def allowed_origins(self) -> list[str]:
        return [origin.strip() for origin in self.frontend_url.split(",") if origin.strip()]

    @property
    def stream_interval(self) -> float:
        return self.stream_interval_ms / 1000.0

    @property
    def sse_interval(self) -> float:
        return self.sse_interval_ms / 1000.0


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
