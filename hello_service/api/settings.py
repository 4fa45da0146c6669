"""
hello_service.api.settings

Purpose:
    Centralized configuration for the FastAPI service.
    Loads the typed configuration snapshot from environment variables (and an optional
    .env file) via pydantic-settings.

Notes:
    - Nested blocks use "__" as delimiter: APP__HEALTH__MEMORY_THRESHOLD=85.
    - server_port / management_port are kept as raw strings; parsing and range checks
      belong to the startup configuration validator so bad values are reported together.
    - Bind-time failures (pydantic ValidationError) are surfaced as
      ConfigurationValidationError: they are just as fatal as validator errors.

Created:
    2026-10-12
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from hello_service.api.errors import ConfigurationValidationError
from hello_service.shared.models.app_config import AppConfig, WorkerPoolConfig


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        frozen=True,
    )

    service_name: str = Field(default="hello-service")
    active_profiles: str = Field(
        default="default",
        description="Comma-separated list of active deployment profiles.",
    )

    server_host: str = Field(default="0.0.0.0")
    server_port: str = Field(default="8080")
    management_port: str = Field(default="8080")
    log_level: str = Field(default="INFO")

    shutdown_grace_s: int = Field(default=30, ge=0)
    keep_alive_timeout_s: int = Field(default=15, ge=1)

    app: AppConfig = Field(default_factory=AppConfig)
    worker_pool: WorkerPoolConfig = Field(default_factory=WorkerPoolConfig)

    @field_validator("server_port", "management_port", mode="before")
    @classmethod
    def coerce_port_to_str(cls, v: Any) -> str:
        return str(v).strip()

    @property
    def profiles(self) -> tuple[str, ...]:
        return tuple(p.strip().lower() for p in self.active_profiles.split(",") if p.strip())


def _format_bind_errors(exc: ValidationError) -> str:
    lines = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err.get("loc", ()))
        lines.append(f"{loc or '<root>'}: {err.get('msg')}")
    return "Configuration binding failed:\n" + "\n".join(lines)


def load_settings(**overrides: Any) -> Settings:
    try:
        return Settings(**overrides)
    except ValidationError as e:
        raise ConfigurationValidationError(_format_bind_errors(e)) from e


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()
