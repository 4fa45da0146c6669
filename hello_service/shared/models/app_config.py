"""
hello_service.shared.models.app_config

Purpose:
    Typed, immutable configuration snapshot for the service ("app" block).
    Bound once at startup by hello_service.api.settings and never mutated afterwards.

Design Notes:
    - Range constraints are enforced at bind time (pydantic Field bounds).
    - Cross-field plausibility checks (threshold ordering, total wait time) are NOT
      done here; they are warnings owned by the startup configuration validator.
    - frozen=True keeps the snapshot read-only; extra="forbid" catches typos in env keys.

Created:
    2026-10-12
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


class HealthConfig(BaseModel):
    """Health check thresholds, in percent."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    memory_threshold: int = Field(
        default=80,
        ge=50,
        le=95,
        description="Memory usage threshold (%) before health degrades.",
    )
    disk_threshold: int = Field(
        default=90,
        ge=50,
        le=95,
        description="Disk usage threshold (%) before health degrades.",
    )


class ExternalServiceConfig(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    timeout: int = Field(
        default=5000,
        ge=1000,
        le=60000,
        description="Per-call timeout for external service calls, in milliseconds.",
    )
    retry_attempts: int = Field(
        default=3,
        ge=1,
        le=10,
        description="Number of attempts for a failing external service call.",
    )


class AppConfig(BaseModel):
    """
    Application-level settings.

    IMPORTANT:
        version and environment must be non-blank; they are used as metric tags
        and in the startup summary.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    version: str = Field(default="1.0.0")
    environment: str = Field(default="development")
    debug_enabled: bool = Field(default=False)

    health: HealthConfig = Field(default_factory=HealthConfig)
    external_service: ExternalServiceConfig = Field(default_factory=ExternalServiceConfig)

    @field_validator("version", "environment")
    @classmethod
    def validate_not_blank(cls, v: str, info: ValidationInfo) -> str:
        v = v.strip()
        if not v:
            raise ValueError(f"Application {info.field_name} cannot be blank")
        return v


class WorkerPoolConfig(BaseModel):
    """
    Bounded worker pool sizing.

    Capacity (admitted, in-flight units) is max_size + queue_capacity; anything
    beyond that is rejected rather than queued.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    core_size: int = Field(default=2, ge=1)
    max_size: int = Field(default=10, ge=1)
    queue_capacity: int = Field(default=100, ge=0)

    @field_validator("max_size")
    @classmethod
    def validate_max_not_below_core(cls, v: int, info: ValidationInfo) -> int:
        core = info.data.get("core_size")
        if core is not None and v < core:
            raise ValueError(f"max_size ({v}) must be >= core_size ({core})")
        return v

    @property
    def capacity(self) -> int:
        return self.max_size + self.queue_capacity
