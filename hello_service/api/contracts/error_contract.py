"""
hello_service.api.contracts.error_contract

Purpose:
    Stable error contract for the API (response model).
    Used by global exception handlers to ensure consistent client responses.

Created:
    2026-10-12
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ErrorResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    timestamp: str = Field(..., description="ISO-8601 local time the error was produced")
    status: int = Field(..., description="HTTP status code")
    error: str = Field(..., description="Short error label (HTTP reason phrase)")
    message: str = Field(..., description="Human-readable error message")
    path: str | None = Field(default=None, description="Request path")
    correlation_id: str | None = Field(
        default=None, description="Request correlation id for debugging"
    )
    details: dict | None = Field(default=None, description="Optional structured details")
