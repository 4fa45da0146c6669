"""
hello_service.api.contracts.correlation_id_policy

Purpose:
    Central policy for correlation IDs (header name + fallback behavior).

Created:
    2026-10-12
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CorrelationIdPolicy:
    header: str = "X-Correlation-ID"
    state_attr: str = "correlation_id"

    # Used only if id generation itself blows up; requests are never failed for it.
    fallback_id: str = "unavailable"

    # Rendered in log lines when no id is bound.
    log_placeholder: str = "-"
