"""
hello_service.api.contracts.validation_policy

Purpose:
    Thresholds and constants used by the startup configuration validator.
    Centralized so heuristics (total wait budget, production profiles) are tunable
    instead of being magic numbers inside the checks.

Created:
    2026-10-12
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ValidationPolicy:
    production_profiles: frozenset[str] = frozenset({"production", "prod", "kubernetes", "k8s"})

    # Expected to be set explicitly when running under a production profile (warn only).
    production_override_env_vars: tuple[str, ...] = ("SERVER_PORT", "MANAGEMENT_PORT", "LOG_LEVEL")

    min_port: int = 1
    max_port: int = 65535

    # timeout_ms * retry_attempts above this is flagged (warn only). 5 minutes.
    max_total_wait_ms: int = 300_000
