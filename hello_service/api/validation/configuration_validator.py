"""
hello_service.api.validation.configuration_validator

Purpose:
    Fail-fast validation of the bound configuration snapshot at startup.

Design Notes:
    - Every check runs; findings accumulate instead of short-circuiting.
    - ERROR findings abort startup (ConfigurationValidationError). They are never
      retried: configuration is static for the lifetime of the process.
    - WARNING findings are logged and startup proceeds.
    - Runs once, from the application lifespan, before the server accepts traffic.

Created:
    2026-10-12
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping

from hello_service.api.contracts.validation_policy import ValidationPolicy
from hello_service.api.errors import ConfigurationValidationError
from hello_service.api.settings import Settings
from hello_service.shared.models.enums import IssueCode, IssueSeverity

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidationIssue:
    severity: IssueSeverity
    code: IssueCode
    message: str

    @property
    def is_error(self) -> bool:
        return self.severity is IssueSeverity.ERROR

    def __str__(self) -> str:
        return f"[{self.severity.value}] {self.code.value}: {self.message}"


def _warning(code: IssueCode, message: str) -> ValidationIssue:
    return ValidationIssue(IssueSeverity.WARNING, code, message)


def _error(code: IssueCode, message: str) -> ValidationIssue:
    return ValidationIssue(IssueSeverity.ERROR, code, message)


def is_production(settings: Settings, policy: ValidationPolicy) -> bool:
    return any(p in policy.production_profiles for p in settings.profiles)


# ---------------------------------------------------------------------------
# Checks
# ---------------------------------------------------------------------------

def _check_production_overrides(
    settings: Settings, environ: Mapping[str, str], policy: ValidationPolicy
) -> list[ValidationIssue]:
    if not is_production(settings, policy):
        return []

    return [
        _warning(
            IssueCode.MISSING_PRODUCTION_OVERRIDE,
            f"{name} environment variable not set, using default",
        )
        for name in policy.production_override_env_vars
        if not environ.get(name)
    ]


def _check_port(label: str, raw: str, policy: ValidationPolicy) -> list[ValidationIssue]:
    try:
        port = int(raw)
    except (TypeError, ValueError):
        return [_error(IssueCode.INVALID_PORT, f"{label} is not a valid number: {raw!r}")]

    if port < policy.min_port or port > policy.max_port:
        return [
            _error(
                IssueCode.PORT_OUT_OF_RANGE,
                f"{label} must be between {policy.min_port} and {policy.max_port}, got: {port}",
            )
        ]
    return []


def _check_ports(settings: Settings, policy: ValidationPolicy) -> list[ValidationIssue]:
    return _check_port("Server port", settings.server_port, policy) + _check_port(
        "Management port", settings.management_port, policy
    )


def _check_health_thresholds(settings: Settings) -> list[ValidationIssue]:
    health = settings.app.health
    if health.memory_threshold >= health.disk_threshold:
        return [
            _warning(
                IssueCode.THRESHOLD_ORDER,
                f"Memory threshold ({health.memory_threshold}) is higher than or equal to "
                f"disk threshold ({health.disk_threshold}). This might cause unexpected behavior.",
            )
        ]
    return []


def _check_external_service(settings: Settings, policy: ValidationPolicy) -> list[ValidationIssue]:
    ext = settings.app.external_service
    total_wait_ms = ext.timeout * ext.retry_attempts
    if total_wait_ms > policy.max_total_wait_ms:
        return [
            _warning(
                IssueCode.EXCESSIVE_WAIT,
                f"Total potential wait time for external service calls is {total_wait_ms}ms "
                f"({total_wait_ms // 1000}s). Consider reducing timeout or retry attempts.",
            )
        ]
    return []


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def validate_configuration(
    settings: Settings,
    environ: Mapping[str, str] | None = None,
    policy: ValidationPolicy | None = None,
) -> list[ValidationIssue]:
    """
    Run all configuration checks and return every finding (errors and warnings).
    Does not log and does not raise.
    """
    env = os.environ if environ is None else environ
    pol = policy or ValidationPolicy()

    issues: list[ValidationIssue] = []
    issues.extend(_check_production_overrides(settings, env, pol))
    issues.extend(_check_ports(settings, pol))
    issues.extend(_check_health_thresholds(settings))
    issues.extend(_check_external_service(settings, pol))
    return issues


def enforce_configuration(
    settings: Settings,
    environ: Mapping[str, str] | None = None,
    policy: ValidationPolicy | None = None,
) -> list[ValidationIssue]:
    """
    Validate and act on the result: log warnings, raise on any error.

    Returns the warnings when startup may proceed.

    Raises:
        ConfigurationValidationError if at least one ERROR finding exists.
    """
    logger.info("Starting configuration validation...")

    issues = validate_configuration(settings, environ, policy)
    warnings = [i for i in issues if not i.is_error]
    errors = [i for i in issues if i.is_error]

    for w in warnings:
        logger.warning("%s", w.message)

    if errors:
        message = "Configuration validation failed:\n" + "\n".join(e.message for e in errors)
        logger.error(message)
        raise ConfigurationValidationError(message, issues)

    logger.info("Configuration validation completed successfully (warnings=%d)", len(warnings))
    return warnings


def log_configuration_summary(settings: Settings) -> None:
    app = settings.app
    logger.info("Application Configuration:")
    logger.info("  Version: %s", app.version)
    logger.info("  Environment: %s", app.environment)
    logger.info("  Debug Enabled: %s", app.debug_enabled)
    logger.info("  Active Profiles: %s", ",".join(settings.profiles))
    logger.info("  Server Port: %s", settings.server_port)
    logger.info("  Management Port: %s", settings.management_port)
    logger.info(
        "  Health Thresholds - Memory: %s%%, Disk: %s%%",
        app.health.memory_threshold,
        app.health.disk_threshold,
    )
    logger.info(
        "  External Service - Timeout: %sms, Retry Attempts: %s",
        app.external_service.timeout,
        app.external_service.retry_attempts,
    )
