"""
hello_service.shared.models.enums

Purpose:
    Enumerations shared across service components.

Design Notes:
    - Keep enum string values stable; they show up in logs and test assertions.

Created:
    2026-10-12
"""

from __future__ import annotations

from enum import Enum


class IssueSeverity(str, Enum):
    """
    Severity of a configuration validation finding.

    Notes:
        - ERROR: hard failure; startup is aborted.
        - WARNING: logged only; startup proceeds.
    """

    ERROR = "ERROR"
    WARNING = "WARNING"


class IssueCode(str, Enum):
    MISSING_PRODUCTION_OVERRIDE = "MISSING_PRODUCTION_OVERRIDE"
    INVALID_PORT = "INVALID_PORT"
    PORT_OUT_OF_RANGE = "PORT_OUT_OF_RANGE"
    THRESHOLD_ORDER = "THRESHOLD_ORDER"
    EXCESSIVE_WAIT = "EXCESSIVE_WAIT"


class Deployment(str, Enum):
    CONTAINERIZED = "containerized"
    LOCAL = "local"
