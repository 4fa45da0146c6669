"""
hello_service.api.errors

Purpose:
    Internal exception types.
    - ConfigurationValidationError: fatal startup error; never caught or retried by the service.
    - TaskRejectedError: raised by the bounded worker pool when it is saturated.

Created:
    2026-10-12
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from hello_service.api.validation.configuration_validator import ValidationIssue


class ConfigurationValidationError(RuntimeError):
    def __init__(self, message: str, issues: Sequence["ValidationIssue"] = ()) -> None:
        super().__init__(message)
        self.message = message
        self.issues: tuple["ValidationIssue", ...] = tuple(issues)


class TaskRejectedError(RuntimeError):
    def __init__(self, pool_name: str, capacity: int) -> None:
        super().__init__(f"{pool_name}: task rejected, pool saturated (capacity={capacity})")
        self.pool_name = pool_name
        self.capacity = capacity
