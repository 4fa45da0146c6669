"""
hello_service.api.logging.correlation_id_filter

Purpose:
    Logging filter that injects correlation_id from contextvars into log records.

Created:
    2026-10-12
"""

from __future__ import annotations

import logging

from hello_service.api.contracts.correlation_id_policy import CorrelationIdPolicy
from hello_service.api.logging.correlation_context import get_correlation_id

_policy = CorrelationIdPolicy()


class CorrelationIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id() or _policy.log_placeholder
        return True
