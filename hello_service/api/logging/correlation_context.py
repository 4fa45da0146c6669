"""
hello_service.api.logging.correlation_context

Purpose:
    Request-scoped correlation-id storage using contextvars.
    Enables correlation_id propagation into logs without passing the request around.

Notes:
    - correlation_scope() binds an id and always resets the variable on exit
      (normal return, exception, cancellation), so nothing leaks into the next unit
      of work that reuses the same thread or task.

Created:
    2026-10-12
"""

from __future__ import annotations

import contextvars
from contextlib import contextmanager
from typing import Iterator

correlation_id_ctx_var: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "correlation_id",
    default=None,
)


def get_correlation_id() -> str | None:
    return correlation_id_ctx_var.get()


@contextmanager
def correlation_scope(correlation_id: str) -> Iterator[str]:
    token = correlation_id_ctx_var.set(correlation_id)
    try:
        yield correlation_id
    finally:
        correlation_id_ctx_var.reset(token)
