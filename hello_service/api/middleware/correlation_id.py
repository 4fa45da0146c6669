"""
hello_service.api.middleware.correlation_id

Purpose:
    Middleware that ensures each request has a correlation id, binds it for logging,
    and echoes it back on the response.

Notes:
    - An incoming X-Correlation-ID is echoed verbatim; absent/blank -> uuid4.
    - The context variable is reset on every exit path (see correlation_scope).
    - This middleware never fails a request on its own account.

Created:
    2026-10-12
"""

from __future__ import annotations

import logging
import uuid
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from hello_service.api.contracts.correlation_id_policy import CorrelationIdPolicy
from hello_service.api.logging.correlation_context import correlation_scope

logger = logging.getLogger(__name__)


def generate_correlation_id(policy: CorrelationIdPolicy | None = None) -> str:
    try:
        return str(uuid.uuid4())
    except Exception:
        fallback = (policy or CorrelationIdPolicy()).fallback_id
        logger.exception("Correlation id generation failed; using %r", fallback)
        return fallback


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, policy: CorrelationIdPolicy | None = None) -> None:
        super().__init__(app)
        self._policy = policy or CorrelationIdPolicy()

    def _resolve(self, request: Request) -> str:
        incoming = request.headers.get(self._policy.header)
        if incoming and incoming.strip():
            return incoming
        return generate_correlation_id(self._policy)

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        policy = self._policy
        correlation_id = self._resolve(request)

        # Attach for handlers and for exception handlers running outside this middleware
        setattr(request.state, policy.state_attr, correlation_id)

        with correlation_scope(correlation_id):
            response: Response = await call_next(request)

            # Echo back for client correlation
            response.headers[policy.header] = correlation_id
            return response
