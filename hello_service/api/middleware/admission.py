"""
hello_service.api.middleware.admission

Purpose:
    Request admission control. Each in-flight request holds one AdmissionGate slot;
    when all slots are taken the request is rejected immediately with 503 instead of
    being queued.

Notes:
    - Exempt paths (the health endpoint) bypass the gate and never hold a slot, so a
      saturated instance still answers liveness checks.

Created:
    2026-10-13
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from hello_service.api.concurrency.worker_pool import AdmissionGate
from hello_service.api.error_handlers import error_json_response
from hello_service.api.observability.metrics import record_rejection

logger = logging.getLogger(__name__)


class AdmissionControlMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, gate: AdmissionGate, exempt_paths: Iterable[str] = ()) -> None:
        super().__init__(app)
        self._gate = gate
        self._exempt_paths = frozenset(exempt_paths)

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if request.url.path in self._exempt_paths:
            return await call_next(request)

        if not self._gate.try_acquire():
            logger.warning(
                "Request rejected, service saturated (in_flight=%d capacity=%d): %s %s",
                self._gate.in_flight,
                self._gate.capacity,
                request.method,
                request.url.path,
            )
            record_rejection("request")
            return error_json_response(
                request,
                status_code=503,
                message="The service is busy, please retry later",
            )

        try:
            return await call_next(request)
        finally:
            self._gate.release()
