"""
hello_service.api.middleware.metrics

Purpose:
    Records per-request Prometheus metrics (count + latency), labelled by route template.

Created:
    2026-10-13
"""

from __future__ import annotations

import time
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from hello_service.api.observability.metrics import record_request


def _route_label(request: Request) -> str:
    # Use the route template, not the raw path, to keep label cardinality bounded.
    route = request.scope.get("route")
    path = getattr(route, "path", None)
    return path if isinstance(path, str) else "<unmatched>"


class MetricsMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        started = time.perf_counter()
        status = 500
        try:
            response: Response = await call_next(request)
            status = response.status_code
            return response
        finally:
            record_request(
                method=request.method,
                route=_route_label(request),
                status=status,
                latency_seconds=time.perf_counter() - started,
            )
