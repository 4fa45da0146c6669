"""Prometheus metrics for hello-service.

Exposes:
- Service info carrying the common tags (application, environment, version, deployment)
- HTTP request throughput and latency
- Rejections from request admission and the worker pool

Usage:
    from hello_service.api.observability.metrics import record_request, record_rejection

    record_request(method="GET", route="/hello", status=200, latency_seconds=0.002)
    record_rejection("task")
"""

from __future__ import annotations

import logging

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    Info,
    generate_latest,
)

from hello_service.shared.models.enums import Deployment

logger = logging.getLogger(__name__)

# Dedicated registry so repeated app construction in tests doesn't hit the default one.
REGISTRY = CollectorRegistry()

SERVICE_INFO = Info(
    "hello_service",
    "Static service metadata (common tags)",
    registry=REGISTRY,
)

HTTP_REQUESTS_TOTAL = Counter(
    "hello_service_http_requests_total",
    "Total number of HTTP requests processed",
    ["method", "route", "status"],
    registry=REGISTRY,
)

HTTP_REQUEST_LATENCY = Histogram(
    "hello_service_http_request_duration_seconds",
    "HTTP request latency in seconds",
    ["method", "route"],
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
    registry=REGISTRY,
)

REJECTED_TOTAL = Counter(
    "hello_service_rejected_total",
    "Work rejected because a bounded pool was saturated",
    ["kind"],
    registry=REGISTRY,
)

_CONTAINERIZED_ENVIRONMENTS = frozenset({"kubernetes", "prod"})


def deployment_for(environment: str) -> Deployment:
    if environment.strip().lower() in _CONTAINERIZED_ENVIRONMENTS:
        return Deployment.CONTAINERIZED
    return Deployment.LOCAL


def configure_service_info(application: str, environment: str, version: str) -> None:
    """Publish the common tags once per application instance."""
    SERVICE_INFO.info(
        {
            "application": application,
            "environment": environment,
            "version": version,
            "deployment": deployment_for(environment).value,
        }
    )


def record_request(method: str, route: str, status: int, latency_seconds: float | None = None) -> None:
    HTTP_REQUESTS_TOTAL.labels(method=method, route=route, status=str(status)).inc()

    if latency_seconds is not None:
        HTTP_REQUEST_LATENCY.labels(method=method, route=route).observe(latency_seconds)


def record_rejection(kind: str) -> None:
    """kind: "request" (admission middleware) or "task" (worker pool)."""
    REJECTED_TOTAL.labels(kind=kind).inc()


def get_metrics() -> bytes:
    return generate_latest(REGISTRY)


def get_metrics_content_type() -> str:
    return CONTENT_TYPE_LATEST
