"""
tests.api.test_metrics

Purpose:
    Prometheus exposition and common service tags.
"""

from __future__ import annotations

from hello_service.api.observability.metrics import deployment_for
from hello_service.shared.models.enums import Deployment


def test_metrics_endpoint_exposes_request_counters(client) -> None:
    assert client.get("/hello").status_code == 200

    r = client.get("/metrics")
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/plain")
    body = r.text
    assert "hello_service_http_requests_total" in body
    assert 'route="/hello"' in body
    assert "hello_service_http_request_duration_seconds" in body


def test_service_info_carries_common_tags(client_factory, settings_factory) -> None:
    settings = settings_factory(
        service_name="tagged-svc",
        app={"version": "9.9.9", "environment": "kubernetes"},
    )
    with client_factory(settings) as client:
        body = client.get("/metrics").text

    assert 'application="tagged-svc"' in body
    assert 'environment="kubernetes"' in body
    assert 'version="9.9.9"' in body
    assert 'deployment="containerized"' in body


def test_deployment_tag() -> None:
    assert deployment_for("prod") is Deployment.CONTAINERIZED
    assert deployment_for("Kubernetes") is Deployment.CONTAINERIZED
    assert deployment_for("development") is Deployment.LOCAL
