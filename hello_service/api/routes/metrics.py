"""
hello_service.api.routes.metrics

Purpose:
    Prometheus scrape endpoint.

Created:
    2026-10-13
"""

from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import Response

from hello_service.api.contracts.api_paths import ApiPaths
from hello_service.api.contracts.api_tags import ApiTags
from hello_service.api.observability.metrics import get_metrics, get_metrics_content_type

_paths = ApiPaths()
_tags = ApiTags()

router = APIRouter(tags=[_tags.management])


@router.get(_paths.metrics)
def metrics() -> Response:
    return Response(content=get_metrics(), media_type=get_metrics_content_type())
