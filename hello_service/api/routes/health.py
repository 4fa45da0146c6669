"""
hello_service.api.routes.health

Purpose:
    Health and info endpoints for container/orchestrator checks.
    Only reachable once startup configuration validation has passed.

Created:
    2026-10-12
"""

from __future__ import annotations

from fastapi import APIRouter, Request

from hello_service.api.contracts.api_paths import ApiPaths
from hello_service.api.contracts.api_tags import ApiTags
from hello_service.api.settings import Settings

_paths = ApiPaths()
_tags = ApiTags()

router = APIRouter(tags=[_tags.health])


@router.get(_paths.health)
def health() -> dict:
    return {"status": "UP"}


@router.get(_paths.info)
def info(request: Request) -> dict:
    settings: Settings = request.app.state.settings
    # Keep this as stable contract; safe for clients to depend on.
    return {
        "service": settings.service_name,
        "version": settings.app.version,
        "environment": settings.app.environment,
        "profiles": list(settings.profiles),
        "debug_enabled": settings.app.debug_enabled,
    }
