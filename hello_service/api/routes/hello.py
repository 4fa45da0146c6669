"""
hello_service.api.routes.hello

Purpose:
    The service's single business endpoint.

Created:
    2026-10-12
"""

from __future__ import annotations

import logging

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from hello_service.api.contracts.api_paths import ApiPaths
from hello_service.api.contracts.api_tags import ApiTags

logger = logging.getLogger(__name__)

_paths = ApiPaths()
_tags = ApiTags()

router = APIRouter(tags=[_tags.hello])


@router.get(_paths.hello, response_class=PlainTextResponse)
def hello() -> str:
    logger.info("hello: serving greeting")
    return "Hello World"
