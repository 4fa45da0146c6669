"""
hello_service.api.main

Purpose:
    FastAPI application entrypoint for hello-service.

Startup sequence (lifespan):
    1. Log the configuration summary.
    2. Run startup configuration validation. Any ERROR aborts startup; uvicorn runs
       lifespan startup before binding its socket, so no traffic is ever accepted.
    3. Mark the app as ready.

Shutdown:
    Drain the bounded worker pool.

Created:
    2026-10-12
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from starlette.concurrency import run_in_threadpool

from hello_service.api.concurrency.worker_pool import AdmissionGate, BoundedWorkerPool
from hello_service.api.contracts.api_paths import ApiPaths
from hello_service.api.contracts.correlation_id_policy import CorrelationIdPolicy
from hello_service.api.error_handlers import register_error_handlers
from hello_service.api.logging.logging_config import configure_logging
from hello_service.api.middleware.admission import AdmissionControlMiddleware
from hello_service.api.middleware.correlation_id import CorrelationIdMiddleware
from hello_service.api.middleware.metrics import MetricsMiddleware
from hello_service.api.observability.metrics import configure_service_info
from hello_service.api.routes import api_router
from hello_service.api.settings import Settings, get_settings
from hello_service.api.validation.configuration_validator import (
    enforce_configuration,
    log_configuration_summary,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings: Settings = app.state.settings

    log_configuration_summary(settings)
    enforce_configuration(settings)
    app.state.config_validated = True
    logger.info("Application '%s' is ready", settings.service_name)

    try:
        yield
    finally:
        logger.info("Application is shutting down gracefully...")
        await run_in_threadpool(app.state.worker_pool.shutdown, wait=True)
        logger.info("Graceful shutdown completed")


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()

    configure_logging(settings.log_level)
    configure_service_info(settings.service_name, settings.app.environment, settings.app.version)

    app = FastAPI(
        title=settings.service_name,
        version=settings.app.version,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.config_validated = False
    app.state.worker_pool = BoundedWorkerPool.from_config(settings.worker_pool)
    app.state.admission_gate = AdmissionGate(settings.worker_pool.capacity)

    # Starlette runs the last-added middleware first: correlation id is outermost so
    # rejections and metrics already see a bound id.
    app.add_middleware(
        AdmissionControlMiddleware,
        gate=app.state.admission_gate,
        exempt_paths=frozenset({ApiPaths().health}),
    )
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(CorrelationIdMiddleware, policy=CorrelationIdPolicy())

    register_error_handlers(app)

    app.include_router(api_router)

    return app
