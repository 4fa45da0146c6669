"""
hello_service.api.error_handlers

Purpose:
    Register global exception handlers to return stable ErrorResponse objects.
    Ensures correlation_id is always included (body + X-Correlation-ID header).

Notes:
    - Handlers for Exception run in Starlette's outermost ServerErrorMiddleware, i.e.
      after CorrelationIdMiddleware has already left its scope. The id is therefore
      read from request.state first, then from the context variable.
    - Exception details are logged server-side only; clients get a generic message.

Created:
    2026-10-12
"""

from __future__ import annotations

import logging
import re
from contextlib import nullcontext
from datetime import datetime
from http import HTTPStatus
from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from hello_service.api.contracts.correlation_id_policy import CorrelationIdPolicy
from hello_service.api.contracts.error_contract import ErrorResponse
from hello_service.api.logging.correlation_context import correlation_scope, get_correlation_id

logger = logging.getLogger(__name__)

_policy = CorrelationIdPolicy()

_GENERIC_500_MESSAGE = "An unexpected error occurred while processing your request"


def _get_correlation_id(request: Request) -> str | None:
    cid = getattr(getattr(request, "state", None), _policy.state_attr, None)
    if isinstance(cid, str) and cid:
        return cid

    cid2 = get_correlation_id()
    if isinstance(cid2, str) and cid2:
        return cid2

    return None


def _reason_phrase(status_code: int) -> str:
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return "Error"


def error_json_response(
    request: Request,
    *,
    status_code: int,
    message: str,
    details: dict[str, Any] | None = None,
) -> JSONResponse:
    cid = _get_correlation_id(request)
    payload = ErrorResponse(
        timestamp=datetime.now().isoformat(timespec="milliseconds"),
        status=status_code,
        error=_reason_phrase(status_code),
        message=message,
        path=request.url.path,
        correlation_id=cid,
        details=details,
    )
    headers = {_policy.header: cid} if cid else None
    return JSONResponse(
        status_code=status_code,
        content=payload.model_dump(exclude_none=True),
        headers=headers,
    )


def _clean_validation_errors(errors: Any) -> Any:
    """
    Clean Pydantic/FastAPI validation errors for stable client-facing responses.

    - Strip "Value error, " prefix
    - Rewrite missing required into "Missing required field: <field>."
    - Drop ctx entirely for minimal/stable payloads
    """
    if not isinstance(errors, list):
        return errors

    for err in errors:
        if not isinstance(err, dict):
            continue

        msg = err.get("msg")
        if isinstance(msg, str):
            err["msg"] = re.sub(r"^Value error,\s*", "", msg)

        loc = err.get("loc", [])
        field_name = loc[-1] if isinstance(loc, list) and len(loc) >= 2 else None
        if err.get("type") == "missing" and field_name:
            err["msg"] = f"Missing required field: {field_name}."

        err.pop("ctx", None)

    return errors


def register_error_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers on the FastAPI app.
    """

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        safe_errors = _clean_validation_errors(jsonable_encoder(exc.errors()))
        logger.warning("Request validation failed for %s", request.url.path)
        return error_json_response(
            request,
            status_code=422,
            message="Request validation failed",
            details={"errors": safe_errors},
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        if exc.status_code == 404:
            logger.warning("Resource not found: %s", request.url.path)
            message = "The requested resource was not found"
        else:
            logger.warning("HTTP %s on %s: %s", exc.status_code, request.url.path, exc.detail)
            message = str(exc.detail)
        return error_json_response(request, status_code=exc.status_code, message=message)

    @app.exception_handler(ValidationError)
    async def handle_internal_validation_error(
        request: Request, exc: ValidationError
    ) -> JSONResponse:
        # pydantic's ValidationError subclasses ValueError; a model failing to build
        # inside a handler is a server fault, not a bad request.
        logger.error("Internal model validation failed on %s", request.url.path, exc_info=exc)
        return error_json_response(request, status_code=500, message=_GENERIC_500_MESSAGE)

    @app.exception_handler(ValueError)
    async def handle_bad_request(request: Request, exc: ValueError) -> JSONResponse:
        logger.warning("Bad request on %s: %s", request.url.path, exc)
        return error_json_response(request, status_code=400, message=str(exc))

    @app.exception_handler(Exception)
    async def handle_unhandled_error(request: Request, exc: Exception) -> JSONResponse:
        cid = _get_correlation_id(request)
        # Runs after the middleware scope has been reset; rebind so the log filter sees the id.
        with correlation_scope(cid) if cid else nullcontext():
            logger.error(
                "Unhandled exception in API request (correlation_id=%s)",
                cid,
                exc_info=exc,
            )
        return error_json_response(request, status_code=500, message=_GENERIC_500_MESSAGE)
