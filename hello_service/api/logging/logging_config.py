"""
hello_service.api.logging.logging_config

Purpose:
    Central logging configuration for the service.
    Ensures correlation_id is present in logs (including uvicorn.access and uvicorn.error).

Created:
    2026-10-12
"""

from __future__ import annotations

import logging

from hello_service.api.logging.correlation_id_filter import CorrelationIdFilter

LOG_FORMAT = (
    "%(asctime)s | %(levelname)s | correlation_id=%(correlation_id)s | %(name)s | %(message)s"
)

# Marks the handler we install so repeated create_app() calls (tests) don't stack handlers.
_HANDLER_NAME = "hello_service.console"


def _resolve_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def _make_handler(level: int) -> logging.Handler:
    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setLevel(level)

    formatter = logging.Formatter(fmt=LOG_FORMAT)
    handler.setFormatter(formatter)
    handler.addFilter(CorrelationIdFilter())
    return handler


def _configure_logger(
    logger_name: str, handler: logging.Handler, level: int, *, clear_handlers: bool
) -> None:
    logger = logging.getLogger(logger_name)
    logger.setLevel(level)

    if clear_handlers:
        logger.handlers.clear()

    logger.addHandler(handler)
    logger.propagate = False


def configure_logging(level: str | int = "INFO") -> None:
    lvl = _resolve_level(level)
    handler = _make_handler(lvl)

    # Root/app logs (don't clear foreign root handlers; only replace our own)
    root = logging.getLogger()
    root.setLevel(lvl)
    for existing in list(root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            root.removeHandler(existing)
    root.addHandler(handler)

    # Uvicorn uses these loggers; clear their handlers so our formatter/filter wins.
    _configure_logger("uvicorn", handler, lvl, clear_handlers=True)
    _configure_logger("uvicorn.error", handler, lvl, clear_handlers=True)
    _configure_logger("uvicorn.access", handler, lvl, clear_handlers=True)
