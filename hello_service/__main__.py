"""
CLI entrypoint for hello-service.

    python -m hello_service [--host HOST] [--port PORT]

Loads settings, then hands the app to uvicorn. Configuration binding errors exit 1
before anything else happens; validation errors abort uvicorn's lifespan startup,
which exits non-zero without binding the listening socket.
"""

from __future__ import annotations

import argparse
import logging
import sys

import uvicorn

from hello_service.api.errors import ConfigurationValidationError
from hello_service.api.logging.logging_config import configure_logging
from hello_service.api.main import create_app
from hello_service.api.settings import load_settings

logger = logging.getLogger("hello_service.cli")


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="hello_service", description="Run hello-service.")
    p.add_argument("--host", default=None, help="Bind host (overrides SERVER_HOST).")
    p.add_argument("--port", default=None, help="Bind port (overrides SERVER_PORT).")
    return p


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    overrides = {}
    if args.host:
        overrides["server_host"] = args.host
    if args.port:
        overrides["server_port"] = args.port

    try:
        settings = load_settings(**overrides)
    except ConfigurationValidationError as e:
        configure_logging("INFO")
        logger.error("Failed to start application: %s", e.message)
        return 1

    app = create_app(settings)

    # Port is validated in lifespan startup, which uvicorn runs before binding; an
    # unparseable value must not blow up here first.
    try:
        port = int(settings.server_port)
    except ValueError:
        port = 0

    logger.info("Starting '%s' on %s:%s", settings.service_name, settings.server_host, settings.server_port)
    uvicorn.run(
        app,
        host=settings.server_host,
        port=port,
        lifespan="on",
        log_config=None,
        timeout_keep_alive=settings.keep_alive_timeout_s,
        timeout_graceful_shutdown=settings.shutdown_grace_s,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
