"""
tests.api.test_startup

Purpose:
    Startup sequence: configuration validation runs in the lifespan, before any
    request is served, and hard errors abort startup.
"""

from __future__ import annotations

import importlib
import logging
import threading

import pytest
from fastapi.testclient import TestClient

from hello_service.api.errors import ConfigurationValidationError
from hello_service.api.main import create_app

cli = importlib.import_module("hello_service.__main__")


def test_valid_configuration_marks_app_ready(client) -> None:
    assert client.app.state.config_validated is True


def test_warnings_do_not_block_startup(client_factory, settings_factory, caplog) -> None:
    settings = settings_factory(
        app={"health": {"memory_threshold": 90, "disk_threshold": 80}},
    )
    with caplog.at_level(logging.WARNING):
        with client_factory(settings) as client:
            assert client.app.state.config_validated is True
            assert client.get("/hello").status_code == 200

    assert any("Memory threshold (90)" in rec.getMessage() for rec in caplog.records)


def test_invalid_port_aborts_startup(settings_factory) -> None:
    app = create_app(settings_factory(server_port="70000"))

    with pytest.raises(ConfigurationValidationError) as excinfo:
        with TestClient(app):
            pass

    assert "Server port must be between 1 and 65535, got: 70000" in str(excinfo.value)
    assert app.state.config_validated is False


def test_cli_exits_nonzero_on_binding_error(monkeypatch) -> None:
    monkeypatch.setenv("APP__HEALTH__MEMORY_THRESHOLD", "40")
    calls = []
    monkeypatch.setattr(cli.uvicorn, "run", lambda *a, **kw: calls.append((a, kw)))

    assert cli.main(["--port", "9000"]) == 1
    assert calls == []


def test_cli_hands_app_to_uvicorn(monkeypatch) -> None:
    calls = []
    monkeypatch.setattr(cli.uvicorn, "run", lambda *a, **kw: calls.append((a, kw)))

    assert cli.main(["--host", "127.0.0.1", "--port", "9001"]) == 0

    (args, kwargs), = calls
    assert kwargs["host"] == "127.0.0.1"
    assert kwargs["port"] == 9001
    assert kwargs["lifespan"] == "on"
    assert args[0].state.settings.server_port == "9001"


def test_shutdown_drains_worker_pool(client_factory) -> None:
    release = threading.Event()

    with client_factory() as client:
        pool = client.app.state.worker_pool
        future = pool.submit(release.wait, 5)
        release.set()

    assert future.done()
    assert future.result() is True
    with pytest.raises(RuntimeError):
        pool.submit(lambda: None)
