"""
tests.api.conftest

Shared pytest fixtures for API tests.
"""

from __future__ import annotations

from typing import Any, Iterator

import pytest
from fastapi.testclient import TestClient

from hello_service.api.main import create_app
from hello_service.api.settings import Settings, load_settings


@pytest.fixture()
def settings_factory():
    """
    Build Settings without reading a local .env file.
    Keyword overrides are passed straight to the settings model.
    """

    def _make(**overrides: Any) -> Settings:
        return load_settings(_env_file=None, **overrides)

    return _make


@pytest.fixture()
def client_factory(settings_factory):
    """
    Factory fixture that creates a fresh TestClient.

    IMPORTANT:
        The returned client has NOT run the app lifespan; use it as a context
        manager (`with client_factory() as c:`) when startup validation matters.
    """

    def _make(settings: Settings | None = None, **kwargs: Any) -> TestClient:
        app = create_app(settings or settings_factory())
        return TestClient(app, **kwargs)

    return _make


@pytest.fixture()
def client(client_factory) -> Iterator[TestClient]:
    """Started client (lifespan executed) with default settings."""
    with client_factory() as c:
        yield c
