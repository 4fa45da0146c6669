"""
hello_service.api.contracts.api_tags

Purpose:
    Central definition of FastAPI tags to avoid scattered string literals.

Created:
    2026-10-12
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ApiTags:
    hello: str = "hello"
    health: str = "health"
    management: str = "management"
