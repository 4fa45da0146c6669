# hello_service/api/contracts/api_paths.py
"""
hello_service.api.contracts.api_paths

Purpose:
    Central definition of API route paths.
    Keeps routing stable and prevents string duplication.

Created:
    2026-10-12
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ApiPaths:
    hello: str = "/hello"
    health: str = "/health"
    info: str = "/info"
    metrics: str = "/metrics"
