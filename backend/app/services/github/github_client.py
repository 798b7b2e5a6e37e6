"""Upstream HTTP client factory."""

from __future__ import annotations

import httpx

from app.config import Settings


def create_upstream_client(
    config: Settings, transport: httpx.AsyncBaseTransport | None = None
) -> httpx.AsyncClient:
    """
    Build the application-wide client used for every upstream lookup.

    Redirects are followed so renamed repositories resolve. ``transport`` lets
    tests substitute the upstream with ``httpx.MockTransport``.
    """
    return httpx.AsyncClient(
        timeout=config.UPSTREAM_TIMEOUT_SECONDS,
        follow_redirects=True,
        transport=transport,
    )
