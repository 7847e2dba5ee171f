"""httpx helpers shared by publishers and the token refresher."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

import httpx


@asynccontextmanager
async def client_session(
    client: httpx.AsyncClient | None,
    timeout: float,
) -> AsyncIterator[httpx.AsyncClient]:
    """Yield the injected client, or a short-lived one closed on exit."""
    if client is not None:
        yield client
        return

    async with httpx.AsyncClient(timeout=timeout, follow_redirects=True) as session:
        yield session


def read_json(response: httpx.Response) -> dict[str, Any]:
    """Decode a JSON object body, returning {} for empty or non-JSON bodies."""
    if not response.content:
        return {}
    try:
        data = response.json()
    except ValueError:
        return {}
    if isinstance(data, dict):
        return data
    return {"data": data}
