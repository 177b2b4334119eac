"""Shared HTTP client utilities: reusable httpx client for the reporter API."""

import logging
import uuid

import httpx

from reporter.config import get_settings

logger = logging.getLogger(__name__)

# Module-level shared client (created lazily, lives for the process lifetime)
_client: httpx.AsyncClient | None = None


def get_shared_client() -> httpx.AsyncClient:
    """Return a shared httpx.AsyncClient, creating it on first call."""
    global _client
    if _client is None or _client.is_closed:
        _client = httpx.AsyncClient(timeout=get_settings().client_timeout)
    return _client


async def close_shared_client() -> None:
    """Close the shared client, if one was created."""
    global _client
    if _client is not None and not _client.is_closed:
        await _client.aclose()
    _client = None


def api_headers(request_id: str | None = None) -> dict[str, str]:
    """Build standard reporter API request headers.

    A fresh X-Request-ID is generated per call unless one is supplied, so
    client and server logs can be matched up.
    """
    return {
        "Accept": "application/json",
        "Content-Type": "application/json",
        "X-Request-ID": request_id or str(uuid.uuid4()),
    }
