"""Shared persistent httpx client for catalog API calls.

A single pooled client keeps the AniList connection warm between requests
instead of paying a TLS handshake per GraphQL query.
"""

import httpx

from src.constants import API_TIMEOUT_EXTERNAL, HTTPX_TIMEOUT

_POOL_LIMITS = httpx.Limits(
    max_connections=10,
    max_keepalive_connections=5,
    keepalive_expiry=30,
)

_catalog_client: httpx.AsyncClient | None = None


def get_catalog_client() -> httpx.AsyncClient:
    """Get persistent httpx client for AniList calls."""
    global _catalog_client
    if _catalog_client is None or _catalog_client.is_closed:
        _catalog_client = httpx.AsyncClient(
            timeout=httpx.Timeout(API_TIMEOUT_EXTERNAL, connect=HTTPX_TIMEOUT),
            limits=_POOL_LIMITS,
            headers={"Accept": "application/json", "Content-Type": "application/json"},
        )
    return _catalog_client


async def close_all_clients() -> None:
    """Close the shared client. Call during shutdown."""
    global _catalog_client
    if _catalog_client is not None:
        await _catalog_client.aclose()
        _catalog_client = None
