"""Shared HTTP client configuration."""

import httpx

from relay_rpc._version import __version__

DEFAULT_TIMEOUT = 30.0


def create_http_client(
    *,
    timeout: float = DEFAULT_TIMEOUT,
    base_url: str | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create configured async HTTP client.

    Args:
        timeout: Request timeout in seconds.
        base_url: Optional base URL for all requests.
        transport: Optional transport, e.g. httpx.ASGITransport for in-process apps.

    Returns:
        Configured httpx.AsyncClient instance.
    """
    return httpx.AsyncClient(
        timeout=timeout,
        base_url=base_url or "",
        headers={"User-Agent": f"relay-rpc/{__version__}"},
        transport=transport,
    )
