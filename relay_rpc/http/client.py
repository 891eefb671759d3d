"""HTTP binding of the RPC client, built on httpx."""

import json
import os
from typing import Any

import httpx

from relay_rpc._internal.http import create_http_client
from relay_rpc.client import RpcClient
from relay_rpc.exceptions import RpcConfigError, RpcRemoteError, RpcTransportError
from relay_rpc.http.models import JSON_MEDIA_TYPE, RpcRequest
from relay_rpc.types import JsonValue

DEFAULT_TIMEOUT_MS = 30000


class HttpRpcClient(RpcClient):
    """RPC client sending each call as a JSON POST request.

    Every call opens its own HTTP client, so calls share no connection state.

    Use `HttpRpcClient.from_env()` to create a client from environment variables.
    """

    def __init__(
        self,
        url: str | httpx.URL,
        *,
        timeout_ms: int = DEFAULT_TIMEOUT_MS,
        debug: bool = False,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the HTTP client.

        Args:
            url: The URL of the server's RPC endpoint.
            timeout_ms: Request timeout in milliseconds.
            debug: Enable debug logging to stderr.
            transport: Optional httpx transport, e.g. httpx.ASGITransport to
                call an in-process ASGI app.
        """
        self._url = url
        self._timeout_ms = timeout_ms
        self._debug = debug
        self._transport = transport

    @classmethod
    def from_env(cls) -> "HttpRpcClient":
        """Create an HTTP client from environment variables.

        Required environment variables:
            RELAY_RPC_URL: The server's RPC endpoint URL.

        Optional environment variables:
            RELAY_RPC_TIMEOUT_MS: Request timeout in milliseconds.
            RELAY_RPC_CLIENT_DEBUG: Set to "1" to enable debug logging.

        Returns:
            A configured HttpRpcClient.

        Raises:
            RpcConfigError: If RELAY_RPC_URL is not set.
        """
        url = os.environ.get("RELAY_RPC_URL")
        if not url:
            raise RpcConfigError("RELAY_RPC_URL is not set")

        debug = os.environ.get("RELAY_RPC_CLIENT_DEBUG", "") == "1"
        timeout_ms = int(os.environ.get("RELAY_RPC_TIMEOUT_MS", str(DEFAULT_TIMEOUT_MS)))

        return cls(url, timeout_ms=timeout_ms, debug=debug)

    @property
    def url(self) -> str | httpx.URL:
        """The RPC endpoint this client posts to."""
        return self._url

    def _log_debug(self, message: str) -> None:
        """Log a debug message to stderr if debug mode is enabled."""
        if self._debug:
            import sys

            print(f"[relay-rpc:http-client] {message}", file=sys.stderr)

    async def handle(self, provider: str, procedure: str, args: list[Any]) -> JsonValue:
        """Send a call to the server via HTTP POST.

        Args:
            provider: Name of the provider.
            procedure: Name of the procedure on the provider.
            args: Positional arguments, which must be JSON-serializable.
                Tuples are sent as JSON arrays.

        Returns:
            The decoded JSON result of the procedure.

        Raises:
            RpcRemoteError: If the server answered with a non-2xx status.
            RpcTransportError: If the args cannot be encoded as JSON, or the
                request could not be sent or answered.
        """
        try:
            envelope = RpcRequest(provider=provider, procedure=procedure, args=args)
            content = json.dumps(envelope.model_dump(), allow_nan=False)
        except (TypeError, ValueError) as e:
            self._log_debug(f"Could not encode call to {provider}.{procedure}: {e}")
            raise RpcTransportError(
                f"Arguments for {provider}.{procedure} are not JSON-serializable: {e}"
            ) from e

        self._log_debug(f"Calling {provider}.{procedure}")

        try:
            async with create_http_client(
                timeout=self._timeout_ms / 1000,
                transport=self._transport,
            ) as client:
                response = await client.post(
                    self._url,
                    content=content,
                    headers={"Content-Type": JSON_MEDIA_TYPE},
                )
        except httpx.TimeoutException as e:
            self._log_debug(f"Call to {provider}.{procedure} timed out")
            raise RpcTransportError(f"Request to {self._url} timed out") from e
        except httpx.HTTPError as e:
            self._log_debug(f"Call to {provider}.{procedure} failed: {e}")
            raise RpcTransportError(f"Request to {self._url} failed: {e}") from e

        if response.status_code >= 200 and response.status_code < 300:
            try:
                return response.json()
            except ValueError as e:
                raise RpcTransportError(f"Response from {self._url} is not valid JSON") from e

        self._log_debug(f"Call failed with status {response.status_code}")
        raise _remote_error(response)


def _remote_error(response: httpx.Response) -> RpcRemoteError:
    """Build the error raised for a non-2xx reply."""
    try:
        data = response.json()
    except ValueError:
        data = None

    if not isinstance(data, dict):
        return RpcRemoteError(
            response.text or f"HTTP {response.status_code}",
            name="HTTPError",
            status_code=response.status_code,
        )

    return RpcRemoteError(
        str(data.get("error", f"HTTP {response.status_code}")),
        name=data.get("name", "Error"),
        status_code=response.status_code,
        stack=data.get("stack"),
        cause=data.get("cause"),
    )
