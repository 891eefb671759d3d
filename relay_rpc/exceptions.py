"""Public exceptions for relay-rpc."""

from typing import Any


class RpcError(Exception):
    """Base exception for all relay-rpc errors."""

    @property
    def name(self) -> str:
        """Name of the failure kind, reported alongside the message."""
        return type(self).__name__


class RpcRoutingError(RpcError):
    """Request could not be dispatched to a procedure.

    Raised for malformed requests, unknown providers, unknown procedures and
    targets that are not callable. Transports report it as a client fault.
    """


class RpcRemoteError(RpcError):
    """Failure reported by the remote side of a call."""

    def __init__(
        self,
        message: str,
        *,
        name: str = "Error",
        status_code: int | None = None,
        stack: str | None = None,
        cause: Any = None,
    ) -> None:
        super().__init__(message)
        self._name = name
        self.status_code = status_code
        self.stack = stack
        self.cause = cause

    @property
    def name(self) -> str:
        """Name of the failure as reported by the server."""
        return self._name

    @property
    def is_routing_error(self) -> bool:
        """True when the server rejected the request before dispatching it."""
        return self.status_code is not None and 400 <= self.status_code < 500


class RpcTransportError(RpcError):
    """The transport failed to encode, deliver or decode a call."""


class RpcConfigError(RpcError):
    """Configuration error (missing env vars, invalid config)."""
