"""Transport-independent RPC router."""

import inspect
from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from typing import Any, Generic, TypeVar

from relay_rpc.exceptions import RpcRoutingError
from relay_rpc.types import Provider, ProviderTable

RequestT = TypeVar("RequestT")
ResponseT = TypeVar("ResponseT")

_MISSING = object()


class RpcRouter(ABC, Generic[RequestT, ResponseT]):
    """Dispatches calls to the procedures of a provider table.

    Subclasses bind the router to a transport by implementing `handle`, which
    turns an inbound request into (provider, procedure, args), calls `invoke`
    and turns the outcome into a response.

    The provider table is lent to the router and is never mutated by it.
    """

    def __init__(self, providers: ProviderTable, *, debug: bool = False) -> None:
        """Initialize the router.

        Args:
            providers: Mapping of provider name to provider. A provider is a
                mapping of procedure names to callables, or an object whose
                public attributes are its procedures.
            debug: Enable debug logging to stderr.
        """
        self._providers = providers
        self._debug = debug

    def _log_debug(self, message: str) -> None:
        """Log a debug message to stderr if debug mode is enabled."""
        if self._debug:
            import sys

            print(f"[relay-rpc:router] {message}", file=sys.stderr)

    async def invoke(self, provider: str, procedure: str, args: Sequence[Any]) -> Any:
        """Invoke a procedure of a provider with positional arguments.

        Args:
            provider: Name of the provider in the provider table.
            procedure: Name of the procedure on that provider.
            args: Positional arguments for the procedure. May be empty, not None.

        Returns:
            The procedure's result, awaited if the procedure returned an awaitable.

        Raises:
            RpcRoutingError: If the request is malformed or cannot be resolved
                to a callable procedure.

        Exceptions raised by the procedure itself propagate unchanged.
        """
        if (
            not isinstance(provider, str)
            or not provider
            or not isinstance(procedure, str)
            or not procedure
            or not isinstance(args, (list, tuple))
        ):
            raise RpcRoutingError(
                f"Invalid request: provider={provider}, procedure={procedure}, args={args}"
            )

        provider_instance = self._providers.get(provider)
        if provider_instance is None:
            raise RpcRoutingError(f"Provider with name {provider} not found")

        target = _lookup(provider_instance, procedure)
        if target is _MISSING:
            raise RpcRoutingError(f"Procedure {procedure} not found on provider {provider}")

        if not callable(target):
            raise RpcRoutingError(
                f"Property {procedure} is not a function on provider {provider} "
                "so it cannot be called"
            )

        self._log_debug(f"Invoking {provider}.{procedure} with {len(args)} argument(s)")
        result = target(*args)
        if inspect.isawaitable(result):
            result = await result
        return result

    @abstractmethod
    async def handle(self, request: RequestT) -> ResponseT:
        """Handle one inbound transport request and produce its response."""


def _lookup(provider: Provider, name: str) -> Any:
    """Find a procedure entry on a provider, or _MISSING."""
    if isinstance(provider, Mapping):
        return provider.get(name, _MISSING)
    if name.startswith("_"):
        return _MISSING
    return getattr(provider, name, _MISSING)
