"""Transport-independent RPC client and call projection."""

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from typing import Any


class ProviderProxy:
    """Call projection of one remote provider.

    Every attribute (or item) lookup yields an async callable bound to
    (provider, name). Calling it sends the request through the owning client:

        foo = client.get("foo")
        value = await foo.get_foo()
        value = await foo["set-foo"]("bar")

    Nothing is checked locally; unknown names fail on the server. Names
    starting with an underscore are only reachable through item access.
    """

    def __init__(self, client: "RpcClient", provider: str) -> None:
        self._client = client
        self._provider = provider

    def __getattr__(self, name: str) -> Callable[..., Awaitable[Any]]:
        # Private and dunder names stay local so copy/pickle protocols work.
        if name.startswith("_"):
            raise AttributeError(name)
        return self[name]

    def __getitem__(self, name: str) -> Callable[..., Awaitable[Any]]:
        client = self._client
        provider = self._provider

        async def call(*args: Any) -> Any:
            return await client.handle(provider, name, list(args))

        call.__name__ = name
        call.__qualname__ = f"{provider}.{name}"
        return call

    def __repr__(self) -> str:
        return f"<ProviderProxy {self._provider!r} via {type(self._client).__name__}>"


class RpcClient(ABC):
    """Calls remote procedures as if they were local async functions.

    Subclasses implement `handle` to carry a call over their transport.
    """

    def get(self, provider: str) -> ProviderProxy:
        """Get a call projection for a provider.

        Args:
            provider: Name of the provider as registered on the server's router.

        Returns:
            A new ProviderProxy. Projections hold no state besides the names.
        """
        return ProviderProxy(self, provider)

    @abstractmethod
    async def handle(self, provider: str, procedure: str, args: list[Any]) -> Any:
        """Send one call and return its result.

        Args:
            provider: Name of the provider.
            procedure: Name of the procedure on the provider.
            args: Positional arguments, which must be JSON-serializable.

        Returns:
            The decoded result of the remote procedure.
        """
