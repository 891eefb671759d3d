"""relay-rpc: call server-side procedures as local async functions.

Public API:
    RpcRouter - Transport-independent dispatch of calls to providers
    RpcClient - Transport-independent call projection of providers
    HttpRpcRouter / HttpRpcClient - JSON-over-HTTP bindings

Example:
    router = HttpRpcRouter({"foo": FooProvider()})
    app = router.asgi_app()

    client = HttpRpcClient("http://127.0.0.1:8000/rpc")
    foo = client.get("foo")
    await foo.set_foo("bar")
"""

from relay_rpc._version import __version__
from relay_rpc.client import ProviderProxy, RpcClient
from relay_rpc.exceptions import (
    RpcConfigError,
    RpcError,
    RpcRemoteError,
    RpcRoutingError,
    RpcTransportError,
)
from relay_rpc.http import HttpRpcClient, HttpRpcRouter
from relay_rpc.router import RpcRouter

__all__ = [
    "__version__",
    "RpcRouter",
    "RpcClient",
    "ProviderProxy",
    "HttpRpcRouter",
    "HttpRpcClient",
    "RpcError",
    "RpcRoutingError",
    "RpcRemoteError",
    "RpcTransportError",
    "RpcConfigError",
]
