"""JSON-over-HTTP transport for relay-rpc."""

from relay_rpc.http.client import HttpRpcClient
from relay_rpc.http.models import (
    DEFAULT_RPC_PATH,
    ProcedureErrorBody,
    RoutingErrorBody,
    RpcRequest,
    UnknownErrorBody,
)
from relay_rpc.http.router import HttpRpcRouter

__all__ = [
    "HttpRpcClient",
    "HttpRpcRouter",
    "DEFAULT_RPC_PATH",
    "RpcRequest",
    "RoutingErrorBody",
    "ProcedureErrorBody",
    "UnknownErrorBody",
]
