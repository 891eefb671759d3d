"""Pydantic models for the HTTP wire envelopes.

Request body:   {"provider": str, "procedure": str, "args": [...]}
Success body:   the JSON-encoded result value, status 200
Routing error:  {"name": str, "error": str}, status 400
Other failure:  {"name": str, "error": str, "stack"?: str, "cause"?: any}, status 500
"""

from typing import Any

from pydantic import BaseModel

# =============================================================================
# Constants
# =============================================================================

DEFAULT_RPC_PATH = "/rpc"
JSON_MEDIA_TYPE = "application/json"

ROUTING_ERROR_STATUS = 400
PROCEDURE_ERROR_STATUS = 500

UNKNOWN_ERROR_TEMPLATE = "Unknown Internal Server error of type: {type_name}"

# =============================================================================
# Request Models
# =============================================================================


class RpcRequest(BaseModel):
    """Outbound call envelope.

    Args are type-erased; the client rejects args that do not encode as JSON.
    """

    provider: str
    procedure: str
    args: list[Any]


# =============================================================================
# Error Models
# =============================================================================


class RoutingErrorBody(BaseModel):
    """Body of a 400 response: the request could not be dispatched."""

    name: str
    error: str


class ProcedureErrorBody(BaseModel):
    """Body of a 500 response raised by the procedure or the server."""

    name: str
    error: str
    stack: str | None = None
    cause: Any = None


class UnknownErrorBody(BaseModel):
    """Body of a 500 response when the raised value could not be described."""

    error: str
