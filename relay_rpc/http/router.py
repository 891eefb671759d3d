"""HTTP binding of the RPC router, built on Starlette."""

import asyncio
import json
import os
import traceback
from typing import Any

from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.routing import Route

from relay_rpc.exceptions import RpcRoutingError
from relay_rpc.http.models import (
    DEFAULT_RPC_PATH,
    JSON_MEDIA_TYPE,
    PROCEDURE_ERROR_STATUS,
    ROUTING_ERROR_STATUS,
    UNKNOWN_ERROR_TEMPLATE,
    ProcedureErrorBody,
    RoutingErrorBody,
    UnknownErrorBody,
)
from relay_rpc.router import RpcRouter
from relay_rpc.types import ProviderTable


# Interpreter and event-loop control flow, never turned into responses.
_PROPAGATED = (asyncio.CancelledError, KeyboardInterrupt, SystemExit, GeneratorExit)


class HttpRpcRouter(RpcRouter[Request, Response]):
    """RPC router answering JSON POST requests.

    Each request body names a provider, a procedure and its args. The result
    is returned as the JSON response body with status 200. Routing failures
    answer 400; anything raised by the procedure answers 500.

    Use `asgi_app()` to mount the router as an ASGI application, e.g. with
    `uvicorn server:app`.
    """

    def __init__(
        self,
        providers: ProviderTable,
        *,
        include_stack: bool = True,
        debug: bool = False,
    ) -> None:
        """Initialize the HTTP router.

        Args:
            providers: Mapping of provider name to provider.
            include_stack: Include the formatted traceback in 500 bodies.
            debug: Enable debug logging to stderr.
        """
        super().__init__(providers, debug=debug)
        self._include_stack = include_stack

    @classmethod
    def from_env(cls, providers: ProviderTable) -> "HttpRpcRouter":
        """Create an HTTP router configured from environment variables.

        Optional environment variables:
            RELAY_RPC_ROUTER_DEBUG: Set to "1" to enable debug logging.
            RELAY_RPC_INCLUDE_STACK: Set to "0" to omit tracebacks from error bodies.

        Returns:
            A configured HttpRpcRouter serving `providers`.
        """
        debug = os.environ.get("RELAY_RPC_ROUTER_DEBUG", "") == "1"
        include_stack = os.environ.get("RELAY_RPC_INCLUDE_STACK", "1") != "0"
        return cls(providers, include_stack=include_stack, debug=debug)

    def _log_debug(self, message: str) -> None:
        """Log a debug message to stderr if debug mode is enabled."""
        if self._debug:
            import sys

            print(f"[relay-rpc:http-router] {message}", file=sys.stderr)

    async def handle(self, request: Request) -> Response:
        """Handle an RPC request carried in an HTTP request.

        Args:
            request: Starlette request whose JSON body is the call envelope.

        Returns:
            The JSON response for the call outcome.
        """
        try:
            body = await _read_envelope(request)
            result = await self.invoke(
                body.get("provider"),  # type: ignore[arg-type]
                body.get("procedure"),  # type: ignore[arg-type]
                body.get("args"),  # type: ignore[arg-type]
            )
            content = json.dumps(result, allow_nan=False)
        except RpcRoutingError as e:
            self._log_debug(f"Routing rejected: {e}")
            routing_body = RoutingErrorBody(name=type(e).__name__, error=str(e))
            return JSONResponse(routing_body.model_dump(), status_code=ROUTING_ERROR_STATUS)
        except Exception as e:
            self._log_debug(f"Procedure failed: {type(e).__name__}")
            return JSONResponse(
                self._describe_failure(e),
                status_code=PROCEDURE_ERROR_STATUS,
            )
        except _PROPAGATED:
            raise
        except BaseException as e:
            self._log_debug(f"Procedure raised non-Exception value: {type(e).__name__}")
            return JSONResponse(_unknown_failure(e), status_code=PROCEDURE_ERROR_STATUS)

        return Response(content, status_code=200, media_type=JSON_MEDIA_TYPE)

    def _describe_failure(self, error: Exception) -> dict[str, Any]:
        """Build the 500 body for an error raised while serving a call."""
        try:
            body = ProcedureErrorBody(
                name=type(error).__name__,
                error=str(error),
                stack=_format_stack(error) if self._include_stack else None,
                cause=_describe_cause(error.__cause__),
            )
        except Exception:
            # str() of the raised value itself failed.
            return _unknown_failure(error)
        return body.model_dump(exclude_none=True)

    def asgi_app(self, path: str = DEFAULT_RPC_PATH) -> Starlette:
        """Create an ASGI application serving this router at `path`.

        Only POST requests to `path` are routed; other paths answer 404.
        """
        return Starlette(routes=[Route(path, self.handle, methods=["POST"])])


async def _read_envelope(request: Request) -> dict[str, Any]:
    """Decode the request body into a call envelope."""
    try:
        body = await request.json()
    except ValueError as e:
        raise RpcRoutingError(f"Invalid request body: {e}") from e
    if not isinstance(body, dict):
        raise RpcRoutingError(
            f"Invalid request body: expected a JSON object, got {type(body).__name__}"
        )
    return body


def _unknown_failure(error: BaseException) -> dict[str, Any]:
    """Build the generic 500 body, tagged only with the raised value's type."""
    unknown = UnknownErrorBody(error=UNKNOWN_ERROR_TEMPLATE.format(type_name=type(error).__name__))
    return unknown.model_dump()


def _format_stack(error: BaseException) -> str:
    return "".join(traceback.format_exception(type(error), error, error.__traceback__))


def _describe_cause(cause: BaseException | None) -> str | None:
    if cause is None:
        return None
    return f"{type(cause).__name__}: {cause}"
