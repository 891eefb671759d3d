"""Tests for HttpRpcClient."""

import json
import os
from unittest.mock import patch

import httpx
import pytest
import respx

from relay_rpc.exceptions import RpcConfigError, RpcError, RpcRemoteError, RpcTransportError
from relay_rpc.http.client import DEFAULT_TIMEOUT_MS, HttpRpcClient

RPC_URL = "http://test/rpc"


class TestHttpRpcClientFromEnv:
    """Tests for HttpRpcClient.from_env()."""

    def test_from_env_with_url(self):
        """Should create a client with defaults when only the URL is set."""
        with patch.dict(os.environ, {"RELAY_RPC_URL": RPC_URL}, clear=True):
            client = HttpRpcClient.from_env()
            assert client.url == RPC_URL
            assert client._timeout_ms == DEFAULT_TIMEOUT_MS
            assert client._debug is False

    def test_from_env_missing_url_raises(self):
        """Should raise RpcConfigError when the URL is missing."""
        with patch.dict(os.environ, {}, clear=True), pytest.raises(RpcConfigError):
            HttpRpcClient.from_env()

    def test_from_env_with_optional_settings(self):
        """Should parse optional settings from env."""
        env = {
            "RELAY_RPC_URL": RPC_URL,
            "RELAY_RPC_TIMEOUT_MS": "1500",
            "RELAY_RPC_CLIENT_DEBUG": "1",
        }
        with patch.dict(os.environ, env, clear=True):
            client = HttpRpcClient.from_env()
            assert client._timeout_ms == 1500
            assert client._debug is True

    def test_from_env_malformed_timeout_ms_raises(self):
        """Should raise ValueError when RELAY_RPC_TIMEOUT_MS is not a valid integer."""
        env = {"RELAY_RPC_URL": RPC_URL, "RELAY_RPC_TIMEOUT_MS": "soon"}
        with patch.dict(os.environ, env, clear=True), pytest.raises(ValueError):
            HttpRpcClient.from_env()


class TestHttpRpcClientHandle:
    """Tests for calls over HTTP."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_success(self):
        """Should return the decoded JSON result."""
        route = respx.post(RPC_URL).mock(return_value=httpx.Response(200, json="Foo"))

        client = HttpRpcClient(RPC_URL)
        result = await client.handle("foo", "getFoo", [])

        assert result == "Foo"
        assert route.called

    @pytest.mark.asyncio
    @respx.mock
    async def test_sends_envelope(self):
        """Should post provider, procedure and args as JSON."""
        route = respx.post(RPC_URL).mock(return_value=httpx.Response(200, json="bar"))

        client = HttpRpcClient(RPC_URL)
        await client.get("foo").setFoo("bar")

        request = route.calls.last.request
        assert request.headers["Content-Type"] == "application/json"
        assert request.headers["User-Agent"].startswith("relay-rpc/")
        assert json.loads(request.content) == {
            "provider": "foo",
            "procedure": "setFoo",
            "args": ["bar"],
        }

    @pytest.mark.asyncio
    @respx.mock
    async def test_tuple_args_sent_as_arrays(self):
        """Tuple arguments should be encoded as JSON arrays."""
        route = respx.post(RPC_URL).mock(return_value=httpx.Response(200, json=[1, 2]))

        result = await HttpRpcClient(RPC_URL).get("echo").echo((1, 2))

        assert result == [1, 2]
        assert json.loads(route.calls.last.request.content)["args"] == [[1, 2]]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("value", [float("nan"), float("inf"), object(), {1, 2}])
    @respx.mock
    async def test_unencodable_args_raise_transport_error(self, value):
        """Args that are not JSON should fail before sending, as an RpcError."""
        with pytest.raises(RpcTransportError, match="not JSON-serializable") as exc_info:
            await HttpRpcClient(RPC_URL).get("echo").echo(value)

        assert isinstance(exc_info.value, RpcError)
        assert exc_info.value.name == "RpcTransportError"
        assert isinstance(exc_info.value.__cause__, (TypeError, ValueError))
        assert respx.calls.call_count == 0

    @pytest.mark.asyncio
    @respx.mock
    async def test_null_result(self):
        """Should return None for a null body."""
        respx.post(RPC_URL).mock(return_value=httpx.Response(200, content=b"null"))
        assert await HttpRpcClient(RPC_URL).handle("foo", "nothing", []) is None

    @pytest.mark.asyncio
    @respx.mock
    async def test_routing_error(self):
        """Should raise RpcRemoteError for 400 replies."""
        respx.post(RPC_URL).mock(
            return_value=httpx.Response(
                400,
                json={"name": "RpcRoutingError", "error": "Provider with name bar not found"},
            )
        )

        with pytest.raises(RpcRemoteError) as exc_info:
            await HttpRpcClient(RPC_URL).get("bar").getFoo()

        error = exc_info.value
        assert str(error) == "Provider with name bar not found"
        assert error.name == "RpcRoutingError"
        assert error.status_code == 400
        assert error.is_routing_error is True
        assert error.stack is None

    @pytest.mark.asyncio
    @respx.mock
    async def test_procedure_error(self):
        """Should carry stack and cause of 500 replies."""
        respx.post(RPC_URL).mock(
            return_value=httpx.Response(
                500,
                json={
                    "name": "ValueError",
                    "error": "bad value",
                    "stack": "Traceback ...",
                    "cause": "KeyError: 'x'",
                },
            )
        )

        with pytest.raises(RpcRemoteError) as exc_info:
            await HttpRpcClient(RPC_URL).handle("foo", "setFoo", ["x"])

        error = exc_info.value
        assert error.name == "ValueError"
        assert str(error) == "bad value"
        assert error.status_code == 500
        assert error.stack == "Traceback ..."
        assert error.cause == "KeyError: 'x'"
        assert error.is_routing_error is False

    @pytest.mark.asyncio
    @respx.mock
    async def test_unknown_error_body(self):
        """Should default the name when the body has none."""
        respx.post(RPC_URL).mock(
            return_value=httpx.Response(
                500, json={"error": "Unknown Internal Server error of type: Oops"}
            )
        )

        with pytest.raises(RpcRemoteError) as exc_info:
            await HttpRpcClient(RPC_URL).handle("foo", "getFoo", [])
        assert exc_info.value.name == "Error"
        assert str(exc_info.value) == "Unknown Internal Server error of type: Oops"

    @pytest.mark.asyncio
    @respx.mock
    async def test_non_json_error_body(self):
        """Should use the response text for non-JSON replies."""
        respx.post(RPC_URL).mock(return_value=httpx.Response(404, text="Not Found"))

        with pytest.raises(RpcRemoteError) as exc_info:
            await HttpRpcClient(RPC_URL).handle("foo", "getFoo", [])
        assert exc_info.value.name == "HTTPError"
        assert str(exc_info.value) == "Not Found"
        assert exc_info.value.status_code == 404

    @pytest.mark.asyncio
    @respx.mock
    async def test_invalid_json_success_body(self):
        """Should raise RpcTransportError when a 200 body is not JSON."""
        respx.post(RPC_URL).mock(return_value=httpx.Response(200, text="<html>"))

        with pytest.raises(RpcTransportError):
            await HttpRpcClient(RPC_URL).handle("foo", "getFoo", [])

    @pytest.mark.asyncio
    @respx.mock
    async def test_timeout(self):
        """Should raise RpcTransportError chained from the timeout."""
        respx.post(RPC_URL).mock(side_effect=httpx.TimeoutException("timeout"))

        with pytest.raises(RpcTransportError, match="timed out") as exc_info:
            await HttpRpcClient(RPC_URL).handle("foo", "getFoo", [])
        assert isinstance(exc_info.value.__cause__, httpx.TimeoutException)

    @pytest.mark.asyncio
    @respx.mock
    async def test_network_error(self):
        """Should raise RpcTransportError for connection failures."""
        respx.post(RPC_URL).mock(side_effect=httpx.ConnectError("Connection refused"))

        with pytest.raises(RpcTransportError, match="Connection refused") as exc_info:
            await HttpRpcClient(RPC_URL).handle("foo", "getFoo", [])
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    @pytest.mark.asyncio
    @respx.mock
    async def test_each_call_is_independent(self):
        """Repeated calls should each send one request."""
        route = respx.post(RPC_URL).mock(return_value=httpx.Response(200, json=1))

        foo = HttpRpcClient(RPC_URL).get("foo")
        await foo.getFoo()
        await foo.getFoo()

        assert route.call_count == 2


class TestHttpRpcClientDebug:
    """Tests for debug logging."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_debug_logs_call_and_failure(self, capsys):
        """Should log outbound calls and failed statuses."""
        respx.post(RPC_URL).mock(return_value=httpx.Response(500, json={"error": "x"}))

        client = HttpRpcClient(RPC_URL, debug=True)
        with pytest.raises(RpcRemoteError):
            await client.handle("foo", "getFoo", [])

        err = capsys.readouterr().err
        assert "[relay-rpc:http-client] Calling foo.getFoo" in err
        assert "Call failed with status 500" in err
