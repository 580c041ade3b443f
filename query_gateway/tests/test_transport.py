"""
Unit tests for the httpx transport.
"""

import json

import httpx
import pytest
from unittest.mock import AsyncMock, patch

from query_gateway.app.adapters import HttpxTransport, build_request_kwargs
from shared.errors import ConfigurationError

URL = "https://api.test/graphql"
BODY = '{"query":"{ user { name } }","variables":{}}'


def _response(payload, status_code=200):
    return httpx.Response(
        status_code=status_code,
        content=json.dumps(payload),
        request=httpx.Request("POST", URL)
    )


class TestBuildRequestKwargs:
    """Test cases for option merging."""

    def test_default_content_type(self):
        """Test JSON content type is always present."""
        kwargs = build_request_kwargs({})

        assert kwargs["headers"]["content-type"] == "application/json"

    def test_caller_headers_are_merged(self):
        """Test caller headers add to the defaults."""
        kwargs = build_request_kwargs({"headers": {"Authorization": "Bearer t"}})

        assert kwargs["headers"]["Authorization"] == "Bearer t"
        assert kwargs["headers"]["Content-Type"] == "application/json"

    def test_caller_can_override_content_type(self):
        """Test header override is case-insensitive."""
        kwargs = build_request_kwargs({"headers": {"content-type": "application/graphql+json"}})

        assert kwargs["headers"].get_list("Content-Type") == ["application/graphql+json"]

    def test_other_options_pass_through(self):
        """Test non-header options are forwarded."""
        kwargs = build_request_kwargs({"timeout": 2.5, "params": {"a": "b"}})

        assert kwargs["timeout"] == 2.5
        assert kwargs["params"] == {"a": "b"}

    def test_body_and_method_are_reserved(self):
        """Test options cannot replace what is sent."""
        with pytest.raises(ConfigurationError):
            build_request_kwargs({"method": "GET"})
        with pytest.raises(ConfigurationError):
            build_request_kwargs({"json": {}})


class TestHttpxTransport:
    """Test cases for HttpxTransport."""

    @pytest.fixture
    def transport(self):
        """Create HttpxTransport instance."""
        return HttpxTransport(timeout=5.0)

    @pytest.mark.asyncio
    async def test_send_posts_body_and_parses_json(self, transport):
        """Test a successful exchange."""
        payload = {"data": {"user": {"__typename": "User", "name": "Ann"}}}

        with patch('httpx.AsyncClient') as mock_client:
            post = AsyncMock(return_value=_response(payload))
            mock_client.return_value.__aenter__.return_value.post = post

            result = await transport.send(URL, BODY, {"headers": {"Authorization": "Bearer t"}})

            assert result == payload
            mock_client.assert_called_once_with(timeout=5.0)
            args, kwargs = post.call_args
            assert args == (URL,)
            assert kwargs["content"] == BODY.encode("utf-8")
            assert kwargs["headers"]["Authorization"] == "Bearer t"
            assert kwargs["headers"]["Content-Type"] == "application/json"

    @pytest.mark.asyncio
    async def test_http_error_status_not_raised_by_default(self, transport):
        """Test a 400 GraphQL error payload is returned."""
        payload = {"errors": [{"message": "Syntax Error"}]}

        with patch('httpx.AsyncClient') as mock_client:
            mock_client.return_value.__aenter__.return_value.post = AsyncMock(
                return_value=_response(payload, status_code=400)
            )

            assert await transport.send(URL, BODY, {}) == payload

    @pytest.mark.asyncio
    async def test_raise_for_status(self):
        """Test opting into status errors."""
        transport = HttpxTransport(raise_for_status=True)

        with patch('httpx.AsyncClient') as mock_client:
            mock_client.return_value.__aenter__.return_value.post = AsyncMock(
                return_value=_response({"errors": []}, status_code=500)
            )

            with pytest.raises(httpx.HTTPStatusError):
                await transport.send(URL, BODY, {})

    @pytest.mark.asyncio
    async def test_connection_error_propagates_unchanged(self, transport):
        """Test transport errors are not wrapped."""
        error = httpx.ConnectError("Connection refused")

        with patch('httpx.AsyncClient') as mock_client:
            mock_client.return_value.__aenter__.return_value.post = AsyncMock(side_effect=error)

            with pytest.raises(httpx.ConnectError) as exc_info:
                await transport.send(URL, BODY, {})

            assert exc_info.value is error

    @pytest.mark.asyncio
    async def test_invalid_json_raises(self, transport):
        """Test a non-JSON body surfaces as a decode error."""
        with patch('httpx.AsyncClient') as mock_client:
            mock_client.return_value.__aenter__.return_value.post = AsyncMock(
                return_value=httpx.Response(
                    status_code=502,
                    content=b"<html>Bad Gateway</html>",
                    request=httpx.Request("POST", URL)
                )
            )

            with pytest.raises(json.JSONDecodeError):
                await transport.send(URL, BODY, {})

    @pytest.mark.asyncio
    async def test_injected_client_is_reused(self):
        """Test a provided client is used for every call and left open."""
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append((request.method, str(request.url), request.headers["content-type"], request.content))
            return httpx.Response(200, json={"data": {"ok": True}})

        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        transport = HttpxTransport(client=client)

        try:
            assert await transport.send(URL, BODY, {}) == {"data": {"ok": True}}
            assert await transport.send(URL, BODY, {}) == {"data": {"ok": True}}
            assert not client.is_closed
        finally:
            await client.aclose()

        assert seen == [("POST", URL, "application/json", BODY.encode("utf-8"))] * 2
