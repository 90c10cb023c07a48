"""Precise unit tests for HTTPClient.

Tests focus on session management, auth headers and the mapping of XRPC
error responses onto the exception hierarchy.
"""

from __future__ import annotations

import json
from unittest.mock import AsyncMock, MagicMock

import aiohttp
import pytest

from pds.editor.core import AuthenticationError, ProviderError, RateLimitError
from pds.editor.utils import HTTPClient, raise_for_response


def fake_session(status: int, body, headers: dict | None = None, content_type="application/json"):
    response = MagicMock()
    response.status = status
    response.headers = headers or {}
    response.content_type = content_type
    response.json = AsyncMock(return_value=body)
    response.text = AsyncMock(return_value=body)

    context = MagicMock()
    context.__aenter__ = AsyncMock(return_value=response)
    context.__aexit__ = AsyncMock(return_value=False)

    session = MagicMock()
    session.closed = False
    session.request = MagicMock(return_value=context)
    return session


class TestRaiseForResponse:
    """Test raise_for_response status mapping."""

    def test_success_does_not_raise(self):
        raise_for_response(200, {}, {"ok": True})

    def test_429_with_reset_header(self):
        with pytest.raises(RateLimitError) as exc_info:
            raise_for_response(
                429,
                {"ratelimit-reset": "1700000030"},
                {"error": "RateLimitExceeded", "message": "Rate Limit Exceeded"},
            )
        assert exc_info.value.reset_at == 1_700_000_030.0
        assert exc_info.value.wait_seconds(now=1_700_000_000.0) == 30.0
        assert str(exc_info.value) == "Rate Limit Exceeded"

    def test_429_without_header(self):
        with pytest.raises(RateLimitError) as exc_info:
            raise_for_response(429, {}, "")
        assert exc_info.value.reset_at is None

    def test_429_with_garbage_header_ignores_hint(self):
        with pytest.raises(RateLimitError) as exc_info:
            raise_for_response(429, {"ratelimit-reset": "soon"}, None)
        assert exc_info.value.reset_at is None

    def test_401_is_authentication_error(self):
        with pytest.raises(AuthenticationError) as exc_info:
            raise_for_response(401, {}, {"error": "AuthMissing", "message": "Authentication Required"})
        assert exc_info.value.status_code == 401
        assert exc_info.value.error_code == "AuthMissing"

    def test_400_keeps_message_and_error_code(self):
        with pytest.raises(ProviderError) as exc_info:
            raise_for_response(400, {}, {"error": "InvalidRequest", "message": "Record not found"})
        assert type(exc_info.value) is ProviderError
        assert exc_info.value.status_code == 400
        assert str(exc_info.value) == "Record not found"

    def test_text_body_and_empty_body(self):
        with pytest.raises(ProviderError, match="Bad Gateway"):
            raise_for_response(502, {}, "Bad Gateway")
        with pytest.raises(ProviderError, match="HTTP 503"):
            raise_for_response(503, {}, None)


class TestHTTPClient:
    """Test HTTPClient request handling."""

    def test_init_with_base_url(self):
        client = HTTPClient(base_url="https://pds.example.com/", timeout=10.0)
        assert client.base_url == "https://pds.example.com"
        assert client.timeout.total == 10.0
        assert client._session is None

    def test_bearer_token_set_and_cleared(self):
        client = HTTPClient()
        client.set_bearer_token("jwt")
        assert client._headers["Authorization"] == "Bearer jwt"
        client.set_bearer_token(None)
        assert "Authorization" not in client._headers

    @pytest.mark.asyncio
    async def test_get_joins_base_url_and_drops_none_params(self):
        client = HTTPClient(base_url="https://pds.example.com")
        client.set_bearer_token("jwt")
        client._session = fake_session(200, {"records": []})

        body = await client.get("/xrpc/x", params={"limit": 100, "cursor": None})

        assert body == {"records": []}
        client._session.request.assert_called_once_with(
            "GET",
            "https://pds.example.com/xrpc/x",
            params={"limit": 100},
            json=None,
            headers={"Authorization": "Bearer jwt"},
        )

    @pytest.mark.asyncio
    async def test_non_json_success_returns_none(self):
        client = HTTPClient(base_url="https://pds.example.com")
        client._session = fake_session(200, "", content_type="text/plain")

        assert await client.post("/xrpc/y", json_body={"a": 1}) is None

    @pytest.mark.asyncio
    async def test_error_response_raises_typed_error(self):
        client = HTTPClient(base_url="https://pds.example.com")
        client._session = fake_session(
            429, {"error": "RateLimitExceeded"}, headers={"ratelimit-reset": "123"}
        )

        with pytest.raises(RateLimitError) as exc_info:
            await client.post("/xrpc/y", json_body={})
        assert exc_info.value.reset_at == 123.0

    @pytest.mark.asyncio
    async def test_malformed_json_becomes_provider_error(self):
        client = HTTPClient(base_url="https://pds.example.com")
        session = fake_session(502, None)
        response = await session.request.return_value.__aenter__()
        response.json.side_effect = json.JSONDecodeError("Expecting value", "<html>", 0)
        client._session = session

        with pytest.raises(ProviderError) as exc_info:
            await client.post("/xrpc/y", json_body={})
        assert exc_info.value.status_code == 502

    @pytest.mark.asyncio
    async def test_connection_errors_become_provider_errors(self):
        client = HTTPClient(base_url="https://pds.example.com")
        session = fake_session(200, {})
        session.request.side_effect = aiohttp.ClientConnectionError("refused")
        client._session = session

        with pytest.raises(ProviderError, match="refused"):
            await client.get("/xrpc/x")

    @pytest.mark.asyncio
    async def test_close_idempotent(self):
        client = HTTPClient()
        await client.close()
        await client.close()
