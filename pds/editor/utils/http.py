"""HTTP client helper."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from typing import Any

import aiohttp

from ..core.exceptions import AuthenticationError, ProviderError, RateLimitError

logger = logging.getLogger(__name__)

RATE_LIMIT_RESET_HEADER = "ratelimit-reset"


def _error_message(status: int, body: Any) -> tuple[str, str | None]:
    if isinstance(body, dict):
        error_code = body.get("error")
        message = body.get("message") or error_code or f"HTTP {status}"
        return str(message), error_code
    if isinstance(body, str) and body.strip():
        return body.strip(), None
    return f"HTTP {status}", None


def _parse_reset(headers: Mapping[str, str]) -> float | None:
    raw = headers.get(RATE_LIMIT_RESET_HEADER) or headers.get(RATE_LIMIT_RESET_HEADER.title())
    if raw is None:
        return None
    try:
        return float(raw)
    except ValueError:
        logger.warning("Ignoring unparseable %s header: %r", RATE_LIMIT_RESET_HEADER, raw)
        return None


def raise_for_response(status: int, headers: Mapping[str, str], body: Any) -> None:
    """Map an XRPC error response onto the exception hierarchy.

    Args:
        status: HTTP status code
        headers: Response headers
        body: Decoded response body (dict for JSON, str otherwise)

    Raises:
        RateLimitError: For 429, with the ``ratelimit-reset`` hint if present
        AuthenticationError: For 401
        ProviderError: For any other status >= 400
    """
    if status < 400:
        return

    message, error_code = _error_message(status, body)
    if status == 429:
        raise RateLimitError(message, reset_at=_parse_reset(headers))
    if status == 401:
        raise AuthenticationError(message, status_code=status, error_code=error_code)
    raise ProviderError(message, status_code=status, error_code=error_code)


class HTTPClient:
    """Async HTTP client wrapper."""

    def __init__(self, base_url: str | None = None, timeout: float = 30.0) -> None:
        self.base_url = base_url.rstrip("/") if base_url else None
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self._session: aiohttp.ClientSession | None = None
        self._headers: dict[str, str] = {}

    @property
    def session(self) -> aiohttp.ClientSession:
        """Get or create session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
        return self._session

    def set_bearer_token(self, token: str | None) -> None:
        """Set or clear the ``Authorization`` header sent with every request."""
        if token:
            self._headers["Authorization"] = f"Bearer {token}"
        else:
            self._headers.pop("Authorization", None)

    def _url(self, url: str) -> str:
        if self.base_url and not url.startswith("http"):
            return f"{self.base_url}{url}"
        return url

    async def request(
        self,
        method: str,
        url: str,
        params: dict[str, Any] | None = None,
        json_body: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """Send a request and return the decoded body.

        Returns:
            Parsed JSON, or None when the response has no JSON body

        Raises:
            ProviderError: On HTTP errors and connection failures
        """
        merged = {**self._headers, **(headers or {})}
        if params:
            params = {k: v for k, v in params.items() if v is not None}
        try:
            async with self.session.request(
                method, self._url(url), params=params, json=json_body, headers=merged
            ) as response:
                if response.content_type == "application/json":
                    try:
                        body = await response.json()
                    except ValueError as e:
                        raise ProviderError(
                            f"Invalid JSON response: {e}", status_code=response.status
                        ) from e
                else:
                    body = await response.text()
                raise_for_response(response.status, response.headers, body)
                return body if isinstance(body, dict) else None
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise ProviderError(f"{type(e).__name__}: {e}") from e

    async def get(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """GET request."""
        return await self.request("GET", url, params=params, headers=headers)

    async def post(
        self,
        url: str,
        json_body: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """POST request."""
        return await self.request("POST", url, json_body=json_body, headers=headers)

    async def close(self) -> None:
        """Close session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> HTTPClient:
        """Context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        await self.close()
