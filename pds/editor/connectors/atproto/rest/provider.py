"""AT Protocol REST connector.

Architecture:
    This connector uses the endpoint registry to look up specs and adapters,
    then uses RestRunner to execute XRPC calls against a PDS. It implements
    the RecordsClient interface consumed by CollectionPager and
    RateLimitedDeleter.
"""

from __future__ import annotations

import logging
from typing import Any

from pds.editor.connectors.atproto.config import DEFAULT_PDS_URL
from pds.editor.core import AuthenticationError, ProviderError, RecordsClient
from pds.editor.models import RecordPage, Session
from pds.editor.runtime.rest import HTTPClient, RestRunner

from .endpoints import get_endpoint_adapter, get_endpoint_spec
from .endpoints.delete_record import classify_error

logger = logging.getLogger(__name__)

EXPIRED_TOKEN = "ExpiredToken"


class AtprotoRESTConnector(RecordsClient):
    """XRPC connector for a single PDS."""

    def __init__(self, service_url: str = DEFAULT_PDS_URL, *, timeout: float = 30.0) -> None:
        """Initialize the connector.

        Args:
            service_url: Base URL of the PDS (e.g. https://bsky.social)
            timeout: Total timeout per request in seconds
        """
        self.service_url = service_url
        self._transport = HTTPClient(base_url=service_url, timeout=timeout)
        self._runner = RestRunner(self._transport)
        self.session: Session | None = None

    async def fetch(self, endpoint_id: str, params: dict[str, Any]) -> Any:
        """Run a registered XRPC endpoint.

        Raises:
            ValueError: If endpoint_id is not found in registry
        """
        spec = get_endpoint_spec(endpoint_id)
        if spec is None:
            raise ValueError(f"Unknown REST endpoint: {endpoint_id}")

        adapter_cls = get_endpoint_adapter(endpoint_id)
        if adapter_cls is None:
            raise ValueError(f"No adapter found for endpoint: {endpoint_id}")

        return await self._runner.run(spec=spec, adapter=adapter_cls(), params=params)

    async def login(self, identifier: str, password: str) -> Session:
        """Create a session and authenticate later calls with its access token.

        Raises:
            AuthenticationError: If the PDS rejects the credentials
        """
        try:
            session: Session = await self.fetch(
                "create_session", {"identifier": identifier, "password": password}
            )
        except AuthenticationError:
            raise
        except ProviderError as e:
            # createSession answers bad credentials with 400 or 401
            if e.status_code in (400, 401):
                raise AuthenticationError(
                    str(e), status_code=e.status_code, error_code=e.error_code
                ) from e
            raise

        self._set_session(session)
        logger.info("session_created", extra={"did": session.did, "handle": session.handle})
        return session

    async def refresh_session(self) -> Session:
        """Exchange the refresh token for a new access token.

        Raises:
            AuthenticationError: If there is no refreshable session or the PDS
                rejects the refresh token
        """
        current = self.session
        if current is None or not current.refresh_jwt:
            raise AuthenticationError("No session to refresh")

        params = {"did": current.did, "handle": current.handle, "refresh_jwt": current.refresh_jwt}
        try:
            session: Session = await self.fetch("refresh_session", params)
        except AuthenticationError:
            raise
        except ProviderError as e:
            if e.status_code in (400, 401):
                raise AuthenticationError(
                    str(e), status_code=e.status_code, error_code=e.error_code
                ) from e
            raise

        self._set_session(session)
        logger.info("session_refreshed", extra={"did": session.did})
        return session

    def _set_session(self, session: Session) -> None:
        self.session = session
        self._transport.set_bearer_token(session.access_jwt)

    async def _fetch_authenticated(self, endpoint_id: str, params: dict[str, Any]) -> Any:
        """Run an endpoint, refreshing the session once if the access token expired."""
        try:
            return await self.fetch(endpoint_id, params)
        except ProviderError as e:
            if e.error_code != EXPIRED_TOKEN or self.session is None:
                raise
            logger.info("access_token_expired", extra={"endpoint": endpoint_id})
        await self.refresh_session()
        return await self.fetch(endpoint_id, params)

    async def list_records(
        self,
        repo: str,
        collection: str,
        limit: int,
        cursor: str | None = None,
    ) -> RecordPage:
        """Fetch one page of a collection."""
        params = {"repo": repo, "collection": collection, "limit": limit, "cursor": cursor}
        return await self._fetch_authenticated("list_records", params)

    async def delete_record(self, repo: str, collection: str, rkey: str) -> None:
        """Delete one record.

        Raises:
            RateLimitError: Over quota
            RecordNotFoundError: The record does not exist
            ProviderError: Any other failure
        """
        params = {"repo": repo, "collection": collection, "rkey": rkey}
        try:
            await self._fetch_authenticated("delete_record", params)
        except ProviderError as e:
            classified = classify_error(e)
            if classified is e:
                raise
            raise classified from e

    async def close(self) -> None:
        await self._transport.close()
