"""``com.atproto.server.refreshSession`` endpoint definition and adapter."""

from __future__ import annotations

from typing import Any

from pds.editor.connectors.atproto.config import XRPC_PATHS
from pds.editor.core.exceptions import AuthenticationError
from pds.editor.models import Session
from pds.editor.runtime.rest import ResponseAdapter, RestEndpointSpec


def build_path(_params: dict[str, Any]) -> str:
    return XRPC_PATHS["refresh_session"]


def build_headers(params: dict[str, Any]) -> dict[str, str]:
    """The refresh token, not the access token, authenticates this call."""
    return {"Authorization": f"Bearer {params['refresh_jwt']}"}


SPEC = RestEndpointSpec(
    id="refresh_session",
    method="POST",
    build_path=build_path,
    build_headers=build_headers,
)


class Adapter(ResponseAdapter):
    """Adapter for parsing refreshSession output into a Session."""

    def parse(self, response: Any, params: dict[str, Any]) -> Session:
        if not isinstance(response, dict) or not response.get("accessJwt"):
            raise AuthenticationError("refreshSession response missing 'accessJwt'")
        return Session(
            did=response.get("did") or params["did"],
            handle=response.get("handle") or params["handle"],
            access_jwt=response["accessJwt"],
            refresh_jwt=response.get("refreshJwt") or params["refresh_jwt"],
        )
