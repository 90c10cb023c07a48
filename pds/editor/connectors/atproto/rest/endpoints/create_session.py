"""``com.atproto.server.createSession`` endpoint definition and adapter."""

from __future__ import annotations

from typing import Any

from pds.editor.connectors.atproto.config import XRPC_PATHS
from pds.editor.core.exceptions import AuthenticationError
from pds.editor.models import Session
from pds.editor.runtime.rest import ResponseAdapter, RestEndpointSpec


def build_path(_params: dict[str, Any]) -> str:
    return XRPC_PATHS["create_session"]


def build_body(params: dict[str, Any]) -> dict[str, Any]:
    return {"identifier": params["identifier"], "password": params["password"]}


SPEC = RestEndpointSpec(
    id="create_session",
    method="POST",
    build_path=build_path,
    build_body=build_body,
)


class Adapter(ResponseAdapter):
    """Adapter for parsing createSession output into a Session."""

    def parse(self, response: Any, params: dict[str, Any]) -> Session:
        if not isinstance(response, dict) or not response.get("accessJwt"):
            raise AuthenticationError("createSession response missing 'accessJwt'")
        if not response.get("did"):
            raise AuthenticationError("createSession response missing 'did'")
        return Session(
            did=response["did"],
            handle=response.get("handle", params["identifier"]),
            access_jwt=response["accessJwt"],
            refresh_jwt=response.get("refreshJwt"),
        )
