"""``com.atproto.repo.deleteRecord`` endpoint definition and adapter."""

from __future__ import annotations

from typing import Any

from pds.editor.connectors.atproto.config import XRPC_PATHS
from pds.editor.core.exceptions import ProviderError, RecordNotFoundError
from pds.editor.runtime.rest import ResponseAdapter, RestEndpointSpec

NOT_FOUND_MARKER = "not found"


def build_path(_params: dict[str, Any]) -> str:
    return XRPC_PATHS["delete_record"]


def build_body(params: dict[str, Any]) -> dict[str, Any]:
    return {
        "repo": params["repo"],
        "collection": params["collection"],
        "rkey": params["rkey"],
    }


SPEC = RestEndpointSpec(
    id="delete_record",
    method="POST",
    build_path=build_path,
    build_body=build_body,
)


def classify_error(error: ProviderError) -> ProviderError:
    """Turn a 400 "record not found" into RecordNotFoundError.

    Any other error is returned unchanged.
    """
    if error.status_code == 400 and NOT_FOUND_MARKER in str(error).lower():
        return RecordNotFoundError(
            str(error), status_code=error.status_code, error_code=error.error_code
        )
    return error


class Adapter(ResponseAdapter):
    """deleteRecord returns the repo commit, which is not needed."""

    def parse(self, response: Any, params: dict[str, Any]) -> None:
        return None
