"""``com.atproto.repo.listRecords`` endpoint definition and adapter."""

from __future__ import annotations

from typing import Any

from pds.editor.connectors.atproto.config import PAGE_SIZE, XRPC_PATHS
from pds.editor.core.exceptions import ProviderError
from pds.editor.models import RecordEntry, RecordPage
from pds.editor.runtime.rest import ResponseAdapter, RestEndpointSpec


def build_path(_params: dict[str, Any]) -> str:
    return XRPC_PATHS["list_records"]


def build_query(params: dict[str, Any]) -> dict[str, Any]:
    """Build query parameters for listRecords."""
    query: dict[str, Any] = {
        "repo": params["repo"],
        "collection": params["collection"],
        "limit": int(params.get("limit", PAGE_SIZE)),
    }
    if params.get("cursor"):
        query["cursor"] = params["cursor"]
    return query


# Endpoint definition
SPEC = RestEndpointSpec(
    id="list_records",
    method="GET",
    build_path=build_path,
    build_query=build_query,
)


class Adapter(ResponseAdapter):
    """Adapter for parsing listRecords output into a RecordPage."""

    def parse(self, response: Any, params: dict[str, Any]) -> RecordPage:
        if not isinstance(response, dict):
            raise ProviderError(f"Invalid response format: expected dict, got {type(response)}")

        records = []
        for item in response.get("records", []):
            uri = item.get("uri") if isinstance(item, dict) else None
            if not uri:
                raise ProviderError("listRecords entry missing 'uri' field")
            value = item.get("value")
            records.append(
                RecordEntry.from_uri(
                    uri,
                    cid=item.get("cid"),
                    value=value if isinstance(value, dict) else None,
                )
            )

        return RecordPage(records=records, cursor=response.get("cursor"))
