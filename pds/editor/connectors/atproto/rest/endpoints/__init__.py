"""AT Protocol REST endpoint registry."""

from __future__ import annotations

from pds.editor.runtime.rest import ResponseAdapter, RestEndpointSpec

from . import create_session, delete_record, list_records, refresh_session

_ENDPOINTS = {
    module.SPEC.id: (module.SPEC, module.Adapter)
    for module in (create_session, refresh_session, list_records, delete_record)
}


def get_endpoint_spec(endpoint_id: str) -> RestEndpointSpec | None:
    entry = _ENDPOINTS.get(endpoint_id)
    return entry[0] if entry else None


def get_endpoint_adapter(endpoint_id: str) -> type[ResponseAdapter] | None:
    entry = _ENDPOINTS.get(endpoint_id)
    return entry[1] if entry else None


__all__ = ["get_endpoint_spec", "get_endpoint_adapter"]
