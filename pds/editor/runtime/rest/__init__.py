"""REST runtime abstractions."""

from ...utils.http import HTTPClient
from .runner import ResponseAdapter, RestEndpointSpec, RestRunner

__all__ = [
    "HTTPClient",
    "RestRunner",
    "RestEndpointSpec",
    "ResponseAdapter",
]
