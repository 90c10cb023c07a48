"""AT Protocol connector."""

from .config import DEFAULT_COLLECTION, DEFAULT_PDS_URL, PAGE_SIZE
from .rest.provider import AtprotoRESTConnector

__all__ = [
    "AtprotoRESTConnector",
    "DEFAULT_COLLECTION",
    "DEFAULT_PDS_URL",
    "PAGE_SIZE",
]
