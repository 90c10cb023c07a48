"""AT Protocol REST connector."""

from .provider import AtprotoRESTConnector

__all__ = ["AtprotoRESTConnector"]
