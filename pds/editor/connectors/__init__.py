"""PDS connectors."""

from .atproto import AtprotoRESTConnector

__all__ = ["AtprotoRESTConnector"]
