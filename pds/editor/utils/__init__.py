"""Utilities."""

from .http import HTTPClient, raise_for_response

__all__ = ["HTTPClient", "raise_for_response"]
