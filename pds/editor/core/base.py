"""Base records client abstract class.

Architecture:
    This module defines the RecordsClient abstract base class that every
    backend talking to a PDS must implement. It provides:
    - Abstract methods for the two repo operations the pipeline needs
      (list_records, delete_record) and close
    - Async context manager support

Design Decisions:
    - Abstract base class: the pager and deleter depend only on this interface,
      so tests can substitute an in-memory client
    - Typed errors: implementations raise RateLimitError, RecordNotFoundError
      or ProviderError instead of returning status codes

See Also:
    - AtprotoRESTConnector: XRPC implementation over aiohttp
    - CollectionPager: consumes list_records
    - RateLimitedDeleter: consumes delete_record
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..models import RecordPage


class RecordsClient(ABC):
    """Abstract base class for PDS record backends."""

    @abstractmethod
    async def list_records(
        self,
        repo: str,
        collection: str,
        limit: int,
        cursor: str | None = None,
    ) -> RecordPage:
        """Fetch one page of records from a collection."""
        pass

    @abstractmethod
    async def delete_record(self, repo: str, collection: str, rkey: str) -> None:
        """Delete one record.

        Raises:
            RateLimitError: The PDS rejected the call as over quota
            RecordNotFoundError: The record does not exist
            ProviderError: Any other failure
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close connections and cleanup resources."""
        pass

    async def __aenter__(self) -> RecordsClient:
        """Context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        await self.close()
