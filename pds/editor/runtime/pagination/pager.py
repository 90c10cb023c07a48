"""Cursor-based collection pager.

This module provides the CollectionPager class that walks a whole collection
through repeated listRecords calls and yields entries in service order.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from time import perf_counter

from ...connectors.atproto.config import DEFAULT_COLLECTION
from ...core.base import RecordsClient
from ...models import RecordEntry
from .definitions import PagePolicy
from .telemetry import log_page_error, log_page_fetched, log_pagination_complete


class CollectionPager:
    """One-shot, forward-only iterator over a collection.

    The pager holds the continuation cursor between calls. It stops when the
    service returns no cursor or a page shorter than the requested size,
    whichever comes first, even if a cursor is still present. Entries are
    never re-sorted.

    Usage:
        pager = CollectionPager(client, repo=did)
        async for entry in pager:
            ...
    """

    def __init__(
        self,
        client: RecordsClient,
        repo: str,
        collection: str = DEFAULT_COLLECTION,
        *,
        policy: PagePolicy | None = None,
    ) -> None:
        """Initialize pager.

        Args:
            client: Backend implementing list_records
            repo: DID or handle of the repository
            collection: Collection NSID
            policy: Optional pagination policy (page size, page cap)
        """
        self._client = client
        self.repo = repo
        self.collection = collection
        self._policy = policy or PagePolicy()
        self._cursor: str | None = None
        self._exhausted = False
        self._started = False
        self.pages_fetched = 0
        self.records_yielded = 0

    @property
    def exhausted(self) -> bool:
        """True once the last page has been fetched."""
        return self._exhausted

    async def fetch_next_page(self) -> list[RecordEntry]:
        """Fetch the next batch of entries.

        Returns:
            Entries of the next page in service order, or an empty list once
            the collection is exhausted
        """
        if self._exhausted:
            return []

        page_index = self.pages_fetched
        started = perf_counter()
        try:
            page = await self._client.list_records(
                self.repo,
                self.collection,
                limit=self._policy.page_size,
                cursor=self._cursor,
            )
        except Exception as e:
            log_page_error(
                collection=self.collection,
                page_index=page_index,
                error_type=type(e).__name__,
                error_message=str(e),
            )
            raise

        self.pages_fetched += 1
        self._cursor = page.cursor
        records = list(page.records)
        self.records_yielded += len(records)

        log_page_fetched(
            collection=self.collection,
            page_index=page_index,
            records=len(records),
            has_cursor=page.cursor is not None,
            latency_ms=(perf_counter() - started) * 1000.0,
        )

        reason = None
        if not page.cursor:
            reason = "no_cursor"
        elif len(records) < self._policy.page_size:
            reason = "short_page"
        elif self._policy.max_pages is not None and self.pages_fetched >= self._policy.max_pages:
            reason = "max_pages"

        if reason is not None:
            self._exhausted = True
            log_pagination_complete(
                collection=self.collection,
                pages_fetched=self.pages_fetched,
                total_records=self.records_yielded,
                reason=reason,
            )

        return records

    def __aiter__(self) -> AsyncIterator[RecordEntry]:
        if self._started:
            raise RuntimeError("CollectionPager is one-shot and has already been iterated")
        self._started = True
        return self._iterate()

    async def _iterate(self) -> AsyncIterator[RecordEntry]:
        while not self._exhausted:
            for entry in await self.fetch_next_page():
                yield entry
