"""Unit tests for cursor pagination."""

from __future__ import annotations

import pytest

from pds.editor.core import ProviderError, RecordsClient
from pds.editor.models import RecordEntry, RecordPage
from pds.editor.runtime.pagination import CollectionPager, PagePolicy

REPO = "did:plc:alice"
COLLECTION = "fm.teal.alpha.feed.play"


def make_page(keys: list[str], cursor: str | None) -> RecordPage:
    return RecordPage(
        records=[RecordEntry.from_uri(f"at://{REPO}/{COLLECTION}/{key}") for key in keys],
        cursor=cursor,
    )


class FakeRecordsClient(RecordsClient):
    """Serves canned pages and records the cursors it was asked for."""

    def __init__(self, pages: list[RecordPage]) -> None:
        self._pages = list(pages)
        self.calls: list[dict] = []

    async def list_records(self, repo, collection, limit, cursor=None):
        self.calls.append({"repo": repo, "collection": collection, "limit": limit, "cursor": cursor})
        if not self._pages:
            raise AssertionError("pager asked for a page after the end")
        return self._pages.pop(0)

    async def delete_record(self, repo, collection, rkey):
        raise NotImplementedError

    async def close(self):
        pass


async def collect(pager: CollectionPager) -> list[str]:
    return [entry.rkey async for entry in pager]


class TestCollectionPager:
    """Test CollectionPager functionality."""

    @pytest.mark.asyncio
    async def test_yields_entries_in_service_order_across_pages(self):
        """Entries come out in page order without re-sorting."""
        client = FakeRecordsClient(
            [
                make_page(["c", "a", "b"], "cur1"),
                make_page(["f", "e", "d"], "cur2"),
                make_page(["g"], None),
            ]
        )
        pager = CollectionPager(client, REPO, COLLECTION, policy=PagePolicy(page_size=3))

        assert await collect(pager) == ["c", "a", "b", "f", "e", "d", "g"]
        assert [call["cursor"] for call in client.calls] == [None, "cur1", "cur2"]
        assert all(call["limit"] == 3 for call in client.calls)
        assert pager.exhausted
        assert pager.pages_fetched == 3

    @pytest.mark.asyncio
    async def test_short_page_ends_iteration_even_with_cursor(self):
        """A page shorter than the page size is the last one."""
        client = FakeRecordsClient(
            [
                make_page(["a", "b", "c"], "cur1"),
                make_page(["d"], "cur2"),
                make_page(["never"], None),
            ]
        )
        pager = CollectionPager(client, REPO, COLLECTION, policy=PagePolicy(page_size=3))

        assert await collect(pager) == ["a", "b", "c", "d"]
        assert len(client.calls) == 2

    @pytest.mark.asyncio
    async def test_missing_cursor_ends_iteration_on_full_page(self):
        client = FakeRecordsClient([make_page(["a", "b"], None), make_page(["never"], None)])
        pager = CollectionPager(client, REPO, COLLECTION, policy=PagePolicy(page_size=2))

        assert await collect(pager) == ["a", "b"]
        assert len(client.calls) == 1

    @pytest.mark.asyncio
    async def test_empty_cursor_counts_as_missing(self):
        client = FakeRecordsClient([make_page(["a", "b"], ""), make_page(["never"], None)])
        pager = CollectionPager(client, REPO, COLLECTION, policy=PagePolicy(page_size=2))

        assert await collect(pager) == ["a", "b"]

    @pytest.mark.asyncio
    async def test_empty_collection(self):
        client = FakeRecordsClient([make_page([], None)])
        pager = CollectionPager(client, REPO, COLLECTION)

        assert await collect(pager) == []
        assert client.calls[0]["limit"] == 100

    @pytest.mark.asyncio
    async def test_pager_is_one_shot(self):
        """Iterating a second time is an error rather than a silent restart."""
        client = FakeRecordsClient([make_page(["a"], None)])
        pager = CollectionPager(client, REPO, COLLECTION)
        await collect(pager)

        with pytest.raises(RuntimeError):
            await collect(pager)

    @pytest.mark.asyncio
    async def test_fetch_next_page_after_exhaustion_returns_empty(self):
        client = FakeRecordsClient([make_page(["a"], None)])
        pager = CollectionPager(client, REPO, COLLECTION)

        first = await pager.fetch_next_page()
        assert [entry.rkey for entry in first] == ["a"]
        assert await pager.fetch_next_page() == []
        assert len(client.calls) == 1

    @pytest.mark.asyncio
    async def test_max_pages_caps_the_walk(self):
        client = FakeRecordsClient(
            [make_page(["a", "b"], "cur1"), make_page(["c", "d"], "cur2"), make_page(["e"], None)]
        )
        pager = CollectionPager(
            client, REPO, COLLECTION, policy=PagePolicy(page_size=2, max_pages=2)
        )

        assert await collect(pager) == ["a", "b", "c", "d"]
        assert len(client.calls) == 2

    @pytest.mark.asyncio
    async def test_errors_propagate(self):
        class FailingClient(FakeRecordsClient):
            async def list_records(self, repo, collection, limit, cursor=None):
                raise ProviderError("unreachable", status_code=502)

        pager = CollectionPager(FailingClient([]), REPO, COLLECTION)

        with pytest.raises(ProviderError):
            await collect(pager)


class TestPagePolicy:
    """Test PagePolicy validation."""

    @pytest.mark.parametrize("page_size", [0, 101])
    def test_page_size_bounds(self, page_size):
        with pytest.raises(ValueError):
            PagePolicy(page_size=page_size)

    def test_max_pages_must_be_positive(self):
        with pytest.raises(ValueError):
            PagePolicy(max_pages=0)
