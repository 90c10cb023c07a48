"""Rate-limited bulk deletion.

This module provides the RateLimitedDeleter class that deletes a selection
of records one by one under an hourly quota, retrying transient failures and
treating already-deleted records as success.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable, Sequence

from ...connectors.atproto.config import DEFAULT_COLLECTION
from ...core.base import RecordsClient
from ...core.exceptions import ProviderError, RateLimitError, RecordNotFoundError
from ...models import DeleteProgress, DeleteResult, RecordRef
from .definitions import DeletionPolicy
from .window import RateLimitWindow

logger = logging.getLogger(__name__)

ProgressSink = Callable[[DeleteProgress], None]


class RateLimitedDeleter:
    """Deletes records in order under a per-window quota.

    Records are processed strictly in input order, which is also the order in
    which quota slots are consumed. Per-record failures never abort the batch
    and nothing is rolled back.

    The clock and sleep function are injectable; the window uses wall-clock
    time as returned by ``clock``.
    """

    def __init__(
        self,
        client: RecordsClient,
        repo: str,
        collection: str = DEFAULT_COLLECTION,
        *,
        policy: DeletionPolicy | None = None,
        clock: Callable[[], float] = time.time,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        """Initialize deleter.

        Args:
            client: Backend implementing delete_record
            repo: DID of the repository
            collection: Collection NSID
            policy: Quota and retry policy
            clock: Returns wall-clock seconds since epoch
            sleep: Awaitable sleep taking seconds
        """
        self._client = client
        self.repo = repo
        self.collection = collection
        self._policy = policy or DeletionPolicy()
        self._clock = clock
        self._sleep = sleep
        self._window: RateLimitWindow | None = None

    @property
    def policy(self) -> DeletionPolicy:
        """Quota and retry policy in effect."""
        return self._policy

    @property
    def window(self) -> RateLimitWindow | None:
        """Quota window of the current or last run."""
        return self._window

    async def delete_all(
        self,
        records: Sequence[RecordRef],
        on_progress: ProgressSink | None = None,
    ) -> DeleteResult:
        """Delete every record, reporting progress after each one.

        Args:
            records: Records to delete, in the order quota should be spent
            on_progress: Optional callback invoked after every record

        Returns:
            DeleteResult with deleted/failed counts and failure messages in
            encounter order
        """
        self._window = RateLimitWindow(window_start=self._clock())
        result = DeleteResult()
        total = len(records)

        for index, record in enumerate(records, start=1):
            await self._enforce_quota()

            error: str | None = None
            try:
                await self._delete_with_retry(record.rkey)
            except ProviderError as e:
                error = str(e)
                result.failed += 1
                result.errors.append(f"Failed to delete {record.rkey}: {error}")
                logger.error(
                    "record_delete_failed",
                    extra={"rkey": record.rkey, "error_type": type(e).__name__, "error": error},
                )
            else:
                result.deleted += 1
                self._window.record()

            if on_progress:
                on_progress(
                    DeleteProgress(
                        current=index,
                        total=total,
                        rkey=record.rkey,
                        success=error is None,
                        error=error,
                    )
                )

            await self._sleep(self._policy.inter_record_delay_seconds)

        logger.info(
            "deletion_complete",
            extra={"deleted": result.deleted, "failed": result.failed, "total": total},
        )
        return result

    async def _enforce_quota(self) -> None:
        window = self._window
        policy = self._policy
        now = self._clock()

        if window.elapsed(now) >= policy.window_seconds:
            window.reset(now)

        if window.count >= policy.max_per_window:
            wait = policy.window_seconds - window.elapsed(now)
            logger.warning(
                "Deletion quota of %d per window reached. Waiting %d minutes for the window to reset",
                policy.max_per_window,
                max(0, round(wait / 60)),
            )
            await self._sleep(wait + policy.window_buffer_seconds)
            window.reset(self._clock())

    async def _delete_with_retry(self, rkey: str) -> None:
        """Delete one record.

        Rate-limit waits retry the same attempt. A missing record counts as
        deleted.

        Raises:
            ProviderError: The last error once all attempts are used
        """
        max_retries = self._policy.max_retries
        last_error: ProviderError | None = None
        attempt = 0

        while attempt < max_retries:
            try:
                await self._client.delete_record(self.repo, self.collection, rkey)
                return
            except RateLimitError as e:
                wait = e.wait_seconds(self._clock())
                logger.warning("Rate limited. Waiting %ds...", round(wait))
                await self._sleep(wait)
                continue
            except RecordNotFoundError:
                logger.debug("record_already_absent", extra={"rkey": rkey})
                return
            except ProviderError as e:
                last_error = e
                if attempt < max_retries - 1:
                    delay = self._policy.backoff(attempt)
                    logger.warning("Retrying %s in %.1fs after error: %s", rkey, delay, e)
                    await self._sleep(delay)
                attempt += 1

        raise last_error
