"""Time-range selection over paged entries."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterable, Callable
from datetime import datetime

from ..core.exceptions import InvalidRangeError, MalformedIdentifierError
from ..core.tid import as_utc, tid_to_datetime
from ..models import RecordEntry, RecordRef

logger = logging.getLogger(__name__)

ScanProgress = Callable[[int, int], None]

DEFAULT_PROGRESS_EVERY = 100


class RangeSelector:
    """Decodes paged entries and collects them in creation-time order.

    Entries whose record key is not a valid TID are skipped with a warning.
    Results are materialized, then stable-sorted oldest first so ties keep
    scan order.
    """

    def __init__(
        self,
        on_progress: ScanProgress | None = None,
        progress_every: int = DEFAULT_PROGRESS_EVERY,
    ) -> None:
        """Initialize selector.

        Args:
            on_progress: Called with (scanned, matched) every ``progress_every``
                entries and once at the end
            progress_every: Progress cadence in scanned entries
        """
        if progress_every <= 0:
            raise ValueError("progress_every must be positive")
        self._on_progress = on_progress
        self._progress_every = progress_every
        self.skipped = 0

    async def select(
        self,
        entries: AsyncIterable[RecordEntry],
        start: datetime,
        end: datetime,
    ) -> list[RecordRef]:
        """Collect entries created within ``[start, end]``, both inclusive.

        Naive bounds are taken as UTC.

        Raises:
            InvalidRangeError: If start is after end (checked before scanning)
        """
        start, end = as_utc(start), as_utc(end)
        if start > end:
            raise InvalidRangeError(
                f"start ({start.isoformat()}) must not be after end ({end.isoformat()})"
            )
        return await self._scan(entries, lambda created_at: start <= created_at <= end)

    async def collect(self, entries: AsyncIterable[RecordEntry]) -> list[RecordRef]:
        """Collect every decodable entry, oldest first."""
        return await self._scan(entries, None)

    async def count_all(self, entries: AsyncIterable[RecordEntry]) -> int:
        """Count entries without decoding or filtering."""
        scanned = 0
        async for _ in entries:
            scanned += 1
            if self._on_progress and scanned % self._progress_every == 0:
                self._on_progress(scanned, scanned)
        if self._on_progress:
            self._on_progress(scanned, scanned)
        return scanned

    async def _scan(
        self,
        entries: AsyncIterable[RecordEntry],
        accept: Callable[[datetime], bool] | None,
    ) -> list[RecordRef]:
        matches: list[RecordRef] = []
        scanned = 0
        self.skipped = 0

        async for entry in entries:
            scanned += 1
            try:
                created_at = tid_to_datetime(entry.rkey)
            except MalformedIdentifierError as e:
                self.skipped += 1
                logger.warning("Skipping record with invalid TID %s: %s", entry.rkey, e)
            else:
                if accept is None or accept(created_at):
                    matches.append(RecordRef(rkey=entry.rkey, uri=entry.uri, created_at=created_at))

            if self._on_progress and scanned % self._progress_every == 0:
                self._on_progress(scanned, len(matches))

        if self._on_progress:
            self._on_progress(scanned, len(matches))

        matches.sort(key=lambda record: record.created_at)
        return matches
