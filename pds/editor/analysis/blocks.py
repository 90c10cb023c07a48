"""Detection of rapid runs of records (e.g. bulk-imported scrobbles).

A block is a maximal run of time-ordered records in which every gap between
neighbours is at most a threshold. Only blocks with at least
``min_block_size`` members are reported, numbered from 1 in time order.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import timedelta

from ..models import Block, RecordRef

logger = logging.getLogger(__name__)

DEFAULT_GAP = timedelta(seconds=45)
DEFAULT_MIN_BLOCK_SIZE = 10


class GapClusterAnalyzer:
    """Single forward pass over records sorted oldest first."""

    def __init__(
        self,
        gap_threshold: timedelta | float = DEFAULT_GAP,
        min_block_size: int = DEFAULT_MIN_BLOCK_SIZE,
    ) -> None:
        """Initialize analyzer.

        Args:
            gap_threshold: Largest gap (inclusive) that keeps a run going;
                numbers are seconds
            min_block_size: Smallest run that is reported

        Raises:
            ValueError: If the threshold is not positive or the size is below 1
        """
        if not isinstance(gap_threshold, timedelta):
            gap_threshold = timedelta(seconds=gap_threshold)
        if gap_threshold <= timedelta(0):
            raise ValueError("gap_threshold must be positive")
        if min_block_size < 1:
            raise ValueError("min_block_size must be at least 1")
        self.gap_threshold = gap_threshold
        self.min_block_size = min_block_size

    def find_blocks(self, records: Iterable[RecordRef]) -> list[Block]:
        """Report every qualifying run.

        ``records`` must already be sorted by ``created_at``; they are not
        re-sorted here.
        """
        blocks: list[Block] = []
        current: list[RecordRef] = []

        for record in records:
            if current and record.created_at - current[-1].created_at <= self.gap_threshold:
                current.append(record)
                continue
            self._emit(current, blocks)
            current = [record]

        self._emit(current, blocks)

        logger.info(
            "block_scan_complete",
            extra={
                "blocks": len(blocks),
                "gap_seconds": self.gap_threshold.total_seconds(),
                "min_block_size": self.min_block_size,
            },
        )
        return blocks

    def _emit(self, current: list[RecordRef], blocks: list[Block]) -> None:
        if current and len(current) >= self.min_block_size:
            blocks.append(Block(index=len(blocks) + 1, records=current))


def find_blocks(
    records: Iterable[RecordRef],
    gap_threshold: timedelta | float = DEFAULT_GAP,
    min_block_size: int = DEFAULT_MIN_BLOCK_SIZE,
) -> list[Block]:
    """Functional shortcut for ``GapClusterAnalyzer(...).find_blocks(records)``."""
    return GapClusterAnalyzer(gap_threshold, min_block_size).find_blocks(records)
