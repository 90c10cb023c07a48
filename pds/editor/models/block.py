"""Block of closely spaced records."""

from __future__ import annotations

from datetime import datetime, timedelta

from pydantic import BaseModel, ConfigDict, Field

from .record import RecordRef

SAMPLE_SIZE = 5


class Block(BaseModel):
    """Run of time-ordered records whose adjacent gaps stay under a threshold."""

    index: int = Field(..., ge=1)
    records: list[RecordRef] = Field(..., min_length=1)

    model_config = ConfigDict(frozen=True)

    @property
    def size(self) -> int:
        return len(self.records)

    @property
    def first_timestamp(self) -> datetime:
        return self.records[0].created_at

    @property
    def last_timestamp(self) -> datetime:
        return self.records[-1].created_at

    @property
    def span(self) -> timedelta:
        """Time between the first and last record."""
        return self.last_timestamp - self.first_timestamp

    @property
    def average_gap(self) -> timedelta:
        """Mean gap between consecutive records (zero for a single record)."""
        if self.size < 2:
            return timedelta(0)
        return self.span / (self.size - 1)

    @property
    def sample_rkeys(self) -> list[str]:
        """Record keys of the first few members."""
        return [record.rkey for record in self.records[:SAMPLE_SIZE]]
