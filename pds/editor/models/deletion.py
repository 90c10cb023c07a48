"""Deletion progress and result models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class DeleteProgress(BaseModel):
    """Progress report emitted after every record."""

    current: int = Field(..., ge=1)
    total: int = Field(..., ge=1)
    rkey: str
    success: bool
    error: str | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def percent(self) -> float:
        return self.current / self.total * 100


class DeleteResult(BaseModel):
    """Aggregate outcome of a deletion run."""

    deleted: int = Field(default=0, ge=0)
    failed: int = Field(default=0, ge=0)
    errors: list[str] = Field(default_factory=list)

    @property
    def total(self) -> int:
        return self.deleted + self.failed
