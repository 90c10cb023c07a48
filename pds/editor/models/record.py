"""Record data models."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def rkey_from_uri(uri: str) -> str:
    """Extract the record key from ``at://<did>/<collection>/<rkey>``."""
    return uri.rstrip("/").rsplit("/", 1)[-1]


class RecordEntry(BaseModel):
    """Raw collection entry as returned by ``listRecords``."""

    uri: str = Field(..., min_length=1)
    rkey: str = Field(..., min_length=1)
    cid: str | None = None
    value: dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_uri(cls, uri: str, cid: str | None = None, value: dict[str, Any] | None = None):
        """Build an entry whose record key is the last path segment of ``uri``."""
        return cls(uri=uri, rkey=rkey_from_uri(uri), cid=cid, value=value or {})


class RecordPage(BaseModel):
    """One page of ``listRecords`` output."""

    records: list[RecordEntry] = Field(default_factory=list)
    cursor: str | None = None

    model_config = ConfigDict(frozen=True)

    @field_validator("cursor")
    @classmethod
    def empty_cursor_is_none(cls, v: str | None) -> str | None:
        """An empty cursor means there is no next page."""
        return v or None


class RecordRef(BaseModel):
    """Record selected for deletion or analysis, with its decoded creation time."""

    rkey: str = Field(..., min_length=1)
    uri: str = Field(..., min_length=1)
    created_at: datetime

    model_config = ConfigDict(frozen=True)
