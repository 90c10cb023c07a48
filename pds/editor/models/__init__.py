"""Data models for collection records.

Architecture:
    This module exports the Pydantic v2 models used throughout the library.
    Records, pages, blocks and progress reports are immutable (frozen=True);
    only the aggregate DeleteResult is built up during a run.

Model Categories:
    - Listing: RecordEntry, RecordPage
    - Selection: RecordRef, Block
    - Deletion: DeleteProgress, DeleteResult
    - Auth: Session
"""

from .block import Block
from .deletion import DeleteProgress, DeleteResult
from .record import RecordEntry, RecordPage, RecordRef, rkey_from_uri
from .session import Session

__all__ = [
    "Block",
    "DeleteProgress",
    "DeleteResult",
    "RecordEntry",
    "RecordPage",
    "RecordRef",
    "Session",
    "rkey_from_uri",
]
