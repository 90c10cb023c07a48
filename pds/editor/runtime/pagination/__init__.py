"""Cursor pagination over a PDS collection.

Architecture:
    The pagination layer consists of:
    - definitions.py: Pagination policy (page size, page cap)
    - pager.py: CollectionPager, a one-shot cursor-holding iterator
    - telemetry.py: Structured logging
"""

from __future__ import annotations

from .definitions import PagePolicy
from .pager import CollectionPager

__all__ = ["CollectionPager", "PagePolicy"]
