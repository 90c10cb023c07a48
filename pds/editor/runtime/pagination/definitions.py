"""Pagination policy structures."""

from __future__ import annotations

from dataclasses import dataclass

from ...connectors.atproto.config import PAGE_SIZE


@dataclass(frozen=True)
class PagePolicy:
    """Pagination policy for a collection walk.

    Attributes:
        page_size: Records requested per listRecords call (1-100)
        max_pages: Maximum number of pages to fetch (None = unlimited)
    """

    page_size: int = PAGE_SIZE
    max_pages: int | None = None

    def __post_init__(self) -> None:
        """Validate policy configuration."""
        if not 1 <= self.page_size <= PAGE_SIZE:
            raise ValueError(f"page_size must be between 1 and {PAGE_SIZE}")
        if self.max_pages is not None and self.max_pages <= 0:
            raise ValueError("max_pages must be None or a positive integer")
