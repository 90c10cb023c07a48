"""Structured logging for pagination.

This module provides telemetry hooks for collection walks, emitting
structured logs for observability.
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def log_page_fetched(
    *,
    collection: str,
    page_index: int,
    records: int,
    has_cursor: bool,
    latency_ms: float | None = None,
) -> None:
    """Log completion of a single page.

    Args:
        collection: Collection NSID
        page_index: Zero-based index of the page
        records: Number of records in the page
        has_cursor: Whether the service returned a continuation cursor
        latency_ms: Latency in milliseconds (optional)
    """
    logger.debug(
        "page_fetched",
        extra={
            "collection": collection,
            "page_index": page_index,
            "records": records,
            "has_cursor": has_cursor,
            "latency_ms": latency_ms,
        },
    )


def log_pagination_complete(
    *,
    collection: str,
    pages_fetched: int,
    total_records: int,
    reason: str,
) -> None:
    """Log the end of a collection walk.

    Args:
        collection: Collection NSID
        pages_fetched: Number of listRecords calls made
        total_records: Records yielded across all pages
        reason: Why pagination stopped ("no_cursor", "short_page", "max_pages")
    """
    logger.info(
        "pagination_complete",
        extra={
            "collection": collection,
            "pages_fetched": pages_fetched,
            "total_records": total_records,
            "reason": reason,
        },
    )


def log_page_error(
    *,
    collection: str,
    page_index: int,
    error_type: str,
    error_message: str,
) -> None:
    """Log a failed page fetch."""
    logger.error(
        "page_error",
        extra={
            "collection": collection,
            "page_index": page_index,
            "error_type": error_type,
            "error_message": error_message,
        },
    )
