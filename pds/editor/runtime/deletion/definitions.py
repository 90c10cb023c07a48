"""Deletion policy structures."""

from __future__ import annotations

from dataclasses import dataclass

from ...connectors.atproto.config import MAX_DELETIONS_PER_HOUR, SERVICE_DELETIONS_PER_HOUR


@dataclass(frozen=True)
class DeletionPolicy:
    """Quota and retry policy for bulk deletion.

    Attributes:
        max_per_window: Deletions allowed per window before pausing
        window_seconds: Length of the quota window
        window_buffer_seconds: Extra wait after a window ends before resuming
        max_retries: Attempts per record (rate-limit waits are not counted)
        base_delay_seconds: Backoff base; attempt n waits base * 2**n
        inter_record_delay_seconds: Pause after every record
    """

    max_per_window: int = MAX_DELETIONS_PER_HOUR
    window_seconds: float = 3600.0
    window_buffer_seconds: float = 1.0
    max_retries: int = 3
    base_delay_seconds: float = 1.0
    inter_record_delay_seconds: float = 0.05

    def __post_init__(self) -> None:
        """Validate policy configuration."""
        if self.max_per_window <= 0:
            raise ValueError("max_per_window must be positive")
        if self.max_per_window > SERVICE_DELETIONS_PER_HOUR:
            raise ValueError(
                f"max_per_window must not exceed the service limit of {SERVICE_DELETIONS_PER_HOUR}"
            )
        if self.window_seconds <= 0:
            raise ValueError("window_seconds must be positive")
        if self.max_retries <= 0:
            raise ValueError("max_retries must be positive")
        if min(self.window_buffer_seconds, self.base_delay_seconds, self.inter_record_delay_seconds) < 0:
            raise ValueError("delays must not be negative")

    def backoff(self, attempt: int) -> float:
        """Backoff before retrying after zero-based ``attempt`` failed."""
        return self.base_delay_seconds * (2**attempt)
