"""Hourly deletion quota window."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class RateLimitWindow:
    """Deletions counted in the current window and when the window started.

    Owned by a single RateLimitedDeleter; times are wall-clock seconds.
    """

    window_start: float
    count: int = 0

    def elapsed(self, now: float) -> float:
        return now - self.window_start

    def reset(self, now: float) -> None:
        self.count = 0
        self.window_start = now

    def record(self) -> None:
        self.count += 1
