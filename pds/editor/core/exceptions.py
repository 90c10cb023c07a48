"""Custom exception hierarchy."""

from __future__ import annotations

import time


class EditorError(Exception):
    """Base exception for all library errors."""

    pass


class MalformedIdentifierError(EditorError, ValueError):
    """Record key is not a structurally valid TID.

    Raised by the TID codec when the key has the wrong length or contains a
    character outside the base32-sortable alphabet.
    """

    def __init__(self, message: str, tid: str | None = None) -> None:
        super().__init__(message)
        self.tid = tid


class InvalidRangeError(EditorError, ValueError):
    """Start of a time range is after its end."""

    pass


class ProviderError(EditorError):
    """Error from the remote PDS."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        error_code: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.error_code = error_code


class RateLimitError(ProviderError):
    """PDS rate limit exceeded.

    ``reset_at`` is the ``ratelimit-reset`` hint (seconds since epoch) when the
    server sent one.
    """

    DEFAULT_WAIT = 60.0
    MIN_WAIT = 1.0

    def __init__(self, message: str, reset_at: float | None = None) -> None:
        super().__init__(message, status_code=429, error_code="RateLimitExceeded")
        self.reset_at = reset_at

    def wait_seconds(self, now: float | None = None) -> float:
        """Seconds to wait before retrying, never below ``MIN_WAIT``."""
        if self.reset_at is None:
            wait = self.DEFAULT_WAIT
        else:
            wait = self.reset_at - (time.time() if now is None else now)
        return max(wait, self.MIN_WAIT)


class RecordNotFoundError(ProviderError):
    """Delete target does not exist."""

    pass


class AuthenticationError(ProviderError):
    """Credentials missing or rejected by the PDS."""

    pass
