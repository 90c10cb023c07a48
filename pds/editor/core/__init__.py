"""Core components."""

from .base import RecordsClient
from .exceptions import (
    AuthenticationError,
    EditorError,
    InvalidRangeError,
    MalformedIdentifierError,
    ProviderError,
    RateLimitError,
    RecordNotFoundError,
)
from .tid import (
    TID_ALPHABET,
    TID_LENGTH,
    as_utc,
    format_tid,
    format_timestamp,
    tid_in_range,
    tid_to_datetime,
    tid_to_micros,
    validate_tid,
)

__all__ = [
    "RecordsClient",
    "EditorError",
    "MalformedIdentifierError",
    "InvalidRangeError",
    "ProviderError",
    "RateLimitError",
    "RecordNotFoundError",
    "AuthenticationError",
    "TID_ALPHABET",
    "TID_LENGTH",
    "as_utc",
    "format_tid",
    "format_timestamp",
    "tid_in_range",
    "tid_to_datetime",
    "tid_to_micros",
    "validate_tid",
]
