"""TID (timestamp identifier) decoding.

TIDs are 13-character record keys in the base32-sortable encoding used by
the AT Protocol. Format: ``TTTTTTTTTTTCC`` where the 11 ``T`` characters are
a big-endian microsecond timestamp and ``CC`` is an opaque clock id.

Because every digit uses the same alphabet in ascending order, the string
order of two TIDs matches the order of their timestamps.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

from .exceptions import MalformedIdentifierError

TID_ALPHABET = "234567abcdefghijklmnopqrstuvwxyz"
TID_LENGTH = 13
TIMESTAMP_DIGITS = 11

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)

_DIGIT_VALUES = {char: index for index, char in enumerate(TID_ALPHABET)}


def _decode_char(char: str) -> int:
    value = _DIGIT_VALUES.get(char.lower())
    if value is None:
        raise MalformedIdentifierError(f"Invalid base32 character: {char!r}")
    return value


def validate_tid(tid: str) -> None:
    """Check length and alphabet of a TID.

    Raises:
        MalformedIdentifierError: If the TID is structurally invalid
    """
    if not isinstance(tid, str) or len(tid) != TID_LENGTH:
        length = len(tid) if isinstance(tid, str) else "n/a"
        raise MalformedIdentifierError(
            f"Invalid TID length: {length}, expected {TID_LENGTH}", tid=str(tid)
        )
    for char in tid:
        if char.lower() not in _DIGIT_VALUES:
            raise MalformedIdentifierError(f"Invalid base32 character: {char!r}", tid=tid)


def tid_to_micros(tid: str) -> int:
    """Decode the timestamp part of a TID to microseconds since epoch.

    Args:
        tid: 13-character TID string (case-insensitive)

    Returns:
        Microseconds since the Unix epoch

    Raises:
        MalformedIdentifierError: If the TID is structurally invalid
    """
    validate_tid(tid)
    micros = 0
    for char in tid[:TIMESTAMP_DIGITS]:
        micros = micros * 32 + _decode_char(char)
    return micros


def tid_to_datetime(tid: str) -> datetime:
    """Decode a TID to its creation time (UTC, millisecond precision).

    Sub-millisecond digits are truncated, not rounded.

    Examples:
        >>> tid_to_datetime("2222222222222")
        datetime.datetime(1970, 1, 1, 0, 0, tzinfo=datetime.timezone.utc)
    """
    milliseconds = tid_to_micros(tid) // 1000
    return EPOCH + timedelta(milliseconds=milliseconds)


def as_utc(value: datetime) -> datetime:
    """Return ``value`` with naive datetimes taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def tid_in_range(tid: str, start: datetime, end: datetime) -> bool:
    """Check whether a TID falls within ``[start, end]`` (both inclusive).

    Naive bounds are taken as UTC.
    """
    created_at = tid_to_datetime(tid)
    return as_utc(start) <= created_at <= as_utc(end)


def format_tid(tid: str) -> str:
    """Format a TID with its decoded timestamp for display. Never raises."""
    try:
        created_at = tid_to_datetime(tid)
    except MalformedIdentifierError:
        return f"{tid} (invalid)"
    return f"{tid} ({format_timestamp(created_at)})"


def format_timestamp(value: datetime) -> str:
    """ISO-8601 with millisecond precision and a ``Z`` suffix."""
    return value.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")
