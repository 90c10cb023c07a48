"""Glob search over play record fields."""

from __future__ import annotations

import re
from collections.abc import AsyncIterable, Callable
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any

from ..models import RecordEntry


@lru_cache(maxsize=64)
def glob_to_regex(pattern: str) -> re.Pattern[str]:
    """Compile a glob with ``*`` wildcards into an anchored, case-insensitive regex."""
    escaped = re.escape(pattern).replace(r"\*", ".*")
    return re.compile(f"^{escaped}$", re.IGNORECASE | re.DOTALL)


def matches(value: str | None, pattern: str) -> bool:
    if value is None:
        return False
    return glob_to_regex(pattern).match(str(value)) is not None


def _artist_name(value: dict[str, Any]) -> str | None:
    artists = value.get("artists")
    if isinstance(artists, list) and artists and isinstance(artists[0], dict):
        return artists[0].get("artistName")
    return None


@dataclass(frozen=True)
class SearchCriteria:
    """Patterns matched against the first artist, release and track name."""

    artist_name: str | None = None
    album_name: str | None = None
    track_name: str | None = None

    def __post_init__(self) -> None:
        if not (self.artist_name or self.album_name or self.track_name):
            raise ValueError("Provide at least one of artist_name, album_name, track_name")

    def accepts(self, entry: RecordEntry) -> bool:
        value = entry.value
        if self.artist_name and not matches(_artist_name(value), self.artist_name):
            return False
        if self.album_name and not matches(value.get("releaseName"), self.album_name):
            return False
        if self.track_name and not matches(value.get("trackName"), self.track_name):
            return False
        return True


@dataclass
class SearchResult:
    scanned: int = 0
    matches: list[RecordEntry] = field(default_factory=list)

    @property
    def matched(self) -> int:
        return len(self.matches)


def describe_play(entry: RecordEntry) -> str:
    """One-line ``track - artist - album (played time)`` summary."""
    value = entry.value
    played_at = value.get("playedTime") or "unknown"
    return (
        f"{value.get('trackName')} - {_artist_name(value)} - {value.get('releaseName')} "
        f"({played_at})"
    )


async def search_records(
    entries: AsyncIterable[RecordEntry],
    criteria: SearchCriteria,
    on_progress: Callable[[int, int], None] | None = None,
    progress_every: int = 500,
) -> SearchResult:
    """Scan all entries and keep those accepted by ``criteria``, in scan order."""
    result = SearchResult()
    async for entry in entries:
        result.scanned += 1
        if criteria.accepts(entry):
            result.matches.append(entry)
        if on_progress and result.scanned % progress_every == 0:
            on_progress(result.scanned, result.matched)
    if on_progress:
        on_progress(result.scanned, result.matched)
    return result
