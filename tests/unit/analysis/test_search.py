"""Unit tests for glob search over play records."""

from __future__ import annotations

import pytest

from pds.editor.analysis import SearchCriteria, search_records
from pds.editor.analysis.search import describe_play, glob_to_regex, matches
from pds.editor.models import RecordEntry


def play(rkey: str, artist: str | None, album: str | None, track: str | None) -> RecordEntry:
    value = {"releaseName": album, "trackName": track, "playedTime": "2024-03-01T12:00:00Z"}
    if artist is not None:
        value["artists"] = [{"artistName": artist}]
    return RecordEntry.from_uri(f"at://did:plc:alice/fm.teal.alpha.feed.play/{rkey}", value=value)


async def stream(entries):
    for item in entries:
        yield item


class TestGlob:
    """Test glob_to_regex / matches."""

    def test_wildcard_and_case(self):
        assert matches("The Beatles", "*beatles")
        assert matches("The Beatles", "the*")
        assert not matches("The Beatles", "beatles")

    def test_regex_metacharacters_are_literal(self):
        assert matches("AC/DC (Live)", "ac/dc (live)")
        assert not matches("ACxDC", "AC.DC")
        assert glob_to_regex("a+b").match("a+b")

    def test_missing_value_never_matches(self):
        assert not matches(None, "*")


class TestSearchCriteria:
    """Test SearchCriteria.accepts."""

    def test_requires_one_pattern(self):
        with pytest.raises(ValueError):
            SearchCriteria()

    def test_all_given_patterns_must_match(self):
        record = play("a", "Radiohead", "OK Computer", "Airbag")

        assert SearchCriteria(artist_name="radio*").accepts(record)
        assert SearchCriteria(artist_name="radio*", album_name="ok*").accepts(record)
        assert not SearchCriteria(artist_name="radio*", track_name="karma*").accepts(record)

    def test_record_without_artists(self):
        record = play("a", None, "Album", "Track")

        assert not SearchCriteria(artist_name="*").accepts(record)
        assert SearchCriteria(track_name="track").accepts(record)


class TestSearchRecords:
    """Test search_records."""

    @pytest.mark.asyncio
    async def test_counts_and_keeps_scan_order(self):
        records = [
            play("a", "Radiohead", "OK Computer", "Airbag"),
            play("b", "Portishead", "Dummy", "Roads"),
            play("c", "Radiohead", "Kid A", "Idioteque"),
        ]
        progress: list[tuple[int, int]] = []

        result = await search_records(
            stream(records),
            SearchCriteria(artist_name="radiohead"),
            on_progress=lambda s, m: progress.append((s, m)),
            progress_every=2,
        )

        assert result.scanned == 3
        assert result.matched == 2
        assert [entry.rkey for entry in result.matches] == ["a", "c"]
        assert progress == [(2, 1), (3, 2)]

    def test_describe_play(self):
        assert (
            describe_play(play("a", "Radiohead", "OK Computer", "Airbag"))
            == "Airbag - Radiohead - OK Computer (2024-03-01T12:00:00Z)"
        )
