"""Command line entry point.

Usage:
    # Preview records created in a time range
    pds-editor delete --start 2024-03-01T00:00:00Z --end 2024-03-15T23:59:59Z --dry-run

    # Delete them (asks for confirmation unless --yes)
    pds-editor delete --start 2024-03-01 --end 2024-03-15

    # Find runs of plays less than 45s apart, at least 10 long
    pds-editor analyze --gap 45 --min-block 10

    # Glob search on play fields
    pds-editor search --artist-name "*beatles*" --count

Credentials come from BLUESKY_HANDLE / BLUESKY_APP_PASSWORD (environment or
.env); PDS_URL selects the server.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
import time
from collections.abc import Sequence
from datetime import datetime

from .analysis import GapClusterAnalyzer, RangeSelector, SearchCriteria, search_records
from .analysis.search import describe_play
from .config import Settings, load_settings
from .connectors.atproto import AtprotoRESTConnector
from .core import EditorError, RecordsClient, as_utc, format_tid, format_timestamp
from .models import Block, DeleteProgress, RecordRef
from .runtime.deletion import RateLimitedDeleter
from .runtime.pagination import CollectionPager

logger = logging.getLogger(__name__)

PREVIEW_HEAD = 10
PREVIEW_TAIL = 5
MAX_ERRORS_SHOWN = 10


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 date or datetime; naive values are taken as UTC."""
    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"Invalid date: {value}") from e
    return as_utc(parsed)


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"Invalid value: {value}") from e
    if number <= 0:
        raise argparse.ArgumentTypeError(f"Invalid value: {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pds-editor", description="Bulk maintenance of play records in a PDS collection"
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    delete = subparsers.add_parser("delete", help="Delete records created in a time range")
    delete.add_argument(
        "--start", type=parse_timestamp, required=True, help="Range start (ISO-8601, inclusive)"
    )
    delete.add_argument(
        "--end", type=parse_timestamp, required=True, help="Range end (ISO-8601, inclusive)"
    )
    delete.add_argument("--dry-run", action="store_true", help="Only list matching records")
    delete.add_argument("--yes", action="store_true", help="Skip the confirmation prompt")

    analyze = subparsers.add_parser("analyze", help="Detect rapid-scrobble blocks")
    analyze.add_argument("--gap", type=_positive_int, default=45, help="Gap threshold in seconds")
    analyze.add_argument("--min-block", type=_positive_int, default=10, help="Minimum block size")

    search = subparsers.add_parser("search", help="Search play records by glob pattern")
    search.add_argument("--artist-name")
    search.add_argument("--album-name")
    search.add_argument("--track-name")
    search.add_argument("--count", action="store_true", help="Only print the number of matches")

    subparsers.add_parser("count", help="Count records in the collection")
    return parser


def _write_progress(text: str) -> None:
    sys.stdout.write(f"\r{text}")
    sys.stdout.flush()


def print_preview(records: Sequence[RecordRef]) -> None:
    """Print the first 10 and last 5 records of a selection."""
    print(f"Found {len(records)} records to delete:")
    print("-" * 50)
    for record in records[:PREVIEW_HEAD]:
        print(f"  {format_tid(record.rkey)}")

    if len(records) > PREVIEW_HEAD + PREVIEW_TAIL:
        print(f"  ... ({len(records) - PREVIEW_HEAD - PREVIEW_TAIL} more)")
        tail = records[-PREVIEW_TAIL:]
    else:
        tail = records[PREVIEW_HEAD:]
    for record in tail:
        print(f"  {format_tid(record.rkey)}")

    print("-" * 50)
    print(
        f"Time range: {format_timestamp(records[0].created_at)} "
        f"to {format_timestamp(records[-1].created_at)}"
    )
    print()


def print_block(block: Block) -> None:
    print(f"Block #{block.index}: {block.size:,} records")
    print(f"  From: {format_timestamp(block.first_timestamp)}")
    print(f"  To:   {format_timestamp(block.last_timestamp)}")
    print(f"  Avg gap: {block.average_gap.total_seconds():.1f}s")
    print(f"  First {len(block.sample_rkeys)} rkeys: {', '.join(block.sample_rkeys)}")
    print()


def _confirm(message: str) -> bool:
    try:
        answer = input(f"{message} (yes/no): ")
    except EOFError:
        return False
    return answer.strip().lower() == "yes"


async def cmd_delete(args: argparse.Namespace, client: RecordsClient, repo: str, collection: str) -> int:
    print("Scanning records...")
    selector = RangeSelector(
        on_progress=lambda scanned, matched: _write_progress(f"Scanned: {scanned}, Matched: {matched}")
    )
    records = await selector.select(CollectionPager(client, repo, collection), args.start, args.end)
    print("\n")

    if not records:
        print("No records found in the specified time range.")
        return 0

    print_preview(records)

    if args.dry_run:
        print("DRY RUN complete. No records were deleted.")
        print("Run without --dry-run to delete these records.")
        return 0

    if not args.yes and not _confirm(
        f"\nAre you sure you want to delete {len(records)} records? This cannot be undone."
    ):
        print("Aborted.")
        return 0

    print("\nDeleting records...")
    started = time.monotonic()

    def on_progress(progress: DeleteProgress) -> None:
        status = "Deleted" if progress.success else "FAILED"
        _write_progress(
            f"[{progress.current}/{progress.total}] ({progress.percent:.1f}%) {status}: {progress.rkey}    "
        )

    deleter = RateLimitedDeleter(client, repo, collection)
    result = await deleter.delete_all(records, on_progress)

    print("\n")
    print("=" * 50)
    print(f"Completed in {time.monotonic() - started:.1f}s")
    print(f"  Deleted: {result.deleted}")
    print(f"  Failed: {result.failed}")

    if result.errors:
        print("\nErrors:")
        for error in result.errors[:MAX_ERRORS_SHOWN]:
            print(f"  - {error}")
        if len(result.errors) > MAX_ERRORS_SHOWN:
            print(f"  ... and {len(result.errors) - MAX_ERRORS_SHOWN} more")

    return 1 if result.failed else 0


async def cmd_analyze(args: argparse.Namespace, client: RecordsClient, repo: str, collection: str) -> int:
    print("Fetching records...")
    selector = RangeSelector(
        on_progress=lambda scanned, _matched: _write_progress(f"Fetched: {scanned}"),
        progress_every=500,
    )
    records = await selector.collect(CollectionPager(client, repo, collection))
    print(f"\rFetched: {len(records)} total\n")

    if not records:
        print("No records found.")
        return 0

    blocks = GapClusterAnalyzer(args.gap, args.min_block).find_blocks(records)
    for block in blocks:
        print_block(block)
    if not blocks:
        print("No suspicious rapid-scrobble blocks found.")
    return 0


async def cmd_search(args: argparse.Namespace, client: RecordsClient, repo: str, collection: str) -> int:
    criteria = SearchCriteria(
        artist_name=args.artist_name, album_name=args.album_name, track_name=args.track_name
    )
    print("Searching...")
    result = await search_records(CollectionPager(client, repo, collection), criteria)
    if not args.count:
        for entry in result.matches:
            print(describe_play(entry))
    print(f"\nScanned {result.scanned:,} records, {result.matched:,} matched.")
    return 0


async def cmd_count(args: argparse.Namespace, client: RecordsClient, repo: str, collection: str) -> int:
    total = await RangeSelector().count_all(CollectionPager(client, repo, collection))
    print(f"{total:,} records in {collection}")
    return 0


COMMANDS = {
    "delete": cmd_delete,
    "analyze": cmd_analyze,
    "search": cmd_search,
    "count": cmd_count,
}


def _check_preconditions(args: argparse.Namespace) -> str | None:
    if args.command == "delete" and args.start > args.end:
        return "start date must be before end date"
    if args.command == "search" and not (args.artist_name or args.album_name or args.track_name):
        return "Provide at least one filter: --artist-name, --album-name, --track-name"
    return None


async def run(args: argparse.Namespace, settings: Settings) -> int:
    """Authenticate and dispatch a parsed command."""
    handle, password = settings.require_credentials()

    print(f"Handle: {handle}")
    print(f"PDS: {settings.PDS_URL}")
    print(f"Collection: {settings.PDS_COLLECTION}")
    if args.command == "delete":
        print(f"Time range: {format_timestamp(args.start)} to {format_timestamp(args.end)}")
        print(f"Mode: {'DRY RUN (no changes will be made)' if args.dry_run else 'LIVE'}")
    print()

    async with AtprotoRESTConnector(settings.PDS_URL) as connector:
        print("Authenticating...")
        session = await connector.login(handle, password)
        print(f"Authenticated as: {session.did}\n")
        return await COMMANDS[args.command](args, connector, session.did, settings.PDS_COLLECTION)


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    problem = _check_preconditions(args)
    if problem:
        print(f"Error: {problem}", file=sys.stderr)
        return 1

    try:
        return asyncio.run(run(args, load_settings()))
    except EditorError as e:
        print(f"\nError: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
