"""Shared AT Protocol constants.

This module centralizes the XRPC paths and service limits used by the REST
endpoints, the pager and the deleter.
"""

from __future__ import annotations

DEFAULT_PDS_URL = "https://bsky.social"

# teal.fm play records
DEFAULT_COLLECTION = "fm.teal.alpha.feed.play"

# listRecords accepts 1-100
PAGE_SIZE = 100

# PDS write limit is 5000 deletions per hour; stay under with a margin
SERVICE_DELETIONS_PER_HOUR = 5000
MAX_DELETIONS_PER_HOUR = 4500

XRPC_PATHS = {
    "create_session": "/xrpc/com.atproto.server.createSession",
    "refresh_session": "/xrpc/com.atproto.server.refreshSession",
    "list_records": "/xrpc/com.atproto.repo.listRecords",
    "delete_record": "/xrpc/com.atproto.repo.deleteRecord",
}
