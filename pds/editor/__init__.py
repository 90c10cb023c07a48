"""PDS Editor - time-ordered bulk maintenance of AT Protocol collection records."""

from .analysis import (
    GapClusterAnalyzer,
    RangeSelector,
    SearchCriteria,
    SearchResult,
    find_blocks,
    search_records,
)
from .connectors import AtprotoRESTConnector
from .core import (
    AuthenticationError,
    EditorError,
    InvalidRangeError,
    MalformedIdentifierError,
    ProviderError,
    RateLimitError,
    RecordNotFoundError,
    RecordsClient,
    format_tid,
    tid_in_range,
    tid_to_datetime,
    tid_to_micros,
)
from .models import (
    Block,
    DeleteProgress,
    DeleteResult,
    RecordEntry,
    RecordPage,
    RecordRef,
    Session,
)
from .runtime.deletion import DeletionPolicy, RateLimitedDeleter, RateLimitWindow
from .runtime.pagination import CollectionPager, PagePolicy

__version__ = "0.1.0"

__all__ = [
    # Pipeline
    "CollectionPager",
    "PagePolicy",
    "RangeSelector",
    "RateLimitedDeleter",
    "DeletionPolicy",
    "RateLimitWindow",
    "GapClusterAnalyzer",
    "find_blocks",
    "SearchCriteria",
    "SearchResult",
    "search_records",
    # Backends
    "RecordsClient",
    "AtprotoRESTConnector",
    # TID codec
    "tid_to_micros",
    "tid_to_datetime",
    "tid_in_range",
    "format_tid",
    # Models
    "Block",
    "DeleteProgress",
    "DeleteResult",
    "RecordEntry",
    "RecordPage",
    "RecordRef",
    "Session",
    # Exceptions
    "EditorError",
    "MalformedIdentifierError",
    "InvalidRangeError",
    "ProviderError",
    "RateLimitError",
    "RecordNotFoundError",
    "AuthenticationError",
]
