"""Record selection and analysis."""

from .blocks import GapClusterAnalyzer, find_blocks
from .search import SearchCriteria, SearchResult, search_records
from .selector import RangeSelector

__all__ = [
    "GapClusterAnalyzer",
    "RangeSelector",
    "SearchCriteria",
    "SearchResult",
    "find_blocks",
    "search_records",
]
