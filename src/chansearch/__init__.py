from .client import ChanSearchClient, SearchConfig
from .core.filters import filter_threads, search_threads
from .core.models import SearchFilters, ThreadRecord

__all__ = [
    "ChanSearchClient",
    "SearchConfig",
    "SearchFilters",
    "ThreadRecord",
    "filter_threads",
    "search_threads",
]
