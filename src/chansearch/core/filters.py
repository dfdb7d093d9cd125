from __future__ import annotations

from typing import Iterable, Optional

from .models import SearchFilters, ThreadRecord
from .utils import normalize_query, search_text


def filter_threads(threads: Iterable[ThreadRecord], filters: Optional[SearchFilters]) -> list[ThreadRecord]:
    """Keep the threads accepted by ``filters``, in input order.

    The filter is normalized once up front; an inactive (or missing) filter
    accepts everything.
    """
    active = filters.normalized() if filters is not None else None
    if active is None or not active.is_active:
        return list(threads)
    return [t for t in threads if active.matches(t)]


def search_threads(
    threads: Iterable[ThreadRecord],
    query: str,
    filters: Optional[SearchFilters] = None,
) -> list[ThreadRecord]:
    """Threads whose title/comment contain ``query``, then narrowed by ``filters``."""
    q = normalize_query(query)
    if not q:
        return []
    hits = [t for t in threads if q in search_text(t.title, t.comment)]
    return filter_threads(hits, filters)
