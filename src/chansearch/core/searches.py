from __future__ import annotations

import json
import logging
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field
from tqdm import tqdm

from .filters import search_threads
from .models import SearchFilters, ThreadRecord
from .utils import normalize_board, normalize_query, sanitize_query


logger = logging.getLogger(__name__)


def _new_id() -> str:
    return str(uuid.uuid4())


def _now() -> datetime:
    return datetime.now(timezone.utc)


class SearchItem(BaseModel):
    id: str = Field(default_factory=_new_id)
    query: str
    timestamp: datetime = Field(default_factory=_now)
    board_abv: Optional[str] = None


class SavedSearch(BaseModel):
    id: str = Field(default_factory=_new_id)
    name: str
    query: str
    board_abv: Optional[str] = None
    filters: Optional[SearchFilters] = None
    created_at: datetime = Field(default_factory=_now)
    updated_at: datetime = Field(default_factory=_now)

    def key(self) -> tuple[str, Optional[str]]:
        return normalize_query(self.query), normalize_board(self.board_abv)


class SavedSearchState(BaseModel):
    is_primed: bool = False
    # board -> thread numbers seen in the last catalog snapshot
    last_seen_by_board: dict[str, list[str]] = Field(default_factory=dict)
    last_checked_at: Optional[datetime] = None


class SavedSearchAlert(BaseModel):
    search: SavedSearch
    new_matches: list[ThreadRecord]


class _StoreState(BaseModel):
    history: list[SearchItem] = Field(default_factory=list)
    saved_searches: list[SavedSearch] = Field(default_factory=list)
    states: dict[str, SavedSearchState] = Field(default_factory=dict)


class SearchStore:
    """Search history, saved searches and their alert bookkeeping.

    Queries and boards are compared in normalized form: ``"Foo  bar"`` on
    board ``" g "`` is the same search as ``"foo bar"`` on ``"g"``.
    """

    def __init__(self, history_limit: int = 100):
        if history_limit < 1:
            raise ValueError("history_limit must be >= 1")
        self.history_limit = history_limit
        self._history: list[SearchItem] = []
        self._saved: list[SavedSearch] = []
        self._states: dict[str, SavedSearchState] = {}

    # ---- history

    def add_to_history(self, query: str, board_abv: Optional[str] = None) -> Optional[SearchItem]:
        cleaned = sanitize_query(query)
        if not cleaned:
            return None
        board = normalize_board(board_abv)
        key = (normalize_query(cleaned), board)

        self._history = [
            h for h in self._history if (normalize_query(h.query), normalize_board(h.board_abv)) != key
        ]
        item = SearchItem(query=cleaned, board_abv=board)
        self._history.insert(0, item)
        del self._history[self.history_limit:]
        return item

    def history(self) -> list[SearchItem]:
        return list(self._history)

    def remove_from_history(self, item_id: str) -> None:
        self._history = [h for h in self._history if h.id != item_id]

    def clear_history(self) -> None:
        self._history.clear()

    # ---- saved searches

    def save_search(
        self,
        query: str,
        *,
        name: Optional[str] = None,
        board_abv: Optional[str] = None,
        filters: Optional[SearchFilters] = None,
    ) -> SavedSearch:
        cleaned = sanitize_query(query)
        saved = SavedSearch(
            name=name or cleaned,
            query=cleaned,
            board_abv=normalize_board(board_abv),
            filters=filters.normalized() if filters is not None else None,
        )

        key = saved.key()
        duplicates = [s for s in self._saved if s.key() == key]
        self._saved = [s for s in self._saved if s.key() != key]

        prev = duplicates[0] if duplicates else None
        if prev is not None and prev.id in self._states and prev.filters == saved.filters:
            self._states[saved.id] = self._states[prev.id]
        else:
            self._states[saved.id] = SavedSearchState()
        for d in duplicates:
            self._states.pop(d.id, None)

        self._saved.insert(0, saved)
        return saved.model_copy(deep=True)

    def update_saved_search(self, search: SavedSearch) -> SavedSearch:
        for i, existing in enumerate(self._saved):
            if existing.id != search.id:
                continue
            updated = search.model_copy(update={"updated_at": _now()}, deep=True)
            self._saved[i] = updated
            if existing.key() != updated.key() or existing.filters != updated.filters:
                self._states[updated.id] = SavedSearchState()
            return updated.model_copy(deep=True)
        raise KeyError(f"Unknown saved search '{search.id}'")

    def delete_saved_search(self, search_id: str) -> None:
        self._saved = [s for s in self._saved if s.id != search_id]
        self._states.pop(search_id, None)

    def saved_searches(self) -> list[SavedSearch]:
        # copies: edits must go through update_saved_search to be noticed
        return [s.model_copy(deep=True) for s in self._saved]

    def is_saved_search(self, query: str, board_abv: Optional[str] = None) -> bool:
        key = (normalize_query(query), normalize_board(board_abv))
        return any(s.key() == key for s in self._saved)

    def state_of(self, search_id: str) -> Optional[SavedSearchState]:
        return self._states.get(search_id)

    # ---- alerts

    def check_alerts(
        self,
        catalogs_by_board: dict[str, list[ThreadRecord]],
        *,
        progress: bool = False,
    ) -> list[SavedSearchAlert]:
        """Report threads that started matching since the previous check.

        The first check of a saved search only records a snapshot.
        """
        alerts: list[SavedSearchAlert] = []

        for search in tqdm(self._saved, desc="Saved searches", unit="search", disable=not progress):
            board = normalize_board(search.board_abv)
            boards = [board] if board else list(catalogs_by_board.keys())

            state = self._states.get(search.id) or SavedSearchState()
            last_seen = dict(state.last_seen_by_board)
            new_matches: list[ThreadRecord] = []

            for b in boards:
                threads = catalogs_by_board.get(b)
                if threads is None:
                    continue
                matches = search_threads(threads, search.query, search.filters)
                if state.is_primed:
                    previous = set(last_seen.get(b, []))
                    new_matches.extend(t for t in matches if t.number not in previous)
                last_seen[b] = [t.number for t in threads]

            self._states[search.id] = SavedSearchState(
                is_primed=True,
                last_seen_by_board=last_seen,
                last_checked_at=_now(),
            )
            if new_matches:
                alerts.append(SavedSearchAlert(search=search.model_copy(deep=True), new_matches=new_matches))

        logger.info("Checked %d saved searches, %d with new matches", len(self._saved), len(alerts))
        return alerts

    # ---- persistence

    def to_dict(self) -> dict[str, Any]:
        state = _StoreState(history=self._history, saved_searches=self._saved, states=self._states)
        return state.model_dump(mode="json", by_alias=True)

    @classmethod
    def from_dict(cls, data: dict[str, Any], *, history_limit: int = 100) -> "SearchStore":
        state = _StoreState.model_validate(data)
        store = cls(history_limit=history_limit)
        store._history = state.history[:history_limit]
        store._saved = state.saved_searches
        valid = {s.id for s in store._saved}
        store._states = {k: v for k, v in state.states.items() if k in valid}
        return store

    def save(self, path: str | Path) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(self.to_dict(), ensure_ascii=False, indent=2), encoding="utf-8")
        logger.debug("Saved search state to %s", path)
        return path

    @classmethod
    def load(cls, path: str | Path, *, history_limit: int = 100) -> "SearchStore":
        path = Path(path)
        if not path.exists():
            return cls(history_limit=history_limit)

        text = path.read_text(encoding="utf-8")
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid search state file {path}") from e
        logger.debug("Loaded search state from %s", path)
        return cls.from_dict(data, history_limit=history_limit)
