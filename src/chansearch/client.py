from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from chansearch.core.filters import search_threads
from chansearch.core.metadata import write_csv, write_json, write_jsonl
from chansearch.core.models import SearchFilters, ThreadRecord
from chansearch.core.searches import SavedSearch, SavedSearchAlert, SearchStore
from chansearch.core.utils import normalize_board, sanitize_query

from chansearch.adapters.base import BaseAdapter
from chansearch.adapters import FourChanAdapter


logger = logging.getLogger(__name__)

_WRITERS = {".jsonl": write_jsonl, ".json": write_json, ".csv": write_csv}


@dataclass
class SearchConfig:
    history_limit: int = 100
    # None keeps history and saved searches in memory only
    state_path: Optional[Path] = None
    autosave: bool = True


@dataclass
class ChanSearchClient:
    cfg: Optional[SearchConfig] = None
    enable_default_adapters: bool = True

    def __post_init__(self) -> None:
        self.cfg = self.cfg or SearchConfig()
        if self.cfg.state_path is not None:
            self.store = SearchStore.load(self.cfg.state_path, history_limit=self.cfg.history_limit)
        else:
            self.store = SearchStore(history_limit=self.cfg.history_limit)
        self.adapters: dict[str, BaseAdapter] = {}

        if self.enable_default_adapters:
            self.register_adapter(FourChanAdapter)

    def close(self) -> None:
        self.save_state()

    def register_adapter(
        self,
        adapter: BaseAdapter | type[BaseAdapter],
        *,
        source_name: Optional[str] = None,
        override: bool = False,
    ) -> None:
        inst = adapter() if isinstance(adapter, type) else adapter
        name = source_name or getattr(inst, "source_name", None)
        if not name:
            raise ValueError("Adapter must define source_name")

        if (not override) and (name in self.adapters):
            raise KeyError(f"Adapter '{name}' already registered")
        self.adapters[name] = inst

    def available_sources(self) -> list[str]:
        return sorted(self.adapters.keys())

    def parse_catalog(self, source: str, data: Any, board: str) -> list[ThreadRecord]:
        if source not in self.adapters:
            raise KeyError(f"Unknown source '{source}'. Available: {', '.join(self.available_sources())}")
        return self.adapters[source].parse_catalog(data, board)

    def search(
        self,
        catalogs_by_board: dict[str, list[ThreadRecord]],
        query: str,
        *,
        board_abv: Optional[str] = None,
        filters: Optional[SearchFilters] = None,
        record_history: bool = True,
    ) -> list[ThreadRecord]:
        cleaned = sanitize_query(query)
        if not cleaned:
            return []

        board = normalize_board(board_abv)
        if record_history:
            self.store.add_to_history(cleaned, board_abv=board)
            self._autosave()

        if board is not None:
            threads = list(catalogs_by_board.get(board, []))
        else:
            threads = [t for ts in catalogs_by_board.values() for t in ts]

        results = search_threads(threads, cleaned, filters)
        logger.debug("Search %r on %s: %d/%d threads", cleaned, board or "all boards", len(results), len(threads))
        return results

    # ---- saved searches

    def save_search(
        self,
        query: str,
        *,
        name: Optional[str] = None,
        board_abv: Optional[str] = None,
        filters: Optional[SearchFilters] = None,
    ) -> SavedSearch:
        saved = self.store.save_search(query, name=name, board_abv=board_abv, filters=filters)
        self._autosave()
        return saved

    def update_saved_search(self, search: SavedSearch) -> SavedSearch:
        updated = self.store.update_saved_search(search)
        self._autosave()
        return updated

    def delete_saved_search(self, search_id: str) -> None:
        self.store.delete_saved_search(search_id)
        self._autosave()

    def saved_searches(self) -> list[SavedSearch]:
        return self.store.saved_searches()

    def check_saved_searches(
        self,
        catalogs_by_board: dict[str, list[ThreadRecord]],
        *,
        progress: bool = False,
    ) -> list[SavedSearchAlert]:
        alerts = self.store.check_alerts(catalogs_by_board, progress=progress)
        self._autosave()
        return alerts

    # ---- output

    def save_metadata(self, threads: list[ThreadRecord], out_path: str | Path = "out/threads.jsonl") -> Path:
        """Write search results; the suffix (.jsonl, .json or .csv) picks the format."""
        suffix = Path(out_path).suffix.lower()
        writer = _WRITERS.get(suffix)
        if writer is None:
            raise ValueError(f"Unsupported results file '{out_path}', expected one of: {', '.join(_WRITERS)}")
        return writer(threads, out_path)

    def save_state(self) -> Optional[Path]:
        if self.cfg.state_path is None:
            return None
        return self.store.save(self.cfg.state_path)

    def _autosave(self) -> None:
        if self.cfg.autosave:
            self.save_state()
