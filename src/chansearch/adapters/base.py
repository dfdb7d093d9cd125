from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from chansearch.core.models import ThreadRecord


class BaseAdapter(ABC):
    """Turns a board's raw catalog payload into thread records."""

    source_name: str

    def clean_board(self, board: str) -> str:
        b = (board or "").strip().strip("/")
        if not b:
            raise ValueError("board must not be empty")
        return b

    @abstractmethod
    def parse_catalog(self, data: Any, board: str) -> list[ThreadRecord]:
        raise NotImplementedError
