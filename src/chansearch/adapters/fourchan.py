from __future__ import annotations

import json
import re
from typing import Any

from chansearch.core.models import ThreadRecord
from .base import BaseAdapter


_CONTROL_CHARS_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")


def _int(value: Any, default: int = 0) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


class FourChanAdapter(BaseAdapter):
    source_name = "4chan"
    media_url = "https://i.4cdn.org"

    def parse_catalog(self, data: Any, board: str) -> list[ThreadRecord]:
        board = self.clean_board(board)

        if isinstance(data, (bytes, bytearray)):
            data = data.decode("utf-8", errors="replace")
        if isinstance(data, str):
            cleaned = _CONTROL_CHARS_RE.sub("", data).strip()
            try:
                data = json.loads(cleaned)
            except json.JSONDecodeError as e:
                snippet = cleaned[:300].replace("\n", " ")
                raise ValueError(f"Invalid catalog JSON for /{board}/. Snippet: {snippet}") from e

        # catalog.json: [{"page": 1, "threads": [...]}, ...]
        pages = data if isinstance(data, list) else []

        threads: list[ThreadRecord] = []
        bump_index = 0
        for page in pages:
            if not isinstance(page, dict):
                continue
            items = page.get("threads")
            if not isinstance(items, list):
                continue
            for item in items:
                if not isinstance(item, dict):
                    continue
                # both "tim" (numeric upload stamp) and "ext" (".png") are needed for a file URL
                tim = _int(item.get("tim"), default=-1)
                ext = item.get("ext")
                if tim >= 0 and isinstance(ext, str) and ext:
                    image_url = f"{self.media_url}/{board}/{tim}{ext}"
                else:
                    image_url = ""

                last_modified = item.get("last_modified")
                threads.append(
                    ThreadRecord(
                        number=str(_int(item.get("no"))),
                        board_abv=board,
                        title=item.get("sub") or "",
                        comment=item.get("com") or "",
                        image_url=image_url,
                        replies=_int(item.get("replies")),
                        images=_int(item.get("images")),
                        created_at=item.get("now") or "",
                        last_reply_time=_int(last_modified) if last_modified is not None else None,
                        bump_index=bump_index,
                    )
                )
                bump_index += 1

        return threads
