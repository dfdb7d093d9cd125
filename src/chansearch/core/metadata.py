from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Iterable

from .models import SearchFilters, ThreadRecord


def write_jsonl(threads: Iterable[ThreadRecord], out_path: str | Path) -> Path:
    """One thread per line, camelCase keys."""
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    lines = [json.dumps(t.to_dict(), ensure_ascii=False) for t in threads]
    out_path.write_text("".join(line + "\n" for line in lines), encoding="utf-8")
    return out_path


def write_json(threads: Iterable[ThreadRecord], out_path: str | Path) -> Path:
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    payload = [t.to_dict() for t in threads]
    out_path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
    return out_path


def write_csv(threads: Iterable[ThreadRecord], out_path: str | Path) -> Path:
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    fieldnames = [
        "number", "boardAbv", "title", "imageUrl", "replies", "currentReplies",
        "images", "createdAt",
    ]
    with out_path.open("w", encoding="utf-8", newline="") as f:
        w = csv.DictWriter(f, fieldnames=fieldnames)
        w.writeheader()
        for t in threads:
            d = t.to_dict()
            w.writerow({k: d.get(k) for k in fieldnames})
    return out_path


def write_filters(filters: SearchFilters, out_path: str | Path) -> Path:
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(filters.to_json(), encoding="utf-8")
    return out_path


def read_filters(path: str | Path) -> SearchFilters:
    return SearchFilters.from_json(Path(path).read_text(encoding="utf-8"))
