from __future__ import annotations

import html
import re
from urllib.parse import unquote, urlsplit


_TAG_RE = re.compile(r"<[^>]+>")
_WS_RE = re.compile(r"\s+")


def normalize_ext(ext: str | None) -> str | None:
    """Normalize a file type to a stable lowercase token.

    - trims whitespace, lowercases
    - drops leading '.'
    - maps 'jpeg' -> 'jpg'
    """
    if not ext:
        return None
    e = ext.strip().lower()
    # "..jpg" and ". jpg" would otherwise change again on a second pass
    while e.startswith("."):
        e = e[1:].strip()
    if e == "jpeg":
        e = "jpg"
    return e or None


def guess_ext_from_url(url: str) -> str | None:
    """Extension of the last path segment, or None.

    Bare filenames ("1699999.webm") work too since they parse as a path.
    """
    if not url or not url.strip():
        return None
    try:
        # urlsplit keeps ";" inside the path, urlparse would cut it off as params
        path = urlsplit(url.strip()).path
    except ValueError:
        # e.g. unbalanced IPv6 brackets
        return None

    name = unquote(path.rstrip("/").rsplit("/", 1)[-1])
    if "." not in name:
        return None
    ext = name.rsplit(".", 1)[-1].strip()
    return ext.lower() or None


def sanitize_query(query: str | None) -> str:
    return _WS_RE.sub(" ", (query or "").strip())


def normalize_query(query: str | None) -> str:
    return sanitize_query(query).lower()


def normalize_board(board: str | None) -> str | None:
    b = (board or "").strip()
    return b or None


def search_text(title: str, comment: str) -> str:
    """Searchable form of a thread: tags stripped, entities decoded, lowercase."""
    raw = f"{title} {comment}"
    stripped = _TAG_RE.sub(" ", raw)
    decoded = html.unescape(stripped)
    return _WS_RE.sub(" ", decoded).strip().lower()
