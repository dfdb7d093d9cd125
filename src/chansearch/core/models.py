from __future__ import annotations

from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field

from .utils import guess_ext_from_url, normalize_ext


def normalize_file_types(values: list[str]) -> list[str]:
    seen = set()
    out: list[str] = []
    for v in values:
        vv = normalize_ext(v)
        if not vv:
            continue
        if vv not in seen:
            seen.add(vv)
            out.append(vv)
    return out


class ThreadRecord(BaseModel):
    """One catalog thread. The filter only reads image_url / replies / current_replies."""

    model_config = ConfigDict(populate_by_name=True)

    number: str = ""
    board_abv: str = Field(default="", alias="boardAbv")
    title: str = ""
    comment: str = ""

    image_url: str = Field(default="", alias="imageUrl")
    replies: int = 0
    # live count from a refresh; wins over `replies` when set
    current_replies: Optional[int] = Field(default=None, alias="currentReplies")
    images: int = 0

    created_at: str = Field(default="", alias="createdAt")
    last_reply_time: Optional[int] = Field(default=None, alias="lastReplyTime")
    bump_index: Optional[int] = Field(default=None, alias="bumpIndex")

    @property
    def stats(self) -> str:
        return f"{self.replies}/{self.images}"

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class SearchFilters(BaseModel):
    """Filtering intent over catalog threads.

    A plain mutable value: toggling fields never normalizes implicitly. Call
    ``normalized()`` once before matching many threads; ``matches`` compares
    the extracted extension against ``file_types`` exactly as stored, so an
    unnormalized entry such as ``"JPG"`` will not match.
    """

    model_config = ConfigDict(populate_by_name=True)

    requires_images: bool = Field(default=False, alias="requiresImages")
    min_replies: Optional[int] = Field(default=None, alias="minReplies")
    file_types: list[str] = Field(default_factory=list, alias="fileTypes")

    @classmethod
    def default(cls) -> "SearchFilters":
        return cls()

    @property
    def is_active(self) -> bool:
        if self.requires_images:
            return True
        if self.min_replies is not None and self.min_replies > 0:
            return True
        return bool(self.file_types)

    def normalized(self) -> "SearchFilters":
        min_replies = self.min_replies
        if min_replies is not None and min_replies <= 0:
            min_replies = None
        return SearchFilters(
            requires_images=self.requires_images,
            min_replies=min_replies,
            file_types=normalize_file_types(self.file_types),
        )

    def matches(self, thread: ThreadRecord) -> bool:
        if self.requires_images and not thread.image_url:
            return False

        if self.min_replies is not None:
            count = thread.current_replies if thread.current_replies is not None else thread.replies
            if count < self.min_replies:
                return False

        if self.file_types:
            ext = guess_ext_from_url(thread.image_url)
            if not ext:
                return False
            if normalize_ext(ext) not in self.file_types:
                return False

        return True

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SearchFilters":
        return cls.model_validate(data)

    @classmethod
    def from_json(cls, text: str | bytes) -> "SearchFilters":
        return cls.model_validate_json(text)
