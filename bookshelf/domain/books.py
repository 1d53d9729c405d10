"""Book record type and its validation schema."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

MAX_BOOK_ID = 2**32 - 1


@dataclass(frozen=True)
class Book:
    id: int
    title: str
    content: str
    tags: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "tags", tuple(self.tags))

    def has_tag(self, tag: str) -> bool:
        return tag in self.tags

    def to_dict(self) -> dict:
        return {"id": self.id, "title": self.title, "content": self.content, "tags": list(self.tags)}


class BookPayload(BaseModel):
    """Shape of a book in request bodies and in the catalog file."""

    model_config = ConfigDict(strict=True)

    id: int = Field(ge=0, le=MAX_BOOK_ID)
    title: str
    content: str
    tags: List[str] = Field(default_factory=list)

    def to_book(self) -> Book:
        return Book(id=self.id, title=self.title, content=self.content, tags=tuple(self.tags))


BOOK_LIST = TypeAdapter(List[BookPayload])
