"""Folder model."""

from __future__ import annotations

from typing import Iterator, Optional

from pydantic import BaseModel, Field


class Folder(BaseModel):
    """Mail folder and its sub-folders."""

    id: str
    name: str = ""
    path: str = ""
    parent_id: Optional[str] = None
    view: Optional[str] = None
    unread: int = 0
    count: int = 0
    size_bytes: int = 0
    subfolders: list[Folder] = Field(default_factory=list)

    def walk(self) -> Iterator[Folder]:
        """This folder, then every sub-folder depth-first."""
        yield self
        for child in self.subfolders:
            yield from child.walk()
