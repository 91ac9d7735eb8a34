"""Collaborator contracts consumed by :class:`FinderController`."""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

from ..models import Bookmark, Item


class TagStoreLike(Protocol):
    def list_all(self) -> dict[str, list[str]]: ...

    def get_tags(self, item_id: str) -> list[str]: ...

    def set_tags(self, item_id: str, tags: list[str]) -> None: ...

    def remove_tags(self, item_id: str, tags: list[str] | None = None) -> None: ...


class BookmarkStoreLike(Protocol):
    def list(self) -> list[Bookmark]: ...

    def is_bookmarked(self, item_id: str) -> bool: ...

    def add(self, item_id: str, notes: str = "") -> None: ...

    def remove(self, item_id: str) -> None: ...

    def update_notes(self, item_id: str, notes: str) -> None: ...


class AliasStoreLike(Protocol):
    def add(self, name: str, item_id: str) -> str: ...

    def aliases_for(self, item_id: str) -> list[str]: ...


@dataclass(frozen=True)
class FinderDeps:
    """Stores, content loader and clock the finder calls synchronously."""

    tags: TagStoreLike
    bookmarks: BookmarkStoreLike
    aliases: AliasStoreLike
    load_content: Callable[[Item], str]
    clock: Callable[[], float] = time.monotonic
