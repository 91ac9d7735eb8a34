"""Persistent JSON stores for user tags, bookmarks and aliases."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .aliases import AliasStore, validate_alias_name
from .bookmarks import BookmarkStore
from .tags import TagStore, parse_tags


@dataclass(frozen=True)
class Stores:
    """The three user-data stores the finder writes through."""

    tags: TagStore
    bookmarks: BookmarkStore
    aliases: AliasStore

    @classmethod
    def open(cls, data_dir: Path) -> Stores:
        return cls(
            tags=TagStore(data_dir),
            bookmarks=BookmarkStore(data_dir),
            aliases=AliasStore(data_dir),
        )


__all__ = [
    "AliasStore",
    "BookmarkStore",
    "Stores",
    "TagStore",
    "parse_tags",
    "validate_alias_name",
]
