"""Plain data types shared across the catalog, stores and finder."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

ID_DELIMITER = ":"


def source_id_for(item_id: str) -> str:
    """Return the source prefix of ``item_id`` (text before the first ``:``)."""
    return item_id.split(ID_DELIMITER, 1)[0]


@dataclass(frozen=True)
class Item:
    """One bookmarkable text snippet from the catalog."""

    id: str
    name: str
    description: str = ""
    content: str = ""
    path: Path | None = field(default=None, compare=False)

    @property
    def source_id(self) -> str:
        return source_id_for(self.id)


@dataclass
class Bookmark:
    item_id: str
    notes: str = ""
    created_at: str = ""
    updated_at: str = ""


@dataclass
class Alias:
    name: str
    item_id: str
    created_at: str = ""


class Action(str, Enum):
    """What the caller should do with the item picked in a finder session."""

    SELECT = "select"
    GET = "get"
    BOOKMARK = "bookmark"
    TAG = "tag"
    NONE = "none"


@dataclass(frozen=True)
class SessionResult:
    item_id: str | None
    action: Action = Action.NONE

    @classmethod
    def quit(cls) -> SessionResult:
        return cls(item_id=None, action=Action.NONE)
