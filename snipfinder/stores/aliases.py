"""Alias store: short user-chosen names that resolve to item IDs."""

from __future__ import annotations

import re
from pathlib import Path

from ..errors import AlreadyExistsError, NotFoundError, ValidationError
from ..models import Alias
from .files import load_document, save_document, utc_timestamp

ALIASES_FILENAME = "aliases.json"
_DOC_KEY = "aliases"
_ALIAS_RE = re.compile(r"^[a-zA-Z0-9_-]+$")
ALIAS_MIN_LENGTH = 2
ALIAS_MAX_LENGTH = 50

# Command words that would shadow CLI subcommands.
RESERVED_ALIASES = frozenset(
    {
        "alias",
        "aliases",
        "bookmark",
        "bookmarks",
        "find",
        "get",
        "help",
        "reindex",
        "search",
        "show",
        "status",
        "subscribe",
        "tag",
        "unalias",
        "unbookmark",
        "upgrade",
        "version",
    }
)


def validate_alias_name(name: str) -> str:
    """Return normalized ``name`` or raise :class:`ValidationError`."""
    name = name.strip().lower()
    if not name:
        raise ValidationError("Alias cannot be empty")
    if len(name) < ALIAS_MIN_LENGTH:
        raise ValidationError(f"Alias must be at least {ALIAS_MIN_LENGTH} characters long")
    if len(name) > ALIAS_MAX_LENGTH:
        raise ValidationError(f"Alias must be no more than {ALIAS_MAX_LENGTH} characters long")
    if not _ALIAS_RE.match(name):
        raise ValidationError("Alias can only contain letters, numbers, hyphens, and underscores")
    if name in RESERVED_ALIASES:
        raise ValidationError(f"Alias '{name}' is reserved")
    return name


class AliasStore:
    """Aliases persisted in ``aliases.json``; names are unique."""

    def __init__(self, data_dir: Path) -> None:
        self.path = Path(data_dir) / ALIASES_FILENAME

    def _load(self) -> list[dict]:
        return [
            entry
            for entry in load_document(self.path, _DOC_KEY)
            if isinstance(entry, dict)
            and isinstance(entry.get("name"), str)
            and isinstance(entry.get("item_id"), str)
        ]

    def list(self) -> list[Alias]:
        return [
            Alias(name=entry["name"], item_id=entry["item_id"], created_at=str(entry.get("created_at", "")))
            for entry in self._load()
        ]

    def get(self, name: str) -> Alias | None:
        for alias in self.list():
            if alias.name == name:
                return alias
        return None

    def aliases_for(self, item_id: str) -> list[str]:
        return [alias.name for alias in self.list() if alias.item_id == item_id]

    def add(self, name: str, item_id: str) -> str:
        """Validate and store alias ``name`` for ``item_id``; return the stored name."""
        name = validate_alias_name(name)
        entries = self._load()
        if any(entry["name"] == name for entry in entries):
            raise AlreadyExistsError(f"alias '{name}' already exists")
        entries.append({"name": name, "item_id": item_id, "created_at": utc_timestamp()})
        save_document(self.path, _DOC_KEY, entries)
        return name

    def remove(self, name: str) -> None:
        entries = self._load()
        kept = [entry for entry in entries if entry["name"] != name]
        if len(kept) == len(entries):
            raise NotFoundError(f"alias '{name}' not found")
        save_document(self.path, _DOC_KEY, kept)
