"""Bookmark store keyed by item ID."""

from __future__ import annotations

from pathlib import Path

from ..errors import AlreadyExistsError, NotFoundError
from ..models import Bookmark
from .files import load_document, save_document, utc_timestamp

BOOKMARKS_FILENAME = "bookmarks.json"
_DOC_KEY = "bookmarks"


def _bookmark_from_entry(entry: dict) -> Bookmark:
    notes = entry.get("notes", "")
    return Bookmark(
        item_id=entry["item_id"],
        notes=notes if isinstance(notes, str) else "",
        created_at=str(entry.get("created_at", "")),
        updated_at=str(entry.get("updated_at", "")),
    )


class BookmarkStore:
    """Bookmarks with optional notes persisted in ``bookmarks.json``."""

    def __init__(self, data_dir: Path) -> None:
        self.path = Path(data_dir) / BOOKMARKS_FILENAME

    def _load(self) -> list[dict]:
        return [
            entry
            for entry in load_document(self.path, _DOC_KEY)
            if isinstance(entry, dict) and isinstance(entry.get("item_id"), str)
        ]

    def list(self) -> list[Bookmark]:
        return [_bookmark_from_entry(entry) for entry in self._load()]

    def get(self, item_id: str) -> Bookmark | None:
        for entry in self._load():
            if entry["item_id"] == item_id:
                return _bookmark_from_entry(entry)
        return None

    def is_bookmarked(self, item_id: str) -> bool:
        return self.get(item_id) is not None

    def add(self, item_id: str, notes: str = "") -> None:
        """Bookmark ``item_id``; raises :class:`AlreadyExistsError` if it already is."""
        entries = self._load()
        if any(entry["item_id"] == item_id for entry in entries):
            raise AlreadyExistsError(f"item '{item_id}' is already bookmarked")
        now = utc_timestamp()
        entries.append({"item_id": item_id, "notes": notes, "created_at": now, "updated_at": now})
        save_document(self.path, _DOC_KEY, entries)

    def remove(self, item_id: str) -> None:
        entries = self._load()
        kept = [entry for entry in entries if entry["item_id"] != item_id]
        if len(kept) == len(entries):
            raise NotFoundError(f"bookmark for item '{item_id}' not found")
        save_document(self.path, _DOC_KEY, kept)

    def update_notes(self, item_id: str, notes: str) -> None:
        entries = self._load()
        for entry in entries:
            if entry["item_id"] == item_id:
                entry["notes"] = notes
                entry["updated_at"] = utc_timestamp()
                break
        else:
            raise NotFoundError(f"bookmark for item '{item_id}' not found")
        save_document(self.path, _DOC_KEY, entries)
