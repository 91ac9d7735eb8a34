"""User tag store keyed by item ID."""

from __future__ import annotations

from pathlib import Path

from ..errors import NotFoundError
from .files import load_document, save_document, utc_timestamp

TAGS_FILENAME = "tags.json"
_DOC_KEY = "item_tags"


def parse_tags(text: str) -> list[str]:
    """Split comma-separated ``text`` into trimmed, lower-cased, unique tags.

    First occurrence order is preserved; empty fragments are skipped.
    """
    seen: set[str] = set()
    tags: list[str] = []
    for part in text.split(","):
        tag = part.strip().lower()
        if tag and tag not in seen:
            seen.add(tag)
            tags.append(tag)
    return tags


def _merge_unique(existing: list[str], extra: list[str]) -> list[str]:
    merged = list(existing)
    for tag in extra:
        if tag not in merged:
            merged.append(tag)
    return merged


class TagStore:
    """Per-item tag lists persisted in ``tags.json``."""

    def __init__(self, data_dir: Path) -> None:
        self.path = Path(data_dir) / TAGS_FILENAME

    def _load(self) -> list[dict]:
        return [
            entry
            for entry in load_document(self.path, _DOC_KEY)
            if isinstance(entry, dict) and isinstance(entry.get("item_id"), str)
        ]

    @staticmethod
    def _entry_tags(entry: dict) -> list[str]:
        tags = entry.get("tags", [])
        if not isinstance(tags, list):
            return []
        return [tag for tag in tags if isinstance(tag, str)]

    def list_all(self) -> dict[str, list[str]]:
        """Return every tagged item mapped to its tag list."""
        return {entry["item_id"]: self._entry_tags(entry) for entry in self._load()}

    def get_tags(self, item_id: str) -> list[str]:
        for entry in self._load():
            if entry["item_id"] == item_id:
                return self._entry_tags(entry)
        return []

    def set_tags(self, item_id: str, tags: list[str]) -> None:
        """Add ``tags`` to ``item_id``, merging with and deduplicating existing ones."""
        entries = self._load()
        now = utc_timestamp()
        for entry in entries:
            if entry["item_id"] == item_id:
                entry["tags"] = _merge_unique(self._entry_tags(entry), tags)
                entry["updated_at"] = now
                break
        else:
            entries.append({"item_id": item_id, "tags": _merge_unique([], tags), "created_at": now, "updated_at": now})
        save_document(self.path, _DOC_KEY, entries)

    def remove_tags(self, item_id: str, tags: list[str] | None = None) -> None:
        """Remove ``tags`` from ``item_id``, or all of its tags when ``tags`` is falsy.

        Raises :class:`NotFoundError` when the item has no tag entry at all.
        """
        entries = self._load()
        kept: list[dict] = []
        found = False
        for entry in entries:
            if entry["item_id"] != item_id:
                kept.append(entry)
                continue
            found = True
            if not tags:
                continue
            remaining = [tag for tag in self._entry_tags(entry) if tag not in tags]
            if remaining:
                entry["tags"] = remaining
                entry["updated_at"] = utc_timestamp()
                kept.append(entry)
        if not found:
            raise NotFoundError(f"no tags found for item '{item_id}'")
        save_document(self.path, _DOC_KEY, kept)
