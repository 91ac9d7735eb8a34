"""Item catalog and lazy content loader over a directory of sources.

Each immediate subdirectory of the catalog root is a source. Markdown and
text files below it become items whose IDs are ``<source>:<slug>``. Item
bodies are not kept in memory; :class:`ContentLoader` reads them on demand.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from .ansi import display_width
from .errors import CatalogError, ContentLoadError
from .models import ID_DELIMITER, Item

logger = logging.getLogger(__name__)

ITEM_SUFFIXES = frozenset({".md", ".txt"})
SKIPPED_FILENAMES = frozenset({"readme.md", "license.md", "contributing.md", "changelog.md"})
DESCRIPTION_MAX_WIDTH = 150
_SLUG_RE = re.compile(r"[^a-z0-9]+")


def slugify(text: str) -> str:
    """Lower-case ``text`` and collapse non-alphanumeric runs into ``-``."""
    return _SLUG_RE.sub("-", text.lower()).strip("-")


def read_text(path: Path) -> str:
    for encoding in ("utf-8", "utf-8-sig", "latin-1"):
        try:
            return path.read_text(encoding=encoding)
        except UnicodeDecodeError:
            continue
    return path.read_bytes().decode("utf-8", errors="replace")


def extract_description(content: str, max_width: int = DESCRIPTION_MAX_WIDTH) -> str:
    """Return the first paragraph after the first heading (or the first paragraph).

    Paragraph lines are joined with spaces and truncated with ``...`` when wider
    than ``max_width`` columns.
    """
    lines = [line.strip() for line in content.splitlines()]
    has_heading = any(line.startswith("#") for line in lines)
    paragraph: list[str] = []
    in_content = not has_heading
    for line in lines:
        if line.startswith("#"):
            if paragraph:
                break
            in_content = True
            continue
        if not in_content:
            continue
        if not line:
            if paragraph:
                break
            continue
        paragraph.append(line)

    description = " ".join(paragraph)
    if display_width(description) <= max_width:
        return description
    return description[: max_width - 3].rstrip() + "..."


class DirectoryCatalog:
    """Builds the item list from ``root/<source>/**/*.md|*.txt``."""

    def __init__(self, root: Path) -> None:
        self.root = Path(root)

    def _source_dirs(self) -> list[Path]:
        return sorted(
            child
            for child in self.root.iterdir()
            if child.is_dir() and not child.name.startswith(".")
        )

    def _item_for_file(self, source: str, source_dir: Path, path: Path) -> Item | None:
        relative = path.relative_to(source_dir).with_suffix("")
        slug = slugify("/".join(relative.parts).replace("/", "-"))
        if not slug:
            return None
        try:
            content = read_text(path)
        except OSError as exc:
            logger.warning("skipping unreadable item file %s: %s", path, exc)
            return None
        return Item(
            id=f"{source}{ID_DELIMITER}{slug}",
            name=slug,
            description=extract_description(content),
            path=path,
        )

    def list_items(self) -> list[Item]:
        """Return every catalog item sorted by ID.

        Raises :class:`CatalogError` when the root is missing or holds no items.
        """
        if not self.root.is_dir():
            raise CatalogError(f"Catalog root not found: {self.root}")

        items: dict[str, Item] = {}
        for source_dir in self._source_dirs():
            source = slugify(source_dir.name)
            if not source:
                continue
            for path in sorted(source_dir.rglob("*")):
                if not path.is_file() or path.suffix.lower() not in ITEM_SUFFIXES:
                    continue
                if path.name.lower() in SKIPPED_FILENAMES:
                    continue
                if any(part.startswith(".") for part in path.relative_to(source_dir).parts):
                    continue
                item = self._item_for_file(source, source_dir, path)
                if item is None:
                    continue
                if item.id in items:
                    logger.warning("duplicate item id %s from %s ignored", item.id, path)
                    continue
                items[item.id] = item

        if not items:
            raise CatalogError(f"No items found under {self.root}")
        logger.info("catalog loaded %d items from %s", len(items), self.root)
        return [items[item_id] for item_id in sorted(items)]


class ContentLoader:
    """Loads and caches full item bodies."""

    def __init__(self) -> None:
        self._cache: dict[str, str] = {}

    def load(self, item: Item) -> str:
        """Return ``item``'s full text, reading its file on first use.

        Raises :class:`ContentLoadError` when the body cannot be read.
        """
        if item.content:
            return item.content
        cached = self._cache.get(item.id)
        if cached is not None:
            return cached
        if item.path is None:
            raise ContentLoadError(f"no content source for {item.id}")
        try:
            content = read_text(item.path)
        except OSError as exc:
            raise ContentLoadError(f"failed to read {item.path}: {exc}") from exc
        self._cache[item.id] = content
        return content
