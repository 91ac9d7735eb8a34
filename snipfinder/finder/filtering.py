"""Pure filter and search derivations over the item list.

Nothing here touches stores or terminal state. Callers pass read-cached copies
of tags and bookmarks and receive new lists whose order follows the input.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from ..models import Item
from .state import FilterState

ENTRY_SOURCE = "source"
ENTRY_TAG = "tag"
ENTRY_BOOKMARKED = "bookmarked"


@dataclass(frozen=True)
class FilterEntry:
    """One row of the filters panel."""

    kind: str
    value: str = ""


def collect_sources(items: Iterable[Item]) -> list[str]:
    """Return the sorted set of source IDs present in ``items``."""
    return sorted({item.source_id for item in items})


def collect_tags(item_tags: Mapping[str, list[str]]) -> list[str]:
    """Return the sorted set of every tag used by any item."""
    return sorted({tag for tags in item_tags.values() for tag in tags})


def derive_filtered_items(
    all_items: Iterable[Item],
    filters: FilterState,
    item_tags: Mapping[str, list[str]],
    bookmarked_ids: set[str],
) -> list[Item]:
    """Apply source, bookmarked-only and tag filters to ``all_items``.

    Sources must be selected to pass. Tag filtering uses OR semantics and is
    skipped entirely while no tag is selected.
    """
    filtered: list[Item] = []
    for item in all_items:
        if item.source_id not in filters.selected_sources:
            continue
        if filters.bookmarked_only and item.id not in bookmarked_ids:
            continue
        if filters.selected_tags and filters.selected_tags.isdisjoint(item_tags.get(item.id, ())):
            continue
        filtered.append(item)
    return filtered


def item_matches_query(item: Item, query: str) -> bool:
    """Case-insensitive substring match against ID, name and description."""
    needle = query.casefold()
    return (
        needle in item.id.casefold()
        or needle in item.name.casefold()
        or needle in item.description.casefold()
    )


def apply_search(snapshot: list[Item], query: str) -> list[Item]:
    """Return items of ``snapshot`` matching ``query``; empty query keeps all."""
    if not query:
        return snapshot
    return [item for item in snapshot if item_matches_query(item, query)]


def filter_entries(available_sources: list[str], available_tags: list[str]) -> list[FilterEntry]:
    """Build the ordered filters-panel rows: sources, tags, bookmarked toggle."""
    entries = [FilterEntry(ENTRY_SOURCE, source) for source in available_sources]
    entries.extend(FilterEntry(ENTRY_TAG, tag) for tag in available_tags)
    entries.append(FilterEntry(ENTRY_BOOKMARKED))
    return entries


def toggle_filter_entry(filters: FilterState, entry: FilterEntry) -> None:
    """Flip the filter represented by ``entry``."""
    if entry.kind == ENTRY_SOURCE:
        selected = filters.selected_sources
    elif entry.kind == ENTRY_TAG:
        selected = filters.selected_tags
    else:
        filters.bookmarked_only = not filters.bookmarked_only
        return
    if entry.value in selected:
        selected.discard(entry.value)
    else:
        selected.add(entry.value)


def is_entry_selected(filters: FilterState, entry: FilterEntry) -> bool:
    if entry.kind == ENTRY_SOURCE:
        return entry.value in filters.selected_sources
    if entry.kind == ENTRY_TAG:
        return entry.value in filters.selected_tags
    return filters.bookmarked_only
