"""Finder controller: owns session state and applies user actions.

Every public method is one state transition. Store and loader calls are
synchronous; each successful write is followed by a full cache reload and a
re-derivation of the filtered, searched and paginated views. Recoverable
failures become timed status messages and never leave the current mode.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from ..errors import ContentLoadError, NotFoundError, StoreError, StoreReadError, ValidationError
from ..models import Action, Item, SessionResult
from ..stores.tags import parse_tags
from .deps import FinderDeps
from .filtering import (
    ENTRY_TAG,
    FilterEntry,
    apply_search,
    collect_sources,
    collect_tags,
    derive_filtered_items,
    filter_entries,
    toggle_filter_entry,
)
from .pagination import page_bounds, recompute_pagination
from .preview import PAGE_SCROLL_LINES, scroll_preview
from .state import (
    DEFAULT_PAGE_SIZE,
    FilterState,
    FinderState,
    InputMode,
    PaginationState,
    Panel,
    SearchState,
)
from .status import STATUS_ERROR_SECONDS, STATUS_INFO_SECONDS, STATUS_OK_SECONDS, expire_status, set_status

logger = logging.getLogger(__name__)

DIALOG_CHAR_LIMIT = 200
SEARCH_CHAR_LIMIT = 100
TAG_SEPARATOR = ", "
QUICK_BOOKMARK_NOTES = "Bookmarked via finder"


class FinderController:
    """Single owner of :class:`FinderState` for one interactive session."""

    def __init__(self, items: Iterable[Item], deps: FinderDeps, *, page_size: int = DEFAULT_PAGE_SIZE) -> None:
        self.deps = deps
        all_items = list(items)
        sources = collect_sources(all_items)
        self.state = FinderState(
            all_items=all_items,
            available_sources=sources,
            filters=FilterState(selected_sources=set(sources)),
            pagination=PaginationState(page_size=max(1, page_size)),
            panel=Panel.LIST if all_items else Panel.FILTERS,
        )
        self.reload_caches()

    # -- derived views -------------------------------------------------

    def reload_caches(self) -> None:
        """Re-read bookmarks and tags from the stores and re-derive every view.

        Read failures are logged and treated as empty stores.
        """
        state = self.state
        try:
            state.bookmarked_ids = {bookmark.item_id for bookmark in self.deps.bookmarks.list()}
        except StoreReadError as exc:
            logger.warning("bookmark cache reload failed: %s", exc)
            state.bookmarked_ids = set()
        try:
            state.item_tags = {item_id: list(tags) for item_id, tags in self.deps.tags.list_all().items()}
        except StoreReadError as exc:
            logger.warning("tag cache reload failed: %s", exc)
            state.item_tags = {}
        state.available_tags = collect_tags(state.item_tags)
        state.filters.selected_tags &= set(state.available_tags)
        entry_count = len(self.filter_entries())
        state.filter_cursor = max(0, min(state.filter_cursor, entry_count - 1))
        self.apply_filters()

    def apply_filters(self) -> None:
        """Recompute ``filtered_items`` and the visible list from current filters."""
        state = self.state
        state.filtered_items = derive_filtered_items(
            state.all_items,
            state.filters,
            state.item_tags,
            state.bookmarked_ids,
        )
        if state.search.active:
            state.search.snapshot = state.filtered_items
            state.visible_items = apply_search(state.search.snapshot, state.search.query)
        else:
            state.visible_items = state.filtered_items
        self._refresh_pagination()

    def _refresh_pagination(self) -> None:
        state = self.state
        state.cursor = recompute_pagination(state.pagination, len(state.visible_items), state.cursor)
        state.dirty = True

    def filter_entries(self) -> list[FilterEntry]:
        return filter_entries(self.state.available_sources, self.state.available_tags)

    def current_item(self) -> Item | None:
        state = self.state
        if 0 <= state.cursor < len(state.visible_items):
            return state.visible_items[state.cursor]
        return None

    def page_items(self) -> list[Item]:
        state = self.state
        start, end = page_bounds(state.pagination.current_page, state.pagination.page_size, len(state.visible_items))
        return state.visible_items[start:end]

    def item_by_id(self, item_id: str | None) -> Item | None:
        if item_id is None:
            return None
        for item in self.state.all_items:
            if item.id == item_id:
                return item
        return None

    def context_status(self) -> str:
        """Return the full tag name under the filter cursor when no message is active."""
        state = self.state
        if state.panel is not Panel.FILTERS or state.status is not None:
            return ""
        entries = self.filter_entries()
        if 0 <= state.filter_cursor < len(entries) and entries[state.filter_cursor].kind == ENTRY_TAG:
            return f"Tag: {entries[state.filter_cursor].value}"
        return ""

    # -- status ----------------------------------------------------------

    def set_status(self, text: str, seconds: float) -> None:
        set_status(self.state, text, seconds, self.deps.clock())

    def expire_status(self) -> bool:
        return expire_status(self.state, self.deps.clock())

    def _report_error(self, exc: Exception, prefix: str = "Error") -> None:
        logger.warning("%s: %s", prefix, exc)
        self.set_status(f"{prefix}: {exc}", STATUS_ERROR_SECONDS)

    # -- session end -----------------------------------------------------

    def quit(self) -> None:
        self.state.result = SessionResult.quit()

    def finish_with(self, action: Action) -> bool:
        """End the session on the highlighted item; return whether one existed."""
        item = self.current_item()
        if item is None:
            return False
        self.state.result = SessionResult(item_id=item.id, action=action)
        return True

    # -- panels and list navigation --------------------------------------

    def switch_panel(self) -> None:
        state = self.state
        state.panel = Panel.FILTERS if state.panel is Panel.LIST else Panel.LIST
        state.dirty = True

    def toggle_help(self) -> None:
        self.state.show_help = not self.state.show_help
        self.state.dirty = True

    def move_filter_cursor(self, delta: int) -> None:
        count = len(self.filter_entries())
        self.state.filter_cursor = (self.state.filter_cursor + delta) % count
        self.state.dirty = True

    def toggle_filter_under_cursor(self) -> None:
        entries = self.filter_entries()
        state = self.state
        if not 0 <= state.filter_cursor < len(entries):
            return
        toggle_filter_entry(state.filters, entries[state.filter_cursor])
        self.apply_filters()

    def move_cursor(self, delta: int) -> None:
        state = self.state
        if not state.visible_items:
            return
        state.cursor = max(0, min(len(state.visible_items) - 1, state.cursor + delta))
        self._refresh_pagination()

    def go_to_page(self, page: int) -> None:
        """Jump to ``page`` (clamped) and highlight its first item."""
        state = self.state
        page = max(1, min(page, state.pagination.total_pages))
        state.cursor = (page - 1) * state.pagination.page_size
        self._refresh_pagination()

    def next_page(self) -> None:
        self.go_to_page(self.state.pagination.current_page + 1)

    def previous_page(self) -> None:
        self.go_to_page(self.state.pagination.current_page - 1)

    # -- search ----------------------------------------------------------

    def begin_search(self) -> None:
        """Snapshot the visible list and start an empty query."""
        state = self.state
        state.search = SearchState(active=True, query="", snapshot=state.visible_items)
        state.dirty = True

    def set_search_query(self, query: str) -> None:
        state = self.state
        state.search.query = query[:SEARCH_CHAR_LIMIT]
        state.visible_items = apply_search(state.search.snapshot, state.search.query)
        state.cursor = 0
        self._refresh_pagination()

    def commit_search(self) -> None:
        """Keep the current query results as the list and leave search mode."""
        state = self.state
        state.search = SearchState()
        state.dirty = True

    def cancel_search(self) -> None:
        """Leave search mode and show the pre-search list unchanged."""
        state = self.state
        snapshot = state.search.snapshot
        state.search = SearchState()
        state.visible_items = snapshot
        self._refresh_pagination()

    # -- bookmarks -------------------------------------------------------

    def toggle_bookmark(self, item_id: str) -> None:
        if item_id in self.state.bookmarked_ids:
            self.remove_bookmark(item_id)
            return
        try:
            self.deps.bookmarks.add(item_id, QUICK_BOOKMARK_NOTES)
        except StoreError as exc:
            self._report_error(exc)
            return
        logger.info("bookmarked %s", item_id)
        self.set_status("Bookmarked", STATUS_OK_SECONDS)
        self.reload_caches()

    def remove_bookmark(self, item_id: str) -> None:
        if item_id not in self.state.bookmarked_ids:
            self.set_status("Not bookmarked", STATUS_OK_SECONDS)
            return
        try:
            self.deps.bookmarks.remove(item_id)
        except StoreError as exc:
            self._report_error(exc)
            return
        logger.info("removed bookmark %s", item_id)
        self.set_status("Bookmark removed", STATUS_OK_SECONDS)
        self.reload_caches()

    # -- dialogs ---------------------------------------------------------

    def _read_item_tags(self, item_id: str) -> list[str]:
        try:
            return list(self.deps.tags.get_tags(item_id))
        except StoreReadError as exc:
            logger.warning("tag read for %s failed: %s", item_id, exc)
            return []

    def _enter_mode(self, mode: InputMode, item_id: str, buffer: str = "") -> None:
        state = self.state
        state.mode = mode
        state.target_item_id = item_id
        state.edit_buffer = buffer
        state.dirty = True

    def open_tag_editor(self, item_id: str) -> None:
        """Edit tags of ``item_id`` with its current tags pre-filled."""
        self._enter_mode(InputMode.ADDING_TAG, item_id, TAG_SEPARATOR.join(self._read_item_tags(item_id)))

    def open_alias_dialog(self, item_id: str) -> None:
        self._enter_mode(InputMode.ADDING_ALIAS, item_id)

    def open_notes_dialog(self, item_id: str) -> None:
        self._enter_mode(InputMode.ADDING_NOTES, item_id)

    def open_tag_removal(self, item_id: str) -> None:
        tags = self._read_item_tags(item_id)
        if not tags:
            self.set_status("No tags to remove", STATUS_OK_SECONDS)
            return
        self._enter_mode(InputMode.REMOVING_TAG, item_id)
        self.state.removal_tags = tags
        self.state.tag_cursor = 0

    def open_preview(self, item_id: str) -> None:
        """Load full content for ``item_id`` and show it; stay put on failure."""
        item = self.item_by_id(item_id)
        if item is None:
            return
        try:
            content = self.deps.load_content(item)
        except ContentLoadError as exc:
            self._report_error(exc, prefix="Error loading content")
            return
        self._enter_mode(InputMode.VIEWING_PREVIEW, item_id)
        state = self.state
        state.preview_item = item
        state.preview_content = content
        state.preview_scroll = 0

    def close_dialog(self) -> None:
        """Discard any dialog buffer and return to normal mode."""
        state = self.state
        state.mode = InputMode.NORMAL
        state.target_item_id = None
        state.edit_buffer = ""
        state.removal_tags = []
        state.tag_cursor = 0
        state.preview_item = None
        state.preview_content = ""
        state.preview_scroll = 0
        state.dirty = True

    def edit_buffer_insert(self, text: str) -> None:
        state = self.state
        state.edit_buffer = (state.edit_buffer + text)[:DIALOG_CHAR_LIMIT]
        state.dirty = True

    def edit_buffer_backspace(self) -> None:
        self.state.edit_buffer = self.state.edit_buffer[:-1]
        self.state.dirty = True

    def edit_buffer_clear(self) -> None:
        self.state.edit_buffer = ""
        self.state.dirty = True

    def commit_dialog(self) -> None:
        mode = self.state.mode
        if mode is InputMode.ADDING_TAG:
            self.commit_tags()
        elif mode is InputMode.ADDING_ALIAS:
            self.commit_alias()
        elif mode is InputMode.ADDING_NOTES:
            self.commit_notes()

    def commit_tags(self) -> None:
        """Replace the target's tags with the parsed buffer; empty clears them."""
        state = self.state
        item_id = state.target_item_id
        if item_id is None:
            return
        tags = parse_tags(state.edit_buffer)
        try:
            self.deps.tags.remove_tags(item_id, None)
        except NotFoundError:
            pass
        except StoreError as exc:
            self._report_error(exc)
            return
        if tags:
            try:
                self.deps.tags.set_tags(item_id, tags)
            except StoreError as exc:
                self._report_error(exc)
                self.reload_caches()
                return
            self.set_status(f"✓ Tags updated: {TAG_SEPARATOR.join(tags)}", STATUS_INFO_SECONDS)
        else:
            self.set_status("✓ Tags cleared", STATUS_OK_SECONDS)
        logger.info("tags for %s set to %s", item_id, tags)
        self.close_dialog()
        self.reload_caches()

    def commit_alias(self) -> None:
        state = self.state
        item_id = state.target_item_id
        if item_id is None:
            return
        try:
            name = self.deps.aliases.add(state.edit_buffer, item_id)
        except ValidationError as exc:
            self.set_status(str(exc), STATUS_OK_SECONDS)
            return
        except StoreError as exc:
            self._report_error(exc)
            return
        logger.info("alias %s -> %s", name, item_id)
        self.set_status(f"✓ Added alias: {name}", STATUS_INFO_SECONDS)
        self.close_dialog()
        self.reload_caches()

    def commit_notes(self) -> None:
        """Bookmark the target with notes, or update notes of an existing bookmark."""
        state = self.state
        item_id = state.target_item_id
        if item_id is None:
            return
        notes = state.edit_buffer.strip()
        if not notes:
            self.set_status("Notes cannot be empty", STATUS_OK_SECONDS)
            return
        try:
            if item_id in state.bookmarked_ids:
                self.deps.bookmarks.update_notes(item_id, notes)
                message = "✓ Updated notes"
            else:
                self.deps.bookmarks.add(item_id, notes)
                message = "✓ Bookmarked with notes"
        except StoreError as exc:
            self._report_error(exc)
            return
        self.set_status(message, STATUS_INFO_SECONDS)
        self.close_dialog()
        self.reload_caches()

    def move_tag_cursor(self, delta: int) -> None:
        state = self.state
        if not state.removal_tags:
            return
        state.tag_cursor = (state.tag_cursor + delta) % len(state.removal_tags)
        state.dirty = True

    def remove_selected_tag(self) -> None:
        """Remove the tag under the cursor; leave the dialog once none remain."""
        state = self.state
        item_id = state.target_item_id
        if item_id is None or not 0 <= state.tag_cursor < len(state.removal_tags):
            return
        tag = state.removal_tags[state.tag_cursor]
        try:
            self.deps.tags.remove_tags(item_id, [tag])
        except StoreError as exc:
            self._report_error(exc)
            return
        logger.info("removed tag %s from %s", tag, item_id)
        self.set_status(f"✓ Removed tag: {tag}", STATUS_INFO_SECONDS)
        self.reload_caches()
        state.removal_tags = self._read_item_tags(item_id)
        if not state.removal_tags:
            self.close_dialog()
            self.set_status("✓ All tags removed", STATUS_OK_SECONDS)
            return
        state.tag_cursor = min(state.tag_cursor, len(state.removal_tags) - 1)
        state.dirty = True

    def scroll_preview(self, delta: int) -> None:
        self.state.preview_scroll = scroll_preview(self.state.preview_scroll, delta)
        self.state.dirty = True

    def page_preview(self, direction: int) -> None:
        self.scroll_preview(direction * PAGE_SCROLL_LINES)

    def preview_home(self) -> None:
        self.state.preview_scroll = 0
        self.state.dirty = True
