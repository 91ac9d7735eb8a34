"""Finder session state.

All filter, search, mode, pagination and status fields live on one
``FinderState`` owned by the controller. Derived lists (``filtered_items``,
``visible_items``) are stored for rendering but always recomputed from the
primary fields, never edited in place.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from ..models import Item, SessionResult

DEFAULT_PAGE_SIZE = 20


class InputMode(Enum):
    NORMAL = "normal"
    ADDING_TAG = "adding_tag"
    ADDING_ALIAS = "adding_alias"
    ADDING_NOTES = "adding_notes"
    REMOVING_TAG = "removing_tag"
    VIEWING_PREVIEW = "viewing_preview"


TEXT_DIALOG_MODES = frozenset({InputMode.ADDING_TAG, InputMode.ADDING_ALIAS, InputMode.ADDING_NOTES})


class Panel(Enum):
    FILTERS = "filters"
    LIST = "list"


@dataclass
class FilterState:
    selected_sources: set[str] = field(default_factory=set)
    selected_tags: set[str] = field(default_factory=set)
    bookmarked_only: bool = False


@dataclass
class SearchState:
    active: bool = False
    query: str = ""
    snapshot: list[Item] = field(default_factory=list)


@dataclass
class PaginationState:
    page_size: int = DEFAULT_PAGE_SIZE
    current_page: int = 1
    total_pages: int = 1


@dataclass
class StatusMessage:
    text: str
    expires_at: float


@dataclass
class FinderState:
    all_items: list[Item]
    available_sources: list[str]
    filters: FilterState
    available_tags: list[str] = field(default_factory=list)
    filtered_items: list[Item] = field(default_factory=list)
    visible_items: list[Item] = field(default_factory=list)
    search: SearchState = field(default_factory=SearchState)
    pagination: PaginationState = field(default_factory=PaginationState)
    bookmarked_ids: set[str] = field(default_factory=set)
    item_tags: dict[str, list[str]] = field(default_factory=dict)
    panel: Panel = Panel.LIST
    filter_cursor: int = 0
    cursor: int = 0
    mode: InputMode = InputMode.NORMAL
    target_item_id: str | None = None
    edit_buffer: str = ""
    removal_tags: list[str] = field(default_factory=list)
    tag_cursor: int = 0
    preview_item: Item | None = None
    preview_content: str = ""
    preview_scroll: int = 0
    status: StatusMessage | None = None
    show_help: bool = False
    dirty: bool = True
    result: SessionResult | None = None

    @property
    def status_text(self) -> str:
        return self.status.text if self.status is not None else ""
