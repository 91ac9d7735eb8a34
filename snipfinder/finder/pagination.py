"""Page math for the item list. Pages are 1-indexed."""

from __future__ import annotations

from .state import PaginationState


def total_pages(count: int, page_size: int) -> int:
    """Return ``max(1, ceil(count / page_size))``."""
    size = max(1, page_size)
    return max(1, (max(0, count) + size - 1) // size)


def clamp_page(page: int, pages: int) -> int:
    return max(1, min(page, max(1, pages)))


def page_for_index(index: int, page_size: int) -> int:
    return max(0, index) // max(1, page_size) + 1


def page_bounds(page: int, page_size: int, count: int) -> tuple[int, int]:
    """Return the ``[start, end)`` item slice shown on ``page``."""
    size = max(1, page_size)
    start = min((max(1, page) - 1) * size, max(0, count))
    return start, min(start + size, max(0, count))


def recompute_pagination(pagination: PaginationState, count: int, cursor: int) -> int:
    """Refresh ``pagination`` for ``count`` items and return the clamped cursor.

    The cursor is clamped into the visible list and the current page follows
    it, so the page is always within ``[1, total_pages]``.
    """
    pagination.total_pages = total_pages(count, pagination.page_size)
    cursor = 0 if count <= 0 else max(0, min(cursor, count - 1))
    pagination.current_page = clamp_page(page_for_index(cursor, pagination.page_size), pagination.total_pages)
    return cursor


def pagination_text(pagination: PaginationState) -> str:
    return f"{pagination.current_page}/{pagination.total_pages}"
