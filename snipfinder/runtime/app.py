"""Runtime composition layer for snipfinder.

Builds the controller from the catalog items and stores, wires the terminal
and key reader, and runs the interactive loop to a session result.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable, Iterable

from ..finder import FinderController, FinderDeps
from ..finder.state import DEFAULT_PAGE_SIZE
from ..models import Item, SessionResult
from ..stores import Stores
from .loop import RenderOptions, run_main_loop
from .terminal import TerminalController

logger = logging.getLogger(__name__)


def build_controller(
    items: Iterable[Item],
    stores: Stores,
    load_content: Callable[[Item], str],
    *,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> FinderController:
    deps = FinderDeps(
        tags=stores.tags,
        bookmarks=stores.bookmarks,
        aliases=stores.aliases,
        load_content=load_content,
    )
    return FinderController(items, deps, page_size=page_size)


def run_finder(
    items: Iterable[Item],
    stores: Stores,
    load_content: Callable[[Item], str],
    *,
    page_size: int = DEFAULT_PAGE_SIZE,
    options: RenderOptions = RenderOptions(),
) -> SessionResult:
    """Run one interactive finder session on the controlling terminal."""
    controller = build_controller(items, stores, load_content, page_size=page_size)
    stdin_fd = sys.stdin.fileno()
    terminal = TerminalController(stdin_fd, sys.stdout.fileno())
    logger.info("finder session started with %d items", len(controller.state.all_items))
    result = run_main_loop(controller, terminal, stdin_fd, options)
    logger.info("finder session ended: %s %s", result.action.value, result.item_id)
    return result
