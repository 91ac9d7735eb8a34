"""Command-line front door for snipfinder.

Parses CLI options, loads the catalog and stores, and runs the interactive
finder. When stdin/stdout is not a terminal it prints matching item IDs
instead. The session result is acted on after the terminal is restored.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import TextIO

from .catalog import ContentLoader, DirectoryCatalog
from .errors import AlreadyExistsError, CatalogError, ContentLoadError, StoreError
from .finder.filtering import item_matches_query
from .logging_setup import setup_logging
from .models import Action, Item, SessionResult
from .runtime import RenderOptions, run_finder
from .runtime.config import (
    DEFAULT_LOG_PATH,
    load_catalog_root,
    load_data_dir,
    load_page_size,
    load_style,
    load_theme_name,
)
from .stores import Stores
from .ui_theme import available_theme_names, resolve_theme

logger = logging.getLogger(__name__)

FALLBACK_LIMIT = 50
FINDER_BOOKMARK_NOTES = "Added via interactive finder"


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="snipfinder",
        description="Browse, filter, tag and bookmark text snippets in an interactive terminal finder.",
    )
    parser.add_argument("query", nargs="?", default="", help="Only show items whose ID, name or description contains QUERY.")
    parser.add_argument("--root", type=Path, default=None, help="Catalog directory (one subdirectory per source).")
    parser.add_argument("--data-dir", type=Path, default=None, help="Directory holding tags, bookmarks and aliases.")
    parser.add_argument("--get", action="store_true", help="Print the selected item's content instead of its ID.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--style", default=None, help="Pygments style name for previews.")
    parser.add_argument("--page-size", type=_positive_int, default=None, help="Items per list page.")
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument("--log-file", type=Path, default=None, help="Write the debug log to this file.")
    parser.add_argument("--verbose", action="store_true", help="Log debug details.")
    return parser


def load_items(root: Path, query: str) -> list[Item]:
    """Return catalog items under ``root`` matching ``query`` (all when empty)."""
    items = DirectoryCatalog(root).list_items()
    if not query:
        return items
    return [item for item in items if item_matches_query(item, query)]


def print_fallback(items: list[Item], out: TextIO) -> None:
    """Non-interactive output: one item ID per line, capped at ``FALLBACK_LIMIT``."""
    for item in items[:FALLBACK_LIMIT]:
        out.write(f"{item.id}\n")
    if len(items) > FALLBACK_LIMIT:
        out.write(f"... and {len(items) - FALLBACK_LIMIT} more\n")


def handle_result(
    result: SessionResult,
    items: list[Item],
    stores: Stores,
    loader: ContentLoader,
    *,
    get_content: bool,
    out: TextIO,
    err: TextIO,
) -> None:
    """Act on the finder's session result.

    Raises ``SystemExit`` when content cannot be loaded or a bookmark cannot
    be written.
    """
    if result.item_id is None or result.action is Action.NONE:
        return
    item_id = result.item_id
    action = result.action
    if action is Action.SELECT and not get_content:
        out.write(f"{item_id}\n")
        return

    if action in (Action.GET, Action.SELECT):
        item = next((candidate for candidate in items if candidate.id == item_id), None)
        if item is None:
            raise SystemExit(f"Item not found: {item_id}")
        try:
            content = loader.load(item)
        except ContentLoadError as exc:
            raise SystemExit(f"Failed to load {item_id}: {exc}") from exc
        out.write(content if content.endswith("\n") else content + "\n")
        return

    if action is Action.BOOKMARK:
        try:
            stores.bookmarks.add(item_id, FINDER_BOOKMARK_NOTES)
        except AlreadyExistsError:
            err.write(f"Already bookmarked: {item_id}\n")
            return
        except StoreError as exc:
            raise SystemExit(f"Failed to bookmark: {exc}") from exc
        err.write(f"✓ Bookmarked: {item_id}\n")
        return

    if action is Action.TAG:
        err.write(f"To edit tags, open the finder and press Ctrl+T on {item_id}\n")


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and run the finder (or the non-TTY fallback)."""
    args = build_parser().parse_args(argv)
    setup_logging(args.log_file or DEFAULT_LOG_PATH, verbose=args.verbose)

    root = args.root or load_catalog_root()
    data_dir = args.data_dir or load_data_dir()
    try:
        items = load_items(root, args.query)
    except CatalogError as exc:
        logger.error("%s", exc)
        raise SystemExit(str(exc)) from exc

    if not items:
        sys.stderr.write("No items found\n")
        return

    if not (sys.stdin.isatty() and sys.stdout.isatty()):
        logger.info("not a terminal, printing %d matching ids", len(items))
        print_fallback(items, sys.stdout)
        return

    stores = Stores.open(data_dir)
    loader = ContentLoader()
    options = RenderOptions(
        theme=resolve_theme(args.theme or load_theme_name(), no_color=args.no_color),
        style=args.style or load_style(),
        colorize=not args.no_color,
    )
    result = run_finder(
        items,
        stores,
        loader.load,
        page_size=args.page_size or load_page_size(),
        options=options,
    )
    handle_result(
        result,
        items,
        stores,
        loader,
        get_content=args.get,
        out=sys.stdout,
        err=sys.stderr,
    )


if __name__ == "__main__":
    main()
