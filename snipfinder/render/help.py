"""Help bar and help panel text for each finder context.

Everything here is presentation-only: callers pass the controller state and
receive plain strings.
"""

from __future__ import annotations

from ..finder.state import FinderState, InputMode, Panel

SEARCH_HELP = "Type to search | Enter: apply | Esc: cancel"
FILTERS_HELP = "↑/↓: navigate | Space: toggle | Tab: switch panel | /: search | q: quit"
LIST_HELP = "p: preview | enter: select | /: search | ctrl+g: get | ctrl+s: bookmark | ctrl+t: tags | ctrl+a: alias | tab: filters"
LIST_PAGED_HELP = "p: preview | enter: select | ←/→: pages | /: search | ctrl+g: get | ctrl+s: bookmark | ctrl+t: tags | tab: filters"
DIALOG_HELP = "Enter: save | Esc: cancel"
REMOVING_TAG_HELP = "↑/↓: navigate | Space: remove | Esc: cancel"
PREVIEW_HELP = "↑/↓: scroll | ctrl+b: bookmark | ctrl+t: tags | Esc: close"
PREVIEW_DIALOG_HINT = "↑/↓: scroll | PgUp/PgDn: page | Home: top | q/Esc: close"

DIALOG_TITLES = {
    InputMode.ADDING_TAG: "Edit Tags",
    InputMode.ADDING_ALIAS: "Add Alias",
    InputMode.ADDING_NOTES: "Add Notes",
    InputMode.REMOVING_TAG: "Remove Tags",
}
DIALOG_HINTS = {
    InputMode.ADDING_TAG: "Edit tags (comma-separated). Clear all to remove. Press Enter to save, Esc to cancel.",
    InputMode.ADDING_ALIAS: "Enter an alias name for this item. Press Enter to save, Esc to cancel.",
    InputMode.ADDING_NOTES: "Enter notes for this bookmark. Press Enter to save, Esc to cancel.",
    InputMode.REMOVING_TAG: "↑/↓: navigate | Space: remove selected tag | Esc: cancel",
}

HELP_PANEL_LINES: tuple[str, ...] = (
    "KEYS",
    "Tab switch panel  / search  ? help  q/Esc quit",
    "↑/↓ or k/j move  ←/→ or h/l page  g/G first/last page",
    "Enter select  Ctrl+G get  p/Ctrl+P preview",
    "Ctrl+S toggle bookmark  Ctrl+X remove bookmark  Ctrl+N notes",
    "Ctrl+T edit tags  Ctrl+R remove tags  Ctrl+A alias",
)


def help_bar_text(state: FinderState) -> str:
    """Return the one-line key hint for the current mode and panel."""
    if state.search.active:
        return SEARCH_HELP
    if state.mode is InputMode.VIEWING_PREVIEW:
        return PREVIEW_HELP
    if state.mode is InputMode.REMOVING_TAG:
        return REMOVING_TAG_HELP
    if state.mode is not InputMode.NORMAL:
        return DIALOG_HELP
    if state.panel is Panel.FILTERS:
        return FILTERS_HELP
    if state.pagination.total_pages > 1:
        return LIST_PAGED_HELP
    return LIST_HELP


def help_panel_row_count(max_lines: int, show_help: bool) -> int:
    """Compute visible help panel height constrained by terminal rows."""
    if not show_help or max_lines <= 1:
        return 0
    return min(len(HELP_PANEL_LINES), max_lines - 1)
