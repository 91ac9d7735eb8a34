"""Rendering engine for the finder's two-panel terminal view.

``build_frame`` composes one full screen as a list of ANSI lines from a
:class:`RenderContext` without touching the terminal or mutating state;
``render_frame`` writes such a frame to stdout.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field

from ..ansi import clip_ansi_line, display_width, pad_ansi_line, strip_ansi, truncate_tag, word_wrap
from ..finder.filtering import ENTRY_SOURCE, ENTRY_TAG, filter_entries, is_entry_selected
from ..finder.pagination import page_bounds, pagination_text
from ..finder.preview import preview_window
from ..finder.state import TEXT_DIALOG_MODES, FinderState, InputMode, Panel
from ..highlight import DEFAULT_STYLE, highlight_line, sanitize_terminal_text
from ..ui_theme import DEFAULT_THEME, UITheme
from .help import (
    DIALOG_HINTS,
    DIALOG_TITLES,
    HELP_PANEL_LINES,
    PREVIEW_DIALOG_HINT,
    help_bar_text,
    help_panel_row_count,
)

MIN_FILTER_WIDTH = 30
FILTER_WIDTH_PERCENT = 0.3
DIALOG_WIDTH = 60
BOOKMARK_MARKER = "[*] "
BOOKMARK_LEGEND = "[*] Bookmarked"
CURSOR_MARKER = "→ "
CHECKED = "[✓]"
UNCHECKED = "[ ]"
INPUT_CURSOR = "▌"
MORE_ABOVE = "▲ More content above ▲"
MORE_BELOW = "▼ More content below ▼"


@dataclass
class RenderContext:
    state: FinderState
    width: int
    height: int
    theme: UITheme = DEFAULT_THEME
    style: str = DEFAULT_STYLE
    colorize: bool = True
    context_status: str = ""
    preview_aliases: list[str] = field(default_factory=list)


def selected_with_ansi(text: str, theme: UITheme) -> str:
    """Apply selection styling without discarding existing ANSI colors."""
    if not text or not theme.reverse:
        return text
    # Keep reverse video active even when the text contains internal resets.
    return theme.reverse + text.replace("\033[0m", "\033[0;7m") + theme.reset


def _styled(text: str, sgr: str, theme: UITheme) -> str:
    if not sgr or not text:
        return text
    return f"{sgr}{text}{theme.reset}"


def _columns_after(text: str, start_col: int) -> str:
    """Return the part of plain ``text`` that begins at display column ``start_col``."""
    col = 0
    for index, ch in enumerate(text):
        if col >= start_col:
            return text[index:]
        col += display_width(ch)
    return ""


def box_lines(
    title: str,
    body: list[str],
    width: int,
    height: int,
    theme: UITheme,
    *,
    active: bool = False,
    footer: str = "",
    border_sgr: str | None = None,
) -> list[str]:
    """Draw ``body`` inside a rounded border with ``title`` embedded on top.

    ``footer`` is right-aligned in the bottom border. Body rows beyond the
    inner height are dropped and missing rows are blank.
    """
    width = max(10, width)
    inner_width = width - 4
    inner_height = max(0, height - 2)
    sgr = border_sgr if border_sgr is not None else (theme.border_focused if active else theme.border)

    title_text = clip_ansi_line(f" {title} ", max(0, width - 4))
    top_fill = "─" * max(0, width - 3 - display_width(title_text))
    top = _styled("╭─", sgr, theme) + _styled(title_text, theme.title, theme) + _styled(top_fill + "╮", sgr, theme)

    footer_text = f" {footer} " if footer else ""
    footer_text = clip_ansi_line(footer_text, max(0, width - 4))
    bottom_fill = "─" * max(0, width - 3 - display_width(footer_text))
    bottom = _styled("╰" + bottom_fill, sgr, theme) + footer_text + _styled("─╯", sgr, theme)

    side = _styled("│", sgr, theme)
    rows = [top]
    for index in range(inner_height):
        text = body[index] if index < len(body) else ""
        padded = pad_ansi_line(text, inner_width)
        if "\033" in padded:
            padded += theme.reset
        rows.append(f"{side} {padded} {side}")
    rows.append(bottom)
    return rows


def _window(lines: list[str], focus: int, rows: int) -> list[str]:
    """Return ``rows`` consecutive lines that keep index ``focus`` visible."""
    if len(lines) <= rows:
        return lines
    start = max(0, min(focus - rows + 1, len(lines) - rows))
    start = min(start, max(0, focus))
    return lines[start:start + rows]


def filters_panel_lines(state: FinderState, width: int, height: int, theme: UITheme) -> list[str]:
    focused = state.panel is Panel.FILTERS and state.mode is InputMode.NORMAL
    body: list[str] = []
    cursor_line = 0
    entries = filter_entries(state.available_sources, state.available_tags)
    section = None
    for index, entry in enumerate(entries):
        if entry.kind != section:
            if section is not None:
                body.append("")
            section = entry.kind
            heading = {ENTRY_SOURCE: "Sources", ENTRY_TAG: "Tags"}.get(entry.kind, "Other")
            body.append(_styled(heading, theme.title, theme))

        if entry.kind == ENTRY_SOURCE:
            label = entry.value
        elif entry.kind == ENTRY_TAG:
            label = _styled(truncate_tag(entry.value), theme.tag, theme)
        else:
            label = "Bookmarked only"
        selected = is_entry_selected(state.filters, entry)
        checkbox = _styled(CHECKED, theme.checked, theme) if selected else UNCHECKED
        line = f"{checkbox} {label}"
        if focused and index == state.filter_cursor:
            cursor_line = len(body)
            line = selected_with_ansi(CURSOR_MARKER + line, theme)
        else:
            line = "  " + line
        body.append(line)

    inner_height = max(0, height - 2)
    stats = _styled(f"Showing: {len(state.filtered_items)}/{len(state.all_items)} items", theme.description, theme)
    visible = _window(body, cursor_line, max(0, inner_height - 2))
    visible = visible + [""] * (max(0, inner_height - 2) - len(visible)) + ["", stats]
    return box_lines("FILTERS", visible, width, height, theme, active=focused)


def _item_row(state: FinderState, index: int, width: int, theme: UITheme, focused: bool) -> str:
    item = state.visible_items[index]
    marker = _styled(BOOKMARK_MARKER, theme.bookmark_marker, theme) if item.id in state.bookmarked_ids else "    "
    is_cursor = index == state.cursor
    prefix = CURSOR_MARKER if is_cursor else "  "
    row = f"{prefix}{marker}{item.id}"
    if item.description:
        room = width - display_width(strip_ansi(row)) - 2
        if room > 3:
            row += "  " + _styled(clip_ansi_line(item.description, room), theme.description, theme)
    if is_cursor and focused:
        return selected_with_ansi(pad_ansi_line(row, width), theme)
    return row


def list_panel_lines(state: FinderState, width: int, height: int, theme: UITheme) -> list[str]:
    focused = state.panel is Panel.LIST and state.mode is InputMode.NORMAL
    inner_width = max(1, width - 4)
    inner_height = max(0, height - 2)
    head: list[str] = []
    if state.search.active:
        query = _styled(state.search.query, theme.search_query, theme)
        head.append(f"{_styled('Search: ', theme.title, theme)}{query}{INPUT_CURSOR}")

    rows: list[str] = []
    if not state.visible_items:
        if state.search.active:
            rows.append("No results.")
        elif state.filters.bookmarked_only:
            rows.append("No bookmarked items")
        else:
            rows.append("No items match the current filters.")
    else:
        start, end = page_bounds(state.pagination.current_page, state.pagination.page_size, len(state.visible_items))
        rows = [_item_row(state, index, inner_width, theme, focused) for index in range(start, end)]
        room = max(1, inner_height - len(head) - 2)
        rows = _window(rows, state.cursor - start, room)

    legend_rows = ["", _styled(BOOKMARK_LEGEND, theme.description, theme)]
    filler = [""] * max(0, inner_height - len(head) - len(rows) - len(legend_rows))
    body = head + rows + filler + legend_rows

    count = len(state.visible_items)
    title = f"ITEMS ({count} {'item' if count == 1 else 'items'})"
    return box_lines(title, body, width, height, theme, active=focused, footer=pagination_text(state.pagination))


def status_line(context: RenderContext) -> str:
    state = context.state
    theme = context.theme
    text = state.status_text or context.context_status
    if not text:
        return ""
    sgr = theme.status_error if text.startswith("Error") else theme.status_ok
    return _styled(clip_ansi_line(text, context.width), sgr, theme)


def _dialog_width(terminal_width: int) -> int:
    return max(10, min(DIALOG_WIDTH, terminal_width - 2))


def text_dialog_lines(context: RenderContext) -> list[str]:
    state = context.state
    theme = context.theme
    width = _dialog_width(context.width)
    inner = width - 4
    body = ["", f"Item: {state.target_item_id}", ""]
    if state.mode is InputMode.ADDING_TAG:
        body.append("Tags (comma-separated):")
    buffer = state.edit_buffer
    # Keep the tail of long input visible next to the cursor.
    while buffer and display_width(buffer) + 3 > inner:
        buffer = buffer[1:]
    body.append(f"> {buffer}{INPUT_CURSOR}")
    body.append("")
    body.extend(_styled(line, theme.help_dim, theme) for line in word_wrap(DIALOG_HINTS[state.mode], inner))
    body.append("")
    return box_lines(DIALOG_TITLES[state.mode], body, width, len(body) + 2, theme, border_sgr=theme.dialog_border)


def removal_dialog_lines(context: RenderContext) -> list[str]:
    state = context.state
    theme = context.theme
    width = _dialog_width(context.width)
    body = ["", f"Item: {state.target_item_id}", "", "Select tag to remove:", ""]
    for index, tag in enumerate(state.removal_tags):
        if index == state.tag_cursor:
            body.append(selected_with_ansi(CURSOR_MARKER + tag, theme))
        else:
            body.append("  " + tag)
    body.append("")
    body.extend(_styled(line, theme.help_dim, theme) for line in word_wrap(DIALOG_HINTS[state.mode], width - 4))
    max_height = max(3, context.height - 2)
    return box_lines(DIALOG_TITLES[state.mode], body, width, min(len(body) + 2, max_height), theme, border_sgr=theme.dialog_border)


def preview_dialog_lines(context: RenderContext) -> list[str]:
    state = context.state
    theme = context.theme
    item = state.preview_item
    if item is None:
        return []
    window = preview_window(sanitize_terminal_text(state.preview_content), state.preview_scroll, context.width, context.height)
    width = min(window.dialog_width, context.width)
    inner = width - 4
    rule = _styled("─" * inner, theme.border, theme)

    def label(name: str, value: str) -> str:
        return f"{_styled(name + ':', theme.meta_label, theme)} {value}"

    tags = state.item_tags.get(item.id, [])
    bookmarked = "Yes" if item.id in state.bookmarked_ids else "No"
    body = [
        label("ID", item.id) + "  " + label("Name", item.name),
        label("Description", item.description or "-"),
        " | ".join(
            (
                label("Tags", ", ".join(tags) or "-"),
                label("Aliases", ", ".join(context.preview_aliases) or "-"),
                label("Bookmarked", bookmarked),
            )
        ),
        rule,
        _styled(MORE_ABOVE.center(inner).rstrip(), theme.help_dim, theme) if window.has_more_above else "",
    ]
    content_rows = window.lines[: window.content_height]
    for line in content_rows:
        clipped = clip_ansi_line(line, inner)
        body.append(highlight_line(clipped, context.style) if context.colorize else clipped)
    body.extend([""] * (window.content_height - len(content_rows)))
    body.append(_styled(MORE_BELOW.center(inner).rstrip(), theme.help_dim, theme) if window.has_more_below else "")
    body.append(rule)
    body.append(_styled(PREVIEW_DIALOG_HINT, theme.help_dim, theme))

    height = min(window.dialog_height, context.height)
    title = f"Preview: {item.id}{window.scroll_info}"
    return box_lines(title, body, width, height, theme, border_sgr=theme.dialog_border)


def dialog_lines(context: RenderContext) -> list[str]:
    mode = context.state.mode
    if mode in TEXT_DIALOG_MODES:
        return text_dialog_lines(context)
    if mode is InputMode.REMOVING_TAG:
        return removal_dialog_lines(context)
    if mode is InputMode.VIEWING_PREVIEW:
        return preview_dialog_lines(context)
    return []


def overlay_lines(base: list[str], dialog: list[str], width: int, theme: UITheme) -> list[str]:
    """Center ``dialog`` over ``base``; covered rows keep dimmed base text on each side."""
    if not dialog:
        return base
    dialog_width = max(display_width(line) for line in dialog)
    x = max(0, (width - dialog_width) // 2)
    y = max(0, (len(base) - len(dialog)) // 2)
    out = list(base)
    for offset, line in enumerate(dialog):
        row = y + offset
        if row >= len(out):
            break
        plain = strip_ansi(out[row])
        left = pad_ansi_line(plain, x)
        right = clip_ansi_line(_columns_after(plain, x + dialog_width), max(0, width - x - dialog_width))
        out[row] = _styled(left, theme.help_dim, theme) + line + _styled(right, theme.help_dim, theme)
    return out


def build_frame(context: RenderContext) -> list[str]:
    """Compose the whole screen as exactly ``context.height`` lines."""
    state = context.state
    theme = context.theme
    width = max(20, context.width)
    height = max(8, context.height)

    help_rows = help_panel_row_count(height - 4, state.show_help)
    main_rows = max(3, height - 2 - help_rows)

    filter_width = max(MIN_FILTER_WIDTH, int(width * FILTER_WIDTH_PERCENT))
    filter_width = min(filter_width, width // 2)
    list_width = width - filter_width

    left = filters_panel_lines(state, filter_width, main_rows, theme)
    right = list_panel_lines(state, list_width, main_rows, theme)
    lines = [a + b for a, b in zip(left, right)]

    for row in range(help_rows):
        text = HELP_PANEL_LINES[row]
        lines.append(_styled(text, theme.help_key if row == 0 else theme.help_dim, theme))
    lines.append(status_line(context))
    lines.append(_styled(clip_ansi_line(help_bar_text(state), width), theme.help_dim, theme))

    lines = lines[:height] + [""] * max(0, height - len(lines))
    return overlay_lines(lines, dialog_lines(context), width, theme)


def render_frame(context: RenderContext) -> None:
    """Write a freshly composed frame to stdout in one system call."""
    out = ["\033[H\033[J"]
    out.append("\r\n".join(build_frame(context)))
    out.append(context.theme.reset)
    os.write(sys.stdout.fileno(), "".join(out).encode("utf-8", errors="replace"))
