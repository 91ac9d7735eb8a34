"""Preview dialog sizing and scrolling math.

Height grows with content between a readable minimum and half the terminal;
width is a share of the terminal between fixed bounds. The visible window is
a slice of the raw content lines, word-wrapped to the dialog's text width.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..ansi import word_wrap

MIN_HEIGHT = 15
MAX_HEIGHT_PERCENT = 0.5
# Title, top border, padding (2), bottom border, status row.
DIALOG_OVERHEAD = 6
# Rows taken by title, metadata block, separators and the key hint.
CONTENT_CHROME_ROWS = 10
WIDTH_PERCENT = 0.8
MIN_WIDTH = 60
MAX_WIDTH = 100
# Border plus horizontal padding on both sides.
WRAP_PADDING = 8
PAGE_SCROLL_LINES = 10


def preview_height(content_lines: int, terminal_height: int) -> int:
    """Return dialog height for ``content_lines`` of text.

    The minimum is applied first and the terminal-relative maximum last, so a
    very short terminal wins over the minimum.
    """
    max_allowed = int(terminal_height * MAX_HEIGHT_PERCENT)
    height = max(content_lines + DIALOG_OVERHEAD, MIN_HEIGHT)
    return min(height, max_allowed)


def preview_width(terminal_width: int) -> int:
    """Return dialog width: 80% of the terminal, within ``[MIN_WIDTH, MAX_WIDTH]``."""
    width = min(int(terminal_width * WIDTH_PERCENT), MAX_WIDTH)
    return max(width, MIN_WIDTH)


def content_area_height(dialog_height: int) -> int:
    return max(1, dialog_height - CONTENT_CHROME_ROWS)


def scroll_preview(offset: int, delta: int) -> int:
    """Apply ``delta`` to a scroll offset, never going above the first line.

    There is no upper bound here; :func:`preview_window` pins an overscrolled
    offset to the last content line when slicing.
    """
    return max(0, offset + delta)


@dataclass(frozen=True)
class PreviewWindow:
    dialog_height: int
    dialog_width: int
    content_height: int
    start_line: int
    end_line: int
    total_lines: int
    lines: list[str]

    @property
    def has_more_above(self) -> bool:
        return self.start_line > 0

    @property
    def has_more_below(self) -> bool:
        return self.end_line < self.total_lines

    @property
    def scroll_info(self) -> str:
        if self.total_lines <= self.content_height:
            return ""
        return f" (showing {self.start_line + 1}-{self.end_line} of {self.total_lines} lines)"


def split_content_lines(content: str) -> list[str]:
    return content.split("\n")


def preview_window(content: str, scroll: int, terminal_width: int, terminal_height: int) -> PreviewWindow:
    """Compute the visible, wrapped slice of ``content`` for a scroll offset."""
    content_lines = split_content_lines(content)
    dialog_height = preview_height(len(content_lines), terminal_height)
    dialog_width = preview_width(terminal_width)
    content_height = content_area_height(dialog_height)

    start = max(0, min(scroll, len(content_lines) - 1))
    end = min(start + content_height, len(content_lines))
    wrap_width = max(1, dialog_width - WRAP_PADDING)
    wrapped: list[str] = []
    for line in content_lines[start:end]:
        wrapped.extend(word_wrap(line, wrap_width))

    return PreviewWindow(
        dialog_height=dialog_height,
        dialog_width=dialog_width,
        content_height=content_height,
        start_line=start,
        end_line=end,
        total_lines=len(content_lines),
        lines=wrapped,
    )
