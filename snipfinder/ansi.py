"""ANSI-aware text measurement and line shaping utilities.

Provides display-width measurement, clipping, word wrapping and tag
truncation. These helpers keep rows aligned when color codes and wide chars
are present, and they back the tag-display and preview sizing math.
"""

from __future__ import annotations

import re
import unicodedata

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
TAB_STOP = 8
TAG_DISPLAY_WIDTH = 25
ELLIPSIS = "..."


def char_display_width(ch: str, col: int) -> int:
    """Return terminal column width for one character at visual column ``col``.

    Tabs expand to the next 8-column stop, combining marks consume no columns,
    and East Asian wide/fullwidth characters consume two.
    """
    if ch == "\t":
        return TAB_STOP - (col % TAB_STOP)
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def display_width(text: str) -> int:
    """Return the visual width of ``text`` ignoring ANSI escape sequences."""
    col = 0
    for ch in ANSI_ESCAPE_RE.sub("", text):
        col += char_display_width(ch, col)
    return col


def strip_ansi(text: str) -> str:
    return ANSI_ESCAPE_RE.sub("", text)


def clip_ansi_line(text: str, max_cols: int) -> str:
    """Trim a styled line to at most ``max_cols`` display columns.

    ANSI escape sequences are preserved verbatim and do not count toward width.
    Tabs are expanded into spaces so clipping aligns with rendered terminal cells.
    """
    if max_cols <= 0 or not text:
        return ""

    out: list[str] = []
    col = 0
    i = 0
    n = len(text)
    while i < n and col < max_cols:
        if text[i] == "\x1b":
            match = ANSI_ESCAPE_RE.match(text, i)
            if match:
                out.append(match.group(0))
                i = match.end()
                continue
        ch = text[i]
        w = char_display_width(ch, col)
        if col + w > max_cols:
            break
        out.append(" " * w if ch == "\t" else ch)
        col += w
        i += 1

    return "".join(out)


def pad_ansi_line(text: str, width: int) -> str:
    """Clip ``text`` to ``width`` columns and right-pad it with spaces."""
    clipped = clip_ansi_line(text, width)
    return clipped + " " * max(0, width - display_width(clipped))


def wrap_ansi_line(text: str, width: int) -> list[str]:
    """Hard-wrap a styled line into chunks that fit ``width`` display columns.

    Escape sequences remain attached to their surrounding chunk.
    """
    if width <= 0 or not text:
        return [""]

    wrapped: list[str] = []
    chunk: list[str] = []
    col = 0
    i = 0
    n = len(text)
    while i < n:
        if text[i] == "\x1b":
            match = ANSI_ESCAPE_RE.match(text, i)
            if match:
                chunk.append(match.group(0))
                i = match.end()
                continue
        ch = text[i]
        w = char_display_width(ch, col)
        if col + w > width and chunk:
            wrapped.append("".join(chunk))
            chunk = []
            col = 0
            w = char_display_width(ch, col)
        chunk.append(" " * w if ch == "\t" else ch)
        col += w
        i += 1

    wrapped.append("".join(chunk))
    return wrapped


def word_wrap(line: str, width: int) -> list[str]:
    """Wrap plain ``line`` on word boundaries to at most ``width`` columns.

    Lines that already fit are returned unchanged. Words wider than ``width``
    are hard-split with :func:`wrap_ansi_line`. A blank line wraps to ``[""]``.
    """
    if width <= 0:
        return [line]
    if display_width(line) <= width:
        return [line]

    out: list[str] = []
    current = ""
    current_width = 0
    for word in line.split():
        word_width = display_width(word)
        if word_width > width:
            if current:
                out.append(current)
            pieces = wrap_ansi_line(word, width)
            out.extend(pieces[:-1])
            current = pieces[-1]
            current_width = display_width(current)
            continue
        needed = word_width if not current else current_width + 1 + word_width
        if needed <= width:
            current = word if not current else f"{current} {word}"
            current_width = needed
            continue
        out.append(current)
        current = word
        current_width = word_width
    if current or not out:
        out.append(current)
    return out


def truncate_tag(tag: str, max_width: int = TAG_DISPLAY_WIDTH) -> str:
    """Shorten ``tag`` so its display width fits ``max_width`` columns.

    Tags that already fit are returned unchanged. Longer tags are cut at a
    character boundary so that the kept prefix plus ``...`` fits in ``max_width``;
    a wide character that would straddle the limit is dropped whole.
    """
    if display_width(tag) <= max_width:
        return tag

    room = max(0, max_width - len(ELLIPSIS))
    kept: list[str] = []
    col = 0
    for ch in tag:
        w = char_display_width(ch, col)
        if col + w > room:
            break
        kept.append(ch)
        col += w
    return "".join(kept) + ELLIPSIS
