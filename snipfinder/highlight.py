"""Preview text sanitization and Markdown syntax highlighting.

Item bodies are treated as Markdown and colored with pygments. Terminal
control bytes are neutralized first so previews cannot move the cursor or
ring the bell.
"""

from __future__ import annotations

import re

from pygments import highlight
from pygments.formatters import Terminal256Formatter
from pygments.lexers import MarkdownLexer
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

DEFAULT_STYLE = "monokai"
_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")

_FORMATTERS: dict[str, Terminal256Formatter] = {}
_LEXER = MarkdownLexer(stripnl=False, ensurenl=False)


def sanitize_terminal_text(source: str) -> str:
    """Escape terminal control bytes to avoid side effects (bell, cursor moves, etc.)."""
    if _CONTROL_RE.search(source) is None:
        return source
    return _CONTROL_RE.sub(lambda match: f"\\x{ord(match.group(0)):02x}", source)


def normalize_style(style: str | None) -> str:
    """Return ``style`` when pygments knows it, else the default style."""
    if not style:
        return DEFAULT_STYLE
    try:
        get_style_by_name(style)
    except ClassNotFound:
        return DEFAULT_STYLE
    return style


def _formatter_for_style(style: str) -> Terminal256Formatter:
    formatter = _FORMATTERS.get(style)
    if formatter is None:
        formatter = Terminal256Formatter(style=style)
        _FORMATTERS[style] = formatter
    return formatter


def highlight_line(line: str, style: str = DEFAULT_STYLE) -> str:
    """Color one already-wrapped preview line as Markdown."""
    if not line.strip():
        return line
    rendered = highlight(line, _LEXER, _formatter_for_style(normalize_style(style)))
    return rendered.rstrip("\n")


def highlight_lines(lines: list[str], style: str = DEFAULT_STYLE) -> list[str]:
    return [highlight_line(line, style) for line in lines]
