"""UI theme definitions and selection helpers.

Themes are ANSI palettes for the finder chrome (panels, dialogs, status bar).
Syntax highlighting style for previews is a separate pygments setting.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    reset: str
    reverse: str
    border: str
    border_focused: str
    title: str
    checked: str
    tag: str
    bookmark_marker: str
    description: str
    search_query: str
    status_ok: str
    status_error: str
    help_key: str
    help_dim: str
    dialog_border: str
    dialog_title: str
    meta_label: str


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    reverse="\033[7m",
    border="\033[2;38;5;250m",
    border_focused="\033[38;5;45m",
    title="\033[1;38;5;81m",
    checked="\033[38;5;42m",
    tag="\033[38;5;214m",
    bookmark_marker="\033[1;38;5;220m",
    description="\033[2;38;5;250m",
    search_query="\033[1;38;5;81m",
    status_ok="\033[38;5;42m",
    status_error="\033[38;5;203m",
    help_key="\033[38;5;229m",
    help_dim="\033[2;38;5;250m",
    dialog_border="\033[38;5;45m",
    dialog_title="\033[1;38;5;45m",
    meta_label="\033[1;38;5;110m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reset="\033[0m",
    reverse="\033[7m",
    border="\033[2;38;5;31m",
    border_focused="\033[38;5;39m",
    title="\033[1;38;5;45m",
    checked="\033[38;5;84m",
    tag="\033[38;5;215m",
    bookmark_marker="\033[1;38;5;153m",
    description="\033[2;38;5;110m",
    search_query="\033[1;38;5;45m",
    status_ok="\033[38;5;84m",
    status_error="\033[38;5;210m",
    help_key="\033[38;5;153m",
    help_dim="\033[2;38;5;110m",
    dialog_border="\033[38;5;39m",
    dialog_title="\033[1;38;5;39m",
    meta_label="\033[1;38;5;117m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="",
    reverse="",
    border="",
    border_focused="",
    title="",
    checked="",
    tag="",
    bookmark_marker="",
    description="",
    search_query="",
    status_ok="",
    status_error="",
    help_key="",
    help_dim="",
    dialog_border="",
    dialog_title="",
    meta_label="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    candidate = str(name or "").strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]
