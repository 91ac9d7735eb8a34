"""Persistent JSON config helpers.

Holds the UI theme, preview style, page size and the catalog/data locations.
Malformed or missing config always falls back to defaults.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from platformdirs import user_config_dir, user_data_dir, user_log_dir

from ..finder.state import DEFAULT_PAGE_SIZE
from ..highlight import DEFAULT_STYLE

logger = logging.getLogger(__name__)

APP_NAME = "snipfinder"
CONFIG_FILENAME = "config.json"
LOG_FILENAME = "snipfinder.log"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
DEFAULT_DATA_DIR = Path(user_data_dir(APP_NAME, appauthor=False))
DEFAULT_LOG_PATH = Path(user_log_dir(APP_NAME, appauthor=False)) / LOG_FILENAME
DEFAULT_CATALOG_DIRNAME = "catalog"


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.warning("ignoring unreadable config %s: %s", CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def _load_string(key: str) -> str | None:
    value = load_config().get(key)
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def load_theme_name() -> str | None:
    """Load persisted UI theme name, returning ``None`` when unset/invalid."""
    return _load_string("theme")


def load_style() -> str:
    return _load_string("style") or DEFAULT_STYLE


def load_page_size() -> int:
    """Return the configured page size; booleans and values below 1 are ignored."""
    value = load_config().get("page_size")
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        return DEFAULT_PAGE_SIZE
    return value


def load_data_dir() -> Path:
    value = _load_string("data_dir")
    return Path(value).expanduser() if value else DEFAULT_DATA_DIR


def load_catalog_root() -> Path:
    """Return the configured catalog root, defaulting to ``<data dir>/catalog``."""
    value = _load_string("catalog_root")
    if value:
        return Path(value).expanduser()
    return load_data_dir() / DEFAULT_CATALOG_DIRNAME
