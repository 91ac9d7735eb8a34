"""JSON file persistence shared by the tag, bookmark and alias stores.

Missing files read as empty documents. Writes go through a temp file and
``os.replace`` so a crash never leaves a half-written store behind.
"""

from __future__ import annotations

import json
import logging
import os
from datetime import datetime, timezone
from pathlib import Path

from ..errors import StoreReadError, StoreWriteError

logger = logging.getLogger(__name__)


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


def load_document(path: Path, key: str) -> list:
    """Return the list stored under ``key`` in the JSON object at ``path``.

    Raises :class:`StoreReadError` when the file exists but cannot be read,
    is not valid JSON, or does not hold a list under ``key``.
    """
    if not path.exists():
        return []
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise StoreReadError(f"failed to read {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise StoreReadError(f"failed to parse {path}: top-level value is not an object")
    entries = data.get(key, [])
    if not isinstance(entries, list):
        raise StoreReadError(f"failed to parse {path}: {key!r} is not a list")
    return entries


def save_document(path: Path, key: str, entries: list) -> None:
    """Atomically persist ``entries`` under ``key`` as pretty-printed JSON."""
    tmp_path = path.with_name(path.name + ".tmp")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path.write_text(json.dumps({key: entries}, indent=2) + "\n", encoding="utf-8")
        os.replace(tmp_path, path)
    except OSError as exc:
        try:
            tmp_path.unlink()
        except OSError:
            logger.debug("could not remove temp file %s", tmp_path)
        raise StoreWriteError(f"failed to save {path}: {exc}") from exc
