"""File-only logging for snipfinder.

The finder owns the terminal while it runs, so log records never go to
stdout/stderr; they are appended to a log file instead.
"""

from __future__ import annotations

import logging
from pathlib import Path

LOGGER_NAME = "snipfinder"
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


def _has_file_handler(logger: logging.Logger, filename: str) -> bool:
    return any(
        isinstance(handler, logging.FileHandler) and getattr(handler, "baseFilename", None) == filename
        for handler in logger.handlers
    )


def setup_logging(log_path: Path, *, verbose: bool = False) -> logging.Logger:
    """Attach a file handler for ``log_path`` to the package logger once.

    The level is INFO, or DEBUG when ``verbose``. A log file that cannot be
    opened leaves logging silent rather than aborting the session.
    """
    logger = logging.getLogger(LOGGER_NAME)
    level = logging.DEBUG if verbose else logging.INFO
    logger.setLevel(level)
    logger.propagate = False

    filename = str(Path(log_path).resolve())
    if not _has_file_handler(logger, filename):
        try:
            Path(filename).parent.mkdir(parents=True, exist_ok=True)
            handler: logging.Handler = logging.FileHandler(filename, encoding="utf-8")
        except OSError:
            handler = logging.NullHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    for handler in logger.handlers:
        handler.setLevel(level)
    return logger
