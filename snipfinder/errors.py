"""Error taxonomy shared by stores, the content loader and the finder.

Every failure the finder can recover from derives from ``SnipfinderError``.
The controller turns these into timed status messages; only the CLI layer
converts ``CatalogError`` into a process exit.
"""

from __future__ import annotations


class SnipfinderError(Exception):
    """Base class for all recoverable snipfinder errors."""


class StoreError(SnipfinderError):
    """Failure talking to a persistent tag/bookmark/alias store."""


class StoreReadError(StoreError):
    """Store file could not be read or decoded."""


class StoreWriteError(StoreError):
    """Store mutation could not be applied or persisted."""


class NotFoundError(StoreWriteError):
    """Mutation targeted an entry that does not exist."""


class AlreadyExistsError(StoreWriteError):
    """Insert targeted an entry that already exists."""


class ContentLoadError(SnipfinderError):
    """Full item content could not be loaded."""


class ValidationError(SnipfinderError):
    """User input was rejected before reaching a store."""


class CatalogError(SnipfinderError):
    """Item catalog could not be built."""
