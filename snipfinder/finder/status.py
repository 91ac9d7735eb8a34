"""Timed status-line messages."""

from __future__ import annotations

from .state import FinderState, StatusMessage

STATUS_OK_SECONDS = 2.0
STATUS_INFO_SECONDS = 3.0
STATUS_ERROR_SECONDS = 3.0


def set_status(state: FinderState, text: str, seconds: float, now: float) -> None:
    """Replace any current message with ``text`` expiring ``seconds`` from ``now``."""
    state.status = StatusMessage(text=text, expires_at=now + seconds)
    state.dirty = True


def expire_status(state: FinderState, now: float) -> bool:
    """Clear the status message once ``now`` passes its expiry; return whether cleared."""
    if state.status is None or now <= state.status.expires_at:
        return False
    state.status = None
    state.dirty = True
    return True
