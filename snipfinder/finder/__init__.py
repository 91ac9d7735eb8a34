"""Terminal-independent finder state machine."""

from .controller import FinderController
from .deps import FinderDeps
from .keys import FinderKeyHandler, handle_key
from .state import FinderState, InputMode, Panel

__all__ = [
    "FinderController",
    "FinderDeps",
    "FinderKeyHandler",
    "FinderState",
    "InputMode",
    "Panel",
    "handle_key",
]
