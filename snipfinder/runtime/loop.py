"""Main interactive event loop for the finder.

Reads one key at a time, expires status messages, renders when dirty and
hands every key to the finder's key handler. Feature logic lives in the
controller; this loop is wiring only.
"""

from __future__ import annotations

import logging
import os
import shutil
from collections.abc import Callable
from dataclasses import dataclass

from ..errors import StoreReadError
from ..finder import FinderController, FinderKeyHandler
from ..finder.state import InputMode
from ..highlight import DEFAULT_STYLE
from ..input import read_key
from ..models import SessionResult
from ..render import RenderContext, render_frame
from ..ui_theme import DEFAULT_THEME, UITheme

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RuntimeLoopTiming:
    """Timing constants controlling interactive loop behavior."""

    # Wake up this often without input so expired status messages disappear.
    idle_poll_ms: int = 250


@dataclass(frozen=True)
class RenderOptions:
    theme: UITheme = DEFAULT_THEME
    style: str = DEFAULT_STYLE
    colorize: bool = True


def build_render_context(
    controller: FinderController,
    width: int,
    height: int,
    options: RenderOptions,
) -> RenderContext:
    """Snapshot controller state plus store lookups the renderer needs."""
    state = controller.state
    aliases: list[str] = []
    if state.mode is InputMode.VIEWING_PREVIEW and state.target_item_id is not None:
        try:
            aliases = list(controller.deps.aliases.aliases_for(state.target_item_id))
        except StoreReadError as exc:
            logger.warning("alias lookup failed: %s", exc)
    return RenderContext(
        state=state,
        width=width,
        height=height,
        theme=options.theme,
        style=options.style,
        colorize=options.colorize,
        context_status=controller.context_status(),
        preview_aliases=aliases,
    )


def run_main_loop(
    controller: FinderController,
    terminal,
    stdin_fd: int,
    options: RenderOptions,
    timing: RuntimeLoopTiming = RuntimeLoopTiming(),
    *,
    key_reader: Callable[..., str] = read_key,
    render: Callable[[RenderContext], None] = render_frame,
    terminal_size: Callable[[], os.terminal_size] = lambda: shutil.get_terminal_size((80, 24)),
) -> SessionResult:
    """Run the interactive loop until the controller records a session result.

    ``terminal`` only needs a ``raw_mode()`` context manager. An empty read
    (idle timeout) just loops so status expiry and resizes are picked up.
    """
    state = controller.state
    handler = FinderKeyHandler(controller)
    last_size: tuple[int, int] | None = None

    with terminal.raw_mode():
        while state.result is None:
            term = terminal_size()
            size = (term.columns, term.lines)
            if size != last_size:
                last_size = size
                state.dirty = True
            controller.expire_status()
            if state.dirty:
                render(build_render_context(controller, term.columns, term.lines, options))
                state.dirty = False

            key = key_reader(stdin_fd, timing.idle_poll_ms)
            if not key:
                continue
            logger.debug("key %r in mode %s", key, state.mode.value)
            handler.handle(key)

    return state.result
