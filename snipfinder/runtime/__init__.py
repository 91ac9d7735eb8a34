"""Terminal runtime: raw mode, config, event loop and session runner."""

from .app import build_controller, run_finder
from .loop import RenderOptions, RuntimeLoopTiming, build_render_context, run_main_loop

__all__ = [
    "RenderOptions",
    "RuntimeLoopTiming",
    "build_controller",
    "build_render_context",
    "run_finder",
    "run_main_loop",
]
