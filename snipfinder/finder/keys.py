"""Mode-aware key dispatch for the finder.

``handle_key`` is the single transition entry point: the terminal loop (and
the tests) feed it decoded key tokens and it forwards each one to the
controller operation bound for the current mode and panel.
"""

from __future__ import annotations

from collections.abc import Callable

from ..input.key_registry import KeyComboBinding, KeyComboRegistry
from ..models import Action
from .controller import FinderController
from .state import TEXT_DIALOG_MODES, InputMode, Panel

QUIT_KEYS = ("q", "ESC", "CTRL_C")
CANCEL_KEYS = ("ESC", "CTRL_C")
UP_KEYS = ("UP", "k")
DOWN_KEYS = ("DOWN", "j")


def is_printable(key: str) -> bool:
    return len(key) == 1 and key.isprintable()


class FinderKeyHandler:
    """Per-mode registries bound to one controller."""

    def __init__(self, controller: FinderController) -> None:
        self.controller = controller
        self._global = self._build_global()
        self._filters = self._build_filters()
        self._list = self._build_list()
        self._search = self._build_search()
        self._dialog = self._build_dialog()
        self._removal = self._build_removal()
        self._preview = self._build_preview()

    # -- registries ------------------------------------------------------

    def _build_global(self) -> KeyComboRegistry:
        c = self.controller
        return KeyComboRegistry().register_bindings(
            KeyComboBinding(QUIT_KEYS, c.quit),
            KeyComboBinding(("TAB",), c.switch_panel),
            KeyComboBinding(("/",), c.begin_search),
            KeyComboBinding(("?",), c.toggle_help),
        )

    def _build_filters(self) -> KeyComboRegistry:
        c = self.controller
        return KeyComboRegistry().register_bindings(
            KeyComboBinding(UP_KEYS, lambda: c.move_filter_cursor(-1)),
            KeyComboBinding(DOWN_KEYS, lambda: c.move_filter_cursor(1)),
            KeyComboBinding((" ", "ENTER"), c.toggle_filter_under_cursor),
        )

    def _on_current(self, action: Callable[[str], None]) -> Callable[[], bool]:
        """Wrap ``action(item_id)`` to run against the highlighted item, if any."""

        def handler() -> bool:
            item = self.controller.current_item()
            if item is None:
                return False
            action(item.id)
            return True

        return handler

    def _build_list(self) -> KeyComboRegistry:
        c = self.controller
        state = c.state
        return KeyComboRegistry().register_bindings(
            KeyComboBinding(UP_KEYS, lambda: c.move_cursor(-1)),
            KeyComboBinding(DOWN_KEYS, lambda: c.move_cursor(1)),
            KeyComboBinding(("LEFT", "h", "PGUP"), c.previous_page),
            KeyComboBinding(("RIGHT", "l", "PGDN"), c.next_page),
            KeyComboBinding(("HOME", "g"), lambda: c.go_to_page(1)),
            KeyComboBinding(("END", "G"), lambda: c.go_to_page(state.pagination.total_pages)),
            KeyComboBinding(("ENTER",), lambda: c.finish_with(Action.SELECT)),
            KeyComboBinding(("CTRL_G",), lambda: c.finish_with(Action.GET)),
            KeyComboBinding(("CTRL_S",), self._on_current(c.toggle_bookmark)),
            KeyComboBinding(("CTRL_X",), self._on_current(c.remove_bookmark)),
            KeyComboBinding(("CTRL_T",), self._on_current(c.open_tag_editor)),
            KeyComboBinding(("CTRL_A",), self._on_current(c.open_alias_dialog)),
            KeyComboBinding(("CTRL_R",), self._on_current(c.open_tag_removal)),
            KeyComboBinding(("CTRL_N",), self._on_current(c.open_notes_dialog)),
            KeyComboBinding(("p", "CTRL_P"), self._on_current(c.open_preview)),
        )

    def _build_search(self) -> KeyComboRegistry:
        c = self.controller
        return KeyComboRegistry().register_bindings(
            KeyComboBinding(("ENTER",), c.commit_search),
            KeyComboBinding(CANCEL_KEYS, c.cancel_search),
            KeyComboBinding(("BACKSPACE",), lambda: c.set_search_query(c.state.search.query[:-1])),
            KeyComboBinding(("CTRL_U",), lambda: c.set_search_query("")),
            KeyComboBinding(("UP",), lambda: c.move_cursor(-1)),
            KeyComboBinding(("DOWN",), lambda: c.move_cursor(1)),
        )

    def _build_dialog(self) -> KeyComboRegistry:
        c = self.controller
        return KeyComboRegistry().register_bindings(
            KeyComboBinding(("ENTER",), c.commit_dialog),
            KeyComboBinding(CANCEL_KEYS, c.close_dialog),
            KeyComboBinding(("BACKSPACE",), c.edit_buffer_backspace),
            KeyComboBinding(("CTRL_U",), c.edit_buffer_clear),
        )

    def _build_removal(self) -> KeyComboRegistry:
        c = self.controller
        return KeyComboRegistry().register_bindings(
            KeyComboBinding(UP_KEYS, lambda: c.move_tag_cursor(-1)),
            KeyComboBinding(DOWN_KEYS, lambda: c.move_tag_cursor(1)),
            KeyComboBinding((" ", "d", "ENTER"), c.remove_selected_tag),
            KeyComboBinding(QUIT_KEYS, c.close_dialog),
        )

    def _on_previewed(self, action: Callable[[str], None]) -> Callable[[], bool]:
        """Like :meth:`_on_current` but targets the item shown in the preview."""

        def handler() -> bool:
            item_id = self.controller.state.target_item_id
            if item_id is None:
                return False
            action(item_id)
            return True

        return handler

    def _build_preview(self) -> KeyComboRegistry:
        c = self.controller
        return KeyComboRegistry().register_bindings(
            KeyComboBinding(UP_KEYS, lambda: c.scroll_preview(-1)),
            KeyComboBinding(DOWN_KEYS, lambda: c.scroll_preview(1)),
            KeyComboBinding(("PGUP",), lambda: c.page_preview(-1)),
            KeyComboBinding(("PGDN",), lambda: c.page_preview(1)),
            KeyComboBinding(("HOME",), c.preview_home),
            KeyComboBinding(("CTRL_S", "CTRL_B"), self._on_previewed(c.toggle_bookmark)),
            KeyComboBinding(("CTRL_X",), self._on_previewed(c.remove_bookmark)),
            KeyComboBinding(("CTRL_T",), self._on_previewed(c.open_tag_editor)),
            KeyComboBinding(("CTRL_R",), self._on_previewed(c.open_tag_removal)),
            KeyComboBinding(QUIT_KEYS, c.close_dialog),
        )

    # -- dispatch --------------------------------------------------------

    def handle(self, key: str) -> bool:
        """Apply ``key`` to the controller; return ``True`` once the session has ended."""
        c = self.controller
        state = c.state
        mode = state.mode

        if mode in TEXT_DIALOG_MODES:
            if key in self._dialog:
                self._dialog.dispatch(key)
            elif is_printable(key):
                c.edit_buffer_insert(key)
        elif mode is InputMode.REMOVING_TAG:
            self._removal.dispatch(key)
        elif mode is InputMode.VIEWING_PREVIEW:
            self._preview.dispatch(key)
        elif state.search.active:
            if key in self._search:
                self._search.dispatch(key)
            elif is_printable(key):
                c.set_search_query(state.search.query + key)
        else:
            panel = self._filters if state.panel is Panel.FILTERS else self._list
            if key in panel:
                panel.dispatch(key)
            else:
                self._global.dispatch(key)

        return state.result is not None


def handle_key(controller: FinderController, key: str) -> bool:
    """One-shot convenience wrapper around :class:`FinderKeyHandler`."""
    return FinderKeyHandler(controller).handle(key)
