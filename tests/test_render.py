"""Tests for frame composition with the plain theme."""

from __future__ import annotations

import unittest

from finder_fakes import FinderHarness
from snipfinder.ansi import display_width
from snipfinder.finder.state import StatusMessage
from snipfinder.render import RenderContext, box_lines, build_frame, selected_with_ansi
from snipfinder.render.help import (
    DIALOG_HELP,
    FILTERS_HELP,
    LIST_HELP,
    LIST_PAGED_HELP,
    PREVIEW_HELP,
    SEARCH_HELP,
    help_bar_text,
    help_panel_row_count,
)
from snipfinder.ui_theme import DEFAULT_THEME, PLAIN_THEME


def frame_for(harness: FinderHarness, width: int = 100, height: int = 30, **kwargs) -> list[str]:
    context = RenderContext(
        state=harness.state,
        width=width,
        height=height,
        theme=PLAIN_THEME,
        colorize=False,
        context_status=harness.controller.context_status(),
        **kwargs,
    )
    return build_frame(context)


class BoxLinesTests(unittest.TestCase):
    def test_every_row_has_exact_width(self) -> None:
        rows = box_lines("TITLE", ["one", "a much longer line than fits in the box"], 20, 5, PLAIN_THEME, footer="1/2")

        self.assertEqual(len(rows), 5)
        self.assertTrue(all(display_width(row) == 20 for row in rows))
        self.assertTrue(rows[0].startswith("╭─ TITLE "))
        self.assertTrue(rows[-1].endswith(" 1/2 ─╯"))

    def test_selected_with_ansi_keeps_reverse_through_resets(self) -> None:
        styled = selected_with_ansi("a\033[0mb", DEFAULT_THEME)

        self.assertEqual(styled, "\033[7ma\033[0;7mb\033[0m")
        self.assertEqual(selected_with_ansi("plain", PLAIN_THEME), "plain")


class BuildFrameTests(unittest.TestCase):
    def test_frame_fills_terminal(self) -> None:
        lines = frame_for(FinderHarness())

        self.assertEqual(len(lines), 30)
        self.assertTrue(all(display_width(line) == 100 for line in lines[:28]))
        self.assertIn("FILTERS", lines[0])
        self.assertIn("ITEMS (10 items)", lines[0])
        self.assertTrue(lines[-1].startswith("p: preview"))

    def test_filters_panel_contents(self) -> None:
        h = FinderHarness(tags={"fabric:summarize": ["writing"]})
        h.controller.switch_panel()

        text = "\n".join(frame_for(h))

        self.assertIn("Sources", text)
        self.assertIn("→ [✓] awesome", text)
        self.assertIn("[✓] fabric", text)
        self.assertIn("[ ] writing", text)
        self.assertIn("[ ] Bookmarked only", text)
        self.assertIn("Showing: 10/10 items", text)

    def test_list_rows_mark_cursor_and_bookmarks(self) -> None:
        h = FinderHarness(bookmarks={"awesome:linux-terminal": ""})

        text = "\n".join(frame_for(h))

        self.assertIn("→     fabric:summarize", text)
        self.assertIn("  [*] awesome:linux-terminal", text)
        self.assertIn("[*] Bookmarked", text)
        self.assertIn("1/1", text)

    def test_search_header_and_no_results(self) -> None:
        h = FinderHarness()
        h.controller.begin_search()
        h.controller.set_search_query("zzz")

        lines = frame_for(h)
        text = "\n".join(lines)

        self.assertIn("Search: zzz▌", text)
        self.assertIn("No results.", text)
        self.assertIn("ITEMS (0 items)", lines[0])
        self.assertEqual(lines[-1], SEARCH_HELP)

    def test_empty_bookmarked_only_message(self) -> None:
        h = FinderHarness()
        h.state.filter_cursor = 2
        h.controller.toggle_filter_under_cursor()

        self.assertIn("No bookmarked items", "\n".join(frame_for(h)))

    def test_status_line_shows_message_then_context(self) -> None:
        h = FinderHarness(tags={"fabric:summarize": ["writing"]})
        h.controller.switch_panel()
        h.state.filter_cursor = 2

        self.assertEqual(frame_for(h)[-2], "Tag: writing")

        h.state.status = StatusMessage("Error: disk full", h.clock.now + 3)
        self.assertEqual(frame_for(h)[-2], "Error: disk full")

    def test_help_panel_rows(self) -> None:
        h = FinderHarness()
        h.controller.toggle_help()

        lines = frame_for(h)

        self.assertEqual(len(lines), 30)
        self.assertIn("KEYS", lines)


class DialogFrameTests(unittest.TestCase):
    def test_tag_editor_dialog(self) -> None:
        h = FinderHarness(tags={"fabric:summarize": ["old"]})
        h.controller.open_tag_editor("fabric:summarize")

        text = "\n".join(frame_for(h))

        self.assertIn("Edit Tags", text)
        self.assertIn("Item: fabric:summarize", text)
        self.assertIn("Tags (comma-separated):", text)
        self.assertIn("> old▌", text)

    def test_removal_dialog(self) -> None:
        h = FinderHarness(tags={"fabric:summarize": ["a", "b"]})
        h.controller.open_tag_removal("fabric:summarize")

        text = "\n".join(frame_for(h))

        self.assertIn("Remove Tags", text)
        self.assertIn("→ a", text)
        self.assertIn("Select tag to remove:", text)

    def test_preview_dialog(self) -> None:
        h = FinderHarness(contents={"fabric:summarize": "# Summarize\n\nbody"})
        h.controller.open_preview("fabric:summarize")

        lines = frame_for(h, preview_aliases=["sum"])
        text = "\n".join(lines)

        self.assertEqual(len(lines), 30)
        self.assertIn("Preview: fabric:summarize", text)
        self.assertIn("ID: fabric:summarize  Name: summarize", text)
        self.assertIn("Aliases: sum", text)
        self.assertIn("Bookmarked: No", text)
        self.assertIn("body", text)
        self.assertNotIn("More content below", text)
        self.assertEqual(lines[-1], PREVIEW_HELP)

    def test_long_preview_shows_scroll_markers(self) -> None:
        content = "\n".join(f"line {n}" for n in range(1, 61))
        h = FinderHarness(contents={"fabric:summarize": content})
        h.controller.open_preview("fabric:summarize")
        h.controller.page_preview(1)

        text = "\n".join(frame_for(h))

        self.assertIn("▲ More content above ▲", text)
        self.assertIn("▼ More content below ▼", text)
        self.assertIn("(showing 11-", text)


class HelpTextTests(unittest.TestCase):
    def test_help_bar_follows_mode_and_panel(self) -> None:
        h = FinderHarness()
        self.assertEqual(help_bar_text(h.state), LIST_HELP)

        h.controller.switch_panel()
        self.assertEqual(help_bar_text(h.state), FILTERS_HELP)

        h.controller.open_alias_dialog("fabric:summarize")
        self.assertEqual(help_bar_text(h.state), DIALOG_HELP)

        self.assertEqual(help_bar_text(FinderHarness(page_size=3).state), LIST_PAGED_HELP)

    def test_help_panel_row_count(self) -> None:
        self.assertEqual(help_panel_row_count(20, False), 0)
        self.assertEqual(help_panel_row_count(20, True), 6)
        self.assertEqual(help_panel_row_count(3, True), 2)
        self.assertEqual(help_panel_row_count(1, True), 0)


if __name__ == "__main__":
    unittest.main()
