"""Behavior tests for the finder controller state transitions.

Stores, content loader and clock are in-memory fakes so every transition
is exercised without a terminal.
"""

from __future__ import annotations

import unittest

from finder_fakes import ITEMS, FinderHarness
from snipfinder.finder.state import InputMode, Panel
from snipfinder.models import Action, SessionResult

ALL_IDS = [item.id for item in ITEMS]
FABRIC_IDS = [item_id for item_id in ALL_IDS if item_id.startswith("fabric:")]
AWESOME_IDS = [item_id for item_id in ALL_IDS if item_id.startswith("awesome:")]


class ControllerStartupTests(unittest.TestCase):
    def test_starts_on_list_panel_with_every_item_visible(self) -> None:
        h = FinderHarness()

        self.assertIs(h.state.panel, Panel.LIST)
        self.assertIs(h.state.mode, InputMode.NORMAL)
        self.assertEqual(h.visible_ids(), ALL_IDS)
        self.assertEqual(h.state.available_sources, ["awesome", "fabric"])
        self.assertEqual(h.state.filters.selected_sources, {"awesome", "fabric"})

    def test_starts_on_filters_panel_without_items(self) -> None:
        h = FinderHarness(items=[])

        self.assertIs(h.state.panel, Panel.FILTERS)
        self.assertEqual(h.state.pagination.total_pages, 1)
        self.assertIsNone(h.controller.current_item())

    def test_tag_read_failure_is_treated_as_empty(self) -> None:
        h = FinderHarness(tags={"fabric:summarize": ["x"]})
        h.tags.fail_reads = True

        h.controller.reload_caches()

        self.assertEqual(h.state.item_tags, {})
        self.assertEqual(h.state.available_tags, [])
        self.assertEqual(h.visible_ids(), ALL_IDS)


class ControllerFilterTests(unittest.TestCase):
    def test_source_toggle_round_trip_restores_item_order(self) -> None:
        h = FinderHarness()
        h.controller.switch_panel()
        self.assertIs(h.state.panel, Panel.FILTERS)

        h.state.filter_cursor = 0
        h.controller.toggle_filter_under_cursor()
        self.assertEqual(h.visible_ids(), FABRIC_IDS)
        self.assertEqual(len(h.visible_ids()), 6)

        h.controller.toggle_filter_under_cursor()
        self.assertEqual(h.visible_ids(), ALL_IDS)

    def test_filter_cursor_wraps_over_entries(self) -> None:
        h = FinderHarness()

        h.controller.move_filter_cursor(-1)
        self.assertEqual(h.state.filter_cursor, 2)
        h.controller.move_filter_cursor(1)
        self.assertEqual(h.state.filter_cursor, 0)

    def test_tag_filter_uses_or_semantics(self) -> None:
        h = FinderHarness(
            tags={
                "fabric:summarize": ["x"],
                "awesome:translator": ["y"],
                "fabric:write-essay": ["z"],
            }
        )
        # awesome, fabric, x, y, z, bookmarked
        h.state.filter_cursor = 2
        h.controller.toggle_filter_under_cursor()
        h.state.filter_cursor = 3
        h.controller.toggle_filter_under_cursor()

        self.assertEqual(h.visible_ids(), ["fabric:summarize", "awesome:translator"])

    def test_context_status_names_full_tag_under_cursor(self) -> None:
        long_tag = "a-really-long-tag-name-for-testing"
        h = FinderHarness(tags={"fabric:summarize": [long_tag]})
        h.controller.switch_panel()

        h.state.filter_cursor = 2
        self.assertEqual(h.controller.context_status(), f"Tag: {long_tag}")

        h.state.filter_cursor = 0
        self.assertEqual(h.controller.context_status(), "")

    def test_bookmarked_only_follows_bookmark_changes(self) -> None:
        h = FinderHarness()
        h.state.filter_cursor = 2
        h.controller.toggle_filter_under_cursor()
        self.assertEqual(h.visible_ids(), [])

        h.controller.toggle_bookmark("awesome:translator")
        self.assertEqual(h.visible_ids(), ["awesome:translator"])

        h.controller.toggle_bookmark("awesome:translator")
        self.assertEqual(h.visible_ids(), [])

    def test_page_is_clamped_when_filter_shrinks_list(self) -> None:
        h = FinderHarness(page_size=2)
        h.controller.go_to_page(5)
        self.assertEqual(h.state.pagination.current_page, 5)
        self.assertEqual(h.state.cursor, 8)

        h.state.filter_cursor = 1
        h.controller.toggle_filter_under_cursor()

        self.assertEqual(h.visible_ids(), AWESOME_IDS)
        self.assertEqual(h.state.pagination.total_pages, 2)
        self.assertEqual(h.state.pagination.current_page, 2)
        self.assertEqual(h.state.cursor, 3)


class ControllerNavigationTests(unittest.TestCase):
    def test_cursor_moves_are_clamped_and_pages_follow(self) -> None:
        h = FinderHarness(page_size=3)
        self.assertEqual(h.state.pagination.total_pages, 4)

        h.controller.move_cursor(-1)
        self.assertEqual(h.state.cursor, 0)
        h.controller.move_cursor(4)
        self.assertEqual(h.state.cursor, 4)
        self.assertEqual(h.state.pagination.current_page, 2)
        h.controller.move_cursor(100)
        self.assertEqual(h.state.cursor, 9)
        self.assertEqual(h.state.pagination.current_page, 4)

    def test_page_jumps_select_first_item_of_page(self) -> None:
        h = FinderHarness(page_size=3)

        h.controller.next_page()
        self.assertEqual((h.state.pagination.current_page, h.state.cursor), (2, 3))
        h.controller.go_to_page(99)
        self.assertEqual((h.state.pagination.current_page, h.state.cursor), (4, 9))
        h.controller.previous_page()
        self.assertEqual((h.state.pagination.current_page, h.state.cursor), (3, 6))
        self.assertEqual([item.id for item in h.controller.page_items()], ALL_IDS[6:9])


class ControllerSearchTests(unittest.TestCase):
    def test_cancel_restores_pre_search_list_exactly(self) -> None:
        h = FinderHarness()
        before = list(h.state.visible_items)

        h.controller.begin_search()
        h.controller.set_search_query("summ")
        self.assertEqual(h.visible_ids(), ["fabric:summarize", "fabric:create-summary"])

        h.controller.cancel_search()
        self.assertFalse(h.state.search.active)
        self.assertEqual(h.state.search.query, "")
        self.assertEqual(h.state.visible_items, before)

    def test_empty_query_yields_snapshot(self) -> None:
        h = FinderHarness()
        h.controller.begin_search()
        h.controller.set_search_query("x")
        h.controller.set_search_query("")

        self.assertEqual(h.visible_ids(), ALL_IDS)

    def test_search_is_case_insensitive_over_description(self) -> None:
        h = FinderHarness()
        h.controller.begin_search()
        h.controller.set_search_query("PYTHON")

        self.assertEqual(h.visible_ids(), ["awesome:python-interpreter"])

    def test_search_only_sees_filtered_items(self) -> None:
        h = FinderHarness()
        h.state.filter_cursor = 0
        h.controller.toggle_filter_under_cursor()

        h.controller.begin_search()
        h.controller.set_search_query("act")

        self.assertEqual(h.visible_ids(), ["fabric:extract-wisdom"])

    def test_search_within_filtered_sources_then_escape(self) -> None:
        h = FinderHarness()
        self.assertEqual(len(h.visible_ids()), 10)
        h.state.filter_cursor = 0
        h.controller.toggle_filter_under_cursor()
        self.assertEqual(len(h.visible_ids()), 6)

        h.controller.begin_search()
        h.controller.set_search_query("writ")
        self.assertEqual(h.visible_ids(), ["fabric:write-essay", "fabric:improve-writing"])

        h.controller.cancel_search()
        self.assertEqual(h.visible_ids(), FABRIC_IDS)

    def test_commit_keeps_results_until_next_filter_change(self) -> None:
        h = FinderHarness()
        h.controller.begin_search()
        h.controller.set_search_query("summ")
        h.controller.commit_search()

        self.assertFalse(h.state.search.active)
        self.assertEqual(h.visible_ids(), ["fabric:summarize", "fabric:create-summary"])

        h.state.filter_cursor = 2
        h.controller.toggle_filter_under_cursor()
        h.controller.toggle_filter_under_cursor()
        self.assertEqual(h.visible_ids(), ALL_IDS)


class ControllerBookmarkTests(unittest.TestCase):
    def test_toggle_bookmark_round_trip(self) -> None:
        h = FinderHarness()

        h.controller.toggle_bookmark("fabric:summarize")
        self.assertIn("fabric:summarize", h.state.bookmarked_ids)
        self.assertEqual(h.bookmarks.bookmarks["fabric:summarize"].notes, "Bookmarked via finder")
        self.assertEqual(h.state.status_text, "Bookmarked")
        self.assertEqual(h.state.status.expires_at, h.clock.now + 2.0)

        h.controller.toggle_bookmark("fabric:summarize")
        self.assertNotIn("fabric:summarize", h.state.bookmarked_ids)
        self.assertEqual(h.state.status_text, "Bookmark removed")

    def test_remove_bookmark_when_not_bookmarked(self) -> None:
        h = FinderHarness()

        h.controller.remove_bookmark("fabric:summarize")

        self.assertEqual(h.state.status_text, "Not bookmarked")

    def test_write_failure_sets_error_status_and_keeps_state(self) -> None:
        h = FinderHarness()
        h.bookmarks.fail_writes = True

        h.controller.toggle_bookmark("fabric:summarize")

        self.assertEqual(h.state.status_text, "Error: disk full")
        self.assertEqual(h.state.status.expires_at, h.clock.now + 3.0)
        self.assertEqual(h.state.bookmarked_ids, set())
        self.assertIs(h.state.mode, InputMode.NORMAL)

    def test_status_expires_after_its_duration(self) -> None:
        h = FinderHarness()
        h.controller.toggle_bookmark("fabric:summarize")

        h.clock.advance(2.0)
        self.assertFalse(h.controller.expire_status())
        self.assertEqual(h.state.status_text, "Bookmarked")

        h.clock.advance(0.01)
        self.assertTrue(h.controller.expire_status())
        self.assertIsNone(h.state.status)


class ControllerTagDialogTests(unittest.TestCase):
    def test_editor_prefills_current_tags(self) -> None:
        h = FinderHarness(tags={"fabric:summarize": ["old", "keep"]})

        h.controller.open_tag_editor("fabric:summarize")

        self.assertIs(h.state.mode, InputMode.ADDING_TAG)
        self.assertEqual(h.state.target_item_id, "fabric:summarize")
        self.assertEqual(h.state.edit_buffer, "old, keep")

    def test_commit_replaces_tag_set(self) -> None:
        h = FinderHarness(tags={"fabric:summarize": ["old", "keep"]})
        h.controller.open_tag_editor("fabric:summarize")
        h.controller.edit_buffer_clear()
        h.controller.edit_buffer_insert("New, keep, new")

        h.controller.commit_dialog()

        self.assertEqual(h.tags.tags["fabric:summarize"], ["new", "keep"])
        self.assertEqual(h.state.item_tags["fabric:summarize"], ["new", "keep"])
        self.assertEqual(h.state.available_tags, ["keep", "new"])
        self.assertEqual(h.state.status_text, "✓ Tags updated: new, keep")
        self.assertIs(h.state.mode, InputMode.NORMAL)
        self.assertEqual(h.state.edit_buffer, "")

    def test_empty_commit_clears_all_tags(self) -> None:
        h = FinderHarness(tags={"fabric:summarize": ["old"]})
        h.controller.open_tag_editor("fabric:summarize")
        h.controller.edit_buffer_clear()

        h.controller.commit_dialog()

        self.assertNotIn("fabric:summarize", h.tags.tags)
        self.assertEqual(h.state.available_tags, [])
        self.assertEqual(h.state.status_text, "✓ Tags cleared")
        self.assertIs(h.state.mode, InputMode.NORMAL)

    def test_empty_commit_on_untagged_item_is_benign(self) -> None:
        h = FinderHarness()
        h.controller.open_tag_editor("awesome:storyteller")

        h.controller.commit_dialog()

        self.assertEqual(h.state.status_text, "✓ Tags cleared")
        self.assertIs(h.state.mode, InputMode.NORMAL)

    def test_write_failure_keeps_dialog_and_buffer(self) -> None:
        h = FinderHarness(tags={"fabric:summarize": ["old"]})
        h.controller.open_tag_editor("fabric:summarize")
        h.controller.edit_buffer_insert(", more")
        h.tags.fail_writes = True

        h.controller.commit_dialog()

        self.assertTrue(h.state.status_text.startswith("Error:"))
        self.assertIs(h.state.mode, InputMode.ADDING_TAG)
        self.assertEqual(h.state.edit_buffer, "old, more")

    def test_cleared_tag_is_dropped_from_selected_filters(self) -> None:
        h = FinderHarness(tags={"fabric:summarize": ["old"]})
        h.state.filter_cursor = 2
        h.controller.toggle_filter_under_cursor()
        self.assertEqual(h.visible_ids(), ["fabric:summarize"])

        h.controller.open_tag_editor("fabric:summarize")
        h.controller.edit_buffer_clear()
        h.controller.commit_dialog()

        self.assertEqual(h.state.filters.selected_tags, set())
        self.assertEqual(h.visible_ids(), ALL_IDS)
        self.assertEqual(h.state.filter_cursor, 2)

    def test_cancel_discards_buffer(self) -> None:
        h = FinderHarness(tags={"fabric:summarize": ["old"]})
        h.controller.open_tag_editor("fabric:summarize")
        h.controller.edit_buffer_insert(", new")

        h.controller.close_dialog()

        self.assertIs(h.state.mode, InputMode.NORMAL)
        self.assertEqual(h.state.edit_buffer, "")
        self.assertEqual(h.tags.tags["fabric:summarize"], ["old"])


class ControllerAliasAndNotesTests(unittest.TestCase):
    def test_empty_alias_keeps_dialog_open(self) -> None:
        h = FinderHarness()
        h.controller.open_alias_dialog("fabric:summarize")

        h.controller.commit_dialog()

        self.assertEqual(h.state.status_text, "Alias cannot be empty")
        self.assertIs(h.state.mode, InputMode.ADDING_ALIAS)

    def test_invalid_alias_retains_buffer(self) -> None:
        h = FinderHarness()
        h.controller.open_alias_dialog("fabric:summarize")
        h.controller.edit_buffer_insert("a")

        h.controller.commit_dialog()

        self.assertEqual(h.state.status_text, "Alias must be at least 2 characters long")
        self.assertEqual(h.state.edit_buffer, "a")
        self.assertIs(h.state.mode, InputMode.ADDING_ALIAS)

    def test_alias_is_normalized_and_stored(self) -> None:
        h = FinderHarness()
        h.controller.open_alias_dialog("fabric:summarize")
        h.controller.edit_buffer_insert("My-Alias")

        h.controller.commit_dialog()

        self.assertEqual(h.aliases.aliases, {"my-alias": "fabric:summarize"})
        self.assertEqual(h.state.status_text, "✓ Added alias: my-alias")
        self.assertIs(h.state.mode, InputMode.NORMAL)

    def test_duplicate_alias_reports_error_in_dialog(self) -> None:
        h = FinderHarness()
        h.aliases.add("sum", "fabric:summarize")
        h.controller.open_alias_dialog("fabric:create-summary")
        h.controller.edit_buffer_insert("sum")

        h.controller.commit_dialog()

        self.assertEqual(h.state.status_text, "Error: alias 'sum' already exists")
        self.assertIs(h.state.mode, InputMode.ADDING_ALIAS)
        self.assertEqual(h.state.edit_buffer, "sum")

    def test_notes_create_then_update_bookmark(self) -> None:
        h = FinderHarness()
        h.controller.open_notes_dialog("fabric:summarize")
        h.controller.edit_buffer_insert("great prompt")
        h.controller.commit_dialog()

        self.assertEqual(h.bookmarks.bookmarks["fabric:summarize"].notes, "great prompt")
        self.assertIn("fabric:summarize", h.state.bookmarked_ids)
        self.assertEqual(h.state.status_text, "✓ Bookmarked with notes")

        h.controller.open_notes_dialog("fabric:summarize")
        h.controller.edit_buffer_insert("updated")
        h.controller.commit_dialog()

        self.assertEqual(h.bookmarks.bookmarks["fabric:summarize"].notes, "updated")
        self.assertEqual(h.state.status_text, "✓ Updated notes")
        self.assertIs(h.state.mode, InputMode.NORMAL)

    def test_blank_notes_are_rejected(self) -> None:
        h = FinderHarness()
        h.controller.open_notes_dialog("fabric:summarize")
        h.controller.edit_buffer_insert("   ")

        h.controller.commit_dialog()

        self.assertEqual(h.state.status_text, "Notes cannot be empty")
        self.assertIs(h.state.mode, InputMode.ADDING_NOTES)
        self.assertEqual(h.bookmarks.bookmarks, {})

    def test_edit_buffer_is_capped(self) -> None:
        h = FinderHarness()
        h.controller.open_notes_dialog("fabric:summarize")

        h.controller.edit_buffer_insert("x" * 250)

        self.assertEqual(len(h.state.edit_buffer), 200)


class ControllerTagRemovalTests(unittest.TestCase):
    def test_untagged_item_stays_in_normal_mode(self) -> None:
        h = FinderHarness()

        h.controller.open_tag_removal("fabric:summarize")

        self.assertIs(h.state.mode, InputMode.NORMAL)
        self.assertEqual(h.state.status_text, "No tags to remove")

    def test_cursor_cycles_and_last_removal_exits(self) -> None:
        h = FinderHarness(tags={"fabric:summarize": ["a", "b"]})
        h.controller.open_tag_removal("fabric:summarize")
        self.assertIs(h.state.mode, InputMode.REMOVING_TAG)
        self.assertEqual(h.state.removal_tags, ["a", "b"])

        h.controller.move_tag_cursor(1)
        self.assertEqual(h.state.tag_cursor, 1)
        h.controller.move_tag_cursor(1)
        self.assertEqual(h.state.tag_cursor, 0)
        h.controller.move_tag_cursor(-1)
        self.assertEqual(h.state.tag_cursor, 1)

        h.controller.remove_selected_tag()
        self.assertEqual(h.tags.tags["fabric:summarize"], ["a"])
        self.assertEqual(h.state.removal_tags, ["a"])
        self.assertEqual(h.state.tag_cursor, 0)
        self.assertEqual(h.state.status_text, "✓ Removed tag: b")
        self.assertIs(h.state.mode, InputMode.REMOVING_TAG)

        h.controller.remove_selected_tag()
        self.assertNotIn("fabric:summarize", h.tags.tags)
        self.assertIs(h.state.mode, InputMode.NORMAL)
        self.assertEqual(h.state.status_text, "✓ All tags removed")
        self.assertEqual(h.state.available_tags, [])


class ControllerPreviewTests(unittest.TestCase):
    def test_preview_opens_at_top_and_scrolls(self) -> None:
        h = FinderHarness(contents={"fabric:summarize": "# Summarize\n\nbody"})

        h.controller.open_preview("fabric:summarize")
        self.assertIs(h.state.mode, InputMode.VIEWING_PREVIEW)
        self.assertEqual(h.state.preview_content, "# Summarize\n\nbody")
        self.assertEqual(h.state.preview_scroll, 0)

        h.controller.scroll_preview(-1)
        self.assertEqual(h.state.preview_scroll, 0)
        h.controller.page_preview(1)
        self.assertEqual(h.state.preview_scroll, 10)
        h.controller.scroll_preview(1)
        self.assertEqual(h.state.preview_scroll, 11)
        h.controller.preview_home()
        self.assertEqual(h.state.preview_scroll, 0)

        h.controller.close_dialog()
        self.assertIs(h.state.mode, InputMode.NORMAL)
        self.assertIsNone(h.state.preview_item)

    def test_load_failure_shows_status_and_stays_normal(self) -> None:
        h = FinderHarness()

        h.controller.open_preview("awesome:storyteller")

        self.assertIs(h.state.mode, InputMode.NORMAL)
        self.assertEqual(h.state.status_text, "Error loading content: failed to read awesome:storyteller")


class ControllerSessionResultTests(unittest.TestCase):
    def test_select_and_get_emit_highlighted_item(self) -> None:
        h = FinderHarness()
        self.assertTrue(h.controller.finish_with(Action.SELECT))
        self.assertEqual(h.state.result, SessionResult("fabric:summarize", Action.SELECT))

        h = FinderHarness()
        h.controller.move_cursor(1)
        h.controller.finish_with(Action.GET)
        self.assertEqual(h.state.result, SessionResult("awesome:linux-terminal", Action.GET))

    def test_quit_has_no_selection(self) -> None:
        h = FinderHarness()
        h.controller.quit()

        self.assertEqual(h.state.result, SessionResult(None, Action.NONE))

    def test_select_on_empty_list_does_nothing(self) -> None:
        h = FinderHarness(items=[])

        self.assertFalse(h.controller.finish_with(Action.SELECT))
        self.assertIsNone(h.state.result)


if __name__ == "__main__":
    unittest.main()
