"""Tests for frame composition: panels, status line, and mode overlays."""

from __future__ import annotations

import unittest

from trydir.catalog.entries import Entry
from trydir.render import RenderContext, build_frame
from trydir.render.canvas import Canvas, Style, text_width, truncate
from trydir.render.panels import disk_usage_text, format_age, scroll_start
from trydir.session.state import SessionMode
from trydir.ui_theme import DEFAULT_THEME, THEMES, find_theme

NOW = 1_700_000_000.0


def _entry(name: str, display_name: str | None = None, **flags) -> Entry:
    return Entry(
        name=name,
        display_name=display_name or name,
        created=NOW - 86400,
        modified=NOW - 90061,
        **flags,
    )


def _context(**overrides) -> RenderContext:
    values = dict(
        mode=SessionMode.NORMAL,
        theme=DEFAULT_THEME,
        transparent=True,
        query="",
        entries=(_entry("2024-01-01 alpha", "alpha"), _entry("beta")),
        selected_index=0,
        list_start=0,
        status_message=None,
        folder_size_mb=0,
        free_space_mb=None,
        preview=(("src", True), ("README.md", False)),
        theme_names=tuple(theme.name for theme in THEMES),
        theme_cursor=0,
        location_labels=("System Config (~/.config/trydir/config.json)", "Home Directory (~/.trydir/config.json)"),
        location_cursor=0,
        now=NOW,
    )
    values.update(overrides)
    return RenderContext(**values)


def _screen(frame) -> str:
    return "\n".join(frame.canvas.row_text(y) for y in range(frame.canvas.height))


class FormattingHelperTests(unittest.TestCase):
    def test_disk_usage_placeholders(self) -> None:
        self.assertEqual(disk_usage_text(0, None), ("---", "N/A"))
        self.assertEqual(disk_usage_text(512, 2048), ("512 MB", "2.0 GB"))

    def test_format_age(self) -> None:
        self.assertEqual(format_age(NOW, NOW - 90061), "(01d 01h 01m)")
        self.assertEqual(format_age(NOW, NOW + 60), "(00d 00h 00m)")

    def test_scroll_start_keeps_selection_visible(self) -> None:
        self.assertEqual(scroll_start(0, 0, 5, 20), 0)
        self.assertEqual(scroll_start(7, 0, 5, 20), 3)
        self.assertEqual(scroll_start(2, 4, 5, 20), 2)
        self.assertEqual(scroll_start(6, 4, 5, 20), 4)
        self.assertEqual(scroll_start(0, 9, 5, 0), 0)

    def test_truncate_adds_ellipsis(self) -> None:
        self.assertEqual(truncate("abcdef", 10), "abcdef")
        self.assertEqual(truncate("abcdefghij", 6), "abc...")
        self.assertEqual(text_width("日本"), 4)


class CanvasTests(unittest.TestCase):
    def test_put_clips_at_limit(self) -> None:
        canvas = Canvas(10, 1)

        end = canvas.put(2, 0, "abcdefghijkl", max_x=6)

        self.assertEqual(end, 6)
        self.assertEqual(canvas.row_text(0), "  abcd    ")

    def test_wide_characters_take_two_cells(self) -> None:
        canvas = Canvas(6, 1)

        end = canvas.put(0, 0, "日本x")

        self.assertEqual(end, 5)
        self.assertEqual(canvas.row_text(0), "日本x ")

    def test_background_applies_to_unstyled_cells(self) -> None:
        canvas = Canvas(4, 1, background=(1, 2, 3))

        canvas.put(0, 0, "ab", Style(fg=(9, 9, 9)))

        self.assertEqual(canvas.style_at(0, 0).bg, (1, 2, 3))
        self.assertEqual(canvas.style_at(3, 0).bg, (1, 2, 3))
        self.assertIn("48;2;1;2;3", canvas.to_ansi())


class FrameLayoutTests(unittest.TestCase):
    def test_normal_frame_shows_panels_and_legend(self) -> None:
        frame = build_frame(_context(), 120, 30)
        screen = _screen(frame)

        self.assertIn("Search/New", screen)
        self.assertIn("Used: --- | Free: N/A", screen)
        self.assertIn("alpha", screen)
        self.assertNotIn("2024-01-01 alpha", screen)
        self.assertIn("beta", screen)
        self.assertIn("(01d 01h 01m)", screen)
        self.assertIn("Preview", screen)
        self.assertIn("src", screen)
        self.assertIn("README.md", screen)
        self.assertIn("Enter Select", frame.canvas.row_text(29))
        self.assertIn("→ ", screen)

    def test_status_message_replaces_legend(self) -> None:
        frame = build_frame(_context(status_message="Deleted: /tmp/x"), 120, 30)

        self.assertIn("Deleted: /tmp/x", frame.canvas.row_text(29))
        self.assertNotIn("Enter Select", frame.canvas.row_text(29))

    def test_query_is_drawn_in_search_box(self) -> None:
        frame = build_frame(_context(query="alp"), 120, 30)

        self.assertIn("alp█", frame.canvas.row_text(1))

    def test_empty_preview_and_no_selection(self) -> None:
        empty = build_frame(_context(preview=()), 120, 30)
        self.assertIn("(empty)", _screen(empty))

        nothing = build_frame(_context(entries=(), preview=None), 120, 30)
        self.assertNotIn("(empty)", _screen(nothing))

    def test_list_scrolls_to_selection(self) -> None:
        entries = tuple(_entry(f"entry-{idx:02d}") for idx in range(40))

        frame = build_frame(_context(entries=entries, selected_index=35), 120, 30)

        self.assertGreater(frame.list_start, 0)
        self.assertIn("entry-35", _screen(frame))
        self.assertNotIn("entry-00", _screen(frame))

    def test_background_fill_only_when_not_transparent(self) -> None:
        nord = find_theme("Nord")

        opaque = build_frame(_context(theme=nord, transparent=False), 80, 20)
        clear = build_frame(_context(theme=nord, transparent=True), 80, 20)

        self.assertEqual(opaque.canvas.style_at(0, 10).bg, nord.background)
        self.assertIsNone(clear.canvas.style_at(0, 10).bg)

    def test_disk_box_shows_probe_value(self) -> None:
        frame = build_frame(_context(folder_size_mb=2048, free_space_mb=500), 120, 30)

        self.assertIn("Used: 2.0 GB | Free: 500 MB", frame.canvas.row_text(1))


class OverlayTests(unittest.TestCase):
    def test_delete_confirmation_names_selected_entry(self) -> None:
        frame = build_frame(_context(mode=SessionMode.DELETE_CONFIRM, selected_index=1), 120, 30)

        self.assertIn("Delete 'beta'? (y/n)", _screen(frame))
        self.assertIn("WARNING", _screen(frame))

    def test_theme_list_marks_cursor_and_transparency(self) -> None:
        frame = build_frame(_context(mode=SessionMode.THEME_SELECT, theme_cursor=3, transparent=False), 120, 30)
        screen = _screen(frame)

        self.assertIn("Select Theme", screen)
        self.assertIn("→ " + THEMES[3].name, screen)
        self.assertIn("[ ] Transparent Background (Space to toggle)", screen)

    def test_config_prompt_and_location_list(self) -> None:
        prompt = _screen(build_frame(_context(mode=SessionMode.CONFIG_SAVE_PROMPT), 120, 30))
        self.assertIn("Config file not found.", prompt)
        self.assertIn("Create one now to save theme? (y/n)", prompt)

        locations = _screen(build_frame(_context(mode=SessionMode.CONFIG_SAVE_LOCATION_SELECT, location_cursor=1), 120, 30))
        self.assertIn("Select Config Location", locations)
        self.assertIn("→ Home Directory (~/.trydir/config.json)", locations)

    def test_about_box(self) -> None:
        screen = _screen(build_frame(_context(mode=SessionMode.ABOUT), 120, 30))

        self.assertIn("About", screen)
        self.assertIn("Press Esc to close", screen)

    def test_tiny_terminal_does_not_crash(self) -> None:
        frame = build_frame(_context(mode=SessionMode.THEME_SELECT), 8, 4)

        self.assertEqual(frame.canvas.width, 8)


if __name__ == "__main__":
    unittest.main()
