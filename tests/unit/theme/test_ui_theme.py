from __future__ import annotations

import unittest

from trydir.ui_theme import (
    DEFAULT_THEME,
    THEMES,
    available_theme_names,
    custom_theme,
    find_theme,
    parse_hex_color,
    theme_index,
)


class ThemeRegistryTests(unittest.TestCase):
    def test_registry_order_and_backgrounds(self) -> None:
        names = available_theme_names()

        self.assertEqual(names[0], "Default")
        self.assertEqual(len(set(names)), len(names))
        self.assertIs(THEMES[0], DEFAULT_THEME)
        self.assertIsNone(DEFAULT_THEME.background)
        for theme in THEMES[1:]:
            self.assertIsNotNone(theme.background, theme.name)

    def test_find_theme_is_case_insensitive(self) -> None:
        self.assertEqual(find_theme("  nord ").name, "Nord")
        self.assertEqual(find_theme("SynthWave '84").name, "SynthWave '84")
        self.assertIsNone(find_theme("nope"))
        self.assertIsNone(find_theme(None))

    def test_theme_index(self) -> None:
        self.assertEqual(theme_index("Default"), 0)
        self.assertEqual(THEMES[theme_index("Dracula")].name, "Dracula")
        self.assertEqual(theme_index("Custom"), 0)


class CustomThemeTests(unittest.TestCase):
    def test_parse_hex_color(self) -> None:
        self.assertEqual(parse_hex_color("#ff0080"), (255, 0, 128))
        self.assertEqual(parse_hex_color("00FF00"), (0, 255, 0))
        self.assertIsNone(parse_hex_color("#fff"))
        self.assertIsNone(parse_hex_color(123))

    def test_custom_theme_applies_valid_overrides_only(self) -> None:
        theme = custom_theme({"popup_bg": "#101010", "popup_text": "bad", "name": "#000000"})

        self.assertEqual(theme.name, "Custom")
        self.assertEqual(theme.popup_bg, (16, 16, 16))
        self.assertEqual(theme.popup_text, DEFAULT_THEME.popup_text)


if __name__ == "__main__":
    unittest.main()
