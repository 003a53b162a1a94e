"""UI theme definitions and selection helpers.

Themes are named truecolor palettes applied to every panel of the picker.
The registry order is fixed; ``Default`` comes first and is the only entry
without a background (it renders on the terminal's own background).
"""

from __future__ import annotations

import re
from dataclasses import dataclass, fields, replace

RGB = tuple[int, int, int]

BLACK: RGB = (0, 0, 0)
WHITE: RGB = (255, 255, 255)
GRAY: RGB = (192, 192, 192)
YELLOW: RGB = (255, 255, 0)

_HEX_COLOR_RE = re.compile(r"^#?([0-9a-fA-F]{6})$")


@dataclass(frozen=True)
class UITheme:
    """Semantic palette used by renderers."""

    name: str
    background: RGB | None
    title_try: RGB
    title_dir: RGB
    search_title: RGB
    search_border: RGB
    folder_title: RGB
    folder_border: RGB
    disk_title: RGB
    disk_border: RGB
    preview_title: RGB
    preview_border: RGB
    legends_title: RGB
    legends_border: RGB
    list_date: RGB
    list_highlight_bg: RGB
    list_highlight_fg: RGB
    helpers_colors: RGB
    status_message: RGB
    popup_bg: RGB
    popup_text: RGB
    icon_rust: RGB
    icon_maven: RGB
    icon_flutter: RGB
    icon_go: RGB
    icon_python: RGB
    icon_mise: RGB
    icon_worktree: RGB
    icon_worktree_lock: RGB
    icon_gitmodules: RGB
    icon_git: RGB
    icon_folder: RGB
    icon_file: RGB


DEFAULT_THEME = UITheme(
    name="Default",
    background=None,
    title_try=(137, 180, 250),
    title_dir=(243, 139, 168),
    search_title=(250, 179, 135),
    search_border=(147, 153, 178),
    folder_title=(166, 227, 161),
    folder_border=(147, 153, 178),
    disk_title=(249, 226, 175),
    disk_border=(147, 153, 178),
    preview_title=(137, 180, 250),
    preview_border=(147, 153, 178),
    legends_title=(203, 166, 247),
    legends_border=(147, 153, 178),
    list_date=(166, 173, 200),
    list_highlight_bg=(88, 91, 112),
    list_highlight_fg=(205, 214, 244),
    helpers_colors=(147, 153, 178),
    status_message=(249, 226, 175),
    popup_bg=(30, 30, 46),
    popup_text=(243, 139, 168),
    icon_rust=(230, 100, 50),
    icon_maven=(255, 150, 50),
    icon_flutter=(2, 123, 222),
    icon_go=(0, 173, 216),
    icon_python=YELLOW,
    icon_mise=(250, 179, 135),
    icon_worktree=(100, 180, 100),
    icon_worktree_lock=WHITE,
    icon_gitmodules=(180, 130, 200),
    icon_git=(240, 80, 50),
    icon_folder=(249, 226, 175),
    icon_file=(166, 173, 200),
)

CATPPUCCIN_MOCHA_THEME = UITheme(
    name="Catppuccin Mocha",
    background=(30, 30, 46),
    title_try=(137, 180, 250),
    title_dir=(243, 139, 168),
    search_title=(250, 179, 135),
    search_border=(147, 153, 178),
    folder_title=(166, 227, 161),
    folder_border=(147, 153, 178),
    disk_title=(249, 226, 175),
    disk_border=(147, 153, 178),
    preview_title=(137, 180, 250),
    preview_border=(147, 153, 178),
    legends_title=(203, 166, 247),
    legends_border=(147, 153, 178),
    list_date=(166, 173, 200),
    list_highlight_bg=(88, 91, 112),
    list_highlight_fg=(205, 214, 244),
    helpers_colors=(147, 153, 178),
    status_message=(249, 226, 175),
    popup_bg=(30, 30, 46),
    popup_text=(243, 139, 168),
    icon_rust=(250, 179, 135),
    icon_maven=(243, 139, 168),
    icon_flutter=(137, 180, 250),
    icon_go=(148, 226, 213),
    icon_python=(249, 226, 175),
    icon_mise=(250, 179, 135),
    icon_worktree=(166, 227, 161),
    icon_worktree_lock=(166, 173, 200),
    icon_gitmodules=(203, 166, 247),
    icon_git=(243, 139, 168),
    icon_folder=(249, 226, 175),
    icon_file=(166, 173, 200),
)

DRACULA_THEME = UITheme(
    name="Dracula",
    background=(40, 42, 54),
    title_try=(189, 147, 249),
    title_dir=(255, 121, 198),
    search_title=(255, 184, 108),
    search_border=(98, 114, 164),
    folder_title=(80, 250, 123),
    folder_border=(98, 114, 164),
    disk_title=(241, 250, 140),
    disk_border=(98, 114, 164),
    preview_title=(139, 233, 253),
    preview_border=(98, 114, 164),
    legends_title=(189, 147, 249),
    legends_border=(98, 114, 164),
    list_date=(139, 233, 253),
    list_highlight_bg=(68, 71, 90),
    list_highlight_fg=(248, 248, 242),
    helpers_colors=(98, 114, 164),
    status_message=(241, 250, 140),
    popup_bg=(40, 42, 54),
    popup_text=(255, 85, 85),
    icon_rust=(255, 184, 108),
    icon_maven=(255, 85, 85),
    icon_flutter=(139, 233, 253),
    icon_go=(139, 233, 253),
    icon_python=(241, 250, 140),
    icon_mise=(255, 184, 108),
    icon_worktree=(80, 250, 123),
    icon_worktree_lock=(248, 248, 242),
    icon_gitmodules=(189, 147, 249),
    icon_git=(255, 121, 198),
    icon_folder=(241, 250, 140),
    icon_file=(139, 233, 253),
)

JETBRAINS_DARCULA_THEME = UITheme(
    name="JetBrains Darcula",
    background=(43, 43, 43),
    title_try=(78, 124, 238),
    title_dir=(204, 120, 50),
    search_title=(106, 135, 89),
    search_border=(128, 128, 128),
    folder_title=(255, 198, 109),
    folder_border=(128, 128, 128),
    disk_title=(204, 120, 50),
    disk_border=(128, 128, 128),
    preview_title=(78, 124, 238),
    preview_border=(128, 128, 128),
    legends_title=(152, 118, 170),
    legends_border=(128, 128, 128),
    list_date=(128, 128, 128),
    list_highlight_bg=(33, 66, 131),
    list_highlight_fg=(187, 187, 187),
    helpers_colors=(128, 128, 128),
    status_message=(255, 198, 109),
    popup_bg=(60, 63, 65),
    popup_text=(204, 120, 50),
    icon_rust=(204, 120, 50),
    icon_maven=(255, 198, 109),
    icon_flutter=(78, 124, 238),
    icon_go=(0, 173, 216),
    icon_python=(255, 198, 109),
    icon_mise=(204, 120, 50),
    icon_worktree=(106, 135, 89),
    icon_worktree_lock=(187, 187, 187),
    icon_gitmodules=(152, 118, 170),
    icon_git=(204, 120, 50),
    icon_folder=(255, 198, 109),
    icon_file=(128, 128, 128),
)

GRUVBOX_DARK_THEME = UITheme(
    name="Gruvbox Dark",
    background=(40, 40, 40),
    title_try=(251, 73, 52),
    title_dir=(250, 189, 47),
    search_title=(184, 187, 38),
    search_border=(168, 153, 132),
    folder_title=(250, 189, 47),
    folder_border=(168, 153, 132),
    disk_title=(254, 128, 25),
    disk_border=(168, 153, 132),
    preview_title=(131, 165, 152),
    preview_border=(168, 153, 132),
    legends_title=(211, 134, 155),
    legends_border=(168, 153, 132),
    list_date=(146, 131, 116),
    list_highlight_bg=(80, 73, 69),
    list_highlight_fg=(235, 219, 178),
    helpers_colors=(168, 153, 132),
    status_message=(215, 153, 33),
    popup_bg=(40, 40, 40),
    popup_text=(251, 73, 52),
    icon_rust=(254, 128, 25),
    icon_maven=(251, 73, 52),
    icon_flutter=(131, 165, 152),
    icon_go=(131, 165, 152),
    icon_python=(250, 189, 47),
    icon_mise=(254, 128, 25),
    icon_worktree=(184, 187, 38),
    icon_worktree_lock=(168, 153, 132),
    icon_gitmodules=(211, 134, 155),
    icon_git=(251, 73, 52),
    icon_folder=(250, 189, 47),
    icon_file=(146, 131, 116),
)

NORD_THEME = UITheme(
    name="Nord",
    background=(46, 52, 64),
    title_try=(136, 192, 208),
    title_dir=(191, 97, 106),
    search_title=(163, 190, 140),
    search_border=(76, 86, 106),
    folder_title=(235, 203, 139),
    folder_border=(76, 86, 106),
    disk_title=(208, 135, 112),
    disk_border=(76, 86, 106),
    preview_title=(136, 192, 208),
    preview_border=(76, 86, 106),
    legends_title=(180, 142, 173),
    legends_border=(76, 86, 106),
    list_date=(216, 222, 233),
    list_highlight_bg=(67, 76, 94),
    list_highlight_fg=(236, 239, 244),
    helpers_colors=(76, 86, 106),
    status_message=(235, 203, 139),
    popup_bg=(46, 52, 64),
    popup_text=(191, 97, 106),
    icon_rust=(208, 135, 112),
    icon_maven=(191, 97, 106),
    icon_flutter=(136, 192, 208),
    icon_go=(136, 192, 208),
    icon_python=(235, 203, 139),
    icon_mise=(208, 135, 112),
    icon_worktree=(163, 190, 140),
    icon_worktree_lock=(216, 222, 233),
    icon_gitmodules=(180, 142, 173),
    icon_git=(191, 97, 106),
    icon_folder=(235, 203, 139),
    icon_file=(216, 222, 233),
)

TOKYO_NIGHT_THEME = UITheme(
    name="Tokyo Night",
    background=(26, 27, 38),
    title_try=(122, 162, 247),
    title_dir=(247, 118, 142),
    search_title=(158, 206, 106),
    search_border=(86, 95, 137),
    folder_title=(224, 175, 104),
    folder_border=(86, 95, 137),
    disk_title=(255, 158, 100),
    disk_border=(86, 95, 137),
    preview_title=(125, 207, 255),
    preview_border=(86, 95, 137),
    legends_title=(187, 154, 247),
    legends_border=(86, 95, 137),
    list_date=(169, 177, 214),
    list_highlight_bg=(65, 72, 104),
    list_highlight_fg=(192, 202, 245),
    helpers_colors=(86, 95, 137),
    status_message=(224, 175, 104),
    popup_bg=(26, 27, 38),
    popup_text=(247, 118, 142),
    icon_rust=(255, 158, 100),
    icon_maven=(247, 118, 142),
    icon_flutter=(125, 207, 255),
    icon_go=(125, 207, 255),
    icon_python=(224, 175, 104),
    icon_mise=(255, 158, 100),
    icon_worktree=(158, 206, 106),
    icon_worktree_lock=(169, 177, 214),
    icon_gitmodules=(187, 154, 247),
    icon_git=(247, 118, 142),
    icon_folder=(224, 175, 104),
    icon_file=(169, 177, 214),
)

ONE_DARK_PRO_THEME = UITheme(
    name="One Dark Pro",
    background=(40, 44, 52),
    title_try=(97, 175, 239),
    title_dir=(224, 108, 117),
    search_title=(209, 154, 102),
    search_border=(92, 99, 112),
    folder_title=(152, 195, 121),
    folder_border=(92, 99, 112),
    disk_title=(229, 192, 123),
    disk_border=(92, 99, 112),
    preview_title=(86, 182, 194),
    preview_border=(92, 99, 112),
    legends_title=(198, 120, 221),
    legends_border=(92, 99, 112),
    list_date=(171, 178, 191),
    list_highlight_bg=(62, 68, 81),
    list_highlight_fg=(220, 223, 228),
    helpers_colors=(92, 99, 112),
    status_message=(229, 192, 123),
    popup_bg=(40, 44, 52),
    popup_text=(224, 108, 117),
    icon_rust=(209, 154, 102),
    icon_maven=(224, 108, 117),
    icon_flutter=(86, 182, 194),
    icon_go=(86, 182, 194),
    icon_python=(229, 192, 123),
    icon_mise=(209, 154, 102),
    icon_worktree=(152, 195, 121),
    icon_worktree_lock=(171, 178, 191),
    icon_gitmodules=(198, 120, 221),
    icon_git=(224, 108, 117),
    icon_folder=(229, 192, 123),
    icon_file=(171, 178, 191),
)

EVERFOREST_THEME = UITheme(
    name="Everforest",
    background=(45, 51, 48),
    title_try=(127, 187, 179),
    title_dir=(230, 126, 128),
    search_title=(230, 152, 117),
    search_border=(127, 132, 120),
    folder_title=(167, 192, 128),
    folder_border=(127, 132, 120),
    disk_title=(219, 188, 127),
    disk_border=(127, 132, 120),
    preview_title=(127, 187, 179),
    preview_border=(127, 132, 120),
    legends_title=(214, 153, 182),
    legends_border=(127, 132, 120),
    list_date=(211, 198, 170),
    list_highlight_bg=(80, 88, 77),
    list_highlight_fg=(211, 198, 170),
    helpers_colors=(127, 132, 120),
    status_message=(219, 188, 127),
    popup_bg=(45, 51, 48),
    popup_text=(230, 126, 128),
    icon_rust=(230, 152, 117),
    icon_maven=(230, 126, 128),
    icon_flutter=(127, 187, 179),
    icon_go=(127, 187, 179),
    icon_python=(219, 188, 127),
    icon_mise=(230, 152, 117),
    icon_worktree=(167, 192, 128),
    icon_worktree_lock=(211, 198, 170),
    icon_gitmodules=(214, 153, 182),
    icon_git=(230, 126, 128),
    icon_folder=(219, 188, 127),
    icon_file=(211, 198, 170),
)

SYNTHWAVE_84_THEME = UITheme(
    name="SynthWave '84",
    background=(38, 29, 53),
    title_try=(54, 244, 244),
    title_dir=(255, 126, 185),
    search_title=(255, 203, 107),
    search_border=(129, 91, 164),
    folder_title=(114, 241, 177),
    folder_border=(129, 91, 164),
    disk_title=(255, 203, 107),
    disk_border=(129, 91, 164),
    preview_title=(54, 244, 244),
    preview_border=(129, 91, 164),
    legends_title=(254, 78, 174),
    legends_border=(129, 91, 164),
    list_date=(187, 186, 201),
    list_highlight_bg=(57, 43, 75),
    list_highlight_fg=(255, 255, 255),
    helpers_colors=(129, 91, 164),
    status_message=(255, 203, 107),
    popup_bg=(38, 29, 53),
    popup_text=(254, 78, 174),
    icon_rust=(255, 140, 66),
    icon_maven=(255, 126, 185),
    icon_flutter=(54, 244, 244),
    icon_go=(54, 244, 244),
    icon_python=(255, 203, 107),
    icon_mise=(255, 140, 66),
    icon_worktree=(114, 241, 177),
    icon_worktree_lock=(187, 186, 201),
    icon_gitmodules=(254, 78, 174),
    icon_git=(255, 126, 185),
    icon_folder=(255, 203, 107),
    icon_file=(187, 186, 201),
)

OLED_TRUE_BLACK_THEME = UITheme(
    name="OLED True Black",
    background=(0, 0, 0),
    title_try=(0, 200, 255),
    title_dir=(255, 80, 100),
    search_title=(255, 180, 0),
    search_border=(60, 60, 60),
    folder_title=(0, 230, 130),
    folder_border=(60, 60, 60),
    disk_title=(255, 220, 0),
    disk_border=(60, 60, 60),
    preview_title=(0, 200, 255),
    preview_border=(60, 60, 60),
    legends_title=(200, 100, 255),
    legends_border=(60, 60, 60),
    list_date=(180, 180, 180),
    list_highlight_bg=(30, 30, 30),
    list_highlight_fg=(255, 255, 255),
    helpers_colors=(100, 100, 100),
    status_message=(255, 220, 0),
    popup_bg=(0, 0, 0),
    popup_text=(255, 80, 100),
    icon_rust=(255, 120, 50),
    icon_maven=(255, 80, 100),
    icon_flutter=(0, 200, 255),
    icon_go=(0, 200, 255),
    icon_python=(255, 220, 0),
    icon_mise=(255, 180, 0),
    icon_worktree=(0, 230, 130),
    icon_worktree_lock=(180, 180, 180),
    icon_gitmodules=(200, 100, 255),
    icon_git=(255, 80, 100),
    icon_folder=(255, 220, 0),
    icon_file=(180, 180, 180),
)

SILVER_GRAY_THEME = UITheme(
    name="Silver Gray",
    background=(47, 47, 47),
    title_try=(100, 149, 237),
    title_dir=(205, 92, 92),
    search_title=(218, 165, 32),
    search_border=(128, 128, 128),
    folder_title=(144, 238, 144),
    folder_border=(128, 128, 128),
    disk_title=(240, 230, 140),
    disk_border=(128, 128, 128),
    preview_title=(176, 196, 222),
    preview_border=(128, 128, 128),
    legends_title=(186, 85, 211),
    legends_border=(128, 128, 128),
    list_date=(192, 192, 192),
    list_highlight_bg=(70, 70, 70),
    list_highlight_fg=(245, 245, 245),
    helpers_colors=(128, 128, 128),
    status_message=(240, 230, 140),
    popup_bg=(47, 47, 47),
    popup_text=(205, 92, 92),
    icon_rust=(210, 105, 30),
    icon_maven=(205, 92, 92),
    icon_flutter=(100, 149, 237),
    icon_go=(176, 196, 222),
    icon_python=(240, 230, 140),
    icon_mise=(218, 165, 32),
    icon_worktree=(144, 238, 144),
    icon_worktree_lock=(192, 192, 192),
    icon_gitmodules=(186, 85, 211),
    icon_git=(205, 92, 92),
    icon_folder=(240, 230, 140),
    icon_file=(192, 192, 192),
)

BLACK_AND_WHITE_THEME = UITheme(
    name="Black & White",
    background=BLACK,
    title_try=WHITE,
    title_dir=WHITE,
    search_title=WHITE,
    search_border=GRAY,
    folder_title=WHITE,
    folder_border=GRAY,
    disk_title=WHITE,
    disk_border=GRAY,
    preview_title=WHITE,
    preview_border=GRAY,
    legends_title=WHITE,
    legends_border=GRAY,
    list_date=GRAY,
    list_highlight_bg=WHITE,
    list_highlight_fg=BLACK,
    helpers_colors=GRAY,
    status_message=WHITE,
    popup_bg=BLACK,
    popup_text=WHITE,
    icon_rust=WHITE,
    icon_maven=WHITE,
    icon_flutter=WHITE,
    icon_go=WHITE,
    icon_python=WHITE,
    icon_mise=GRAY,
    icon_worktree=WHITE,
    icon_worktree_lock=GRAY,
    icon_gitmodules=GRAY,
    icon_git=WHITE,
    icon_folder=WHITE,
    icon_file=GRAY,
)

MATRIX_THEME = UITheme(
    name="Matrix",
    background=(0, 10, 0),
    title_try=(0, 255, 65),
    title_dir=(0, 200, 50),
    search_title=(0, 255, 65),
    search_border=(0, 100, 30),
    folder_title=(0, 255, 65),
    folder_border=(0, 100, 30),
    disk_title=(0, 255, 65),
    disk_border=(0, 100, 30),
    preview_title=(0, 255, 65),
    preview_border=(0, 100, 30),
    legends_title=(0, 200, 50),
    legends_border=(0, 100, 30),
    list_date=(0, 150, 40),
    list_highlight_bg=(0, 80, 25),
    list_highlight_fg=(0, 255, 65),
    helpers_colors=(0, 150, 40),
    status_message=(0, 255, 65),
    popup_bg=(0, 10, 0),
    popup_text=(0, 255, 65),
    icon_rust=(0, 255, 65),
    icon_maven=(0, 220, 55),
    icon_flutter=(0, 200, 50),
    icon_go=(0, 180, 45),
    icon_python=(0, 255, 65),
    icon_mise=(0, 150, 40),
    icon_worktree=(0, 200, 50),
    icon_worktree_lock=(0, 120, 35),
    icon_gitmodules=(0, 180, 45),
    icon_git=(0, 255, 65),
    icon_folder=(0, 220, 55),
    icon_file=(0, 150, 40),
)

TRON_THEME = UITheme(
    name="Tron",
    background=(0, 10, 15),
    title_try=(0, 255, 255),
    title_dir=(255, 150, 0),
    search_title=(0, 255, 255),
    search_border=(0, 150, 180),
    folder_title=(0, 255, 255),
    folder_border=(0, 150, 180),
    disk_title=(255, 150, 0),
    disk_border=(0, 150, 180),
    preview_title=(0, 255, 255),
    preview_border=(0, 150, 180),
    legends_title=(0, 200, 220),
    legends_border=(0, 150, 180),
    list_date=(0, 180, 200),
    list_highlight_bg=(0, 80, 100),
    list_highlight_fg=(0, 255, 255),
    helpers_colors=(0, 150, 180),
    status_message=(255, 150, 0),
    popup_bg=(0, 10, 15),
    popup_text=(0, 255, 255),
    icon_rust=(255, 150, 0),
    icon_maven=(255, 100, 0),
    icon_flutter=(0, 255, 255),
    icon_go=(0, 220, 230),
    icon_python=(255, 200, 0),
    icon_mise=(255, 150, 0),
    icon_worktree=(0, 255, 255),
    icon_worktree_lock=(0, 150, 180),
    icon_gitmodules=(0, 200, 220),
    icon_git=(255, 150, 0),
    icon_folder=(0, 255, 255),
    icon_file=(0, 180, 200),
)

CATPPUCCIN_MACCHIATO_THEME = UITheme(
    name="Catppuccin Macchiato",
    background=(36, 39, 58),
    title_try=(138, 173, 244),
    title_dir=(238, 153, 160),
    search_title=(245, 169, 127),
    search_border=(147, 154, 183),
    folder_title=(166, 218, 149),
    folder_border=(147, 154, 183),
    disk_title=(238, 212, 159),
    disk_border=(147, 154, 183),
    preview_title=(138, 173, 244),
    preview_border=(147, 154, 183),
    legends_title=(198, 160, 246),
    legends_border=(147, 154, 183),
    list_date=(165, 173, 203),
    list_highlight_bg=(91, 96, 120),
    list_highlight_fg=(202, 211, 245),
    helpers_colors=(147, 154, 183),
    status_message=(238, 212, 159),
    popup_bg=(36, 39, 58),
    popup_text=(237, 135, 150),
    icon_rust=(245, 169, 127),
    icon_maven=(237, 135, 150),
    icon_flutter=(138, 173, 244),
    icon_go=(139, 213, 202),
    icon_python=(238, 212, 159),
    icon_mise=(245, 169, 127),
    icon_worktree=(166, 218, 149),
    icon_worktree_lock=(165, 173, 203),
    icon_gitmodules=(198, 160, 246),
    icon_git=(237, 135, 150),
    icon_folder=(238, 212, 159),
    icon_file=(165, 173, 203),
)

THEMES: tuple[UITheme, ...] = (
    DEFAULT_THEME,
    CATPPUCCIN_MOCHA_THEME,
    CATPPUCCIN_MACCHIATO_THEME,
    DRACULA_THEME,
    JETBRAINS_DARCULA_THEME,
    GRUVBOX_DARK_THEME,
    NORD_THEME,
    TOKYO_NIGHT_THEME,
    ONE_DARK_PRO_THEME,
    EVERFOREST_THEME,
    SYNTHWAVE_84_THEME,
    OLED_TRUE_BLACK_THEME,
    SILVER_GRAY_THEME,
    BLACK_AND_WHITE_THEME,
    MATRIX_THEME,
    TRON_THEME,
)

CUSTOM_THEME_NAME = "Custom"


def available_theme_names() -> tuple[str, ...]:
    """Return registry theme names in display order."""
    return tuple(theme.name for theme in THEMES)


def find_theme(name: str | None) -> UITheme | None:
    """Return the registry theme called ``name`` (case-insensitive), if any."""
    if not name:
        return None
    wanted = str(name).strip().casefold()
    for theme in THEMES:
        if theme.name.casefold() == wanted:
            return theme
    return None


def theme_index(name: str) -> int:
    """Return the registry position of ``name``, or ``0`` for unknown names."""
    for idx, theme in enumerate(THEMES):
        if theme.name == name:
            return idx
    return 0


def parse_hex_color(value: object) -> RGB | None:
    """Parse ``#rrggbb`` (leading ``#`` optional) into an RGB tuple."""
    if not isinstance(value, str):
        return None
    match = _HEX_COLOR_RE.match(value.strip())
    if match is None:
        return None
    digits = match.group(1)
    return (int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))


def custom_theme(colors: dict[str, object], base: UITheme = DEFAULT_THEME) -> UITheme:
    """Build a ``Custom`` palette from hex overrides on top of ``base``.

    Unknown keys and unparsable values are ignored.
    """
    overrides: dict[str, RGB] = {}
    for field_info in fields(UITheme):
        if field_info.name == "name" or field_info.name not in colors:
            continue
        parsed = parse_hex_color(colors[field_info.name])
        if parsed is not None:
            overrides[field_info.name] = parsed
    return replace(base, name=CUSTOM_THEME_NAME, **overrides)


def fg_sgr(color: RGB) -> str:
    return f"38;2;{color[0]};{color[1]};{color[2]}"


def bg_sgr(color: RGB) -> str:
    return f"48;2;{color[0]};{color[1]};{color[2]}"


__all__ = [
    "RGB",
    "UITheme",
    "THEMES",
    "DEFAULT_THEME",
    "CUSTOM_THEME_NAME",
    "available_theme_names",
    "find_theme",
    "theme_index",
    "parse_hex_color",
    "custom_theme",
    "fg_sgr",
    "bg_sgr",
]
