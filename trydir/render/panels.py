"""Panel and popup painters for the picker frame."""

from __future__ import annotations

from datetime import datetime

from .. import __version__
from ..catalog.entries import Entry
from ..catalog.size import format_megabytes
from ..ui_theme import GRAY, UITheme
from .canvas import Canvas, Style, text_width, truncate

ICON_FOLDER = "\U000f0770"
ICON_FILE = "\U000f0219"

# (entry flag, glyph, theme color field, legend label), in display order
CAPABILITY_ICONS: tuple[tuple[str, str, str, str], ...] = (
    ("is_cargo", "\ue7a8", "icon_rust", "Rust"),
    ("is_maven", "\ue738", "icon_maven", "Maven"),
    ("is_flutter", "\ue64c", "icon_flutter", "Flutter"),
    ("is_go", "\ue627", "icon_go", "Go"),
    ("is_python", "\ue73c", "icon_python", "Python"),
    ("is_mise", "\U000f0b14", "icon_mise", "Mise"),
    ("is_worktree_locked", "\uf023", "icon_worktree_lock", "Locked"),
    ("is_worktree", "\U000f0645", "icon_worktree", "Worktree"),
    ("is_gitmodules", "\uf414", "icon_gitmodules", "Git-Submod"),
    ("is_git", "\uf1d2", "icon_git", "Git"),
)

KEY_LEGEND: tuple[tuple[str, str], ...] = (
    ("↑↓", "Nav"),
    ("Enter", "Select"),
    ("Ctrl-D", "Del"),
    ("Ctrl-E", "Edit"),
    ("Ctrl-T", "Theme"),
    ("Ctrl-A", "About"),
    ("Esc/Ctrl+C", "Quit"),
)

DISK_BOX_WIDTH = 45
SEARCH_MIN_WIDTH = 20
LEGEND_HEIGHT = 4


def format_age(now: float, modified: float) -> str:
    """Format elapsed time since ``modified`` as ``(DDd HHh MMm)``."""
    secs = max(0, int(now - modified))
    days = secs // 86400
    hours = (secs % 86400) // 3600
    minutes = (secs % 3600) // 60
    return f"({days:02d}d {hours:02d}h {minutes:02d}m)"


def format_created(created: float) -> str:
    try:
        return datetime.fromtimestamp(created).strftime("%Y-%m-%d")
    except (OverflowError, OSError, ValueError):
        return "????-??-??"


def disk_usage_text(folder_size_mb: int, free_space_mb: int | None) -> tuple[str, str]:
    """Return the ``(used, free)`` labels; zero means the probe has not finished."""
    used = "---" if folder_size_mb == 0 else format_megabytes(folder_size_mb)
    free = "N/A" if free_space_mb is None else format_megabytes(free_space_mb)
    return used, free


def scroll_start(selected: int, start: int, rows: int, total: int) -> int:
    """Return the first visible row index that keeps ``selected`` on screen."""
    if rows <= 0 or total <= 0:
        return 0
    start = max(0, min(start, max(0, total - rows)))
    if selected < start:
        return selected
    if selected >= start + rows:
        return selected - rows + 1
    return start


def _border(color) -> Style:
    return Style(fg=color)


def draw_search(canvas: Canvas, theme: UITheme, x: int, y: int, width: int, query: str) -> None:
    canvas.box(x, y, width, 3, "Search/New", _border(theme.search_border), Style(fg=theme.search_title))
    inner = width - 4
    shown = query
    if text_width(shown) + 1 > inner:
        # keep the tail of a long query visible
        while shown and text_width(shown) + 1 > inner:
            shown = shown[1:]
    end = canvas.put(x + 2, y + 1, shown, Style(), max_x=x + width - 1)
    canvas.put(end, y + 1, "█", Style(fg=theme.search_title), max_x=x + width - 1)


def draw_disk(
    canvas: Canvas,
    theme: UITheme,
    x: int,
    y: int,
    width: int,
    folder_size_mb: int,
    free_space_mb: int | None,
) -> None:
    canvas.box(x, y, width, 3, "Disk", _border(theme.disk_border), Style(fg=theme.disk_title))
    used, free = disk_usage_text(folder_size_mb, free_space_mb)
    limit = x + width - 1
    col = canvas.put(x + 2, y + 1, "Used: ", Style(fg=theme.helpers_colors), max_x=limit)
    col = canvas.put(col, y + 1, used, Style(fg=theme.status_message), max_x=limit)
    col = canvas.put(col, y + 1, " | ", Style(fg=theme.helpers_colors), max_x=limit)
    col = canvas.put(col, y + 1, "Free: ", Style(fg=theme.helpers_colors), max_x=limit)
    canvas.put(col, y + 1, free, Style(fg=theme.status_message), max_x=limit)


def _entry_icons(entry: Entry, theme: UITheme) -> list[tuple[str, Style]]:
    icons: list[tuple[str, Style]] = []
    for flag, glyph, color_field, _label in CAPABILITY_ICONS:
        if getattr(entry, flag):
            icons.append((glyph + " ", Style(fg=getattr(theme, color_field))))
    return icons


def draw_list(
    canvas: Canvas,
    theme: UITheme,
    x: int,
    y: int,
    width: int,
    height: int,
    entries: tuple[Entry, ...],
    selected: int,
    start: int,
    now: float,
) -> int:
    """Draw the folder list; return the scroll start actually used."""
    canvas.box(x, y, width, height, "", _border(theme.folder_border))
    title_col = canvas.put(x + 2, y, " try", Style(fg=theme.title_try, bold=True), max_x=x + width - 1)
    title_col = canvas.put(title_col, y, "dir ", Style(fg=theme.title_dir, bold=True), max_x=x + width - 1)
    canvas.put(title_col, y, f"({len(entries)}) ", Style(fg=theme.folder_title), max_x=x + width - 1)

    rows = max(0, height - 2)
    start = scroll_start(selected, start, rows, len(entries))
    inner_left = x + 1
    inner_right = x + width - 1
    for offset, entry in enumerate(entries[start : start + rows]):
        row = y + 1 + offset
        index = start + offset
        is_selected = index == selected
        highlight = theme.list_highlight_bg if is_selected else None
        if is_selected:
            canvas.fill(inner_left, row, inner_right - inner_left, 1, Style(bg=highlight))

        def styled(fg, bold: bool = False) -> Style:
            return Style(fg=fg, bg=highlight, bold=bold or is_selected)

        col = canvas.put(inner_left, row, "→ " if is_selected else "  ", styled(theme.list_highlight_fg), inner_right)
        col = canvas.put(col, row, ICON_FOLDER + " ", styled(theme.icon_folder), inner_right)
        col = canvas.put(col, row, format_created(entry.created), styled(theme.list_date), inner_right)

        icons = _entry_icons(entry, theme)
        age = format_age(now, entry.modified)
        trailing = sum(text_width(glyph) for glyph, _ in icons) + text_width(age)
        name_room = inner_right - col - 1 - trailing
        name_fg = theme.list_highlight_fg if is_selected else None
        col = canvas.put(col, row, " " + truncate(entry.display_name, max(0, name_room)), styled(name_fg), inner_right)

        icon_col = max(col, inner_right - trailing)
        for glyph, style in icons:
            icon_col = canvas.put(icon_col, row, glyph, Style(fg=style.fg, bg=highlight), inner_right)
        canvas.put(icon_col, row, age, styled(theme.list_date), inner_right)
    return start


def draw_preview(
    canvas: Canvas,
    theme: UITheme,
    x: int,
    y: int,
    width: int,
    height: int,
    children: tuple[tuple[str, bool], ...] | None,
) -> None:
    canvas.box(x, y, width, height, "Preview", _border(theme.preview_border), Style(fg=theme.preview_title))
    if children is None:
        return
    rows = max(0, height - 2)
    limit = x + width - 1
    if not children:
        canvas.put(x + 1, y + 1, " (empty) ", Style(fg=GRAY, dim=True), max_x=limit)
        return
    for offset, (name, is_dir) in enumerate(children[:rows]):
        icon, color = (ICON_FOLDER, theme.icon_folder) if is_dir else (ICON_FILE, theme.icon_file)
        col = canvas.put(x + 1, y + 1 + offset, icon + " ", Style(fg=color), max_x=limit)
        canvas.put(col, y + 1 + offset, truncate(name, limit - col), Style(), max_x=limit)


def draw_legend(canvas: Canvas, theme: UITheme, x: int, y: int, width: int, height: int) -> None:
    canvas.box(x, y, width, height, "Icons", _border(theme.legends_border), Style(fg=theme.legends_title))
    limit = x + width - 1
    row = y + 1
    col = x + 1
    for _flag, glyph, color_field, label in CAPABILITY_ICONS:
        item_width = text_width(glyph) + 1 + text_width(label) + 1
        if col + item_width > limit:
            row += 1
            col = x + 1
            if row >= y + height - 1:
                return
        col = canvas.put(col, row, glyph + " ", Style(fg=getattr(theme, color_field)), max_x=limit)
        col = canvas.put(col, row, label + " ", Style(fg=theme.helpers_colors), max_x=limit)


def draw_status(canvas: Canvas, theme: UITheme, y: int, status_message: str | None) -> None:
    width = canvas.width
    if status_message:
        text = truncate(status_message, width)
        canvas.put(max(0, (width - text_width(text)) // 2), y, text, Style(fg=theme.status_message, bold=True))
        return
    pieces: list[tuple[str, Style]] = []
    for index, (key, label) in enumerate(KEY_LEGEND):
        pieces.append((key, Style(fg=theme.helpers_colors, bold=True)))
        suffix = f" {label}" if index == len(KEY_LEGEND) - 1 else f" {label} | "
        pieces.append((suffix, Style(fg=theme.helpers_colors)))
    total = sum(text_width(text) for text, _ in pieces)
    col = max(0, (width - total) // 2)
    for text, style in pieces:
        col = canvas.put(col, y, text, style)


# Popups

def popup_rect(canvas: Canvas, width: int, height: int) -> tuple[int, int, int, int]:
    width = min(width, canvas.width)
    height = min(height, canvas.height)
    return (canvas.width - width) // 2, (canvas.height - height) // 2, width, height


def _popup_frame(canvas: Canvas, theme: UITheme, title: str, width: int, height: int) -> tuple[int, int, int, int]:
    x, y, w, h = popup_rect(canvas, width, height)
    body = Style(fg=theme.popup_text, bg=theme.popup_bg)
    canvas.box(x, y, w, h, title, body, Style(fg=theme.popup_text, bg=theme.popup_bg, bold=True), fill=body)
    return x, y, w, h


def _centered_lines(canvas: Canvas, theme: UITheme, rect: tuple[int, int, int, int], lines: list[str]) -> None:
    x, y, w, h = rect
    top = y + max(1, (h - len(lines)) // 2)
    for offset, line in enumerate(lines):
        row = top + offset
        if row >= y + h - 1:
            break
        text = truncate(line, w - 2)
        col = x + max(1, (w - text_width(text)) // 2)
        canvas.put(col, row, text, Style(fg=theme.popup_text, bg=theme.popup_bg), max_x=x + w - 1)


def draw_message_popup(canvas: Canvas, theme: UITheme, title: str, message: str) -> None:
    lines = message.split("\n")
    width = max(40, max(text_width(line) for line in lines) + 6)
    rect = _popup_frame(canvas, theme, title, min(width, max(10, canvas.width - 4)), len(lines) + 4)
    _centered_lines(canvas, theme, rect, lines)


def _draw_list_popup(
    canvas: Canvas,
    theme: UITheme,
    title: str,
    items: tuple[str, ...],
    cursor: int,
    width: int,
    footer: str | None = None,
) -> None:
    extra = 2 if footer else 0
    height = min(len(items) + 2 + extra, max(3, canvas.height - 2))
    x, y, w, h = _popup_frame(canvas, theme, title, width, height)
    rows = max(0, h - 2 - extra)
    start = scroll_start(cursor, 0, rows, len(items))
    for offset, item in enumerate(items[start : start + rows]):
        index = start + offset
        row = y + 1 + offset
        if index == cursor:
            style = Style(fg=theme.list_highlight_fg, bg=theme.list_highlight_bg, bold=True)
            canvas.fill(x + 1, row, w - 2, 1, style)
            prefix = "→ "
        else:
            style = Style(fg=theme.popup_text, bg=theme.popup_bg)
            prefix = "  "
        canvas.put(x + 1, row, prefix + truncate(item, w - 4), style, max_x=x + w - 1)
    if footer:
        canvas.put(x + 1, y + h - 2, truncate(footer, w - 2), Style(fg=theme.helpers_colors, bg=theme.popup_bg), max_x=x + w - 1)


def draw_theme_select(
    canvas: Canvas,
    theme: UITheme,
    names: tuple[str, ...],
    cursor: int,
    transparent: bool,
) -> None:
    checkbox = "[x]" if transparent else "[ ]"
    footer = f" {checkbox} Transparent Background (Space to toggle)"
    _draw_list_popup(canvas, theme, "Select Theme", names, cursor, max(50, text_width(footer) + 4), footer)


def draw_location_select(canvas: Canvas, theme: UITheme, labels: tuple[str, ...], cursor: int) -> None:
    width = max([50] + [text_width(label) + 8 for label in labels])
    _draw_list_popup(canvas, theme, "Select Config Location", labels, cursor, min(width, canvas.width - 2))


def draw_about(canvas: Canvas, theme: UITheme) -> None:
    rect = _popup_frame(canvas, theme, "About", 50, 11)
    x, y, w, _h = rect
    title = f"trydir v{__version__}"
    col = x + max(1, (w - text_width(title)) // 2)
    col = canvas.put(col, y + 2, "try", Style(fg=theme.title_try, bg=theme.popup_bg, bold=True), max_x=x + w - 1)
    col = canvas.put(col, y + 2, "dir", Style(fg=theme.title_dir, bg=theme.popup_bg, bold=True), max_x=x + w - 1)
    canvas.put(col, y + 2, f" v{__version__}", Style(fg=GRAY, bg=theme.popup_bg), max_x=x + w - 1)
    _centered_lines(
        canvas,
        theme,
        (x, y + 3, w, 7),
        ["", "Pick, create and prune workspace directories.", "", "Press Esc to close"],
    )
