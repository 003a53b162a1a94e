"""Cell-grid drawing surface serialized to truecolor ANSI.

Panels and popups write styled text into cells; later writes overwrite
earlier ones, which is how overlays cover the panels beneath them.
"""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass

from ..ui_theme import RGB, bg_sgr, fg_sgr

# placeholder occupying the right half of a wide character
WIDE_TAIL = ""


@dataclass(frozen=True)
class Style:
    fg: RGB | None = None
    bg: RGB | None = None
    bold: bool = False
    dim: bool = False

    def with_bg(self, bg: RGB | None) -> Style:
        return Style(self.fg, bg, self.bold, self.dim)

    def sgr(self) -> str:
        parts = ["0"]
        if self.bold:
            parts.append("1")
        if self.dim:
            parts.append("2")
        if self.fg is not None:
            parts.append(fg_sgr(self.fg))
        if self.bg is not None:
            parts.append(bg_sgr(self.bg))
        return "\033[" + ";".join(parts) + "m"


def char_display_width(ch: str) -> int:
    """Return terminal column width for one character.

    Combining marks consume no columns, and East Asian wide/fullwidth
    characters consume two.
    """
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def text_width(text: str) -> int:
    return sum(char_display_width(ch) for ch in text)


def truncate(text: str, max_cols: int, ellipsis: str = "...") -> str:
    """Clip ``text`` to ``max_cols`` columns, ending in ``ellipsis`` when clipped."""
    if max_cols <= 0:
        return ""
    if text_width(text) <= max_cols:
        return text
    budget = max_cols - text_width(ellipsis)
    if budget <= 0:
        return ellipsis[:max_cols]
    out: list[str] = []
    col = 0
    for ch in text:
        w = char_display_width(ch)
        if col + w > budget:
            break
        out.append(ch)
        col += w
    return "".join(out) + ellipsis


class Canvas:
    def __init__(self, width: int, height: int, background: RGB | None = None) -> None:
        self.width = max(0, width)
        self.height = max(0, height)
        self.background = background
        blank = Style(bg=background)
        self._chars: list[list[str]] = [[" "] * self.width for _ in range(self.height)]
        self._styles: list[list[Style]] = [[blank] * self.width for _ in range(self.height)]

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def put(self, x: int, y: int, text: str, style: Style = Style(), max_x: int | None = None) -> int:
        """Write ``text`` at ``(x, y)`` without crossing ``max_x``; return the next column."""
        limit = self.width if max_x is None else min(self.width, max_x)
        if y < 0 or y >= self.height:
            return x
        if style.bg is None and self.background is not None:
            style = style.with_bg(self.background)
        col = x
        for ch in text:
            w = char_display_width(ch)
            if w == 0:
                continue
            if col + w > limit:
                break
            if col >= 0:
                self._chars[y][col] = ch
                self._styles[y][col] = style
                if w == 2 and col + 1 < self.width:
                    self._chars[y][col + 1] = WIDE_TAIL
                    self._styles[y][col + 1] = style
            col += w
        return col

    def fill(self, x: int, y: int, width: int, height: int, style: Style) -> None:
        for row in range(max(0, y), min(self.height, y + height)):
            for col in range(max(0, x), min(self.width, x + width)):
                self._chars[row][col] = " "
                self._styles[row][col] = style

    def box(
        self,
        x: int,
        y: int,
        width: int,
        height: int,
        title: str = "",
        border: Style = Style(),
        title_style: Style | None = None,
        fill: Style | None = None,
    ) -> None:
        """Draw a rounded single-line border, optionally filling the interior."""
        if width < 2 or height < 2:
            return
        if fill is not None:
            self.fill(x + 1, y + 1, width - 2, height - 2, fill)
        right = x + width - 1
        bottom = y + height - 1
        self.put(x, y, "╭" + "─" * (width - 2) + "╮", border)
        self.put(x, bottom, "╰" + "─" * (width - 2) + "╯", border)
        for row in range(y + 1, bottom):
            self.put(x, row, "│", border)
            self.put(right, row, "│", border)
        if title:
            label = truncate(f" {title} ", width - 4)
            self.put(x + 2, y, label, title_style or border, max_x=right)

    def row_text(self, y: int) -> str:
        """Plain characters of row ``y``; used by tests and debugging."""
        return "".join(self._chars[y])

    def style_at(self, x: int, y: int) -> Style:
        return self._styles[y][x]

    def to_ansi(self) -> str:
        out: list[str] = ["\033[H"]
        for y in range(self.height):
            current: Style | None = None
            out.append(f"\033[{y + 1};1H")
            for x in range(self.width):
                ch = self._chars[y][x]
                if ch == WIDE_TAIL:
                    continue
                style = self._styles[y][x]
                if style != current:
                    out.append(style.sgr())
                    current = style
                out.append(ch)
            out.append("\033[0m")
        return "".join(out)
