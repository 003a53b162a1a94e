"""Rendering engine for the picker screen.

Defines the per-frame render context and composes full ANSI frames from it.
Rendering never mutates session state; the scroll offset it settles on is
returned to the caller instead.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from ..catalog.entries import Entry
from ..session.state import SessionMode
from ..ui_theme import UITheme
from .canvas import Canvas
from .panels import (
    DISK_BOX_WIDTH,
    LEGEND_HEIGHT,
    SEARCH_MIN_WIDTH,
    draw_about,
    draw_disk,
    draw_legend,
    draw_list,
    draw_location_select,
    draw_message_popup,
    draw_preview,
    draw_search,
    draw_status,
    draw_theme_select,
)

DELETE_TITLE = "WARNING"
CONFIG_PROMPT_TITLE = "Create Config?"
CONFIG_PROMPT_MESSAGE = "Config file not found.\nCreate one now to save theme? (y/n)"


@dataclass(frozen=True)
class RenderContext:
    mode: SessionMode
    theme: UITheme
    transparent: bool
    query: str
    entries: tuple[Entry, ...]
    selected_index: int
    list_start: int
    status_message: str | None
    folder_size_mb: int
    free_space_mb: int | None
    preview: tuple[tuple[str, bool], ...] | None
    theme_names: tuple[str, ...]
    theme_cursor: int
    location_labels: tuple[str, ...]
    location_cursor: int
    now: float


@dataclass(frozen=True)
class Frame:
    canvas: Canvas
    list_start: int

    def to_ansi(self) -> str:
        return self.canvas.to_ansi()


def build_frame(context: RenderContext, width: int, height: int) -> Frame:
    """Lay out every panel and the active overlay for one frame."""
    theme = context.theme
    background = None if context.transparent else theme.background
    canvas = Canvas(width, height, background)
    if width < 10 or height < 6:
        draw_status(canvas, theme, 0, "Terminal too small")
        return Frame(canvas, context.list_start)

    disk_width = min(DISK_BOX_WIDTH, max(0, width - SEARCH_MIN_WIDTH))
    search_width = width - disk_width
    draw_search(canvas, theme, 0, 0, search_width, context.query)
    if disk_width >= 10:
        draw_disk(canvas, theme, search_width, 0, disk_width, context.folder_size_mb, context.free_space_mb)

    body_top = 3
    body_height = height - body_top - 1
    list_width = width * 70 // 100
    side_width = width - list_width
    list_start = draw_list(
        canvas,
        theme,
        0,
        body_top,
        list_width,
        body_height,
        context.entries,
        context.selected_index,
        context.list_start,
        context.now,
    )
    legend_height = LEGEND_HEIGHT if body_height > LEGEND_HEIGHT + 3 else 0
    draw_preview(canvas, theme, list_width, body_top, side_width, body_height - legend_height, context.preview)
    if legend_height:
        draw_legend(canvas, theme, list_width, body_top + body_height - legend_height, side_width, legend_height)
    draw_status(canvas, theme, height - 1, context.status_message)

    mode = context.mode
    if mode is SessionMode.DELETE_CONFIRM and context.entries:
        name = context.entries[min(context.selected_index, len(context.entries) - 1)].name
        draw_message_popup(canvas, theme, DELETE_TITLE, f"Delete '{name}'? (y/n)")
    elif mode is SessionMode.THEME_SELECT:
        draw_theme_select(canvas, theme, context.theme_names, context.theme_cursor, context.transparent)
    elif mode is SessionMode.CONFIG_SAVE_PROMPT:
        draw_message_popup(canvas, theme, CONFIG_PROMPT_TITLE, CONFIG_PROMPT_MESSAGE)
    elif mode is SessionMode.CONFIG_SAVE_LOCATION_SELECT:
        draw_location_select(canvas, theme, context.location_labels, context.location_cursor)
    elif mode is SessionMode.ABOUT:
        draw_about(canvas, theme)
    return Frame(canvas, list_start)


def render_frame(context: RenderContext, width: int, height: int, out_fd: int) -> int:
    """Write one composed frame to ``out_fd`` and return the list scroll start."""
    frame = build_frame(context, width, height)
    os.write(out_fd, frame.to_ansi().encode("utf-8", errors="replace"))
    return frame.list_start


__all__ = ["Frame", "RenderContext", "build_frame", "render_frame"]
