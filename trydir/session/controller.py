"""Session controller: owns picker state and applies transition effects.

All filesystem mutations (delete, worktree removal, config save) run
synchronously here and report failures through the status line. The only
concurrent piece is the ``SizeProbe``, whose published total is read
without blocking.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import time
from collections.abc import Callable, Sequence
from pathlib import Path

from ..catalog.entries import Entry, build_catalog, remove_entry
from ..catalog.git import is_git_worktree, remove_git_worktree
from ..catalog.size import SizeProbe, free_disk_space_mb
from ..config import SessionConfig, save_config, save_location_labels, save_location_paths
from ..render import RenderContext
from ..search.fuzzy import refilter
from ..ui_theme import THEMES, theme_index
from .state import SessionState, ThemeSnapshot
from .transitions import (
    AppendQuery,
    ClearQuery,
    CommitTheme,
    DeleteSelected,
    Effect,
    Emit,
    MoveCursor,
    MoveLocationCursor,
    MoveThemeCursor,
    PersistTheme,
    PopQuery,
    ResetLocationCursor,
    RestoreTheme,
    SaveToSelectedLocation,
    SessionView,
    SetStatus,
    SnapshotTheme,
    ToggleTransparency,
    transition,
)

logger = logging.getLogger(__name__)

PREVIEW_LIMIT = 200

SaveConfigFn = Callable[..., None]


def _first_line(text: str) -> str:
    for line in text.splitlines():
        return line
    return ""


def list_children(path: Path, limit: int = PREVIEW_LIMIT) -> list[tuple[str, bool]]:
    """Return ``(name, is_dir)`` for up to ``limit`` children, directories first."""
    children: list[tuple[str, bool]] = []
    try:
        with os.scandir(path) as it:
            for child in it:
                try:
                    is_dir = child.is_dir()
                except OSError:
                    is_dir = False
                children.append((child.name, is_dir))
    except OSError:
        return []
    children.sort(key=lambda item: (not item[1], item[0].lower()))
    return children[:limit]


class SessionController:
    """Interactive picker session over one workspace root.

    The catalog is built and the size probe started exactly once, at
    construction. ``handle_key`` feeds one decoded key through the
    transition table; ``state.finished`` turns true once a result is emitted.
    """

    def __init__(
        self,
        config: SessionConfig,
        *,
        initial_query: str = "",
        size_probe: SizeProbe | None = None,
        save_config_fn: SaveConfigFn = save_config,
        remove_worktree: Callable[[Path], subprocess.CompletedProcess[str]] = remove_git_worktree,
        remove_tree: Callable[[Path], None] = shutil.rmtree,
        location_paths: Sequence[Path] | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.root = config.tries_root
        self.apply_date_prefix = config.apply_date_prefix
        self._save_config = save_config_fn
        self._remove_worktree = remove_worktree
        self._remove_tree = remove_tree
        self._location_paths = tuple(location_paths) if location_paths is not None else save_location_paths()
        self._location_labels = (
            save_location_labels() if location_paths is None else tuple(str(path) for path in self._location_paths)
        )
        self._clock = clock
        self._preview_cache: dict[str, list[tuple[str, bool]]] = {}

        entries = build_catalog(self.root)
        self.state = SessionState(
            query=initial_query,
            all_entries=entries,
            theme=config.theme,
            transparent=config.transparent_background,
            config_path=config.config_path,
            editor_command=config.editor_command,
        )
        self.refilter()

        self.free_space_mb = free_disk_space_mb(self.root)
        self.size_probe = size_probe if size_probe is not None else SizeProbe(self.root)
        self.size_probe.start()

    # Query and selection

    def refilter(self) -> None:
        state = self.state
        state.filtered = refilter(state.all_entries, state.query)
        state.selected_index = 0
        state.list_start = 0

    def move_cursor(self, delta: int) -> None:
        state = self.state
        if not state.filtered:
            state.selected_index = 0
            return
        state.selected_index = max(0, min(len(state.filtered) - 1, state.selected_index + delta))

    def view(self) -> SessionView:
        state = self.state
        selected = state.selected_entry()
        return SessionView(
            query=state.query,
            filtered_count=len(state.filtered),
            selected_name=selected.name if selected is not None else None,
            has_config_path=state.config_path is not None,
            has_editor=bool(state.editor_command),
        )

    # Key handling

    def handle_key(self, key: str) -> None:
        """Apply one key token. Empty tokens are ignored."""
        if not key or self.state.finished:
            return
        state = self.state
        state.status_message = None
        step = transition(state.mode, key, self.view())
        for effect in step.effects:
            self.apply(effect)
        state.mode = step.mode

    def apply(self, effect: Effect) -> None:
        state = self.state
        if isinstance(effect, AppendQuery):
            state.query += effect.text
            self.refilter()
        elif isinstance(effect, PopQuery):
            state.query = state.query[:-1]
            self.refilter()
        elif isinstance(effect, ClearQuery):
            state.query = ""
            self.refilter()
        elif isinstance(effect, MoveCursor):
            self.move_cursor(effect.delta)
        elif isinstance(effect, SnapshotTheme):
            state.theme_snapshot = ThemeSnapshot(state.theme, state.transparent)
            state.theme_cursor = theme_index(state.theme.name)
        elif isinstance(effect, MoveThemeCursor):
            state.theme_cursor = max(0, min(len(THEMES) - 1, state.theme_cursor + effect.delta))
            state.theme = THEMES[state.theme_cursor]
        elif isinstance(effect, ToggleTransparency):
            state.transparent = not state.transparent
        elif isinstance(effect, RestoreTheme):
            self.restore_theme()
        elif isinstance(effect, CommitTheme):
            state.theme = THEMES[state.theme_cursor]
            state.theme_snapshot = None
        elif isinstance(effect, PersistTheme):
            self.persist_theme()
        elif isinstance(effect, ResetLocationCursor):
            state.location_cursor = 0
        elif isinstance(effect, MoveLocationCursor):
            last = len(self._location_paths) - 1
            state.location_cursor = max(0, min(last, state.location_cursor + effect.delta))
        elif isinstance(effect, SaveToSelectedLocation):
            self.save_to_location(state.location_cursor)
        elif isinstance(effect, DeleteSelected):
            selected = state.selected_entry()
            if selected is not None:
                self.delete(selected)
        elif isinstance(effect, SetStatus):
            state.status_message = effect.message
        elif isinstance(effect, Emit):
            state.result = effect.result
            state.wants_editor = effect.wants_editor
            state.finished = True
        else:
            raise TypeError(f"unknown session effect: {effect!r}")

    # Theme preview and persistence

    def restore_theme(self) -> None:
        state = self.state
        snapshot = state.theme_snapshot
        if snapshot is None:
            return
        state.theme = snapshot.theme
        state.transparent = snapshot.transparent
        state.theme_snapshot = None

    def _write_config(self, path: Path) -> None:
        state = self.state
        self._save_config(
            path,
            state.theme.name,
            self.root,
            state.editor_command,
            self.apply_date_prefix,
            state.transparent,
        )

    def persist_theme(self) -> None:
        state = self.state
        if state.config_path is None:
            return
        try:
            self._write_config(state.config_path)
        except OSError as exc:
            logger.warning("saving config to %s failed: %s", state.config_path, exc)
            state.status_message = f"Error saving: {exc}"
            return
        state.status_message = "Theme saved."

    def save_to_location(self, index: int) -> None:
        state = self.state
        path = self._location_paths[index]
        try:
            self._write_config(path)
        except OSError as exc:
            logger.warning("saving config to %s failed: %s", path, exc)
            state.status_message = f"Error saving config: {exc}"
            return
        state.config_path = path
        state.status_message = "Theme saved!"

    @property
    def location_labels(self) -> tuple[str, ...]:
        return tuple(self._location_labels)

    # Deletion

    def delete(self, entry: Entry) -> bool:
        """Remove ``entry`` from disk and the catalog; return whether it was removed.

        Linked worktrees go through ``git worktree remove`` so the primary
        repository's registry stays consistent; anything else is removed
        recursively. Failures leave the catalog untouched.
        """
        state = self.state
        target = self.root / entry.name
        if is_git_worktree(target):
            try:
                proc = self._remove_worktree(target)
            except (OSError, subprocess.SubprocessError) as exc:
                logger.warning("git worktree remove failed to start for %s: %s", target, exc)
                state.status_message = f"Error removing worktree: {exc}"
                return False
            if proc.returncode != 0:
                detail = _first_line(proc.stderr or "")
                logger.warning("git worktree remove failed for %s: %s", target, detail)
                state.status_message = f"Error deleting: {detail}"
                return False
            success_message = f"Worktree removed: {target}"
        else:
            try:
                self._remove_tree(target)
            except OSError as exc:
                logger.warning("deleting %s failed: %s", target, exc)
                state.status_message = f"Error deleting: {exc}"
                return False
            success_message = f"Deleted: {target}"

        logger.info("removed %s", target)
        state.all_entries = remove_entry(state.all_entries, entry.name)
        self._preview_cache.pop(entry.name, None)
        self.refilter()
        state.status_message = success_message
        return True

    # Renderer contract

    def preview_children(self, entry: Entry) -> list[tuple[str, bool]]:
        cached = self._preview_cache.get(entry.name)
        if cached is None:
            cached = list_children(self.root / entry.name)
            self._preview_cache[entry.name] = cached
        return cached

    def render_context(self) -> RenderContext:
        state = self.state
        selected = state.selected_entry()
        return RenderContext(
            mode=state.mode,
            theme=state.theme,
            transparent=state.transparent,
            query=state.query,
            entries=tuple(state.filtered),
            selected_index=state.selected_index,
            list_start=state.list_start,
            status_message=state.status_message,
            folder_size_mb=self.size_probe.current_mb(),
            free_space_mb=self.free_space_mb,
            preview=tuple(self.preview_children(selected)) if selected is not None else None,
            theme_names=tuple(theme.name for theme in THEMES),
            theme_cursor=state.theme_cursor,
            location_labels=self.location_labels,
            location_cursor=state.location_cursor,
            now=self._clock(),
        )
