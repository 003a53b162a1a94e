"""Session state containers for the picker state machine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from ..catalog.entries import Entry
from ..ui_theme import DEFAULT_THEME, UITheme


class SessionMode(Enum):
    """Exclusive interaction mode; everything except ``NORMAL`` is an overlay."""

    NORMAL = "normal"
    DELETE_CONFIRM = "delete_confirm"
    THEME_SELECT = "theme_select"
    CONFIG_SAVE_PROMPT = "config_save_prompt"
    CONFIG_SAVE_LOCATION_SELECT = "config_save_location_select"
    ABOUT = "about"


FOLDER = "folder"
NEW = "new"
NONE = "none"


@dataclass(frozen=True)
class SelectionResult:
    """Terminal outcome of a session: an existing folder, a new name, or abort."""

    kind: str
    name: str | None = None

    @classmethod
    def folder(cls, name: str) -> SelectionResult:
        return cls(FOLDER, name)

    @classmethod
    def new(cls, name: str) -> SelectionResult:
        return cls(NEW, name)

    @classmethod
    def none(cls) -> SelectionResult:
        return cls(NONE)

    @property
    def is_none(self) -> bool:
        return self.kind == NONE


@dataclass(frozen=True)
class ThemeSnapshot:
    theme: UITheme
    transparent: bool


@dataclass
class SessionState:
    """Mutable state owned by one ``SessionController``.

    ``theme_snapshot`` is set on entering theme selection and cleared on
    commit or cancel; ``None`` always means no preview is in progress.
    """

    query: str = ""
    all_entries: list[Entry] = field(default_factory=list)
    filtered: list[Entry] = field(default_factory=list)
    selected_index: int = 0
    list_start: int = 0
    mode: SessionMode = SessionMode.NORMAL
    status_message: str | None = None
    theme: UITheme = DEFAULT_THEME
    transparent: bool = True
    theme_cursor: int = 0
    location_cursor: int = 0
    theme_snapshot: ThemeSnapshot | None = None
    config_path: Path | None = None
    editor_command: str | None = None
    result: SelectionResult = field(default_factory=SelectionResult.none)
    wants_editor: bool = False
    finished: bool = False

    def selected_entry(self) -> Entry | None:
        if not self.filtered:
            return None
        index = max(0, min(self.selected_index, len(self.filtered) - 1))
        return self.filtered[index]
