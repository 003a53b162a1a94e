"""Table-driven mode transitions for the picker session.

``transition(mode, key, view)`` is a pure function: it reads an immutable
``SessionView`` and returns the next mode plus a tuple of effects for the
controller to apply. Nothing here touches the filesystem or the terminal,
so every binding can be tested without either.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from ..input.key_registry import KeyComboBinding, KeyComboRegistry
from .state import SelectionResult, SessionMode

NO_EDITOR_MESSAGE = "No editor configured. Set VISUAL or EDITOR, or 'editor' in the config."


@dataclass(frozen=True)
class SessionView:
    """Read-only facts the transition table needs from the current state."""

    query: str
    filtered_count: int
    selected_name: str | None
    has_config_path: bool
    has_editor: bool


@dataclass(frozen=True)
class AppendQuery:
    text: str


@dataclass(frozen=True)
class PopQuery:
    pass


@dataclass(frozen=True)
class ClearQuery:
    pass


@dataclass(frozen=True)
class MoveCursor:
    delta: int


@dataclass(frozen=True)
class SnapshotTheme:
    """Remember theme and transparency, and point the theme cursor at the active theme."""


@dataclass(frozen=True)
class MoveThemeCursor:
    """Move the theme cursor and preview the hovered theme."""

    delta: int


@dataclass(frozen=True)
class ToggleTransparency:
    pass


@dataclass(frozen=True)
class RestoreTheme:
    pass


@dataclass(frozen=True)
class CommitTheme:
    """Keep the previewed theme and drop the rollback snapshot."""


@dataclass(frozen=True)
class PersistTheme:
    """Write theme settings to the already-known config path."""


@dataclass(frozen=True)
class ResetLocationCursor:
    pass


@dataclass(frozen=True)
class MoveLocationCursor:
    delta: int


@dataclass(frozen=True)
class SaveToSelectedLocation:
    pass


@dataclass(frozen=True)
class DeleteSelected:
    pass


@dataclass(frozen=True)
class SetStatus:
    message: str


@dataclass(frozen=True)
class Emit:
    """Finish the session with ``result``."""

    result: SelectionResult
    wants_editor: bool = False


Effect = Union[
    AppendQuery,
    PopQuery,
    ClearQuery,
    MoveCursor,
    SnapshotTheme,
    MoveThemeCursor,
    ToggleTransparency,
    RestoreTheme,
    CommitTheme,
    PersistTheme,
    ResetLocationCursor,
    MoveLocationCursor,
    SaveToSelectedLocation,
    DeleteSelected,
    SetStatus,
    Emit,
]


@dataclass(frozen=True)
class Transition:
    mode: SessionMode
    effects: tuple[Effect, ...] = ()


FORCE_QUIT_KEY = "CTRL_C"
LIST_UP_KEYS = ("UP", "CTRL_K", "CTRL_P")
LIST_DOWN_KEYS = ("DOWN", "CTRL_J", "CTRL_N")
POPUP_UP_KEYS = LIST_UP_KEYS + ("k", "p")
POPUP_DOWN_KEYS = LIST_DOWN_KEYS + ("j", "n")
YES_KEYS = ("y", "Y")
NO_KEYS = ("n", "N")
ABOUT_CLOSE_KEYS = ("ESC", "ENTER", "q", " ")


def is_text_key(key: str) -> bool:
    """Return whether ``key`` is a single printable character."""
    return len(key) == 1 and key.isprintable()


def _stay(mode: SessionMode, *effects: Effect) -> Transition:
    return Transition(mode, tuple(effects))


def _quit(_view: SessionView) -> Transition:
    return _stay(SessionMode.NORMAL, Emit(SelectionResult.none()))


# Normal mode

def _normal_commit(view: SessionView) -> Transition:
    if view.selected_name is not None:
        return _stay(SessionMode.NORMAL, Emit(SelectionResult.folder(view.selected_name)))
    if view.query:
        return _stay(SessionMode.NORMAL, Emit(SelectionResult.new(view.query)))
    return _stay(SessionMode.NORMAL)


def _normal_delete(view: SessionView) -> Transition:
    if view.filtered_count == 0:
        return _stay(SessionMode.NORMAL)
    return _stay(SessionMode.DELETE_CONFIRM)


def _normal_editor(view: SessionView) -> Transition:
    if not view.has_editor:
        return _stay(SessionMode.NORMAL, SetStatus(NO_EDITOR_MESSAGE))
    if view.selected_name is not None:
        return _stay(SessionMode.NORMAL, Emit(SelectionResult.folder(view.selected_name), wants_editor=True))
    if view.query:
        return _stay(SessionMode.NORMAL, Emit(SelectionResult.new(view.query), wants_editor=True))
    return _stay(SessionMode.NORMAL)


def _normal_text(key: str, _view: SessionView) -> Transition | None:
    if is_text_key(key):
        return _stay(SessionMode.NORMAL, AppendQuery(key))
    return None


NORMAL_BINDINGS: KeyComboRegistry[SessionView, Transition] = KeyComboRegistry(fallback=_normal_text).register_bindings(
    KeyComboBinding((FORCE_QUIT_KEY, "ESC"), _quit),
    KeyComboBinding(("BACKSPACE",), lambda _view: _stay(SessionMode.NORMAL, PopQuery())),
    KeyComboBinding(("CTRL_U",), lambda _view: _stay(SessionMode.NORMAL, ClearQuery())),
    KeyComboBinding(LIST_UP_KEYS, lambda _view: _stay(SessionMode.NORMAL, MoveCursor(-1))),
    KeyComboBinding(LIST_DOWN_KEYS, lambda _view: _stay(SessionMode.NORMAL, MoveCursor(1))),
    KeyComboBinding(("ENTER",), _normal_commit),
    KeyComboBinding(("CTRL_D",), _normal_delete),
    KeyComboBinding(("CTRL_E",), _normal_editor),
    KeyComboBinding(("CTRL_T",), lambda _view: _stay(SessionMode.THEME_SELECT, SnapshotTheme())),
    KeyComboBinding(("CTRL_A",), lambda _view: _stay(SessionMode.ABOUT)),
)


# Delete confirmation

DELETE_CONFIRM_BINDINGS: KeyComboRegistry[SessionView, Transition] = KeyComboRegistry().register_bindings(
    KeyComboBinding((FORCE_QUIT_KEY,), _quit),
    KeyComboBinding(YES_KEYS, lambda _view: _stay(SessionMode.NORMAL, DeleteSelected())),
    KeyComboBinding(NO_KEYS + ("ESC",), lambda _view: _stay(SessionMode.NORMAL)),
)


# Theme selection

def _theme_commit(view: SessionView) -> Transition:
    if view.has_config_path:
        return _stay(SessionMode.NORMAL, CommitTheme(), PersistTheme())
    return _stay(SessionMode.CONFIG_SAVE_PROMPT, CommitTheme())


THEME_SELECT_BINDINGS: KeyComboRegistry[SessionView, Transition] = KeyComboRegistry().register_bindings(
    KeyComboBinding((FORCE_QUIT_KEY,), lambda _view: _stay(SessionMode.NORMAL, RestoreTheme(), Emit(SelectionResult.none()))),
    KeyComboBinding(("ESC",), lambda _view: _stay(SessionMode.NORMAL, RestoreTheme())),
    KeyComboBinding(POPUP_UP_KEYS, lambda _view: _stay(SessionMode.THEME_SELECT, MoveThemeCursor(-1))),
    KeyComboBinding(POPUP_DOWN_KEYS, lambda _view: _stay(SessionMode.THEME_SELECT, MoveThemeCursor(1))),
    KeyComboBinding((" ",), lambda _view: _stay(SessionMode.THEME_SELECT, ToggleTransparency())),
    KeyComboBinding(("ENTER",), _theme_commit),
)


# Config save prompt and location list

CONFIG_SAVE_PROMPT_BINDINGS: KeyComboRegistry[SessionView, Transition] = KeyComboRegistry().register_bindings(
    KeyComboBinding((FORCE_QUIT_KEY,), _quit),
    KeyComboBinding(
        YES_KEYS + ("ENTER",),
        lambda _view: _stay(SessionMode.CONFIG_SAVE_LOCATION_SELECT, ResetLocationCursor()),
    ),
    KeyComboBinding(NO_KEYS + ("ESC",), lambda _view: _stay(SessionMode.NORMAL)),
)

CONFIG_SAVE_LOCATION_BINDINGS: KeyComboRegistry[SessionView, Transition] = KeyComboRegistry().register_bindings(
    KeyComboBinding((FORCE_QUIT_KEY,), _quit),
    KeyComboBinding(("ESC",), lambda _view: _stay(SessionMode.NORMAL)),
    KeyComboBinding(
        POPUP_UP_KEYS,
        lambda _view: _stay(SessionMode.CONFIG_SAVE_LOCATION_SELECT, MoveLocationCursor(-1)),
    ),
    KeyComboBinding(
        POPUP_DOWN_KEYS,
        lambda _view: _stay(SessionMode.CONFIG_SAVE_LOCATION_SELECT, MoveLocationCursor(1)),
    ),
    KeyComboBinding(("ENTER",), lambda _view: _stay(SessionMode.NORMAL, SaveToSelectedLocation())),
)


ABOUT_BINDINGS: KeyComboRegistry[SessionView, Transition] = KeyComboRegistry().register_bindings(
    KeyComboBinding((FORCE_QUIT_KEY,), _quit),
    KeyComboBinding(ABOUT_CLOSE_KEYS, lambda _view: _stay(SessionMode.NORMAL)),
)


MODE_BINDINGS: dict[SessionMode, KeyComboRegistry[SessionView, Transition]] = {
    SessionMode.NORMAL: NORMAL_BINDINGS,
    SessionMode.DELETE_CONFIRM: DELETE_CONFIRM_BINDINGS,
    SessionMode.THEME_SELECT: THEME_SELECT_BINDINGS,
    SessionMode.CONFIG_SAVE_PROMPT: CONFIG_SAVE_PROMPT_BINDINGS,
    SessionMode.CONFIG_SAVE_LOCATION_SELECT: CONFIG_SAVE_LOCATION_BINDINGS,
    SessionMode.ABOUT: ABOUT_BINDINGS,
}


def transition(mode: SessionMode, key: str, view: SessionView) -> Transition:
    """Map ``(mode, key)`` to the next mode and the effects to apply.

    Keys with no binding in ``mode`` leave the mode unchanged with no effects.
    """
    result = MODE_BINDINGS[mode].dispatch(key, view)
    if result is None:
        return Transition(mode)
    return result
