"""Picker session: modal state, transition table, and controller."""

from .state import SelectionResult, SessionMode, SessionState, ThemeSnapshot
from .transitions import SessionView, Transition, transition

__all__ = [
    "SelectionResult",
    "SessionMode",
    "SessionState",
    "SessionView",
    "ThemeSnapshot",
    "Transition",
    "transition",
]
