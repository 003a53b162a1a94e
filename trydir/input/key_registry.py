"""Key-combo dispatch tables used by the modal transition function."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

ViewT = TypeVar("ViewT")
ResultT = TypeVar("ResultT")


@dataclass(frozen=True)
class KeyComboBinding(Generic[ViewT, ResultT]):
    """Mapping from one or more key tokens to a single handler."""

    combos: tuple[str, ...]
    handler: Callable[[ViewT], ResultT]


class KeyComboRegistry(Generic[ViewT, ResultT]):
    """Exact-match key table with an optional fallback for unbound keys."""

    def __init__(self, fallback: Callable[[str, ViewT], ResultT | None] | None = None) -> None:
        self._fallback = fallback
        self._handlers: dict[str, Callable[[ViewT], ResultT]] = {}

    def register_binding(self, binding: KeyComboBinding[ViewT, ResultT]) -> KeyComboRegistry[ViewT, ResultT]:
        """Register one binding, overwriting existing handlers for the same combos."""
        for combo in binding.combos:
            self._handlers[combo] = binding.handler
        return self

    def register_bindings(self, *bindings: KeyComboBinding[ViewT, ResultT]) -> KeyComboRegistry[ViewT, ResultT]:
        for binding in bindings:
            self.register_binding(binding)
        return self

    def dispatch(self, key: str, view: ViewT) -> ResultT | None:
        """Invoke the handler bound to ``key``; unbound keys go to the fallback."""
        handler = self._handlers.get(key)
        if handler is not None:
            return handler(view)
        if self._fallback is not None:
            return self._fallback(key, view)
        return None
