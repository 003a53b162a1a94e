"""Terminal key decoding and key-combo dispatch primitives."""

from .key_registry import KeyComboBinding, KeyComboRegistry
from .reader import read_key

__all__ = ["KeyComboBinding", "KeyComboRegistry", "read_key"]
