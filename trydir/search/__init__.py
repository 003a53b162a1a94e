"""Live fuzzy filtering of catalog entries."""

from .fuzzy import fuzzy_score, refilter

__all__ = ["fuzzy_score", "refilter"]
