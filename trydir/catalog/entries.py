"""Workspace entry discovery and classification.

Scans the immediate children of the workspace root once per session.
Each directory becomes an ``Entry`` with date-prefix parsing and
marker-file capability flags.
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path

from .git import is_git_worktree, is_git_worktree_locked

logger = logging.getLogger(__name__)

DATE_PREFIX_FORMAT = "%Y-%m-%d"
_DATE_TOKEN_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

# flag name -> marker paths; any existing marker sets the flag
MARKER_FILES: dict[str, tuple[str, ...]] = {
    "is_gitmodules": (".gitmodules",),
    "is_mise": ("mise.toml",),
    "is_cargo": ("Cargo.toml",),
    "is_maven": ("pom.xml",),
    "is_flutter": ("pubspec.yaml",),
    "is_go": ("go.mod",),
    "is_python": ("pyproject.toml", "requirements.txt"),
}


@dataclass
class Entry:
    """One discovered workspace directory.

    ``name`` is the on-disk directory name and the catalog key. Only
    ``score`` is ever reassigned after the catalog scan.
    """

    name: str
    display_name: str
    created: float
    modified: float
    score: int = 0
    is_git: bool = False
    is_worktree: bool = False
    is_worktree_locked: bool = False
    is_gitmodules: bool = False
    is_mise: bool = False
    is_cargo: bool = False
    is_maven: bool = False
    is_flutter: bool = False
    is_go: bool = False
    is_python: bool = False


def extract_prefix_date(name: str) -> tuple[datetime, str] | None:
    """Split ``"YYYY-MM-DD rest"`` into a local-midnight datetime and ``rest``.

    Returns ``None`` when the name has no space, the leading token is not a
    valid calendar date, or nothing follows the token.
    """
    token, sep, remainder = name.partition(" ")
    if not sep or not remainder:
        return None
    if not _DATE_TOKEN_RE.match(token):
        return None
    try:
        parsed = datetime.strptime(token, DATE_PREFIX_FORMAT)
    except ValueError:
        return None
    return parsed, remainder


def generate_prefix_date(today: date | None = None) -> str:
    """Return today's date formatted as a directory-name prefix token."""
    return (today or date.today()).strftime(DATE_PREFIX_FORMAT)


def _creation_time(stat_result: os.stat_result) -> float:
    birth = getattr(stat_result, "st_birthtime", None)
    if birth is not None:
        return float(birth)
    return float(stat_result.st_ctime)


def _marker_exists(path: Path, marker: str) -> bool:
    try:
        return (path / marker).exists()
    except OSError:
        return False


def build_entry(path: Path) -> Entry | None:
    """Classify one directory, returning ``None`` when it cannot be stat'ed."""
    name = path.name
    try:
        stat_result = path.stat()
    except OSError:
        logger.debug("skipping unreadable entry %s", path)
        return None

    created: float | None = None
    prefixed = extract_prefix_date(name)
    if prefixed is not None:
        prefix_date, display_name = prefixed
        try:
            created = prefix_date.timestamp()
        except (ValueError, OverflowError, OSError):
            logger.debug("date prefix of %s is outside the platform time range", path)
    else:
        display_name = name
    if created is None:
        created = _creation_time(stat_result)

    entry = Entry(
        name=name,
        display_name=display_name,
        created=created,
        modified=float(stat_result.st_mtime),
        is_git=_marker_exists(path, ".git"),
        is_worktree=is_git_worktree(path),
        is_worktree_locked=is_git_worktree_locked(path),
    )
    for flag, markers in MARKER_FILES.items():
        setattr(entry, flag, any(_marker_exists(path, marker) for marker in markers))
    return entry


def build_catalog(root: Path) -> list[Entry]:
    """Return one ``Entry`` per child directory, most recently modified first.

    Symlinked directories are not followed. An unreadable root yields an
    empty catalog.
    """
    entries: list[Entry] = []
    try:
        with os.scandir(root) as children:
            for child in children:
                try:
                    if not child.is_dir(follow_symlinks=False):
                        continue
                except OSError:
                    continue
                entry = build_entry(Path(child.path))
                if entry is not None:
                    entries.append(entry)
    except OSError as exc:
        logger.debug("cannot scan workspace root %s: %s", root, exc)
        return []

    entries.sort(key=lambda item: item.modified, reverse=True)
    logger.debug("catalog built for %s: %d entries", root, len(entries))
    return entries


def remove_entry(entries: list[Entry], name: str) -> list[Entry]:
    """Return ``entries`` without the entry keyed by ``name``, order preserved."""
    return [entry for entry in entries if entry.name != name]


def matching_folders(name: str, root: Path) -> list[str]:
    """Return directory names equal to ``name`` directly or after date stripping."""
    matches: list[str] = []
    try:
        with os.scandir(root) as children:
            for child in children:
                try:
                    if not child.is_dir():
                        continue
                except OSError:
                    continue
                if child.name == name:
                    matches.append(child.name)
                    continue
                prefixed = extract_prefix_date(child.name)
                if prefixed is not None and prefixed[1] == name:
                    matches.append(child.name)
    except OSError:
        return []
    return sorted(matches)
