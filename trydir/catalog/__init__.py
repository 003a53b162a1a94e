"""Workspace catalog: entry discovery, git worktree helpers, and size probing."""

from .entries import (
    Entry,
    build_catalog,
    build_entry,
    extract_prefix_date,
    generate_prefix_date,
    matching_folders,
    remove_entry,
)
from .git import is_git_worktree, is_git_worktree_locked, remove_git_worktree
from .size import SizeProbe, folder_size_mb, format_megabytes, free_disk_space_mb

__all__ = [
    "Entry",
    "build_catalog",
    "build_entry",
    "extract_prefix_date",
    "generate_prefix_date",
    "matching_folders",
    "remove_entry",
    "is_git_worktree",
    "is_git_worktree_locked",
    "remove_git_worktree",
    "SizeProbe",
    "folder_size_mb",
    "format_megabytes",
    "free_disk_space_mb",
]
