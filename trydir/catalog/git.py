"""Git worktree detection and worktree lifecycle commands.

A linked worktree carries a ``.git`` *file* whose first line points back at
its administrative directory inside the primary repository.
"""

from __future__ import annotations

import logging
import subprocess
import sys
from pathlib import Path

logger = logging.getLogger(__name__)


def is_git_worktree(path: Path) -> bool:
    """Return whether ``path`` is a linked worktree rather than a primary checkout."""
    try:
        return (path / ".git").is_file()
    except OSError:
        return False


def parse_dot_git(dot_git: Path) -> Path:
    """Return the admin directory named on the first line of a ``.git`` file.

    The target is the text after the first space up to the first newline.
    Relative targets are resolved against the worktree directory.
    """
    raw = dot_git.read_bytes()
    first_line = raw.split(b"\n", 1)[0]
    _, _, target = first_line.partition(b" ")
    target_path = Path(target.decode("utf-8", errors="surrogateescape").rstrip("\r"))
    if not target_path.is_absolute():
        target_path = dot_git.parent / target_path
    return target_path


def is_git_worktree_locked(path: Path) -> bool:
    """Return whether the worktree at ``path`` has a ``locked`` marker."""
    dot_git = path / ".git"
    try:
        if not dot_git.is_file():
            return False
        return (parse_dot_git(dot_git) / "locked").exists()
    except OSError:
        return False


def remove_git_worktree(path: Path) -> subprocess.CompletedProcess[str]:
    """Run ``git worktree remove .`` inside ``path`` and return the finished process.

    Spawn failures propagate as ``OSError`` so callers can report them.
    """
    logger.info("removing git worktree %s", path)
    return subprocess.run(
        ["git", "worktree", "remove", "."],
        cwd=path,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=True,
        encoding="utf-8",
        errors="replace",
        check=False,
    )


def is_inside_git_repo(path: Path) -> bool:
    try:
        proc = subprocess.run(
            ["git", "rev-parse", "--is-inside-work-tree"],
            cwd=path,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            check=False,
        )
    except OSError:
        return False
    return proc.returncode == 0


def branch_exists(repo: Path, branch: str) -> bool:
    try:
        proc = subprocess.run(
            ["git", "show-ref", "--verify", "--quiet", f"refs/heads/{branch}"],
            cwd=repo,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            check=False,
        )
    except OSError:
        return False
    return proc.returncode == 0


def create_worktree(repo: Path, branch: str, target: Path) -> bool:
    """Add a worktree for ``branch`` at ``target``, creating the branch if needed.

    Git's own output goes to stderr so stdout stays free for shell commands.
    """
    if branch_exists(repo, branch):
        cmd = ["git", "worktree", "add", str(target), branch]
    else:
        cmd = ["git", "worktree", "add", "-b", branch, str(target)]
    logger.info("creating worktree: %s", " ".join(cmd))
    try:
        proc = subprocess.run(cmd, cwd=repo, stdout=sys.stderr, stderr=sys.stderr, check=False)
    except OSError as exc:
        logger.warning("git worktree add failed to start: %s", exc)
        return False
    return proc.returncode == 0
