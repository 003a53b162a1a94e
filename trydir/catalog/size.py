"""Workspace disk usage: free space and a background folder-size probe."""

from __future__ import annotations

import logging
import os
import shutil
import threading
from collections.abc import Callable
from pathlib import Path

logger = logging.getLogger(__name__)

BYTES_PER_MB = 1024 * 1024


def folder_size_bytes(path: Path) -> int:
    """Sum regular-file sizes below ``path``; symlinks are neither followed nor counted."""
    total = 0
    try:
        with os.scandir(path) as children:
            for child in children:
                try:
                    if child.is_symlink():
                        continue
                    if child.is_dir(follow_symlinks=False):
                        total += folder_size_bytes(Path(child.path))
                    else:
                        total += child.stat(follow_symlinks=False).st_size
                except OSError:
                    continue
    except OSError:
        return total
    return total


def folder_size_mb(path: Path) -> int:
    return folder_size_bytes(path) // BYTES_PER_MB


def free_disk_space_mb(path: Path) -> int | None:
    """Return free space on the filesystem holding ``path``, or ``None``."""
    try:
        return shutil.disk_usage(path).free // BYTES_PER_MB
    except OSError:
        return None


def format_megabytes(size_mb: int) -> str:
    """Format MB counts, switching to one-decimal GB at 1000 MB and above."""
    if size_mb >= 1000:
        return f"{size_mb / 1024.0:.1f} GB"
    return f"{size_mb} MB"


class SizeProbe:
    """One detached computation of the workspace size in whole megabytes.

    The result is published once, when the walk completes. Readers see ``0``
    until then. There is no cancellation: an unfinished probe is abandoned
    with the session.
    """

    def __init__(self, root: Path, measure: Callable[[Path], int] = folder_size_mb) -> None:
        self.root = root
        self._measure = measure
        self._size_mb = 0
        self._done = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def started(self) -> bool:
        return self._thread is not None

    def start(self) -> None:
        """Spawn the worker thread. Subsequent calls are ignored."""
        if self._thread is not None:
            return
        self._thread = threading.Thread(
            target=self._worker,
            name="trydir-size-probe",
            daemon=True,
        )
        self._thread.start()

    def _worker(self) -> None:
        try:
            size_mb = int(self._measure(self.root))
        except Exception:
            logger.exception("size probe failed for %s", self.root)
            size_mb = 0
        # single reference assignment; readers need no lock
        self._size_mb = size_mb
        self._done.set()
        logger.debug("size probe finished for %s: %d MB", self.root, size_mb)

    def current_mb(self) -> int:
        """Non-blocking read of the published total (``0`` means not yet known)."""
        return self._size_mb

    def wait(self, timeout: float | None = None) -> bool:
        """Block until the probe finishes; used by tests and non-interactive callers."""
        return self._done.wait(timeout)
