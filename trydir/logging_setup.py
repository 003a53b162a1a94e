"""Opt-in debug logging to a file.

The terminal belongs to the picker and stdout carries the shell command, so
log records only ever go to a file under the platform log directory.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path

from platformdirs import user_log_dir

from .config import APP_NAME

LOG_ENV = "TRYDIR_LOG"
LOG_FILENAME = "trydir.log"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def default_log_path() -> Path:
    return Path(user_log_dir(APP_NAME, appauthor=False)) / LOG_FILENAME


def logging_requested(environ: Mapping[str, str] | None = None) -> bool:
    value = (os.environ if environ is None else environ).get(LOG_ENV, "").strip().lower()
    return value not in {"", "0", "false", "no", "off"}


def configure_logging(log_path: Path | None = None) -> Path | None:
    """Attach a debug ``FileHandler`` to the package logger.

    Returns the log path, or ``None`` when the file cannot be opened.
    """
    target = log_path if log_path is not None else default_log_path()
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(target, encoding="utf-8")
    except OSError:
        return None
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger = logging.getLogger("trydir")
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG)
    return target
