"""Persistent JSON config helpers.

Resolves where the config file lives, loads session settings from it, and
writes theme choices back. Loading is defensive: a missing or malformed file
falls back to defaults. Saving raises ``OSError`` so the caller can report it.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

from .ui_theme import DEFAULT_THEME, UITheme, custom_theme, find_theme

logger = logging.getLogger(__name__)

APP_NAME = "trydir"
DEFAULT_CONFIG_FILENAME = "config.json"
CONFIG_FILENAME_ENV = "TRYDIR_CONFIG"
CONFIG_DIR_ENV = "TRYDIR_CONFIG_DIR"
TRIES_PATH_ENV = "TRYDIR_PATH"


@dataclass(frozen=True)
class SessionConfig:
    """Settings handed to a picker session at construction."""

    tries_root: Path
    theme: UITheme
    editor_command: str | None
    config_path: Path | None
    apply_date_prefix: bool | None
    transparent_background: bool


def _env(environ: Mapping[str, str] | None) -> Mapping[str, str]:
    return os.environ if environ is None else environ


def config_filename(environ: Mapping[str, str] | None = None) -> str:
    name = _env(environ).get(CONFIG_FILENAME_ENV, "").strip()
    return name or DEFAULT_CONFIG_FILENAME


def system_config_path(environ: Mapping[str, str] | None = None) -> Path:
    """Config file in the platform's per-user config directory."""
    return Path(user_config_dir(APP_NAME, appauthor=False)) / config_filename(environ)


def home_config_path(environ: Mapping[str, str] | None = None) -> Path:
    """Config file in a dot-directory directly under the home directory."""
    return Path.home() / f".{APP_NAME}" / config_filename(environ)


def save_location_paths(environ: Mapping[str, str] | None = None) -> tuple[Path, Path]:
    """Return the two locations offered when no config file exists yet."""
    return system_config_path(environ), home_config_path(environ)


def save_location_labels(environ: Mapping[str, str] | None = None) -> tuple[str, str]:
    system_path, home_path = save_location_paths(environ)
    return (
        f"System Config ({_tilde(system_path)})",
        f"Home Directory ({_tilde(home_path)})",
    )


def _tilde(path: Path) -> str:
    try:
        return "~/" + path.relative_to(Path.home()).as_posix()
    except ValueError:
        return str(path)


def candidate_config_paths(environ: Mapping[str, str] | None = None) -> list[Path]:
    """Return config paths in lookup order."""
    env = _env(environ)
    paths: list[Path] = []
    env_dir = env.get(CONFIG_DIR_ENV, "").strip()
    if env_dir:
        paths.append(Path(env_dir).expanduser() / config_filename(env))
    paths.extend(save_location_paths(env))
    return paths


def find_config_path(environ: Mapping[str, str] | None = None) -> Path | None:
    """Return the first existing config file, or ``None``."""
    for path in candidate_config_paths(environ):
        if path.is_file():
            return path
    return None


def expand_path(raw: str) -> Path:
    """Expand a leading ``~`` in a configured path."""
    return Path(raw).expanduser()


def load_config(path: Path) -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        logger.debug("ignoring unreadable config %s: %s", path, exc)
        return {}
    return data if isinstance(data, dict) else {}


def _optional_bool(value: object) -> bool | None:
    return value if isinstance(value, bool) else None


def _optional_str(value: object) -> str | None:
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def default_tries_root() -> Path:
    return Path.home() / "work" / "tries"


def load_configuration(environ: Mapping[str, str] | None = None) -> SessionConfig:
    """Resolve session settings from environment and the config file.

    ``TRYDIR_PATH`` wins over ``tries_path`` from the file. The editor comes
    from ``VISUAL``/``EDITOR`` unless the file names one. A registry theme
    name takes precedence over a ``colors`` table.
    """
    env = _env(environ)
    env_root = env.get(TRIES_PATH_ENV, "").strip()
    tries_root = expand_path(env_root) if env_root else default_tries_root()
    editor_command = _optional_str(env.get("VISUAL")) or _optional_str(env.get("EDITOR"))
    theme = DEFAULT_THEME
    apply_date_prefix: bool | None = None
    transparent_background: bool | None = None

    config_path = find_config_path(env)
    if config_path is None:
        return SessionConfig(
            tries_root=tries_root,
            theme=theme,
            editor_command=editor_command,
            config_path=None,
            apply_date_prefix=None,
            transparent_background=True,
        )

    data = load_config(config_path)
    configured_root = _optional_str(data.get("tries_path"))
    if configured_root and not env_root:
        tries_root = expand_path(configured_root)
    configured_editor = _optional_str(data.get("editor"))
    if configured_editor:
        editor_command = configured_editor

    theme_name = _optional_str(data.get("theme"))
    colors = data.get("colors")
    if theme_name is not None:
        found = find_theme(theme_name)
        if found is not None:
            theme = found
        else:
            logger.debug("unknown theme %r in %s", theme_name, config_path)
    elif isinstance(colors, dict):
        theme = custom_theme(colors)

    apply_date_prefix = _optional_bool(data.get("apply_date_prefix"))
    transparent_background = _optional_bool(data.get("transparent_background"))

    return SessionConfig(
        tries_root=tries_root,
        theme=theme,
        editor_command=editor_command,
        config_path=config_path,
        apply_date_prefix=apply_date_prefix,
        transparent_background=True if transparent_background is None else transparent_background,
    )


def save_config(
    path: Path,
    theme_name: str,
    tries_root: Path,
    editor_command: str | None,
    apply_date_prefix: bool | None,
    transparent_background: bool,
) -> None:
    """Persist session settings as pretty-printed JSON at ``path``.

    Only the theme *name* is written; any legacy ``colors`` table is dropped.
    Keys this module does not manage are preserved.
    """
    data = load_config(path) if path.exists() else {}
    data.pop("colors", None)
    data["tries_path"] = str(tries_root)
    data["theme"] = theme_name
    if editor_command:
        data["editor"] = editor_command
    else:
        data.pop("editor", None)
    if apply_date_prefix is None:
        data.pop("apply_date_prefix", None)
    else:
        data["apply_date_prefix"] = bool(apply_date_prefix)
    data["transparent_background"] = bool(transparent_background)

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    logger.info("saved config to %s (theme=%s)", path, theme_name)
