"""Command-line front door for trydir.

Parses options, resolves the workspace root, and either answers directly
(name shortcut, worktree creation) or runs the interactive picker. The only
thing written to stdout is the shell command for the wrapper to evaluate;
the picker itself draws on stderr.
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import os
import sys
from pathlib import Path
from typing import TextIO

from . import __version__
from .catalog.entries import generate_prefix_date, matching_folders
from .catalog.git import create_worktree, is_inside_git_repo
from .config import SessionConfig, load_configuration
from .logging_setup import configure_logging, logging_requested
from .session.state import FOLDER, NEW, SelectionResult
from .ui_theme import available_theme_names, find_theme

logger = logging.getLogger(__name__)


def shell_quote(value: str) -> str:
    """Wrap ``value`` in single quotes for POSIX shells."""
    return "'" + value.replace("'", "'\"'\"'") + "'"


def shell_command(path: Path, editor_command: str | None = None) -> str:
    if editor_command:
        return f"{editor_command} {shell_quote(str(path))}"
    return f"cd {shell_quote(str(path))}"


def dated_name(name: str, apply_date_prefix: bool | None) -> str:
    """Prefix ``name`` with today's date when the config asks for it."""
    prefix = generate_prefix_date()
    if apply_date_prefix is True and not name.startswith(prefix):
        return f"{prefix} {name}"
    return name


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="trydir",
        description="Pick, create, and prune workspace directories for quick experiments.",
    )
    parser.add_argument(
        "name",
        nargs="?",
        default=None,
        help="Jump to or create a workspace by name. Starts the picker if omitted or ambiguous.",
    )
    parser.add_argument(
        "-w",
        "--worktree",
        metavar="BRANCH",
        default=None,
        help="Create a git worktree for BRANCH from the current repository.",
    )
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--debug", action="store_true", help="Write debug logs to the user log directory.")
    parser.add_argument("--version", action="version", version=f"trydir {__version__}")
    return parser


def emit_selection(
    result: SelectionResult,
    wants_editor: bool,
    config: SessionConfig,
    out: TextIO,
) -> int:
    """Create the target if needed and print the command for the shell wrapper."""
    if result.kind == FOLDER and result.name is not None:
        target = config.tries_root / result.name
    elif result.kind == NEW and result.name is not None:
        target = config.tries_root / dated_name(result.name, config.apply_date_prefix)
        try:
            target.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            print(f"Error: cannot create {target}: {exc}", file=sys.stderr)
            return 1
        logger.info("created workspace %s", target)
    else:
        return 0
    editor = config.editor_command if wants_editor else None
    out.write(shell_command(target, editor) + "\n")
    return 0


def run_worktree(branch: str, config: SessionConfig, out: TextIO, cwd: Path | None = None) -> int:
    repo = cwd if cwd is not None else Path.cwd()
    if not is_inside_git_repo(repo):
        print("Error: Not inside a git repository.", file=sys.stderr)
        print("The -w/--worktree option only works inside a git repository.", file=sys.stderr)
        return 1

    folder_name = dated_name(branch, config.apply_date_prefix)
    target = config.tries_root / folder_name
    if target.exists():
        print(f"Worktree at '{folder_name}' already exists.", file=sys.stderr)
        out.write(shell_command(target) + "\n")
        return 0

    print(f"Creating worktree '{branch}' at {target}...", file=sys.stderr)
    if not create_worktree(repo, branch, target):
        print("Error: Failed to create worktree.", file=sys.stderr)
        return 1
    out.write(shell_command(target) + "\n")
    return 0


def run_picker(config: SessionConfig, initial_query: str = "") -> tuple[SelectionResult, bool]:
    """Run the interactive picker on the controlling terminal."""
    from .session.controller import SessionController
    from .session.loop import run_session
    from .terminal import TerminalController

    stdin_fd = sys.stdin.fileno()
    out_fd = sys.stderr.fileno()
    if not (os.isatty(stdin_fd) and os.isatty(out_fd)):
        raise SystemExit("trydir needs an interactive terminal on stdin and stderr.")

    controller = SessionController(config, initial_query=initial_query)
    terminal = TerminalController(stdin_fd, out_fd)
    with terminal.raw_mode():
        return run_session(controller, terminal)


def main(argv: list[str] | None = None) -> int:
    """Parse CLI arguments and print the resulting shell command, if any."""
    args = build_parser().parse_args(argv)

    if args.debug or logging_requested():
        log_path = configure_logging()
        if log_path is None:
            print("Warning: could not open the debug log file.", file=sys.stderr)

    config = load_configuration()
    if args.theme is not None:
        theme = find_theme(args.theme)
        if theme is None:
            raise SystemExit(f"Unknown theme: {args.theme!r}. Available: {', '.join(available_theme_names())}")
        config = dataclasses.replace(config, theme=theme)

    try:
        config.tries_root.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise SystemExit(f"Cannot create workspace root {config.tries_root}: {exc}") from exc

    out = sys.stdout
    if args.worktree is not None:
        return run_worktree(args.worktree, config, out)

    initial_query = ""
    if args.name is not None:
        matches = matching_folders(args.name, config.tries_root)
        if not matches:
            return emit_selection(SelectionResult.new(args.name), False, config, out)
        if len(matches) == 1:
            return emit_selection(SelectionResult.folder(matches[0]), False, config, out)
        initial_query = args.name

    result, wants_editor = run_picker(config, initial_query)
    return emit_selection(result, wants_editor, config, out)


if __name__ == "__main__":
    sys.exit(main())
