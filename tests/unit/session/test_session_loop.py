"""Tests for the blocking read-render loop with a fake terminal."""

from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path

from trydir.catalog.size import SizeProbe
from trydir.config import SessionConfig
from trydir.session.controller import SessionController
from trydir.session.loop import run_session
from trydir.session.state import SelectionResult
from trydir.ui_theme import DEFAULT_THEME


class _FakeTerminal:
    def __init__(self, out_fd: int) -> None:
        self.stdin_fd = -1
        self.out_fd = out_fd

    def size(self) -> tuple[int, int]:
        return 100, 24


def _scripted_reader(keys: list[str]):
    pending = list(keys)

    def read(_fd: int) -> str:
        if not pending:
            raise EOFError
        return pending.pop(0)

    return read


class RunSessionTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.root = Path(self._tmp.name)
        self._out = tempfile.TemporaryFile()
        self.addCleanup(self._out.close)
        self.terminal = _FakeTerminal(self._out.fileno())

    def _controller(self) -> SessionController:
        config = SessionConfig(
            tries_root=self.root,
            theme=DEFAULT_THEME,
            editor_command="nvim",
            config_path=None,
            apply_date_prefix=None,
            transparent_background=True,
        )
        return SessionController(
            config,
            size_probe=SizeProbe(self.root, measure=lambda _path: 0),
            location_paths=(self.root / "a.json", self.root / "b.json"),
        )

    def _written(self) -> str:
        os.lseek(self._out.fileno(), 0, os.SEEK_SET)
        return self._out.read().decode("utf-8")

    def test_returns_selection_and_editor_flag(self) -> None:
        (self.root / "project").mkdir()
        controller = self._controller()

        result = run_session(controller, self.terminal, read=_scripted_reader(["p", "r", "CTRL_E"]))

        self.assertEqual(result, (SelectionResult.folder("project"), True))
        self.assertIn("Search/New", self._written())

    def test_unknown_tokens_are_ignored(self) -> None:
        controller = self._controller()

        result = run_session(controller, self.terminal, read=_scripted_reader(["", "n", "e", "w", "ENTER"]))

        self.assertEqual(result, (SelectionResult.new("new"), False))

    def test_closed_input_aborts(self) -> None:
        controller = self._controller()

        result = run_session(controller, self.terminal, read=_scripted_reader(["x"]))

        self.assertEqual(result, (SelectionResult.none(), False))

    def test_renders_before_every_key(self) -> None:
        controller = self._controller()

        run_session(controller, self.terminal, read=_scripted_reader(["a", "b", "ESC"]))

        self.assertEqual(self._written().count("\033[H"), 3)


if __name__ == "__main__":
    unittest.main()
