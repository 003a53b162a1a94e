"""Blocking read-process-render loop for one picker session."""

from __future__ import annotations

import logging
from collections.abc import Callable

from ..input import read_key
from ..render import render_frame
from ..terminal import TerminalController
from .controller import SessionController
from .state import SelectionResult

logger = logging.getLogger(__name__)


def run_session(
    controller: SessionController,
    terminal: TerminalController,
    *,
    read: Callable[[int], str] = read_key,
) -> tuple[SelectionResult, bool]:
    """Drive ``controller`` until it emits a result.

    Each iteration draws one frame and then blocks on the next key; there is
    no timer-driven redraw. Closed stdin ends the session as an abort.
    """
    state = controller.state
    while not state.finished:
        width, height = terminal.size()
        state.list_start = render_frame(controller.render_context(), width, height, terminal.out_fd)
        try:
            key = read(terminal.stdin_fd)
        except EOFError:
            logger.debug("stdin closed; aborting session")
            return SelectionResult.none(), False
        controller.handle_key(key)
    logger.debug("session finished: %s (editor=%s)", state.result, state.wants_editor)
    return state.result, state.wants_editor
