"""Main interactive event loop for the terminal UI.

Reads one key at a time, hands it to the dispatcher, and redraws when the
state changed. The loop is wiring only; behaviour lives in the dispatcher.
"""

from __future__ import annotations

import logging
import shutil
from collections.abc import Callable
from pathlib import Path

from ..input import read_key
from ..render import build_frame
from .dispatcher import CommandDispatcher
from .terminal import TerminalController

logger = logging.getLogger(__name__)

KEY_POLL_TIMEOUT_MS = 250


def run_main_loop(
    dispatcher: CommandDispatcher,
    terminal: TerminalController,
    stdin_fd: int,
    no_color: bool = False,
    read_key_fn: Callable[[int, int | None], str] = read_key,
) -> Path:
    """Run until a quit command and return the directory the user ended in.

    The poll timeout lets the frame follow terminal resizes without input.
    """
    state = dispatcher.state
    last_size: tuple[int, int] | None = None

    with terminal.raw_mode():
        while True:
            term = shutil.get_terminal_size((80, 24))
            size = (term.columns, term.lines)
            if size != last_size:
                last_size = size
                state.dirty = True
            if state.dirty:
                frame = build_frame(state, term.columns, term.lines, no_color=no_color)
                terminal.write(frame.to_ansi())
                state.dirty = False

            try:
                key = read_key_fn(stdin_fd, KEY_POLL_TIMEOUT_MS)
            except KeyboardInterrupt:
                break
            if not key:
                continue
            logger.debug("key %r in %s", key, type(state.mode).__name__)
            if dispatcher.handle_key(key):
                break

    return state.current_directory
