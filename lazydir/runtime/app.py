"""Interactive session bootstrap.

Loads config, builds the key registry and dispatcher for the start
directory, and runs the event loop with the terminal in raw mode.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

from ..input import build_key_registry
from .config import load_config, load_keybindings, load_pager, load_show_hidden, load_style, load_wrap_search
from .dispatcher import CommandDispatcher
from .external import ExternalRunner
from .loop import run_main_loop
from .terminal import TerminalController

logger = logging.getLogger(__name__)


def _ui_output_fd() -> tuple[int, bool]:
    """Draw on stdout, or on the controlling tty when stdout is captured.

    Returns the descriptor and whether it was opened here.
    """
    stdout_fd = sys.stdout.fileno()
    if os.isatty(stdout_fd):
        return stdout_fd, False
    return os.open("/dev/tty", os.O_WRONLY), True


def run_app(start_directory: Path, style: str | None = None, no_color: bool = False) -> Path:
    """Run the file manager in ``start_directory`` and return the final directory.

    Raises ``OSError`` when the start directory cannot be listed.
    """
    stdin_fd = sys.stdin.fileno()
    if not os.isatty(stdin_fd):
        raise SystemExit("lazydir needs an interactive terminal on stdin.")

    config = load_config()
    registry = build_key_registry(load_keybindings(config))
    ui_fd, owns_ui_fd = _ui_output_fd()
    try:
        terminal = TerminalController(stdin_fd, ui_fd)
        dispatcher = CommandDispatcher.open_directory(
            start_directory,
            registry,
            runner=ExternalRunner(terminal.suspended),
            pager=load_pager(config),
            style=style or load_style(config),
            no_color=no_color,
            show_hidden=load_show_hidden(config),
            wrap_search=load_wrap_search(config),
        )
        logger.info("starting in %s", start_directory)
        return run_main_loop(dispatcher, terminal, stdin_fd, no_color=no_color)
    finally:
        if owns_ui_fd:
            os.close(ui_fd)
