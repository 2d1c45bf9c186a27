"""External process launching for ``:run``, previews, and run-on-selection.

The TUI is suspended while the child runs and restored afterwards whether or
not it succeeded. Failures are returned as values for status-bar display;
nothing here raises for a missing program or a non-zero exit.
"""

from __future__ import annotations

import contextlib
import logging
import shlex
import subprocess
from collections.abc import Callable
from contextlib import AbstractContextManager
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExternalResult:
    """Exit status of a child process, or the reason it could not start."""

    returncode: int | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.returncode == 0

    def describe(self, label: str) -> str:
        if self.error is not None:
            return self.error
        if self.returncode == 0:
            return f"{label}: done"
        return f"{label}: exited with status {self.returncode}"


class ExternalRunner:
    """Run child processes with the terminal handed over for their duration."""

    def __init__(self, suspend: Callable[[], AbstractContextManager] | None = None) -> None:
        self._suspend = suspend if suspend is not None else contextlib.nullcontext

    def _run(self, label: str, args, cwd: Path, **kwargs) -> ExternalResult:
        logger.info("running %s in %s", label, cwd)
        with self._suspend():
            try:
                proc = subprocess.run(args, cwd=cwd, check=False, **kwargs)
            except (OSError, ValueError) as exc:
                logger.warning("failed to launch %s: %s", label, exc)
                return ExternalResult(error=f"Failed to launch {label}: {exc}")
        logger.info("%s exited with status %s", label, proc.returncode)
        return ExternalResult(returncode=proc.returncode)

    def run_shell(self, command: str, cwd: Path) -> ExternalResult:
        """Run ``command`` through the user's shell."""
        return self._run(command, command, cwd, shell=True)

    def run_program(self, program: str, target: Path, cwd: Path) -> ExternalResult:
        """Run ``program`` (split shell-style) with ``target`` appended."""
        try:
            argv = shlex.split(program)
        except ValueError as exc:
            return ExternalResult(error=f"Cannot parse command {program!r}: {exc}")
        if not argv:
            return ExternalResult(error="Nothing to run")
        return self._run(argv[0], [*argv, str(target)], cwd)

    def page_text(self, text: str, pager: str, cwd: Path) -> ExternalResult:
        """Feed ``text`` to ``pager`` on stdin."""
        try:
            argv = shlex.split(pager)
        except ValueError as exc:
            return ExternalResult(error=f"Cannot parse pager {pager!r}: {exc}")
        if not argv:
            return ExternalResult(error="No pager configured")
        return self._run(argv[0], argv, cwd, input=text, text=True)


__all__ = [
    "ExternalResult",
    "ExternalRunner",
]
