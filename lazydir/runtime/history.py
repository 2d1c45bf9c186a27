"""Undo/redo stacks of visited directories.

This module intentionally has no UI or filesystem concerns: existence of a
history target is checked through a callable supplied by the caller.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from ..errors import NotFound

MAX_DIR_HISTORY = 256

logger = logging.getLogger(__name__)


class DirectoryHistory:
    """Current directory plus bounded undo/redo stacks of absolute paths."""

    def __init__(self, current: Path, max_entries: int = MAX_DIR_HISTORY) -> None:
        self.max_entries = max(1, max_entries)
        self.current = current
        self.undo_stack: list[Path] = []
        self.redo_stack: list[Path] = []

    def _push(self, stack: list[Path], path: Path) -> None:
        stack.append(path)
        overflow = len(stack) - self.max_entries
        if overflow > 0:
            del stack[:overflow]

    def visit(self, path: Path) -> None:
        """Record entering ``path``: current goes on undo, redo is cleared."""
        if path == self.current:
            return
        self._push(self.undo_stack, self.current)
        self.redo_stack.clear()
        self.current = path

    def leave_to_parent(self, parent: Path) -> None:
        """Move to ``parent`` via ``..`` without duplicating it on the undo stack."""
        if self.undo_stack and self.undo_stack[-1] == parent:
            self.undo_stack.pop()
        self.current = parent

    def clear(self) -> None:
        self.undo_stack.clear()
        self.redo_stack.clear()

    def _step(
        self,
        source: list[Path],
        target: list[Path],
        exists: Callable[[Path], bool],
    ) -> Path | None:
        if not source:
            return None
        destination = source[-1]
        if not exists(destination):
            logger.info("history target %s vanished; discarding history", destination)
            self.clear()
            raise NotFound(str(destination))
        source.pop()
        self._push(target, self.current)
        self.current = destination
        return destination

    def undo(self, exists: Callable[[Path], bool]) -> Path | None:
        """Step back to the previous directory.

        Returns ``None`` when there is nothing to undo. Raises ``NotFound``
        and drops both stacks when the target directory no longer exists.
        """
        return self._step(self.undo_stack, self.redo_stack, exists)

    def redo(self, exists: Callable[[Path], bool]) -> Path | None:
        """Step forward again after an undo; mirrors ``undo``."""
        return self._step(self.redo_stack, self.undo_stack, exists)


__all__ = [
    "MAX_DIR_HISTORY",
    "DirectoryHistory",
]
