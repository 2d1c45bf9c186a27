"""Single-entry file clipboard with copy (replicate) or cut (move) semantics."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from ..dir_model import DirEntry
from ..errors import InvalidName


class ClipMode(Enum):
    REPLICATE = "replicate"
    MOVE = "move"


@dataclass
class Clipboard:
    """At most one absolute file path plus the mode it was captured with."""

    content: Path | None = None
    mode: ClipMode = ClipMode.REPLICATE

    @property
    def is_empty(self) -> bool:
        return self.content is None

    def put(self, directory: Path, entry: DirEntry, mode: ClipMode) -> Path:
        """Capture ``directory / entry.name``; directories are refused untouched."""
        if entry.is_dir:
            raise InvalidName(entry.name)
        self.content = directory / entry.name
        self.mode = mode
        return self.content

    def clear(self) -> None:
        self.content = None
        self.mode = ClipMode.REPLICATE

    def after_paste(self) -> None:
        """Consume a cut entry once pasted; copied entries stay for repeat pastes."""
        if self.mode is ClipMode.MOVE:
            self.clear()

    def describe(self) -> str:
        if self.content is None:
            return "Clipboard is empty"
        label = "[CUT]" if self.mode is ClipMode.MOVE else "[COPIED]"
        return f"{self.content} {label}"


__all__ = [
    "ClipMode",
    "Clipboard",
]
