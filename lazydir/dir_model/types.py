"""Domain datatypes for one directory listing."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

CURRENT_DIR_NAME = "."
PARENT_DIR_NAME = ".."
ANCHOR_NAMES = frozenset({CURRENT_DIR_NAME, PARENT_DIR_NAME})


class EntryKind(Enum):
    FILE = "file"
    DIRECTORY = "directory"


@dataclass(frozen=True)
class DirEntry:
    """One name in a directory listing plus whether it is a directory."""

    name: str
    kind: EntryKind

    @property
    def is_dir(self) -> bool:
        return self.kind is EntryKind.DIRECTORY

    @property
    def is_anchor(self) -> bool:
        """Return whether this is the ``.`` or ``..`` navigation anchor."""
        return self.name in ANCHOR_NAMES


def listing_sort_key(entry: DirEntry) -> tuple[int, str]:
    """Order ``.`` and ``..`` first, then everything else by plain name."""
    if entry.name == CURRENT_DIR_NAME:
        return (0, entry.name)
    if entry.name == PARENT_DIR_NAME:
        return (1, entry.name)
    return (2, entry.name)


__all__ = [
    "ANCHOR_NAMES",
    "CURRENT_DIR_NAME",
    "PARENT_DIR_NAME",
    "DirEntry",
    "EntryKind",
    "listing_sort_key",
]
