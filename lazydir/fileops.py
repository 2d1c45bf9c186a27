"""Collision-checked create/remove/rename/copy primitives.

Each operation re-lists the target directory before touching it so the
reason shown to the user comes from the listing, not from an ``OSError``.
Errors are raised as ``lazydir.errors`` kinds; any other ``OSError`` from
the underlying call propagates unchanged.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from .dir_model import ANCHOR_NAMES, DirEntry, EntryKind, LocalFileSystem
from .errors import AlreadyExists, InvalidName, NotFound

logger = logging.getLogger(__name__)


def validate_entry_name(name: str) -> None:
    """Reject names that cannot denote a single new entry in one directory."""
    if not name or name in ANCHOR_NAMES:
        raise InvalidName(name)
    if os.sep in name or (os.altsep is not None and os.altsep in name) or "\0" in name:
        raise InvalidName(name)


class SafeFileOps:
    """Filesystem mutations guarded by a fresh listing of the directory."""

    def __init__(self, fs: LocalFileSystem | None = None) -> None:
        self.fs = fs if fs is not None else LocalFileSystem()

    def _names(self, directory: Path) -> set[str]:
        return set(self.fs.list_names(directory))

    def create(self, directory: Path, entry: DirEntry) -> Path:
        """Create an empty file or directory named ``entry.name``."""
        validate_entry_name(entry.name)
        if entry.name in self._names(directory):
            raise AlreadyExists(entry.name)
        target = directory / entry.name
        if entry.kind is EntryKind.DIRECTORY:
            self.fs.create_directory(target)
        else:
            self.fs.create_file(target)
        logger.info("created %s %s", entry.kind.value, target)
        return target

    def remove(self, directory: Path, entry: DirEntry) -> None:
        """Remove a file, or a directory together with everything inside it."""
        if entry.is_anchor:
            raise InvalidName(entry.name)
        if entry.name not in self._names(directory):
            raise NotFound(entry.name)
        target = directory / entry.name
        if entry.is_dir:
            self.fs.remove_tree(target)
        else:
            self.fs.remove_file(target)
        logger.info("removed %s", target)

    def rename(self, directory: Path, entry: DirEntry, new_name: str) -> Path:
        """Rename ``entry`` inside ``directory`` to ``new_name``."""
        if entry.is_anchor:
            raise InvalidName(entry.name)
        validate_entry_name(new_name)
        names = self._names(directory)
        if entry.name not in names:
            raise NotFound(entry.name)
        if new_name == entry.name:
            return directory / entry.name
        if new_name in names:
            raise AlreadyExists(new_name)
        target = directory / new_name
        self.fs.rename(directory / entry.name, target)
        logger.info("renamed %s -> %s", directory / entry.name, target)
        return target

    def copy(self, destination: Path, source: Path) -> Path:
        """Copy the file at ``source`` to ``destination``.

        Directories are not copyable. The destination name is checked
        against a listing of its parent directory.
        """
        if not self.fs.exists(source):
            raise NotFound(source.name)
        if self.fs.is_dir(source):
            raise InvalidName(source.name)
        validate_entry_name(destination.name)
        if destination.name in self._names(destination.parent):
            raise AlreadyExists(destination.name)
        self.fs.copy_file(source, destination)
        logger.info("copied %s -> %s", source, destination)
        return destination

    def move(self, destination: Path, source: Path) -> Path:
        """Copy then remove the source; a failed copy leaves the source in place."""
        target = self.copy(destination, source)
        self.remove(source.parent, DirEntry(source.name, EntryKind.FILE))
        return target


__all__ = [
    "SafeFileOps",
    "validate_entry_name",
]
