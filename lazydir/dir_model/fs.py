"""Filesystem capability and directory listing for the cursor model.

All paths are passed explicitly; nothing here reads or changes the process
working directory.
"""

from __future__ import annotations

import os
import shutil
from pathlib import Path

from .types import CURRENT_DIR_NAME, PARENT_DIR_NAME, DirEntry, EntryKind, listing_sort_key


class LocalFileSystem:
    """Primitive filesystem operations backed by the real disk.

    Any object exposing the same methods can stand in for it, which is how
    tests or alternate backends plug into ``SafeFileOps`` and the dispatcher.
    """

    def list_names(self, directory: Path) -> list[str]:
        with os.scandir(directory) as entries:
            return [entry.name for entry in entries]

    def is_dir(self, path: Path) -> bool:
        return path.is_dir()

    def exists(self, path: Path) -> bool:
        return path.exists() or path.is_symlink()

    def create_file(self, path: Path) -> None:
        # "x" refuses to clobber something that appeared after the name check.
        with path.open("x", encoding="utf-8"):
            pass

    def create_directory(self, path: Path) -> None:
        path.mkdir()

    def remove_file(self, path: Path) -> None:
        path.unlink()

    def remove_tree(self, path: Path) -> None:
        if path.is_symlink():
            path.unlink()
            return
        shutil.rmtree(path)

    def rename(self, source: Path, target: Path) -> None:
        source.rename(target)

    def copy_file(self, source: Path, target: Path) -> None:
        shutil.copy2(source, target)


def entry_kind(fs: LocalFileSystem, path: Path) -> EntryKind:
    """Classify ``path``, following symlinks so linked directories are navigable."""
    try:
        return EntryKind.DIRECTORY if fs.is_dir(path) else EntryKind.FILE
    except OSError:
        return EntryKind.FILE


def list_directory_entries(
    directory: Path,
    fs: LocalFileSystem | None = None,
    show_hidden: bool = True,
) -> list[DirEntry]:
    """Return the full sorted listing of ``directory`` including ``.`` and ``..``.

    Raises ``OSError`` when the directory cannot be scanned.
    """
    fs = fs if fs is not None else LocalFileSystem()
    entries = [
        DirEntry(CURRENT_DIR_NAME, EntryKind.DIRECTORY),
        DirEntry(PARENT_DIR_NAME, EntryKind.DIRECTORY),
    ]
    for name in fs.list_names(directory):
        if name in (CURRENT_DIR_NAME, PARENT_DIR_NAME):
            continue
        if not show_hidden and name.startswith("."):
            continue
        entries.append(DirEntry(name, entry_kind(fs, directory / name)))
    entries.sort(key=listing_sort_key)
    return entries


__all__ = [
    "LocalFileSystem",
    "entry_kind",
    "list_directory_entries",
]
