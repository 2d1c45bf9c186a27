"""Tests for the single-entry clipboard."""

from __future__ import annotations

import unittest
from pathlib import Path

from lazydir.dir_model import DirEntry, EntryKind
from lazydir.errors import InvalidName
from lazydir.runtime.clipboard import Clipboard, ClipMode


class ClipboardTests(unittest.TestCase):
    def test_starts_empty(self) -> None:
        clipboard = Clipboard()
        self.assertTrue(clipboard.is_empty)
        self.assertEqual(clipboard.describe(), "Clipboard is empty")

    def test_put_stores_absolute_path_and_mode(self) -> None:
        clipboard = Clipboard()
        stored = clipboard.put(Path("/src"), DirEntry("a.txt", EntryKind.FILE), ClipMode.MOVE)
        self.assertEqual(stored, Path("/src/a.txt"))
        self.assertEqual(clipboard.content, Path("/src/a.txt"))
        self.assertIs(clipboard.mode, ClipMode.MOVE)
        self.assertEqual(clipboard.describe(), "/src/a.txt [CUT]")

    def test_directories_are_refused_without_touching_content(self) -> None:
        clipboard = Clipboard(Path("/src/keep.txt"), ClipMode.REPLICATE)
        with self.assertRaises(InvalidName):
            clipboard.put(Path("/src"), DirEntry("folder", EntryKind.DIRECTORY), ClipMode.MOVE)
        self.assertEqual(clipboard.content, Path("/src/keep.txt"))
        self.assertIs(clipboard.mode, ClipMode.REPLICATE)

    def test_after_paste_keeps_copies_and_consumes_cuts(self) -> None:
        copied = Clipboard(Path("/a"), ClipMode.REPLICATE)
        copied.after_paste()
        self.assertEqual(copied.content, Path("/a"))
        self.assertEqual(copied.describe(), "/a [COPIED]")

        cut = Clipboard(Path("/a"), ClipMode.MOVE)
        cut.after_paste()
        self.assertTrue(cut.is_empty)


if __name__ == "__main__":
    unittest.main()
