"""Tests for file preview text: binary detection, sanitizing, highlighting."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from lazydir.preview import highlight_source, read_text, render_preview, sanitize_terminal_text


class PreviewTextTests(unittest.TestCase):
    def test_plain_preview_without_colour(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "notes.txt"
            path.write_text("line one\nline two\n", encoding="utf-8")
            self.assertEqual(render_preview(path, no_color=True), "line one\nline two\n")

    def test_python_source_is_highlighted(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "demo.py"
            path.write_text("def f():\n    return 1\n", encoding="utf-8")
            rendered = render_preview(path, style="monokai")
        self.assertIn("\x1b[", rendered)
        self.assertIn("return", rendered)

    def test_binary_file_is_not_shown(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "blob.bin"
            path.write_bytes(b"\x00\x01\x02")
            self.assertEqual(render_preview(path), "blob.bin: binary file, not shown\n")

    def test_control_bytes_are_escaped(self) -> None:
        self.assertEqual(sanitize_terminal_text("a\x1b[2Jb\tc\n"), "a\\x1b[2Jb\tc\n")

    def test_latin1_fallback(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "legacy.txt"
            path.write_bytes("caf\xe9".encode("latin-1"))
            self.assertEqual(read_text(path), "café")

    def test_unknown_style_and_extension_fall_back(self) -> None:
        rendered = highlight_source("plain words\n", Path("file.unknownext"), style="no-such-style")
        self.assertIn("plain words", rendered)

    def test_missing_file_raises(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(OSError):
                render_preview(Path(tmp) / "gone.txt")


if __name__ == "__main__":
    unittest.main()
