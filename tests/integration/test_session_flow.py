"""End-to-end keyboard session over a real directory tree.

Drives the main loop with scripted keys and a recording terminal, checking
the filesystem and the directory returned on quit.
"""

from __future__ import annotations

import tempfile
import unittest
from contextlib import contextmanager
from pathlib import Path
from unittest import mock

from lazydir.input import build_key_registry
from lazydir.runtime import run_main_loop
from lazydir.runtime.dispatcher import CommandDispatcher


class _RecordingTerminal:
    def __init__(self) -> None:
        self.frames: list[str] = []

    @contextmanager
    def raw_mode(self):
        yield

    def write(self, text: str) -> None:
        self.frames.append(text)


def _script(*chunks: object) -> list[str]:
    keys: list[str] = []
    for chunk in chunks:
        if isinstance(chunk, tuple):
            keys.extend(chunk)
        else:
            keys.extend(str(chunk))
    return keys


class SessionFlowTests(unittest.TestCase):
    def test_create_copy_and_paste_across_directories(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            keys = _script(
                ("ALT_n",), "dst", ("ENTER_CR",),
                "n", "a.txt", ("ENTER_CR",),
                "y",
                "/", "ds", ("ENTER_CR",),
                "l",
                "p", "y", ("ENTER_CR",),
                ":", "q", ("ENTER_CR",),
            )
            key_iter = iter(keys)
            dispatcher = CommandDispatcher.open_directory(root, build_key_registry())
            terminal = _RecordingTerminal()

            with mock.patch(
                "lazydir.runtime.loop.shutil.get_terminal_size",
                return_value=mock.Mock(columns=60, lines=12),
            ):
                final = run_main_loop(
                    dispatcher,
                    terminal,
                    0,
                    no_color=True,
                    read_key_fn=lambda _fd, _timeout: next(key_iter),
                )

            self.assertEqual(final, root / "dst")
            self.assertTrue((root / "a.txt").is_file())
            self.assertTrue((root / "dst" / "a.txt").is_file())
            self.assertFalse(dispatcher.state.clipboard.is_empty)
            self.assertTrue(any("Pasted a.txt" in frame for frame in terminal.frames))


if __name__ == "__main__":
    unittest.main()
