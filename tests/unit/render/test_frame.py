"""Tests for frame composition of the directory view."""

from __future__ import annotations

import unittest
from pathlib import Path

from lazydir.ansi import display_width
from lazydir.dir_model import DirEntry, DirectoryCursor, EntryKind
from lazydir.input import ColonMode, InputCommand, InputMode, NavigationMode, StatusLevel, StatusMessage
from lazydir.render import NAVIGATION_LABEL, build_frame, format_entry, prompt_text, scroll_start, status_text
from lazydir.runtime.history import DirectoryHistory
from lazydir.runtime.state import AppState


def _state(names: list[str], offset: int = 0, mode=None) -> AppState:
    entries = [
        DirEntry(name, EntryKind.DIRECTORY if name in {".", ".."} or name.endswith("_dir") else EntryKind.FILE)
        for name in names
    ]
    return AppState(
        cursor=DirectoryCursor.focused_at_offset(entries, offset),
        history=DirectoryHistory(Path("/home/user")),
        mode=mode if mode is not None else NavigationMode(),
    )


class ScrollStartTests(unittest.TestCase):
    def test_window_follows_focus(self) -> None:
        self.assertEqual(scroll_start(0, 0, 5, 20), 0)
        self.assertEqual(scroll_start(7, 0, 5, 20), 3)
        self.assertEqual(scroll_start(2, 3, 5, 20), 2)

    def test_window_never_runs_past_end(self) -> None:
        self.assertEqual(scroll_start(19, 18, 5, 20), 15)
        self.assertEqual(scroll_start(1, 4, 5, 3), 0)


class StatusAndPromptTests(unittest.TestCase):
    def test_indicator_shows_current_directory(self) -> None:
        self.assertEqual(status_text(_state([".", ".."])), ("/home/user", StatusLevel.INFO))

    def test_status_message_wins_over_path(self) -> None:
        state = _state([".", ".."], mode=NavigationMode(status=StatusMessage.error("boom")))
        self.assertEqual(status_text(state), ("boom", StatusLevel.ERROR))

    def test_remove_prompt_names_the_entry(self) -> None:
        state = _state([".", "..", "notes.txt"], offset=2, mode=InputMode(InputCommand.REMOVE))
        self.assertEqual(
            status_text(state),
            ("Are you sure you want to remove the file notes.txt?", StatusLevel.INFO),
        )
        self.assertEqual(prompt_text(state), "Confirm (y/n): ")

    def test_prompt_row_per_mode(self) -> None:
        self.assertEqual(prompt_text(_state(["."])), NAVIGATION_LABEL)
        self.assertEqual(prompt_text(_state(["."], mode=NavigationMode(pending=("g",)))), NAVIGATION_LABEL + " g")
        self.assertEqual(prompt_text(_state(["."], mode=ColonMode(":run ls"))), ":run ls")
        self.assertEqual(prompt_text(_state(["."], mode=InputMode(InputCommand.RENAME, "b"))), "New name: b")


class BuildFrameTests(unittest.TestCase):
    def test_frame_fills_height_and_width(self) -> None:
        state = _state([".", "..", "a_dir", "b.txt"], offset=2)
        frame = build_frame(state, width=30, height=10, no_color=True)
        self.assertEqual(len(frame.lines), 10)
        self.assertIn("a_dir/", frame.lines[3])
        self.assertIsNone(frame.cursor_row)
        for line in frame.lines[:-2]:
            self.assertLessEqual(display_width(line), 30)

    def test_focused_row_is_highlighted_even_without_colour(self) -> None:
        row = format_entry(DirEntry("x", EntryKind.FILE), focused=True, width=10, no_color=True)
        self.assertTrue(row.startswith("\033[7m"))
        self.assertEqual(display_width(row), 10)

    def test_anchors_have_no_trailing_slash(self) -> None:
        row = format_entry(DirEntry("..", EntryKind.DIRECTORY), focused=False, width=6, no_color=True)
        self.assertEqual(row, " ..   ")

    def test_control_characters_in_names_stay_on_one_row(self) -> None:
        name = "evil\x1b[2J\nname"
        row = format_entry(DirEntry(name, EntryKind.FILE), focused=False, width=40, no_color=True)
        self.assertEqual(row, " evil\\x1b[2J\\x0aname".ljust(40))

        state = _state([".", "..", name], offset=2, mode=InputMode(InputCommand.RENAME, "x\ty"))
        frame = build_frame(state, width=40, height=6, no_color=True)
        self.assertEqual(len(frame.lines), 6)
        for line in frame.lines:
            self.assertNotIn("\n", line)
            self.assertLessEqual(display_width(line), 40)
        self.assertEqual(frame.lines[-2], "Rename evil\\x1b[2J\\x0aname to:")
        self.assertEqual(frame.lines[-1], "New name: x\\x09y")

    def test_scrolls_to_keep_focus_visible(self) -> None:
        names = [".", ".."] + [f"f{index:02d}" for index in range(30)]
        state = _state(names, offset=25)
        frame = build_frame(state, width=20, height=8, no_color=True)
        listing = frame.lines[1:-2]
        self.assertEqual(len(listing), 5)
        self.assertTrue(any("f23" in line for line in listing))
        self.assertEqual(state.list_start, 21)

    def test_prompt_modes_place_cursor_on_last_row(self) -> None:
        state = _state([".", ".."], mode=ColonMode("/ab"))
        frame = build_frame(state, width=40, height=6, no_color=True)
        self.assertEqual(frame.cursor_row, 5)
        self.assertEqual(frame.cursor_col, 3)
        self.assertIn("\033[6;4H", frame.to_ansi())


if __name__ == "__main__":
    unittest.main()
