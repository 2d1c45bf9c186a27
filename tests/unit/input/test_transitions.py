"""Tests for the navigation / colon / input mode state machine."""

from __future__ import annotations

import unittest

from lazydir.dir_model import DirEntry, DirectoryCursor, EntryKind
from lazydir.input import ColonMode, InputCommand, InputMode, NavigationMode, StatusMessage, build_key_registry
from lazydir.input.commands import CursorMovement, MoveCursor, OpenPrompt
from lazydir.input.transitions import (
    CancelSearch,
    ChangeDirectory,
    ClearSearch,
    CommitSearch,
    LiveSearch,
    Quit,
    RunCommand,
    RunShell,
    ShowClipboard,
    SubmitInput,
    UnknownCommand,
    parse_meta_command,
    transition,
)

ORIGIN = DirectoryCursor.from_entries([DirEntry(".", EntryKind.DIRECTORY), DirEntry("..", EntryKind.DIRECTORY)])


class NavigationTransitionTests(unittest.TestCase):
    def setUp(self) -> None:
        self.registry = build_key_registry()

    def test_bound_key_runs_command_and_keeps_status(self) -> None:
        status = StatusMessage.success("Created file a")
        outcome = transition(NavigationMode(status=status), "j", self.registry)
        self.assertEqual(outcome.mode, NavigationMode(status=status))
        self.assertEqual(outcome.effect, RunCommand(MoveCursor(CursorMovement.DOWN)))

    def test_multi_key_combo_waits_for_second_key(self) -> None:
        first = transition(NavigationMode(), "g", self.registry)
        self.assertEqual(first.mode, NavigationMode(pending=("g",)))
        self.assertIsNone(first.effect)

        second = transition(first.mode, "g", self.registry)
        self.assertEqual(second.mode, NavigationMode())
        self.assertEqual(second.effect, RunCommand(MoveCursor(CursorMovement.TOP)))

    def test_abandoned_prefix_reads_new_key_alone(self) -> None:
        outcome = transition(NavigationMode(pending=("g",)), "j", self.registry)
        self.assertEqual(outcome.mode, NavigationMode())
        self.assertEqual(outcome.effect, RunCommand(MoveCursor(CursorMovement.DOWN)))

    def test_unbound_key_is_a_no_op(self) -> None:
        mode = NavigationMode()
        outcome = transition(mode, "ESC", self.registry)
        self.assertIs(outcome.mode, mode)
        self.assertIsNone(outcome.effect)

    def test_prompt_keys_produce_open_prompt(self) -> None:
        self.assertEqual(transition(NavigationMode(), ":", self.registry).effect, RunCommand(OpenPrompt(":")))
        self.assertEqual(transition(NavigationMode(), "/", self.registry).effect, RunCommand(OpenPrompt("/")))


class ColonTransitionTests(unittest.TestCase):
    def setUp(self) -> None:
        self.registry = build_key_registry()

    def test_typing_in_search_emits_live_search_from_origin(self) -> None:
        outcome = transition(ColonMode("/", ORIGIN), "d", self.registry)
        self.assertEqual(outcome.mode, ColonMode("/d", ORIGIN))
        self.assertEqual(outcome.effect, LiveSearch("d", ORIGIN))

    def test_typing_in_command_prompt_only_edits(self) -> None:
        outcome = transition(ColonMode(":"), "q", self.registry)
        self.assertEqual(outcome.mode, ColonMode(":q"))
        self.assertIsNone(outcome.effect)

    def test_backspace_shrinks_then_leaves(self) -> None:
        shrunk = transition(ColonMode("/ab", ORIGIN), "BACKSPACE", self.registry)
        self.assertEqual(shrunk.mode, ColonMode("/a", ORIGIN))
        self.assertEqual(shrunk.effect, LiveSearch("a", ORIGIN))

        left = transition(ColonMode("/", ORIGIN), "BACKSPACE", self.registry)
        self.assertEqual(left.mode, NavigationMode())
        self.assertEqual(left.effect, CancelSearch(ORIGIN))

        left_colon = transition(ColonMode(":"), "BACKSPACE", self.registry)
        self.assertEqual(left_colon.mode, NavigationMode())
        self.assertIsNone(left_colon.effect)

    def test_escape_cancels(self) -> None:
        outcome = transition(ColonMode("/ab", ORIGIN), "ESC", self.registry)
        self.assertEqual(outcome.mode, NavigationMode())
        self.assertEqual(outcome.effect, CancelSearch(ORIGIN))

    def test_enter_resolves_buffer(self) -> None:
        outcome = transition(ColonMode(":q"), "ENTER_CR", self.registry)
        self.assertEqual(outcome.mode, NavigationMode())
        self.assertEqual(outcome.effect, Quit())

    def test_other_named_keys_are_ignored(self) -> None:
        mode = ColonMode(":ru")
        self.assertIs(transition(mode, "UP", self.registry).mode, mode)


class MetaCommandTests(unittest.TestCase):
    def test_meta_commands(self) -> None:
        self.assertEqual(parse_meta_command(":q"), Quit())
        self.assertEqual(parse_meta_command(":quit"), Quit())
        self.assertEqual(parse_meta_command(":clipboard"), ShowClipboard())
        self.assertEqual(parse_meta_command(":run make test"), RunShell("make test"))
        self.assertEqual(parse_meta_command(":cd /tmp"), ChangeDirectory("/tmp"))
        self.assertEqual(parse_meta_command(":cd"), ChangeDirectory("~"))
        self.assertEqual(parse_meta_command(":run"), UnknownCommand(":run"))
        self.assertEqual(parse_meta_command(":wq"), UnknownCommand(":wq"))

    def test_search_buffers(self) -> None:
        self.assertEqual(parse_meta_command("/"), ClearSearch())
        self.assertEqual(parse_meta_command("/abc", ORIGIN), CommitSearch("abc", ORIGIN))


class InputTransitionTests(unittest.TestCase):
    def setUp(self) -> None:
        self.registry = build_key_registry()

    def test_typing_and_backspace(self) -> None:
        mode = InputMode(InputCommand.CREATE_FILE)
        for key in "ab":
            mode = transition(mode, key, self.registry).mode
        mode = transition(mode, "BACKSPACE", self.registry).mode
        self.assertEqual(mode, InputMode(InputCommand.CREATE_FILE, "a"))
        # Bindings do not apply while answering a prompt.
        self.assertEqual(transition(mode, "j", self.registry).mode, InputMode(InputCommand.CREATE_FILE, "aj"))

    def test_backspace_on_empty_response_stays(self) -> None:
        mode = InputMode(InputCommand.RENAME)
        self.assertEqual(transition(mode, "BACKSPACE", self.registry).mode, mode)

    def test_enter_submits(self) -> None:
        outcome = transition(InputMode(InputCommand.REMOVE, "y"), "ENTER_LF", self.registry)
        self.assertEqual(outcome.mode, NavigationMode())
        self.assertEqual(outcome.effect, SubmitInput(InputCommand.REMOVE, "y"))

    def test_escape_cancels_without_effect(self) -> None:
        outcome = transition(InputMode(InputCommand.PASTE, "y"), "ESC", self.registry)
        self.assertEqual(outcome.mode, NavigationMode())
        self.assertIsNone(outcome.effect)

    def test_prompts(self) -> None:
        self.assertEqual(InputMode(InputCommand.CREATE_DIRECTORY).prompt, "Directory name: ")
        self.assertEqual(InputMode(InputCommand.REMOVE).prompt, "Confirm (y/n): ")


if __name__ == "__main__":
    unittest.main()
