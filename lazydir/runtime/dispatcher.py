"""Command dispatch: applies mode-machine effects to application state.

One keystroke is handled to completion per ``handle_key`` call: the mode
machine resolves it, the resulting effect runs (possibly touching the
filesystem or spawning a child process), and the listing is re-read
whenever the directory or its contents may have changed.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from dataclasses import replace
from pathlib import Path

from ..dir_model import (
    CURRENT_DIR_NAME,
    PARENT_DIR_NAME,
    DirEntry,
    DirectoryCursor,
    EntryKind,
    LocalFileSystem,
    list_directory_entries,
    name_prefix_predicate,
)
from ..errors import Cancelled, FileOpError, InvalidName, NotFound
from ..fileops import SafeFileOps
from ..input.commands import (
    ChangeHistory,
    Command,
    CreateContent,
    CursorMovement,
    External,
    HistoryDirection,
    ModifySelected,
    MoveCursor,
    NavigateSelected,
    OpenPrompt,
    PasteClipboard,
    RepeatSearch,
    Sequence,
    ToClipboard,
)
from ..input.key_registry import KeyComboRegistry
from ..input.modes import ColonMode, InputCommand, InputMode, NavigationMode, StatusMessage
from ..input.transitions import (
    CancelSearch,
    ChangeDirectory,
    ClearSearch,
    CommitSearch,
    Effect,
    LiveSearch,
    Quit,
    RunCommand,
    RunShell,
    ShowClipboard,
    SubmitInput,
    UnknownCommand,
    transition,
)
from ..preview import render_preview
from .clipboard import ClipMode
from .config import DEFAULT_PAGER, DEFAULT_STYLE
from .external import ExternalRunner
from .history import DirectoryHistory
from .state import AppState

logger = logging.getLogger(__name__)

ListEntries = Callable[[Path, bool], list[DirEntry]]


def _list_local(directory: Path, show_hidden: bool) -> list[DirEntry]:
    return list_directory_entries(directory, show_hidden=show_hidden)


def _os_error_text(name: str, exc: OSError) -> str:
    reason = exc.strerror or str(exc)
    return f"{name}: {reason}" if name else reason


class CommandDispatcher:
    """Owns the application state and applies commands to it."""

    def __init__(
        self,
        state: AppState,
        registry: KeyComboRegistry,
        file_ops: SafeFileOps | None = None,
        runner: ExternalRunner | None = None,
        list_entries: ListEntries | None = None,
        pager: str = DEFAULT_PAGER,
        style: str = DEFAULT_STYLE,
        no_color: bool = False,
    ) -> None:
        self.state = state
        self.registry = registry
        self.file_ops = file_ops if file_ops is not None else SafeFileOps()
        self.runner = runner if runner is not None else ExternalRunner()
        self.list_entries = list_entries if list_entries is not None else _list_local
        self.pager = pager
        self.style = style
        self.no_color = no_color

    @classmethod
    def open_directory(cls, directory: Path, registry: KeyComboRegistry, **kwargs) -> CommandDispatcher:
        """Build state for ``directory``; raises ``OSError`` when it cannot be listed."""
        directory = Path(os.path.normpath(directory))
        show_hidden = kwargs.pop("show_hidden", True)
        wrap_search = kwargs.pop("wrap_search", True)
        list_entries = kwargs.get("list_entries") or _list_local
        entries = list_entries(directory, show_hidden)
        state = AppState(
            cursor=DirectoryCursor.from_entries(entries),
            history=DirectoryHistory(directory),
            show_hidden=show_hidden,
            wrap_search=wrap_search,
        )
        return cls(state, registry, **kwargs)

    # -- status -----------------------------------------------------------

    def set_status(self, status: StatusMessage) -> None:
        """Set the navigation status; ignored while a prompt is open."""
        if isinstance(self.state.mode, NavigationMode):
            self.state.mode = replace(self.state.mode, status=status)

    def clear_status(self) -> None:
        self.set_status(StatusMessage())

    def report(self, exc: Exception) -> None:
        if isinstance(exc, FileOpError):
            text = exc.describe()
        elif isinstance(exc, OSError):
            text = _os_error_text(Path(exc.filename).name if exc.filename else "", exc)
        else:
            text = str(exc)
        logger.info("reporting error: %s", text)
        self.set_status(StatusMessage.error(text))

    # -- refresh ----------------------------------------------------------

    def refresh(self, desired_focus_name: str | None = None) -> None:
        """Re-list the current directory and rebuild the cursor around focus.

        If the directory itself has disappeared, the nearest listable
        ancestor becomes current.
        """
        directory = self.state.history.current
        while True:
            try:
                entries = self.list_entries(directory, self.state.show_hidden)
                break
            except OSError as exc:
                parent = directory.parent
                if parent == directory:
                    raise
                logger.info("cannot list %s (%s); moving to %s", directory, exc, parent)
                desired_focus_name = None
                directory = parent
        if directory != self.state.history.current:
            self.state.history.leave_to_parent(directory)
            self.set_status(StatusMessage.error(f"Directory vanished; moved to {directory}"))
        self.state.cursor = self.state.cursor.rebuild_from(entries, desired_focus_name)
        self.state.dirty = True

    def _list_or_report(self, directory: Path) -> list[DirEntry] | None:
        try:
            return self.list_entries(directory, self.state.show_hidden)
        except OSError as exc:
            self.report(exc)
            return None

    def _enter_directory(self, directory: Path, focus_name: str | None = None) -> bool:
        """Show ``directory`` with a fresh cursor; returns ``False`` if unreadable."""
        entries = self._list_or_report(directory)
        if entries is None:
            return False
        self._show_entries(entries, focus_name)
        return True

    def _show_entries(self, entries: list[DirEntry], focus_name: str | None) -> None:
        cursor = None
        if focus_name is not None:
            cursor = DirectoryCursor.focused_on_name(entries, focus_name)
        self.state.cursor = cursor if cursor is not None else DirectoryCursor.from_entries(entries)
        self.state.dirty = True

    # -- keys and effects -------------------------------------------------

    def handle_key(self, key: str) -> bool:
        """Process one key to completion; returns ``True`` when the app should quit."""
        outcome = transition(self.state.mode, key, self.registry)
        self.state.mode = outcome.mode
        self.state.dirty = True
        if outcome.effect is None:
            return False
        return self.apply_effect(outcome.effect)

    def apply_effect(self, effect: Effect) -> bool:
        if isinstance(effect, Quit):
            return True
        if isinstance(effect, RunCommand):
            self.run_command(effect.command)
        elif isinstance(effect, LiveSearch):
            self._live_search(effect.query, effect.origin)
        elif isinstance(effect, CommitSearch):
            self._commit_search(effect.query, effect.origin)
        elif isinstance(effect, ClearSearch):
            self.state.search_query = ""
            self.clear_status()
        elif isinstance(effect, CancelSearch):
            if effect.origin is not None:
                self.state.cursor = effect.origin
            self.clear_status()
        elif isinstance(effect, RunShell):
            result = self.runner.run_shell(effect.command, self.state.current_directory)
            self._refresh_after_external(result.describe(effect.command), result.ok)
        elif isinstance(effect, ShowClipboard):
            self.set_status(StatusMessage(self.state.clipboard.describe()))
        elif isinstance(effect, ChangeDirectory):
            self.change_directory(effect.target)
        elif isinstance(effect, UnknownCommand):
            self.set_status(StatusMessage.error(f"Not a command: {effect.text}"))
        elif isinstance(effect, SubmitInput):
            self.submit_input(effect.command, effect.response)
        return False

    def run_command(self, command: Command) -> None:
        if isinstance(command, MoveCursor):
            self.move_cursor(command.movement)
        elif isinstance(command, ToClipboard):
            self.selected_to_clipboard(command.mode)
        elif isinstance(command, ChangeHistory):
            self.change_history(command.direction)
        elif isinstance(command, RepeatSearch):
            self.repeat_search()
        elif isinstance(command, NavigateSelected):
            self.navigate_selected()
        elif isinstance(command, CreateContent):
            if command.kind is EntryKind.DIRECTORY:
                self.state.mode = InputMode(InputCommand.CREATE_DIRECTORY)
            else:
                self.state.mode = InputMode(InputCommand.CREATE_FILE)
        elif isinstance(command, ModifySelected):
            self.modify_selected(command.command)
        elif isinstance(command, PasteClipboard):
            self.paste_clipboard()
        elif isinstance(command, Sequence):
            for step in command.steps:
                self.run_command(step)
            if command.then is not None:
                self.run_command(command.then)
        elif isinstance(command, External):
            self.run_on_selected(command.program)
        elif isinstance(command, OpenPrompt):
            origin = self.state.cursor if command.prefix == "/" else None
            self.state.mode = ColonMode(command.prefix, origin)

    # -- navigation-mode commands -----------------------------------------

    def move_cursor(self, movement: CursorMovement) -> None:
        cursor = self.state.cursor
        if movement is CursorMovement.UP:
            moved = cursor.select_prev()
        elif movement is CursorMovement.DOWN:
            moved = cursor.select_next()
        elif movement is CursorMovement.TOP:
            moved = cursor.select_first()
        else:
            moved = cursor.select_last()
        if moved is not None:
            self.state.cursor = moved
        self.clear_status()

    def selected_to_clipboard(self, mode: ClipMode) -> None:
        focus = self.state.cursor.focus
        try:
            self.state.clipboard.put(self.state.current_directory, focus, mode)
        except InvalidName as exc:
            self.set_status(StatusMessage.error(f"Only files can be copied: {exc.name}"))
            return
        verb = "Cut" if mode is ClipMode.MOVE else "Copied"
        self.set_status(StatusMessage.success(f"{verb} {focus.name}"))

    def change_history(self, direction: HistoryDirection) -> None:
        history = self.state.history
        departed = history.current
        if direction is HistoryDirection.UNDO:
            pending, step = history.undo_stack, history.undo
        else:
            pending, step = history.redo_stack, history.redo
        is_dir = self.file_ops.fs.is_dir

        # List the target first; a listing error must leave both stacks
        # and the current directory where they were.
        entries = None
        if pending and is_dir(pending[-1]):
            entries = self._list_or_report(pending[-1])
            if entries is None:
                return
        try:
            target = step(is_dir)
        except NotFound as exc:
            self.set_status(StatusMessage.error(f"History cleared: {exc.name} no longer exists"))
            return
        if target is None or entries is None:
            label = "undo" if direction is HistoryDirection.UNDO else "redo"
            self.set_status(StatusMessage(f"Nothing to {label}"))
            return
        focus_name = departed.name if departed.parent == target else None
        self._show_entries(entries, focus_name)
        self.clear_status()

    def _search_predicate(self):
        return name_prefix_predicate(self.state.search_query)

    def repeat_search(self) -> None:
        query = self.state.search_query
        if not query:
            self.clear_status()
            return
        cursor = self.state.cursor
        if self.state.wrap_search:
            match = cursor.circular_search(self._search_predicate())
        else:
            match = cursor.search_forward(self._search_predicate())
        if match is None:
            self.set_status(StatusMessage.error(f"Pattern not found: {query}"))
            return
        self.state.cursor = match
        self.set_status(StatusMessage(f"/{query}"))

    def navigate_selected(self) -> None:
        focus = self.state.cursor.focus
        current = self.state.current_directory
        if not focus.is_dir:
            self.preview_selected()
            return
        if focus.name == CURRENT_DIR_NAME:
            self.refresh(CURRENT_DIR_NAME)
            self.clear_status()
            return
        if focus.name == PARENT_DIR_NAME:
            parent = current.parent
            if parent == current:
                self.refresh(PARENT_DIR_NAME)
                return
            if self._enter_directory(parent, current.name):
                self.state.history.leave_to_parent(parent)
                self.clear_status()
            return
        target = current / focus.name
        if self._enter_directory(target):
            self.state.history.visit(target)
            self.clear_status()

    def change_directory(self, target: str) -> None:
        path = Path(os.path.expanduser(target))
        if not path.is_absolute():
            path = self.state.current_directory / path
        path = Path(os.path.normpath(path))
        if not self.file_ops.fs.is_dir(path):
            self.set_status(StatusMessage.error(NotFound(target).describe()))
            return
        if self._enter_directory(path):
            self.state.history.visit(path)
            self.clear_status()

    def modify_selected(self, command: InputCommand) -> None:
        focus = self.state.cursor.focus
        if focus.is_anchor:
            self.set_status(StatusMessage.error(InvalidName(focus.name).describe()))
            return
        self.state.mode = InputMode(command)

    def paste_clipboard(self) -> None:
        if self.state.clipboard.is_empty:
            self.set_status(StatusMessage(self.state.clipboard.describe()))
            return
        self.state.mode = InputMode(InputCommand.PASTE)

    # -- external programs ------------------------------------------------

    def _refresh_after_external(self, message: str, ok: bool) -> None:
        self.refresh(self.state.cursor.focus.name)
        self.set_status(StatusMessage(message) if ok else StatusMessage.error(message))

    def run_on_selected(self, program: str) -> None:
        expanded = os.path.expandvars(program).strip()
        if not expanded or expanded.startswith("$"):
            self.set_status(StatusMessage.error(f"Nothing to run: {program} is not set"))
            return
        result = self.runner.run_program(expanded, self.state.focused_path, self.state.current_directory)
        self._refresh_after_external(result.describe(expanded), result.ok)

    def preview_selected(self) -> None:
        path = self.state.focused_path
        try:
            text = render_preview(path, self.style, self.no_color)
        except OSError as exc:
            self.report(exc)
            return
        result = self.runner.page_text(text, self.pager, self.state.current_directory)
        self.refresh(self.state.cursor.focus.name)
        if result.ok:
            self.clear_status()
        else:
            self.set_status(StatusMessage.error(result.describe("pager")))

    # -- search -----------------------------------------------------------

    def _live_search(self, query: str, origin: DirectoryCursor | None) -> None:
        if origin is None:
            return
        if not query:
            self.state.cursor = origin
            return
        match = origin.circular_search(name_prefix_predicate(query))
        self.state.cursor = match if match is not None else origin

    def _commit_search(self, query: str, origin: DirectoryCursor | None) -> None:
        base = origin if origin is not None else self.state.cursor
        self.state.search_query = query.lower()
        match = base.circular_search(self._search_predicate())
        if match is None:
            self.state.cursor = base
            self.set_status(StatusMessage.error(f"Pattern not found: {query}"))
            return
        self.state.cursor = match
        self.set_status(StatusMessage(f"/{self.state.search_query}"))

    # -- input submission -------------------------------------------------

    def submit_input(self, command: InputCommand, response: str) -> None:
        """Carry out a submitted prompt, then refresh and report the outcome."""
        focus = self.state.cursor.focus
        if command is InputCommand.REMOVE and focus.is_anchor:
            return

        desired_focus = focus.name
        try:
            if command in (InputCommand.CREATE_FILE, InputCommand.CREATE_DIRECTORY):
                kind = EntryKind.DIRECTORY if command is InputCommand.CREATE_DIRECTORY else EntryKind.FILE
                self.file_ops.create(self.state.current_directory, DirEntry(response, kind))
                desired_focus = response
                status = StatusMessage.success(f"Created {kind.value} {response}")
            elif command is InputCommand.REMOVE:
                if response != "y":
                    raise Cancelled()
                self.file_ops.remove(self.state.current_directory, focus)
                status = StatusMessage.success(f"Removed {focus.name}")
            elif command is InputCommand.RENAME:
                self.file_ops.rename(self.state.current_directory, focus, response)
                desired_focus = response
                status = StatusMessage.success(f"Renamed {focus.name} to {response}")
            else:
                desired_focus, status = self._paste(response)
        except (FileOpError, OSError) as exc:
            self.refresh(desired_focus)
            self.report(exc)
            return
        self.refresh(desired_focus)
        self.set_status(status)

    def _paste(self, response: str) -> tuple[str, StatusMessage]:
        clipboard = self.state.clipboard
        if response != "y":
            raise Cancelled()
        source = clipboard.content
        if source is None:
            raise NotFound()
        destination = self.state.current_directory / source.name
        if clipboard.mode is ClipMode.MOVE:
            self.file_ops.move(destination, source)
            verb = "Moved"
        else:
            self.file_ops.copy(destination, source)
            verb = "Pasted"
        clipboard.after_paste()
        return source.name, StatusMessage.success(f"{verb} {source.name}")


__all__ = [
    "CommandDispatcher",
    "ListEntries",
]
