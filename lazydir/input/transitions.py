"""Mode state machine: one transition function per input mode.

Each function takes the current mode and one key token and returns an
``Outcome``: the next mode plus an optional effect for the dispatcher to
carry out. The functions never touch the filesystem or application state,
and every (mode, key) pair either transitions or is an explicit no-op.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..dir_model import DirectoryCursor
from .commands import Command
from .key_registry import KeyComboRegistry
from .modes import ColonMode, InputCommand, InputMode, Mode, NavigationMode

BACKSPACE_KEYS = frozenset({"BACKSPACE"})
ENTER_KEYS = frozenset({"ENTER_CR", "ENTER_LF"})
ESCAPE_KEYS = frozenset({"ESC"})


@dataclass(frozen=True)
class RunCommand:
    command: Command


@dataclass(frozen=True)
class LiveSearch:
    """Refocus on the first prefix match for ``query`` counted from ``origin``."""

    query: str
    origin: DirectoryCursor | None


@dataclass(frozen=True)
class CommitSearch:
    query: str
    origin: DirectoryCursor | None


@dataclass(frozen=True)
class ClearSearch:
    pass


@dataclass(frozen=True)
class CancelSearch:
    """Return focus to ``origin`` after an abandoned ``/`` prompt."""

    origin: DirectoryCursor | None


@dataclass(frozen=True)
class Quit:
    pass


@dataclass(frozen=True)
class RunShell:
    command: str


@dataclass(frozen=True)
class ShowClipboard:
    pass


@dataclass(frozen=True)
class ChangeDirectory:
    target: str


@dataclass(frozen=True)
class UnknownCommand:
    text: str


@dataclass(frozen=True)
class SubmitInput:
    command: InputCommand
    response: str


Effect = (
    RunCommand
    | LiveSearch
    | CommitSearch
    | ClearSearch
    | CancelSearch
    | Quit
    | RunShell
    | ShowClipboard
    | ChangeDirectory
    | UnknownCommand
    | SubmitInput
)


@dataclass(frozen=True)
class Outcome:
    mode: Mode
    effect: Effect | None = None


def is_text_key(key: str) -> bool:
    """Return whether ``key`` is one printable character to insert into a buffer."""
    return len(key) == 1 and key.isprintable()


def parse_meta_command(buffer: str, origin: DirectoryCursor | None = None) -> Effect:
    """Resolve a submitted colon-mode buffer into an effect."""
    if buffer.startswith("/"):
        query = buffer[1:]
        if not query:
            return ClearSearch()
        return CommitSearch(query, origin)

    text = buffer[1:].strip() if buffer.startswith(":") else buffer.strip()
    if text in {"q", "quit"}:
        return Quit()
    if text == "clipboard":
        return ShowClipboard()
    name, _, argument = text.partition(" ")
    if name == "run" and argument.strip():
        return RunShell(argument.strip())
    if name == "cd":
        return ChangeDirectory(argument.strip() or "~")
    return UnknownCommand(buffer)


def navigation_key(mode: NavigationMode, key: str, registry: KeyComboRegistry) -> Outcome:
    """Resolve a key against bindings, buffering partial multi-key combos."""
    combo = mode.pending + (key,)
    command = registry.lookup(combo)
    if command is not None:
        return Outcome(NavigationMode(status=mode.status), RunCommand(command))
    if registry.is_prefix(combo):
        return Outcome(NavigationMode(status=mode.status, pending=combo))
    if mode.pending:
        # The partial combo is abandoned; the new key is read on its own.
        return navigation_key(NavigationMode(status=mode.status), key, registry)
    return Outcome(mode)


def colon_key(mode: ColonMode, key: str) -> Outcome:
    """Edit the colon/search prompt, or resolve it on Enter."""
    if is_text_key(key):
        buffer = mode.buffer + key
        next_mode = ColonMode(buffer, mode.origin)
        if mode.is_search:
            return Outcome(next_mode, LiveSearch(buffer[1:], mode.origin))
        return Outcome(next_mode)

    if key in BACKSPACE_KEYS:
        if len(mode.buffer) <= 1:
            return _leave_colon(mode)
        buffer = mode.buffer[:-1]
        next_mode = ColonMode(buffer, mode.origin)
        if mode.is_search:
            return Outcome(next_mode, LiveSearch(buffer[1:], mode.origin))
        return Outcome(next_mode)

    if key in ENTER_KEYS:
        return Outcome(NavigationMode(), parse_meta_command(mode.buffer, mode.origin))

    if key in ESCAPE_KEYS:
        return _leave_colon(mode)

    return Outcome(mode)


def _leave_colon(mode: ColonMode) -> Outcome:
    if mode.is_search:
        return Outcome(NavigationMode(), CancelSearch(mode.origin))
    return Outcome(NavigationMode())


def input_key(mode: InputMode, key: str) -> Outcome:
    """Edit the input response; Enter submits and Escape cancels."""
    if is_text_key(key):
        return Outcome(InputMode(mode.command, mode.response + key))
    if key in BACKSPACE_KEYS:
        return Outcome(InputMode(mode.command, mode.response[:-1]))
    if key in ENTER_KEYS:
        return Outcome(NavigationMode(), SubmitInput(mode.command, mode.response))
    if key in ESCAPE_KEYS:
        return Outcome(NavigationMode())
    return Outcome(mode)


def transition(mode: Mode, key: str, registry: KeyComboRegistry) -> Outcome:
    """Route ``key`` to the transition function of the active mode."""
    if isinstance(mode, ColonMode):
        return colon_key(mode, key)
    if isinstance(mode, InputMode):
        return input_key(mode, key)
    return navigation_key(mode, key, registry)


__all__ = [
    "CancelSearch",
    "ChangeDirectory",
    "ClearSearch",
    "CommitSearch",
    "Effect",
    "LiveSearch",
    "Outcome",
    "Quit",
    "RunCommand",
    "RunShell",
    "ShowClipboard",
    "SubmitInput",
    "UnknownCommand",
    "colon_key",
    "input_key",
    "is_text_key",
    "navigation_key",
    "parse_meta_command",
    "transition",
]
