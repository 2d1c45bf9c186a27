"""Input modes that decide how a keystroke is interpreted.

Exactly one mode is active at a time. Modes are immutable values; the
transition functions in ``transitions`` return the next mode instead of
editing the current one.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ..dir_model import DirectoryCursor


class StatusLevel(Enum):
    INFO = "info"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class StatusMessage:
    """Status bar text; the empty info message shows the current directory."""

    text: str = ""
    level: StatusLevel = StatusLevel.INFO

    @classmethod
    def success(cls, text: str) -> StatusMessage:
        return cls(text, StatusLevel.SUCCESS)

    @classmethod
    def error(cls, text: str) -> StatusMessage:
        return cls(text, StatusLevel.ERROR)

    @property
    def is_indicator(self) -> bool:
        return not self.text


class InputCommand(Enum):
    CREATE_FILE = "create_file"
    CREATE_DIRECTORY = "create_directory"
    REMOVE = "remove"
    RENAME = "rename"
    PASTE = "paste"


INPUT_PROMPTS: dict[InputCommand, str] = {
    InputCommand.CREATE_FILE: "File name: ",
    InputCommand.CREATE_DIRECTORY: "Directory name: ",
    InputCommand.REMOVE: "Confirm (y/n): ",
    InputCommand.RENAME: "New name: ",
    InputCommand.PASTE: "Confirm (y/n): ",
}


@dataclass(frozen=True)
class NavigationMode:
    """Normal browsing. ``pending`` holds a partially typed multi-key binding."""

    status: StatusMessage = StatusMessage()
    pending: tuple[str, ...] = ()


@dataclass(frozen=True)
class ColonMode:
    """Prompt line opened with ``:`` or ``/``; ``buffer`` keeps that prefix.

    ``origin`` is the cursor when a ``/`` search was opened so every edit of
    the query searches from the same place.
    """

    buffer: str
    origin: DirectoryCursor | None = None

    @property
    def is_search(self) -> bool:
        return self.buffer.startswith("/")


@dataclass(frozen=True)
class InputMode:
    """Free-text answer for a command that needs a name or a confirmation."""

    command: InputCommand
    response: str = ""

    @property
    def prompt(self) -> str:
        return INPUT_PROMPTS[self.command]


Mode = NavigationMode | ColonMode | InputMode


__all__ = [
    "INPUT_PROMPTS",
    "ColonMode",
    "InputCommand",
    "InputMode",
    "Mode",
    "NavigationMode",
    "StatusLevel",
    "StatusMessage",
]
