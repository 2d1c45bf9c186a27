"""Command taxonomy produced by key bindings and consumed by the dispatcher.

Commands are plain immutable values. ``NoInput`` commands act immediately,
``WithInput`` commands open an input prompt, a ``Sequence`` chains several
immediate commands before an optional prompt, and ``External`` runs a
program on the focused entry.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ..dir_model import EntryKind
from ..runtime.clipboard import ClipMode
from .modes import InputCommand


class CursorMovement(Enum):
    UP = "up"
    DOWN = "down"
    TOP = "top"
    BOTTOM = "bottom"


class HistoryDirection(Enum):
    UNDO = "undo"
    REDO = "redo"


@dataclass(frozen=True)
class MoveCursor:
    movement: CursorMovement


@dataclass(frozen=True)
class ToClipboard:
    mode: ClipMode


@dataclass(frozen=True)
class ChangeHistory:
    direction: HistoryDirection


@dataclass(frozen=True)
class RepeatSearch:
    pass


@dataclass(frozen=True)
class NavigateSelected:
    pass


@dataclass(frozen=True)
class CreateContent:
    kind: EntryKind


@dataclass(frozen=True)
class ModifySelected:
    command: InputCommand

    def __post_init__(self) -> None:
        if self.command not in (InputCommand.REMOVE, InputCommand.RENAME):
            raise ValueError(f"cannot modify selection with {self.command}")


@dataclass(frozen=True)
class PasteClipboard:
    pass


NoInputCommand = MoveCursor | ToClipboard | ChangeHistory | RepeatSearch | NavigateSelected
WithInputCommand = CreateContent | ModifySelected | PasteClipboard


@dataclass(frozen=True)
class Sequence:
    """Immediate commands run in order, then an optional prompting command."""

    steps: tuple[NoInputCommand, ...]
    then: WithInputCommand | None = None


@dataclass(frozen=True)
class External:
    """Run ``program`` with the focused entry's path as its only argument."""

    program: str


@dataclass(frozen=True)
class OpenPrompt:
    """Enter colon mode with ``prefix`` (``":"`` or ``"/"``) already typed."""

    prefix: str


Command = NoInputCommand | WithInputCommand | Sequence | External | OpenPrompt


__all__ = [
    "ChangeHistory",
    "Command",
    "CreateContent",
    "CursorMovement",
    "External",
    "HistoryDirection",
    "ModifySelected",
    "MoveCursor",
    "NavigateSelected",
    "NoInputCommand",
    "OpenPrompt",
    "PasteClipboard",
    "RepeatSearch",
    "Sequence",
    "ToClipboard",
    "WithInputCommand",
]
