"""Default key bindings and the text format used to override them.

A binding is written as ``key -> action`` where ``key`` is a key token
(``"j"``, ``"ENTER_CR"``, ``"ALT_n"``) or a run of characters for multi-key
combos (``"gg"``), and ``action`` is an action name, ``run:<program>``, or a
comma-separated chain such as ``"move_top,rename"``.
"""

from __future__ import annotations

from collections.abc import Mapping

from ..dir_model import EntryKind
from ..runtime.clipboard import ClipMode
from .commands import (
    ChangeHistory,
    Command,
    CreateContent,
    CursorMovement,
    External,
    HistoryDirection,
    ModifySelected,
    MoveCursor,
    NavigateSelected,
    NoInputCommand,
    OpenPrompt,
    PasteClipboard,
    RepeatSearch,
    Sequence,
    ToClipboard,
    WithInputCommand,
)
from .key_registry import KeyCombo, KeyComboBinding, KeyComboRegistry
from .modes import InputCommand

RUN_PREFIX = "run:"

NAMED_KEYS = frozenset(
    {
        "UP",
        "DOWN",
        "LEFT",
        "RIGHT",
        "HOME",
        "END",
        "PAGE_UP",
        "PAGE_DOWN",
        "DELETE",
        "INSERT",
        "TAB",
        "ESC",
        "BACKSPACE",
        "ENTER_CR",
        "ENTER_LF",
    }
)

NO_INPUT_ACTIONS: dict[str, NoInputCommand] = {
    "move_up": MoveCursor(CursorMovement.UP),
    "move_down": MoveCursor(CursorMovement.DOWN),
    "move_top": MoveCursor(CursorMovement.TOP),
    "move_bottom": MoveCursor(CursorMovement.BOTTOM),
    "copy": ToClipboard(ClipMode.REPLICATE),
    "cut": ToClipboard(ClipMode.MOVE),
    "undo": ChangeHistory(HistoryDirection.UNDO),
    "redo": ChangeHistory(HistoryDirection.REDO),
    "search_next": RepeatSearch(),
    "navigate": NavigateSelected(),
}

WITH_INPUT_ACTIONS: dict[str, WithInputCommand] = {
    "create_file": CreateContent(EntryKind.FILE),
    "create_directory": CreateContent(EntryKind.DIRECTORY),
    "remove": ModifySelected(InputCommand.REMOVE),
    "rename": ModifySelected(InputCommand.RENAME),
    "paste": PasteClipboard(),
}

PROMPT_ACTIONS: dict[str, OpenPrompt] = {
    "command": OpenPrompt(":"),
    "search": OpenPrompt("/"),
}

DEFAULT_KEYBINDINGS: dict[str, str] = {
    "j": "move_down",
    "DOWN": "move_down",
    "k": "move_up",
    "UP": "move_up",
    "gg": "move_top",
    "HOME": "move_top",
    "G": "move_bottom",
    "END": "move_bottom",
    "l": "navigate",
    "RIGHT": "navigate",
    "ENTER_CR": "navigate",
    "ENTER_LF": "navigate",
    "h": "move_top,move_down,navigate",
    "LEFT": "move_top,move_down,navigate",
    "y": "copy",
    "x": "cut",
    "p": "paste",
    "u": "undo",
    "U": "redo",
    "CTRL_R": "redo",
    "n": "create_file",
    "ALT_n": "create_directory",
    "d": "remove",
    "r": "rename",
    "N": "search_next",
    ":": "command",
    "/": "search",
    "e": "run:$EDITOR",
}


def is_named_key(token: str) -> bool:
    return token in NAMED_KEYS or token.startswith(("ALT_", "CTRL_", "SHIFT_"))


def parse_key_combo(text: str) -> KeyCombo:
    """Split a configured key string into key tokens.

    Space-separated strings are split on spaces, named keys stay whole, and
    anything else is read one character per key.
    """
    if not text:
        return ()
    if " " in text.strip():
        return tuple(text.split())
    if is_named_key(text):
        return (text,)
    return tuple(text)


def format_key_combo(combo: KeyCombo) -> str:
    if any(is_named_key(token) for token in combo) and len(combo) > 1:
        return " ".join(combo)
    return "".join(combo)


def _parse_single_action(name: str) -> Command | None:
    name = name.strip()
    if name.startswith(RUN_PREFIX):
        program = name[len(RUN_PREFIX) :].strip()
        return External(program) if program else None
    if name in NO_INPUT_ACTIONS:
        return NO_INPUT_ACTIONS[name]
    if name in WITH_INPUT_ACTIONS:
        return WITH_INPUT_ACTIONS[name]
    return PROMPT_ACTIONS.get(name)


def parse_binding(text: str) -> Command | None:
    """Parse an action string into a command, or ``None`` when it is invalid.

    In a chain, every action but the last must act immediately; the last may
    also open an input prompt.
    """
    if not isinstance(text, str) or not text.strip():
        return None
    if text.strip().startswith(RUN_PREFIX):
        return _parse_single_action(text)
    parts = [part.strip() for part in text.split(",")]
    if len(parts) == 1:
        return _parse_single_action(parts[0])

    steps: list[NoInputCommand] = []
    for part in parts[:-1]:
        command = NO_INPUT_ACTIONS.get(part)
        if command is None:
            return None
        steps.append(command)
    last = parts[-1]
    if last in NO_INPUT_ACTIONS:
        return Sequence(tuple(steps) + (NO_INPUT_ACTIONS[last],))
    if last in WITH_INPUT_ACTIONS:
        return Sequence(tuple(steps), WITH_INPUT_ACTIONS[last])
    return None


def format_binding(command: Command) -> str:
    """Render a command back into its action string."""
    if isinstance(command, External):
        return f"{RUN_PREFIX}{command.program}"
    if isinstance(command, Sequence):
        chain = [format_binding(step) for step in command.steps]
        if command.then is not None:
            chain.append(format_binding(command.then))
        return ",".join(chain)
    for table in (NO_INPUT_ACTIONS, WITH_INPUT_ACTIONS, PROMPT_ACTIONS):
        for name, candidate in table.items():
            if candidate == command:
                return name
    return repr(command)


def build_key_registry(overrides: Mapping[str, object] | None = None) -> KeyComboRegistry:
    """Build the registry from defaults merged with configured overrides.

    Overrides with an unparsable key or action are skipped.
    """
    merged: dict[str, object] = dict(DEFAULT_KEYBINDINGS)
    if overrides:
        merged.update(overrides)

    registry = KeyComboRegistry()
    for key_text, action_text in merged.items():
        if not isinstance(key_text, str) or not isinstance(action_text, str):
            continue
        combo = parse_key_combo(key_text)
        command = parse_binding(action_text)
        if not combo or command is None:
            continue
        registry.register_binding(KeyComboBinding(combos=(combo,), command=command))
    return registry


__all__ = [
    "DEFAULT_KEYBINDINGS",
    "NAMED_KEYS",
    "build_key_registry",
    "format_binding",
    "format_key_combo",
    "is_named_key",
    "parse_binding",
    "parse_key_combo",
]
