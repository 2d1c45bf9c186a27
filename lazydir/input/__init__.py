"""Input-layer public API for key decoding, bindings, and mode transitions.

Exports are split between low-level terminal decoding (``read_key``) and the
pure mode state machine consumed by the runtime dispatcher.
"""

from .bindings import (
    DEFAULT_KEYBINDINGS,
    build_key_registry,
    format_binding,
    format_key_combo,
    parse_binding,
    parse_key_combo,
)
from .key_registry import KeyComboBinding, KeyComboRegistry
from .modes import (
    ColonMode,
    InputCommand,
    InputMode,
    Mode,
    NavigationMode,
    StatusLevel,
    StatusMessage,
)
from .reader import ESC_SEQUENCE_TIMEOUT_MS, read_key
from .transitions import Outcome, transition

__all__ = [
    "DEFAULT_KEYBINDINGS",
    "ESC_SEQUENCE_TIMEOUT_MS",
    "ColonMode",
    "InputCommand",
    "InputMode",
    "KeyComboBinding",
    "KeyComboRegistry",
    "Mode",
    "NavigationMode",
    "Outcome",
    "StatusLevel",
    "StatusMessage",
    "build_key_registry",
    "format_binding",
    "format_key_combo",
    "parse_binding",
    "parse_key_combo",
    "read_key",
    "transition",
]
