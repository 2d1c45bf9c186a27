"""Key-combo registry mapping key sequences to commands."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from .commands import Command

KeyCombo = tuple[str, ...]


@dataclass(frozen=True)
class KeyComboBinding:
    """Mapping from one or more key sequences to a single command."""

    combos: tuple[KeyCombo, ...]
    command: Command


class KeyComboRegistry:
    """Lookup table for single keys and multi-key sequences such as ``g g``."""

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._commands: dict[KeyCombo, Command] = {}
        self._prefixes: set[KeyCombo] = set()

    def _rebuild_prefixes(self) -> None:
        self._prefixes = {combo[:size] for combo in self._commands for size in range(1, len(combo))}

    def register_binding(self, binding: KeyComboBinding) -> KeyComboRegistry:
        """Register one binding, overwriting existing commands for the same combos."""
        for combo in binding.combos:
            if combo:
                self._commands[tuple(combo)] = binding.command
        self._rebuild_prefixes()
        return self

    def register_bindings(self, *bindings: KeyComboBinding) -> KeyComboRegistry:
        """Register multiple bindings and return ``self`` for fluent usage."""
        for binding in bindings:
            self.register_binding(binding)
        return self

    def lookup(self, combo: KeyCombo) -> Command | None:
        """Return the command bound to exactly ``combo``."""
        return self._commands.get(tuple(combo))

    def is_prefix(self, combo: KeyCombo) -> bool:
        """Return whether ``combo`` starts at least one longer binding."""
        return tuple(combo) in self._prefixes

    def items(self) -> Iterator[tuple[KeyCombo, Command]]:
        return iter(sorted(self._commands.items(), key=lambda item: item[0]))

    def __len__(self) -> int:
        return len(self._commands)
