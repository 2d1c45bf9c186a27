"""Non-empty focus cursor over one directory listing.

Cursors are immutable: every movement returns a new cursor, and a changed
listing always produces a freshly built cursor. Two rebuild strategies are
available (exact name, positional offset) so each call site can pick the one
that matches what the user just did.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass

from .types import DirEntry

EntryPredicate = Callable[[DirEntry], bool]


@dataclass(frozen=True)
class DirectoryCursor:
    """Entries split around one focused entry.

    ``before`` and ``after`` are both kept in display order, so
    ``before + (focus,) + after`` is always the listing as shown.
    """

    before: tuple[DirEntry, ...]
    focus: DirEntry
    after: tuple[DirEntry, ...]

    @classmethod
    def from_entries(cls, entries: Sequence[DirEntry]) -> DirectoryCursor:
        """Build a cursor focused on the first entry."""
        return cls.focused_at_offset(entries, 0)

    @classmethod
    def focused_at_offset(cls, entries: Sequence[DirEntry], offset: int) -> DirectoryCursor:
        """Positional strategy: focus index ``offset`` clamped to the listing."""
        items = tuple(entries)
        if not items:
            raise ValueError("a directory cursor needs at least one entry")
        index = max(0, min(offset, len(items) - 1))
        return cls(before=items[:index], focus=items[index], after=items[index + 1 :])

    @classmethod
    def focused_on_name(cls, entries: Sequence[DirEntry], name: str) -> DirectoryCursor | None:
        """Exact-name strategy: focus the entry called ``name`` or return ``None``."""
        items = tuple(entries)
        for index, entry in enumerate(items):
            if entry.name == name:
                return cls.focused_at_offset(items, index)
        return None

    @property
    def entries(self) -> tuple[DirEntry, ...]:
        return self.before + (self.focus,) + self.after

    @property
    def offset(self) -> int:
        """Index of the focused entry from the top of the listing."""
        return len(self.before)

    def __len__(self) -> int:
        return len(self.before) + 1 + len(self.after)

    def select_next(self) -> DirectoryCursor | None:
        if not self.after:
            return None
        return DirectoryCursor(
            before=self.before + (self.focus,),
            focus=self.after[0],
            after=self.after[1:],
        )

    def select_prev(self) -> DirectoryCursor | None:
        if not self.before:
            return None
        return DirectoryCursor(
            before=self.before[:-1],
            focus=self.before[-1],
            after=(self.focus,) + self.after,
        )

    def select_first(self) -> DirectoryCursor:
        return DirectoryCursor.focused_at_offset(self.entries, 0)

    def select_last(self) -> DirectoryCursor:
        return DirectoryCursor.focused_at_offset(self.entries, len(self) - 1)

    def search_forward(self, predicate: EntryPredicate) -> DirectoryCursor | None:
        """Return the first match strictly after focus, without wrapping."""
        for step, entry in enumerate(self.after, start=1):
            if predicate(entry):
                return DirectoryCursor.focused_at_offset(self.entries, self.offset + step)
        return None

    def circular_search(self, predicate: EntryPredicate) -> DirectoryCursor | None:
        """Return the first match in cyclic order starting one past focus.

        Visits each entry at most once; the focused entry is examined last.
        """
        items = self.entries
        total = len(items)
        for step in range(1, total + 1):
            index = (self.offset + step) % total
            if predicate(items[index]):
                return DirectoryCursor.focused_at_offset(items, index)
        return None

    def rebuild_from(
        self,
        entries: Sequence[DirEntry],
        desired_focus_name: str | None = None,
    ) -> DirectoryCursor:
        """Build a cursor over a refreshed listing, keeping focus close.

        Focus lands on ``desired_focus_name`` when it is still listed, and
        otherwise on this cursor's offset clamped to the new bounds.
        """
        if desired_focus_name is not None:
            named = DirectoryCursor.focused_on_name(entries, desired_focus_name)
            if named is not None:
                return named
        return DirectoryCursor.focused_at_offset(entries, self.offset)


def name_prefix_predicate(query: str) -> EntryPredicate:
    """Case-insensitive name prefix match used by incremental search."""
    folded = query.lower()

    def matches(entry: DirEntry) -> bool:
        return entry.name.lower().startswith(folded)

    return matches


__all__ = [
    "DirectoryCursor",
    "EntryPredicate",
    "name_prefix_predicate",
]
