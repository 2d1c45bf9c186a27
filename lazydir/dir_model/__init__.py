"""Directory listing model: entries, filesystem capability, and focus cursor."""

from .cursor import DirectoryCursor, EntryPredicate, name_prefix_predicate
from .fs import LocalFileSystem, entry_kind, list_directory_entries
from .types import (
    ANCHOR_NAMES,
    CURRENT_DIR_NAME,
    PARENT_DIR_NAME,
    DirEntry,
    EntryKind,
    listing_sort_key,
)

__all__ = [
    "ANCHOR_NAMES",
    "CURRENT_DIR_NAME",
    "PARENT_DIR_NAME",
    "DirEntry",
    "DirectoryCursor",
    "EntryKind",
    "EntryPredicate",
    "LocalFileSystem",
    "entry_kind",
    "list_directory_entries",
    "listing_sort_key",
    "name_prefix_predicate",
]
