"""User-facing failure kinds for filesystem, history, and clipboard operations.

Every error carries the entry name it is about so the status bar can say
what went wrong without inspecting the originating ``OSError``.
"""

from __future__ import annotations


class FileOpError(Exception):
    """Base class for recoverable failures reported in the status bar."""

    reason = "failed"

    def __init__(self, name: str = "") -> None:
        self.name = name
        super().__init__(self.describe())

    def describe(self) -> str:
        """Return a short human-readable message for the status bar."""
        if self.name:
            return f"{self.name}: {self.reason}"
        return self.reason


class AlreadyExists(FileOpError):
    reason = "already exists"


class InvalidName(FileOpError):
    reason = "invalid name"


class Cancelled(FileOpError):
    reason = "cancelled"

    def describe(self) -> str:
        return "Cancelled"


class NotFound(FileOpError):
    reason = "no longer exists"


__all__ = [
    "FileOpError",
    "AlreadyExists",
    "InvalidName",
    "Cancelled",
    "NotFound",
]
