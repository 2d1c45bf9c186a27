from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from ..dir_model import DirectoryCursor
from ..input.modes import Mode, NavigationMode, StatusMessage
from .clipboard import Clipboard
from .history import DirectoryHistory


@dataclass
class AppState:
    cursor: DirectoryCursor
    history: DirectoryHistory
    clipboard: Clipboard = field(default_factory=Clipboard)
    mode: Mode = field(default_factory=NavigationMode)
    search_query: str = ""
    show_hidden: bool = True
    wrap_search: bool = True
    list_start: int = 0
    dirty: bool = True

    @property
    def current_directory(self) -> Path:
        return self.history.current

    @property
    def focused_path(self) -> Path:
        return self.history.current / self.cursor.focus.name

    @property
    def status(self) -> StatusMessage:
        if isinstance(self.mode, NavigationMode):
            return self.mode.status
        return StatusMessage()
