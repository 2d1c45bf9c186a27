"""Frame composition for the directory view.

Builds a header, the scrolled listing with the focused row highlighted, a
status row, and a mode/prompt row. File names and typed text are shown with
control characters escaped. The only state touched is the scroll window,
which ``build_frame`` records on ``AppState.list_start``; the loop writes the
returned frame to the terminal.
"""

from __future__ import annotations

from dataclasses import dataclass

from .ansi import clip_ansi_line, display_width, escape_controls, pad_to_width
from .dir_model import DirEntry
from .input.modes import ColonMode, InputCommand, InputMode, NavigationMode, StatusLevel
from .runtime.state import AppState

HEADER_TEXT = "lazydir"
NAVIGATION_LABEL = "-- NAVIGATION --"
CHROME_ROWS = 3

RESET = "\033[0m"
REVERSE = "\033[7m"
BOLD = "\033[1m"
DIR_COLOR = "\033[96m"
ERROR_COLOR = "\033[31m"
SUCCESS_COLOR = "\033[32m"


@dataclass(frozen=True)
class Frame:
    """Rendered rows plus where to park the visible cursor, if anywhere."""

    lines: list[str]
    cursor_row: int | None = None
    cursor_col: int | None = None

    def to_ansi(self) -> str:
        out = ["\033[H\033[J", "\r\n".join(self.lines)]
        if self.cursor_row is not None and self.cursor_col is not None:
            out.append(f"\033[{self.cursor_row + 1};{self.cursor_col + 1}H\033[?25h")
        else:
            out.append("\033[?25l")
        return "".join(out)


def listing_rows(height: int) -> int:
    return max(1, height - CHROME_ROWS)


def scroll_start(focus_offset: int, start: int, rows: int, total: int) -> int:
    """Keep ``focus_offset`` inside the window ``[start, start + rows)``."""
    if focus_offset < start:
        start = focus_offset
    elif focus_offset >= start + rows:
        start = focus_offset - rows + 1
    return max(0, min(start, max(0, total - rows)))


def _style(text: str, sgr: str, no_color: bool) -> str:
    if no_color or not sgr:
        return text
    return f"{sgr}{text}{RESET}"


def format_entry(entry: DirEntry, focused: bool, width: int, no_color: bool) -> str:
    label = escape_controls(entry.name)
    if entry.is_dir and not entry.is_anchor:
        label += "/"
    row = pad_to_width(" " + label, width)
    if focused:
        return REVERSE + row + RESET
    return _style(row, DIR_COLOR if entry.is_dir else "", no_color)


def status_text(state: AppState) -> tuple[str, StatusLevel]:
    """Text for the status row: prompt question, status message, or the path."""
    mode = state.mode
    focus = state.cursor.focus
    name = escape_controls(focus.name)
    if isinstance(mode, InputMode):
        if mode.command is InputCommand.CREATE_FILE:
            return "Enter the name of the file to be created", StatusLevel.INFO
        if mode.command is InputCommand.CREATE_DIRECTORY:
            return "Enter the name of the directory to be created", StatusLevel.INFO
        if mode.command is InputCommand.REMOVE:
            if focus.name == ".":
                return "You may not remove the current directory from within.", StatusLevel.ERROR
            if focus.name == "..":
                return "You may not remove the parent directory from within.", StatusLevel.ERROR
            kind = "directory" if focus.is_dir else "file"
            return f"Are you sure you want to remove the {kind} {name}?", StatusLevel.INFO
        if mode.command is InputCommand.RENAME:
            return f"Rename {name} to:", StatusLevel.INFO
        return f"Paste {escape_controls(state.clipboard.describe())} here?", StatusLevel.INFO
    status = state.status
    if status.is_indicator:
        return escape_controls(str(state.current_directory)), StatusLevel.INFO
    return escape_controls(status.text), status.level


def prompt_text(state: AppState) -> str:
    mode = state.mode
    if isinstance(mode, ColonMode):
        return escape_controls(mode.buffer)
    if isinstance(mode, InputMode):
        return mode.prompt + escape_controls(mode.response)
    if isinstance(mode, NavigationMode) and mode.pending:
        return NAVIGATION_LABEL + " " + "".join(mode.pending)
    return NAVIGATION_LABEL


def build_frame(state: AppState, width: int, height: int, no_color: bool = False) -> Frame:
    """Compose one full-screen frame for ``state``.

    Also stores the adjusted scroll start in ``state.list_start`` so the
    window only moves when the focus leaves it.
    """
    width = max(1, width)
    rows = listing_rows(height)
    entries = state.cursor.entries
    state.list_start = scroll_start(state.cursor.offset, state.list_start, rows, len(entries))

    header = f" {HEADER_TEXT}  {escape_controls(str(state.current_directory))}"
    lines = [_style(pad_to_width(header, width), BOLD, no_color)]
    for index in range(state.list_start, state.list_start + rows):
        if index < len(entries):
            lines.append(format_entry(entries[index], index == state.cursor.offset, width, no_color))
        else:
            lines.append("")

    text, level = status_text(state)
    color = {StatusLevel.ERROR: ERROR_COLOR, StatusLevel.SUCCESS: SUCCESS_COLOR}.get(level, "")
    lines.append(_style(clip_ansi_line(text, width), color, no_color))

    prompt = clip_ansi_line(prompt_text(state), width)
    lines.append(prompt)
    if isinstance(state.mode, (ColonMode, InputMode)):
        return Frame(lines, cursor_row=len(lines) - 1, cursor_col=min(width - 1, display_width(prompt)))
    return Frame(lines)


__all__ = [
    "CHROME_ROWS",
    "Frame",
    "build_frame",
    "format_entry",
    "listing_rows",
    "prompt_text",
    "scroll_start",
    "status_text",
]
