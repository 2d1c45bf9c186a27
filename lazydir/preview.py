"""File preview text: decoding, sanitization, and syntax highlighting.

Highlighting uses Pygments with a lexer picked from the file name, falling
back to plain text. Terminal control bytes are escaped first so a previewed
file cannot move the cursor or ring the bell.
"""

from __future__ import annotations

import re
from functools import lru_cache
from pathlib import Path

from pygments import highlight as pygments_highlight
from pygments.formatters import TerminalFormatter
from pygments.lexers import TextLexer, get_lexer_for_filename
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

from .runtime.config import DEFAULT_STYLE

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")
MAX_PREVIEW_BYTES = 2 * 1024 * 1024
BINARY_SNIFF_BYTES = 8192


def read_text(path: Path, limit: int = MAX_PREVIEW_BYTES) -> str:
    with path.open("rb") as handle:
        data = handle.read(limit)
    for encoding in ("utf-8", "utf-8-sig", "latin-1"):
        try:
            return data.decode(encoding)
        except UnicodeDecodeError:
            continue
    return data.decode("utf-8", errors="replace")


def looks_binary(path: Path) -> bool:
    with path.open("rb") as handle:
        return b"\0" in handle.read(BINARY_SNIFF_BYTES)


def sanitize_terminal_text(source: str) -> str:
    """Escape terminal control bytes to avoid side effects (bell, cursor moves, etc.)."""
    if _CONTROL_RE.search(source) is None:
        return source

    out: list[str] = []
    for ch in source:
        code = ord(ch)
        if ch in {"\n", "\r", "\t"}:
            out.append(ch)
            continue
        # C0 controls + DEL + C1 controls.
        if code < 32 or code == 127 or 0x80 <= code <= 0x9F:
            out.append(f"\\x{code:02x}")
            continue
        out.append(ch)
    return "".join(out)


@lru_cache(maxsize=16)
def _normalize_style(style: str) -> str:
    try:
        get_style_by_name(style)
    except ClassNotFound:
        return DEFAULT_STYLE
    return style


@lru_cache(maxsize=16)
def _formatter_for_style(style: str) -> TerminalFormatter:
    return TerminalFormatter(style=_normalize_style(style))


def highlight_source(source: str, path: Path, style: str = DEFAULT_STYLE) -> str:
    """Return ``source`` with ANSI colours for the language implied by ``path``."""
    try:
        lexer = get_lexer_for_filename(path.name, stripnl=False)
    except ClassNotFound:
        lexer = TextLexer(stripnl=False)
    return pygments_highlight(source, lexer, _formatter_for_style(style))


def render_preview(path: Path, style: str = DEFAULT_STYLE, no_color: bool = False) -> str:
    """Build pager input for ``path``; raises ``OSError`` when it cannot be read."""
    if looks_binary(path):
        return f"{path.name}: binary file, not shown\n"
    source = sanitize_terminal_text(read_text(path))
    if no_color:
        return source
    return highlight_source(source, path, style)


__all__ = [
    "MAX_PREVIEW_BYTES",
    "highlight_source",
    "looks_binary",
    "read_text",
    "render_preview",
    "sanitize_terminal_text",
]
