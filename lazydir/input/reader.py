"""Low-level terminal input decoding.

Reads raw bytes from stdin and translates them into normalized key tokens.
Handles ESC-sequence timing, Alt/Ctrl combos, and multi-byte UTF-8 input.
"""

from __future__ import annotations

import os
import select

ESC_SEQUENCE_TIMEOUT_MS = 25
_PENDING_BYTES: list[bytes] = []

MAX_CSI_BYTES = 16

_CSI_FINAL_KEYS = {
    "A": "UP",
    "B": "DOWN",
    "C": "RIGHT",
    "D": "LEFT",
    "H": "HOME",
    "F": "END",
}
_CSI_TILDE_KEYS = {
    "1": "HOME",
    "2": "INSERT",
    "3": "DELETE",
    "4": "END",
    "5": "PAGE_UP",
    "6": "PAGE_DOWN",
    "7": "HOME",
    "8": "END",
}
# xterm modifier parameter: 2 shift, 3 alt, 5 ctrl, 9 meta.
_CSI_MODIFIER_PREFIXES = {
    "2": "SHIFT_",
    "3": "ALT_",
    "5": "CTRL_",
    "9": "ALT_",
}


def _read_ready_byte(fd: int, timeout_ms: int) -> bytes | None:
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    if not ready:
        return None
    ch = os.read(fd, 1)
    if not ch:
        return None
    return ch


def _utf8_length(lead: int) -> int:
    if lead >= 0xF0:
        return 4
    if lead >= 0xE0:
        return 3
    if lead >= 0xC0:
        return 2
    return 1


def _decode_utf8(fd: int, first: bytes) -> str:
    data = first
    for _ in range(_utf8_length(first[0]) - 1):
        part = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if part is None:
            break
        data += part
    return data.decode("utf-8", errors="replace")


def decode_control_byte(ch: bytes) -> str | None:
    """Map a single control byte to its key token, or ``None`` if printable."""
    if ch in {b"\x08", b"\x7f"}:
        return "BACKSPACE"
    if ch == b"\t":
        return "TAB"
    if ch == b"\r":
        return "ENTER_CR"
    if ch == b"\n":
        return "ENTER_LF"
    code = ch[0]
    if 1 <= code <= 26:
        return f"CTRL_{chr(ord('A') + code - 1)}"
    if code < 32:
        return "CTRL_OTHER"
    return None


def _csi_key(params: str, final: str) -> str:
    fields = params.split(";")
    modifier = fields[1] if len(fields) > 1 else ""
    if final == "~":
        base = _CSI_TILDE_KEYS.get(fields[0])
    else:
        base = _CSI_FINAL_KEYS.get(final)
    if base is None:
        return "ESC"
    return _CSI_MODIFIER_PREFIXES.get(modifier, "") + base


def _read_csi(fd: int) -> str:
    """Consume a CSI/SS3 sequence through its final byte.

    Unknown sequences are swallowed whole and reported as ``ESC`` so their
    parameter bytes never leak out as typed characters.
    """
    params = b""
    while len(params) <= MAX_CSI_BYTES:
        part = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if part is None:
            return "ESC"
        if 0x40 <= part[0] <= 0x7E:
            return _csi_key(params.decode("ascii", errors="replace"), chr(part[0]))
        params += part
    return "ESC"


def read_key(fd: int, timeout_ms: int | None = None) -> str:
    """Read one key token; returns ``""`` on timeout or end of input."""
    if _PENDING_BYTES:
        ch = _PENDING_BYTES.pop(0)
    else:
        if timeout_ms is not None:
            ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
            if not ready:
                return ""

        ch = os.read(fd, 1)
        if not ch:
            return ""

    if ch != b"\x1b":
        control = decode_control_byte(ch)
        if control is not None:
            return control
        return _decode_utf8(fd, ch)

    # Escape, Alt+key, or a CSI/SS3 sequence.
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    if seq in {b"[", b"O"}:
        return _read_csi(fd)
    if seq == b"\x1b":
        _PENDING_BYTES.append(seq)
        return "ESC"
    control = decode_control_byte(seq)
    if control is not None:
        _PENDING_BYTES.append(seq)
        return "ESC"
    return f"ALT_{_decode_utf8(fd, seq)}"


__all__ = [
    "ESC_SEQUENCE_TIMEOUT_MS",
    "decode_control_byte",
    "read_key",
]
