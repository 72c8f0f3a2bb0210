"""Low-level terminal input decoding.

Reads raw bytes from stdin and translates them into normalized key tokens.
Handles ESC-sequence timing, CSI/SS3 navigation sequences, and UTF-8 text.
Named keys are multi-character tokens (``"UP"``, ``"CTRL_D"``); text is
returned one character at a time.
"""

from __future__ import annotations

import os
import select

ESC_SEQUENCE_TIMEOUT_MS = 25
MAX_CSI_LENGTH = 16
_PENDING_BYTES: list[bytes] = []

_CONTROL_KEYS: dict[bytes, str] = {
    b"\t": "TAB",
    b"\x7f": "BACKSPACE",
    b"\x08": "BACKSPACE",
    b"\r": "ENTER_CR",
    b"\n": "ENTER_LF",
    b"\x01": "CTRL_A",
    b"\x03": "CTRL_C",
    b"\x04": "CTRL_D",
    b"\x05": "CTRL_E",
    b"\x15": "CTRL_U",
}

# ESC [ <params> <final>
_CSI_KEYS: dict[str, str] = {
    "A": "UP",
    "B": "DOWN",
    "C": "RIGHT",
    "D": "LEFT",
    "H": "HOME",
    "F": "END",
    "1~": "HOME",
    "7~": "HOME",
    "4~": "END",
    "8~": "END",
    "3~": "DELETE",
    "1;2C": "SHIFT_RIGHT",
    "1;2D": "SHIFT_LEFT",
    "1;3C": "ALT_RIGHT",
    "1;3D": "ALT_LEFT",
    "1;9C": "ALT_RIGHT",
    "1;9D": "ALT_LEFT",
    "1;5C": "CTRL_RIGHT",
    "1;5D": "CTRL_LEFT",
}

# ESC O <final>
_SS3_KEYS: dict[str, str] = {
    "A": "UP",
    "B": "DOWN",
    "C": "RIGHT",
    "D": "LEFT",
    "H": "HOME",
    "F": "END",
}


def _read_ready_byte(fd: int, timeout_ms: int) -> bytes | None:
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    if not ready:
        return None
    ch = os.read(fd, 1)
    if not ch:
        return None
    return ch


def _next_byte(fd: int, timeout_ms: int) -> bytes | None:
    if _PENDING_BYTES:
        return _PENDING_BYTES.pop(0)
    return _read_ready_byte(fd, timeout_ms)


def _utf8_length(lead: int) -> int:
    if lead >= 0xF0:
        return 4
    if lead >= 0xE0:
        return 3
    if lead >= 0xC0:
        return 2
    return 1


def _read_utf8_char(fd: int, lead: bytes) -> str:
    raw = [lead]
    for _ in range(_utf8_length(lead[0]) - 1):
        part = _next_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if part is None:
            break
        if part[0] & 0xC0 != 0x80:
            _PENDING_BYTES.insert(0, part)
            break
        raw.append(part)
    return b"".join(raw).decode("utf-8", errors="replace")


def _read_escape_sequence(fd: int) -> str:
    seq = _next_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    if seq in {b"b", b"B"}:
        return "ALT_LEFT"
    if seq in {b"f", b"F"}:
        return "ALT_RIGHT"
    if seq == b"O":
        final = _next_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if final is None:
            return "ESC"
        return _SS3_KEYS.get(final.decode("latin-1"), "UNKNOWN")
    if seq != b"[":
        _PENDING_BYTES.insert(0, seq)
        return "ESC"

    body: list[bytes] = []
    while True:
        part = _next_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if part is None:
            return "ESC"
        body.append(part)
        if 0x40 <= part[0] <= 0x7E:
            break
        if len(body) > MAX_CSI_LENGTH:
            return "UNKNOWN"
    return _CSI_KEYS.get(b"".join(body).decode("latin-1"), "UNKNOWN")


def read_key(fd: int, timeout_ms: int | None = None) -> str:
    """Read one key token from ``fd``.

    Returns ``""`` when ``timeout_ms`` elapses without input or on EOF.
    """
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

    named = _CONTROL_KEYS.get(ch)
    if named is not None:
        return named
    if ch == b"\x1b":
        return _read_escape_sequence(fd)
    return _read_utf8_char(fd, ch)
