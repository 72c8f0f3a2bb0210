"""ANSI-aware text measurement for screen rows.

Escape sequences count as zero columns and East Asian wide characters as
two, so styled rows can be clipped and padded to the terminal width.
"""

from __future__ import annotations

import re
import unicodedata
from collections.abc import Iterator

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
TAB_STOP = 8


def char_display_width(ch: str, col: int) -> int:
    """Columns taken by ``ch`` when it starts at visual column ``col``."""
    if ch == "\t":
        return TAB_STOP - col % TAB_STOP
    if unicodedata.combining(ch):
        return 0
    return 2 if unicodedata.east_asian_width(ch) in ("W", "F") else 1


def _segments(text: str) -> Iterator[tuple[bool, str]]:
    """Split ``text`` into ``(is_escape, chunk)`` runs."""
    pos = 0
    for match in ANSI_ESCAPE_RE.finditer(text):
        if match.start() > pos:
            yield False, text[pos : match.start()]
        yield True, match.group(0)
        pos = match.end()
    if pos < len(text):
        yield False, text[pos:]


def display_width(text: str) -> int:
    col = 0
    for is_escape, chunk in _segments(text):
        if is_escape:
            continue
        for ch in chunk:
            col += char_display_width(ch, col)
    return col


def clip_ansi_line(text: str, max_cols: int) -> str:
    """Cut a styled row down to ``max_cols`` visible columns.

    Every escape sequence is kept, including those past the cut, so a
    trailing reset still closes any style opened before it. Tabs expand to
    spaces.
    """
    if max_cols <= 0:
        return ""
    kept: list[str] = []
    col = 0
    full = False
    for is_escape, chunk in _segments(text):
        if is_escape:
            kept.append(chunk)
            continue
        for ch in chunk:
            if full:
                break
            width = char_display_width(ch, col)
            if col + width > max_cols:
                full = True
                break
            kept.append(" " * width if ch == "\t" else ch)
            col += width
    return "".join(kept)


def pad_ansi_line(text: str, width: int) -> str:
    """Right-pad a styled row with spaces to ``width`` visible columns."""
    return text + " " * max(0, width - display_width(text))
