"""Screen composition for the search and create views.

Renderers are pure: they turn a state value into a ``Frame`` (rows plus
cursor placement). ``frame_to_ansi`` turns a frame into one terminal write.
"""

from __future__ import annotations

import datetime
from dataclasses import dataclass

from .ansi import clip_ansi_line, display_width, pad_ansi_line
from .create_state import FIELD_KIND, FIELD_NAME, FIELD_PREFIX, CreateFormState
from .fuzzy import highlight_matched_indices
from .items import StashItem
from .operations import compose_item_name
from .search_state import SearchState
from .terminal import CLEAR_SCREEN, HIDE_CURSOR, SHOW_CURSOR
from .ui_theme import DEFAULT_THEME, UITheme

SEARCH_PROMPT = "Search: "
NAME_PROMPT = "Name: "
SIZE_LABEL_MIN_BYTES = 10 * 1024
NAME_COLUMN_MAX = 40
ICONS = {"directory": "📁", "file": "📄"}
SEARCH_HINT = "enter on + to create | tab/↑↓ select | ctrl+d delete | esc quit"
CREATE_HINT = "enter create | tab/↑↓ switch field | space/←→ toggle | esc cancel"

# Rows above the item list on the search screen: title, divider, blank, prompt, blank.
_SEARCH_HEADER_ROWS = 5
# Rows below the item list: blank, hint.
_SEARCH_FOOTER_ROWS = 2


@dataclass(frozen=True)
class Frame:
    """Rendered rows plus 1-based ``(row, col)`` cursor, or ``None`` to hide it."""

    lines: tuple[str, ...]
    cursor: tuple[int, int] | None = None


def relative_time(mtime: float, now: float) -> str:
    """Describe ``mtime`` relative to ``now`` (``5m ago``, ``2d ago``...)."""
    age = now - mtime
    if age < 60:
        return "just now"
    if age < 60 * 60:
        return f"{int(age // 60)}m ago"
    if age < 24 * 60 * 60:
        return f"{int(age // 3600)}h ago"
    if age < 30 * 24 * 60 * 60:
        return f"{int(age // 86400)}d ago"
    return datetime.date.fromtimestamp(mtime).isoformat()


def format_item_row(
    item: StashItem,
    now: float,
    width: int,
    selected: bool = False,
    theme: UITheme | None = None,
) -> str:
    """Render one search result row: icon, highlighted name, age, size."""
    active_theme = theme or DEFAULT_THEME
    reset = active_theme.reset
    base = (active_theme.reverse if selected else "") + (
        active_theme.item_dir if item.is_dir else active_theme.item_file
    )
    name = highlight_matched_indices(
        item.name,
        item.matched_indices,
        start=active_theme.match,
        end=reset + base,
    )
    suffix = "/" if item.is_dir else ""
    label = f"{ICONS.get(item.kind, ' ')} {base}{name}{suffix}"
    name_col = min(max(1, width - 4), NAME_COLUMN_MAX)
    row = pad_ansi_line(label, name_col)
    meta = f"  ({relative_time(item.mtime, now)})"
    if not item.is_dir and item.size >= SIZE_LABEL_MIN_BYTES:
        meta += f" [{item.size // 1024} KB]"
    row = f"{base}{row}{reset}{base}{active_theme.item_meta}{meta}{reset}"
    if selected:
        row = f"{active_theme.reverse}{pad_ansi_line(row, width)}{reset}"
    return clip_ansi_line(row, width)


def _create_row_text(query: str) -> str:
    if query.strip():
        return f'+ Create "{query}"'
    return "+ Create new item"


def _visible_window(selected: int, total: int, rows: int) -> tuple[int, int]:
    """Return ``[start, end)`` of a list window that keeps ``selected`` visible."""
    rows = max(1, rows)
    start = max(0, min(selected - rows + 1, total - rows))
    start = min(start, max(0, selected))
    return start, min(total, start + rows)


def render_search_screen(
    state: SearchState,
    width: int,
    height: int,
    now: float,
    theme: UITheme | None = None,
) -> Frame:
    """Compose the search screen for ``state``."""
    active_theme = theme or DEFAULT_THEME
    reset = active_theme.reset
    lines: list[str] = [
        f"{active_theme.title}Search stash items{reset}",
        f"{active_theme.divider}{'─' * min(max(1, width - 4), 45)}{reset}",
        "",
        f"{active_theme.prompt}{SEARCH_PROMPT}{reset}{state.query}",
        "",
    ]

    total_rows = len(state.items) + 1
    list_rows = max(1, height - _SEARCH_HEADER_ROWS - _SEARCH_FOOTER_ROWS)
    start, end = _visible_window(state.selected_index, total_rows, list_rows)
    for idx in range(start, end):
        selected = idx == state.selected_index
        if idx < len(state.items):
            lines.append(format_item_row(state.items[idx], now, width, selected, active_theme))
            continue
        text = f"{active_theme.create_row}{_create_row_text(state.query)}{reset}"
        if selected:
            text = f"{active_theme.reverse}{pad_ansi_line(text, width)}{reset}"
        lines.append(clip_ansi_line(text, width))

    lines.append("")
    lines.append(f"{active_theme.hint}{SEARCH_HINT}{reset}")

    cursor_col = len(SEARCH_PROMPT) + 1 + display_width(state.query[: state.cursor_position])
    return Frame(
        lines=tuple(clip_ansi_line(line, width) for line in lines),
        cursor=(4, min(width, cursor_col)),
    )


def _toggle(label: str, on: bool, theme: UITheme) -> str:
    if on:
        return f"{theme.toggle_on}[●] {label}{theme.reset}"
    return f"{theme.toggle_off}[○] {label}{theme.reset}"


def _field_marker(state: CreateFormState, field: int, theme: UITheme) -> str:
    if state.focused_field == field:
        return f"{theme.field_focus}> {theme.reset}"
    return "  "


def render_create_screen(
    state: CreateFormState,
    width: int,
    error: str | None = None,
    date: str | None = None,
    theme: UITheme | None = None,
) -> Frame:
    """Compose the create form; the preview shows the final on-disk name."""
    active_theme = theme or DEFAULT_THEME
    reset = active_theme.reset
    preview = compose_item_name(state.text, state.prefix, date) + ("" if state.is_file else "/")
    lines = [
        f"{active_theme.title}Create stash item{reset}",
        f"{active_theme.divider}{'─' * min(max(1, width - 4), 45)}{reset}",
        "",
        f"{_field_marker(state, FIELD_NAME, active_theme)}{NAME_PROMPT}{state.text}",
        f"{_field_marker(state, FIELD_KIND, active_theme)}"
        f"{_toggle('File', state.is_file, active_theme)}  "
        f"{_toggle('Directory', not state.is_file, active_theme)}",
        f"{_field_marker(state, FIELD_PREFIX, active_theme)}{_toggle('Date prefix', state.prefix, active_theme)}",
        "",
        f"  {active_theme.prompt}Preview:{reset} {preview}",
        f"  {active_theme.error}{error}{reset}" if error else "",
        f"{active_theme.hint}{CREATE_HINT}{reset}",
    ]
    cursor = None
    if state.focused_field == FIELD_NAME:
        cursor_col = 2 + len(NAME_PROMPT) + 1 + display_width(state.text[: state.cursor_position])
        cursor = (4, min(width, cursor_col))
    return Frame(lines=tuple(clip_ansi_line(line, width) for line in lines), cursor=cursor)


def frame_to_ansi(frame: Frame) -> str:
    """Serialize a frame into a full-screen redraw for a raw-mode terminal."""
    body = "\r\n".join(frame.lines)
    if frame.cursor is None:
        return f"{HIDE_CURSOR}{CLEAR_SCREEN}{body}"
    row, col = frame.cursor
    return f"{HIDE_CURSOR}{CLEAR_SCREEN}{body}\x1b[{row};{col}H{SHOW_CURSOR}"
