"""Single-line text editing primitives shared by the search and create forms.

Every helper takes a ``TextFieldState`` and returns a new one; the cursor is
always left inside ``[0, len(text)]``.
"""

from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class TextFieldState:
    text: str = ""
    cursor_position: int = 0


def _clamp_cursor(text: str, cursor_position: int) -> int:
    return max(0, min(len(text), cursor_position))


def find_prev_word_boundary(text: str, pos: int) -> int:
    """Return the start of the word at or before ``pos``.

    Only the space character separates words.
    """
    if pos <= 0:
        return 0
    i = min(pos, len(text)) - 1
    while i > 0 and text[i] == " ":
        i -= 1
    while i > 0 and text[i - 1] != " ":
        i -= 1
    return i


def find_next_word_boundary(text: str, pos: int) -> int:
    """Return the first character of the next word after ``pos``, or ``len(text)``."""
    if pos >= len(text):
        return len(text)
    i = max(0, pos)
    while i < len(text) and text[i] != " ":
        i += 1
    while i < len(text) and text[i] == " ":
        i += 1
    return i


def insert_char(state: TextFieldState, text: str) -> TextFieldState:
    """Insert ``text`` (one or more characters) at the cursor."""
    pos = _clamp_cursor(state.text, state.cursor_position)
    return TextFieldState(
        text=state.text[:pos] + text + state.text[pos:],
        cursor_position=pos + len(text),
    )


def move_left(state: TextFieldState) -> TextFieldState:
    return replace(state, cursor_position=_clamp_cursor(state.text, state.cursor_position - 1))


def move_right(state: TextFieldState) -> TextFieldState:
    return replace(state, cursor_position=_clamp_cursor(state.text, state.cursor_position + 1))


def move_to_start(state: TextFieldState) -> TextFieldState:
    return replace(state, cursor_position=0)


def move_to_end(state: TextFieldState) -> TextFieldState:
    return replace(state, cursor_position=len(state.text))


def move_word_left(state: TextFieldState) -> TextFieldState:
    return replace(state, cursor_position=find_prev_word_boundary(state.text, state.cursor_position))


def move_word_right(state: TextFieldState) -> TextFieldState:
    return replace(state, cursor_position=find_next_word_boundary(state.text, state.cursor_position))


def delete_back(state: TextFieldState) -> TextFieldState:
    """Delete the character before the cursor; no-op at position 0."""
    pos = _clamp_cursor(state.text, state.cursor_position)
    if pos == 0:
        return state
    return TextFieldState(
        text=state.text[: pos - 1] + state.text[pos:],
        cursor_position=pos - 1,
    )


def clear_to_start(state: TextFieldState) -> TextFieldState:
    """Delete everything before the cursor (readline ``Ctrl+U``)."""
    pos = _clamp_cursor(state.text, state.cursor_position)
    return TextFieldState(text=state.text[pos:], cursor_position=0)
