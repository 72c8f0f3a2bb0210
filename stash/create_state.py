"""Create screen reducer: name field, file/directory toggle, date-prefix toggle."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, replace

from . import text_field
from .actions import Action, ActionType

FIELD_NAME = 0
FIELD_KIND = 1
FIELD_PREFIX = 2
FIELD_COUNT = 3

EMPTY_NAME_ERROR = "Name cannot be empty"


@dataclass(frozen=True)
class CreateFormState:
    text: str = ""
    cursor_position: int = 0
    focused_field: int = FIELD_NAME
    is_file: bool = False
    prefix: bool = False


@dataclass(frozen=True)
class CreateResult:
    done: bool
    state: CreateFormState
    error: str | None = None


def initial_create_state(name: str = "", prefix: bool = False) -> CreateFormState:
    """Fresh form, optionally pre-filled with ``name`` and the cursor at its end."""
    return CreateFormState(text=name, cursor_position=len(name), prefix=prefix)


_NAME_EDITS: dict[ActionType, Callable[[text_field.TextFieldState], text_field.TextFieldState]] = {
    ActionType.ARROW_LEFT: text_field.move_left,
    ActionType.ARROW_RIGHT: text_field.move_right,
    ActionType.HOME: text_field.move_to_start,
    ActionType.END: text_field.move_to_end,
    ActionType.WORD_LEFT: text_field.move_word_left,
    ActionType.WORD_RIGHT: text_field.move_word_right,
    ActionType.BACKSPACE: text_field.delete_back,
    ActionType.CLEAR_TO_START: text_field.clear_to_start,
}


def _edit_name(
    state: CreateFormState,
    edit: Callable[[text_field.TextFieldState], text_field.TextFieldState],
) -> CreateFormState:
    edited = edit(text_field.TextFieldState(state.text, state.cursor_position))
    return replace(state, text=edited.text, cursor_position=edited.cursor_position)


def _focus(state: CreateFormState, step: int) -> CreateFormState:
    return replace(state, focused_field=(state.focused_field + step) % FIELD_COUNT)


def create_reducer(state: CreateFormState, action: Action) -> CreateResult:
    """Apply one action to the create form.

    Text and cursor actions only touch the name while it has focus. Left/right
    and space flip the focused toggle instead.
    """
    kind = action.type
    on_name = state.focused_field == FIELD_NAME

    if kind in (ActionType.TAB, ActionType.ARROW_DOWN):
        return CreateResult(done=False, state=_focus(state, 1))
    if kind is ActionType.ARROW_UP:
        return CreateResult(done=False, state=_focus(state, -1))

    if kind is ActionType.SUBMIT or kind is ActionType.ENTER:
        if not state.text.strip():
            return CreateResult(done=False, state=state, error=EMPTY_NAME_ERROR)
        return CreateResult(done=True, state=state)

    if kind is ActionType.CANCEL:
        return CreateResult(done=True, state=initial_create_state())

    if kind is ActionType.INPUT_TEXT:
        if not on_name or not action.text:
            return CreateResult(done=False, state=state)
        return CreateResult(
            done=False,
            state=_edit_name(state, lambda field: text_field.insert_char(field, action.text)),
        )

    if kind is ActionType.SPACE:
        if on_name:
            return CreateResult(
                done=False,
                state=_edit_name(state, lambda field: text_field.insert_char(field, " ")),
            )
        if state.focused_field == FIELD_KIND:
            return CreateResult(done=False, state=replace(state, is_file=not state.is_file))
        return CreateResult(done=False, state=replace(state, prefix=not state.prefix))

    if kind in (ActionType.ARROW_LEFT, ActionType.ARROW_RIGHT) and state.focused_field == FIELD_KIND:
        return CreateResult(done=False, state=replace(state, is_file=not state.is_file))

    edit = _NAME_EDITS.get(kind)
    if edit is not None and on_name:
        return CreateResult(done=False, state=_edit_name(state, edit))

    return CreateResult(done=False, state=state)
