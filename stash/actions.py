"""Discrete UI actions consumed by the search and create reducers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ActionType(Enum):
    INPUT_TEXT = "input_text"
    BACKSPACE = "backspace"
    CLEAR_TO_START = "clear_to_start"
    SPACE = "space"
    TAB = "tab"
    ARROW_UP = "arrow_up"
    ARROW_DOWN = "arrow_down"
    ARROW_LEFT = "arrow_left"
    ARROW_RIGHT = "arrow_right"
    HOME = "home"
    END = "end"
    WORD_LEFT = "word_left"
    WORD_RIGHT = "word_right"
    DELETE_ITEM = "delete_item"
    ENTER = "enter"
    SUBMIT = "submit"
    CANCEL = "cancel"


@dataclass(frozen=True)
class Action:
    """One decoded user action; ``text`` is only meaningful for ``INPUT_TEXT``."""

    type: ActionType
    text: str = ""


def input_text(text: str) -> Action:
    return Action(ActionType.INPUT_TEXT, text)
