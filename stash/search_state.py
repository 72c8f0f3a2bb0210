"""Search screen reducer.

The query is edited with the text-field helpers; every query edit re-lists
the stash and re-ranks the full, fresh item set. ``selected_index`` may point
one past the last item, which addresses the virtual "create new" row.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from functools import partial
from pathlib import Path

from . import text_field
from .actions import Action, ActionType
from .config import StashConfig
from .fuzzy import fuzzy
from .items import StashItem
from .operations import delete_stash_item, list_stash_items

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchOps:
    """Filesystem collaborators used by ``search_reducer``."""

    list_items: Callable[[], list[StashItem]]
    delete_item: Callable[[Path], bool]
    now: Callable[[], float] = time.time

    @classmethod
    def for_config(cls, config: StashConfig) -> SearchOps:
        return cls(
            list_items=partial(list_stash_items, config),
            delete_item=delete_stash_item,
        )


@dataclass(frozen=True)
class SearchState:
    query: str = ""
    cursor_position: int = 0
    selected_index: int = 0
    items: tuple[StashItem, ...] = field(default_factory=tuple)

    @property
    def create_selected(self) -> bool:
        return self.selected_index == len(self.items)

    @property
    def selected_item(self) -> StashItem | None:
        if 0 <= self.selected_index < len(self.items):
            return self.items[self.selected_index]
        return None


@dataclass(frozen=True)
class SearchResult:
    done: bool
    state: SearchState
    create_new: bool = False


def rank_items(query: str, ops: SearchOps) -> tuple[StashItem, ...]:
    """Fetch a fresh listing and rank it against ``query``."""
    ranked = tuple(fuzzy(query, ops.list_items(), now=ops.now()))
    logger.debug("ranked %d items for query %r", len(ranked), query)
    return ranked


def initial_search_state(ops: SearchOps, initial_query: str = "") -> SearchState:
    return SearchState(
        query=initial_query,
        cursor_position=len(initial_query),
        selected_index=0,
        items=rank_items(initial_query, ops),
    )


def _field(state: SearchState) -> text_field.TextFieldState:
    return text_field.TextFieldState(state.query, state.cursor_position)


def _with_field(state: SearchState, edited: text_field.TextFieldState) -> SearchState:
    return replace(state, query=edited.text, cursor_position=edited.cursor_position)


def _requery(edited: text_field.TextFieldState, ops: SearchOps) -> SearchResult:
    return SearchResult(
        done=False,
        state=SearchState(
            query=edited.text,
            cursor_position=edited.cursor_position,
            selected_index=0,
            items=rank_items(edited.text, ops),
        ),
    )


def _continue(state: SearchState) -> SearchResult:
    return SearchResult(done=False, state=state)


_CURSOR_MOVES: dict[ActionType, Callable[[text_field.TextFieldState], text_field.TextFieldState]] = {
    ActionType.ARROW_LEFT: text_field.move_left,
    ActionType.ARROW_RIGHT: text_field.move_right,
    ActionType.HOME: text_field.move_to_start,
    ActionType.END: text_field.move_to_end,
    ActionType.WORD_LEFT: text_field.move_word_left,
    ActionType.WORD_RIGHT: text_field.move_word_right,
}


def _delete_selected(state: SearchState, ops: SearchOps) -> SearchResult:
    target = state.selected_item
    if target is None:
        return _continue(state)
    if not ops.delete_item(target.path):
        logger.info("delete target vanished: %s", target.path)
    remaining = tuple(item for item in state.items if item.path != target.path)
    return _continue(
        replace(
            state,
            items=remaining,
            selected_index=min(state.selected_index, len(remaining)),
        )
    )


def search_reducer(state: SearchState, action: Action, ops: SearchOps) -> SearchResult:
    """Apply one action to the search screen state."""
    kind = action.type

    if kind in (ActionType.INPUT_TEXT, ActionType.SPACE):
        text = action.text if kind is ActionType.INPUT_TEXT else " "
        if not text:
            return _continue(state)
        return _requery(text_field.insert_char(_field(state), text), ops)

    if kind is ActionType.BACKSPACE:
        if state.cursor_position == 0:
            refreshed = rank_items(state.query, ops)
            return _continue(
                replace(
                    state,
                    items=refreshed,
                    selected_index=min(state.selected_index, len(refreshed)),
                )
            )
        return _requery(text_field.delete_back(_field(state)), ops)

    if kind is ActionType.CLEAR_TO_START:
        if state.cursor_position == 0:
            return _continue(state)
        return _requery(text_field.clear_to_start(_field(state)), ops)

    if kind is ActionType.TAB:
        slots = len(state.items) + 1
        return _continue(replace(state, selected_index=(state.selected_index + 1) % slots))

    if kind is ActionType.ARROW_UP:
        return _continue(replace(state, selected_index=max(0, state.selected_index - 1)))

    if kind is ActionType.ARROW_DOWN:
        return _continue(
            replace(state, selected_index=min(len(state.items), state.selected_index + 1))
        )

    move = _CURSOR_MOVES.get(kind)
    if move is not None:
        return _continue(_with_field(state, move(_field(state))))

    if kind is ActionType.DELETE_ITEM:
        return _delete_selected(state, ops)

    if kind in (ActionType.ENTER, ActionType.SUBMIT):
        if state.create_selected:
            return SearchResult(done=True, state=state, create_new=True)
        return _continue(state)

    if kind is ActionType.CANCEL:
        return SearchResult(done=True, state=initial_search_state(ops))

    return _continue(state)
