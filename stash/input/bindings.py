"""Key-token to action tables for the search and create screens."""

from __future__ import annotations

from collections.abc import Callable, Mapping

from ..actions import Action, ActionType, input_text

_EDITING_BINDINGS: dict[str, ActionType] = {
    "ESC": ActionType.CANCEL,
    "CTRL_C": ActionType.CANCEL,
    "TAB": ActionType.TAB,
    "UP": ActionType.ARROW_UP,
    "DOWN": ActionType.ARROW_DOWN,
    "LEFT": ActionType.ARROW_LEFT,
    "SHIFT_LEFT": ActionType.ARROW_LEFT,
    "RIGHT": ActionType.ARROW_RIGHT,
    "SHIFT_RIGHT": ActionType.ARROW_RIGHT,
    "HOME": ActionType.HOME,
    "CTRL_A": ActionType.HOME,
    "END": ActionType.END,
    "CTRL_E": ActionType.END,
    "ALT_LEFT": ActionType.WORD_LEFT,
    "CTRL_LEFT": ActionType.WORD_LEFT,
    "ALT_RIGHT": ActionType.WORD_RIGHT,
    "CTRL_RIGHT": ActionType.WORD_RIGHT,
    "BACKSPACE": ActionType.BACKSPACE,
    "CTRL_U": ActionType.CLEAR_TO_START,
}

SEARCH_BINDINGS: dict[str, ActionType] = {
    **_EDITING_BINDINGS,
    "CTRL_D": ActionType.DELETE_ITEM,
    "ENTER_CR": ActionType.ENTER,
    "ENTER_LF": ActionType.ENTER,
}

CREATE_BINDINGS: dict[str, ActionType] = {
    **_EDITING_BINDINGS,
    "ENTER_CR": ActionType.SUBMIT,
    "ENTER_LF": ActionType.SUBMIT,
    " ": ActionType.SPACE,
}


def action_for_key(key: str, bindings: Mapping[str, ActionType]) -> Action | None:
    """Map one key token to an action.

    Bound tokens win; any other single printable character becomes text
    input. Unbound named keys map to ``None``.
    """
    if not key:
        return None
    action_type = bindings.get(key)
    if action_type is not None:
        return Action(action_type)
    if len(key) == 1 and key.isprintable():
        return input_text(key)
    return None


def search_action_for_key(key: str) -> Action | None:
    return action_for_key(key, SEARCH_BINDINGS)


def create_action_for_key(key: str) -> Action | None:
    return action_for_key(key, CREATE_BINDINGS)


class ActionReader:
    """Pull actions from a key source, folding waiting text into one insert.

    Pasted text arrives as a burst of characters; joining the burst keeps it a
    single ``INPUT_TEXT`` action so the search list is re-ranked once.
    """

    def __init__(
        self,
        read_key: Callable[[int | None], str],
        to_action: Callable[[str], Action | None],
        max_batch: int = 4096,
    ) -> None:
        self._read_key = read_key
        self._to_action = to_action
        self._max_batch = max(1, max_batch)
        self._pending_key: str | None = None
        self.closed = False

    def _take_key(self, timeout_ms: int | None) -> str:
        if self._pending_key is not None:
            key, self._pending_key = self._pending_key, None
            return key
        key = self._read_key(timeout_ms)
        if not key and timeout_ms is None:
            # A blocking read only comes back empty at end of input.
            self.closed = True
        return key

    def next_action(self, timeout_ms: int | None = None) -> Action | None:
        """Return the next action, or ``None`` for unbound keys and timeouts."""
        action = self._to_action(self._take_key(timeout_ms))
        if action is None or action.type is not ActionType.INPUT_TEXT:
            return action

        chunks = [action.text]
        while len(chunks) < self._max_batch:
            key = self._take_key(0)
            if not key:
                break
            follow = self._to_action(key)
            if follow is None or follow.type is not ActionType.INPUT_TEXT:
                self._pending_key = key
                break
            chunks.append(follow.text)
        return input_text("".join(chunks))
