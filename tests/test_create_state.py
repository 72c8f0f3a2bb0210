"""Create-form reducer tests: focus cycling, toggles, and validation."""

from __future__ import annotations

import unittest

from stash.actions import Action, ActionType, input_text
from stash.create_state import (
    EMPTY_NAME_ERROR,
    FIELD_KIND,
    FIELD_NAME,
    FIELD_PREFIX,
    CreateFormState,
    create_reducer,
    initial_create_state,
)


def _apply(state: CreateFormState, *actions: Action) -> CreateFormState:
    for action in actions:
        result = create_reducer(state, action)
        state = result.state
    return state


class CreateReducerTests(unittest.TestCase):
    def test_initial_state_prefills_name_with_cursor_at_end(self) -> None:
        state = initial_create_state("draft")
        self.assertEqual(state.text, "draft")
        self.assertEqual(state.cursor_position, 5)
        self.assertEqual(state.focused_field, FIELD_NAME)
        self.assertFalse(state.is_file)
        self.assertFalse(state.prefix)

    def test_tab_and_arrows_cycle_focus(self) -> None:
        state = initial_create_state()
        state = _apply(state, Action(ActionType.TAB))
        self.assertEqual(state.focused_field, FIELD_KIND)
        state = _apply(state, Action(ActionType.ARROW_DOWN))
        self.assertEqual(state.focused_field, FIELD_PREFIX)
        state = _apply(state, Action(ActionType.TAB))
        self.assertEqual(state.focused_field, FIELD_NAME)
        state = _apply(state, Action(ActionType.ARROW_UP))
        self.assertEqual(state.focused_field, FIELD_PREFIX)

    def test_text_and_space_edit_name_when_focused(self) -> None:
        state = _apply(initial_create_state(), input_text("my"), Action(ActionType.SPACE), input_text("file"))
        self.assertEqual(state.text, "my file")
        self.assertEqual(state.cursor_position, 7)

    def test_text_is_ignored_off_the_name_field(self) -> None:
        state = _apply(initial_create_state("a"), Action(ActionType.TAB), input_text("zzz"), Action(ActionType.BACKSPACE))
        self.assertEqual(state.text, "a")

    def test_space_and_arrows_toggle_kind(self) -> None:
        state = _apply(initial_create_state(), Action(ActionType.TAB), Action(ActionType.SPACE))
        self.assertTrue(state.is_file)
        state = _apply(state, Action(ActionType.ARROW_LEFT))
        self.assertFalse(state.is_file)
        state = _apply(state, Action(ActionType.ARROW_RIGHT))
        self.assertTrue(state.is_file)
        self.assertFalse(state.prefix)

    def test_space_toggles_prefix_on_prefix_field(self) -> None:
        state = _apply(initial_create_state(), Action(ActionType.ARROW_UP), Action(ActionType.SPACE))
        self.assertEqual(state.focused_field, FIELD_PREFIX)
        self.assertTrue(state.prefix)
        self.assertFalse(state.is_file)

    def test_arrows_move_cursor_on_name_field(self) -> None:
        state = _apply(initial_create_state("abc"), Action(ActionType.ARROW_LEFT), Action(ActionType.ARROW_LEFT))
        self.assertEqual(state.cursor_position, 1)
        state = _apply(state, Action(ActionType.CLEAR_TO_START))
        self.assertEqual(state.text, "bc")
        self.assertEqual(state.cursor_position, 0)

    def test_submit_with_blank_name_reports_error_and_continues(self) -> None:
        for name in ("", "   "):
            with self.subTest(name=name):
                result = create_reducer(initial_create_state(name), Action(ActionType.SUBMIT))
                self.assertFalse(result.done)
                self.assertEqual(result.error, EMPTY_NAME_ERROR)

    def test_error_clears_on_next_action(self) -> None:
        state = initial_create_state()
        self.assertIsNotNone(create_reducer(state, Action(ActionType.SUBMIT)).error)
        self.assertIsNone(create_reducer(state, input_text("x")).error)

    def test_submit_with_name_finishes_with_form_values(self) -> None:
        state = _apply(initial_create_state("notes.md"), Action(ActionType.TAB), Action(ActionType.SPACE))
        result = create_reducer(state, Action(ActionType.SUBMIT))
        self.assertTrue(result.done)
        self.assertEqual(result.state.text, "notes.md")
        self.assertTrue(result.state.is_file)

    def test_cancel_finishes_with_fresh_form(self) -> None:
        result = create_reducer(initial_create_state("draft"), Action(ActionType.CANCEL))
        self.assertTrue(result.done)
        self.assertEqual(result.state, initial_create_state())


if __name__ == "__main__":
    unittest.main()
