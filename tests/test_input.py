"""Regression tests for raw-key decoding and per-screen key bindings.

Covers ESC timing, arrow/word sequences, UTF-8 text, and the action layer
that folds pasted bursts into one text insert.
"""

from __future__ import annotations

import os
import time
import unittest

from stash import input as input_mod
from stash.actions import Action, ActionType, input_text


def _read_all(payload: bytes, count: int) -> list[str]:
    read_fd, write_fd = os.pipe()
    try:
        os.write(write_fd, payload)
        return [input_mod.read_key(read_fd, timeout_ms=20) for _ in range(count)]
    finally:
        os.close(read_fd)
        os.close(write_fd)


class ReadKeyRegressionTests(unittest.TestCase):
    def setUp(self) -> None:
        input_mod._PENDING_BYTES.clear()

    def tearDown(self) -> None:
        input_mod._PENDING_BYTES.clear()

    def test_single_escape_returns_esc_without_second_keypress(self) -> None:
        read_fd, write_fd = os.pipe()
        try:
            os.write(write_fd, b"\x1b")
            started = time.monotonic()
            key = input_mod.read_key(read_fd, timeout_ms=20)
            elapsed = time.monotonic() - started
        finally:
            os.close(read_fd)
            os.close(write_fd)

        self.assertEqual(key, "ESC")
        self.assertLess(elapsed, 0.2)

    def test_escape_does_not_swallow_following_printable_key(self) -> None:
        self.assertEqual(_read_all(b"\x1bq", 2), ["ESC", "q"])

    def test_navigation_sequences(self) -> None:
        cases = {
            b"\x1b[A": "UP",
            b"\x1b[B": "DOWN",
            b"\x1b[C": "RIGHT",
            b"\x1b[D": "LEFT",
            b"\x1b[H": "HOME",
            b"\x1b[F": "END",
            b"\x1bOH": "HOME",
            b"\x1bOF": "END",
            b"\x1b[1~": "HOME",
            b"\x1b[7~": "HOME",
            b"\x1b[4~": "END",
            b"\x1b[8~": "END",
            b"\x1b[3~": "DELETE",
        }
        for payload, expected in cases.items():
            with self.subTest(payload=payload):
                self.assertEqual(_read_all(payload, 1), [expected])

    def test_word_motion_sequences(self) -> None:
        cases = {
            b"\x1bb": "ALT_LEFT",
            b"\x1bf": "ALT_RIGHT",
            b"\x1b[1;3D": "ALT_LEFT",
            b"\x1b[1;3C": "ALT_RIGHT",
            b"\x1b[1;9D": "ALT_LEFT",
            b"\x1b[1;9C": "ALT_RIGHT",
            b"\x1b[1;5D": "CTRL_LEFT",
            b"\x1b[1;5C": "CTRL_RIGHT",
        }
        for payload, expected in cases.items():
            with self.subTest(payload=payload):
                self.assertEqual(_read_all(payload, 1), [expected])

    def test_control_keys(self) -> None:
        self.assertEqual(
            _read_all(b"\x01\x05\x7f\x08\t\r\n\x03\x04\x15", 10),
            ["CTRL_A", "CTRL_E", "BACKSPACE", "BACKSPACE", "TAB", "ENTER_CR", "ENTER_LF", "CTRL_C", "CTRL_D", "CTRL_U"],
        )

    def test_multibyte_utf8_is_decoded_whole(self) -> None:
        self.assertEqual(_read_all("é🙂".encode("utf-8"), 2), ["é", "🙂"])

    def test_unknown_csi_sequence_is_consumed(self) -> None:
        self.assertEqual(_read_all(b"\x1b[99Zx", 2), ["UNKNOWN", "x"])

    def test_timeout_without_input_returns_empty(self) -> None:
        self.assertEqual(_read_all(b"", 1), [""])


class BindingTests(unittest.TestCase):
    def test_search_bindings(self) -> None:
        self.assertEqual(input_mod.search_action_for_key("CTRL_D"), Action(ActionType.DELETE_ITEM))
        self.assertEqual(input_mod.search_action_for_key("ENTER_CR"), Action(ActionType.ENTER))
        self.assertEqual(input_mod.search_action_for_key(" "), input_text(" "))
        self.assertEqual(input_mod.search_action_for_key("ESC"), Action(ActionType.CANCEL))
        self.assertEqual(input_mod.search_action_for_key("CTRL_C"), Action(ActionType.CANCEL))
        self.assertEqual(input_mod.search_action_for_key("ALT_LEFT"), Action(ActionType.WORD_LEFT))

    def test_create_bindings(self) -> None:
        self.assertEqual(input_mod.create_action_for_key("ENTER_LF"), Action(ActionType.SUBMIT))
        self.assertEqual(input_mod.create_action_for_key(" "), Action(ActionType.SPACE))
        self.assertEqual(input_mod.create_action_for_key("CTRL_U"), Action(ActionType.CLEAR_TO_START))
        self.assertIsNone(input_mod.create_action_for_key("CTRL_D"))

    def test_shift_arrows_move_like_plain_arrows(self) -> None:
        self.assertEqual(_read_all(b"\x1b[1;2D\x1b[1;2C", 2), ["SHIFT_LEFT", "SHIFT_RIGHT"])
        for bind in (input_mod.search_action_for_key, input_mod.create_action_for_key):
            self.assertEqual(bind("SHIFT_LEFT"), Action(ActionType.ARROW_LEFT))
            self.assertEqual(bind("SHIFT_RIGHT"), Action(ActionType.ARROW_RIGHT))

    def test_unbound_named_keys_and_empty_map_to_none(self) -> None:
        for key in ("", "DELETE", "UNKNOWN"):
            with self.subTest(key=key):
                self.assertIsNone(input_mod.search_action_for_key(key))

    def test_printable_character_becomes_text(self) -> None:
        self.assertEqual(input_mod.search_action_for_key("ß"), input_text("ß"))


class ScriptedKeys:
    def __init__(self, keys: list[str]) -> None:
        self.keys = list(keys)
        self.timeouts: list[int | None] = []

    def __call__(self, timeout_ms: int | None) -> str:
        self.timeouts.append(timeout_ms)
        return self.keys.pop(0) if self.keys else ""


class ActionReaderTests(unittest.TestCase):
    def test_waiting_text_is_folded_into_one_insert(self) -> None:
        keys = ScriptedKeys(["E", "N", "D", "TAB", "x"])
        reader = input_mod.ActionReader(keys, input_mod.search_action_for_key)

        self.assertEqual(reader.next_action(), input_text("END"))
        self.assertEqual(reader.next_action(), Action(ActionType.TAB))
        self.assertEqual(reader.next_action(), input_text("x"))
        self.assertEqual(keys.timeouts[:4], [None, 0, 0, 0])

    def test_named_key_is_not_batched(self) -> None:
        reader = input_mod.ActionReader(ScriptedKeys(["UP", "a"]), input_mod.search_action_for_key)
        self.assertEqual(reader.next_action(), Action(ActionType.ARROW_UP))
        self.assertEqual(reader.next_action(), input_text("a"))

    def test_batch_size_is_capped(self) -> None:
        reader = input_mod.ActionReader(ScriptedKeys(list("abcdef")), input_mod.search_action_for_key, max_batch=4)
        self.assertEqual(reader.next_action(), input_text("abcd"))
        self.assertEqual(reader.next_action(), input_text("ef"))

    def test_blocking_empty_read_marks_reader_closed(self) -> None:
        reader = input_mod.ActionReader(ScriptedKeys(["a"]), input_mod.search_action_for_key)
        self.assertEqual(reader.next_action(), input_text("a"))
        self.assertFalse(reader.closed)
        self.assertIsNone(reader.next_action())
        self.assertTrue(reader.closed)

    def test_timed_out_read_does_not_close(self) -> None:
        reader = input_mod.ActionReader(ScriptedKeys([]), input_mod.search_action_for_key)
        self.assertIsNone(reader.next_action(timeout_ms=10))
        self.assertFalse(reader.closed)


if __name__ == "__main__":
    unittest.main()
