"""Terminal control helpers for the interactive screens.

Owns raw-mode lifecycle and alternate-screen switching, plus the frame
writes the screen loop performs.
"""

from __future__ import annotations

import contextlib
import os
import shutil
import termios
import tty

ENTER_ALT_SCREEN = "\x1b[?1049h"
LEAVE_ALT_SCREEN = "\x1b[?1049l"
SHOW_CURSOR = "\x1b[?25h"
HIDE_CURSOR = "\x1b[?25l"
CLEAR_SCREEN = "\x1b[2J\x1b[H"


class TerminalController:
    """Manage terminal mode transitions for one interactive session."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        """Capture tty state and bind stdin/stdout file descriptors."""
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._saved_tty_state = termios.tcgetattr(stdin_fd)

    def write(self, text: str) -> None:
        os.write(self.stdout_fd, text.encode("utf-8"))

    def size(self) -> tuple[int, int]:
        """Return ``(columns, rows)`` with a conservative fallback."""
        term = shutil.get_terminal_size((80, 24))
        return max(1, term.columns), max(1, term.lines)

    def enable_tui_mode(self) -> None:
        """Enter raw alternate-screen mode."""
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        self.write(ENTER_ALT_SCREEN + CLEAR_SCREEN)

    def disable_tui_mode(self) -> None:
        """Restore the main screen buffer and the saved tty settings."""
        self.write(SHOW_CURSOR + LEAVE_ALT_SCREEN)
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager that brackets code with TUI enter/exit calls."""
        try:
            self.enable_tui_mode()
            yield
        finally:
            self.disable_tui_mode()
