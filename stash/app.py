"""Interactive session wiring for the search and create screens.

Each session loop renders, pulls one action, and hands it to the pure
reducer. Terminal I/O is injected through ``SessionIO`` so the loops can be
driven from scripted keys.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Callable
from dataclasses import dataclass
from functools import partial
from typing import TextIO

from .actions import Action, ActionType
from .config import StashConfig
from .create_state import CreateFormState, create_reducer, initial_create_state
from .input import ActionReader, create_action_for_key, read_key, search_action_for_key
from .operations import CreateItemRequest, CreateItemResult, create_stash_item
from .render import frame_to_ansi, render_create_screen, render_search_screen
from .search_state import SearchOps, initial_search_state, search_reducer
from .terminal import TerminalController
from .ui_theme import UITheme, resolve_theme

logger = logging.getLogger(__name__)

COMMAND_SEARCH = "search"
COMMAND_CREATE = "create"


@dataclass(frozen=True)
class SessionIO:
    """Terminal collaborators used by the session loops."""

    read_key: Callable[[int | None], str]
    write: Callable[[str], None]
    size: Callable[[], tuple[int, int]]


def run_search_session(
    io: SessionIO,
    ops: SearchOps,
    theme: UITheme,
    initial_query: str = "",
) -> str | None:
    """Run the search screen.

    Returns the query to pre-fill the create form with when the user picks the
    create row, or ``None`` when the search is cancelled.
    """
    reader = ActionReader(io.read_key, search_action_for_key)
    state = initial_search_state(ops, initial_query)
    while True:
        columns, rows = io.size()
        io.write(frame_to_ansi(render_search_screen(state, columns, rows, ops.now(), theme)))
        action = reader.next_action()
        if reader.closed:
            action = Action(ActionType.CANCEL)
        if action is None:
            continue
        result = search_reducer(state, action, ops)
        if result.done:
            if result.create_new:
                logger.debug("search handed off to create with %r", result.state.query)
                return result.state.query
            return None
        state = result.state


def run_create_session(
    io: SessionIO,
    theme: UITheme,
    initial_name: str = "",
    prefix: bool = False,
    date: str | None = None,
) -> CreateFormState | None:
    """Run the create form; return the submitted form or ``None`` on cancel."""
    reader = ActionReader(io.read_key, create_action_for_key)
    state = initial_create_state(initial_name, prefix=prefix)
    error: str | None = None
    while True:
        columns, _rows = io.size()
        io.write(frame_to_ansi(render_create_screen(state, columns, error, date, theme)))
        action = reader.next_action()
        if reader.closed:
            action = Action(ActionType.CANCEL)
        if action is None:
            continue
        result = create_reducer(state, action)
        if result.done:
            return None if action.type is ActionType.CANCEL else result.state
        state = result.state
        error = result.error


def run_interactive(
    config: StashConfig,
    io: SessionIO,
    theme: UITheme,
    command: str = COMMAND_SEARCH,
    query: str = "",
    date: str | None = None,
) -> CreateItemResult | None:
    """Drive search and create screens; ``None`` means nothing was created."""
    name = query
    if command == COMMAND_SEARCH:
        handoff = run_search_session(io, SearchOps.for_config(config), theme, query)
        if handoff is None:
            return None
        name = handoff

    form = run_create_session(io, theme, name, prefix=config.prefix_by_default, date=date)
    if form is None:
        return None
    return create_stash_item(
        CreateItemRequest(text=form.text, is_file=form.is_file, prefix=form.prefix),
        config,
        date=date,
    )


def report_outcome(
    outcome: CreateItemResult | None,
    theme: UITheme,
    stream: TextIO | None = None,
) -> int:
    """Print the create message (green or red) and return the exit code."""
    if outcome is None:
        return 0
    out = stream if stream is not None else sys.stdout
    color = theme.success if outcome.success else theme.error
    out.write(f"{color}{outcome.message}{theme.reset}\n")
    out.flush()
    return 0 if outcome.success else 1


def run_app(
    config: StashConfig,
    command: str = COMMAND_SEARCH,
    query: str = "",
    no_color: bool = False,
) -> int:
    """Run the interactive UI on the controlling terminal and return the exit code."""
    if not sys.stdin.isatty():
        print("stash: an interactive terminal is required", file=sys.stderr)
        return 1

    theme = resolve_theme(config.theme, no_color=no_color or bool(os.environ.get("NO_COLOR")))
    stdin_fd = sys.stdin.fileno()
    terminal = TerminalController(stdin_fd, sys.stdout.fileno())
    io = SessionIO(
        read_key=partial(read_key, stdin_fd),
        write=terminal.write,
        size=terminal.size,
    )
    logger.debug("starting %s session in %s", command, config.stash_dir)
    with terminal.raw_mode():
        outcome = run_interactive(config, io, theme, command=command, query=query)
    return report_outcome(outcome, theme)
