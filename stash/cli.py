"""Command-line front door for stash.

Parses the optional ``create`` command and search query, resolves config,
then dispatches into the interactive search or create screens.
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace

from .app import COMMAND_CREATE, COMMAND_SEARCH, run_app
from .config import LOG_PATH, ensure_stash_dir, load_stash_config
from .operations import stash_is_empty
from .ui_theme import available_theme_names

logger = logging.getLogger(__name__)

MAIN_EPILOG = """\
commands:
  create          open the create screen for a new file/directory

examples:
  stash           browse and search all items
  stash notes     browse and search with "notes" as the initial search
  stash create    create a new file or directory
"""


def _setup_logging(verbose: bool) -> None:
    """Send debug logs to the stash log file; stay silent otherwise."""
    if not verbose:
        return
    LOG_PATH.parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        level=logging.DEBUG,
        filename=str(LOG_PATH),
        encoding="utf-8",
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help=f"Write debug logs to {LOG_PATH}.",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stash",
        usage="stash [command] [query]",
        description="Browse, search, and manage stashed files and directories.",
        epilog=MAIN_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "query",
        nargs="*",
        help="Open the search screen with this query as the initial search.",
    )
    _add_common_arguments(parser)
    return parser


def build_create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stash create",
        usage="stash create [name]",
        description="Open the create screen for a new file/directory.",
    )
    parser.add_argument("name", nargs="*", help="Pre-fill the name field.")
    _add_common_arguments(parser)
    return parser


def main() -> None:
    """Parse CLI arguments and launch the search or create screen.

    An empty stash skips search and opens the create screen directly, with
    any query carried over as the initial name.
    """
    argv = sys.argv[1:]
    if argv and argv[0] == COMMAND_CREATE:
        command = COMMAND_CREATE
        args = build_create_parser().parse_args(argv[1:])
        text = " ".join(args.name)
    else:
        command = COMMAND_SEARCH
        args = build_parser().parse_args(argv)
        text = " ".join(args.query)

    _setup_logging(args.verbose)

    config = load_stash_config()
    if args.theme is not None:
        config = replace(config, theme=args.theme)
    if ensure_stash_dir(config):
        print(f"Created stash directory: {config.stash_dir}", file=sys.stderr)

    if command == COMMAND_SEARCH and stash_is_empty(config):
        logger.debug("stash is empty, opening create screen")
        command = COMMAND_CREATE

    raise SystemExit(run_app(config, command=command, query=text, no_color=args.no_color))


if __name__ == "__main__":
    main()
