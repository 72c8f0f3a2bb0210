"""Module entrypoint for ``python -m stash``.

Argument parsing and config resolution happen in ``stash.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
