"""Stash item datatypes shared by listing, ranking, and rendering code."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

KIND_FILE = "file"
KIND_DIRECTORY = "directory"


@dataclass(frozen=True)
class StashItem:
    """One file or directory entry in the stash directory.

    ``score`` and ``matched_indices`` belong to the query the item was last
    ranked against; ranking returns scored copies and never edits in place.
    """

    name: str
    path: Path
    kind: str
    mtime: float
    size: int
    score: int = 0
    matched_indices: tuple[int, ...] = ()

    @property
    def is_dir(self) -> bool:
        return self.kind == KIND_DIRECTORY
