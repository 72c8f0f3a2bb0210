"""Filesystem collaborators: list, create, and delete stash items.

The stash is one flat directory; items are its direct children. Every
function takes the ``StashConfig`` explicitly.
"""

from __future__ import annotations

import datetime
import logging
import os
import shutil
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from .config import StashConfig, ensure_stash_dir
from .items import KIND_DIRECTORY, KIND_FILE, StashItem

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CreateItemRequest:
    text: str
    is_file: bool
    prefix: bool


@dataclass(frozen=True)
class CreatedItem:
    name: str
    kind: str
    path: Path
    mtime: float | None = None
    size: int | None = None


@dataclass(frozen=True)
class CreateItemResult:
    """Outcome of ``create_stash_item``; failures are values, not exceptions."""

    success: bool
    message: str
    data: CreatedItem


@lru_cache(maxsize=1)
def current_date() -> str:
    """Return today's ISO date, fixed for the lifetime of the process."""
    return datetime.date.today().isoformat()


def compose_item_name(text: str, prefix: bool, date: str | None = None) -> str:
    """Return the on-disk name for ``text``, date-prefixed when requested."""
    if not prefix:
        return text
    return f"{date or current_date()}-{text}"


def list_stash_items(config: StashConfig) -> list[StashItem]:
    """Snapshot the stash directory, newest modification first."""
    ensure_stash_dir(config)
    items: list[StashItem] = []
    with os.scandir(config.stash_dir) as entries:
        for entry in entries:
            try:
                stat = entry.stat()
            except FileNotFoundError:
                # Dangling symlink: describe the link itself.
                try:
                    stat = entry.stat(follow_symlinks=False)
                except FileNotFoundError:
                    logger.debug("entry vanished while listing: %s", entry.path)
                    continue
            items.append(
                StashItem(
                    name=entry.name,
                    path=Path(entry.path),
                    kind=KIND_DIRECTORY if entry.is_dir() else KIND_FILE,
                    mtime=stat.st_mtime,
                    size=int(stat.st_size),
                )
            )
    items.sort(key=lambda item: item.mtime, reverse=True)
    return items


def is_flat_name(name: str) -> bool:
    """Return whether ``name`` addresses a single direct child of the stash."""
    if name in ("", ".", ".."):
        return False
    separators = {"/", os.sep}
    if os.altsep:
        separators.add(os.altsep)
    return not any(sep in name for sep in separators)


def stash_is_empty(config: StashConfig) -> bool:
    return not list_stash_items(config)


def create_stash_item(
    request: CreateItemRequest,
    config: StashConfig,
    date: str | None = None,
) -> CreateItemResult:
    """Create an empty file or directory in the stash.

    Never overwrites: an existing target, dangling symlinks included, yields
    ``success=False``. Names that are not a single flat entry are refused.
    """
    name = compose_item_name(request.text, request.prefix, date)
    full_path = config.stash_dir / name
    kind = KIND_FILE if request.is_file else KIND_DIRECTORY

    if not is_flat_name(name):
        logger.info("refusing non-flat item name %r", name)
        return CreateItemResult(
            success=False,
            message=f"Name must be a single file or directory name: {name}",
            data=CreatedItem(name=name, kind=kind, path=full_path),
        )

    if os.path.lexists(full_path):
        logger.info("refusing to overwrite existing %s", full_path)
        return CreateItemResult(
            success=False,
            message=f"File/directory already exists: {name}",
            data=CreatedItem(name=name, kind=kind, path=full_path),
        )

    ensure_stash_dir(config)
    if request.is_file:
        full_path.touch(exist_ok=False)
    else:
        full_path.mkdir()
    stat = full_path.stat()
    logger.info("created %s %s", kind, full_path)
    return CreateItemResult(
        success=True,
        message=f"Created {kind}: {name}",
        data=CreatedItem(
            name=name,
            kind=kind,
            path=full_path,
            mtime=stat.st_mtime,
            size=int(stat.st_size),
        ),
    )


def delete_stash_item(path: Path) -> bool:
    """Remove ``path`` recursively; return ``False`` when it does not exist."""
    if not os.path.lexists(path):
        return False
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    else:
        path.unlink()
    logger.info("deleted %s", path)
    return True
