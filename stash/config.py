"""Stash configuration: storage directory, theme, and create-form defaults.

Values come from the ``STASH_DIR`` environment variable and a JSON config
file under the platform config directory. Config file access is defensive:
malformed or missing config falls back to defaults.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir, user_log_dir

APP_NAME = "stash"
CONFIG_FILENAME = "config.json"
LOG_FILENAME = "stash.log"
STASH_DIR_ENV = "STASH_DIR"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
LOG_PATH = Path(user_log_dir(APP_NAME, appauthor=False)) / LOG_FILENAME
DEFAULT_STASH_DIR = Path.home() / ".stash"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StashConfig:
    """Explicit configuration threaded into every filesystem collaborator."""

    stash_dir: Path
    theme: str = "default"
    prefix_by_default: bool = False


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except Exception:
        return {}
    return data if isinstance(data, dict) else {}


def _configured_stash_dir(data: Mapping[str, object], environ: Mapping[str, str]) -> Path:
    """Resolve stash directory: environment, then config file, then ``~/.stash``."""
    from_env = environ.get(STASH_DIR_ENV, "").strip()
    if from_env:
        return Path(from_env).expanduser()
    value = data.get("stash_dir")
    if isinstance(value, str) and value.strip():
        return Path(value.strip()).expanduser()
    return DEFAULT_STASH_DIR


def _configured_theme(data: Mapping[str, object]) -> str:
    value = data.get("theme")
    if not isinstance(value, str):
        return "default"
    stripped = value.strip()
    return stripped if stripped else "default"


def load_stash_config(environ: Mapping[str, str] | None = None) -> StashConfig:
    """Build a ``StashConfig`` from the environment and persisted config file."""
    if environ is None:
        environ = os.environ
    data = load_config()
    prefix_value = data.get("prefix_by_default")
    return StashConfig(
        stash_dir=_configured_stash_dir(data, environ),
        theme=_configured_theme(data),
        prefix_by_default=prefix_value if isinstance(prefix_value, bool) else False,
    )


def ensure_stash_dir(config: StashConfig) -> bool:
    """Create the stash directory when missing; return whether it was created."""
    if config.stash_dir.is_dir():
        return False
    config.stash_dir.mkdir(parents=True, exist_ok=True)
    logger.info("created stash directory %s", config.stash_dir)
    return True
