"""Input-layer public API: raw key decoding and per-screen action bindings."""

from .bindings import (
    CREATE_BINDINGS,
    SEARCH_BINDINGS,
    ActionReader,
    action_for_key,
    create_action_for_key,
    search_action_for_key,
)
from .reader import ESC_SEQUENCE_TIMEOUT_MS, _PENDING_BYTES, read_key

__all__ = [
    "read_key",
    "_PENDING_BYTES",
    "ESC_SEQUENCE_TIMEOUT_MS",
    "ActionReader",
    "CREATE_BINDINGS",
    "SEARCH_BINDINGS",
    "action_for_key",
    "create_action_for_key",
    "search_action_for_key",
]
