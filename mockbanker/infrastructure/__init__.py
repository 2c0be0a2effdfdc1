"""
Infrastructure package for MockBanker.

Exports the key-value persistence layer and the best-effort clipboard and
file-save helpers used by the tabs and the CLI.
"""

from mockbanker.infrastructure.clipboard import copy_to_clipboard, save_export
from mockbanker.infrastructure.kv_store import (
    InMemoryStore,
    JsonFileStore,
    KeyValueStore,
    get_store,
)

__all__ = [
    "KeyValueStore",
    "InMemoryStore",
    "JsonFileStore",
    "get_store",
    "copy_to_clipboard",
    "save_export",
]
