"""
Persistence module.

Key-value stores the proposal ledger keeps its state in.
"""
from .base import KeyValueStore
from .memory_store import MemoryKeyValueStore
from .sqlite_store import SqliteKeyValueStore

__all__ = ["KeyValueStore", "MemoryKeyValueStore", "SqliteKeyValueStore"]
