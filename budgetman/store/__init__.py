"""Store layer - provides persistence for the application.

This module re-exports the public store API for easy importing.
"""

from budgetman.store.backend import JsonFileBackend, KeyValueBackend, MemoryBackend
from budgetman.store.paths import EXPORT_FILENAME, STORAGE_KEY, get_data_dir
from budgetman.store.transactions import TransactionStore

__all__ = [
    # Backends
    "JsonFileBackend",
    "KeyValueBackend",
    "MemoryBackend",
    # Paths
    "EXPORT_FILENAME",
    "STORAGE_KEY",
    "get_data_dir",
    # Store
    "TransactionStore",
]
