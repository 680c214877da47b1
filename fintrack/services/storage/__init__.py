"""
Storage Services Package

Provides the abstract ledger storage interface and the JSON file
implementation the CLI uses.
"""

from fintrack.services.storage.interface import (
    LedgerStorageInterface,
    NotFoundError,
    StorageError,
    StoreCorruptError,
    StoreReadError,
    StoreWriteError,
)
from fintrack.services.storage.json_file import JsonFileStore

__all__ = [
    # Interfaces
    "LedgerStorageInterface",
    # Exceptions
    "NotFoundError",
    "StorageError",
    "StoreCorruptError",
    "StoreReadError",
    "StoreWriteError",
    # JSON file implementation
    "JsonFileStore",
]
