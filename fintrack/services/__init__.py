"""Services package."""

from fintrack.services.export import (
    EXPORT_COLUMNS,
    ExportError,
    export_transactions_csv,
)
from fintrack.services.storage import (
    JsonFileStore,
    LedgerStorageInterface,
    NotFoundError,
    StorageError,
    StoreCorruptError,
    StoreReadError,
    StoreWriteError,
)

__all__ = [
    # Export
    "EXPORT_COLUMNS",
    "ExportError",
    "export_transactions_csv",
    # Storage services
    "JsonFileStore",
    "LedgerStorageInterface",
    "NotFoundError",
    "StorageError",
    "StoreCorruptError",
    "StoreReadError",
    "StoreWriteError",
]
