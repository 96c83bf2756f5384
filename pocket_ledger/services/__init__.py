"""Services package."""

from pocket_ledger.services.storage import (
    FlatFileStorage,
    MalformedRecordError,
    StorageError,
    StorageReadError,
    StorageWriteError,
    TransactionStorageInterface,
)

__all__ = [
    "FlatFileStorage",
    "MalformedRecordError",
    "StorageError",
    "StorageReadError",
    "StorageWriteError",
    "TransactionStorageInterface",
]
