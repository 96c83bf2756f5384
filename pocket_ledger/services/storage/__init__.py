"""
Storage Services Package

Provides the abstract line-storage interface, the flat-file backend,
and the record codec that turns transactions into ledger lines.
"""

from pocket_ledger.services.storage.interface import (
    StorageError,
    StorageReadError,
    StorageWriteError,
    TransactionStorageInterface,
)
from pocket_ledger.services.storage.flat_file import FlatFileStorage
from pocket_ledger.services.storage.codec import (
    MalformedRecordError,
    decode,
    encode,
    format_amount,
    parse_amount,
    parse_date,
    parse_time,
)

__all__ = [
    # Interfaces
    "TransactionStorageInterface",
    # Exceptions
    "MalformedRecordError",
    "StorageError",
    "StorageReadError",
    "StorageWriteError",
    # Flat file implementation
    "FlatFileStorage",
    # Codec
    "decode",
    "encode",
    "format_amount",
    "parse_amount",
    "parse_date",
    "parse_time",
]
