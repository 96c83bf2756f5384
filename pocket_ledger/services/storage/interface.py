"""
Abstract Storage Interface

The transaction store does not care where its lines live. It needs
exactly three things from a backend:
1. Does the ledger exist yet?
2. Give me every line, in order
3. Append one line to the end

Anything that can do those (a local file, an in-memory list in a test)
can back a store. Existing content is never rewritten.
"""

from abc import ABC, abstractmethod


class TransactionStorageInterface(ABC):
    """
    Abstract interface for line-oriented, append-only ledger storage.
    """

    @property
    @abstractmethod
    def location(self) -> str:
        """Human-readable description of where the lines live."""
        pass

    @abstractmethod
    def exists(self) -> bool:
        """
        Check whether the ledger has been created yet.

        Returns:
            True if there is something to read
        """
        pass

    @abstractmethod
    def read_lines(self) -> list[str]:
        """
        Read every stored line, oldest first.

        Returns:
            Lines without their line terminators

        Raises:
            StorageReadError: If the ledger exists but cannot be read
        """
        pass

    @abstractmethod
    def append_line(self, line: str) -> None:
        """
        Append one line to the end of the ledger, creating it if absent.

        Args:
            line: The encoded record, without a line terminator

        Raises:
            StorageWriteError: If the line could not be written
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class StorageReadError(StorageError):
    """The ledger exists but could not be read."""
    pass


class StorageWriteError(StorageError):
    """A record could not be appended to the ledger."""
    pass
