"""
Transaction Store

The single in-memory, ordered collection of transactions, kept in step
with its backing storage.

- Loaded once at startup; order is file order
- Every append goes to memory and to storage together; if the write
  fails the in-memory append is rolled back so both stay consistent
- Never sorted, never edited, never deleted from

There is no module-level state. Callers hold a store and pass it to
every operation.
"""

from collections.abc import Iterable, Iterator
from typing import Optional

from pocket_ledger.models.transaction import LoadReport, RecordIssue, Transaction
from pocket_ledger.services.storage import (
    MalformedRecordError,
    StorageError,
    StorageReadError,
    TransactionStorageInterface,
    decode,
    encode,
)


class TransactionStore:
    """Ordered transactions plus the storage they persist to."""

    def __init__(
        self,
        storage: TransactionStorageInterface,
        transactions: Optional[Iterable[Transaction]] = None,
    ):
        self._storage = storage
        self._transactions: list[Transaction] = list(transactions or [])

    @classmethod
    def load(
        cls,
        storage: TransactionStorageInterface,
    ) -> tuple["TransactionStore", LoadReport]:
        """
        Build a store from everything currently in `storage`.

        Never raises for data or I/O problems:
        - missing ledger: empty store
        - unreadable ledger: empty store, `io_error` set on the report
        - malformed line: skipped, listed in `report.skipped`

        Blank lines are ignored without being reported.

        Returns:
            (store, load_report)
        """
        report = LoadReport(path=storage.location)

        if not storage.exists():
            return cls(storage), report

        report.file_found = True
        try:
            lines = storage.read_lines()
        except StorageReadError as e:
            report.io_error = str(e)
            return cls(storage), report

        transactions = []
        for line_number, line in enumerate(lines, start=1):
            if not line.strip():
                continue
            try:
                transactions.append(decode(line, line_number=line_number))
            except MalformedRecordError as e:
                report.skipped.append(RecordIssue(
                    line_number=line_number,
                    line=e.line if e.line is not None else line,
                    reason=e.reason,
                ))

        report.loaded_count = len(transactions)
        return cls(storage, transactions), report

    @property
    def storage(self) -> TransactionStorageInterface:
        return self._storage

    @property
    def transactions(self) -> tuple[Transaction, ...]:
        """Read-only snapshot, in store order."""
        return tuple(self._transactions)

    def __iter__(self) -> Iterator[Transaction]:
        return iter(tuple(self._transactions))

    def __len__(self) -> int:
        return len(self._transactions)

    def append(self, transaction: Transaction) -> None:
        """
        Add a transaction to the end of the store and persist it.

        Raises:
            StorageError: If the line could not be written. The store is
                left exactly as it was before the call.
        """
        self._transactions.append(transaction)
        try:
            self._storage.append_line(encode(transaction))
        except StorageError:
            self._transactions.pop()
            raise
