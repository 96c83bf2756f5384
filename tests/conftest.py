"""Shared fixtures for Pocket Ledger tests."""

from datetime import date, time
from decimal import Decimal

import pytest

from pocket_ledger.config import LedgerSettings
from pocket_ledger.models.transaction import Transaction
from pocket_ledger.services.storage import FlatFileStorage, StorageWriteError
from pocket_ledger.store import TransactionStore


def make_transaction(
    day: date = date(2023, 4, 29),
    amount: str = "-29.99",
    vendor: str = "Amazon",
    description: str = "Groceries",
    at: time = time(13, 45, 0),
) -> Transaction:
    return Transaction(
        date=day,
        time=at,
        description=description,
        vendor=vendor,
        amount=Decimal(amount),
    )


class FailingStorage(FlatFileStorage):
    """Flat-file storage whose appends always fail."""

    def append_line(self, line: str) -> None:
        raise StorageWriteError("disk full")


@pytest.fixture
def ledger_path(tmp_path):
    return tmp_path / "transactions.csv"


@pytest.fixture
def empty_store(ledger_path):
    store, _ = TransactionStore.load(FlatFileStorage(ledger_path))
    return store


@pytest.fixture
def settings(ledger_path):
    return LedgerSettings(data_file=ledger_path, _env_file=None)
