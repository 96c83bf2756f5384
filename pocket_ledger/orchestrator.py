"""
Main Orchestrator for Pocket Ledger

Ties the components together and defines the end-to-end flows:
1. Load (file -> codec -> store)
2. Entry (raw input -> validate -> store + file)
3. Report (store -> report engine -> result)

Every flow is audited. Nothing here prints; the shell turns the returned
results into messages and tables.

The module-level `load_store`, `add_deposit` and `add_payment` functions
are the API the shell calls. They take the store explicitly; there is no
hidden global ledger.
"""

from datetime import date
from pathlib import Path
from typing import Any, Optional, Union
from uuid import UUID

from pocket_ledger.audit import AuditLogger, create_correlation_id
from pocket_ledger.config import LedgerSettings, get_settings
from pocket_ledger.models.transaction import (
    EntryResult,
    LoadReport,
    ReportResult,
    ReportType,
    TransactionKind,
)
from pocket_ledger.queries import run_report
from pocket_ledger.services.storage import FlatFileStorage, StorageError
from pocket_ledger.store import TransactionStore
from pocket_ledger.validation import TransactionValidator
from pocket_ledger.validation.validator import AmountInput, DateInput, TimeInput


class TransactionEntryFlow:
    """
    Orchestrates adding a deposit or a payment.

    Flow:
    1. Validate the raw values (payments are negated here)
    2. Append to the store, which writes the line to the file
    3. On a write failure the store has already rolled back;
       report the failure instead of raising
    """

    def __init__(
        self,
        validator: Optional[TransactionValidator] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._validator = validator or TransactionValidator()
        self._audit_logger = audit_logger

    @property
    def validator(self) -> TransactionValidator:
        return self._validator

    def add_deposit(
        self,
        store: TransactionStore,
        date_value: DateInput,
        time_value: TimeInput,
        description: Any,
        vendor: Any,
        amount: AmountInput,
        correlation_id: Optional[UUID] = None,
    ) -> EntryResult:
        """Add money received. `amount` must be positive."""
        return self._add(
            store, TransactionKind.DEPOSIT,
            date_value, time_value, description, vendor, amount,
            correlation_id,
        )

    def add_payment(
        self,
        store: TransactionStore,
        date_value: DateInput,
        time_value: TimeInput,
        description: Any,
        vendor: Any,
        amount: AmountInput,
        correlation_id: Optional[UUID] = None,
    ) -> EntryResult:
        """Add money spent. `amount` is the positive magnitude; it is stored negated."""
        return self._add(
            store, TransactionKind.PAYMENT,
            date_value, time_value, description, vendor, amount,
            correlation_id,
        )

    def _add(
        self,
        store: TransactionStore,
        kind: TransactionKind,
        date_value: DateInput,
        time_value: TimeInput,
        description: Any,
        vendor: Any,
        amount: AmountInput,
        correlation_id: Optional[UUID],
    ) -> EntryResult:
        correlation_id = correlation_id or create_correlation_id()

        validation = self._validator.validate(
            kind, date_value, time_value, description, vendor, amount,
        )
        if not validation.is_valid:
            if self._audit_logger:
                self._audit_logger.log_validation_failed(validation, correlation_id)
            return EntryResult(success=False, validation=validation)

        transaction = validation.transaction
        try:
            store.append(transaction)
        except StorageError as e:
            if self._audit_logger:
                self._audit_logger.log_save_failed(kind.value, str(e), correlation_id)
            return EntryResult(
                success=False,
                validation=validation,
                error_message=f"Could not save {kind.value}: {e}",
            )

        if self._audit_logger:
            self._audit_logger.log_transaction_saved(transaction, correlation_id)
        return EntryResult(success=True, validation=validation, transaction=transaction)


class ReportFlow:
    """Runs reports over a store and audits each run."""

    def __init__(self, audit_logger: Optional[AuditLogger] = None):
        self._audit_logger = audit_logger

    def run(
        self,
        store: TransactionStore,
        report_type: ReportType,
        *,
        today: Optional[date] = None,
        vendor: Optional[str] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
        correlation_id: Optional[UUID] = None,
    ) -> ReportResult:
        """
        Run one report.

        Raises:
            ReportError: If the report parameters are invalid
        """
        result = run_report(
            store, report_type, today=today, vendor=vendor, start=start, end=end,
        )
        if self._audit_logger:
            self._audit_logger.log_report_executed(result, correlation_id)
        return result


# =============================================================================
# SHELL-FACING API
# =============================================================================

def load_store(
    path: Optional[Union[str, Path]] = None,
    settings: Optional[LedgerSettings] = None,
    audit_logger: Optional[AuditLogger] = None,
) -> tuple[TransactionStore, LoadReport]:
    """
    Load the ledger file into a new store.

    Args:
        path: Ledger file; defaults to the configured `data_file`
        settings: Settings to use instead of the cached global ones
        audit_logger: Where to log the load; a default logger if None

    Returns:
        (store, load_report). Never raises for missing, unreadable
        or partly malformed files; see LoadReport.
    """
    settings = settings or get_settings()
    storage = FlatFileStorage(path or settings.data_file, encoding=settings.encoding)
    store, report = TransactionStore.load(storage)
    (audit_logger or AuditLogger()).log_load(report)
    return store, report


def add_deposit(
    store: TransactionStore,
    date_value: DateInput,
    time_value: TimeInput,
    description: Any,
    vendor: Any,
    amount: AmountInput,
    audit_logger: Optional[AuditLogger] = None,
) -> EntryResult:
    """Validate and record a deposit. See TransactionEntryFlow.add_deposit."""
    flow = TransactionEntryFlow(audit_logger=audit_logger or AuditLogger())
    return flow.add_deposit(store, date_value, time_value, description, vendor, amount)


def add_payment(
    store: TransactionStore,
    date_value: DateInput,
    time_value: TimeInput,
    description: Any,
    vendor: Any,
    amount: AmountInput,
    audit_logger: Optional[AuditLogger] = None,
) -> EntryResult:
    """Validate and record a payment. See TransactionEntryFlow.add_payment."""
    flow = TransactionEntryFlow(audit_logger=audit_logger or AuditLogger())
    return flow.add_payment(store, date_value, time_value, description, vendor, amount)


def create_app_components(
    settings: Optional[LedgerSettings] = None,
) -> tuple[TransactionStore, LoadReport, TransactionEntryFlow, ReportFlow]:
    """
    Factory function to create all application components.

    Returns:
        (store, load_report, entry_flow, report_flow)
    """
    settings = settings or get_settings()
    audit_logger = AuditLogger()

    store, load_report = load_store(settings=settings, audit_logger=audit_logger)
    entry_flow = TransactionEntryFlow(audit_logger=audit_logger)
    report_flow = ReportFlow(audit_logger=audit_logger)

    return store, load_report, entry_flow, report_flow
