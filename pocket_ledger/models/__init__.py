"""
Data Models Package

This package contains all Pydantic models used by Pocket Ledger.
All data flowing through the ledger must conform to these schemas.
"""

from pocket_ledger.models.transaction import (
    FIELD_DELIMITER,
    NO_MATCHES_MESSAGE,
    EntryResult,
    LoadReport,
    RecordIssue,
    ReportResult,
    ReportType,
    Transaction,
    TransactionKind,
    ValidationIssue,
    ValidationResult,
)
from pocket_ledger.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Ledger models
    "FIELD_DELIMITER",
    "NO_MATCHES_MESSAGE",
    "EntryResult",
    "LoadReport",
    "RecordIssue",
    "ReportResult",
    "ReportType",
    "Transaction",
    "TransactionKind",
    "ValidationIssue",
    "ValidationResult",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
