"""
Audit Models for Pocket Ledger

Every significant ledger action produces an AuditEvent:
loading the file, skipping a bad line, rejecting user input,
saving a transaction, failing to save, running a report.

Events are written to the structured log by `AuditLogger`.
They are never stored in the ledger file itself.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field, field_validator


DESCRIPTION_MAX_LENGTH = 500


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Loading
    STORE_LOADED = "store_loaded"
    STORE_LOAD_FAILED = "store_load_failed"
    RECORD_SKIPPED = "record_skipped"

    # Entry
    VALIDATION_FAILED = "validation_failed"
    TRANSACTION_SAVED = "transaction_saved"
    SAVE_FAILED = "save_failed"

    # Reporting
    REPORT_EXECUTED = "report_executed"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditEvent(BaseModel):
    """
    A single audit event.

    The core unit of the audit trail.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Correlation - for tracking related events
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID to correlate related events (e.g., one menu action)"
    )

    # Event details
    description: str = Field(
        ...,
        max_length=DESCRIPTION_MAX_LENGTH,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )
    error_message: Optional[str] = None

    # User action tracking
    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user action?"
    )

    @field_validator('description', mode='before')
    @classmethod
    def clip_description(cls, v: Any) -> Any:
        """Clip overlong descriptions instead of rejecting the event."""
        if isinstance(v, str) and len(v) > DESCRIPTION_MAX_LENGTH:
            return v[:DESCRIPTION_MAX_LENGTH - 3] + "..."
        return v

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.store_loaded(path, loaded_count=3, skipped_count=0)
        event = AuditEventBuilder.transaction_saved("deposit", "Acme", "50.00", correlation_id)
    """

    @staticmethod
    def store_loaded(
        path: str,
        loaded_count: int,
        skipped_count: int,
        file_found: bool,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORE_LOADED,
            severity=AuditSeverity.WARNING if skipped_count else AuditSeverity.INFO,
            description=f"Loaded {loaded_count} transactions from {path}",
            details={
                "path": path,
                "loaded_count": loaded_count,
                "skipped_count": skipped_count,
                "file_found": file_found,
            },
        )

    @staticmethod
    def store_load_failed(path: str, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORE_LOAD_FAILED,
            severity=AuditSeverity.ERROR,
            description=f"Could not read ledger file {path}",
            error_message=error_message,
            details={"path": path},
        )

    @staticmethod
    def record_skipped(
        path: str,
        line_number: int,
        reason: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.RECORD_SKIPPED,
            severity=AuditSeverity.WARNING,
            description=f"Skipped malformed line {line_number}",
            details={
                "path": path,
                "line_number": line_number,
                "reason": reason,
            },
        )

    @staticmethod
    def validation_failed(
        kind: str,
        issues: list[dict],
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.VALIDATION_FAILED,
            severity=AuditSeverity.WARNING,
            correlation_id=correlation_id,
            description=f"{kind.capitalize()} entry rejected with {len(issues)} issues",
            details={
                "kind": kind,
                "issues": issues,
            },
            is_user_action=True,
        )

    @staticmethod
    def transaction_saved(
        kind: str,
        vendor: str,
        amount: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_SAVED,
            correlation_id=correlation_id,
            description=f"{kind.capitalize()} saved: {vendor} {amount}",
            details={
                "kind": kind,
                "vendor": vendor,
                "amount": amount,
            },
            is_user_action=True,
        )

    @staticmethod
    def save_failed(
        kind: str,
        error_message: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SAVE_FAILED,
            severity=AuditSeverity.ERROR,
            correlation_id=correlation_id,
            description=f"{kind.capitalize()} could not be written; rolled back",
            error_message=error_message,
            details={"kind": kind},
            is_user_action=True,
        )

    @staticmethod
    def report_executed(
        report_type: str,
        result_count: int,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.REPORT_EXECUTED,
            severity=AuditSeverity.DEBUG,
            correlation_id=correlation_id,
            description=f"Report executed: {report_type} returned {result_count} results",
            details={
                "report_type": report_type,
                "result_count": result_count,
            },
        )
