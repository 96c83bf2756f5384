"""
Audit Logger

Every significant ledger action is logged as a structured event:
loading, skipped lines, rejected entries, saves, failed saves, reports.

The audit logger:
- Writes through structlog on top of the stdlib logging module
- Never raises; a failure while logging must not stop the menu loop
- Supports correlation IDs to tie together the events of one menu action
"""

import logging
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any, Optional, Union
from uuid import UUID, uuid4

import structlog

from pocket_ledger.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity
from pocket_ledger.models.transaction import (
    LoadReport,
    ReportResult,
    Transaction,
    ValidationResult,
)


LOGGER_NAME = "pocket_ledger.audit"

_installed_handlers: list[logging.Handler] = []


def _configure_structlog(json_logs: bool) -> None:
    renderer = (
        structlog.processors.JSONRenderer()
        if json_logs
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


# Library default: structlog renders, stdlib decides where it goes
_configure_structlog(json_logs=False)


def configure_logging(
    level: Union[int, str] = "WARNING",
    json_logs: bool = False,
    log_file: Optional[Union[str, Path]] = None,
) -> None:
    """
    Configure structlog and the stdlib root logger.

    Intended to be called once by the CLI at startup; calling it again
    replaces the handlers installed by the previous call.

    Args:
        level: Level name or number for ledger log output
        json_logs: Render JSON lines instead of console text
        log_file: If given, everything at `level` goes to this file and
                  only warnings and errors reach stderr
    """
    numeric = logging.getLevelName(level.upper()) if isinstance(level, str) else level

    root = logging.getLogger()
    for handler in _installed_handlers:
        root.removeHandler(handler)
        handler.close()
    _installed_handlers.clear()

    formatter = logging.Formatter("%(message)s")

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setFormatter(formatter)
    stderr_handler.setLevel(max(numeric, logging.WARNING) if log_file else numeric)
    _installed_handlers.append(stderr_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        file_handler.setLevel(numeric)
        _installed_handlers.append(file_handler)

    for handler in _installed_handlers:
        root.addHandler(handler)
    root.setLevel(numeric)

    _configure_structlog(json_logs)


class AuditLogger:
    """Central audit logging service."""

    def __init__(self, logger_name: str = LOGGER_NAME):
        self._logger = structlog.get_logger(logger_name)

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Returns True if the event was handed to the logger.
        """
        try:
            log_dict = event.to_log_dict()
            if event.severity == AuditSeverity.ERROR:
                self._logger.error("audit_event", **log_dict)
            elif event.severity == AuditSeverity.WARNING:
                self._logger.warning("audit_event", **log_dict)
            elif event.severity == AuditSeverity.DEBUG:
                self._logger.debug("audit_event", **log_dict)
            else:
                self._logger.info("audit_event", **log_dict)
            return True
        except Exception as e:
            # Log failure but don't raise
            print(f"audit logging failed: {e}", file=sys.stderr)
            return False

    def _log_built(self, build: Callable[..., AuditEvent], *args: Any, **kwargs: Any) -> bool:
        """Build an event and log it; a build failure is reported like a log failure."""
        try:
            event = build(*args, **kwargs)
        except Exception as e:
            print(f"audit logging failed: {e}", file=sys.stderr)
            return False
        return self.log(event)

    def log_load(self, report: LoadReport) -> None:
        """Log the outcome of loading the ledger, one event per skipped line."""
        if report.io_error:
            self._log_built(AuditEventBuilder.store_load_failed, report.path, report.io_error)
            return

        for issue in report.skipped:
            self._log_built(
                AuditEventBuilder.record_skipped,
                path=report.path,
                line_number=issue.line_number,
                reason=issue.reason,
            )
        self._log_built(
            AuditEventBuilder.store_loaded,
            path=report.path,
            loaded_count=report.loaded_count,
            skipped_count=report.skipped_count,
            file_found=report.file_found,
        )

    def log_validation_failed(
        self,
        result: ValidationResult,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a rejected deposit or payment entry."""
        issues = [
            {"field": i.field, "type": i.issue_type, "message": i.message}
            for i in result.issues
            if i.severity == "error"
        ]
        self._log_built(
            AuditEventBuilder.validation_failed,
            kind=result.kind.value,
            issues=issues,
            correlation_id=correlation_id,
        )

    def log_transaction_saved(
        self,
        transaction: Transaction,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a transaction written to the ledger."""
        kind = transaction.kind.value if transaction.kind else "transaction"
        self._log_built(
            AuditEventBuilder.transaction_saved,
            kind=kind,
            vendor=transaction.vendor,
            amount=f"{transaction.amount:.2f}",
            correlation_id=correlation_id,
        )

    def log_save_failed(
        self,
        kind: str,
        error_message: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a transaction that could not be written (and was rolled back)."""
        self._log_built(
            AuditEventBuilder.save_failed,
            kind=kind,
            error_message=error_message,
            correlation_id=correlation_id,
        )

    def log_report_executed(
        self,
        result: ReportResult,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a report run."""
        self._log_built(
            AuditEventBuilder.report_executed,
            report_type=result.report_type.value,
            result_count=result.result_count,
            correlation_id=correlation_id,
        )


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this at the start of a new user action (e.g., one deposit entry).
    Pass it through all subsequent operations.
    """
    return uuid4()
