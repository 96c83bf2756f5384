"""
Tests for Pocket Ledger models

Test strategy:
1. Unit tests for individual components (models, codec, validator, reports)
2. Flow tests for the orchestrator and shell against a temporary ledger file
3. No real user data touched (tmp_path everywhere)
"""

import pytest
from datetime import date, time
from decimal import Decimal
from uuid import uuid4

from pocket_ledger.models.transaction import (
    EntryResult,
    LoadReport,
    NO_MATCHES_MESSAGE,
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

from conftest import make_transaction


class TestTransactionModel:
    """Tests for the Transaction model."""

    def test_transaction_creation(self):
        """Test Transaction model creation."""
        txn = make_transaction()
        assert txn.date == date(2023, 4, 29)
        assert txn.time == time(13, 45, 0)
        assert txn.vendor == "Amazon"
        assert txn.amount == Decimal("-29.99")

    def test_transaction_strips_whitespace(self):
        """Test that whitespace is stripped from free text."""
        txn = make_transaction(vendor="  Amazon  ", description=" Groceries ")
        assert txn.vendor == "Amazon"
        assert txn.description == "Groceries"

    def test_amount_normalized_to_cents(self):
        """Test that amounts always carry two fraction digits."""
        txn = make_transaction(amount="50")
        assert str(txn.amount) == "50.00"

    def test_amount_rejects_sub_cent_precision(self):
        """Test that more than two decimal places is rejected."""
        with pytest.raises(ValueError):
            make_transaction(amount="1.005")

    def test_amount_rejects_oversized_value(self):
        """Test that an amount beyond the ledger's digit limit is a validation error."""
        with pytest.raises(ValueError):
            make_transaction(amount="9" * 30 + ".00")

    def test_amount_rejects_nan(self):
        """Test that NaN is not a valid amount."""
        with pytest.raises(ValueError):
            make_transaction(amount="NaN")

    def test_time_truncated_to_seconds(self):
        """Test that microseconds are dropped."""
        txn = make_transaction(at=time(9, 30, 15, 123456))
        assert txn.time == time(9, 30, 15)

    @pytest.mark.parametrize("text", ["a|b", "line\nbreak", "carriage\rreturn"])
    def test_free_text_rejects_format_characters(self, text):
        """Test that the delimiter and line breaks cannot be stored."""
        with pytest.raises(ValueError):
            make_transaction(description=text)
        with pytest.raises(ValueError):
            make_transaction(vendor=text)

    def test_transaction_is_immutable(self):
        """Test that a transaction cannot be changed after construction."""
        txn = make_transaction()
        with pytest.raises(ValueError):
            txn.amount = Decimal("1.00")

    def test_kind_from_sign(self):
        """Test that kind is derived from the sign of the amount."""
        assert make_transaction(amount="10.00").kind == TransactionKind.DEPOSIT
        assert make_transaction(amount="-10.00").kind == TransactionKind.PAYMENT
        assert make_transaction(amount="0.00").kind is None

    def test_deposit_and_payment_flags(self):
        deposit = make_transaction(amount="10.00")
        payment = make_transaction(amount="-10.00")
        assert deposit.is_deposit and not deposit.is_payment
        assert payment.is_payment and not payment.is_deposit

    def test_equal_transactions_compare_equal(self):
        """Two transactions with the same fields are equal."""
        assert make_transaction(amount="-29.9") == make_transaction(amount="-29.90")


class TestReportResult:
    """Tests for ReportResult model."""

    def test_no_match_signal(self):
        """Test that an empty report carries the no-match message."""
        result = ReportResult(
            report_type=ReportType.DEPOSITS,
            description="Deposits",
            data_found=False,
        )
        assert result.data_found is False
        assert result.result_count == 0
        assert result.message == NO_MATCHES_MESSAGE

    def test_signal_must_agree_with_transactions(self):
        """Test that data_found cannot contradict the transactions."""
        with pytest.raises(ValueError, match="data_found"):
            ReportResult(
                report_type=ReportType.ALL,
                description="All",
                data_found=True,
            )
        with pytest.raises(ValueError, match="data_found"):
            ReportResult(
                report_type=ReportType.ALL,
                description="All",
                transactions=(make_transaction(),),
                data_found=False,
            )

    def test_date_bounds_validation(self):
        """Test report end date cannot be before start."""
        with pytest.raises(ValueError, match="end date cannot be before start"):
            ReportResult(
                report_type=ReportType.DATE_RANGE,
                description="Range",
                data_found=False,
                start_date=date(2024, 2, 1),
                end_date=date(2024, 1, 1),
            )

    def test_totals(self):
        """Test deposit, payment and net totals."""
        result = ReportResult(
            report_type=ReportType.ALL,
            description="All",
            transactions=(
                make_transaction(amount="100.00"),
                make_transaction(amount="-29.99"),
                make_transaction(amount="-0.01"),
            ),
            data_found=True,
        )
        assert result.message is None
        assert result.deposit_total == Decimal("100.00")
        assert result.payment_total == Decimal("-30.00")
        assert result.net_total == Decimal("70.00")


class TestLoadAndValidationModels:
    """Tests for load, validation and entry result models."""

    def test_load_report_defaults(self):
        report = LoadReport(path="transactions.csv")
        assert report.loaded_count == 0
        assert report.skipped_count == 0
        assert report.has_problems is False

    def test_load_report_problems(self):
        report = LoadReport(
            path="transactions.csv",
            file_found=True,
            skipped=[RecordIssue(line_number=2, line="a|b|c", reason="expected 5 fields, found 3")],
        )
        assert report.skipped_count == 1
        assert report.has_problems is True

    def test_validation_result_has_errors(self):
        """Test has_errors property."""
        result = ValidationResult(
            kind=TransactionKind.DEPOSIT,
            issues=[
                ValidationIssue(
                    field="amount",
                    issue_type="not_positive",
                    message="Amount must be a positive number",
                    severity="error",
                ),
            ],
        )
        assert result.has_errors is True
        assert result.is_valid is False
        assert result.error_count == 1

    def test_validation_result_warnings_only(self):
        """Test that warnings don't count as errors."""
        result = ValidationResult(
            kind=TransactionKind.PAYMENT,
            issues=[
                ValidationIssue(
                    field="vendor",
                    issue_type="missing",
                    message="No vendor given",
                    severity="warning",
                ),
            ],
            transaction=make_transaction(vendor=""),
        )
        assert result.has_errors is False
        assert result.is_valid is True
        assert result.warnings == ["No vendor given"]

    def test_issue_severity_pattern(self):
        """Test that only error and warning severities are accepted."""
        with pytest.raises(ValueError):
            ValidationIssue(field="x", issue_type="y", message="z", severity="fatal")

    def test_entry_result_message(self):
        validation = ValidationResult(kind=TransactionKind.DEPOSIT)
        saved = EntryResult(
            success=True,
            validation=validation,
            transaction=make_transaction(amount="50.00"),
        )
        failed = EntryResult(
            success=False,
            validation=validation,
            error_message="Could not save deposit: disk full",
        )
        assert saved.message == "Deposit added successfully."
        assert failed.message == "Could not save deposit: disk full"


class TestAuditModels:
    """Tests for audit-related models."""

    def test_audit_event_creation(self):
        """Test AuditEvent model creation."""
        event = AuditEvent(
            event_type=AuditEventType.STORE_LOADED,
            description="Loaded 0 transactions",
        )
        assert event.event_type == AuditEventType.STORE_LOADED
        assert event.severity == AuditSeverity.INFO

    def test_audit_event_to_log_dict(self):
        """Test conversion to log dictionary."""
        event = AuditEvent(
            event_type=AuditEventType.TRANSACTION_SAVED,
            description="Deposit saved",
            details={"vendor": "Acme", "amount": "50.00"},
        )
        log_dict = event.to_log_dict()
        assert "event_id" in log_dict
        assert log_dict["event_type"] == "transaction_saved"
        assert log_dict["details"]["vendor"] == "Acme"

    def test_builder_record_skipped(self):
        """Test AuditEventBuilder.record_skipped."""
        event = AuditEventBuilder.record_skipped(
            path="transactions.csv",
            line_number=3,
            reason="expected 5 fields, found 3",
        )
        assert event.event_type == AuditEventType.RECORD_SKIPPED
        assert event.severity == AuditSeverity.WARNING
        assert event.details["line_number"] == 3

    def test_builder_store_loaded_severity(self):
        """A load that skipped lines is logged as a warning."""
        clean = AuditEventBuilder.store_loaded("f", loaded_count=2, skipped_count=0, file_found=True)
        dirty = AuditEventBuilder.store_loaded("f", loaded_count=2, skipped_count=1, file_found=True)
        assert clean.severity == AuditSeverity.INFO
        assert dirty.severity == AuditSeverity.WARNING

    def test_builder_transaction_saved(self):
        """Test AuditEventBuilder.transaction_saved."""
        correlation_id = uuid4()
        event = AuditEventBuilder.transaction_saved(
            kind="payment",
            vendor="Amazon",
            amount="-29.99",
            correlation_id=correlation_id,
        )
        assert event.event_type == AuditEventType.TRANSACTION_SAVED
        assert event.correlation_id == correlation_id
        assert event.is_user_action is True

    def test_long_description_is_clipped(self):
        """Test that a very long vendor still produces a valid event."""
        event = AuditEventBuilder.transaction_saved(
            kind="deposit",
            vendor="V" * 600,
            amount="50.00",
        )
        assert len(event.description) == 500
        assert event.description.endswith("...")
        assert event.details["vendor"] == "V" * 600

    def test_builder_save_failed(self):
        event = AuditEventBuilder.save_failed(kind="deposit", error_message="disk full")
        assert event.severity == AuditSeverity.ERROR
        assert event.error_message == "disk full"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
