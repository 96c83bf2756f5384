"""
Entry Validation

Decides what a valid deposit or payment is, before anything reaches
the store:

- date must parse as YYYY-MM-DD
- time must parse as HH:MM:SS
- amount must be a number, strictly positive as typed, with at most
  two fraction digits
- description and vendor may not contain '|' or line breaks

A payment is typed as a positive magnitude and negated here, so
payments always reach the store with a negative amount.

Validation never silently fixes input. Each check can also be run on
its own so the shell can re-prompt for a single field.
"""

from datetime import date, datetime, time
from decimal import Decimal
from typing import Any, Optional, Union

from pydantic import ValidationError

from pocket_ledger.models.transaction import (
    FORBIDDEN_TEXT_CHARS,
    MAX_AMOUNT_DIGITS,
    Transaction,
    TransactionKind,
    ValidationIssue,
    ValidationResult,
)
from pocket_ledger.services.storage.codec import (
    parse_amount,
    parse_date,
    parse_time,
)


DateInput = Union[str, date]
TimeInput = Union[str, time]
AmountInput = Union[str, int, Decimal]


class TransactionValidator:
    """
    Validates user-entered transaction data.

    Field checks return `(value, issues)`; the value is None whenever
    an error-level issue was found.
    """

    def __init__(self, today: Optional[date] = None):
        """
        Initialize validator.

        Args:
            today: Reference date for the future-date warning.
                   Defaults to the real current date at validation time.
        """
        self._today = today

    def _reference_today(self) -> date:
        return self._today or date.today()

    def validate_date(self, value: DateInput) -> tuple[Optional[date], list[ValidationIssue]]:
        issues = []
        if isinstance(value, datetime):
            parsed = value.date()
        elif isinstance(value, date):
            parsed = value
        else:
            try:
                parsed = parse_date(str(value))
            except ValueError as e:
                issues.append(ValidationIssue(
                    field="date",
                    issue_type="invalid_format",
                    message=str(e),
                    severity="error",
                    suggested_fix="Enter the date as YYYY-MM-DD, e.g. 2024-01-31",
                ))
                return None, issues

        if parsed > self._reference_today():
            issues.append(ValidationIssue(
                field="date",
                issue_type="future_date",
                message=f"Date ({parsed}) is in the future",
                severity="warning",
                suggested_fix="Please verify the date is correct",
            ))
        return parsed, issues

    def validate_time(self, value: TimeInput) -> tuple[Optional[time], list[ValidationIssue]]:
        if isinstance(value, time):
            return value, []
        try:
            return parse_time(str(value)), []
        except ValueError as e:
            return None, [ValidationIssue(
                field="time",
                issue_type="invalid_format",
                message=str(e),
                severity="error",
                suggested_fix="Enter the time as HH:MM:SS (24-hour), e.g. 13:45:00",
            )]

    def validate_amount(self, value: AmountInput) -> tuple[Optional[Decimal], list[ValidationIssue]]:
        """
        Check an amount as typed by the user.

        Both deposits and payments are typed as positive numbers.
        """
        if isinstance(value, Decimal):
            amount = value
        elif isinstance(value, int) and not isinstance(value, bool):
            amount = Decimal(value)
        else:
            try:
                amount = parse_amount(str(value))
            except ValueError as e:
                return None, [ValidationIssue(
                    field="amount",
                    issue_type="invalid_format",
                    message=str(e),
                    severity="error",
                    suggested_fix="Enter a number such as 29.99",
                )]

        if not amount.is_finite():
            return None, [ValidationIssue(
                field="amount",
                issue_type="invalid_format",
                message="Amount must be a finite number",
                severity="error",
            )]
        if amount <= 0:
            return None, [ValidationIssue(
                field="amount",
                issue_type="not_positive",
                message="Amount must be a positive number",
                severity="error",
                suggested_fix="Enter the amount without a minus sign",
            )]
        if amount.adjusted() >= MAX_AMOUNT_DIGITS - 2:
            return None, [ValidationIssue(
                field="amount",
                issue_type="too_large",
                message=f"Amount ({amount}) is too large for the ledger",
                severity="error",
                suggested_fix="Enter an amount below 10000000000000",
            )]
        if amount != amount.quantize(Decimal("0.01")):
            return None, [ValidationIssue(
                field="amount",
                issue_type="too_precise",
                message=f"Amount ({amount}) has more than two decimal places",
                severity="error",
                suggested_fix="Round the amount to cents",
            )]
        return amount, []

    def validate_text(self, field: str, value: Any) -> tuple[Optional[str], list[ValidationIssue]]:
        """Check a free-text field (description or vendor)."""
        text = "" if value is None else str(value).strip()
        issues = []
        for char in FORBIDDEN_TEXT_CHARS:
            if char in text:
                shown = "|" if char == "|" else "line breaks"
                issues.append(ValidationIssue(
                    field=field,
                    issue_type="forbidden_character",
                    message=f"The {field} may not contain {shown}",
                    severity="error",
                    suggested_fix="Remove the character and try again",
                ))
                return None, issues

        if field == "vendor" and not text:
            issues.append(ValidationIssue(
                field="vendor",
                issue_type="missing",
                message="No vendor given; vendor search will not find this transaction",
                severity="warning",
            ))
        return text, issues

    def validate(
        self,
        kind: TransactionKind,
        date_value: DateInput,
        time_value: TimeInput,
        description: Any,
        vendor: Any,
        amount_value: AmountInput,
    ) -> ValidationResult:
        """
        Run every check and build the Transaction if nothing failed.

        Args:
            kind: Deposit or payment; payments are negated
            date_value, time_value, amount_value: Raw text or parsed values

        Returns:
            ValidationResult carrying all issues, and the Transaction
            when there are no errors
        """
        all_issues = []

        txn_date, issues = self.validate_date(date_value)
        all_issues.extend(issues)
        txn_time, issues = self.validate_time(time_value)
        all_issues.extend(issues)
        txn_description, issues = self.validate_text("description", description)
        all_issues.extend(issues)
        txn_vendor, issues = self.validate_text("vendor", vendor)
        all_issues.extend(issues)
        magnitude, issues = self.validate_amount(amount_value)
        all_issues.extend(issues)

        if any(issue.severity == "error" for issue in all_issues):
            return ValidationResult(kind=kind, issues=all_issues)

        magnitude = magnitude.quantize(Decimal("0.01"))
        amount = -magnitude if kind == TransactionKind.PAYMENT else magnitude
        try:
            transaction = Transaction(
                date=txn_date,
                time=txn_time,
                description=txn_description,
                vendor=txn_vendor,
                amount=amount,
            )
        except ValidationError as e:
            for err in e.errors():
                all_issues.append(ValidationIssue(
                    field=".".join(str(part) for part in err["loc"]) or "transaction",
                    issue_type="invalid_value",
                    message=err["msg"],
                    severity="error",
                ))
            return ValidationResult(kind=kind, issues=all_issues)

        return ValidationResult(kind=kind, issues=all_issues, transaction=transaction)

    def get_user_friendly_summary(self, result: ValidationResult) -> str:
        """Short multi-line summary of what went wrong, for the shell."""
        if result.is_valid and not result.warnings:
            return "All checks passed."

        lines = []
        for issue in result.issues:
            if issue.severity == "error":
                lines.append(f"Error: {issue.message}")
                if issue.suggested_fix:
                    lines.append(f"  {issue.suggested_fix}")
        for warning in result.warnings:
            lines.append(f"Warning: {warning}")
        return "\n".join(lines)
