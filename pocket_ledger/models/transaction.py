"""
Core Data Models for Pocket Ledger

These models define the schemas for everything flowing through the ledger:
1. The Transaction itself (the only persisted entity)
2. Results of loading the backing file
3. Results of validating and saving user entry
4. Results of running a report

DESIGN DECISION: Sign is the sole discriminator between deposits and
payments. There is no type field; `TransactionKind` is derived from the
amount and never stored.
"""

import datetime as dt
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)


# Characters that would break the one-record-per-line, pipe-delimited format
FIELD_DELIMITER = "|"
FORBIDDEN_TEXT_CHARS = (FIELD_DELIMITER, "\n", "\r")

CENTS = Decimal("0.01")

# Largest amount the ledger holds: 13 integer digits plus cents
MAX_AMOUNT_DIGITS = 15


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class TransactionKind(str, Enum):
    """
    Kind of transaction, derived from the sign of the amount.

    A zero amount has no kind; such transactions appear in neither
    the deposits nor the payments listing.
    """
    DEPOSIT = "deposit"   # amount > 0, money received
    PAYMENT = "payment"   # amount < 0, money spent


class ReportType(str, Enum):
    """Reports the ledger can produce."""
    ALL = "all"
    DEPOSITS = "deposits"
    PAYMENTS = "payments"
    VENDOR = "vendor"
    MONTH_TO_DATE = "month_to_date"
    PREVIOUS_MONTH = "previous_month"
    YEAR_TO_DATE = "year_to_date"
    PREVIOUS_YEAR = "previous_year"
    DATE_RANGE = "date_range"


# =============================================================================
# CORE TRANSACTION MODEL
# =============================================================================

class Transaction(BaseModel):
    """
    A single ledger entry.

    Immutable once built. Constructed either from a persisted line
    or from validated user entry, never mutated afterwards.

    Free-text fields must not contain the field delimiter or line
    breaks: the flat-file format has no escaping.
    """
    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    date: dt.date = Field(
        ...,
        description="Calendar date of the transaction (no time zone)"
    )
    time: dt.time = Field(
        ...,
        description="Time of day, second resolution"
    )
    description: str = Field(
        default="",
        description="Free-text label entered by the user"
    )
    vendor: str = Field(
        default="",
        description="Counterparty name, used for vendor search"
    )
    amount: Decimal = Field(
        ...,
        allow_inf_nan=False,
        max_digits=MAX_AMOUNT_DIGITS,
        decimal_places=2,
        description="Signed amount: positive for deposits, negative for payments"
    )

    @field_validator('time')
    @classmethod
    def truncate_to_seconds(cls, v: dt.time) -> dt.time:
        """Drop sub-second precision; the ledger stores HH:MM:SS."""
        return v.replace(microsecond=0)

    @field_validator('description', 'vendor')
    @classmethod
    def reject_delimiters(cls, v: str) -> str:
        """Free text may not contain '|' or line breaks."""
        for char in FORBIDDEN_TEXT_CHARS:
            if char in v:
                raise ValueError(
                    f"Text may not contain {char!r} (reserved by the ledger file format)"
                )
        return v

    @field_validator('amount')
    @classmethod
    def normalize_cents(cls, v: Decimal) -> Decimal:
        """Always carry exactly two fraction digits."""
        try:
            return v.quantize(CENTS)
        except InvalidOperation:
            raise ValueError(f"Amount {v} is too large")

    @property
    def kind(self) -> Optional[TransactionKind]:
        """Deposit or payment, from the sign. None for a zero amount."""
        if self.amount > 0:
            return TransactionKind.DEPOSIT
        if self.amount < 0:
            return TransactionKind.PAYMENT
        return None

    @property
    def is_deposit(self) -> bool:
        return self.amount > 0

    @property
    def is_payment(self) -> bool:
        return self.amount < 0


# =============================================================================
# LOAD MODELS
# =============================================================================

class RecordIssue(BaseModel):
    """A persisted line that could not be turned into a Transaction."""

    line_number: int = Field(
        ...,
        ge=1,
        description="1-based line number in the backing file"
    )
    line: str = Field(
        ...,
        description="The raw line, without its line terminator"
    )
    reason: str = Field(
        ...,
        description="Why the line was skipped"
    )


class LoadReport(BaseModel):
    """
    Outcome of loading the backing file into a store.

    Loading never fails outright. Bad lines land in `skipped`,
    and an unreadable file is described by `io_error`.
    """

    path: str
    file_found: bool = Field(
        default=False,
        description="Whether the backing file existed at load time"
    )
    loaded_count: int = Field(
        default=0,
        ge=0,
        description="Number of transactions loaded"
    )
    skipped: list[RecordIssue] = Field(
        default_factory=list,
        description="Lines skipped because they were malformed"
    )
    io_error: Optional[str] = Field(
        default=None,
        description="Read failure message, if the file could not be read"
    )

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)

    @property
    def has_problems(self) -> bool:
        """True if anything was skipped or the file could not be read."""
        return bool(self.skipped) or self.io_error is not None


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single problem found in user-entered transaction data."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'invalid_format', 'not_positive', 'forbidden_character')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        ...,
        pattern="^(error|warning)$",
        description="Issue severity"
    )
    suggested_fix: Optional[str] = Field(
        default=None,
        description="Suggested fix if available"
    )


class ValidationResult(BaseModel):
    """
    Result of validating one deposit or payment entry.

    Errors block the save; warnings are shown but do not.
    """

    kind: TransactionKind
    issues: list[ValidationIssue] = Field(
        default_factory=list,
        description="All issues found"
    )
    transaction: Optional[Transaction] = Field(
        default=None,
        description="The validated transaction, present only when there are no errors"
    )

    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def is_valid(self) -> bool:
        return not self.has_errors and self.transaction is not None

    @property
    def error_count(self) -> int:
        """Count error-level issues."""
        return sum(1 for issue in self.issues if issue.severity == "error")

    @property
    def warnings(self) -> list[str]:
        return [issue.message for issue in self.issues if issue.severity == "warning"]


class EntryResult(BaseModel):
    """
    Outcome of adding a deposit or payment.

    `success` is True only when the transaction is both in the store
    and in the backing file.
    """

    success: bool
    validation: ValidationResult
    transaction: Optional[Transaction] = None
    error_message: Optional[str] = None

    @property
    def message(self) -> str:
        """One-line summary suitable for showing to the user."""
        if self.success and self.transaction is not None:
            label = "Deposit" if self.transaction.is_deposit else "Payment"
            return f"{label} added successfully."
        if self.error_message:
            return self.error_message
        return "; ".join(
            issue.message for issue in self.validation.issues
            if issue.severity == "error"
        )


# =============================================================================
# REPORT MODELS
# =============================================================================

NO_MATCHES_MESSAGE = "No matching transactions."


class ReportResult(BaseModel):
    """
    Result of running a report over the store.

    `data_found` is the explicit "no matching transactions" signal:
    callers check it instead of testing the list for emptiness.
    """
    model_config = ConfigDict(frozen=True)

    report_type: ReportType
    description: str = Field(
        ...,
        description="Human-readable description of what was reported"
    )
    transactions: tuple[Transaction, ...] = Field(
        default=(),
        description="Matching transactions, in store order"
    )
    data_found: bool = Field(
        ...,
        description="Was any transaction matched?"
    )
    start_date: Optional[dt.date] = None
    end_date: Optional[dt.date] = None

    @model_validator(mode='after')
    def validate_signal(self) -> 'ReportResult':
        """The no-match signal must agree with the transactions."""
        if self.data_found != bool(self.transactions):
            raise ValueError("data_found must be True exactly when transactions were matched")
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("Report end date cannot be before start date")
        return self

    @property
    def result_count(self) -> int:
        return len(self.transactions)

    @property
    def message(self) -> Optional[str]:
        """The no-match message, or None when there is data to show."""
        return None if self.data_found else NO_MATCHES_MESSAGE

    @property
    def deposit_total(self) -> Decimal:
        return sum((t.amount for t in self.transactions if t.is_deposit), Decimal("0.00"))

    @property
    def payment_total(self) -> Decimal:
        return sum((t.amount for t in self.transactions if t.is_payment), Decimal("0.00"))

    @property
    def net_total(self) -> Decimal:
        return sum((t.amount for t in self.transactions), Decimal("0.00"))
