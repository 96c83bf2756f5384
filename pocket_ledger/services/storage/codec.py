"""
Record Codec

Converts one Transaction to and from one line of the ledger file:

    date|time|description|vendor|amount
    2023-04-29|13:45:00|Groceries|Amazon|-29.99

- date is YYYY-MM-DD, time is HH:MM:SS (24-hour, zero-padded)
- amount is signed with exactly two fraction digits, '.' separator,
  no thousands separator
- there is no escaping; description and vendor may never contain '|'
  or line breaks (enforced by the Transaction model)

The field parsers are shared with entry validation so a value the user
can type is exactly a value the file can hold.
"""

import re
from datetime import date, datetime, time
from decimal import Decimal, InvalidOperation
from typing import Optional

from pydantic import ValidationError

from pocket_ledger.models.transaction import FIELD_DELIMITER, Transaction


DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M:%S"
FIELD_COUNT = 5

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_TIME_RE = re.compile(r"^\d{2}:\d{2}:\d{2}$")
_AMOUNT_RE = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)$")


class MalformedRecordError(ValueError):
    """A persisted line could not be decoded into a Transaction."""

    def __init__(
        self,
        reason: str,
        line: Optional[str] = None,
        line_number: Optional[int] = None,
    ):
        self.reason = reason
        self.line = line
        self.line_number = line_number
        where = f"line {line_number}: " if line_number is not None else ""
        super().__init__(f"{where}{reason}")


# =============================================================================
# FIELD PARSERS
# =============================================================================

def parse_date(text: str) -> date:
    """Parse a YYYY-MM-DD date. Raises ValueError."""
    text = text.strip()
    if not _DATE_RE.match(text):
        raise ValueError(f"Invalid date {text!r}: expected YYYY-MM-DD")
    try:
        return datetime.strptime(text, DATE_FORMAT).date()
    except ValueError:
        raise ValueError(f"Invalid date {text!r}: not a real calendar date")


def parse_time(text: str) -> time:
    """Parse an HH:MM:SS time. Raises ValueError."""
    text = text.strip()
    if not _TIME_RE.match(text):
        raise ValueError(f"Invalid time {text!r}: expected HH:MM:SS")
    try:
        return datetime.strptime(text, TIME_FORMAT).time()
    except ValueError:
        raise ValueError(f"Invalid time {text!r}: not a valid time of day")


def parse_amount(text: str) -> Decimal:
    """Parse a plain signed decimal number. Raises ValueError."""
    text = text.strip()
    if not _AMOUNT_RE.match(text):
        raise ValueError(f"Invalid amount {text!r}: expected a number like 29.99")
    try:
        return Decimal(text)
    except InvalidOperation:
        raise ValueError(f"Invalid amount {text!r}")


def format_amount(amount: Decimal) -> str:
    """Signed, two fraction digits, no grouping."""
    return f"{amount:.2f}"


# =============================================================================
# RECORD ENCODE / DECODE
# =============================================================================

def encode(transaction: Transaction) -> str:
    """Serialize a transaction to one ledger line (no line terminator)."""
    return FIELD_DELIMITER.join([
        transaction.date.strftime(DATE_FORMAT),
        transaction.time.strftime(TIME_FORMAT),
        transaction.description,
        transaction.vendor,
        format_amount(transaction.amount),
    ])


def decode(line: str, line_number: Optional[int] = None) -> Transaction:
    """
    Parse one ledger line into a Transaction.

    Args:
        line: The raw line; a trailing line terminator is ignored
        line_number: Position in the file, used in error messages

    Raises:
        MalformedRecordError: If the line does not have exactly five
            fields or any field fails to parse
    """
    raw = line.rstrip("\r\n")
    parts = raw.split(FIELD_DELIMITER)
    if len(parts) != FIELD_COUNT:
        raise MalformedRecordError(
            f"expected {FIELD_COUNT} fields, found {len(parts)}",
            line=raw,
            line_number=line_number,
        )

    date_text, time_text, description, vendor, amount_text = parts
    try:
        return Transaction(
            date=parse_date(date_text),
            time=parse_time(time_text),
            description=description,
            vendor=vendor,
            amount=parse_amount(amount_text),
        )
    except ValidationError as e:
        reasons = "; ".join(err["msg"] for err in e.errors())
        raise MalformedRecordError(reasons, line=raw, line_number=line_number) from e
    except ValueError as e:
        raise MalformedRecordError(str(e), line=raw, line_number=line_number) from e
