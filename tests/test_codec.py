"""Tests for the ledger line codec."""

import pytest
from datetime import date, time
from decimal import Decimal

from pocket_ledger.services.storage import (
    MalformedRecordError,
    decode,
    encode,
    format_amount,
    parse_amount,
    parse_date,
    parse_time,
)

from conftest import make_transaction


class TestEncode:
    """Tests for serializing a transaction to one line."""

    def test_encode_payment(self):
        """Test the exact field order and formats."""
        line = encode(make_transaction())
        assert line == "2023-04-29|13:45:00|Groceries|Amazon|-29.99"

    def test_encode_zero_pads(self):
        """Test zero padding of date and time parts."""
        txn = make_transaction(day=date(2024, 1, 5), at=time(7, 3, 9), amount="5")
        assert encode(txn) == "2024-01-05|07:03:09|Groceries|Amazon|5.00"

    def test_encode_empty_description(self):
        line = encode(make_transaction(description=""))
        assert line.split("|") == ["2023-04-29", "13:45:00", "", "Amazon", "-29.99"]

    def test_encode_has_no_thousands_separator(self):
        assert encode(make_transaction(amount="1234567.80")).endswith("|1234567.80")

    def test_format_amount(self):
        assert format_amount(Decimal("-0.5")) == "-0.50"
        assert format_amount(Decimal("12")) == "12.00"


class TestDecode:
    """Tests for parsing one line into a transaction."""

    def test_decode_line(self):
        """Test decoding the canonical example line."""
        txn = decode("2023-04-29|13:45:00|Groceries|Amazon|-29.99")
        assert txn.date == date(2023, 4, 29)
        assert txn.time == time(13, 45, 0)
        assert txn.description == "Groceries"
        assert txn.vendor == "Amazon"
        assert txn.amount == Decimal("-29.99")

    def test_decode_ignores_line_terminator(self):
        txn = decode("2023-04-29|13:45:00|Groceries|Amazon|-29.99\r\n")
        assert txn.amount == Decimal("-29.99")

    def test_decode_positive_amount_is_deposit(self):
        txn = decode("2024-02-01|09:00:00|Salary|Employer|2500.00")
        assert txn.is_deposit

    def test_round_trip(self):
        """Test that decode(encode(T)) == T."""
        for txn in (
            make_transaction(),
            make_transaction(amount="2500.00", vendor="Employer", description=""),
            make_transaction(day=date(2000, 2, 29), at=time(0, 0, 0), amount="0.01"),
        ):
            assert decode(encode(txn)) == txn

    @pytest.mark.parametrize("line, fragment", [
        ("2023-04-29|13:45:00|Amazon", "expected 5 fields, found 3"),
        ("2023-04-29|13:45:00|a|b|c|-1.00", "expected 5 fields, found 6"),
        ("04/29/2023|13:45:00|Groceries|Amazon|-29.99", "Invalid date"),
        ("2023-02-30|13:45:00|Groceries|Amazon|-29.99", "not a real calendar date"),
        ("2023-04-29|1:45 PM|Groceries|Amazon|-29.99", "Invalid time"),
        ("2023-04-29|25:00:00|Groceries|Amazon|-29.99", "not a valid time"),
        ("2023-04-29|13:45:00|Groceries|Amazon|lots", "Invalid amount"),
        ("2023-04-29|13:45:00|Groceries|Amazon|1,000.00", "Invalid amount"),
    ])
    def test_malformed_lines(self, line, fragment):
        """Test that every malformed shape raises MalformedRecordError."""
        with pytest.raises(MalformedRecordError) as exc_info:
            decode(line, line_number=7)
        assert fragment in exc_info.value.reason
        assert exc_info.value.line_number == 7
        assert exc_info.value.line == line

    def test_oversized_amount_is_malformed(self):
        """Test that an amount too large for the ledger is a bad line, not a crash."""
        with pytest.raises(MalformedRecordError):
            decode("2023-04-29|13:45:00|x|y|" + "9" * 30 + ".00", line_number=1)

    def test_malformed_amount_precision(self):
        """Test that sub-cent amounts in the file are rejected, not rounded."""
        with pytest.raises(MalformedRecordError):
            decode("2023-04-29|13:45:00|Groceries|Amazon|-29.999")

    def test_error_message_includes_line_number(self):
        with pytest.raises(MalformedRecordError, match="line 3: "):
            decode("not a record", line_number=3)


class TestFieldParsers:
    """Tests for the shared field parsers."""

    def test_parse_date_strips(self):
        assert parse_date(" 2024-01-15 ") == date(2024, 1, 15)

    def test_parse_date_requires_padding(self):
        with pytest.raises(ValueError):
            parse_date("2024-1-5")

    def test_parse_time(self):
        assert parse_time("23:59:59") == time(23, 59, 59)
        with pytest.raises(ValueError):
            parse_time("23:59")

    @pytest.mark.parametrize("text, expected", [
        ("29.99", Decimal("29.99")),
        ("-29.99", Decimal("-29.99")),
        ("+5", Decimal("5")),
        (".5", Decimal("0.5")),
    ])
    def test_parse_amount(self, text, expected):
        assert parse_amount(text) == expected

    @pytest.mark.parametrize("text", ["", "abc", "1e3", "NaN", "Infinity", "1_000", "$5"])
    def test_parse_amount_rejects(self, text):
        with pytest.raises(ValueError):
            parse_amount(text)
