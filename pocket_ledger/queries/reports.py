"""
Report Engine

Pure read-only queries over a transaction store.

Every report:
- keeps the store's order (nothing is re-sorted)
- never mutates the store
- returns a ReportResult whose `data_found` flag is the explicit
  "no matching transactions" signal

Calendar reports take an optional `today`; when omitted the real
current date is read at call time.
"""

from collections.abc import Callable, Iterable
from datetime import date, timedelta
from typing import Optional

from pocket_ledger.models.transaction import ReportResult, ReportType, Transaction


class ReportError(Exception):
    """A report was requested with invalid parameters."""
    pass


def _build_result(
    report_type: ReportType,
    description: str,
    matches: Iterable[Transaction],
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> ReportResult:
    matched = tuple(matches)
    return ReportResult(
        report_type=report_type,
        description=description,
        transactions=matched,
        data_found=len(matched) > 0,
        start_date=start_date,
        end_date=end_date,
    )


def _in_range(transactions: Iterable[Transaction], start: date, end: date) -> list[Transaction]:
    return [t for t in transactions if start <= t.date <= end]


# =============================================================================
# CALENDAR PERIODS
# =============================================================================

def month_to_date_bounds(today: date) -> tuple[date, date]:
    """The 1st of today's month through today, inclusive."""
    return today.replace(day=1), today


def previous_month_bounds(today: date) -> tuple[date, date]:
    """
    First and last day of the month before today's.

    January rolls back to December of the previous year.
    """
    last_day = today.replace(day=1) - timedelta(days=1)
    return last_day.replace(day=1), last_day


def year_bounds(year: int) -> tuple[date, date]:
    """January 1st through December 31st of `year`."""
    return date(year, 1, 1), date(year, 12, 31)


# =============================================================================
# REPORTS
# =============================================================================

def all_transactions(store: Iterable[Transaction]) -> ReportResult:
    """The full ledger."""
    return _build_result(ReportType.ALL, "All transactions", store)


def deposits(store: Iterable[Transaction]) -> ReportResult:
    """Transactions with a positive amount."""
    return _build_result(
        ReportType.DEPOSITS,
        "Deposits",
        (t for t in store if t.amount > 0),
    )


def payments(store: Iterable[Transaction]) -> ReportResult:
    """Transactions with a negative amount."""
    return _build_result(
        ReportType.PAYMENTS,
        "Payments",
        (t for t in store if t.amount < 0),
    )


def search_by_vendor(store: Iterable[Transaction], vendor: str) -> ReportResult:
    """
    Transactions whose vendor equals `vendor`, ignoring case.

    This is an exact match: "amazon" finds "Amazon" but not "Amazon Prime".

    Raises:
        ReportError: If `vendor` is blank
    """
    wanted = (vendor or "").strip()
    if not wanted:
        raise ReportError("A vendor name is required for a vendor search")

    key = wanted.casefold()
    return _build_result(
        ReportType.VENDOR,
        f"Transactions with vendor '{wanted}'",
        (t for t in store if t.vendor.casefold() == key),
    )


def date_range(store: Iterable[Transaction], start: date, end: date) -> ReportResult:
    """
    Transactions dated from `start` through `end`, both inclusive.

    Raises:
        ReportError: If `end` is before `start`
    """
    if end < start:
        raise ReportError(f"End date {end} is before start date {start}")
    return _build_result(
        ReportType.DATE_RANGE,
        f"Transactions from {start} to {end}",
        _in_range(store, start, end),
        start_date=start,
        end_date=end,
    )


def month_to_date(store: Iterable[Transaction], today: Optional[date] = None) -> ReportResult:
    """This month, from the 1st through today."""
    start, end = month_to_date_bounds(today or date.today())
    return _build_result(
        ReportType.MONTH_TO_DATE,
        f"Month to date ({start:%B %Y})",
        _in_range(store, start, end),
        start_date=start,
        end_date=end,
    )


def previous_month(store: Iterable[Transaction], today: Optional[date] = None) -> ReportResult:
    """The whole calendar month before this one."""
    start, end = previous_month_bounds(today or date.today())
    return _build_result(
        ReportType.PREVIOUS_MONTH,
        f"Previous month ({start:%B %Y})",
        _in_range(store, start, end),
        start_date=start,
        end_date=end,
    )


def year_to_date(store: Iterable[Transaction], today: Optional[date] = None) -> ReportResult:
    """Every transaction dated in the current year."""
    year = (today or date.today()).year
    start, end = year_bounds(year)
    return _build_result(
        ReportType.YEAR_TO_DATE,
        f"Year to date ({year})",
        (t for t in store if t.date.year == year),
        start_date=start,
        end_date=end,
    )


def previous_year(store: Iterable[Transaction], today: Optional[date] = None) -> ReportResult:
    """Every transaction dated in the year before the current one."""
    year = (today or date.today()).year - 1
    start, end = year_bounds(year)
    return _build_result(
        ReportType.PREVIOUS_YEAR,
        f"Previous year ({year})",
        (t for t in store if t.date.year == year),
        start_date=start,
        end_date=end,
    )


# =============================================================================
# DISPATCH
# =============================================================================

_CALENDAR_REPORTS: dict[ReportType, Callable[..., ReportResult]] = {
    ReportType.MONTH_TO_DATE: month_to_date,
    ReportType.PREVIOUS_MONTH: previous_month,
    ReportType.YEAR_TO_DATE: year_to_date,
    ReportType.PREVIOUS_YEAR: previous_year,
}

_PLAIN_REPORTS: dict[ReportType, Callable[..., ReportResult]] = {
    ReportType.ALL: all_transactions,
    ReportType.DEPOSITS: deposits,
    ReportType.PAYMENTS: payments,
}


def run_report(
    store: Iterable[Transaction],
    report_type: ReportType,
    *,
    today: Optional[date] = None,
    vendor: Optional[str] = None,
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> ReportResult:
    """
    Route a report type to the matching report function.

    Args:
        store: The transactions to report over
        report_type: Which report to run
        today: Reference date for calendar reports
        vendor: Required for ReportType.VENDOR
        start, end: Required for ReportType.DATE_RANGE

    Raises:
        ReportError: If a required parameter is missing or invalid
    """
    if report_type in _PLAIN_REPORTS:
        return _PLAIN_REPORTS[report_type](store)
    if report_type in _CALENDAR_REPORTS:
        return _CALENDAR_REPORTS[report_type](store, today=today)
    if report_type == ReportType.VENDOR:
        return search_by_vendor(store, vendor or "")
    if report_type == ReportType.DATE_RANGE:
        if start is None or end is None:
            raise ReportError("A date range report needs both a start and an end date")
        return date_range(store, start, end)
    raise ReportError(f"Unknown report type: {report_type}")
