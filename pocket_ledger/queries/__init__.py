"""Report engine package."""

from pocket_ledger.queries.reports import (
    ReportError,
    all_transactions,
    date_range,
    deposits,
    month_to_date,
    month_to_date_bounds,
    payments,
    previous_month,
    previous_month_bounds,
    previous_year,
    run_report,
    search_by_vendor,
    year_bounds,
    year_to_date,
)

__all__ = [
    "ReportError",
    "all_transactions",
    "date_range",
    "deposits",
    "month_to_date",
    "month_to_date_bounds",
    "payments",
    "previous_month",
    "previous_month_bounds",
    "previous_year",
    "run_report",
    "search_by_vendor",
    "year_bounds",
    "year_to_date",
]
