"""CLI for Pocket Ledger.

A Typer entry point that loads the ledger and runs the interactive menus:

    Home:    D) Add Deposit  P) Make Payment  L) Ledger  X) Exit
    Ledger:  A) All  D) Deposits  P) Payments  R) Reports  H) Home
    Reports: 1) Month To Date  2) Previous Month  3) Year To Date
             4) Previous Year  5) Search by Vendor  6) Custom Date Range
             0) Back

Rich renders tables and messages. All business rules live in the
orchestrator, validator and report engine; this module only prompts
and prints.
"""

from collections.abc import Callable
from datetime import date
from pathlib import Path
from typing import Annotated, Any, Optional, TypeVar

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from pocket_ledger.audit import configure_logging, create_correlation_id
from pocket_ledger.config import LedgerSettings
from pocket_ledger.models.transaction import (
    LoadReport,
    ReportResult,
    ReportType,
    TransactionKind,
    ValidationIssue,
)
from pocket_ledger.orchestrator import (
    ReportFlow,
    TransactionEntryFlow,
    create_app_components,
)
from pocket_ledger.queries import ReportError
from pocket_ledger.services.storage import format_amount, parse_date
from pocket_ledger.store import TransactionStore

T = TypeVar("T")

app = typer.Typer(
    name="pocket-ledger",
    help="Record deposits and payments and browse them by period or vendor.",
    add_completion=False,
)
console = Console()


class LedgerShell:
    """The interactive menu loops, bound to one store."""

    def __init__(
        self,
        store: TransactionStore,
        entry_flow: TransactionEntryFlow,
        report_flow: ReportFlow,
        out: Optional[Console] = None,
        today: Optional[Callable[[], date]] = None,
    ):
        self._store = store
        self._entry_flow = entry_flow
        self._report_flow = report_flow
        self._console = out or console
        self._today = today or date.today

    # ------------------------------------------------------------------
    # Prompting
    # ------------------------------------------------------------------

    def _choice(self, title: str, options: list[tuple[str, str]]) -> str:
        self._console.print()
        self._console.print(f"[bold]{title}[/bold]")
        self._console.print("Choose an option:")
        for key, label in options:
            self._console.print(f"  {key}) {label}")
        return self._console.input("> ").strip().upper()

    def _print_issues(self, issues: list[ValidationIssue]) -> None:
        for issue in issues:
            if issue.severity == "error":
                self._console.print(f"[red]{escape(issue.message)}[/red]")
                if issue.suggested_fix:
                    self._console.print(f"  {escape(issue.suggested_fix)}")
            else:
                self._console.print(f"[yellow]Warning: {escape(issue.message)}[/yellow]")

    def _ask(
        self,
        label: str,
        check: Callable[[str], tuple[Optional[T], list[ValidationIssue]]],
    ) -> T:
        """Prompt until `check` accepts the input."""
        while True:
            raw = self._console.input(f"{label}: ")
            value, issues = check(raw)
            self._print_issues(issues)
            if value is not None:
                return value

    def _ask_date(self, label: str) -> date:
        while True:
            raw = self._console.input(f"{label} (YYYY-MM-DD): ")
            try:
                return parse_date(raw)
            except ValueError as e:
                self._console.print(f"[red]{escape(str(e))}[/red]")

    # ------------------------------------------------------------------
    # Entry
    # ------------------------------------------------------------------

    def add_transaction(self, kind: TransactionKind) -> None:
        """Collect one deposit or payment, re-prompting on bad input."""
        validator = self._entry_flow.validator
        label = "deposit" if kind == TransactionKind.DEPOSIT else "payment"
        self._console.print(f"Enter {label} details:")

        txn_date = self._ask("Date (YYYY-MM-DD)", validator.validate_date)
        txn_time = self._ask("Time (HH:MM:SS)", validator.validate_time)
        description = self._ask(
            "Description", lambda raw: validator.validate_text("description", raw),
        )
        vendor = self._ask("Vendor", lambda raw: validator.validate_text("vendor", raw))
        amount = self._ask("Amount (positive number)", validator.validate_amount)

        if kind == TransactionKind.DEPOSIT:
            add = self._entry_flow.add_deposit
        else:
            add = self._entry_flow.add_payment
        result = add(
            self._store, txn_date, txn_time, description, vendor, amount,
            correlation_id=create_correlation_id(),
        )

        if result.success:
            self._console.print(f"[green]{escape(result.message)}[/green]")
        else:
            self._console.print(f"[red]{escape(result.message)}[/red]")

    # ------------------------------------------------------------------
    # Reports
    # ------------------------------------------------------------------

    def show_report(self, result: ReportResult) -> None:
        """Print a report as a table with totals, or the no-match message."""
        if not result.data_found:
            self._console.print(f"[yellow]{escape(result.description)}: {result.message}[/yellow]")
            return

        table = Table(title=result.description, show_lines=False)
        table.add_column("Date")
        table.add_column("Time")
        table.add_column("Description")
        table.add_column("Vendor")
        table.add_column("Amount", justify="right")

        for txn in result.transactions:
            style = "green" if txn.is_deposit else "red" if txn.is_payment else ""
            table.add_row(
                txn.date.isoformat(),
                txn.time.isoformat(),
                Text(txn.description),
                Text(txn.vendor),
                Text(format_amount(txn.amount), style=style),
            )

        self._console.print(table)
        self._console.print(
            f"{result.result_count} transactions | "
            f"deposits {format_amount(result.deposit_total)} | "
            f"payments {format_amount(result.payment_total)} | "
            f"net {format_amount(result.net_total)}"
        )

    def _report(self, report_type: ReportType, **params: Any) -> None:
        try:
            result = self._report_flow.run(
                self._store, report_type, today=self._today(), **params,
            )
        except ReportError as e:
            self._console.print(f"[red]{escape(str(e))}[/red]")
            return
        self.show_report(result)

    # ------------------------------------------------------------------
    # Menus
    # ------------------------------------------------------------------

    def reports_menu(self) -> None:
        simple = {
            "1": ReportType.MONTH_TO_DATE,
            "2": ReportType.PREVIOUS_MONTH,
            "3": ReportType.YEAR_TO_DATE,
            "4": ReportType.PREVIOUS_YEAR,
        }
        while True:
            choice = self._choice("Reports", [
                ("1", "Month To Date"),
                ("2", "Previous Month"),
                ("3", "Year To Date"),
                ("4", "Previous Year"),
                ("5", "Search by Vendor"),
                ("6", "Custom Date Range"),
                ("0", "Back"),
            ])
            if choice in simple:
                self._report(simple[choice])
            elif choice == "5":
                vendor = self._console.input("Vendor name: ").strip()
                self._report(ReportType.VENDOR, vendor=vendor)
            elif choice == "6":
                start = self._ask_date("Start date")
                end = self._ask_date("End date")
                self._report(ReportType.DATE_RANGE, start=start, end=end)
            elif choice == "0":
                return
            else:
                self._console.print("[red]Invalid option[/red]")

    def ledger_menu(self) -> None:
        while True:
            choice = self._choice("Ledger", [
                ("A", "All"),
                ("D", "Deposits"),
                ("P", "Payments"),
                ("R", "Reports"),
                ("H", "Home"),
            ])
            if choice == "A":
                self._report(ReportType.ALL)
            elif choice == "D":
                self._report(ReportType.DEPOSITS)
            elif choice == "P":
                self._report(ReportType.PAYMENTS)
            elif choice == "R":
                self.reports_menu()
            elif choice == "H":
                return
            else:
                self._console.print("[red]Invalid option[/red]")

    def home_menu(self) -> None:
        """Run until the user chooses X (or input ends)."""
        while True:
            choice = self._choice("Welcome to Pocket Ledger", [
                ("D", "Add Deposit"),
                ("P", "Make Payment (Debit)"),
                ("L", "Ledger"),
                ("X", "Exit"),
            ])
            if choice == "D":
                self.add_transaction(TransactionKind.DEPOSIT)
            elif choice == "P":
                self.add_transaction(TransactionKind.PAYMENT)
            elif choice == "L":
                self.ledger_menu()
            elif choice == "X":
                return
            else:
                self._console.print("[red]Invalid option[/red]")


def show_load_report(report: LoadReport, out: Optional[Console] = None) -> None:
    """Tell the user what happened while loading the ledger file."""
    out = out or console
    if report.io_error:
        out.print(f"[red]Could not read ledger: {escape(report.io_error)}[/red]")
        out.print("[yellow]Starting with an empty ledger.[/yellow]")
        return
    for issue in report.skipped:
        out.print(
            f"[yellow]Skipped line {issue.line_number}: {escape(issue.reason)}[/yellow]"
        )
    if report.file_found:
        out.print(f"Loaded {report.loaded_count} transactions from {escape(report.path)}")
    else:
        out.print(f"No ledger at {escape(report.path)} yet; it will be created on first save.")


@app.command()
def run(
    file: Annotated[
        Optional[Path], typer.Option("--file", "-f", help="Ledger file (default: LEDGER_DATA_FILE or transactions.csv)")
    ] = None,
    log_level: Annotated[
        Optional[str], typer.Option(help="Log level (DEBUG, INFO, WARNING, ERROR)")
    ] = None,
    log_json: Annotated[
        Optional[bool], typer.Option("--log-json/--no-log-json", help="Write JSON log lines")
    ] = None,
) -> None:
    """Open the ledger and start the interactive menus."""
    overrides: dict[str, Any] = {}
    if file is not None:
        overrides["data_file"] = file
    if log_level is not None:
        overrides["log_level"] = log_level
    if log_json is not None:
        overrides["log_json"] = log_json

    try:
        settings = LedgerSettings(**overrides)
    except ValidationError as e:
        console.print(f"[red]Error:[/red] invalid configuration: {escape(str(e))}")
        raise typer.Exit(2)

    configure_logging(settings.log_level_number, settings.log_json, settings.log_file)

    store, load_report, entry_flow, report_flow = create_app_components(settings)
    show_load_report(load_report)

    shell = LedgerShell(store, entry_flow, report_flow)
    try:
        shell.home_menu()
    except (EOFError, KeyboardInterrupt):
        console.print()
    console.print("Goodbye.")


def main() -> None:
    """Console-script entry point."""
    app()


if __name__ == "__main__":
    main()
