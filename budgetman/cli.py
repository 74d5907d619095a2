"""CLI entry point for budgetman."""

import os
import tomllib

import typer

from budgetman.commands.admin import categories_command, export_command, init_command
from budgetman.commands.report import months_command, report_command
from budgetman.commands.transactions import add_command, delete_command, list_command
from budgetman.config import load_settings
from budgetman.logging_setup import LOG_LEVEL_ENV, configure_logging

app = typer.Typer(
    name="budgetman",
    help="Budget Manager - track income and expenses from your terminal",
    add_completion=False,
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Budget Manager - track income and expenses from your terminal."""
    if verbose:
        configure_logging("DEBUG")
        return

    try:
        level: str | None = load_settings().log_level
    except tomllib.TOMLDecodeError:
        level = None
    # Environment wins over the config file
    configure_logging(os.environ.get(LOG_LEVEL_ENV) or level)


@app.command(name="init")
def init(
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing config"),
) -> None:
    """Initialize budgetman configuration and data store."""
    init_command(force)


@app.command()
def add(
    amount: str = typer.Argument(..., help="Amount (sign is ignored; use -- before a negative number)"),
    txn_type: str = typer.Option("expense", "--type", "-t", help="'income' or 'expense'"),
    category: str = typer.Option(None, "--category", "-c", help="Category (default: first configured category)"),
    note: str = typer.Option(None, "--note", "-n", help="Optional note"),
    date: str = typer.Option(None, "--date", "-d", help="Date (YYYY-MM-DD, default: today)"),
) -> None:
    """Add an income or expense transaction."""
    add_command(amount, txn_type, category, note, date)


@app.command()
def delete(
    txn_id: int = typer.Argument(..., help="Transaction ID (from 'budgetman list')"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Don't ask for confirmation"),
) -> None:
    """Delete a transaction."""
    delete_command(txn_id, yes)


@app.command(name="list")
def list_transactions(
    txn_type: str = typer.Option(None, "--type", "-t", help="Filter by 'income' or 'expense'"),
    category: str = typer.Option(None, "--category", "-c", help="Filter by category"),
    month: str = typer.Option(None, "--month", "-m", help="Filter by month (YYYY-MM)"),
    limit: int = typer.Option(50, help="Maximum transactions to show"),
    all: bool = typer.Option(False, "--all", "-a", help="Show all matching transactions"),
) -> None:
    """List your transactions, newest first."""
    list_command(txn_type, category, month, limit, all)


@app.command(name="report")
def report(
    txn_type: str = typer.Option(None, "--type", "-t", help="Filter by 'income' or 'expense'"),
    category: str = typer.Option(None, "--category", "-c", help="Filter by category"),
    month: str = typer.Option(None, "--month", "-m", help="Filter by month (YYYY-MM)"),
    histogram: bool = typer.Option(True, help="Show histogram of your spending"),
) -> None:
    """Show totals, spending by category and the monthly trend."""
    report_command(txn_type, category, month, histogram)


@app.command()
def months() -> None:
    """List months that have transactions."""
    months_command()


@app.command()
def categories() -> None:
    """List your categories."""
    categories_command()


@app.command()
def export(
    output: str = typer.Option(None, "--output", "-o", help="Output file (default: ./budget-data.json)"),
) -> None:
    """Export all transactions to JSON."""
    export_command(output)


if __name__ == "__main__":
    app()
