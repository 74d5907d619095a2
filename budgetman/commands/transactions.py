"""Transaction management commands (add, delete, list)."""

import sys
import tomllib

import pandas as pd
import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from budgetman.dates import is_valid_date
from budgetman.domain.errors import BudgetError
from budgetman.domain.filters import FilterSpec
from budgetman.domain.report import format_amount, is_negative
from budgetman.domain.transactions import Transaction, TransactionDraft
from budgetman.session import load_session

console = Console()


def normalize_date(date: str) -> str:
    """Normalize a user-entered date to YYYY-MM-DD.

    Args:
        date: Date in YYYY-MM-DD, DD/MM/YYYY or another format pandas understands.

    Returns:
        Date in YYYY-MM-DD format.

    Raises:
        ValueError: If the date cannot be parsed.
    """
    date = date.strip()
    if is_valid_date(date):
        return date
    try:
        return pd.to_datetime(date, dayfirst=True).strftime("%Y-%m-%d")
    except (ValueError, OverflowError) as e:
        raise ValueError(str(e)) from e


def format_transaction_amount(txn: Transaction, currency: str) -> str:
    """Format a transaction amount with type colouring."""
    amount_display = format_amount(txn.amount, currency)
    if txn.is_income:
        return f"[green]+{amount_display}[/green]"
    return f"[red]-{amount_display}[/red]"


def format_balance(balance: float, currency: str) -> str:
    """Format a balance, red only when strictly negative."""
    # Colour must agree with the rounded digits shown
    colour = "red" if is_negative(round(balance, 2)) else "green"
    return f"[{colour}]{format_amount(balance, currency)}[/{colour}]"


def add_command(
    amount: str,
    txn_type: str = "expense",
    category: str | None = None,
    note: str | None = None,
    date: str | None = None,
) -> None:
    """Add a transaction.

    Args:
        amount: Amount as entered (any non-zero number; stored as its magnitude).
        txn_type: "income" or "expense".
        category: Category label. Defaults to the first configured category.
        note: Optional note.
        date: Optional date. Defaults to today.
    """
    try:
        settings, session = load_session()
    except tomllib.TOMLDecodeError as e:
        console.print(f"[red]Invalid config file: {escape(str(e))}[/red]", style="bold")
        sys.exit(1)

    normalized_date = None
    if date:
        try:
            normalized_date = normalize_date(date)
        except ValueError as e:
            console.print(f"[red]Invalid date format: {escape(str(e))}[/red]")
            console.print("[dim]Accepted formats: YYYY-MM-DD, DD/MM/YYYY, DD-MM-YYYY, etc.[/dim]")
            sys.exit(1)

    category = category or settings.categories[0]
    draft = TransactionDraft(type=txn_type, amount=amount, category=category, note=note, date=normalized_date)

    try:
        views = session.add_transaction(draft)
    except BudgetError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        sys.exit(1)

    # New transactions are prepended
    txn = views.transactions[0]

    console.print("[green]✓[/green] Transaction added:")
    console.print(f"  ID: {txn.id}")
    console.print(f"  Date: {txn.date}")
    console.print(f"  Type: {txn.type}")
    console.print(f"  Amount: {format_amount(txn.amount, settings.currency)}")
    console.print(f"  Category: {escape(txn.category)}")
    if txn.note:
        console.print(f"  Note: {escape(txn.note)}")

    if txn.category not in settings.categories:
        console.print(f"[dim]Category '{escape(txn.category)}' is not in your category list[/dim]")

    if session.store.persist_error:
        error = escape(str(session.store.persist_error))
        console.print(f"[yellow]Warning: changes were not saved ({error})[/yellow]")

    console.print(f"\n[bold]Balance:[/bold] {format_balance(views.totals.balance, settings.currency)}")


def delete_command(txn_id: int, yes: bool = False) -> None:
    """Delete a transaction.

    Args:
        txn_id: Transaction ID (from 'budgetman list').
        yes: Skip the confirmation prompt.
    """
    try:
        settings, session = load_session()
    except tomllib.TOMLDecodeError as e:
        console.print(f"[red]Invalid config file: {escape(str(e))}[/red]", style="bold")
        sys.exit(1)

    txn = session.store.get(txn_id)
    if txn is None:
        console.print(f"[yellow]Transaction {txn_id} not found[/yellow]")
        return

    console.print(
        f"{txn.date}  {escape(txn.category)}  {format_transaction_amount(txn, settings.currency)}"
        + (f"  [dim]{escape(txn.note)}[/dim]" if txn.note else "")
    )
    if not yes and not typer.confirm("Delete this transaction?", default=False):
        console.print("[dim]Cancelled[/dim]")
        return

    views = session.remove_transaction(txn_id)
    console.print(f"[green]✓[/green] Deleted transaction {txn_id}")

    if session.store.persist_error:
        error = escape(str(session.store.persist_error))
        console.print(f"[yellow]Warning: changes were not saved ({error})[/yellow]")

    console.print(f"\n[bold]Balance:[/bold] {format_balance(views.totals.balance, settings.currency)}")


def list_command(
    txn_type: str | None = None,
    category: str | None = None,
    month: str | None = None,
    limit: int = 50,
    all: bool = False,
) -> None:
    """List transactions matching a filter, newest first."""
    try:
        settings, session = load_session()
        views = session.set_filter(FilterSpec.create(txn_type, category, month))
    except tomllib.TOMLDecodeError as e:
        console.print(f"[red]Invalid config file: {escape(str(e))}[/red]", style="bold")
        sys.exit(1)
    except BudgetError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        sys.exit(1)

    transactions = views.filtered_transactions
    if not transactions:
        console.print("[yellow]No transactions found[/yellow]")
        return

    shown = transactions if all else transactions[:limit]
    title = (
        f"Transactions (showing all {len(shown)})"
        if len(shown) == len(transactions)
        else f"Transactions (showing {len(shown)} of {len(transactions)})"
    )
    table = Table(title=title)
    table.add_column("ID", style="dim", justify="right")
    table.add_column("Date", style="cyan")
    table.add_column("Category", style="magenta")
    table.add_column("Note", style="white")
    table.add_column("Amount", justify="right")

    for txn in shown:
        table.add_row(
            str(txn.id),
            txn.date,
            escape(txn.category),
            escape(txn.note) if txn.note else "[dim]-[/dim]",
            format_transaction_amount(txn, settings.currency),
        )

    console.print(table)

    totals = views.totals
    console.print(
        f"\n[bold]Income:[/bold] {format_amount(totals.income, settings.currency)}"
        f"  [bold]Expense:[/bold] {format_amount(totals.expense, settings.currency)}"
        f"  [bold]Balance:[/bold] {format_balance(totals.balance, settings.currency)}"
    )
