"""Report commands for viewing totals, breakdowns and trends."""

import sys
import tomllib

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from budgetman.commands.transactions import format_balance
from budgetman.dates import month_label
from budgetman.domain.errors import BudgetError
from budgetman.domain.filters import FilterSpec
from budgetman.domain.models import ALL, Month
from budgetman.domain.report import (
    BudgetViews,
    CategoryTotal,
    calculate_histogram_bar_length,
    format_amount,
)
from budgetman.session import load_session

console = Console()


def describe_filter(spec: FilterSpec) -> str:
    """Build a heading for the active filter.

    Args:
        spec: Active filter.

    Returns:
        Heading such as "March 2024 · expense · Food" or "All Time".
    """
    parts = []
    if spec.month != ALL:
        try:
            parts.append(month_label(Month(spec.month)))
        except ValueError:
            parts.append(spec.month)
    else:
        parts.append("All Time")
    if spec.type != ALL:
        parts.append(spec.type)
    if spec.category != ALL:
        parts.append(spec.category)
    return " · ".join(parts)


def render_category_line(
    cat_total: CategoryTotal,
    currency: str,
    histogram: bool,
    max_amount: float | None,
    bar_width: int,
) -> None:
    """Render single expense category line.

    Args:
        cat_total: Category expense total.
        currency: Currency symbol.
        histogram: Whether to show histogram bars.
        max_amount: Maximum amount for histogram scaling.
        bar_width: Width of histogram bar in characters.
    """
    amount_display = format_amount(cat_total.total, currency)

    if histogram and max_amount:
        bar_length = calculate_histogram_bar_length(cat_total.total, max_amount, bar_width)
        bar = "█" * bar_length
        console.print(f"  {escape(f'{cat_total.category:20}')} {amount_display:>14} {bar}")
    else:
        console.print(f"  {escape(cat_total.category)}: {amount_display}")


def render_monthly_series(views: BudgetViews, currency: str) -> None:
    """Render income and expenses per month over the full history."""
    table = Table(title="Monthly trend (all transactions)")
    table.add_column("Month", style="cyan")
    table.add_column("Income", justify="right", style="green")
    table.add_column("Expense", justify="right", style="red")
    table.add_column("Net", justify="right")

    for entry in views.monthly_series:
        table.add_row(
            entry.month,
            format_amount(entry.income, currency),
            format_amount(entry.expense, currency),
            format_balance(entry.income - entry.expense, currency),
        )

    console.print(table)


def report_command(
    txn_type: str | None = None,
    category: str | None = None,
    month: str | None = None,
    histogram: bool = True,
) -> None:
    """Show totals, expense breakdown and monthly trend."""
    try:
        settings, session = load_session()
        spec = FilterSpec.create(txn_type, category, month)
        views = session.set_filter(spec)
    except tomllib.TOMLDecodeError as e:
        console.print(f"[red]Invalid config file: {escape(str(e))}[/red]", style="bold")
        sys.exit(1)
    except BudgetError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        sys.exit(1)

    if not views.transactions:
        console.print("[dim]No transactions yet[/dim]")
        return

    currency = settings.currency
    totals = views.totals

    console.print(f"[bold cyan]{escape(describe_filter(spec))}[/bold cyan]\n")
    console.print(f"  [bold]Income:[/bold]  {format_amount(totals.income, currency)}")
    console.print(f"  [bold]Expense:[/bold] {format_amount(totals.expense, currency)}")
    console.print(f"  [bold]Balance:[/bold] {format_balance(totals.balance, currency)}\n")

    if views.category_breakdown:
        console.print("[bold red]Expenses by category:[/bold red]\n")
        max_amount = max(cat.total for cat in views.category_breakdown) if histogram else None

        for cat_total in views.category_breakdown:
            render_category_line(cat_total, currency, histogram, max_amount, bar_width=30)
        console.print()
    else:
        console.print("[dim]No expenses match this filter[/dim]\n")

    render_monthly_series(views, currency)


def months_command() -> None:
    """List the months that have transactions, newest first."""
    try:
        _, session = load_session()
    except tomllib.TOMLDecodeError as e:
        console.print(f"[red]Invalid config file: {escape(str(e))}[/red]", style="bold")
        sys.exit(1)

    months = session.views().distinct_months
    if not months:
        console.print("[yellow]No transactions found[/yellow]")
        return

    for month in months:
        console.print(f"  {month}  [dim]{month_label(month)}[/dim]")
