"""Pure functions for report calculations and aggregations.

This module contains the functional core for reporting operations:
- No I/O operations (no storage, no console, no files)
- No side effects
- Pure data transformations
- Easy to test

Totals and the category breakdown are computed over the filtered
transactions, while the monthly series always covers the full history.
"""

from dataclasses import dataclass
from typing import Iterable, Sequence

from budgetman.domain.filters import FilterSpec, apply_filter
from budgetman.domain.models import Amount, CategoryName, Month
from budgetman.domain.transactions import Transaction


@dataclass(frozen=True)
class Totals:
    """Immutable income/expense/balance totals."""

    income: Amount
    expense: Amount
    balance: float


@dataclass(frozen=True)
class CategoryTotal:
    """Immutable expense total for one category."""

    category: CategoryName
    total: Amount


@dataclass(frozen=True)
class MonthlyEntry:
    """Immutable income and expense sums for one month."""

    month: Month
    income: Amount
    expense: Amount


@dataclass(frozen=True)
class BudgetViews:
    """Every derived view of the store for the active filter."""

    transactions: list[Transaction]
    filtered_transactions: list[Transaction]
    totals: Totals
    category_breakdown: list[CategoryTotal]
    monthly_series: list[MonthlyEntry]
    distinct_months: list[Month]


def distinct_months(transactions: Iterable[Transaction]) -> list[Month]:
    """List the months present in the transactions.

    Args:
        transactions: Transactions to scan.

    Returns:
        Unique months (YYYY-MM), newest first.
    """
    return sorted({txn.month for txn in transactions}, reverse=True)


def totals(transactions: Iterable[Transaction]) -> Totals:
    """Sum income and expenses.

    Args:
        transactions: Usually the filtered transactions.

    Returns:
        Totals where balance = income - expense. Empty input gives zeros.
    """
    income = 0.0
    expense = 0.0
    for txn in transactions:
        if txn.is_income:
            income += txn.amount
        else:
            expense += txn.amount

    return Totals(income=Amount(income), expense=Amount(expense), balance=income - expense)


def category_breakdown(transactions: Iterable[Transaction]) -> list[CategoryTotal]:
    """Sum expenses per category.

    Args:
        transactions: Usually the filtered transactions.

    Returns:
        One entry per category with at least one expense, in order of first appearance.
    """
    sums: dict[CategoryName, float] = {}
    for txn in transactions:
        if txn.is_expense:
            sums[txn.category] = sums.get(txn.category, 0.0) + txn.amount

    return [CategoryTotal(category=cat, total=Amount(total)) for cat, total in sums.items()]


def monthly_series(transactions: Iterable[Transaction]) -> list[MonthlyEntry]:
    """Bucket income and expenses by month.

    Args:
        transactions: The full, unfiltered store.

    Returns:
        One entry per month, oldest first.
    """
    buckets: dict[Month, list[float]] = {}
    for txn in transactions:
        bucket = buckets.setdefault(txn.month, [0.0, 0.0])
        if txn.is_income:
            bucket[0] += txn.amount
        else:
            bucket[1] += txn.amount

    return [
        MonthlyEntry(month=month, income=Amount(income), expense=Amount(expense))
        for month, (income, expense) in sorted(buckets.items())
    ]


def compute_views(transactions: Sequence[Transaction], spec: FilterSpec) -> BudgetViews:
    """Recompute every derived view.

    Args:
        transactions: The full store, newest first.
        spec: Active filter.

    Returns:
        BudgetViews snapshot.
    """
    filtered = apply_filter(transactions, spec)
    return BudgetViews(
        transactions=list(transactions),
        filtered_transactions=filtered,
        totals=totals(filtered),
        category_breakdown=category_breakdown(filtered),
        monthly_series=monthly_series(transactions),
        distinct_months=distinct_months(transactions),
    )


def is_negative(amount: float) -> bool:
    """Check whether a balance should be shown as negative (zero is not)."""
    return amount < 0


def format_amount(amount: float, currency: str = "₹") -> str:
    """Format an amount for display.

    Args:
        amount: Amount in currency units.
        currency: Currency symbol prefix.

    Returns:
        Formatted string with two decimals (e.g., "₹1,234.50" or "-₹42.50").
    """
    formatted = f"{currency}{abs(amount):,.2f}"
    if is_negative(amount) and round(abs(amount), 2) > 0:
        return f"-{formatted}"
    return formatted


def calculate_histogram_bar_length(
    amount: float,
    max_amount: float,
    bar_width: int,
) -> int:
    """Calculate histogram bar length.

    Args:
        amount: Amount to display.
        max_amount: Maximum amount in dataset.
        bar_width: Maximum bar width in characters.

    Returns:
        Bar length in characters.
    """
    if max_amount <= 0:
        return 0
    return int((abs(amount) / max_amount) * bar_width)
