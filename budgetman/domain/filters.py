"""Pure functions for filtering transactions.

A FilterSpec never mutates the transactions it is applied to. Each field
is either the literal "all" or a value that must match exactly.
"""

from dataclasses import dataclass
from typing import Iterable

from budgetman.domain.errors import InvalidTransactionType
from budgetman.domain.models import ALL, TRANSACTION_TYPES, Month
from budgetman.domain.transactions import Transaction


@dataclass(frozen=True)
class FilterSpec:
    """Immutable view constraints (type, category, month)."""

    type: str = ALL
    category: str = ALL
    month: str = ALL

    @classmethod
    def create(
        cls,
        type: str | None = None,
        category: str | None = None,
        month: str | None = None,
    ) -> "FilterSpec":
        """Build a filter from optional user input.

        Args:
            type: "income", "expense", "all" or None.
            category: Category label, "all" or None.
            month: Month (YYYY-MM), "all" or None.

        Returns:
            FilterSpec with omitted fields set to "all".

        Raises:
            InvalidTransactionType: If type is not income, expense or all.
        """
        txn_type = (type or ALL).strip().lower()
        if txn_type != ALL and txn_type not in TRANSACTION_TYPES:
            raise InvalidTransactionType(f"Type filter must be 'all', 'income' or 'expense' (got {type!r})")

        return cls(
            type=txn_type,
            category=category or ALL,
            month=Month(month) if month else ALL,
        )

    @property
    def is_unfiltered(self) -> bool:
        return self.type == ALL and self.category == ALL and self.month == ALL


def matches(transaction: Transaction, spec: FilterSpec) -> bool:
    """Check whether a transaction satisfies every constraint of a filter.

    Args:
        transaction: Transaction to test.
        spec: Filter to apply.

    Returns:
        True if type, category and month all match.
    """
    if spec.type != ALL and transaction.type != spec.type:
        return False
    if spec.category != ALL and transaction.category != spec.category:
        return False
    if spec.month != ALL and transaction.date[:7] != spec.month:
        return False
    return True


def apply_filter(transactions: Iterable[Transaction], spec: FilterSpec) -> list[Transaction]:
    """Select the transactions matching a filter, preserving order."""
    return [txn for txn in transactions if matches(txn, spec)]
