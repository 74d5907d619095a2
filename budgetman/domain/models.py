"""Domain type definitions for budgetman.

These NewTypes provide semantic clarity and help with type checking:
- Amount: Non-negative transaction magnitude in currency units
- Month: Month in YYYY-MM format
- CategoryName: Free-form category label
- TransactionId: Unique transaction identifier
"""

from typing import Literal, NewType

# Amounts are magnitudes; the sign is implied by the transaction type
Amount = NewType("Amount", float)

# Month is always in YYYY-MM format (e.g., "2025-01")
Month = NewType("Month", str)

CategoryName = NewType("CategoryName", str)

# Millisecond timestamps, unique within a store
TransactionId = NewType("TransactionId", int)

TransactionType = Literal["income", "expense"]

TRANSACTION_TYPES: tuple[TransactionType, ...] = ("income", "expense")

DEFAULT_CATEGORIES: tuple[CategoryName, ...] = (
    CategoryName("Food"),
    CategoryName("Transport"),
    CategoryName("Rent"),
    CategoryName("Utilities"),
    CategoryName("Shopping"),
    CategoryName("Entertainment"),
    CategoryName("Salary"),
    CategoryName("Other"),
)

# Matches any value in a filter field
ALL = "all"
