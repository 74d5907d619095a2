"""Domain models and types for budgetman.

This package contains the functional core:
- Pure functions with no side effects
- No I/O operations
- Easy to test
- Business logic separated from infrastructure
"""

from budgetman.domain.models import Amount, CategoryName, Month, TransactionId

__all__ = ["Amount", "Month", "CategoryName", "TransactionId"]
