"""Error taxonomy for budgetman."""


class BudgetError(Exception):
    """Base class for all budgetman errors."""


class InvalidAmount(BudgetError):
    """Amount is missing, non-numeric, non-finite or zero."""


class InvalidTransactionType(BudgetError):
    """Transaction type is not one of income/expense."""


class InvalidDate(BudgetError):
    """Date is not a valid YYYY-MM-DD calendar date."""


class PersistedStateUnreadable(BudgetError):
    """Persisted payload could not be decoded into transactions."""


class PersistWriteFailure(BudgetError):
    """Persisted payload could not be written to the backend."""
