"""Pure functions for transaction validation and serialization.

This module contains the functional core for transaction records:
- No I/O operations (no storage, no console, no files)
- No side effects
- Pure data transformations
- Easy to test

Invalid input raises a ``BudgetError`` subclass so callers can abort
the operation before anything is stored.
"""

import math
from dataclasses import asdict, dataclass
from typing import Any, Iterable, TypedDict

from budgetman.dates import is_valid_date, month_of
from budgetman.domain.errors import (
    InvalidAmount,
    InvalidDate,
    InvalidTransactionType,
    PersistedStateUnreadable,
)
from budgetman.domain.models import (
    DEFAULT_CATEGORIES,
    TRANSACTION_TYPES,
    Amount,
    CategoryName,
    Month,
    TransactionId,
    TransactionType,
)


class TransactionDraft(TypedDict, total=False):
    """User input for a new transaction, before validation."""

    type: str
    amount: Any
    category: str
    note: str | None
    date: str | None


@dataclass(frozen=True)
class Transaction:
    """Immutable transaction record."""

    id: TransactionId
    type: TransactionType
    amount: Amount
    category: CategoryName
    note: str
    date: str

    @property
    def month(self) -> Month:
        return month_of(self.date)

    @property
    def is_income(self) -> bool:
        return self.type == "income"

    @property
    def is_expense(self) -> bool:
        return self.type == "expense"


def parse_amount(raw: Any) -> Amount:
    """Parse and validate a transaction amount.

    Args:
        raw: Amount as a number or numeric string (e.g., "42.50").

    Returns:
        Absolute amount as a float. Negative input is stored as its magnitude.

    Raises:
        InvalidAmount: If the amount is missing, non-numeric, non-finite or zero.
    """
    if raw is None or isinstance(raw, bool):
        raise InvalidAmount("Please enter a valid amount")

    if isinstance(raw, str):
        raw = raw.strip()
        if not raw:
            raise InvalidAmount("Please enter a valid amount")
        # float() would read "1_000" as 1000
        if "_" in raw:
            raise InvalidAmount(f"Please enter a valid amount (got {raw!r})")

    try:
        value = float(raw)
    except (TypeError, ValueError):
        raise InvalidAmount(f"Please enter a valid amount (got {raw!r})") from None

    if not math.isfinite(value) or value == 0:
        raise InvalidAmount(f"Amount must be a non-zero number (got {raw!r})")

    return Amount(abs(value))


def parse_transaction_type(raw: str) -> TransactionType:
    """Validate a transaction type.

    Args:
        raw: Candidate type string.

    Returns:
        The type, lowercased.

    Raises:
        InvalidTransactionType: If the type is not income or expense.
    """
    normalized = raw.strip().lower()
    for txn_type in TRANSACTION_TYPES:
        if normalized == txn_type:
            return txn_type
    raise InvalidTransactionType(f"Type must be 'income' or 'expense' (got {raw!r})")


def parse_date(raw: str | None, default: str) -> str:
    """Validate a transaction date, falling back to a default when omitted.

    Args:
        raw: Date in YYYY-MM-DD format, or None/empty.
        default: Date to use when raw is omitted.

    Returns:
        Validated date string.

    Raises:
        InvalidDate: If the date is not a real YYYY-MM-DD date.
    """
    date_str = (raw or "").strip() or default
    if not is_valid_date(date_str):
        raise InvalidDate(f"Date must be YYYY-MM-DD (got {date_str!r})")
    return date_str


def next_id(existing_ids: Iterable[int], now_ms: int) -> TransactionId:
    """Pick a fresh transaction ID.

    Args:
        existing_ids: IDs already in the store.
        now_ms: Current time in milliseconds since the epoch.

    Returns:
        The current timestamp, bumped past the highest existing ID if needed.
    """
    highest = max(existing_ids, default=0)
    return TransactionId(max(now_ms, highest + 1))


def build_transaction(draft: TransactionDraft, txn_id: TransactionId, default_date: str) -> Transaction:
    """Validate a draft and build a transaction record.

    Missing fields take the same defaults as the add form: an expense in
    the first default category, with an empty note, dated default_date.

    Args:
        draft: User input.
        txn_id: ID to assign.
        default_date: Date to use when the draft has none.

    Returns:
        Validated Transaction.

    Raises:
        InvalidAmount: If the amount is invalid.
        InvalidTransactionType: If the type is invalid.
        InvalidDate: If the date is invalid.
    """
    amount = parse_amount(draft.get("amount"))
    txn_type = parse_transaction_type(draft.get("type") or "expense")
    date = parse_date(draft.get("date"), default_date)
    category = draft.get("category") or DEFAULT_CATEGORIES[0]

    return Transaction(
        id=txn_id,
        type=txn_type,
        amount=amount,
        category=CategoryName(category),
        note=draft.get("note") or "",
        date=date,
    )


def transaction_to_dict(txn: Transaction) -> dict[str, Any]:
    """Serialize a transaction to its persisted JSON shape."""
    return asdict(txn)


def transaction_from_dict(raw: Any) -> Transaction:
    """Deserialize a persisted transaction.

    Args:
        raw: Decoded JSON object.

    Returns:
        Transaction.

    Raises:
        PersistedStateUnreadable: If the record is missing fields or holds invalid values.
    """
    if not isinstance(raw, dict):
        raise PersistedStateUnreadable(f"Expected an object, got {type(raw).__name__}")

    txn_id = raw.get("id")
    if not isinstance(txn_id, int) or isinstance(txn_id, bool):
        raise PersistedStateUnreadable(f"Invalid transaction id: {txn_id!r}")

    category = raw.get("category")
    if not isinstance(category, str):
        raise PersistedStateUnreadable(f"Invalid category on transaction {txn_id}: {category!r}")

    note = raw.get("note") or ""
    date = raw.get("date")

    try:
        amount = parse_amount(raw.get("amount"))
        txn_type = parse_transaction_type(str(raw.get("type", "")))
        if not isinstance(date, str):
            raise InvalidDate(f"Date must be YYYY-MM-DD (got {date!r})")
        date = parse_date(date, "")
    except (InvalidAmount, InvalidTransactionType, InvalidDate) as e:
        raise PersistedStateUnreadable(f"Invalid transaction {txn_id}: {e}") from e

    return Transaction(
        id=TransactionId(txn_id),
        type=txn_type,
        amount=amount,
        category=CategoryName(category),
        note=str(note),
        date=date,
    )
