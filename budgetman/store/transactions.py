"""Transaction store backed by an injected key-value backend.

The in-memory sequence is the source of truth for the running session:
load failures degrade to an empty store and write failures are logged
without rolling back the mutation that triggered them.
"""

import json
import time
from typing import Any, Callable

from budgetman.dates import today
from budgetman.domain.errors import PersistedStateUnreadable, PersistWriteFailure
from budgetman.domain.transactions import (
    Transaction,
    TransactionDraft,
    build_transaction,
    next_id,
    transaction_from_dict,
    transaction_to_dict,
)
from budgetman.logging_setup import get_logger
from budgetman.store.backend import KeyValueBackend
from budgetman.store.paths import STORAGE_KEY

logger = get_logger(__name__)


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


class TransactionStore:
    """Ordered transactions, newest first."""

    def __init__(
        self,
        backend: KeyValueBackend,
        key: str = STORAGE_KEY,
        clock: Callable[[], int] = _now_ms,
        today_func: Callable[[], str] = today,
    ) -> None:
        """Create an empty store.

        Args:
            backend: Where the JSON payload is read from and written to.
            key: Storage key for the payload.
            clock: Current time in milliseconds, used for IDs.
            today_func: Current date (YYYY-MM-DD), used when a draft has no date.
        """
        self.backend = backend
        self.key = key
        self._clock = clock
        self._today = today_func
        self._transactions: list[Transaction] = []
        self.load_error: PersistedStateUnreadable | None = None
        self.persist_error: PersistWriteFailure | None = None

    @property
    def transactions(self) -> list[Transaction]:
        return list(self._transactions)

    def __len__(self) -> int:
        return len(self._transactions)

    def get(self, txn_id: int) -> Transaction | None:
        return next((t for t in self._transactions if t.id == txn_id), None)

    def load(self) -> list[Transaction]:
        """Hydrate the store from the backend.

        A missing payload gives an empty store. An unreadable payload also
        gives an empty store; the error is logged and kept on load_error.
        Records that fail validation are skipped.

        Returns:
            The loaded transactions, newest first.
        """
        self._transactions = []
        self.load_error = None

        try:
            raw = self.backend.get(self.key)
            if raw is None:
                return []
            payload = json.loads(raw)
            if not isinstance(payload, list):
                raise PersistedStateUnreadable(f"Expected a JSON array, got {type(payload).__name__}")
        except (OSError, ValueError, PersistedStateUnreadable) as e:
            error = e if isinstance(e, PersistedStateUnreadable) else PersistedStateUnreadable(str(e))
            logger.warning("Failed to read stored transactions under %r: %s", self.key, error)
            self.load_error = error
            return []

        loaded: list[Transaction] = []
        seen: set[int] = set()
        for record in payload:
            try:
                txn = transaction_from_dict(record)
            except PersistedStateUnreadable as e:
                logger.warning("Skipping stored transaction: %s", e)
                continue
            if txn.id in seen:
                logger.warning("Skipping stored transaction with duplicate id %s", txn.id)
                continue
            seen.add(txn.id)
            loaded.append(txn)

        self._transactions = loaded
        logger.debug("Loaded %d transactions", len(loaded))
        return self.transactions

    def add(self, draft: TransactionDraft) -> Transaction:
        """Validate a draft, prepend it and persist.

        Args:
            draft: User input.

        Returns:
            The stored transaction.

        Raises:
            InvalidAmount: If the amount is invalid. The store is unchanged.
            InvalidTransactionType: If the type is invalid. The store is unchanged.
            InvalidDate: If the date is invalid. The store is unchanged.
        """
        txn_id = next_id((t.id for t in self._transactions), self._clock())
        txn = build_transaction(draft, txn_id, self._today())

        self._transactions.insert(0, txn)
        logger.debug("Added transaction %s", txn.id)
        self.persist()
        return txn

    def remove(self, txn_id: int) -> bool:
        """Delete a transaction by ID and persist.

        Args:
            txn_id: ID to delete.

        Returns:
            True if a transaction was removed, False if the ID was absent.
        """
        remaining = [t for t in self._transactions if t.id != txn_id]
        if len(remaining) == len(self._transactions):
            logger.debug("No transaction with id %s", txn_id)
            return False

        self._transactions = remaining
        logger.debug("Removed transaction %s", txn_id)
        self.persist()
        return True

    def persist(self) -> bool:
        """Write the full sequence to the backend.

        Failures are logged and kept on persist_error, never raised.

        Returns:
            True if the write succeeded.
        """
        payload = json.dumps([transaction_to_dict(t) for t in self._transactions], ensure_ascii=False)
        try:
            self.backend.set(self.key, payload)
        except OSError as e:
            self.persist_error = PersistWriteFailure(str(e))
            logger.error("Failed to persist transactions under %r: %s", self.key, e)
            return False

        self.persist_error = None
        return True

    def export_all(self) -> dict[str, Any]:
        """Serialize the store in the export layout ({"transactions": [...]})."""
        return {"transactions": [transaction_to_dict(t) for t in self._transactions]}
