"""Session object that drives user intents against the store.

Each intent performs at most one store mutation and then returns the
full set of derived views for rendering.
"""

import json
from pathlib import Path
from typing import Any

from budgetman.config import Settings, load_settings
from budgetman.domain.filters import FilterSpec
from budgetman.domain.report import BudgetViews, compute_views
from budgetman.domain.transactions import TransactionDraft
from budgetman.logging_setup import get_logger
from budgetman.store import EXPORT_FILENAME, JsonFileBackend, TransactionStore

logger = get_logger(__name__)


class BudgetSession:
    """Owns the transaction store and the active filter."""

    def __init__(self, store: TransactionStore, spec: FilterSpec | None = None) -> None:
        self.store = store
        self.filter = spec or FilterSpec()

    @classmethod
    def open(cls, settings: Settings) -> "BudgetSession":
        """Build a session over the on-disk store and hydrate it."""
        store = TransactionStore(JsonFileBackend(settings.data_dir))
        store.load()
        return cls(store)

    def views(self) -> BudgetViews:
        return compute_views(self.store.transactions, self.filter)

    def add_transaction(self, draft: TransactionDraft) -> BudgetViews:
        """Add a transaction and recompute views.

        Raises:
            InvalidAmount: If the amount is invalid.
            InvalidTransactionType: If the type is invalid.
            InvalidDate: If the date is invalid.
        """
        self.store.add(draft)
        return self.views()

    def remove_transaction(self, txn_id: int) -> BudgetViews:
        self.store.remove(txn_id)
        return self.views()

    def set_filter(self, spec: FilterSpec) -> BudgetViews:
        self.filter = spec
        return self.views()

    def export_all(self) -> dict[str, Any]:
        return self.store.export_all()

    def export_to_file(self, output: Path | None = None) -> Path:
        """Write the export document to disk.

        Args:
            output: Target file or directory. Defaults to budget-data.json
                in the current directory.

        Returns:
            Path written.

        Raises:
            OSError: If the file cannot be written.
        """
        path = output or Path.cwd() / EXPORT_FILENAME
        if path.is_dir():
            path = path / EXPORT_FILENAME

        path.write_text(json.dumps(self.export_all(), indent=2, ensure_ascii=False), encoding="utf-8")
        logger.info("Exported %d transactions to %s", len(self.store), path)
        return path


def load_session(config_path: Path | None = None) -> tuple[Settings, BudgetSession]:
    """Load settings and open a hydrated session.

    Raises:
        tomllib.TOMLDecodeError: If the config file is not valid TOML.
    """
    settings = load_settings(config_path)
    return settings, BudgetSession.open(settings)
