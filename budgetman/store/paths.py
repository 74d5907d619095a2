"""Storage locations."""

import os
from pathlib import Path

# Key under which the transaction array is persisted
STORAGE_KEY = "budget_manager_data_v1"

EXPORT_FILENAME = "budget-data.json"


def get_xdg_data_home() -> Path:
    """Get XDG data directory, with fallback to ~/.local/share."""
    xdg_data = os.environ.get("XDG_DATA_HOME")
    if xdg_data:
        return Path(xdg_data)
    return Path.home() / ".local" / "share"


def get_data_dir() -> Path:
    """Get the default data directory (XDG compliant)."""
    return get_xdg_data_home() / "budgetman"
