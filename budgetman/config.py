"""Configuration file management for budgetman."""

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import tomli_w

from budgetman.domain.models import DEFAULT_CATEGORIES, CategoryName
from budgetman.store.paths import get_data_dir

DEFAULT_CURRENCY = "₹"
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass(frozen=True)
class Settings:
    """Resolved configuration with defaults applied."""

    currency: str = DEFAULT_CURRENCY
    categories: tuple[CategoryName, ...] = DEFAULT_CATEGORIES
    data_dir: Path = field(default_factory=get_data_dir)
    log_level: str = DEFAULT_LOG_LEVEL


def get_xdg_config_home() -> Path:
    """Get XDG config directory, with fallback to ~/.config."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config)
    return Path.home() / ".config"


def get_config_path() -> Path:
    """Get the config file path (XDG compliant).

    Returns:
        Path to the config file.
    """
    return get_xdg_config_home() / "budgetman" / "config.toml"


def create_default_config(config_path: Path | None = None) -> None:
    """Create default config file with secure permissions.

    Args:
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    default_config: dict[str, Any] = {
        "currency": DEFAULT_CURRENCY,
        "categories": list(DEFAULT_CATEGORIES),
        "log_level": DEFAULT_LOG_LEVEL,
    }

    save_config(default_config, config_path)


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration from TOML file.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Configuration dictionary.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        tomllib.TOMLDecodeError: If config file is not valid TOML.
    """
    if config_path is None:
        config_path = get_config_path()

    with open(config_path, "rb") as f:
        return tomllib.load(f)


def save_config(config: dict[str, Any], config_path: Path | None = None) -> None:
    """Save configuration to TOML file.

    Args:
        config: Configuration dictionary.
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "wb") as f:
        tomli_w.dump(config, f)

    os.chmod(config_path, 0o600)


def settings_from_config(config: dict[str, Any]) -> Settings:
    """Apply defaults to a raw configuration dictionary.

    Args:
        config: Configuration dictionary (may be empty or partial).

    Returns:
        Settings with every field resolved.
    """
    categories = config.get("categories")
    if isinstance(categories, list) and categories:
        resolved_categories = tuple(CategoryName(str(c)) for c in categories)
    else:
        resolved_categories = DEFAULT_CATEGORIES

    data_dir = config.get("data_dir")

    return Settings(
        currency=str(config.get("currency", DEFAULT_CURRENCY)),
        categories=resolved_categories,
        data_dir=Path(data_dir).expanduser() if data_dir else get_data_dir(),
        log_level=str(config.get("log_level", DEFAULT_LOG_LEVEL)),
    )


def load_settings(config_path: Path | None = None) -> Settings:
    """Load settings, using defaults when the config file doesn't exist.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Resolved Settings.

    Raises:
        tomllib.TOMLDecodeError: If config file exists but is not valid TOML.
    """
    try:
        config = load_config(config_path)
    except FileNotFoundError:
        config = {}
    return settings_from_config(config)
