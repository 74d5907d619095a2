"""Logging configuration for budgetman.

``configure_logging`` attaches a single rich handler to the package root
logger and is called once by the CLI. Library modules only call
``get_logger`` and never attach handlers of their own.
"""

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

PKG_LOGGER_NAME = "budgetman"
LOG_LEVEL_ENV = "BUDGETMAN_LOG_LEVEL"

_configured = False


def parse_level(level: int | str | None) -> int:
    """Resolve a logging level from an int, a level name or the environment.

    Args:
        level: Level as int or name (e.g., "DEBUG"). If None, uses
            BUDGETMAN_LOG_LEVEL when set, otherwise WARNING.

    Returns:
        Numeric logging level.
    """
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        name = level.strip().upper()
        if name.isdigit():
            return int(name)
        numeric = getattr(logging, name, None)
        if isinstance(numeric, int):
            return numeric
        return logging.WARNING

    env_val = os.environ.get(LOG_LEVEL_ENV)
    if env_val:
        return parse_level(env_val)
    return logging.WARNING


def configure_logging(level: int | str | None = None) -> None:
    """Configure the package root logger exactly once.

    Args:
        level: Logging level. See parse_level.
    """
    global _configured
    if _configured:
        return

    logger = logging.getLogger(PKG_LOGGER_NAME)
    for handler in list(logger.handlers):
        if isinstance(handler, logging.NullHandler):
            logger.removeHandler(handler)

    handler = RichHandler(console=Console(stderr=True), show_path=False)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))

    logger.setLevel(parse_level(level))
    logger.addHandler(handler)

    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Get a logger, keeping the package silent until configured."""
    pkg_logger = logging.getLogger(PKG_LOGGER_NAME)
    if not _configured and not pkg_logger.handlers:
        pkg_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)
