"""Date utilities for budgetman.

Pure functions for date validation and month bucketing, plus ``today``
which is the only place the current date is read.
"""

from datetime import date, datetime

from budgetman.domain.models import Month

DATE_FORMAT = "%Y-%m-%d"


def today() -> str:
    """Get the current local date in YYYY-MM-DD format."""
    return date.today().strftime(DATE_FORMAT)


def month_of(date_str: str) -> Month:
    """Get the month prefix of a date.

    Args:
        date_str: Date in YYYY-MM-DD format.

    Returns:
        First seven characters of the date (YYYY-MM).
    """
    return Month(date_str[:7])


def is_valid_date(date_str: str) -> bool:
    """Check whether a string is a real calendar date in YYYY-MM-DD format.

    Args:
        date_str: Candidate date string.

    Returns:
        True if the string parses as YYYY-MM-DD.
    """
    if len(date_str) != 10:
        return False
    try:
        datetime.strptime(date_str, DATE_FORMAT)
    except ValueError:
        return False
    return True


def month_label(month: Month) -> str:
    """Format a month for display.

    Args:
        month: Month in YYYY-MM format.

    Returns:
        Human-readable month (e.g., "January 2025").

    Raises:
        ValueError: If month is not in YYYY-MM format.
    """
    return datetime.strptime(month, "%Y-%m").strftime("%B %Y")
