"""DateTime utilities for timezone-aware timestamp handling."""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """
    Get current UTC datetime without timezone info (offset-naive).

    Replaces deprecated datetime.utcnow() with datetime.now(timezone.utc).

    Example:
        >>> now = utc_now()
        >>> print(now.tzinfo)
        None
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def current_year() -> int:
    """Calendar year used as year 0 of a projection."""
    return utc_now().year
