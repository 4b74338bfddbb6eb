"""Datetime utilities for consistent timestamp handling."""

from datetime import datetime


def get_current_datetime_local() -> datetime:
    """Get current datetime in local timezone.

    Returns:
        Timezone-aware datetime in the local timezone.

    """
    return datetime.now().astimezone()

