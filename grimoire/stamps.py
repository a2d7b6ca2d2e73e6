"""Timestamp helpers."""

from datetime import datetime

NUMERICAL_FORMAT = "%Y%m%d%H%M%S"


def numerical_timestamp() -> str:
    """Return the local time as ``YYYYMMDDhhmmss``."""
    return datetime.now().strftime(NUMERICAL_FORMAT)