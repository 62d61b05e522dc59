"""Timestamp formatting utilities."""

from datetime import datetime


def now() -> str:
    """
    Current local time as a compact, sortable string.

    Used for naming log directories (e.g., "20261019_140703").
    """
    return datetime.now().strftime("%Y%m%d_%H%M%S")


def now_readable() -> str:
    """
    Current local time in human-readable form.

    Returns:
        Timestamp like "2026-10-19 14:07:03"
    """
    return datetime.now().strftime("%Y-%m-%d %H:%M:%S")
