"""Shared helpers for table definitions."""

from datetime import UTC, datetime


def utc_now() -> datetime:
    """Naive UTC timestamp; columns are TIMESTAMP WITHOUT TIME ZONE."""
    return datetime.now(UTC).replace(tzinfo=None)
