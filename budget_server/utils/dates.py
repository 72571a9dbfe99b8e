"""
Date helpers for transaction filters.
"""

import calendar
from datetime import datetime, timezone
from typing import Optional

from budget_server.core.logging import logger


def as_utc(value: datetime) -> datetime:
    """Return ``value`` in UTC, treating naive datetimes as already UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def start_of_month(now: Optional[datetime] = None) -> datetime:
    """First instant of the month containing ``now`` (UTC)."""
    now = as_utc(now) if now else datetime.now(timezone.utc)
    return now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)


def end_of_month(now: Optional[datetime] = None) -> datetime:
    """Last instant of the month containing ``now`` (UTC)."""
    now = as_utc(now) if now else datetime.now(timezone.utc)
    last_day = calendar.monthrange(now.year, now.month)[1]
    return now.replace(day=last_day, hour=23, minute=59, second=59, microsecond=999999)


def parse_instant(value: Optional[str], parameter: str) -> Optional[datetime]:
    """
    Parse an ISO-8601 timestamp from a query parameter.

    Args:
        value: Raw parameter value, may be None
        parameter: Parameter name, used in the log message

    Returns:
        The parsed instant in UTC, or None when the value is missing or invalid
    """
    if value is None or not value.strip():
        return None
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        return as_utc(datetime.fromisoformat(text))
    except ValueError as e:
        logger.error(f"Failed to parse '{value}' to an instant for '{parameter}' parameter: {e}")
        return None
