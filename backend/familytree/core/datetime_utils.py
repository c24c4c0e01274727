"""Datetime helpers. All persisted timestamps are timezone-aware UTC."""

from datetime import date, datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    """Current time in UTC."""
    return datetime.now(timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes read back from drivers that drop tzinfo."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def as_date(value: Optional[datetime | date]) -> Optional[date]:
    """Reduce a datetime to its calendar date; dates pass through."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    return value


def today() -> date:
    """Current UTC calendar date."""
    return utc_now().date()
