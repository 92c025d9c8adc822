"""Time utilities for timezone-aware UTC datetimes and calendar dates."""

from datetime import UTC, date, datetime


def utc_now() -> datetime:
    """Return a timezone-aware UTC datetime for defaults and onupdate hooks."""
    return datetime.now(UTC)


def utc_today() -> date:
    return utc_now().date()


def parse_calendar_date(value: str | None) -> date | None:
    """Parse an ISO date or datetime string to a date; None when it is not a real date."""
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.strip().replace("Z", "+00:00")).date()
    except ValueError:
        return None


def ensure_aware(value: datetime | None) -> datetime | None:
    """SQLite hands back naive datetimes; treat them as UTC."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=UTC)
