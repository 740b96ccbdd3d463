"""UTC day and year boundaries used by the event listings."""

from datetime import datetime, timezone


def start_of_utc_day(now: datetime) -> datetime:
    """Midnight UTC of the day ``now`` falls on (naive values are taken as UTC)."""
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    now = now.astimezone(timezone.utc)
    return now.replace(hour=0, minute=0, second=0, microsecond=0)


def utc_year_bounds(year: int) -> tuple[datetime, datetime]:
    """Half-open [Jan 1, next Jan 1) range of ``year`` in UTC."""
    start = datetime(year, 1, 1, tzinfo=timezone.utc)
    return start, datetime(year + 1, 1, 1, tzinfo=timezone.utc)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def day_key(now: datetime) -> str:
    return start_of_utc_day(now).date().isoformat()
