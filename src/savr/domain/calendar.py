"""Calendar-day helpers in the user's local timezone."""

from datetime import UTC, date, datetime, timedelta
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

DECEMBER = 12


def local_today(timezone_name: str, now: datetime | None = None) -> date:
    """Return today's date in the given IANA timezone."""
    current = now or datetime.now(tz=UTC)
    return current.astimezone(_zone(timezone_name)).date()


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """Return the first day of the month and the first day of the next one."""
    start = date(year, month, 1)
    if month == DECEMBER:
        return start, date(year + 1, 1, 1)
    return start, date(year, month + 1, 1)


def previous_day(day: date) -> date:
    """Return the calendar day before ``day``."""
    return day - timedelta(days=1)


def is_valid_timezone(value: str) -> bool:
    """Return True when ``value`` names a known IANA timezone."""
    try:
        ZoneInfo(value)
    except (ZoneInfoNotFoundError, ValueError):
        return False
    return True


def _zone(timezone_name: str) -> ZoneInfo:
    if is_valid_timezone(timezone_name):
        return ZoneInfo(timezone_name)
    return ZoneInfo("UTC")
