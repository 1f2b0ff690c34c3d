import re
from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def utc_now_naive() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def today_in(tz_name: str) -> date:
    return datetime.now(ZoneInfo(tz_name)).date()


def parse_iso_date(value: str) -> date:
    """Parse a strict ``YYYY-MM-DD`` date. Raises ValueError otherwise."""
    if not _ISO_DATE.fullmatch(value):
        raise ValueError(f"invalid date: {value!r}")
    return date.fromisoformat(value)


def week_bounds(day: date) -> tuple[date, date]:
    """Return the ISO week (Monday, Sunday) containing `day`."""
    monday = day - timedelta(days=day.weekday())
    return monday, monday + timedelta(days=6)
