"""Calendar-day helpers shared by the progression services."""

from datetime import date, datetime
from typing import Callable, Optional


Clock = Callable[[], datetime]

# Sunday-first names used by the weekly progress chart.
WEEKDAY_NAMES = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]

# Format produced by JavaScript's Date.toDateString(), e.g. "Mon Oct 19 2026".
_LEGACY_DATE_FORMAT = "%a %b %d %Y"


def day_key(moment: datetime | date) -> str:
    """Calendar-date string (YYYY-MM-DD) for a moment."""
    if isinstance(moment, datetime):
        moment = moment.date()
    return moment.isoformat()


def parse_calendar_date(value: Optional[str]) -> Optional[date]:
    """
    Parse a stored calendar date.

    Accepts ISO dates, ISO timestamps and the legacy "Mon Oct 19 2026"
    form. Returns None for missing or unparseable values.
    """
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(value).date()
    except ValueError:
        pass
    try:
        return datetime.strptime(value, _LEGACY_DATE_FORMAT).date()
    except ValueError:
        return None


def to_local_naive(moment: datetime) -> datetime:
    """
    Local wall-clock time without tzinfo.

    Offset-aware values (e.g. stored "2026-10-18T09:00:00.000Z" timestamps)
    are converted to local time so they compare with the naive clock.
    """
    if moment.tzinfo is None:
        return moment
    return moment.astimezone().replace(tzinfo=None)


def days_between(earlier: date, later: date) -> int:
    """Whole calendar days from earlier to later (negative if reversed)."""
    return (later - earlier).days


def weekday_name(moment: datetime | date) -> str:
    """Sunday-first short weekday name."""
    # date.weekday() is Monday=0
    return WEEKDAY_NAMES[(moment.weekday() + 1) % 7]
