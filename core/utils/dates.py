"""
Calendar-day helpers for the meal ledger.

All ledger timestamps are naive wall-clock values in the ledger timezone.
A day bucket is the half-open interval [start_of_day, start_of_day + 1 day).
"""

from __future__ import annotations

import calendar
from datetime import date, datetime, time, timedelta, tzinfo
from typing import List, Optional, Tuple, Union
from zoneinfo import ZoneInfo

from app.config import settings

DayLike = Union[date, datetime]

ONE_DAY = timedelta(days=1)


def ledger_timezone() -> Optional[tzinfo]:
    """Configured IANA zone, or None to follow the host's local time rules."""
    if settings.ledger_timezone:
        return ZoneInfo(settings.ledger_timezone)
    return None


def to_local(value: datetime) -> datetime:
    """Convert a datetime to a naive wall-clock value in the ledger timezone.

    Naive inputs are assumed to already be local. Without a configured zone
    the host's rules at that instant apply, so daylight saving is honoured.
    """
    if value.tzinfo is None:
        return value
    return value.astimezone(ledger_timezone()).replace(tzinfo=None)


def now() -> datetime:
    return datetime.now(ledger_timezone()).replace(tzinfo=None)


def start_of_day(value: DayLike) -> datetime:
    """Midnight (local, naive) of the calendar day containing ``value``."""
    # datetime is a subclass of date, so check it first
    if isinstance(value, datetime):
        return datetime.combine(to_local(value).date(), time.min)
    return datetime.combine(value, time.min)


def today() -> datetime:
    return start_of_day(now())


def day_bounds(value: DayLike) -> Tuple[datetime, datetime]:
    """Half-open bounds [start, end) of the day bucket containing ``value``."""
    start = start_of_day(value)
    return start, start + ONE_DAY


def days_ending_at(anchor: DayLike, n: int) -> List[datetime]:
    """The ``n`` day starts ending at ``anchor`` inclusive, oldest first.

    Walks backward from the anchor, then reverses into ascending order.
    """
    end = start_of_day(anchor)
    days = [end - timedelta(days=offset) for offset in range(n)]
    return list(reversed(days))


def month_days(anchor: DayLike) -> List[datetime]:
    """Every day start of the calendar month containing ``anchor``."""
    first = start_of_day(anchor).replace(day=1)
    _, length = calendar.monthrange(first.year, first.month)
    return [first + timedelta(days=offset) for offset in range(length)]
