"""
Timestamp helpers shared by timeliness rules and temporal anomaly checks.
"""

from collections.abc import Callable
from datetime import date, datetime, time
from typing import Any


def is_timestamp(value: Any) -> bool:
    """Whether value is a date or datetime."""
    return isinstance(value, date)


def to_datetime(value: date | datetime) -> datetime:
    """Promote a date to midnight of that day; datetimes pass through."""
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, time.min)


def now_like(value: datetime, clock: Callable[[], datetime]) -> datetime:
    """
    Current time from ``clock`` with the same awareness as ``value``.

    Naive values are compared in local time, aware values in their own zone.
    """
    now = clock()
    if value.tzinfo is not None and now.tzinfo is None:
        return now.astimezone(value.tzinfo)
    if value.tzinfo is None and now.tzinfo is not None:
        return now.astimezone().replace(tzinfo=None)
    return now


def years_before(moment: datetime, years: int) -> datetime:
    """The same calendar moment ``years`` earlier (Feb 29 maps to Feb 28)."""
    try:
        return moment.replace(year=moment.year - years)
    except ValueError:
        return moment.replace(year=moment.year - years, day=28)
