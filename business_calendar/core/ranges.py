"""
Calendar iteration helpers.
"""

from datetime import date, datetime, timedelta
from typing import Iterator, Union

from dateutil.relativedelta import relativedelta

from business_calendar.data.schemas import Weekday

DateLike = Union[date, datetime]


def as_date(value: DateLike) -> date:
    """Drop the time of day from a datetime; dates are returned as is."""
    if isinstance(value, datetime):
        return value.date()
    return value


def each_day(start: DateLike, thru: DateLike) -> Iterator[date]:
    """
    Yield every date from start to thru, both inclusive.

    Args:
        start: First day.
        thru: Last day.

    Yields:
        Consecutive dates. Nothing when thru is before start.
    """
    current = as_date(start)
    last = as_date(thru)
    while current <= last:
        yield current
        current += timedelta(days=1)


def each_hour(start: datetime, thru: datetime) -> Iterator[datetime]:
    """Yield start, start + 1h, ... up to and including thru."""
    current = start
    while current <= thru:
        yield current
        current += timedelta(hours=1)


def each_month(start: DateLike, thru: DateLike) -> Iterator[date]:
    """
    Yield the same day of every month from start up to thru, inclusive.

    Each step is computed from start, so a day clamped in a short month
    (January 31 -> February 28) is restored in the following months.
    """
    first = as_date(start)
    last = as_date(thru)
    offset = 0
    current = first
    while current <= last:
        yield current
        offset += 1
        current = first + relativedelta(months=offset)


def next_weekday(start: DateLike, weekday: Weekday) -> date:
    """
    Return the next date falling on the given weekday.

    The start date itself is returned when it already matches.
    """
    day = as_date(start)
    days_to_add = (int(weekday) - day.weekday() + 7) % 7
    return day + timedelta(days=days_to_add)
