"""
Date Handling Utilities

Centralised date arithmetic for the progress engine:
1. Weeks are ISO weeks: Monday 00:00 through Sunday 23:59
2. Dates are compared by their YYYY-MM-DD key only (no time-of-day)
3. Aware datetimes are truncated in UTC; ISO strings keep their own date portion
4. "Today" is always passed in explicitly, defaulting to the UTC calendar date
"""

import logging
import math
from datetime import datetime, date, timedelta, timezone
from typing import Optional, Union

from progress_engine.exceptions import InvalidDateError
from progress_engine.i18n.translations import t

logger = logging.getLogger(__name__)

DateLike = Union[date, datetime, str]

SECONDS_PER_DAY = 86400


def today_utc() -> date:
    """
    Get today's date in UTC

    Returns:
        Current calendar date in UTC
    """
    return datetime.now(timezone.utc).date()


def parse_date(value: str) -> date:
    """
    Parse the date portion of an ISO-8601 string

    '2024-01-15' and '2024-01-15T10:30:00Z' both give date(2024, 1, 15).
    The offset of a timestamp is ignored; the written date is kept.

    Raises:
        InvalidDateError: If the string has no valid YYYY-MM-DD date portion
    """
    if not isinstance(value, str):
        raise InvalidDateError(value)

    try:
        return date.fromisoformat(value.split('T')[0].strip())
    except ValueError as e:
        raise InvalidDateError(value, cause=e)


def to_date(value: DateLike) -> date:
    """Normalise a date, datetime or ISO string to a calendar date"""
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    if isinstance(value, date):
        return value
    return parse_date(value)


def format_date(value: DateLike) -> str:
    """
    Canonical YYYY-MM-DD key used for every date comparison

    Example:
        >>> format_date(datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc))
        '2024-01-15'
    """
    return to_date(value).isoformat()


def week_start(value: Optional[DateLike] = None) -> date:
    """
    Monday of the ISO week containing value (defaults to today in UTC)

    Sunday steps back 6 days, any other weekday steps back weekday - 1 days.
    """
    d = to_date(value) if value is not None else today_utc()
    return d - timedelta(days=d.weekday())


def week_end(value: Optional[DateLike] = None) -> date:
    """Sunday of the ISO week containing value"""
    return week_start(value) + timedelta(days=6)


def is_same_week(a: DateLike, b: DateLike) -> bool:
    """Check whether two dates fall in the same ISO week"""
    return week_start(a) == week_start(b)


def _as_utc_datetime(value: DateLike) -> datetime:
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value
    d = to_date(value)
    return datetime(d.year, d.month, d.day, tzinfo=timezone.utc)


def days_between(a: DateLike, b: DateLike) -> int:
    """
    Absolute number of days between two dates, order-independent

    Partial days round up, so 25 hours counts as 2 days.

    Example:
        >>> days_between(date(2024, 1, 5), date(2024, 1, 1))
        4
    """
    seconds = abs((_as_utc_datetime(b) - _as_utc_datetime(a)).total_seconds())
    return math.ceil(seconds / SECONDS_PER_DAY)


def week_number(value: DateLike) -> int:
    """
    Calendar week of the year, counting weeks that start on Sunday

    Week 1 is the (possibly partial) week holding January 1st.
    """
    d = to_date(value)
    first_day = date(d.year, 1, 1)
    past_days = (d - first_day).days
    first_weekday = first_day.isoweekday() % 7  # Sunday=0
    return math.ceil((past_days + first_weekday + 1) / 7)


def month_name(month: int, lang: str = 'en') -> str:
    """
    Localised month label

    Args:
        month: Month number 1-12
        lang: Language code

    Returns:
        e.g. 'January' (en) or '1월' (ko)
    """
    return t(f"month_{month}", lang=lang)
