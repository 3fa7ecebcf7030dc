"""
Weekly Progress

Counts journals inside an ISO week against the weekly target and builds the
ProgressTracking record for the current week.

A "reset" never mutates an old record: when a new week starts the caller
stores a new record built by update_weekly_progress().
"""

import logging
from datetime import date, datetime, time, timezone
from typing import Iterable, List, Optional

from progress_engine import config
from progress_engine.gamification.streak_system import calculate_streak
from progress_engine.models.progress import JournalEntry, ProgressTracking, WeeklyProgress
from progress_engine.services.statistical_analysis import completion_rate
from progress_engine.utils.dates import (
    DateLike,
    format_date,
    to_date,
    today_utc,
    week_end,
    week_start,
)

logger = logging.getLogger(__name__)


def journal_day(journal: JournalEntry) -> Optional[str]:
    """Date portion (YYYY-MM-DD) of a journal's created_at, or None"""
    if not journal.created_at:
        return None
    return journal.created_at.split('T')[0]


def extract_journal_dates(journals: Iterable[JournalEntry]) -> List[str]:
    """Date keys of every journal that has a created_at"""
    days = (journal_day(journal) for journal in journals)
    return [day for day in days if day]


def _count_in_range(journals: Iterable[JournalEntry], start: str, end: str) -> int:
    return sum(1 for day in extract_journal_dates(journals) if start <= day <= end)


def calculate_weekly_progress(
    journals: Iterable[JournalEntry],
    week_start_date: DateLike,
    target_count: int
) -> WeeklyProgress:
    """
    Count journals written between week_start_date and that week's Sunday

    Args:
        journals: Journal rows (created_at is read)
        week_start_date: First day of the week (normally a Monday)
        target_count: Weekly goal

    Returns:
        WeeklyProgress(completed, target, rate, is_complete); rate is 0 when
        the target is 0
    """
    start = format_date(week_start_date)
    end = format_date(week_end(week_start_date))

    completed = _count_in_range(journals, start, end)

    return WeeklyProgress(
        completed=completed,
        target=target_count,
        rate=completion_rate(completed, target_count),
        is_complete=completed >= target_count,
    )


async def update_weekly_progress(
    user_id: str,
    category_id: str,
    journals: Iterable[JournalEntry],
    target_count: Optional[int] = None,
    today: Optional[date] = None,
    now: Optional[datetime] = None
) -> ProgressTracking:
    """
    Build the current week's ProgressTracking record from a user's journals

    Declared async for callers that await their data layer; no I/O happens.

    Args:
        user_id: Owner of the journals
        category_id: Category being tracked
        journals: All of the user's journals in the category
        target_count: Weekly goal (defaults to DEFAULT_WEEKLY_TARGET)
        today: Evaluation date (defaults to the UTC date of `now`)
        now: Timestamp for created_at and updated_at (defaults to midnight UTC
            of `today` when `today` is given, otherwise the current time)

    Returns:
        A new ProgressTracking record (id is left for the data store to assign)
    """
    if now is None:
        if today is None:
            now = datetime.now(timezone.utc)
        else:
            now = datetime.combine(today, time.min, tzinfo=timezone.utc)
    if today is None:
        today = to_date(now)
    if target_count is None:
        target_count = config.DEFAULT_WEEKLY_TARGET

    journals = list(journals)
    start = week_start(today)
    week_start_str = format_date(start)

    completed_count = _count_in_range(journals, week_start_str, format_date(week_end(start)))

    all_dates = extract_journal_dates(journals)
    streak = calculate_streak(all_dates, today=today)
    last_entry_date = max(all_dates) if all_dates else None

    timestamp = now.isoformat()

    record = ProgressTracking(
        user_id=user_id,
        category_id=category_id,
        week_start_date=week_start_str,
        target_count=target_count,
        completed_count=completed_count,
        completion_rate=completion_rate(completed_count, target_count),
        current_streak=streak.current,
        best_streak=streak.best,
        last_entry_date=last_entry_date,
        created_at=timestamp,
        updated_at=timestamp,
    )

    logger.debug(
        f"Weekly progress for user {user_id}, category {category_id}: "
        f"{completed_count}/{target_count} in week of {week_start_str}"
    )

    return record


def should_reset_weekly_progress(
    last_update_date: DateLike,
    today: Optional[date] = None
) -> bool:
    """
    Check whether a new ISO week has started since the last update

    Args:
        last_update_date: Date or ISO timestamp of the last progress update
        today: Evaluation date (defaults to today in UTC)
    """
    if today is None:
        today = today_utc()
    return week_start(today) != week_start(last_update_date)


async def reset_weekly_progress_if_needed(
    user_id: str,
    category_id: str,
    last_progress_update: Optional[DateLike] = None,
    today: Optional[date] = None
) -> bool:
    """
    Tell the caller whether to start a new weekly record

    Returns:
        False when there is no previous update or it is from this week,
        True when a new week has begun
    """
    if not last_progress_update:
        return False

    if not should_reset_weekly_progress(last_progress_update, today=today):
        return False

    logger.info(f"Weekly progress reset: user {user_id}, category {category_id}")
    return True
