"""
Goal Prediction and Week Comparison

Projects whether the weekly target will be reached at the current pace and
compares a week with the one before it.
"""

import logging
import math
from datetime import date
from typing import Iterable, Optional

from progress_engine import config
from progress_engine.i18n.translations import t
from progress_engine.models.progress import GoalPrediction, JournalEntry, ProgressTracking, WeekComparison
from progress_engine.services.statistical_analysis import round_half_up
from progress_engine.services.weekly_progress import extract_journal_dates
from progress_engine.utils.dates import days_between, parse_date, today_utc, week_end

logger = logging.getLogger(__name__)

HIGH_CONFIDENCE = 80
MEDIUM_CONFIDENCE = 50
BIG_IMPROVEMENT = 20


def average_daily_entries(
    journals: Iterable[JournalEntry],
    today: Optional[date] = None
) -> float:
    """
    Journals per day since the oldest journal (at least one day)

    Returns:
        0.0 when there are no dated journals
    """
    dates = extract_journal_dates(journals)
    if not dates:
        return 0.0
    if today is None:
        today = today_utc()

    elapsed_days = max(1, days_between(min(dates), today))
    return len(dates) / elapsed_days


def predict_weekly_goal_completion(
    current_progress: ProgressTracking,
    average_daily_entries: float,
    today: Optional[date] = None,
    lang: Optional[str] = None
) -> GoalPrediction:
    """
    Predict whether the remaining days of the week are enough at this pace

    Args:
        current_progress: This week's record
        average_daily_entries: Journals written per day on average
        today: Evaluation date (defaults to today in UTC)
        lang: Language for the recommendation (defaults to PROGRESS_LOCALE)

    Returns:
        GoalPrediction where days_needed = ceil(remaining / pace) (inf for a
        zero pace) and confidence = min(100, days_remaining / max(1, days_needed) * 100)
    """
    if today is None:
        today = today_utc()
    lang = lang or config.PROGRESS_LOCALE

    sunday = week_end(parse_date(current_progress.week_start_date))
    days_remaining = max(0, (sunday - today).days)

    entries_needed = max(0, current_progress.target_count - current_progress.completed_count)
    if average_daily_entries > 0:
        days_needed = math.ceil(entries_needed / average_daily_entries)
    else:
        days_needed = math.inf

    will_complete = days_needed <= days_remaining
    confidence = min(100, round_half_up(days_remaining / max(1, days_needed) * 100))

    if will_complete and confidence >= HIGH_CONFIDENCE:
        recommendation = t("predict_maintain_pace", lang=lang)
    elif will_complete and confidence >= MEDIUM_CONFIDENCE:
        recommendation = t("predict_push_more", lang=lang)
    else:
        per_day = math.ceil(entries_needed / max(1, days_remaining))
        recommendation = t("predict_need_per_day", lang=lang, per_day=per_day)

    logger.debug(
        f"Goal prediction for week {current_progress.week_start_date}: "
        f"need {entries_needed} in {days_remaining} days, confidence={confidence}"
    )

    return GoalPrediction(
        will_complete=will_complete,
        days_needed=days_needed,
        confidence=confidence,
        recommendation=recommendation,
    )


def compare_with_previous_week(
    current_week: ProgressTracking,
    previous_week: Optional[ProgressTracking],
    lang: Optional[str] = None
) -> WeekComparison:
    """
    Compare completion rate and streak with the previous week

    With no previous week the result always reports an improvement and a
    first-week message.
    """
    lang = lang or config.PROGRESS_LOCALE

    if previous_week is None:
        return WeekComparison(
            completion_rate_change=0,
            streak_change=0,
            improvement=True,
            message=t("compare_first_week", lang=lang),
        )

    rate_change = current_week.completion_rate - previous_week.completion_rate
    streak_change = current_week.current_streak - previous_week.current_streak

    if rate_change > BIG_IMPROVEMENT:
        message = t("compare_big_gain", lang=lang, change=rate_change)
    elif rate_change > 0:
        message = t("compare_gain", lang=lang, change=rate_change)
    elif rate_change == 0:
        message = t("compare_same", lang=lang)
    else:
        message = t("compare_drop", lang=lang, change=abs(rate_change))

    return WeekComparison(
        completion_rate_change=rate_change,
        streak_change=streak_change,
        improvement=rate_change >= 0,
        message=message,
    )
