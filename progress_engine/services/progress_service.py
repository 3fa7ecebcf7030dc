"""
ProgressService - Progress Report Orchestration

Combines the pure calculations into the two reports the application serves:
the weekly progress report and the achievement report. Loading and saving
rows stays with the caller; this service only transforms them.
"""

import logging
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

import pydantic

from progress_engine import config
from progress_engine.exceptions import wrap_validation_exception
from progress_engine.gamification.achievement_system import detect_achievements, total_points
from progress_engine.gamification.motivation import generate_motivational_message
from progress_engine.models.progress import JournalEntry, ProgressTracking
from progress_engine.services.aggregate_stats import calculate_monthly_stats, calculate_yearly_stats
from progress_engine.services.history_analysis import (
    analyze_progress_history,
    calculate_consistency_score,
    consecutive_consistent_weeks,
    most_recent_records,
)
from progress_engine.services.predictions import (
    average_daily_entries,
    compare_with_previous_week,
    predict_weekly_goal_completion,
)
from progress_engine.services.weekly_progress import update_weekly_progress
from progress_engine.utils.dates import parse_date, today_utc, week_end

logger = logging.getLogger(__name__)


def parse_progress_records(
    rows: Iterable[Mapping[str, Any]],
    user_id: Optional[str] = None
) -> List[ProgressTracking]:
    """
    Validate raw progress_tracking rows from the data store

    Raises:
        ValidationError: If a row does not match the ProgressTracking shape
    """
    try:
        return [ProgressTracking.model_validate(row) for row in rows]
    except pydantic.ValidationError as e:
        raise wrap_validation_exception(e, operation="parse_progress_records", user_id=user_id)


def parse_journal_entries(
    rows: Iterable[Mapping[str, Any]],
    user_id: Optional[str] = None
) -> List[JournalEntry]:
    """
    Validate raw journal rows from the data store

    Raises:
        ValidationError: If a row does not match the JournalEntry shape
    """
    try:
        return [JournalEntry.model_validate(row) for row in rows]
    except pydantic.ValidationError as e:
        raise wrap_validation_exception(e, operation="parse_journal_entries", user_id=user_id)


def previous_week_record(
    progress_records: Sequence[ProgressTracking],
    current_week: ProgressTracking
) -> Optional[ProgressTracking]:
    """Newest stored record from a week before current_week (None if none)"""
    for record in most_recent_records(progress_records, len(progress_records)):
        if record.week_start_date < current_week.week_start_date:
            return record
    return None


class ProgressService:
    """
    Service for journal progress reports.

    Responsibilities:
    - Current week record and its comparison with the previous week
    - History analysis, consistency and goal prediction
    - Achievement evaluation with monthly and yearly statistics
    """

    def __init__(self, lang: Optional[str] = None, weekly_target: Optional[int] = None):
        """
        Initialize ProgressService.

        Args:
            lang: Language for messages (defaults to PROGRESS_LOCALE)
            weekly_target: Weekly goal (defaults to DEFAULT_WEEKLY_TARGET)
        """
        self.lang = lang or config.PROGRESS_LOCALE
        self.weekly_target = weekly_target if weekly_target is not None else config.DEFAULT_WEEKLY_TARGET
        logger.debug("ProgressService initialized")

    async def build_progress_report(
        self,
        user_id: str,
        category_id: str,
        journals: Sequence[JournalEntry],
        progress_records: Sequence[ProgressTracking],
        weeks: Optional[int] = None,
        target_count: Optional[int] = None,
        today: Optional[date] = None
    ) -> Dict[str, Any]:
        """
        Build the weekly progress report.

        Args:
            user_id: Owner of the journals
            category_id: Category being tracked
            journals: All journals of the user in the category
            progress_records: Stored weekly records, any order
            weeks: History window (defaults to DEFAULT_WEEKS_TO_ANALYZE)
            target_count: Weekly goal (defaults to the service's weekly_target)
            today: Evaluation date (defaults to today in UTC)

        Returns:
            {
                'current_week': ProgressTracking,
                'history': list[ProgressTracking],  # newest first
                'analysis': ProgressAnalysis,
                'consistency': ConsistencyResult,
                'prediction': GoalPrediction,
                'comparison': WeekComparison,
                'message': str,
                'total_journals': int
            }
        """
        if today is None:
            today = today_utc()
        if target_count is None:
            target_count = self.weekly_target

        current_week = await update_weekly_progress(
            user_id,
            category_id,
            journals,
            target_count=target_count,
            today=today,
        )

        pace = average_daily_entries(journals, today=today)
        days_left = max(0, (week_end(parse_date(current_week.week_start_date)) - today).days)

        report = {
            'current_week': current_week,
            'history': most_recent_records(progress_records, len(progress_records)),
            'analysis': analyze_progress_history(progress_records, weeks, lang=self.lang),
            'consistency': calculate_consistency_score(progress_records),
            'prediction': predict_weekly_goal_completion(current_week, pace, today=today, lang=self.lang),
            'comparison': compare_with_previous_week(
                current_week,
                previous_week_record(progress_records, current_week),
                lang=self.lang,
            ),
            'message': generate_motivational_message(
                current_week.completion_rate,
                current_week.current_streak,
                days_left,
                lang=self.lang,
            ),
            'total_journals': len(journals),
        }

        logger.info(
            f"Built progress report for user {user_id}, category {category_id}: "
            f"{current_week.completed_count}/{current_week.target_count} this week"
        )

        return report

    def build_achievement_report(
        self,
        latest_progress: Optional[ProgressTracking],
        progress_records: Sequence[ProgressTracking],
        total_entries: int,
        today: Optional[date] = None,
        evaluated_at: Optional[datetime] = None
    ) -> Dict[str, Any]:
        """
        Evaluate achievements for the latest weekly record.

        Monthly and yearly statistics are computed for the month and year of
        `today`, so the special achievements are always evaluated.

        Returns:
            {
                'achievements': list[AchievementStatus],
                'unlocked': list[AchievementStatus],
                'total_points': int,
                'monthly_stats': MonthlyStats,
                'yearly_stats': YearlyStats,
                'stats': {
                    'current_streak', 'best_streak', 'total_entries',
                    'weekly_completion_rate', 'consistency_score',
                    'consistency_level', 'consistent_weeks'
                }
            }
        """
        if today is None:
            today = today_utc()

        current_streak = latest_progress.current_streak if latest_progress else 0
        best_streak = latest_progress.best_streak if latest_progress else 0
        weekly_rate = latest_progress.completion_rate if latest_progress else 0

        consistency = calculate_consistency_score(progress_records)
        consistent_weeks = consecutive_consistent_weeks(progress_records)
        monthly_stats = calculate_monthly_stats(progress_records, today=today)
        yearly_stats = calculate_yearly_stats(progress_records, today=today)

        achievements = detect_achievements(
            current_streak,
            best_streak,
            total_entries,
            weekly_rate,
            consistent_weeks,
            monthly_stats=monthly_stats,
            yearly_stats=yearly_stats,
            evaluated_at=evaluated_at,
        )
        unlocked = [achievement for achievement in achievements if achievement.achieved]

        logger.info(
            f"Achievement report: {len(unlocked)}/{len(achievements)} achieved, "
            f"{total_points(achievements)} points"
        )

        return {
            'achievements': achievements,
            'unlocked': unlocked,
            'total_points': total_points(achievements),
            'monthly_stats': monthly_stats,
            'yearly_stats': yearly_stats,
            'stats': {
                'current_streak': current_streak,
                'best_streak': best_streak,
                'total_entries': total_entries,
                'weekly_completion_rate': weekly_rate,
                'consistency_score': consistency.score,
                'consistency_level': consistency.level,
                'consistent_weeks': consistent_weeks,
            },
        }
