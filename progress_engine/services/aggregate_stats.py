"""
Monthly and Yearly Statistics

Roll-ups of ProgressTracking records by the month or year of their
week_start_date. Empty periods give all-zero results.
"""

import logging
from datetime import date
from typing import Dict, Optional, Sequence

from progress_engine.models.progress import BestMonth, MonthlyStats, ProgressTracking, YearlyStats
from progress_engine.services.statistical_analysis import (
    calculate_mean,
    is_consistent_rate,
    round_half_up,
)
from progress_engine.utils.dates import today_utc

logger = logging.getLogger(__name__)


def calculate_monthly_stats(
    progress_records: Sequence[ProgressTracking],
    target_month: Optional[str] = None,
    today: Optional[date] = None
) -> MonthlyStats:
    """
    Summarise the weeks that start in a month

    Args:
        progress_records: Weekly records, any order
        target_month: 'YYYY-MM' (defaults to the current month)
        today: Used only to resolve the default month

    Returns:
        MonthlyStats with entry total, average/best/worst weekly completion,
        consistent week count and number of weeks
    """
    if target_month is None:
        target_month = (today or today_utc()).isoformat()[:7]

    monthly_records = [
        record for record in progress_records
        if record.week_start_date.startswith(target_month)
    ]

    if not monthly_records:
        return MonthlyStats(month=target_month)

    rates = [record.completion_rate for record in monthly_records]

    stats = MonthlyStats(
        month=target_month,
        total_entries=sum(record.completed_count for record in monthly_records),
        average_weekly_completion=round_half_up(calculate_mean(rates)),
        best_week_completion=max(rates),
        worst_week_completion=min(rates),
        consistent_weeks=sum(1 for rate in rates if is_consistent_rate(rate)),
        total_weeks=len(monthly_records),
    )

    logger.debug(f"Monthly stats for {target_month}: {stats.total_weeks} weeks, {stats.total_entries} entries")

    return stats


def calculate_yearly_stats(
    progress_records: Sequence[ProgressTracking],
    target_year: Optional[str] = None,
    today: Optional[date] = None
) -> YearlyStats:
    """
    Summarise the weeks that start in a year

    Args:
        progress_records: Weekly records, any order
        target_year: 'YYYY' (defaults to the current year)
        today: Used only to resolve the default year

    Returns:
        YearlyStats with entry total, average entries per active month, best
        month by entries, longest best_streak, active weeks and the share of
        weeks at or above the consistency bar
    """
    if target_year is None:
        target_year = str((today or today_utc()).year)

    yearly_records = [
        record for record in progress_records
        if record.week_start_date.startswith(target_year)
    ]

    if not yearly_records:
        return YearlyStats(year=target_year)

    total_entries = sum(record.completed_count for record in yearly_records)

    monthly_entries: Dict[str, int] = {}
    for record in yearly_records:
        month = record.week_start_date[:7]
        monthly_entries[month] = monthly_entries.get(month, 0) + record.completed_count

    best_month = BestMonth()
    for month, entries in monthly_entries.items():
        if entries > best_month.entries:
            best_month = BestMonth(month=month, entries=entries)

    consistent_weeks = sum(1 for record in yearly_records if is_consistent_rate(record.completion_rate))

    stats = YearlyStats(
        year=target_year,
        total_entries=total_entries,
        average_monthly_entries=round_half_up(total_entries / max(1, len(monthly_entries))),
        best_month=best_month,
        longest_streak=max(record.best_streak for record in yearly_records),
        total_active_weeks=len(yearly_records),
        consistency_rate=round_half_up(consistent_weeks / len(yearly_records) * 100),
    )

    logger.debug(f"Yearly stats for {target_year}: {stats.total_active_weeks} weeks, {stats.total_entries} entries")

    return stats
