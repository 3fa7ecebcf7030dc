"""
Service Layer Package

Calculation services for journal progress:
- weekly_progress: weekly counts, current week record, weekly reset checks
- aggregate_stats: monthly and yearly roll-ups
- history_analysis: trends, consistency and volatility over recent weeks
- predictions: goal prediction and week-over-week comparison
- progress_service: ProgressService, the report orchestration used by callers
"""

from progress_engine.services.weekly_progress import (
    calculate_weekly_progress,
    update_weekly_progress,
    should_reset_weekly_progress,
    reset_weekly_progress_if_needed,
)
from progress_engine.services.aggregate_stats import calculate_monthly_stats, calculate_yearly_stats
from progress_engine.services.history_analysis import analyze_progress_history, calculate_consistency_score
from progress_engine.services.predictions import (
    average_daily_entries,
    predict_weekly_goal_completion,
    compare_with_previous_week,
)
from progress_engine.services.progress_service import (
    ProgressService,
    parse_journal_entries,
    parse_progress_records,
)

__all__ = [
    "calculate_weekly_progress",
    "update_weekly_progress",
    "should_reset_weekly_progress",
    "reset_weekly_progress_if_needed",
    "calculate_monthly_stats",
    "calculate_yearly_stats",
    "analyze_progress_history",
    "calculate_consistency_score",
    "average_daily_entries",
    "predict_weekly_goal_completion",
    "compare_with_previous_week",
    "ProgressService",
    "parse_journal_entries",
    "parse_progress_records",
]
