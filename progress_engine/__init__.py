"""
Journal progress engine

Pure calculations over journal timestamps and weekly progress records:
- Day streaks
- Weekly completion, monthly and yearly statistics
- Trend, consistency and volatility analysis
- Goal prediction and week-over-week comparison
- Achievement catalog evaluation
"""

from progress_engine.utils.dates import (
    week_start,
    week_end,
    format_date,
    parse_date,
    days_between,
)
from progress_engine.gamification import (
    calculate_streak,
    detect_achievements,
    generate_motivational_message,
)
from progress_engine.services import (
    calculate_weekly_progress,
    update_weekly_progress,
    should_reset_weekly_progress,
    reset_weekly_progress_if_needed,
    calculate_monthly_stats,
    calculate_yearly_stats,
    analyze_progress_history,
    calculate_consistency_score,
    predict_weekly_goal_completion,
    compare_with_previous_week,
    ProgressService,
)

__all__ = [
    "week_start",
    "week_end",
    "format_date",
    "parse_date",
    "days_between",
    "calculate_streak",
    "detect_achievements",
    "generate_motivational_message",
    "calculate_weekly_progress",
    "update_weekly_progress",
    "should_reset_weekly_progress",
    "reset_weekly_progress_if_needed",
    "calculate_monthly_stats",
    "calculate_yearly_stats",
    "analyze_progress_history",
    "calculate_consistency_score",
    "predict_weekly_goal_completion",
    "compare_with_previous_week",
    "ProgressService",
]
