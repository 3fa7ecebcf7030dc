"""Value records consumed and produced by the progress engine"""
from progress_engine.models.progress import (
    JournalEntry,
    ProgressTracking,
    Streak,
    WeeklyProgress,
    ProgressTrend,
    StreakAnalysis,
    SeasonalPattern,
    ProgressAnalysis,
    ImprovementTrend,
    Volatility,
    MonthlyStats,
    BestMonth,
    YearlyStats,
    ConsistencyLevel,
    ConsistencyResult,
    GoalPrediction,
    WeekComparison,
)
from progress_engine.models.achievement import (
    AchievementType,
    AchievementRarity,
    AchievementMetric,
    Achievement,
    AchievementStatus,
)

__all__ = [
    "JournalEntry",
    "ProgressTracking",
    "Streak",
    "WeeklyProgress",
    "ProgressTrend",
    "StreakAnalysis",
    "SeasonalPattern",
    "ProgressAnalysis",
    "ImprovementTrend",
    "Volatility",
    "MonthlyStats",
    "BestMonth",
    "YearlyStats",
    "ConsistencyLevel",
    "ConsistencyResult",
    "GoalPrediction",
    "WeekComparison",
    "AchievementType",
    "AchievementRarity",
    "AchievementMetric",
    "Achievement",
    "AchievementStatus",
]
