"""Progress tracking models"""
from enum import Enum
from datetime import date
from typing import Optional, Union
from pydantic import BaseModel, ConfigDict, Field, field_validator


def _validate_iso_date(v: str) -> str:
    try:
        date.fromisoformat(v)
    except ValueError:
        raise ValueError(
            f"Invalid date: '{v}'. Must be YYYY-MM-DD (e.g., '2024-01-01')"
        )
    return v


class JournalEntry(BaseModel):
    """Journal row as supplied by the data store (only created_at is read)"""
    model_config = ConfigDict(frozen=True)

    id: str = ""
    user_id: str = ""
    category_id: str = ""
    created_at: Optional[str] = None  # ISO-8601 timestamp


class ProgressTracking(BaseModel):
    """
    One row per (user, category, calendar week).

    completion_rate is not clamped: over-achievement produces values above 100.
    A new week produces a new record; records are never reset in place.
    """
    model_config = ConfigDict(frozen=True)

    id: str = ""
    user_id: str = ""
    category_id: str = ""
    week_start_date: str  # Monday, YYYY-MM-DD
    target_count: int = Field(default=0, ge=0)
    completed_count: int = Field(default=0, ge=0)
    completion_rate: int = Field(default=0, ge=0)
    current_streak: int = Field(default=0, ge=0)
    best_streak: int = Field(default=0, ge=0)
    last_entry_date: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @field_validator('week_start_date')
    @classmethod
    def validate_week_start_date(cls, v: str) -> str:
        """Ensure YYYY-MM-DD format"""
        return _validate_iso_date(v)

    @field_validator('last_entry_date')
    @classmethod
    def validate_last_entry_date(cls, v: Optional[str]) -> Optional[str]:
        """Ensure YYYY-MM-DD format if provided"""
        if v is not None:
            return _validate_iso_date(v)
        return v


class Streak(BaseModel):
    """Consecutive-day streak derived from journal dates"""
    model_config = ConfigDict(frozen=True)

    current: int = 0
    best: int = 0


class WeeklyProgress(BaseModel):
    """Journals completed within one ISO week against a target"""
    model_config = ConfigDict(frozen=True)

    completed: int
    target: int
    rate: int
    is_complete: bool


class ImprovementTrend(str, Enum):
    """Recent four weeks compared with the four before"""
    IMPROVING = "improving"
    DECLINING = "declining"
    STABLE = "stable"


class Volatility(str, Enum):
    """Variance bucket of weekly completion rates"""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ProgressTrend(BaseModel):
    """Single week of the analysis window"""
    model_config = ConfigDict(frozen=True)

    period: str  # week_start_date
    completed: int
    target: int
    rate: int
    streak: int
    week_number: int
    month_name: str


class StreakAnalysis(BaseModel):
    model_config = ConfigDict(frozen=True)

    current_streak_weeks: int = 0
    longest_streak_weeks: int = 0
    average_streak: int = 0


class SeasonalPattern(BaseModel):
    model_config = ConfigDict(frozen=True)

    best_month: str = ""
    worst_month: str = ""
    monthly_averages: dict[str, int] = Field(default_factory=dict)


class ProgressAnalysis(BaseModel):
    """Aggregate over the most recent weeks of ProgressTracking records"""
    model_config = ConfigDict(frozen=True)

    trends: list[ProgressTrend]
    average_completion_rate: int
    improvement_trend: ImprovementTrend
    best_week: Optional[ProgressTrend] = None
    worst_week: Optional[ProgressTrend] = None
    streak_analysis: StreakAnalysis
    consistency_score: int  # 0-100
    volatility: Volatility
    seasonal_pattern: SeasonalPattern


class MonthlyStats(BaseModel):
    model_config = ConfigDict(frozen=True)

    month: str  # YYYY-MM
    total_entries: int = 0
    average_weekly_completion: int = 0
    best_week_completion: int = 0
    worst_week_completion: int = 0
    consistent_weeks: int = 0
    total_weeks: int = 0


class BestMonth(BaseModel):
    model_config = ConfigDict(frozen=True)

    month: str = ""
    entries: int = 0


class YearlyStats(BaseModel):
    model_config = ConfigDict(frozen=True)

    year: str  # YYYY
    total_entries: int = 0
    average_monthly_entries: int = 0
    best_month: BestMonth = Field(default_factory=BestMonth)
    longest_streak: int = 0
    total_active_weeks: int = 0
    consistency_rate: int = 0  # % of weeks at or above the consistency bar


class ConsistencyLevel(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    NEEDS_IMPROVEMENT = "needs_improvement"


class ConsistencyResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    score: int
    level: ConsistencyLevel
    consistent_weeks: int


class GoalPrediction(BaseModel):
    """Projection of whether the weekly target will be reached"""
    model_config = ConfigDict(frozen=True)

    will_complete: bool
    days_needed: Union[int, float]  # float('inf') when the pace is zero
    confidence: int
    recommendation: str


class WeekComparison(BaseModel):
    model_config = ConfigDict(frozen=True)

    completion_rate_change: int
    streak_change: int
    improvement: bool
    message: str
