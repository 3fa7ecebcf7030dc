"""Achievement models for gamification"""
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict


class AchievementType(str, Enum):
    """Achievement types"""
    STREAK = "streak"
    WEEKLY = "weekly"
    TOTAL = "total"
    CONSISTENCY = "consistency"
    MILESTONE = "milestone"
    SPECIAL = "special"


class AchievementRarity(str, Enum):
    """Achievement rarity levels"""
    COMMON = "common"
    RARE = "rare"
    EPIC = "epic"
    LEGENDARY = "legendary"


class AchievementMetric(str, Enum):
    """Input an achievement threshold is compared against"""
    CURRENT_STREAK = "current_streak"
    BEST_STREAK = "best_streak"
    WEEKLY_COMPLETION_RATE = "weekly_completion_rate"
    TOTAL_ENTRIES = "total_entries"
    CONSISTENT_WEEKS = "consistent_weeks"
    MONTHLY_PERFECT = "monthly_perfect"
    MONTHLY_AVERAGE_COMPLETION = "monthly_average_completion"
    YEARLY_CONSISTENCY_RATE = "yearly_consistency_rate"
    YEARLY_TOTAL_ENTRIES = "yearly_total_entries"


class Achievement(BaseModel):
    """Static catalog entry"""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str
    icon: str
    type: AchievementType
    threshold: int
    rarity: AchievementRarity
    points: int
    metric: AchievementMetric


class AchievementStatus(BaseModel):
    """Catalog entry evaluated against the caller's current metrics"""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str
    icon: str
    type: AchievementType
    threshold: int
    rarity: AchievementRarity
    points: int
    achieved: bool
    achieved_at: Optional[str] = None
