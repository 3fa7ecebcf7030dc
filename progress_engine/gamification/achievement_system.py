"""
Achievement System

Evaluates a fixed catalog of journal achievements against a user's current
metrics. Categories:
- Streak (current and best day streaks)
- Weekly goal completion
- Total entries (milestones)
- Consistency (consecutive weeks at or above 80% completion)
- Special (monthly and yearly statistics, only when supplied)

Unlock state is never stored here: every call recomputes `achieved` from its
inputs, so the same inputs always give the same result. Persisting "already
granted" achievements is the caller's job.
"""

from typing import Dict, List, Optional, Sequence
from datetime import datetime, timezone
import logging

from progress_engine.i18n.translations import t
from progress_engine.models.achievement import (
    Achievement,
    AchievementMetric,
    AchievementRarity,
    AchievementStatus,
    AchievementType,
)
from progress_engine.models.progress import MonthlyStats, YearlyStats

logger = logging.getLogger(__name__)

# A month needs at least this many weeks on record to count as "perfect"
PERFECT_MONTH_MIN_WEEKS = 4

_T = AchievementType
_R = AchievementRarity
_M = AchievementMetric

ACHIEVEMENT_CATALOG: tuple[Achievement, ...] = (
    # Current streak
    Achievement(id="streak_3", name="First Steps", description="Wrote a journal 3 days in a row",
                icon="🔥", type=_T.STREAK, threshold=3, rarity=_R.COMMON, points=10,
                metric=_M.CURRENT_STREAK),
    Achievement(id="streak_7", name="One-Week Challenge", description="Wrote a journal 7 days in a row",
                icon="⭐", type=_T.STREAK, threshold=7, rarity=_R.COMMON, points=25,
                metric=_M.CURRENT_STREAK),
    Achievement(id="streak_14", name="Two-Week Master", description="Wrote a journal 14 days in a row",
                icon="🌟", type=_T.STREAK, threshold=14, rarity=_R.RARE, points=50,
                metric=_M.CURRENT_STREAK),
    Achievement(id="streak_30", name="Month in a Row", description="Wrote a journal 30 days in a row",
                icon="🏆", type=_T.STREAK, threshold=30, rarity=_R.EPIC, points=100,
                metric=_M.CURRENT_STREAK),
    Achievement(id="streak_100", name="Hundred Days", description="Wrote a journal 100 days in a row",
                icon="👑", type=_T.STREAK, threshold=100, rarity=_R.LEGENDARY, points=500,
                metric=_M.CURRENT_STREAK),

    # Best streak
    Achievement(id="best_streak_50", name="Streak Expert", description="Reached a best streak of 50 days",
                icon="🎖️", type=_T.STREAK, threshold=50, rarity=_R.EPIC, points=200,
                metric=_M.BEST_STREAK),

    # Weekly goal
    Achievement(id="weekly_100", name="Weekly Goal Met", description="Reached 100% of this week's goal",
                icon="🎯", type=_T.WEEKLY, threshold=100, rarity=_R.COMMON, points=20,
                metric=_M.WEEKLY_COMPLETION_RATE),
    Achievement(id="weekly_150", name="Overachiever", description="Reached 150% of this week's goal",
                icon="🚀", type=_T.WEEKLY, threshold=150, rarity=_R.RARE, points=40,
                metric=_M.WEEKLY_COMPLETION_RATE),

    # Total entries
    Achievement(id="total_1", name="First Journal", description="Wrote your first journal",
                icon="🌱", type=_T.MILESTONE, threshold=1, rarity=_R.COMMON, points=5,
                metric=_M.TOTAL_ENTRIES),
    Achievement(id="total_10", name="Eager Start", description="Wrote 10 journals in total",
                icon="📝", type=_T.TOTAL, threshold=10, rarity=_R.COMMON, points=15,
                metric=_M.TOTAL_ENTRIES),
    Achievement(id="total_25", name="Steady Recorder", description="Wrote 25 journals in total",
                icon="📖", type=_T.TOTAL, threshold=25, rarity=_R.COMMON, points=30,
                metric=_M.TOTAL_ENTRIES),
    Achievement(id="total_50", name="Half Century", description="Wrote 50 journals in total",
                icon="📚", type=_T.TOTAL, threshold=50, rarity=_R.RARE, points=75,
                metric=_M.TOTAL_ENTRIES),
    Achievement(id="total_100", name="Hundred Club", description="Wrote 100 journals in total",
                icon="🎖️", type=_T.TOTAL, threshold=100, rarity=_R.EPIC, points=150,
                metric=_M.TOTAL_ENTRIES),
    Achievement(id="total_250", name="Prolific Writer", description="Wrote 250 journals in total",
                icon="✍️", type=_T.TOTAL, threshold=250, rarity=_R.EPIC, points=300,
                metric=_M.TOTAL_ENTRIES),
    Achievement(id="total_500", name="Journal Master", description="Wrote 500 journals in total",
                icon="🏅", type=_T.TOTAL, threshold=500, rarity=_R.LEGENDARY, points=750,
                metric=_M.TOTAL_ENTRIES),

    # Consistency
    Achievement(id="consistent_2", name="Consistency Begins", description="Met the weekly goal 2 weeks in a row",
                icon="💪", type=_T.CONSISTENCY, threshold=2, rarity=_R.COMMON, points=25,
                metric=_M.CONSISTENT_WEEKS),
    Achievement(id="consistent_4", name="Steady Learner", description="Met the weekly goal 4 weeks in a row",
                icon="🎯", type=_T.CONSISTENCY, threshold=4, rarity=_R.RARE, points=60,
                metric=_M.CONSISTENT_WEEKS),
    Achievement(id="consistent_8", name="Master of Consistency", description="Met the weekly goal 8 weeks in a row",
                icon="🌟", type=_T.CONSISTENCY, threshold=8, rarity=_R.EPIC, points=120,
                metric=_M.CONSISTENT_WEEKS),
    Achievement(id="consistent_12", name="Perfect Consistency", description="Met the weekly goal 12 weeks in a row",
                icon="👑", type=_T.CONSISTENCY, threshold=12, rarity=_R.LEGENDARY, points=250,
                metric=_M.CONSISTENT_WEEKS),
)

MONTHLY_ACHIEVEMENTS: tuple[Achievement, ...] = (
    Achievement(id="monthly_perfect", name="Perfect Month", description="Met every weekly goal for a whole month",
                icon="🌙", type=_T.SPECIAL, threshold=100, rarity=_R.EPIC, points=200,
                metric=_M.MONTHLY_PERFECT),
    Achievement(id="monthly_overachiever", name="Monthly Overachiever",
                description="Averaged over 120% weekly completion for a month",
                icon="🚀", type=_T.SPECIAL, threshold=120, rarity=_R.RARE, points=100,
                metric=_M.MONTHLY_AVERAGE_COMPLETION),
)

YEARLY_ACHIEVEMENTS: tuple[Achievement, ...] = (
    Achievement(id="yearly_consistent", name="Consistency Champion of the Year",
                description="Kept at least 80% consistency for a year",
                icon="👑", type=_T.SPECIAL, threshold=80, rarity=_R.LEGENDARY, points=1000,
                metric=_M.YEARLY_CONSISTENCY_RATE),
    Achievement(id="yearly_prolific", name="Prolific Writer of the Year",
                description="Wrote 365 or more journals in a year",
                icon="📚", type=_T.SPECIAL, threshold=365, rarity=_R.LEGENDARY, points=1500,
                metric=_M.YEARLY_TOTAL_ENTRIES),
)

_CATALOG_BY_ID: Dict[str, Achievement] = {
    achievement.id: achievement
    for achievement in ACHIEVEMENT_CATALOG + MONTHLY_ACHIEVEMENTS + YEARLY_ACHIEVEMENTS
}


def get_achievement_definition(achievement_id: str) -> Optional[Achievement]:
    """Look up a catalog entry by id (None if unknown)"""
    return _CATALOG_BY_ID.get(achievement_id)


def _is_perfect_month(monthly_stats: MonthlyStats) -> bool:
    return (
        monthly_stats.total_weeks >= PERFECT_MONTH_MIN_WEEKS
        and monthly_stats.consistent_weeks == monthly_stats.total_weeks
    )


def _evaluate(achievement: Achievement, metrics: Dict[AchievementMetric, float]) -> bool:
    if achievement.metric == AchievementMetric.MONTHLY_PERFECT:
        return bool(metrics[AchievementMetric.MONTHLY_PERFECT])
    return metrics[achievement.metric] >= achievement.threshold


def detect_achievements(
    current_streak: int,
    best_streak: int,
    total_entries: int,
    weekly_completion_rate: int,
    consistent_weeks: int,
    monthly_stats: Optional[MonthlyStats] = None,
    yearly_stats: Optional[YearlyStats] = None,
    evaluated_at: Optional[datetime] = None
) -> List[AchievementStatus]:
    """
    Evaluate the achievement catalog against the given metrics

    Args:
        current_streak: Current day streak
        best_streak: Best day streak ever
        total_entries: Total journals written
        weekly_completion_rate: This week's completion rate (may exceed 100)
        consistent_weeks: Consecutive weeks at or above the consistency bar
        monthly_stats: Adds the monthly achievements when given
        yearly_stats: Adds the yearly achievements when given
        evaluated_at: Timestamp stamped on achieved entries (defaults to now, UTC)

    Returns:
        Every applicable catalog entry, in catalog order, each with `achieved`
        and `achieved_at` (ISO string, only when achieved)
    """
    if evaluated_at is None:
        evaluated_at = datetime.now(timezone.utc)

    metrics: Dict[AchievementMetric, float] = {
        AchievementMetric.CURRENT_STREAK: current_streak,
        AchievementMetric.BEST_STREAK: best_streak,
        AchievementMetric.TOTAL_ENTRIES: total_entries,
        AchievementMetric.WEEKLY_COMPLETION_RATE: weekly_completion_rate,
        AchievementMetric.CONSISTENT_WEEKS: consistent_weeks,
    }
    catalog = list(ACHIEVEMENT_CATALOG)

    if monthly_stats is not None:
        metrics[AchievementMetric.MONTHLY_PERFECT] = _is_perfect_month(monthly_stats)
        metrics[AchievementMetric.MONTHLY_AVERAGE_COMPLETION] = monthly_stats.average_weekly_completion
        catalog.extend(MONTHLY_ACHIEVEMENTS)

    if yearly_stats is not None:
        metrics[AchievementMetric.YEARLY_CONSISTENCY_RATE] = yearly_stats.consistency_rate
        metrics[AchievementMetric.YEARLY_TOTAL_ENTRIES] = yearly_stats.total_entries
        catalog.extend(YEARLY_ACHIEVEMENTS)

    achieved_at = evaluated_at.isoformat()
    statuses = []
    for achievement in catalog:
        achieved = _evaluate(achievement, metrics)
        statuses.append(AchievementStatus(
            id=achievement.id,
            name=achievement.name,
            description=achievement.description,
            icon=achievement.icon,
            type=achievement.type,
            threshold=achievement.threshold,
            rarity=achievement.rarity,
            points=achievement.points,
            achieved=achieved,
            achieved_at=achieved_at if achieved else None,
        ))

    logger.debug(
        f"Evaluated {len(statuses)} achievements: "
        f"{sum(1 for s in statuses if s.achieved)} achieved"
    )

    return statuses


def total_points(statuses: Sequence[AchievementStatus]) -> int:
    """Sum of points over achieved entries"""
    return sum(status.points for status in statuses if status.achieved)


def format_achievement_display(statuses: Sequence[AchievementStatus], lang: str = 'en') -> str:
    """
    Format evaluated achievements as plain text

    Args:
        statuses: Output of detect_achievements()
        lang: Language code for the heading

    Returns:
        Achieved entries first (rarest first), one per line
    """
    unlocked = [status for status in statuses if status.achieved]
    if not unlocked:
        return t("achievements_empty", lang=lang)

    rarity_order = list(AchievementRarity)
    unlocked.sort(key=lambda s: rarity_order.index(s.rarity), reverse=True)

    lines = [t(
        "achievements_title",
        lang=lang,
        unlocked=len(unlocked),
        total=len(statuses),
        points=total_points(statuses),
    )]
    for status in unlocked:
        lines.append(f"{status.icon} {status.name} ({status.rarity.value}, +{status.points})")

    return "\n".join(lines)
