"""Unit tests for Achievement System (progress_engine/gamification/achievement_system.py)"""
import pytest
from datetime import datetime, timezone

from progress_engine.gamification.achievement_system import (
    ACHIEVEMENT_CATALOG,
    MONTHLY_ACHIEVEMENTS,
    YEARLY_ACHIEVEMENTS,
    detect_achievements,
    format_achievement_display,
    get_achievement_definition,
    total_points,
)
from progress_engine.models.achievement import AchievementRarity, AchievementType
from progress_engine.models.progress import BestMonth, MonthlyStats, YearlyStats


EVALUATED_AT = datetime(2024, 1, 10, 12, 0, tzinfo=timezone.utc)


def _by_id(statuses):
    return {status.id: status for status in statuses}


def _detect(**overrides):
    metrics = {
        "current_streak": 0,
        "best_streak": 0,
        "total_entries": 0,
        "weekly_completion_rate": 0,
        "consistent_weeks": 0,
        "evaluated_at": EVALUATED_AT,
    }
    metrics.update(overrides)
    return detect_achievements(**metrics)


def _monthly(**overrides):
    data = {
        "month": "2024-01",
        "total_entries": 12,
        "average_weekly_completion": 100,
        "best_week_completion": 100,
        "worst_week_completion": 100,
        "consistent_weeks": 4,
        "total_weeks": 4,
    }
    data.update(overrides)
    return MonthlyStats(**data)


def _yearly(**overrides):
    data = {
        "year": "2024",
        "total_entries": 100,
        "average_monthly_entries": 8,
        "best_month": BestMonth(month="2024-03", entries=15),
        "longest_streak": 20,
        "total_active_weeks": 40,
        "consistency_rate": 50,
    }
    data.update(overrides)
    return YearlyStats(**data)


# ============================================================================
# Catalog Tests
# ============================================================================

def test_catalog_ids_are_unique():
    """Test no two catalog entries share an id"""
    all_ids = [a.id for a in ACHIEVEMENT_CATALOG + MONTHLY_ACHIEVEMENTS + YEARLY_ACHIEVEMENTS]

    assert len(all_ids) == len(set(all_ids))


def test_base_catalog_size():
    """Test base evaluation covers the 19 standard achievements"""
    assert len(_detect()) == 19


def test_monthly_and_yearly_extend_catalog():
    """Test special achievements only appear when stats are given"""
    assert len(_detect(monthly_stats=_monthly())) == 21
    assert len(_detect(monthly_stats=_monthly(), yearly_stats=_yearly())) == 23


def test_catalog_order_is_preserved():
    """Test output follows catalog order"""
    statuses = _detect()

    assert [s.id for s in statuses] == [a.id for a in ACHIEVEMENT_CATALOG]


def test_get_achievement_definition():
    """Test catalog lookup by id"""
    definition = get_achievement_definition("best_streak_50")

    assert definition.threshold == 50
    assert definition.type == AchievementType.STREAK
    assert definition.rarity == AchievementRarity.EPIC
    assert definition.points == 200

    assert get_achievement_definition("yearly_prolific").points == 1500
    assert get_achievement_definition("does_not_exist") is None


def test_first_journal_is_a_milestone():
    """Test total_1 is typed as milestone"""
    assert get_achievement_definition("total_1").type == AchievementType.MILESTONE
    assert get_achievement_definition("total_10").type == AchievementType.TOTAL


# ============================================================================
# Detection Tests
# ============================================================================

def test_detect_typical_user():
    """Test a 7-day streak user with 25 entries and a full week"""
    statuses = _by_id(_detect(
        current_streak=7,
        best_streak=10,
        total_entries=25,
        weekly_completion_rate=100,
        consistent_weeks=4,
    ))

    for achieved_id in ("streak_3", "streak_7", "total_1", "total_10", "total_25", "weekly_100", "consistent_2", "consistent_4"):
        assert statuses[achieved_id].achieved is True, achieved_id

    for missing_id in ("streak_14", "streak_30", "total_50", "weekly_150", "consistent_8", "best_streak_50"):
        assert statuses[missing_id].achieved is False, missing_id


def test_nothing_achieved_for_new_user():
    """Test zero metrics unlock nothing"""
    statuses = _detect()

    assert not any(s.achieved for s in statuses)
    assert all(s.achieved_at is None for s in statuses)


@pytest.mark.parametrize("threshold_id,metric,value", [
    ("streak_3", "current_streak", 3),
    ("best_streak_50", "best_streak", 50),
    ("weekly_150", "weekly_completion_rate", 150),
    ("total_500", "total_entries", 500),
    ("consistent_12", "consistent_weeks", 12),
])
def test_threshold_is_inclusive(threshold_id, metric, value):
    """Test reaching exactly the threshold unlocks, one below does not"""
    assert _by_id(_detect(**{metric: value}))[threshold_id].achieved is True
    assert _by_id(_detect(**{metric: value - 1}))[threshold_id].achieved is False


def test_best_streak_does_not_unlock_current_streak_achievements():
    """Test current streak achievements read the current streak only"""
    statuses = _by_id(_detect(current_streak=0, best_streak=60))

    assert statuses["best_streak_50"].achieved is True
    assert statuses["streak_3"].achieved is False


def test_monotonic_in_metrics():
    """Test raising a metric never revokes an achievement"""
    lower = _by_id(_detect(current_streak=7, total_entries=25, weekly_completion_rate=100))
    higher = _by_id(_detect(current_streak=30, total_entries=100, weekly_completion_rate=150))

    for achievement_id, status in lower.items():
        if status.achieved:
            assert higher[achievement_id].achieved is True


def test_idempotent():
    """Test identical inputs give identical results"""
    first = _detect(current_streak=14, total_entries=50)
    second = _detect(current_streak=14, total_entries=50)

    assert first == second


def test_achieved_at_is_stamped_only_when_achieved():
    """Test achieved_at uses the evaluation time"""
    statuses = _by_id(_detect(current_streak=3))

    assert statuses["streak_3"].achieved_at == EVALUATED_AT.isoformat()
    assert statuses["streak_7"].achieved_at is None


# ============================================================================
# Monthly / Yearly Tests
# ============================================================================

def test_perfect_month():
    """Test every week consistent over a 4-week month"""
    statuses = _by_id(_detect(monthly_stats=_monthly()))

    assert statuses["monthly_perfect"].achieved is True
    assert statuses["monthly_overachiever"].achieved is False


def test_short_month_is_not_perfect():
    """Test fewer than four recorded weeks cannot be perfect"""
    statuses = _by_id(_detect(monthly_stats=_monthly(consistent_weeks=3, total_weeks=3)))

    assert statuses["monthly_perfect"].achieved is False


def test_month_with_inconsistent_week_is_not_perfect():
    """Test one weak week breaks the perfect month"""
    statuses = _by_id(_detect(monthly_stats=_monthly(consistent_weeks=3, total_weeks=4)))

    assert statuses["monthly_perfect"].achieved is False


def test_monthly_overachiever():
    """Test 120% average completion"""
    statuses = _by_id(_detect(monthly_stats=_monthly(average_weekly_completion=120)))

    assert statuses["monthly_overachiever"].achieved is True


def test_yearly_achievements():
    """Test yearly consistency and volume"""
    statuses = _by_id(_detect(yearly_stats=_yearly(consistency_rate=80, total_entries=365)))

    assert statuses["yearly_consistent"].achieved is True
    assert statuses["yearly_prolific"].achieved is True

    statuses = _by_id(_detect(yearly_stats=_yearly()))

    assert statuses["yearly_consistent"].achieved is False
    assert statuses["yearly_prolific"].achieved is False


# ============================================================================
# Points and Display Tests
# ============================================================================

def test_total_points():
    """Test points sum over achieved entries only"""
    statuses = _detect(current_streak=3, total_entries=1)

    # streak_3 (10) + total_1 (5)
    assert total_points(statuses) == 15


def test_display_without_achievements():
    """Test empty display message"""
    assert "No achievements yet" in format_achievement_display(_detect())


def test_display_lists_rarest_first():
    """Test unlocked entries are sorted by rarity, rarest first"""
    statuses = _detect(current_streak=14, total_entries=1)

    lines = format_achievement_display(statuses).splitlines()

    assert lines[0].startswith("🏆 ACHIEVEMENTS (4/19, ")
    assert "Two-Week Master" in lines[1]
    assert "rare" in lines[1]


def test_display_korean_heading():
    """Test heading follows the language"""
    display = format_achievement_display(_detect(total_entries=1), lang="ko")

    assert display.startswith("🏆 성취 (1/19, 5점)")
