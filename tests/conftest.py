"""Global test fixtures and utilities for progress-engine tests"""
import pytest
from datetime import date

from progress_engine.models.progress import JournalEntry, ProgressTracking


# ============================================================================
# Clock Fixtures
# ============================================================================

@pytest.fixture
def today():
    """Fixed evaluation date (a Saturday)"""
    return date(2024, 6, 15)


@pytest.fixture
def wednesday():
    """Fixed evaluation date in the week of Monday 2024-01-08"""
    return date(2024, 1, 10)


# ============================================================================
# Record Factories
# ============================================================================

@pytest.fixture
def make_progress():
    """Factory for ProgressTracking records with sensible defaults"""
    def _make(week_start_date: str, completion_rate: int = 0, **overrides) -> ProgressTracking:
        data = {
            "id": f"progress-{week_start_date}",
            "user_id": "user1",
            "category_id": "cat1",
            "week_start_date": week_start_date,
            "target_count": 3,
            "completed_count": 0,
            "completion_rate": completion_rate,
            "current_streak": 0,
            "best_streak": 0,
            "last_entry_date": None,
        }
        data.update(overrides)
        return ProgressTracking(**data)

    return _make


@pytest.fixture
def make_journal():
    """Factory for JournalEntry rows"""
    counter = {"n": 0}

    def _make(created_at: str) -> JournalEntry:
        counter["n"] += 1
        return JournalEntry(
            id=str(counter["n"]),
            user_id="user1",
            category_id="cat1",
            created_at=created_at,
        )

    return _make


@pytest.fixture
def january_records(make_progress):
    """Two January weeks: one full, one at 67%"""
    return [
        make_progress(
            "2024-01-01", 100,
            completed_count=3, current_streak=7, best_streak=10, last_entry_date="2024-01-07",
        ),
        make_progress(
            "2024-01-08", 67,
            completed_count=2, current_streak=5, best_streak=10, last_entry_date="2024-01-10",
        ),
    ]
