"""Unit tests for ProgressService (progress_engine/services/progress_service.py)"""
import pytest
from datetime import date, datetime, timezone

from progress_engine.exceptions import ValidationError
from progress_engine.models.progress import ConsistencyLevel
from progress_engine.services.progress_service import (
    ProgressService,
    parse_journal_entries,
    parse_progress_records,
    previous_week_record,
)


@pytest.fixture
def service():
    """English service with a weekly target of 3"""
    return ProgressService(lang="en", weekly_target=3)


@pytest.fixture
def journals(make_journal):
    """Three journals this week (Mon-Wed 2024-01-08..10) and one last week"""
    return [
        make_journal("2024-01-10T09:00:00Z"),
        make_journal("2024-01-09T09:00:00Z"),
        make_journal("2024-01-08T09:00:00Z"),
        make_journal("2024-01-02T09:00:00Z"),
    ]


# ============================================================================
# Progress Report
# ============================================================================

@pytest.mark.asyncio
async def test_build_progress_report(service, journals, january_records, wednesday):
    """Test full weekly report for a user who met this week's goal"""
    report = await service.build_progress_report(
        "user1", "cat1", journals, january_records, today=wednesday
    )

    current = report['current_week']
    assert current.week_start_date == "2024-01-08"
    assert current.completed_count == 3
    assert current.completion_rate == 100
    assert current.current_streak == 3

    assert [r.week_start_date for r in report['history']] == ["2024-01-08", "2024-01-01"]
    assert report['analysis'].average_completion_rate == 84
    assert report['consistency'].score == 50
    assert report['consistency'].level == ConsistencyLevel.FAIR
    assert report['total_journals'] == 4


@pytest.mark.asyncio
async def test_progress_report_prediction_and_message(service, journals, january_records, wednesday):
    """Test prediction, comparison and message of the report"""
    report = await service.build_progress_report(
        "user1", "cat1", journals, january_records, today=wednesday
    )

    prediction = report['prediction']
    assert prediction.will_complete is True
    assert prediction.days_needed == 0
    assert prediction.confidence == 100

    # Previous week is the 2024-01-01 record at 100%
    assert report['comparison'].completion_rate_change == 0
    assert report['comparison'].improvement is True

    assert "3-day streak" in report['message']


@pytest.mark.asyncio
async def test_progress_report_for_new_user(service, wednesday):
    """Test report with no journals and no history"""
    report = await service.build_progress_report("user1", "cat1", [], [], today=wednesday)

    assert report['current_week'].completed_count == 0
    assert report['history'] == []
    assert report['analysis'].trends == []
    assert report['prediction'].will_complete is False
    assert "first week" in report['comparison'].message
    assert "fresh start" in report['message']
    assert report['total_journals'] == 0


@pytest.mark.asyncio
async def test_progress_report_target_override(service, journals, wednesday):
    """Test target passed per call wins over the service default"""
    report = await service.build_progress_report(
        "user1", "cat1", journals, [], target_count=6, today=wednesday
    )

    assert report['current_week'].target_count == 6
    assert report['current_week'].completion_rate == 50


@pytest.mark.asyncio
async def test_progress_report_in_korean(journals, january_records, wednesday):
    """Test messages follow the service language"""
    report = await ProgressService(lang="ko", weekly_target=3).build_progress_report(
        "user1", "cat1", journals, january_records, today=wednesday
    )

    assert "목표를 달성했습니다" in report['message']
    assert report['analysis'].trends[0].month_name == "1월"


# ============================================================================
# Achievement Report
# ============================================================================

def test_build_achievement_report(service, january_records):
    """Test achievements for the latest January week"""
    evaluated_at = datetime(2024, 1, 20, tzinfo=timezone.utc)

    report = service.build_achievement_report(
        january_records[1],
        january_records,
        total_entries=25,
        today=date(2024, 1, 20),
        evaluated_at=evaluated_at,
    )

    unlocked_ids = {a.id for a in report['unlocked']}
    assert unlocked_ids == {"streak_3", "total_1", "total_10", "total_25"}
    assert report['total_points'] == 60
    assert len(report['achievements']) == 23

    assert report['monthly_stats'].total_weeks == 2
    assert report['yearly_stats'].total_entries == 5

    stats = report['stats']
    assert stats['current_streak'] == 5
    assert stats['best_streak'] == 10
    assert stats['weekly_completion_rate'] == 67
    assert stats['consistent_weeks'] == 0
    assert stats['consistency_score'] == 50


def test_achievement_report_counts_consistent_run(service, make_progress):
    """Test consistent_weeks counts qualifying weeks in a row"""
    records = [
        make_progress("2024-01-22", 100),
        make_progress("2024-01-15", 90),
        make_progress("2024-01-08", 40),
        make_progress("2024-01-01", 100),
    ]

    report = service.build_achievement_report(records[0], records, total_entries=10, today=date(2024, 1, 25))

    assert report['stats']['consistent_weeks'] == 2
    assert {"consistent_2", "weekly_100"} <= {a.id for a in report['unlocked']}


def test_achievement_report_without_progress(service):
    """Test user without any weekly record"""
    report = service.build_achievement_report(None, [], total_entries=0, today=date(2024, 1, 20))

    assert report['unlocked'] == []
    assert report['total_points'] == 0
    assert report['stats']['current_streak'] == 0


# ============================================================================
# Row Parsing
# ============================================================================

def test_parse_progress_records():
    """Test raw rows become ProgressTracking records"""
    records = parse_progress_records([
        {"id": "p1", "user_id": "user1", "category_id": "cat1", "week_start_date": "2024-01-01",
         "target_count": 3, "completed_count": 2, "completion_rate": 67},
    ])

    assert records[0].completion_rate == 67
    assert records[0].current_streak == 0


def test_parse_progress_records_rejects_bad_rows():
    """Test invalid rows raise our ValidationError"""
    with pytest.raises(ValidationError) as exc_info:
        parse_progress_records([{"week_start_date": "2024-01-01", "target_count": -3}], user_id="user1")

    assert exc_info.value.field == "target_count"
    assert exc_info.value.user_id == "user1"


def test_parse_progress_records_requires_week_start():
    """Test week_start_date is mandatory"""
    with pytest.raises(ValidationError) as exc_info:
        parse_progress_records([{"completion_rate": 50}])

    assert exc_info.value.field == "week_start_date"


def test_parse_journal_entries():
    """Test raw journal rows"""
    journals = parse_journal_entries([{"id": "j1", "created_at": "2024-01-10T09:00:00Z"}, {"id": "j2"}])

    assert journals[0].created_at == "2024-01-10T09:00:00Z"
    assert journals[1].created_at is None


def test_previous_week_record(january_records, make_progress):
    """Test previous week is the newest earlier record"""
    current = make_progress("2024-01-15", 0)

    assert previous_week_record(january_records, current).week_start_date == "2024-01-08"
    assert previous_week_record(january_records, january_records[0]) is None
