"""
Progress History Analysis

Looks back over the most recent weeks of ProgressTracking records and
derives trends, best/worst weeks, week streaks, a consistency score,
volatility and a per-month breakdown.
"""

import logging
from typing import Dict, List, Optional, Sequence

from progress_engine import config
from progress_engine.models.progress import (
    ConsistencyLevel,
    ConsistencyResult,
    ImprovementTrend,
    ProgressAnalysis,
    ProgressTracking,
    ProgressTrend,
    SeasonalPattern,
    StreakAnalysis,
)
from progress_engine.services.statistical_analysis import (
    calculate_mean,
    calculate_variance,
    classify_volatility,
    is_consistent_rate,
    round_half_up,
    volatility_penalty,
)
from progress_engine.utils.dates import month_name, parse_date, week_number

logger = logging.getLogger(__name__)

# Trend compares two blocks of this many weeks
TREND_BLOCK_WEEKS = 4
# Mean rate difference (percentage points) needed to leave "stable"
TREND_THRESHOLD = 10


def most_recent_records(
    progress_records: Sequence[ProgressTracking],
    weeks: int
) -> List[ProgressTracking]:
    """Newest `weeks` records by week_start_date; the input is left untouched"""
    ordered = sorted(progress_records, key=lambda record: record.week_start_date, reverse=True)
    return ordered[:weeks]


def _to_trend(record: ProgressTracking, lang: str) -> ProgressTrend:
    week_date = parse_date(record.week_start_date)
    return ProgressTrend(
        period=record.week_start_date,
        completed=record.completed_count,
        target=record.target_count,
        rate=record.completion_rate,
        streak=record.current_streak,
        week_number=week_number(week_date),
        month_name=month_name(week_date.month, lang=lang),
    )


def _improvement_trend(trends: Sequence[ProgressTrend]) -> ImprovementTrend:
    if len(trends) < TREND_BLOCK_WEEKS * 2:
        return ImprovementTrend.STABLE

    recent = calculate_mean([trend.rate for trend in trends[:TREND_BLOCK_WEEKS]])
    previous = calculate_mean([trend.rate for trend in trends[TREND_BLOCK_WEEKS:TREND_BLOCK_WEEKS * 2]])
    difference = recent - previous

    if difference > TREND_THRESHOLD:
        return ImprovementTrend.IMPROVING
    if difference < -TREND_THRESHOLD:
        return ImprovementTrend.DECLINING
    return ImprovementTrend.STABLE


def _best_week(trends: Sequence[ProgressTrend]) -> Optional[ProgressTrend]:
    best = None
    for trend in trends:
        if best is None or trend.rate > best.rate:
            best = trend
    return best


def _worst_week(trends: Sequence[ProgressTrend]) -> Optional[ProgressTrend]:
    worst = None
    for trend in trends:
        if worst is None or trend.rate < worst.rate:
            worst = trend
    return worst


def analyze_streak_history(trends: Sequence[ProgressTrend]) -> StreakAnalysis:
    """
    Week streaks over the analysis window (newest first)

    - current_streak_weeks: qualifying weeks counted back from the newest
    - longest_streak_weeks: longest run of qualifying weeks
    - average_streak: mean of the recorded day streaks
    """
    if not trends:
        return StreakAnalysis()

    current_weeks = 0
    for trend in trends:
        if not is_consistent_rate(trend.rate):
            break
        current_weeks += 1

    longest_weeks = 0
    run = 0
    for trend in trends:
        if is_consistent_rate(trend.rate):
            run += 1
            longest_weeks = max(longest_weeks, run)
        else:
            run = 0

    return StreakAnalysis(
        current_streak_weeks=current_weeks,
        longest_streak_weeks=longest_weeks,
        average_streak=round_half_up(calculate_mean([trend.streak for trend in trends])),
    )


def analyze_seasonal_pattern(trends: Sequence[ProgressTrend]) -> SeasonalPattern:
    """Average rate per month label plus the best and worst month"""
    monthly_rates: Dict[str, List[int]] = {}
    for trend in trends:
        monthly_rates.setdefault(trend.month_name, []).append(trend.rate)

    monthly_averages: Dict[str, int] = {}
    best_month, best_average = "", None
    worst_month, worst_average = "", None

    for month, rates in monthly_rates.items():
        average = round_half_up(calculate_mean(rates))
        monthly_averages[month] = average

        if best_average is None or average > best_average:
            best_month, best_average = month, average
        if worst_average is None or average < worst_average:
            worst_month, worst_average = month, average

    return SeasonalPattern(
        best_month=best_month,
        worst_month=worst_month,
        monthly_averages=monthly_averages,
    )


def analyze_progress_history(
    progress_records: Sequence[ProgressTracking],
    weeks_to_analyze: Optional[int] = None,
    lang: Optional[str] = None
) -> ProgressAnalysis:
    """
    Analyse the most recent weeks of progress

    Args:
        progress_records: Weekly records, any order
        weeks_to_analyze: Window size (defaults to DEFAULT_WEEKS_TO_ANALYZE, 12)
        lang: Language for month labels (defaults to PROGRESS_LOCALE)

    Returns:
        ProgressAnalysis with trends newest first. The consistency score is
        the share of weeks at >= 80% minus a volatility penalty of
        min(20, variance / 10), floored at 0.
    """
    if weeks_to_analyze is None:
        weeks_to_analyze = config.DEFAULT_WEEKS_TO_ANALYZE
    lang = lang or config.PROGRESS_LOCALE

    trends = [_to_trend(record, lang) for record in most_recent_records(progress_records, weeks_to_analyze)]
    rates = [trend.rate for trend in trends]

    consistent_weeks = sum(1 for rate in rates if is_consistent_rate(rate))
    consistency_base = consistent_weeks / len(trends) * 100 if trends else 0
    variance = calculate_variance(rates)
    consistency_score = max(0, round_half_up(consistency_base - volatility_penalty(variance)))

    analysis = ProgressAnalysis(
        trends=trends,
        average_completion_rate=round_half_up(calculate_mean(rates)) if trends else 0,
        improvement_trend=_improvement_trend(trends),
        best_week=_best_week(trends),
        worst_week=_worst_week(trends),
        streak_analysis=analyze_streak_history(trends),
        consistency_score=consistency_score,
        volatility=classify_volatility(variance),
        seasonal_pattern=analyze_seasonal_pattern(trends),
    )

    logger.debug(
        f"Analyzed {len(trends)} weeks: average={analysis.average_completion_rate}, "
        f"trend={analysis.improvement_trend.value}, consistency={consistency_score}"
    )

    return analysis


def calculate_consistency_score(
    progress_records: Sequence[ProgressTracking],
    weeks_to_analyze: Optional[int] = None
) -> ConsistencyResult:
    """
    Share of recent weeks at or above the consistency bar

    Levels:
    - excellent: >= 90
    - good: >= 70
    - fair: >= 50
    - needs_improvement: otherwise

    Args:
        progress_records: Weekly records, any order
        weeks_to_analyze: Window size (defaults to CONSISTENCY_WEEKS_TO_ANALYZE, 4)
    """
    if weeks_to_analyze is None:
        weeks_to_analyze = config.CONSISTENCY_WEEKS_TO_ANALYZE

    recent = most_recent_records(progress_records, weeks_to_analyze)
    if not recent:
        return ConsistencyResult(score=0, level=ConsistencyLevel.NEEDS_IMPROVEMENT, consistent_weeks=0)

    consistent_weeks = sum(1 for record in recent if is_consistent_rate(record.completion_rate))
    score = round_half_up(consistent_weeks / len(recent) * 100)

    if score >= 90:
        level = ConsistencyLevel.EXCELLENT
    elif score >= 70:
        level = ConsistencyLevel.GOOD
    elif score >= 50:
        level = ConsistencyLevel.FAIR
    else:
        level = ConsistencyLevel.NEEDS_IMPROVEMENT

    return ConsistencyResult(score=score, level=level, consistent_weeks=consistent_weeks)


def consecutive_consistent_weeks(progress_records: Sequence[ProgressTracking]) -> int:
    """Qualifying weeks in a row, counted back from the newest record"""
    count = 0
    for record in most_recent_records(progress_records, len(progress_records)):
        if not is_consistent_rate(record.completion_rate):
            break
        count += 1
    return count
