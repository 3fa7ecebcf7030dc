"""
Statistical Analysis Utilities

Small numeric helpers shared by the weekly, monthly and history calculations.

Key Features:
- Half-up rounding for percentages (2.5 -> 3, not banker's 2)
- Arithmetic mean and population variance of completion rates
- Consistency bar and volatility buckets
"""

import logging
import math
from typing import Sequence

from progress_engine.models.progress import Volatility

logger = logging.getLogger(__name__)

# A week "counts" toward consistency at or above this completion rate
CONSISTENCY_THRESHOLD = 80

# Variance cut-offs for volatility buckets
LOW_VOLATILITY_VARIANCE = 200
MEDIUM_VOLATILITY_VARIANCE = 500

# Consistency score loses at most this many points to volatility
MAX_VOLATILITY_PENALTY = 20


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer, halves toward +infinity.

    Example:
        >>> round_half_up(83.5)
        84
        >>> round_half_up(-2.5)
        -2
    """
    return int(math.floor(value + 0.5))


def completion_rate(completed: int, target: int) -> int:
    """
    Percentage of target reached; 0 when the target is 0.

    Not clamped: 5 of 3 gives 167.
    """
    if target <= 0:
        return 0
    return round_half_up(completed / target * 100)


def is_consistent_rate(rate: float) -> bool:
    """Check whether a weekly completion rate meets the consistency bar"""
    return rate >= CONSISTENCY_THRESHOLD


def calculate_mean(values: Sequence[float]) -> float:
    """
    Arithmetic mean; 0.0 for an empty sequence.
    """
    if not values:
        return 0.0
    return sum(values) / len(values)


def calculate_variance(values: Sequence[float]) -> float:
    """
    Population variance (divides by n, not n - 1).

    Returns 0.0 for fewer than two values.

    Example:
        >>> calculate_variance([100, 67])
        272.25
    """
    if len(values) <= 1:
        return 0.0

    mean = calculate_mean(values)
    squared_diffs = [(value - mean) ** 2 for value in values]
    return sum(squared_diffs) / len(values)


def volatility_penalty(variance: float) -> float:
    """Points deducted from the consistency score: variance / 10, capped"""
    return min(MAX_VOLATILITY_PENALTY, variance / 10)


def classify_volatility(variance: float) -> Volatility:
    """
    Bucket a variance of completion rates.

    - low: < 200
    - medium: < 500
    - high: otherwise
    """
    if variance < LOW_VOLATILITY_VARIANCE:
        return Volatility.LOW
    if variance < MEDIUM_VOLATILITY_VARIANCE:
        return Volatility.MEDIUM
    return Volatility.HIGH
