"""
Gamification for journal progress

This module provides:
- Day streaks from journal dates
- The achievement catalog and its evaluation
- Motivational messages
"""

from progress_engine.gamification.streak_system import calculate_streak
from progress_engine.gamification.achievement_system import (
    ACHIEVEMENT_CATALOG,
    detect_achievements,
    format_achievement_display,
    get_achievement_definition,
    total_points,
)
from progress_engine.gamification.motivation import generate_motivational_message

__all__ = [
    "calculate_streak",
    "ACHIEVEMENT_CATALOG",
    "detect_achievements",
    "format_achievement_display",
    "get_achievement_definition",
    "total_points",
    "generate_motivational_message",
]
