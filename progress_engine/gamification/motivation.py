"""
Motivational Messages

Deterministic message selection from the weekly completion rate and streak.
"""

from typing import Optional
import logging

from progress_engine import config
from progress_engine.i18n.translations import t

logger = logging.getLogger(__name__)


def generate_motivational_message(
    completion_rate: int,
    current_streak: int,
    days_until_week_end: int,
    lang: Optional[str] = None
) -> str:
    """
    Pick one of five fixed messages

    - rate >= 100: goal met, mentions the streak
    - rate >= 80: almost there, mentions days left
    - rate >= 50: good pace
    - streak > 0: keep the streak going
    - otherwise: a fresh start

    Args:
        completion_rate: This week's completion rate
        current_streak: Current day streak
        days_until_week_end: Days left in the week
        lang: Language code (defaults to PROGRESS_LOCALE)
    """
    lang = lang or config.PROGRESS_LOCALE

    if completion_rate >= 100:
        return t("motivation_goal_met", lang=lang, streak=current_streak)
    if completion_rate >= 80:
        return t("motivation_almost_there", lang=lang, days=days_until_week_end)
    if completion_rate >= 50:
        return t("motivation_good_pace", lang=lang)
    if current_streak > 0:
        return t("motivation_streak", lang=lang, streak=current_streak)
    return t("motivation_new_start", lang=lang)
