"""
Journal Streak Calculation

Turns the creation dates of a user's journals into a day streak:
- current: consecutive days ending today or yesterday (0 once a day is skipped)
- best: longest run of consecutive days anywhere in the history

Several journals on the same day count as one day.
"""

from typing import Iterable, Optional
from datetime import date
import logging

from progress_engine.models.progress import Streak
from progress_engine.utils.dates import DateLike, days_between, to_date, today_utc

logger = logging.getLogger(__name__)


def calculate_streak(
    journal_dates: Iterable[DateLike],
    today: Optional[date] = None
) -> Streak:
    """
    Calculate current and best streak from journal dates

    Logic:
    - Reduce the dates to distinct calendar days, newest first
    - If the newest day is today or yesterday: current starts at 1 and grows
      while each older day is exactly one day before the previous one
    - best is the longest such run over the whole history, and never less
      than current

    Args:
        journal_dates: ISO date strings (or dates) of journal entries, any order
        today: Evaluation date (defaults to today in UTC)

    Returns:
        Streak(current=int, best=int)
    """
    days = sorted({to_date(value) for value in journal_dates}, reverse=True)
    if not days:
        return Streak(current=0, best=0)

    if today is None:
        today = today_utc()

    current_streak = 0
    if days_between(days[0], today) <= 1:
        # Entry today or yesterday keeps the streak alive
        current_streak = 1
        for newer, older in zip(days, days[1:]):
            if days_between(older, newer) != 1:
                break
            current_streak += 1

    best_streak = 0
    run = 1
    for newer, older in zip(days, days[1:]):
        if days_between(older, newer) == 1:
            run += 1
        else:
            best_streak = max(best_streak, run)
            run = 1

    best_streak = max(best_streak, run, current_streak)

    logger.debug(
        f"Calculated streak over {len(days)} distinct days: "
        f"current={current_streak}, best={best_streak}"
    )

    return Streak(current=current_streak, best=best_streak)
