"""Consecutive-day streak rules.

A streak counts days on which a question was answered, right or wrong.
"""
import logging
from datetime import date

from qotd.dates import date_key, yesterday
from qotd.models import StreakState

logger = logging.getLogger(__name__)


def update_streak(today: date, state: StreakState) -> StreakState:
    today_key = date_key(today)
    if state.last_streak_date == date_key(yesterday(today)):
        new_state = StreakState(state.current_streak + 1, today_key)
    elif state.last_streak_date == today_key:
        new_state = StreakState(state.current_streak, today_key)
    else:
        new_state = StreakState(1, today_key)
    logger.debug("Streak %s -> %s", state, new_state)
    return new_state


def displayed_streak(state: StreakState) -> int:
    """The streak as shown to the user: the stored count, untouched until the next answer."""
    return max(0, state.current_streak)
