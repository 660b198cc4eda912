"""Consecutive-day activity streak."""

from dataclasses import replace
from datetime import date

from savr.domain.calendar import previous_day
from savr.domain.profile import StreakState


def advance_streak(streak: StreakState, event_date: date, today: date) -> StreakState:
    """Advance the streak for a log write on ``event_date``.

    Writes for any day other than today, and repeated writes on the same
    day, leave the streak untouched. Missing a day resets it to 1.
    """
    if event_date != today:
        return streak
    if streak.last_log_date == today:
        return streak
    if streak.last_log_date == previous_day(today):
        current = streak.current + 1
    else:
        current = 1
    return replace(
        streak,
        current=current,
        last_log_date=today,
        longest=max(streak.longest, current),
    )
