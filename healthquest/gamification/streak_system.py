"""
Activity Streak Tracking

A day qualifies when at least 30 active minutes were logged on it. The
weekly streak counts consecutive qualifying days ending today, looking back
at most one week.
"""

from datetime import date, timedelta
from typing import Iterable

from healthquest.models.activity import DailyActivity

STREAK_MINUTES_THRESHOLD = 30
STREAK_WINDOW_DAYS = 7


def calculate_weekly_streak(
    daily_activities: Iterable[DailyActivity],
    today: date,
    threshold: int = STREAK_MINUTES_THRESHOLD,
    window: int = STREAK_WINDOW_DAYS
) -> int:
    """
    Count consecutive qualifying days, scanning backward from today.

    Stops at the first day below the threshold (or without any record),
    and never checks more than `window` days.
    """
    minutes_by_day = {}
    for record in daily_activities:
        minutes_by_day[record.day] = minutes_by_day.get(record.day, 0) + record.total_minutes

    streak = 0
    for offset in range(window):
        day = today - timedelta(days=offset)
        if minutes_by_day.get(day, 0) >= threshold:
            streak += 1
        else:
            break

    return streak
