"""Client-side tracking of recent analyses, streaks and trends."""

from moodmirror.tracking.history import HISTORY_KEY, MAX_HISTORY_ITEMS, HistoryCache
from moodmirror.tracking.streak import STREAK_KEY, StreakTracker, advance_streak
from moodmirror.tracking import trends

__all__ = [
    "HISTORY_KEY",
    "HistoryCache",
    "MAX_HISTORY_ITEMS",
    "STREAK_KEY",
    "StreakTracker",
    "advance_streak",
    "trends",
]
