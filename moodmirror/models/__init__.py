"""Data models for MoodMirror."""

from moodmirror.models.analysis import TONES, EmotionAnalysis, EmotionScore, Tone
from moodmirror.models.history import MAX_TEXT_LENGTH, HistoryEntry
from moodmirror.models.journal import JournalEntry
from moodmirror.models.streak import StreakResult, StreakState

__all__ = [
    "EmotionAnalysis",
    "EmotionScore",
    "HistoryEntry",
    "JournalEntry",
    "MAX_TEXT_LENGTH",
    "StreakResult",
    "StreakState",
    "TONES",
    "Tone",
]
