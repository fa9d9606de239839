"""Trend statistics derived from recent history.

All functions are pure and accept any sequence of history entries,
usually a ``HistoryCache.list()`` snapshot (most recent first).
"""

from collections import Counter
from datetime import date, datetime
from typing import Optional, Sequence

from pydantic import BaseModel, Field

from moodmirror.models import TONES, HistoryEntry

MIN_WORD_LENGTH = 4

STOP_WORDS = frozenset({
    "this", "that", "with", "have", "just", "your", "from", "about", "would",
    "could", "there", "their", "which", "been", "were", "what", "when", "where",
    "will", "they", "them", "then", "than", "because", "while", "should",
    "really", "very", "some", "more", "only", "also", "even", "much", "such",
    "like", "well", "still", "into", "over", "after", "before", "being", "most",
    "every", "other", "these", "those", "make", "made", "many", "back", "good",
    "time", "day", "days", "get", "got", "see", "one", "two", "three", "four",
    "five", "first", "last", "next", "now", "out", "off", "for", "and", "the",
    "you", "are", "but", "not", "all", "can", "was", "had", "did", "has", "too",
    "who", "why", "how", "his", "her", "him", "she", "our", "us", "we", "my",
    "me", "i", "to", "of", "in", "on", "at", "is", "it", "a", "an", "as", "by",
    "be", "or", "if", "so", "do", "no", "yes",
})


class MoodPoint(BaseModel):
    """One point of the mood time series."""

    created_at: datetime = Field(..., description="Entry creation time")
    tone: str = Field(..., description="Overall tone of the entry")
    index: int = Field(..., ge=0, description="Position of the tone in TONES")

    model_config = {"frozen": True}


class TrendSummary(BaseModel):
    """Everything the trends view shows, computed in one pass."""

    total: int = Field(..., ge=0, description="Number of entries considered")
    distribution: dict[str, int] = Field(default_factory=dict)
    series: list[MoodPoint] = Field(default_factory=list)
    streak: int = Field(default=0, ge=0, description="Streak recomputed from history")
    most_common: Optional[str] = Field(default=None)
    words: dict[str, int] = Field(default_factory=dict)

    model_config = {"frozen": True}


def mood_distribution(entries: Sequence[HistoryEntry]) -> dict[str, int]:
    """Count entries per overall tone.

    Tones appear in order of first occurrence. The counts always sum to
    ``len(entries)``.
    """
    counts: dict[str, int] = {}
    for entry in entries:
        tone = entry.analysis.overall_tone
        counts[tone] = counts.get(tone, 0) + 1
    return counts


def mood_series(entries: Sequence[HistoryEntry]) -> list[MoodPoint]:
    """Map entries to (time, tone index) points in chronological order."""
    ordered = sorted(entries, key=lambda e: e.created_at)
    return [
        MoodPoint(
            created_at=entry.created_at,
            tone=entry.analysis.overall_tone,
            index=TONES.index(entry.analysis.overall_tone),
        )
        for entry in ordered
    ]


def history_streak(entries: Sequence[HistoryEntry]) -> int:
    """Recompute the day streak from history alone.

    Entries are walked newest first; the streak grows while consecutive
    entries fall on consecutive calendar days and stops at the first pair
    that does not. It cannot see further back than the entries given.

    Returns:
        0 for no entries, otherwise at least 1.
    """
    if not entries:
        return 0

    days: list[date] = [
        e.created_at.date()
        for e in sorted(entries, key=lambda e: e.created_at, reverse=True)
    ]
    streak = 1
    for newer, older in zip(days, days[1:]):
        if (newer - older).days == 1:
            streak += 1
        else:
            break
    return streak


def tokenize(text: str) -> list[str]:
    """Split text into lowercase tokens kept for word statistics."""
    tokens = []
    for word in text.split():
        word = word.lower()
        if len(word) < MIN_WORD_LENGTH or word in STOP_WORDS:
            continue
        tokens.append(word)
    return tokens


def word_frequency(entries: Sequence[HistoryEntry]) -> dict[str, int]:
    """Count significant words across all entry texts."""
    counts: Counter[str] = Counter()
    for entry in entries:
        counts.update(tokenize(entry.text))
    return dict(counts)


def top_words(entries: Sequence[HistoryEntry], limit: int = 10) -> list[tuple[str, int]]:
    """Most frequent words, highest count first."""
    return Counter(word_frequency(entries)).most_common(limit)


def most_common_mood(entries: Sequence[HistoryEntry]) -> Optional[str]:
    """The tone seen most often, or None for an empty history.

    Ties go to the tone that occurred first.
    """
    distribution = mood_distribution(entries)
    if not distribution:
        return None
    return max(distribution.items(), key=lambda item: item[1])[0]


def summarize(entries: Sequence[HistoryEntry]) -> TrendSummary:
    """Build the full trend summary for a history snapshot."""
    distribution = mood_distribution(entries)
    return TrendSummary(
        total=len(entries),
        distribution=distribution,
        series=mood_series(entries),
        streak=history_streak(entries),
        most_common=most_common_mood(entries),
        words=word_frequency(entries),
    )
