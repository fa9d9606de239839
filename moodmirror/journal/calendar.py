"""Calendar view over the journal.

Keeps a date -> entry map seeded from the backend. The map is a
read-through cache: a day missing from it is fetched on demand, and any
write drops the whole map and reloads it from the backend.
"""

import calendar
import logging
from datetime import date, timedelta
from typing import Callable, Optional

from moodmirror.errors import NotFound
from moodmirror.journal.store import DateLike, JournalStore, parse_day
from moodmirror.models import EmotionAnalysis, JournalEntry

logger = logging.getLogger(__name__)

Analyzer = Callable[[str], EmotionAnalysis]


class CalendarView:
    """Journal state for one user while the calendar is open."""

    def __init__(self, store: JournalStore, user_id: str):
        """Initialize the view.

        Args:
            store: Journal store to read and write through.
            user_id: User whose journal is shown.
        """
        self._store = store
        self._user_id = user_id
        self._entries: Optional[dict[date, JournalEntry]] = None

    @property
    def entries(self) -> dict[date, JournalEntry]:
        """Cached entries; seeds the cache on first access."""
        if self._entries is None:
            self.open()
        return dict(self._entries or {})

    @property
    def is_loaded(self) -> bool:
        return self._entries is not None

    def open(self) -> dict[date, JournalEntry]:
        """Seed the cache from the backend.

        Returns:
            The freshly loaded date -> entry map.
        """
        self._entries = self._store.list_all(self._user_id)
        logger.debug("Calendar loaded %d entries", len(self._entries))
        return dict(self._entries)

    def invalidate(self) -> None:
        """Drop the cache; the next read reloads it."""
        self._entries = None

    def has_entry(self, day: DateLike) -> bool:
        """Whether the cache holds an entry for the day."""
        return parse_day(day) in self.entries

    def open_day(self, day: DateLike) -> Optional[JournalEntry]:
        """Get the entry for a day, fetching it only on a cache miss.

        Args:
            day: Calendar day.

        Returns:
            The entry, or None if the day is empty.
        """
        if self._entries is None:
            self.open()
        try:
            entry_date = parse_day(day)
        except ValueError:
            return None
        cached = self._entries.get(entry_date)
        if cached is not None:
            return cached

        try:
            entry = self._store.get(self._user_id, entry_date)
        except NotFound:
            return None
        self._entries[entry_date] = entry
        return entry

    def save_day(
        self,
        day: DateLike,
        text: Optional[str],
        notes: Optional[str] = None,
        analysis: Optional[EmotionAnalysis] = None,
        analyzer: Optional[Analyzer] = None,
    ) -> JournalEntry:
        """Write a day's entry and reload the calendar.

        When no analysis is supplied and the text is not blank, ``analyzer``
        is run first. The cache only changes after the backend write has
        succeeded.

        Args:
            day: Calendar day.
            text: Entry text.
            notes: Optional private notes.
            analysis: Existing analysis of ``text``, if any.
            analyzer: Callable producing an analysis for ``text``.

        Returns:
            The entry that was written.
        """
        if analysis is None and analyzer is not None and text and text.strip():
            analysis = analyzer(text)

        entry = self._store.upsert(
            self._user_id, day, text, notes=notes, analysis=analysis
        )
        self.invalidate()
        self.open()
        return entry

    def month_grid(self, year: int, month: int) -> list[list[tuple[date, bool]]]:
        """Week rows covering a month, Sunday first.

        Days from the neighbouring months pad the first and last weeks.

        Returns:
            List of weeks, each a list of seven ``(day, has_entry)`` pairs.
        """
        entries = self.entries
        first = date(year, month, 1)
        last = date(year, month, calendar.monthrange(year, month)[1])
        # date.weekday(): Monday=0 ... Sunday=6
        start = first - timedelta(days=(first.weekday() + 1) % 7)
        end = last + timedelta(days=(5 - last.weekday()) % 7)

        weeks = []
        day = start
        while day <= end:
            week = []
            for _ in range(7):
                week.append((day, day in entries))
                day += timedelta(days=1)
            weeks.append(week)
        return weeks
