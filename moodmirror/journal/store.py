"""Per-user, per-day journal access."""

import logging
from datetime import date, datetime
from typing import Optional, Union

from moodmirror.errors import NotFound, ValidationError
from moodmirror.journal.base import JournalBackend
from moodmirror.models import EmotionAnalysis, JournalEntry

logger = logging.getLogger(__name__)

DateLike = Union[date, str]


def parse_day(value: DateLike) -> date:
    """Convert a date or ISO day string ("YYYY-MM-DD") to a date.

    Raises:
        ValueError: If the value is not a date or a string naming a real
            calendar day.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise ValueError(f"Not a calendar day: {value!r}")
    return date.fromisoformat(value.strip())


class JournalStore:
    """Reads and writes journal entries through a backend.

    The backend owns the data. This class adds validation and turns a
    missing day into ``NotFound``; it never calls the analysis service
    and never retries.
    """

    def __init__(self, backend: JournalBackend):
        """Initialize the store.

        Args:
            backend: Journal backend (remote API or local database).
        """
        self._backend = backend

    def list_all(self, user_id: str) -> dict[date, JournalEntry]:
        """Fetch every entry for a user, keyed by day.

        Args:
            user_id: Owner of the entries.

        Returns:
            Mapping of day to entry. Ordering is left to the caller.
        """
        return {entry.date: entry for entry in self._backend.list_entries(user_id)}

    def get(self, user_id: str, day: DateLike) -> JournalEntry:
        """Fetch the entry for one day.

        Args:
            user_id: Owner of the entry.
            day: Calendar day as a date or "YYYY-MM-DD" string.

        Returns:
            The journal entry.

        Raises:
            NotFound: If there is no entry for that exact day, including
                strings that do not name a real day.
        """
        try:
            entry_date = parse_day(day)
        except ValueError:
            raise NotFound(f"No journal entry for {day}", key=(user_id, day))

        entry = self._backend.get_entry(user_id, entry_date)
        if entry is None:
            raise NotFound(f"No journal entry for {entry_date}", key=(user_id, entry_date))
        return entry

    def find(self, user_id: str, day: DateLike) -> Optional[JournalEntry]:
        """Like ``get`` but returns None for an empty day."""
        try:
            return self.get(user_id, day)
        except NotFound:
            return None

    def upsert(
        self,
        user_id: str,
        day: Optional[DateLike],
        text: Optional[str],
        notes: Optional[str] = None,
        analysis: Optional[EmotionAnalysis] = None,
    ) -> JournalEntry:
        """Write or replace the entry for a day.

        Args:
            user_id: Owner of the entry.
            day: Calendar day as a date or "YYYY-MM-DD" string.
            text: Entry text. May be empty but must be given.
            notes: Optional private notes.
            analysis: Optional analysis of ``text``.

        Returns:
            The entry that was written.

        Raises:
            ValidationError: If ``day`` or ``text`` is missing, or ``day``
                is not a real calendar day.
        """
        if day is None or (isinstance(day, str) and not day.strip()):
            raise ValidationError("Date is required")
        if text is None:
            raise ValidationError("Text is required")
        try:
            entry_date = parse_day(day)
        except ValueError:
            raise ValidationError(f"Invalid date: {day}")

        entry = JournalEntry(
            date=entry_date,
            text=text,
            notes=notes,
            analysis=analysis,
            updated_at=datetime.now(),
        )
        self._backend.put_entry(user_id, entry)
        logger.info("Journal entry saved for %s", entry_date)
        return entry
