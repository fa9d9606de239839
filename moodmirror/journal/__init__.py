"""Daily journal storage for MoodMirror."""

from moodmirror.journal.base import JournalBackend
from moodmirror.journal.calendar import CalendarView
from moodmirror.journal.local import LocalJournalBackend
from moodmirror.journal.remote import RemoteJournalBackend
from moodmirror.journal.store import JournalStore, parse_day

__all__ = [
    "CalendarView",
    "JournalBackend",
    "JournalStore",
    "LocalJournalBackend",
    "RemoteJournalBackend",
    "parse_day",
]
