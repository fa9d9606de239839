"""Offline journal backend backed by the local SQLite store."""

import logging
from datetime import date
from typing import Optional

from moodmirror.db.store import DataStore
from moodmirror.journal.base import JournalBackend
from moodmirror.models import JournalEntry

logger = logging.getLogger(__name__)


class LocalJournalBackend(JournalBackend):
    """Journal backend that keeps entries in the local database.

    Used when no journal API is configured, so the calendar works
    without an account.
    """

    def __init__(self, data_store: DataStore):
        """Initialize the backend.

        Args:
            data_store: DataStore instance for persistence.
        """
        self._data_store = data_store

    def list_entries(self, user_id: str) -> list[JournalEntry]:
        return self._data_store.get_journal(user_id)

    def get_entry(self, user_id: str, entry_date: date) -> Optional[JournalEntry]:
        return self._data_store.get_journal_entry(user_id, entry_date)

    def put_entry(self, user_id: str, entry: JournalEntry) -> None:
        logger.debug("Saving local journal entry %s for %s", entry.date, user_id)
        self._data_store.save_journal_entry(user_id, entry)
