"""Base journal backend interface for MoodMirror."""

from abc import ABC, abstractmethod
from datetime import date
from typing import Optional

from moodmirror.models import JournalEntry


class JournalBackend(ABC):
    """Abstract base class for journal persistence.

    The backend is the source of truth for journal entries. Every
    implementation (remote API, local SQLite) must inherit from this
    class and implement all abstract methods.
    """

    @abstractmethod
    def list_entries(self, user_id: str) -> list[JournalEntry]:
        """Get every entry owned by a user.

        Args:
            user_id: Owner of the entries.

        Returns:
            All entries for the user, in no particular order.
        """
        pass

    @abstractmethod
    def get_entry(self, user_id: str, entry_date: date) -> Optional[JournalEntry]:
        """Get the entry for one user and day.

        Args:
            user_id: Owner of the entry.
            entry_date: Calendar day.

        Returns:
            The entry, or None if that day has no entry.
        """
        pass

    @abstractmethod
    def put_entry(self, user_id: str, entry: JournalEntry) -> None:
        """Insert or replace the entry for ``(user_id, entry.date)``.

        Args:
            user_id: Owner of the entry.
            entry: Entry to write.
        """
        pass
