"""Durable local storage for MoodMirror."""

import json
import sqlite3
from abc import ABC, abstractmethod
from datetime import date, datetime
from pathlib import Path
from typing import Optional

from moodmirror.models import JournalEntry


class KeyValueStore(ABC):
    """String key-value storage used for client-local state.

    History and streak state are kept as JSON strings under fixed keys.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Get the value stored under a key.

        Args:
            key: Storage key.

        Returns:
            The stored string, or None if the key is absent.
        """
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store a value, replacing any previous one.

        Args:
            key: Storage key.
            value: String to store.
        """
        pass

    @abstractmethod
    def remove(self, key: str) -> None:
        """Remove a key. Removing an absent key is not an error.

        Args:
            key: Storage key.
        """
        pass


class MemoryKeyValueStore(KeyValueStore):
    """Dict-backed store for tests and throwaway sessions."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)


class DataStore(KeyValueStore):
    """SQLite-based data store for MoodMirror.

    Holds the key-value table used by the history cache and streak
    tracker, and the journal table used by the offline journal backend.
    """

    REQUIRED_TABLES = [
        "kv",
        "journal",
    ]

    def __init__(self, db_path: Path):
        """Initialize the data store.

        Args:
            db_path: Path to the SQLite database file.
        """
        self.db_path = db_path
        self._ensure_db_dir()
        self._init_schema()

    def _ensure_db_dir(self) -> None:
        """Ensure the database directory exists."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    def _get_connection(self) -> sqlite3.Connection:
        """Get a database connection."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _init_schema(self) -> None:
        """Initialize database schema on first run."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()

            # Key-value table
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS kv (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """)

            # Journal table
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS journal (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    user_id TEXT NOT NULL,
                    date TEXT NOT NULL,
                    text TEXT NOT NULL,
                    notes TEXT,
                    analysis TEXT,
                    updated_at TEXT NOT NULL,
                    UNIQUE(user_id, date)
                )
            """)

            conn.commit()
        finally:
            conn.close()

    # ==================== Key-Value ====================

    def get(self, key: str) -> Optional[str]:
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("SELECT value FROM kv WHERE key = ?", (key,))
            row = cursor.fetchone()
            return row["value"] if row else None
        finally:
            conn.close()

    def set(self, key: str, value: str) -> None:
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT OR REPLACE INTO kv (key, value, updated_at)
                VALUES (?, ?, ?)
                """,
                (key, value, datetime.now().isoformat()),
            )
            conn.commit()
        finally:
            conn.close()

    def remove(self, key: str) -> None:
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM kv WHERE key = ?", (key,))
            conn.commit()
        finally:
            conn.close()

    # ==================== Journal ====================

    def save_journal_entry(self, user_id: str, entry: JournalEntry) -> None:
        """Insert or replace the journal entry for a user and day.

        Args:
            user_id: Owner of the entry.
            entry: Journal entry to save.
        """
        analysis = entry.analysis.to_json_dict() if entry.analysis else None
        updated_at = entry.updated_at or datetime.now()
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT OR REPLACE INTO journal
                (user_id, date, text, notes, analysis, updated_at)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    user_id,
                    entry.date.isoformat(),
                    entry.text,
                    entry.notes,
                    json.dumps(analysis) if analysis is not None else None,
                    updated_at.isoformat(),
                ),
            )
            conn.commit()
        finally:
            conn.close()

    def get_journal_entry(self, user_id: str, entry_date: date) -> Optional[JournalEntry]:
        """Get the journal entry for a user and day.

        Args:
            user_id: Owner of the entry.
            entry_date: Calendar day.

        Returns:
            JournalEntry if found, None otherwise.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                SELECT date, text, notes, analysis, updated_at
                FROM journal
                WHERE user_id = ? AND date = ?
                """,
                (user_id, entry_date.isoformat()),
            )
            row = cursor.fetchone()
            if row:
                return self._row_to_journal_entry(row)
            return None
        finally:
            conn.close()

    def get_journal(self, user_id: str) -> list[JournalEntry]:
        """Get all journal entries for a user.

        Args:
            user_id: Owner of the entries.

        Returns:
            List of journal entries, newest day first.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                SELECT date, text, notes, analysis, updated_at
                FROM journal
                WHERE user_id = ?
                ORDER BY date DESC
                """,
                (user_id,),
            )
            return [self._row_to_journal_entry(row) for row in cursor.fetchall()]
        finally:
            conn.close()

    @staticmethod
    def _row_to_journal_entry(row: sqlite3.Row) -> JournalEntry:
        return JournalEntry(
            date=date.fromisoformat(row["date"]),
            text=row["text"],
            notes=row["notes"],
            analysis=json.loads(row["analysis"]) if row["analysis"] else None,
            updated_at=datetime.fromisoformat(row["updated_at"]),
        )

    # ==================== Stats ====================

    def get_stats(self) -> dict:
        """Get database statistics.

        Returns:
            Dictionary with table record counts.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            stats = {}
            for table in self.REQUIRED_TABLES:
                cursor.execute(f"SELECT COUNT(*) as count FROM {table}")
                stats[table] = cursor.fetchone()["count"]
            return stats
        finally:
            conn.close()
