"""Local persistence for MoodMirror."""

from moodmirror.db.store import DataStore, KeyValueStore, MemoryKeyValueStore

__all__ = ["DataStore", "KeyValueStore", "MemoryKeyValueStore"]
