"""Bounded cache of recent analysis results."""

import json
import logging

from pydantic import ValidationError as PydanticValidationError

from moodmirror.db.store import KeyValueStore
from moodmirror.errors import StorageCorruption
from moodmirror.models import HistoryEntry

logger = logging.getLogger(__name__)

HISTORY_KEY = "moodmirror_history"
MAX_HISTORY_ITEMS = 5


def decode_history(raw: str) -> list[HistoryEntry]:
    """Decode the stored JSON list of history entries.

    Raises:
        StorageCorruption: If the value is not a valid list of entries.
    """
    try:
        items = json.loads(raw)
        if not isinstance(items, list):
            raise StorageCorruption("history value is not a list")
        return [HistoryEntry.model_validate(item) for item in items]
    except (ValueError, PydanticValidationError) as e:
        raise StorageCorruption(f"unreadable history value: {e}") from e


class HistoryCache:
    """Most-recent-first list of up to ``MAX_HISTORY_ITEMS`` entries.

    Storage problems never escape this class: a failed write is logged
    and dropped, and an unreadable value reads as an empty history.
    """

    def __init__(self, store: KeyValueStore, max_items: int = MAX_HISTORY_ITEMS):
        """Initialize the cache.

        Args:
            store: Durable key-value store holding the history list.
            max_items: Capacity of the cache.
        """
        self._store = store
        self._max_items = max_items

    @property
    def max_items(self) -> int:
        return self._max_items

    def save(self, entry: HistoryEntry) -> None:
        """Prepend an entry and evict anything beyond capacity.

        Args:
            entry: Entry to store.
        """
        try:
            updated = [entry, *self.list()][: self._max_items]
            payload = json.dumps([item.to_json_dict() for item in updated])
            self._store.set(HISTORY_KEY, payload)
        except Exception:
            logger.exception("Failed to save to history")

    def list(self) -> list[HistoryEntry]:
        """Get the cached entries, most recent first.

        Returns:
            Up to ``max_items`` entries; empty if nothing usable is stored.
        """
        try:
            raw = self._store.get(HISTORY_KEY)
            if not raw:
                return []
            return decode_history(raw)[: self._max_items]
        except StorageCorruption as e:
            logger.warning("Ignoring corrupt history: %s", e)
            return []
        except Exception:
            logger.exception("Failed to load history")
            return []

    def clear(self) -> None:
        """Remove all entries."""
        try:
            self._store.remove(HISTORY_KEY)
        except Exception:
            logger.exception("Failed to clear history")
