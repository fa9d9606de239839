"""Consecutive-day streak tracking."""

import logging
from datetime import date, timedelta
from typing import Optional

from pydantic import ValidationError as PydanticValidationError

from moodmirror.db.store import KeyValueStore
from moodmirror.errors import StorageCorruption
from moodmirror.models import StreakResult, StreakState

logger = logging.getLogger(__name__)

STREAK_KEY = "moodmirror_streak"


def decode_streak(raw: str) -> StreakState:
    """Decode the stored streak record.

    Older clients stored an empty string for "no date"; that reads as None.

    Raises:
        StorageCorruption: If the value is not a valid streak record.
    """
    try:
        return StreakState.model_validate_json(raw)
    except (ValueError, PydanticValidationError) as e:
        raise StorageCorruption(f"unreadable streak value: {e}") from e


def advance_streak(state: StreakState, today: date) -> tuple[StreakState, StreakResult]:
    """Apply one day's activity to a streak.

    Pure function of ``(state, today)``.

    Args:
        state: Prior streak state.
        today: The caller's current calendar day.

    Returns:
        Tuple of (new state, result).
    """
    last = state.last_date

    if last == today:
        return state, StreakResult(streak=state.count, is_new_streak=False)

    if last is not None and last > today:
        # Clock went backwards; last_date never moves back.
        return state, StreakResult(streak=state.count, is_new_streak=False)

    if last is not None and last == today - timedelta(days=1):
        count = state.count + 1
        new_state = StreakState(count=count, last_date=today)
        return new_state, StreakResult(streak=count, is_new_streak=count == 1)

    new_state = StreakState(count=1, last_date=today)
    return new_state, StreakResult(streak=1, is_new_streak=True)


class StreakTracker:
    """Durable day-streak counter.

    The current day is always passed in by the caller; nothing here
    reads the clock.
    """

    def __init__(self, store: KeyValueStore):
        """Initialize the tracker.

        Args:
            store: Durable key-value store holding the streak record.
        """
        self._store = store

    def get(self) -> StreakState:
        """Get the stored streak state, or the empty state if none is usable."""
        try:
            raw = self._store.get(STREAK_KEY)
            if not raw:
                return StreakState()
            return decode_streak(raw)
        except StorageCorruption as e:
            logger.warning("Ignoring corrupt streak: %s", e)
            return StreakState()
        except Exception:
            logger.exception("Failed to load streak")
            return StreakState()

    def update(self, today: date) -> StreakResult:
        """Record activity on ``today`` and return the resulting streak.

        Args:
            today: The caller's current calendar day.

        Returns:
            StreakResult with the streak length and whether it just started.
        """
        prior = self.get()
        new_state, result = advance_streak(prior, today)
        if new_state != prior:
            self._persist(new_state)
        return result

    def current(self, today: Optional[date] = None) -> int:
        """Get the streak length for display without changing it.

        Args:
            today: If given, a streak whose last day is before yesterday
                reads as 0 because it can no longer be continued.

        Returns:
            Streak length in days.
        """
        state = self.get()
        if today is not None and state.last_date is not None:
            if state.last_date < today - timedelta(days=1):
                return 0
        return state.count

    def reset(self) -> None:
        """Forget the stored streak."""
        try:
            self._store.remove(STREAK_KEY)
        except Exception:
            logger.exception("Failed to reset streak")

    def _persist(self, state: StreakState) -> None:
        # Single set() call so readers see either the old or the new record.
        try:
            self._store.set(
                STREAK_KEY, state.model_dump_json(by_alias=True)
            )
        except Exception:
            logger.exception("Failed to save streak")
