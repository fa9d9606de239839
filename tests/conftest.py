"""Shared fixtures for MoodMirror tests."""

import tempfile
from datetime import datetime
from pathlib import Path

import pytest

from moodmirror.config import DEFAULT_CONFIG, _merge
from moodmirror.db.store import DataStore
from moodmirror.models import EmotionAnalysis, EmotionScore, HistoryEntry


def build_analysis(tone: str = "Calm", timestamp: str = "2024-01-01T10:00:00") -> EmotionAnalysis:
    """Build a valid analysis with a single emotion."""
    return EmotionAnalysis(
        overall_tone=tone,
        primary_emotions=[EmotionScore(emotion=tone.lower(), percentage=100)],
        cause_explanation="Something happened.",
        suggestion="Take a short walk.",
        timestamp=timestamp,
    )


def build_entry(
    created_at: datetime,
    tone: str = "Calm",
    text: str = "feeling fine today",
) -> HistoryEntry:
    """Build a history entry created at the given time."""
    return HistoryEntry.create(text, build_analysis(tone, created_at.isoformat()), now=created_at)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_db(temp_dir: Path) -> DataStore:
    """Create a temporary database for testing."""
    return DataStore(temp_dir / "test.db")


@pytest.fixture
def cli_config(temp_dir: Path) -> dict:
    """Config pointing the CLI at a temporary local database."""
    return _merge(DEFAULT_CONFIG, {
        "openai": {"api_key": "sk-test"},
        "storage": {"db_path": str(temp_dir / "cli.db")},
        "journal": {"mode": "local", "user_id": "tester"},
    })
