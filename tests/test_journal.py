"""Tests for journal storage, backends and the calendar view.

**Feature: mood-journal**
"""

import tempfile
from datetime import date
from pathlib import Path
from typing import Optional
from unittest.mock import MagicMock

import pytest
import requests
from hypothesis import given, settings
from hypothesis import strategies as st

from conftest import build_analysis
from moodmirror.db.store import DataStore
from moodmirror.errors import AuthenticationError, ConnectivityError, NotFound, ValidationError
from moodmirror.journal import (
    CalendarView,
    JournalBackend,
    JournalStore,
    LocalJournalBackend,
    RemoteJournalBackend,
)
from moodmirror.models import JournalEntry


class CountingBackend(JournalBackend):
    """In-memory backend that records how often it is called."""

    def __init__(self):
        self.entries: dict[tuple[str, date], JournalEntry] = {}
        self.calls: list[str] = []

    def list_entries(self, user_id: str) -> list[JournalEntry]:
        self.calls.append("list")
        return [entry for (user, _), entry in self.entries.items() if user == user_id]

    def get_entry(self, user_id: str, entry_date: date) -> Optional[JournalEntry]:
        self.calls.append("get")
        return self.entries.get((user_id, entry_date))

    def put_entry(self, user_id: str, entry: JournalEntry) -> None:
        self.calls.append("put")
        self.entries[(user_id, entry.date)] = entry


@pytest.fixture
def local_store(temp_db: DataStore) -> JournalStore:
    return JournalStore(LocalJournalBackend(temp_db))


def response(status: int, payload=None) -> MagicMock:
    mock = MagicMock()
    mock.status_code = status
    mock.json.return_value = payload if payload is not None else {}
    return mock


class TestJournalStore:
    """
    **Feature: mood-journal, Property 14: Journal Upsert And Lookup**
    """

    def test_missing_day_is_not_found(self, local_store: JournalStore):
        with pytest.raises(NotFound):
            local_store.get("alice", "2024-02-29")

    def test_impossible_day_is_not_found(self, local_store: JournalStore):
        with pytest.raises(NotFound):
            local_store.get("alice", "2024-02-30")

    def test_non_string_day_is_not_found(self, local_store: JournalStore):
        with pytest.raises(NotFound):
            local_store.get("alice", None)
        with pytest.raises(NotFound):
            local_store.get("alice", 20240301)

    def test_find_returns_none(self, local_store: JournalStore):
        assert local_store.find("alice", date(2024, 2, 1)) is None

    def test_upsert_then_get(self, local_store: JournalStore):
        analysis = build_analysis("Joyful")
        local_store.upsert("alice", "2024-03-01", "Great day", notes="secret", analysis=analysis)

        entry = local_store.get("alice", date(2024, 3, 1))
        assert entry.text == "Great day"
        assert entry.notes == "secret"
        assert entry.analysis == analysis
        assert entry.updated_at is not None

    @given(texts=st.lists(st.text(alphabet=st.characters(blacklist_categories=("Cc", "Cs")), max_size=100), min_size=2, max_size=5))
    @settings(max_examples=20)
    def test_second_write_replaces(self, texts: list[str]):
        with tempfile.TemporaryDirectory() as tmpdir:
            store = JournalStore(LocalJournalBackend(DataStore(Path(tmpdir) / "test.db")))
            for text in texts:
                store.upsert("alice", date(2024, 3, 1), text)

            entries = store.list_all("alice")
            assert list(entries) == [date(2024, 3, 1)]
            assert entries[date(2024, 3, 1)].text == texts[-1]

    def test_list_all_keyed_by_date(self, local_store: JournalStore):
        local_store.upsert("alice", "2024-03-01", "one")
        local_store.upsert("alice", "2024-03-02", "two")
        local_store.upsert("bob", "2024-03-01", "bob")

        entries = local_store.list_all("alice")
        assert set(entries) == {date(2024, 3, 1), date(2024, 3, 2)}
        assert entries[date(2024, 3, 2)].text == "two"

    @pytest.mark.parametrize("day, text", [
        (None, "text"),
        ("", "text"),
        ("2024-03-01", None),
        ("not-a-date", "text"),
        ("2024-02-30", "text"),
    ])
    def test_upsert_validation(self, local_store: JournalStore, day, text):
        with pytest.raises(ValidationError):
            local_store.upsert("alice", day, text)
        assert local_store.list_all("alice") == {}

    def test_empty_text_allowed_without_analysis(self, local_store: JournalStore):
        entry = local_store.upsert("alice", "2024-03-01", "")
        assert entry.text == ""
        assert entry.analysis is None

    def test_errors_propagate(self):
        backend = MagicMock(spec=JournalBackend)
        backend.list_entries.side_effect = ConnectivityError("offline")
        with pytest.raises(ConnectivityError):
            JournalStore(backend).list_all("alice")


class TestRemoteJournalBackend:
    """
    **Feature: mood-journal, Property 15: Remote Errors Map To The Error Taxonomy**
    """

    def make_backend(self, session: MagicMock, token: Optional[str] = "tok") -> RemoteJournalBackend:
        return RemoteJournalBackend(
            "http://api.test/api/",
            token_provider=lambda: token,
            session=session,
        )

    def test_list_sends_bearer_token(self):
        session = MagicMock()
        session.request.return_value = response(200, {"entries": [
            {"date": "2024-03-01", "text": "hi", "notes": None, "analysis": None},
        ]})
        entries = self.make_backend(session).list_entries("alice")

        assert [e.date for e in entries] == [date(2024, 3, 1)]
        method, url = session.request.call_args.args
        assert (method, url) == ("GET", "http://api.test/api/journal")
        assert session.request.call_args.kwargs["headers"]["Authorization"] == "Bearer tok"

    def test_get_404_is_none(self):
        session = MagicMock()
        session.request.return_value = response(404, {"error": "Entry not found"})
        assert self.make_backend(session).get_entry("alice", date(2024, 3, 1)) is None

    def test_get_404_is_not_found_in_store(self):
        session = MagicMock()
        session.request.return_value = response(404)
        store = JournalStore(self.make_backend(session))
        with pytest.raises(NotFound):
            store.get("alice", "2024-03-01")

    def test_get_parses_entry(self):
        analysis = build_analysis("Excited")
        session = MagicMock()
        session.request.return_value = response(200, {"entry": {
            "date": "2024-03-01",
            "text": "launch day",
            "notes": "n",
            "analysis": analysis.to_json_dict(),
            "updatedAt": "2024-03-01T20:00:00",
        }})
        entry = self.make_backend(session).get_entry("alice", date(2024, 3, 1))

        assert entry.analysis == analysis
        assert session.request.call_args.args[1] == "http://api.test/api/journal/2024-03-01"

    def test_put_posts_camel_case_body(self):
        session = MagicMock()
        session.request.return_value = response(200, {"success": True})
        entry = JournalEntry(date=date(2024, 3, 1), text="x", analysis=build_analysis())
        self.make_backend(session).put_entry("alice", entry)

        body = session.request.call_args.kwargs["json"]
        assert body["date"] == "2024-03-01"
        assert body["analysis"]["overallTone"] == "Calm"

    @pytest.mark.parametrize("status, error", [
        (401, AuthenticationError),
        (403, AuthenticationError),
        (400, ValidationError),
        (500, ConnectivityError),
        (503, ConnectivityError),
    ])
    def test_status_mapping(self, status: int, error: type):
        session = MagicMock()
        session.request.return_value = response(status, {"error": "nope"})
        with pytest.raises(error, match="nope"):
            self.make_backend(session).list_entries("alice")

    def test_connection_failure(self):
        session = MagicMock()
        session.request.side_effect = requests.ConnectionError("refused")
        with pytest.raises(ConnectivityError):
            self.make_backend(session).list_entries("alice")
        assert session.request.call_count == 1

    def test_timeout(self):
        session = MagicMock()
        session.request.side_effect = requests.Timeout("slow")
        with pytest.raises(ConnectivityError):
            self.make_backend(session).get_entry("alice", date(2024, 3, 1))

    def test_null_entries_is_empty(self):
        session = MagicMock()
        session.request.return_value = response(200, {"entries": None})
        assert self.make_backend(session).list_entries("alice") == []

    def test_missing_token(self):
        session = MagicMock()
        with pytest.raises(AuthenticationError):
            self.make_backend(session, token=None).list_entries("alice")
        session.request.assert_not_called()

    def test_invalid_json(self):
        session = MagicMock()
        bad = response(200)
        bad.json.side_effect = ValueError("no json")
        session.request.return_value = bad
        with pytest.raises(ConnectivityError):
            self.make_backend(session).list_entries("alice")


class TestCalendarView:
    """
    **Feature: mood-journal, Property 16: Calendar Is A Read-Through Cache**

    Opening a cached day never hits the backend; a write always reloads
    the map from the backend.
    """

    def seeded(self) -> tuple[CountingBackend, CalendarView]:
        backend = CountingBackend()
        backend.entries[("alice", date(2024, 3, 1))] = JournalEntry(date=date(2024, 3, 1), text="one")
        view = CalendarView(JournalStore(backend), "alice")
        return backend, view

    def test_open_seeds_once(self):
        backend, view = self.seeded()
        view.open()
        assert view.has_entry("2024-03-01")
        assert view.open_day(date(2024, 3, 1)).text == "one"
        assert backend.calls == ["list"]

    def test_miss_goes_to_backend(self):
        backend, view = self.seeded()
        view.open()
        # Written elsewhere after the calendar was opened
        backend.entries[("alice", date(2024, 3, 2))] = JournalEntry(date=date(2024, 3, 2), text="two")

        assert view.open_day("2024-03-02").text == "two"
        assert backend.calls == ["list", "get"]
        view.open_day("2024-03-02")
        assert backend.calls == ["list", "get"]

    def test_empty_day_is_none(self):
        backend, view = self.seeded()
        assert view.open_day("2024-03-09") is None
        assert view.open_day("2024-02-30") is None

    def test_save_invalidates_and_reloads(self):
        backend, view = self.seeded()
        view.open()
        view.save_day("2024-03-05", "new entry", notes="n")

        assert backend.calls == ["list", "put", "list"]
        assert view.has_entry(date(2024, 3, 5))

    def test_save_runs_analyzer_when_missing(self):
        backend, view = self.seeded()
        analyzer = MagicMock(return_value=build_analysis("Grateful"))

        entry = view.save_day("2024-03-05", "thankful", analyzer=analyzer)

        analyzer.assert_called_once_with("thankful")
        assert entry.analysis.overall_tone == "Grateful"
        assert backend.entries[("alice", date(2024, 3, 5))].analysis.overall_tone == "Grateful"

    def test_save_skips_analyzer(self):
        backend, view = self.seeded()
        analyzer = MagicMock()

        view.save_day("2024-03-05", "   ", analyzer=analyzer)
        view.save_day("2024-03-06", "text", analysis=build_analysis(), analyzer=analyzer)

        analyzer.assert_not_called()

    def test_failed_write_leaves_cache(self):
        backend, view = self.seeded()
        view.open()
        with pytest.raises(ValidationError):
            view.save_day(None, "text")
        assert backend.calls == ["list"]
        assert view.is_loaded

    def test_failed_analysis_writes_nothing(self):
        backend, view = self.seeded()
        analyzer = MagicMock(side_effect=ConnectivityError("offline"))
        with pytest.raises(ConnectivityError):
            view.save_day("2024-03-05", "text", analyzer=analyzer)
        assert "put" not in backend.calls

    def test_rejected_backend_write_keeps_cache(self):
        backend, view = self.seeded()
        view.open()

        def offline(user_id: str, entry: JournalEntry) -> None:
            backend.calls.append("put")
            raise ConnectivityError("offline")

        backend.put_entry = offline
        with pytest.raises(ConnectivityError):
            view.save_day("2024-03-05", "text")

        assert view.is_loaded
        assert not view.has_entry("2024-03-05")
        assert backend.calls == ["list", "put"]

    def test_non_string_day_is_none(self):
        backend, view = self.seeded()
        assert view.open_day(None) is None
        assert view.open_day(20240301) is None

    def test_month_grid(self):
        backend, view = self.seeded()
        weeks = view.month_grid(2024, 3)

        # March 2024 starts on a Friday and ends on a Sunday
        assert weeks[0][0] == (date(2024, 2, 25), False)
        assert weeks[-1][-1] == (date(2024, 4, 6), False)
        assert all(len(week) == 7 for week in weeks)
        assert (date(2024, 3, 1), True) in weeks[0]
        assert all(day.weekday() == 6 for day, _ in (week[0] for week in weeks))
