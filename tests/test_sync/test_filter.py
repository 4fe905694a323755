"""Tests for the session filter — recency window boundaries."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from pathlib import Path

from contextsync.sync.filter import is_recent, select_recent_sessions
from contextsync.sync.models import SessionIndexEntry

NOW = datetime(2026, 3, 14, 12, 0, 0, tzinfo=timezone.utc)
WINDOW = timedelta(hours=4)
GRACE = timedelta(seconds=60)


def _entry(name: str, age: timedelta) -> SessionIndexEntry:
    return SessionIndexEntry(
        session_id=name,
        full_path=Path(f"/logs/{name}.jsonl"),
        file_mtime=int((NOW - age).timestamp() * 1000),
        project_path="/repo",
    )


class TestRecencyBoundaries:
    def test_exactly_at_grace_is_excluded(self):
        assert not is_recent(_entry("a", GRACE), NOW, WINDOW, GRACE)

    def test_just_past_grace_is_included(self):
        assert is_recent(_entry("a", GRACE + timedelta(seconds=1)), NOW, WINDOW, GRACE)

    def test_exactly_at_window_is_excluded(self):
        assert not is_recent(_entry("a", WINDOW), NOW, WINDOW, GRACE)

    def test_beyond_window_is_excluded(self):
        assert not is_recent(_entry("a", WINDOW + timedelta(seconds=1)), NOW, WINDOW, GRACE)

    def test_just_inside_window_is_included(self):
        assert is_recent(_entry("a", WINDOW - timedelta(seconds=1)), NOW, WINDOW, GRACE)

    def test_active_session_is_excluded(self):
        assert not is_recent(_entry("a", timedelta(seconds=5)), NOW, WINDOW, GRACE)

    def test_future_mtime_is_excluded(self):
        assert not is_recent(_entry("a", -timedelta(minutes=5)), NOW, WINDOW, GRACE)

    def test_defaults_are_four_hours_and_one_minute(self):
        assert is_recent(_entry("a", timedelta(hours=3, minutes=59)), NOW)
        assert not is_recent(_entry("a", timedelta(hours=4, minutes=1)), NOW)
        assert not is_recent(_entry("a", timedelta(seconds=30)), NOW)


class TestSelectRecentSessions:
    def test_preserves_index_order(self):
        entries = [
            _entry("late", timedelta(minutes=10)),
            _entry("stale", timedelta(hours=6)),
            _entry("early", timedelta(hours=3)),
            _entry("active", timedelta(seconds=10)),
            _entry("middle", timedelta(hours=1)),
        ]
        paths = select_recent_sessions(entries, NOW, WINDOW, GRACE)
        assert paths == [
            Path("/logs/late.jsonl"),
            Path("/logs/early.jsonl"),
            Path("/logs/middle.jsonl"),
        ]

    def test_empty_index(self):
        assert select_recent_sessions([], NOW) == []

    def test_nothing_recent(self):
        entries = [_entry("old", timedelta(days=2)), _entry("older", timedelta(days=9))]
        assert select_recent_sessions(entries, NOW) == []

    def test_custom_window(self):
        entries = [_entry("yesterday", timedelta(hours=20))]
        assert select_recent_sessions(entries, NOW) == []
        assert select_recent_sessions(entries, NOW, recency_window=timedelta(days=1)) == [
            Path("/logs/yesterday.jsonl")
        ]

    def test_custom_grace(self):
        entries = [_entry("recent", timedelta(minutes=3))]
        assert select_recent_sessions(entries, NOW, active_grace=timedelta(minutes=5)) == []
