"""Tests for SyncConfig — defaults and environment overrides."""

from __future__ import annotations

from datetime import timedelta
from pathlib import Path

from contextsync.config import DEFAULT_LEARNINGS_FILE, SyncConfig, default_machine_name


class TestSyncConfig:
    def test_defaults(self, monkeypatch):
        for name in (
            "CONTEXT_SYNC_CLAUDE_DIR",
            "CONTEXT_SYNC_RECENCY_HOURS",
            "CONTEXT_SYNC_ACTIVE_GRACE_SECONDS",
            "CONTEXT_SYNC_MACHINE",
            "CONTEXT_SYNC_LEARNINGS_FILE",
            "CONTEXT_SYNC_PUSH_ATTEMPTS",
            "CONTEXT_SYNC_SKIP_REPORT_LIMIT",
        ):
            monkeypatch.delenv(name, raising=False)

        config = SyncConfig()

        assert config.sessions_root == Path.home() / ".claude" / "projects"
        assert config.recency_window == timedelta(hours=4)
        assert config.active_grace == timedelta(seconds=60)
        assert config.machine == default_machine_name()
        assert config.learnings_file == DEFAULT_LEARNINGS_FILE
        assert config.push_attempts == 3
        assert config.skip_report_limit == 3

    def test_environment_overrides(self, monkeypatch, tmp_path):
        monkeypatch.setenv("CONTEXT_SYNC_CLAUDE_DIR", str(tmp_path / "claude"))
        monkeypatch.setenv("CONTEXT_SYNC_RECENCY_HOURS", "8")
        monkeypatch.setenv("CONTEXT_SYNC_ACTIVE_GRACE_SECONDS", "120")
        monkeypatch.setenv("CONTEXT_SYNC_MACHINE", "buildbox")
        monkeypatch.setenv("CONTEXT_SYNC_LEARNINGS_FILE", "docs/learnings.md")
        monkeypatch.setenv("CONTEXT_SYNC_PUSH_ATTEMPTS", "5")

        config = SyncConfig()

        assert config.sessions_root == tmp_path / "claude" / "projects"
        assert config.recency_window == timedelta(hours=8)
        assert config.active_grace == timedelta(minutes=2)
        assert config.machine == "buildbox"
        assert config.learnings_path(tmp_path) == tmp_path / "docs" / "learnings.md"
        assert config.push_attempts == 5

    def test_blank_numeric_override_uses_default(self, monkeypatch):
        monkeypatch.setenv("CONTEXT_SYNC_RECENCY_HOURS", "")
        assert SyncConfig().recency_hours == 4.0

    def test_machine_name_has_no_domain(self):
        assert "." not in default_machine_name()
