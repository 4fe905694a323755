"""Shared fixtures for sync tests — synthetic Claude Code data on tmp_path."""

from __future__ import annotations

from pathlib import Path

import pytest

from contextsync.config import SyncConfig
from contextsync.sync.locator import encode_project_path


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    project = tmp_path / "repos" / "myapp"
    project.mkdir(parents=True)
    return project


@pytest.fixture
def config(tmp_path: Path) -> SyncConfig:
    return SyncConfig(
        claude_dir=tmp_path / ".claude",
        recency_hours=4.0,
        active_grace_seconds=60.0,
        machine="testbox",
        learnings_file=".claude/learnings.md",
        push_attempts=3,
        skip_report_limit=3,
    )


@pytest.fixture
def session_dir(config: SyncConfig, project_dir: Path) -> Path:
    path = config.sessions_root / encode_project_path(project_dir)
    path.mkdir(parents=True)
    return path
