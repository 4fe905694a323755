"""Central configuration for Context Sync.

Every tunable used by the sync pipeline lives here. Defaults can be
overridden at runtime through environment variables:

    CONTEXT_SYNC_CLAUDE_DIR=/mnt/shared/.claude
    CONTEXT_SYNC_RECENCY_HOURS=8
    CONTEXT_SYNC_ACTIVE_GRACE_SECONDS=120
    CONTEXT_SYNC_MACHINE=buildbox
    CONTEXT_SYNC_LEARNINGS_FILE=docs/learnings.md
    CONTEXT_SYNC_PUSH_ATTEMPTS=5
    CONTEXT_SYNC_SKIP_REPORT_LIMIT=3

Usage:
    from contextsync.config import SyncConfig

    config = SyncConfig()
    config.sessions_root  # ~/.claude/projects
"""

from __future__ import annotations

import os
import socket
from dataclasses import dataclass, field
from datetime import timedelta
from pathlib import Path

SESSION_INDEX_NAME = "sessions-index.json"
DEFAULT_LEARNINGS_FILE = ".claude/learnings.md"


def default_machine_name() -> str:
    """Short host name, without any domain suffix."""
    return socket.gethostname().split(".")[0] or "unknown"


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    return float(raw)


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    return int(raw)


@dataclass
class SyncConfig:
    """Configuration for locating sessions and persisting learnings.

    Attributes:
        claude_dir: Root of the assistant's local data. Session logs live
            under ``claude_dir / "projects"``.
        recency_hours: Sessions last modified longer ago than this are stale.
        active_grace_seconds: Sessions modified more recently than this may
            still be written to and are left alone.
        machine: Identifier written into each learnings heading.
        learnings_file: Knowledge file path, relative to the project root.
        push_attempts: How many times ``git push`` is tried before giving up.
        push_base_delay: Seconds before the first push retry; doubles each time.
        skip_report_limit: Malformed log lines reported individually before
            switching to a single aggregate count.
    """

    claude_dir: Path = field(
        default_factory=lambda: Path(
            os.environ.get("CONTEXT_SYNC_CLAUDE_DIR", str(Path.home() / ".claude"))
        )
    )
    recency_hours: float = field(
        default_factory=lambda: _env_float("CONTEXT_SYNC_RECENCY_HOURS", 4.0)
    )
    active_grace_seconds: float = field(
        default_factory=lambda: _env_float("CONTEXT_SYNC_ACTIVE_GRACE_SECONDS", 60.0)
    )
    machine: str = field(
        default_factory=lambda: os.environ.get("CONTEXT_SYNC_MACHINE") or default_machine_name()
    )
    learnings_file: str = field(
        default_factory=lambda: os.environ.get(
            "CONTEXT_SYNC_LEARNINGS_FILE", DEFAULT_LEARNINGS_FILE
        )
    )
    push_attempts: int = field(default_factory=lambda: _env_int("CONTEXT_SYNC_PUSH_ATTEMPTS", 3))
    push_base_delay: float = 1.0
    skip_report_limit: int = field(
        default_factory=lambda: _env_int("CONTEXT_SYNC_SKIP_REPORT_LIMIT", 3)
    )

    @property
    def sessions_root(self) -> Path:
        return self.claude_dir / "projects"

    @property
    def recency_window(self) -> timedelta:
        return timedelta(hours=self.recency_hours)

    @property
    def active_grace(self) -> timedelta:
        return timedelta(seconds=self.active_grace_seconds)

    def learnings_path(self, project_path: Path) -> Path:
        return project_path / self.learnings_file
