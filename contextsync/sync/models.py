"""Data models for Context Sync.

Session index entries and conversation turns are normalized from Claude
Code's on-disk formats; learnings entries describe what gets appended to
the knowledge file.
"""

from __future__ import annotations

import datetime
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

# =============================================================================
# Outcomes
# =============================================================================


class Outcome(str, Enum):
    """Distinguishable results of an extract or commit run."""

    NO_SESSION_DIRECTORY = "no_session_directory"
    NO_INDEX = "no_index"
    NO_RECENT_SESSIONS = "no_recent_sessions"
    NO_CONVERSATION_CONTENT = "no_conversation_content"
    SECRETS_DETECTED = "secrets_detected"
    NO_LEARNINGS_TO_COMMIT = "no_learnings_to_commit"
    SUCCESS = "success"


class Role(str, Enum):
    """Speaker of a conversation turn."""

    USER = "user"
    ASSISTANT = "assistant"


# =============================================================================
# Session Discovery
# =============================================================================


@dataclass
class SessionIndexEntry:
    """One session log listed in a project's sessions-index.json."""

    session_id: str
    full_path: Path
    file_mtime: int  # Epoch milliseconds
    project_path: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SessionIndexEntry:
        """Build an entry from an index record.

        Raises:
            KeyError: A required key is missing.
            TypeError: A value has the wrong type.
        """
        mtime = data["fileMtime"]
        if isinstance(mtime, bool) or not isinstance(mtime, (int, float)):
            raise TypeError(f"fileMtime must be a number, got {type(mtime).__name__}")
        full_path = data["fullPath"]
        if not isinstance(full_path, str):
            raise TypeError(f"fullPath must be a string, got {type(full_path).__name__}")
        return cls(
            session_id=str(data["sessionId"]),
            full_path=Path(full_path),
            file_mtime=int(mtime),
            project_path=str(data.get("projectPath", "")),
        )


@dataclass
class SessionLocation:
    """Where a project's session logs live, and whether they exist."""

    project_path: Path
    session_dir: Path
    index_path: Path
    missing: Outcome | None = None  # NO_SESSION_DIRECTORY or NO_INDEX

    @property
    def found(self) -> bool:
        return self.missing is None


# =============================================================================
# Conversation Extraction
# =============================================================================


@dataclass(frozen=True)
class ConversationTurn:
    """A single text turn of a conversation. Tool traffic is never a turn."""

    role: Role
    text: str

    def render(self) -> str:
        return f"{self.role.value.upper()}: {self.text}"


@dataclass
class ParsedRecord:
    """A session log line that decoded to a JSON object."""

    data: dict[str, Any]
    line_number: int
    source: Path

    @property
    def record_type(self) -> str:
        value = self.data.get("type", "")
        return value if isinstance(value, str) else ""


@dataclass
class MalformedRecord:
    """A session log line that could not be decoded."""

    line_number: int
    source: Path
    reason: str

    def describe(self) -> str:
        return f"{self.source}:{self.line_number}: {self.reason}"


@dataclass
class Extraction:
    """Turns accumulated across session files, plus what was skipped."""

    turns: list[ConversationTurn] = field(default_factory=list)
    skipped: list[MalformedRecord] = field(default_factory=list)
    missing_files: list[Path] = field(default_factory=list)
    session_count: int = 0

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)

    @property
    def is_empty(self) -> bool:
        return not self.turns


# =============================================================================
# Learnings
# =============================================================================


@dataclass
class LearningsEntry:
    """A block appended to the knowledge file."""

    date: datetime.date
    machine: str
    body: str

    @property
    def heading(self) -> str:
        return f"## {self.date.isoformat()} ({self.machine})"

    def render(self) -> str:
        """Render the block, preceded by a blank line."""
        return f"\n{self.heading}\n{self.body.strip()}\n"


@dataclass
class ScanResult:
    """Outcome of the secret scan: clean, or the set of rules that fired."""

    reasons: frozenset[str] = frozenset()

    @property
    def flagged(self) -> bool:
        return bool(self.reasons)

    @property
    def clean(self) -> bool:
        return not self.reasons
