"""Pipeline — wire locator, filter, extractor, scanner and persister together.

Two entry points mirror the two halves of a sync run:
- extract_session_content: find recent sessions and pull out their text
- commit_learnings: gate generated learnings through the secret scanner,
  append them to the knowledge file, then commit and push

Each returns a report whose ``outcome`` tells the caller which stage
stopped the run, if any.
"""

from __future__ import annotations

import datetime
import logging
from dataclasses import dataclass, field
from pathlib import Path

from ..config import SyncConfig
from .extractor import extract_conversation
from .filter import select_recent_sessions
from .locator import load_session_index, locate_sessions
from .models import Extraction, LearningsEntry, Outcome, ScanResult, SessionLocation
from .persister import LearningsWriter, WriteResult, is_empty_learnings
from .publisher import GitPublisher, PublishResult
from .secrets import scan_text

logger = logging.getLogger(__name__)

OUTCOME_MESSAGES: dict[Outcome, str] = {
    Outcome.NO_SESSION_DIRECTORY: "No sessions found for this project.",
    Outcome.NO_INDEX: "No session index found for this project.",
    Outcome.NO_RECENT_SESSIONS: "No recent sessions found.",
    Outcome.NO_CONVERSATION_CONTENT: "No conversation content found in recent sessions.",
    Outcome.SECRETS_DETECTED: "Possible secrets detected in learnings; nothing was written.",
    Outcome.NO_LEARNINGS_TO_COMMIT: "No new learnings to commit.",
    Outcome.SUCCESS: "Done.",
}


@dataclass
class ExtractionReport:
    """Result of locating, filtering and extracting sessions."""

    outcome: Outcome
    location: SessionLocation
    session_paths: list[Path] = field(default_factory=list)
    extraction: Extraction = field(default_factory=Extraction)


@dataclass
class CommitReport:
    """Result of scanning and persisting generated learnings."""

    outcome: Outcome
    scan: ScanResult = field(default_factory=ScanResult)
    write: WriteResult | None = None
    publish: PublishResult | None = None


def extract_session_content(
    project_path: Path,
    config: SyncConfig | None = None,
    now: datetime.datetime | None = None,
) -> ExtractionReport:
    """Collect the conversation turns of a project's recent sessions."""
    config = config or SyncConfig()
    now = now or datetime.datetime.now(datetime.timezone.utc)

    location = locate_sessions(project_path, config.sessions_root)
    if location.missing is not None:
        return ExtractionReport(outcome=location.missing, location=location)

    entries = load_session_index(location.index_path)
    session_paths = select_recent_sessions(
        entries,
        now,
        recency_window=config.recency_window,
        active_grace=config.active_grace,
    )
    logger.debug("%d of %d indexed sessions are recent", len(session_paths), len(entries))
    if not session_paths:
        return ExtractionReport(outcome=Outcome.NO_RECENT_SESSIONS, location=location)

    extraction = extract_conversation(session_paths, skip_report_limit=config.skip_report_limit)
    outcome = Outcome.NO_CONVERSATION_CONTENT if extraction.is_empty else Outcome.SUCCESS
    return ExtractionReport(
        outcome=outcome,
        location=location,
        session_paths=session_paths,
        extraction=extraction,
    )


def commit_learnings(
    body: str,
    project_path: Path,
    config: SyncConfig | None = None,
    today: datetime.date | None = None,
    dry_run: bool = False,
    publish: bool = True,
    push: bool = True,
    publisher: GitPublisher | None = None,
) -> CommitReport:
    """Scan ``body`` and append it to the project's knowledge file.

    Nothing is written when the body is empty or any secret rule fires.
    ``publish`` commits the knowledge file and ``push`` sends the commit
    upstream. ``dry_run`` performs the same checks and computes the same content
    without touching the filesystem or git.
    """
    config = config or SyncConfig()
    today = today or datetime.date.today()

    if is_empty_learnings(body):
        return CommitReport(outcome=Outcome.NO_LEARNINGS_TO_COMMIT)

    scan = scan_text(body)
    if scan.flagged:
        logger.warning("Secret scan flagged learnings: %s", ", ".join(sorted(scan.reasons)))
        return CommitReport(outcome=Outcome.SECRETS_DETECTED, scan=scan)

    entry = LearningsEntry(date=today, machine=config.machine, body=body)
    learnings_path = config.learnings_path(project_path)
    write = LearningsWriter(learnings_path).append(entry, dry_run=dry_run)
    report = CommitReport(outcome=Outcome.SUCCESS, scan=scan, write=write)

    if dry_run or not publish:
        return report

    publisher = publisher or GitPublisher(
        project_path,
        max_attempts=config.push_attempts,
        base_delay=config.push_base_delay,
    )
    message = f"Add learnings from {config.machine} ({today.isoformat()})"
    report.publish = publisher.publish(learnings_path, message, push=push)
    return report
