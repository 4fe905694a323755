"""Session filter — pick the sessions worth extracting.

A session qualifies when its log was last written inside the recency
window but not within the trailing grace period, where it may still be
mid-write.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from pathlib import Path

from .models import SessionIndexEntry

DEFAULT_RECENCY_WINDOW = timedelta(hours=4)
DEFAULT_ACTIVE_GRACE = timedelta(seconds=60)


def _epoch_ms(moment: datetime) -> float:
    return moment.timestamp() * 1000


def is_recent(
    entry: SessionIndexEntry,
    now: datetime,
    recency_window: timedelta = DEFAULT_RECENCY_WINDOW,
    active_grace: timedelta = DEFAULT_ACTIVE_GRACE,
) -> bool:
    """True when ``entry.file_mtime`` lies strictly inside (now - window, now - grace)."""
    start = _epoch_ms(now - recency_window)
    cutoff = _epoch_ms(now - active_grace)
    return start < entry.file_mtime < cutoff


def select_recent_sessions(
    entries: list[SessionIndexEntry],
    now: datetime,
    recency_window: timedelta = DEFAULT_RECENCY_WINDOW,
    active_grace: timedelta = DEFAULT_ACTIVE_GRACE,
) -> list[Path]:
    """Return the log paths of recent, inactive sessions in index order."""
    return [
        entry.full_path
        for entry in entries
        if is_recent(entry, now, recency_window=recency_window, active_grace=active_grace)
    ]
