"""Session locator — map a project directory to its Claude Code session logs.

Claude Code keeps one directory per project under ~/.claude/projects/,
named after the project's absolute path with every separator replaced by
"-": "/data/repos/codebox" → "-data-repos-codebox". The mapping is one-way;
"/a-b" and "/a/b" encode identically.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from ..config import SESSION_INDEX_NAME
from .models import Outcome, SessionIndexEntry, SessionLocation

logger = logging.getLogger(__name__)

_SEPARATOR_SUBSTITUTE = "-"


def encode_project_path(project_path: str | os.PathLike[str]) -> str:
    """Encode a project path into its session directory name."""
    absolute = os.path.abspath(os.fspath(project_path))
    if absolute.startswith(os.sep):
        absolute = absolute[len(os.sep) :]
    encoded = absolute.replace(os.sep, _SEPARATOR_SUBSTITUTE)
    if os.altsep:
        encoded = encoded.replace(os.altsep, _SEPARATOR_SUBSTITUTE)
    return _SEPARATOR_SUBSTITUTE + encoded


def locate_sessions(project_path: Path, sessions_root: Path) -> SessionLocation:
    """Find the session directory and index for a project.

    A missing directory or index is reported through ``missing`` rather
    than raised. Callers treat it as "nothing to extract".
    """
    session_dir = sessions_root / encode_project_path(project_path)
    index_path = session_dir / SESSION_INDEX_NAME
    location = SessionLocation(
        project_path=project_path,
        session_dir=session_dir,
        index_path=index_path,
    )

    if not session_dir.is_dir():
        logger.debug("No session directory at %s", session_dir)
        location.missing = Outcome.NO_SESSION_DIRECTORY
    elif not index_path.is_file():
        logger.debug("No session index at %s", index_path)
        location.missing = Outcome.NO_INDEX

    return location


def load_session_index(index_path: Path) -> list[SessionIndexEntry]:
    """Load the ordered entries of a sessions-index.json file.

    Entries that lack required keys are skipped. An unreadable or corrupt
    index is logged and treated as empty.
    """
    try:
        with open(index_path, encoding="utf-8") as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError, UnicodeDecodeError) as e:
        logger.warning("Failed to load session index %s: %s", index_path, e)
        return []

    raw_entries = data.get("entries", []) if isinstance(data, dict) else []
    if not isinstance(raw_entries, list):
        logger.warning("Session index %s has no entry list", index_path)
        return []

    entries: list[SessionIndexEntry] = []
    for position, raw in enumerate(raw_entries):
        if not isinstance(raw, dict):
            logger.warning("Skipping index entry %d in %s: not an object", position, index_path)
            continue
        try:
            entries.append(SessionIndexEntry.from_dict(raw))
        except (KeyError, TypeError, ValueError) as e:
            logger.warning("Skipping index entry %d in %s: %s", position, index_path, e)

    return entries
