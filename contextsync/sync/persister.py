"""Learnings persister — append dated entries to the project knowledge file.

The knowledge file is append-only: each run adds a blank line, a
"## YYYY-MM-DD (machine)" heading and the bullet body. Existing content is
never rewritten.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from .models import LearningsEntry

logger = logging.getLogger(__name__)

NO_LEARNINGS_SENTINEL = "No new learnings"
_FILE_TITLE = "# Learnings\n"

_SENTINEL_PATTERN = re.compile(
    r"^\s*(?:[-*]\s*)?" + re.escape(NO_LEARNINGS_SENTINEL) + r"\b[^\n]*\s*$",
    re.I,
)


def is_empty_learnings(body: str) -> bool:
    """True for an empty body or a one-line "No new learnings ..." sentinel."""
    return not body.strip() or bool(_SENTINEL_PATTERN.match(body))


# =============================================================================
# Write Result
# =============================================================================


class WriteResult:
    """Result of an append operation."""

    def __init__(self, path: Path) -> None:
        self.path = path
        self.appended: str = ""
        self.content: str = ""
        self.created: bool = False
        self.dry_run: bool = True


# =============================================================================
# Writer
# =============================================================================


class LearningsWriter:
    """Appends learnings entries to a knowledge file."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def append(self, entry: LearningsEntry, dry_run: bool = True) -> WriteResult:
        """Append ``entry``, or compute the resulting content when ``dry_run``.

        Raises:
            ValueError: The entry body is empty or the sentinel. Callers
                check ``is_empty_learnings`` first.
        """
        if is_empty_learnings(entry.body):
            raise ValueError("refusing to append an empty learnings entry")

        result = WriteResult(self.path)
        result.dry_run = dry_run

        existing = ""
        if self.path.exists():
            existing = self.path.read_text(encoding="utf-8")
        else:
            result.created = True

        prefix = ""
        if result.created:
            prefix = _FILE_TITLE
        elif existing and not existing.endswith("\n"):
            prefix = "\n"

        result.appended = prefix + entry.render()
        result.content = existing + result.appended

        if not dry_run:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "a", encoding="utf-8") as f:
                f.write(result.appended)
            logger.info("Appended learnings for %s to %s", entry.heading, self.path)

        return result
