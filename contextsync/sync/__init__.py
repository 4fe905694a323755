"""Context Sync — extract learnings from Claude Code sessions.

Reads recent conversation logs for the current project and hands their
text to a generation step; the generated learnings are scanned for secrets
and appended to a per-project knowledge file that is committed to git.

Architecture:
    Locator  →  Filter  →  Extractor  →  (LLM)  →  Scanner  →  Persister  →  Publisher
    ├── encode_project_path       ├── scan_text        ├── LearningsWriter
    ├── locate_sessions           └── SECRET_RULES     └── GitPublisher
    └── load_session_index

The locator, filter and extractor produce conversation text; the scanner is
a hard gate in front of the persister. Every "nothing to do" condition is an
Outcome, never an exception.
"""

from .models import ConversationTurn, LearningsEntry, Outcome, Role, SessionIndexEntry
from .pipeline import OUTCOME_MESSAGES, commit_learnings, extract_session_content

__all__ = [
    "ConversationTurn",
    "LearningsEntry",
    "OUTCOME_MESSAGES",
    "Outcome",
    "Role",
    "SessionIndexEntry",
    "commit_learnings",
    "extract_session_content",
]
