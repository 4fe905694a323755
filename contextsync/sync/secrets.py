"""Secret scanner — gate generated learnings before they are committed.

Every rule runs against the full text so a flagged result names every
category that fired. A flagged result blocks persistence outright; nothing
is redacted automatically.
"""

from __future__ import annotations

import re

from .models import ScanResult

AWS_ACCESS_KEY = "aws_access_key"
PRIVATE_KEY_MARKER = "private_key_marker"
GENERIC_API_KEY_ASSIGNMENT = "generic_api_key_assignment"
PASSWORD_ASSIGNMENT = "password_assignment"
BEARER_TOKEN = "bearer_token"
VCS_TOKEN = "vcs_token"

# Every rule is evaluated; order only affects reporting
SECRET_RULES: list[tuple[str, re.Pattern]] = [
    (AWS_ACCESS_KEY, re.compile(r"AKIA[0-9A-Z]{16}")),
    (PRIVATE_KEY_MARKER, re.compile(r"PRIVATE KEY")),
    (
        GENERIC_API_KEY_ASSIGNMENT,
        re.compile(
            r"(?:api[_-]?key|secret[_-]?key|access[_-]?token)[\"']?"
            r"\s*[:=]\s*[\"']?[A-Za-z0-9_\-]{20,}",
            re.I,
        ),
    ),
    (PASSWORD_ASSIGNMENT, re.compile(r"password[\"']?\s*[:=]\s*\S{8,}", re.I)),
    (BEARER_TOKEN, re.compile(r"bearer\s+[A-Za-z0-9_\-]{20,}", re.I)),
    (VCS_TOKEN, re.compile(r"gh[pousr]_[A-Za-z0-9]{36,}")),
]

RULE_DESCRIPTIONS: dict[str, str] = {
    AWS_ACCESS_KEY: "AWS access key ID",
    PRIVATE_KEY_MARKER: "private key block",
    GENERIC_API_KEY_ASSIGNMENT: "API key or token assignment",
    PASSWORD_ASSIGNMENT: "password assignment",
    BEARER_TOKEN: "bearer token",
    VCS_TOKEN: "GitHub token",
}


def scan_text(text: str) -> ScanResult:
    """Classify text as clean or flagged with the set of rules that fired."""
    fired = frozenset(name for name, pattern in SECRET_RULES if pattern.search(text))
    return ScanResult(reasons=fired)


def describe_reasons(reasons: frozenset[str]) -> list[str]:
    """Fired rule names with descriptions, in rule-table order."""
    return [
        f"{name} ({RULE_DESCRIPTIONS[name]})" for name, _ in SECRET_RULES if name in reasons
    ]
