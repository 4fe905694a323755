"""Conversation extractor — read text turns out of Claude Code session logs.

Claude Code stores conversations as JSONL files with these line types:
- type="user": message.content is a string for typed prompts, or a list of
  tool_result blocks when the line carries tool output
- type="assistant": message.content[] mixes text blocks and tool_use blocks
- anything else (summary, system, file-history-snapshot, ...) is metadata

Only typed prompts and assistant text blocks become turns. Each line is
parsed on its own; a corrupt line is reported and skipped, never fatal.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Iterator
from pathlib import Path

from .models import (
    ConversationTurn,
    Extraction,
    MalformedRecord,
    ParsedRecord,
    Role,
)

logger = logging.getLogger(__name__)

DEFAULT_SKIP_REPORT_LIMIT = 3


# =============================================================================
# Line Parsing
# =============================================================================


def parse_line(line: str, line_number: int, source: Path) -> ParsedRecord | MalformedRecord:
    """Decode one JSONL line into a typed parse result."""
    try:
        data = json.loads(line)
    except json.JSONDecodeError as e:
        return MalformedRecord(
            line_number=line_number, source=source, reason=f"invalid JSON ({e.msg})"
        )

    if not isinstance(data, dict):
        return MalformedRecord(
            line_number=line_number,
            source=source,
            reason=f"expected an object, got {type(data).__name__}",
        )
    return ParsedRecord(data=data, line_number=line_number, source=source)


def turns_from_record(record: ParsedRecord) -> list[ConversationTurn]:
    """Text turns carried by a single decoded record, in block order."""
    message = record.data.get("message")
    if not isinstance(message, dict):
        return []
    content = message.get("content")

    if record.record_type == "user":
        # List/object content is a tool_result wrapper, not something the user typed
        if isinstance(content, str):
            return [ConversationTurn(role=Role.USER, text=content)]
        return []

    if record.record_type == "assistant":
        if not isinstance(content, list):
            return []
        turns = []
        for block in content:
            if not isinstance(block, dict) or block.get("type") != "text":
                continue
            text = block.get("text")
            if isinstance(text, str):
                turns.append(ConversationTurn(role=Role.ASSISTANT, text=text))
        return turns

    return []


# =============================================================================
# Streaming
# =============================================================================


def iter_records(path: Path) -> Iterator[ParsedRecord | MalformedRecord]:
    """Lazily yield a parse result for every non-blank line of a session log.

    Raises:
        OSError: The file cannot be opened or read.
        UnicodeDecodeError: The file is not valid UTF-8.
    """
    with open(path, encoding="utf-8") as f:
        for line_number, line in enumerate(f, start=1):
            if not line.strip():
                continue
            yield parse_line(line, line_number, path)


def iter_turns(
    path: Path, skipped: list[MalformedRecord] | None = None
) -> Iterator[ConversationTurn]:
    """Lazily yield the conversation turns of one session log.

    Malformed lines are appended to ``skipped`` when given.
    """
    for result in iter_records(path):
        if isinstance(result, MalformedRecord):
            if skipped is not None:
                skipped.append(result)
            continue
        yield from turns_from_record(result)


def extract_conversation(
    paths: Iterable[Path],
    skip_report_limit: int = DEFAULT_SKIP_REPORT_LIMIT,
) -> Extraction:
    """Concatenate the turns of several session logs, in the given order.

    Missing files and malformed lines are recorded on the returned
    ``Extraction`` for the caller to report (see ``summarize_skipped``) and
    only logged at debug level here. Debug logging lists malformed lines
    individually up to ``skip_report_limit``, then as an aggregate count.
    """
    extraction = Extraction()

    for path in paths:
        extraction.session_count += 1
        if not path.is_file():
            logger.debug("Session file not found: %s", path)
            extraction.missing_files.append(path)
            continue

        before = extraction.skipped_count
        try:
            for turn in iter_turns(path, extraction.skipped):
                extraction.turns.append(turn)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Failed to read %s: %s", path, e)

        for position, record in enumerate(extraction.skipped[before:], start=before):
            if position < skip_report_limit:
                logger.debug("Skipping malformed record at %s", record.describe())

    if extraction.skipped_count > skip_report_limit:
        logger.debug(
            "Skipped %d more malformed record(s)",
            extraction.skipped_count - skip_report_limit,
        )

    return extraction


# =============================================================================
# Reporting
# =============================================================================


def summarize_skipped(
    skipped: list[MalformedRecord],
    limit: int = DEFAULT_SKIP_REPORT_LIMIT,
) -> list[str]:
    """Human-readable lines describing skipped records.

    The first ``limit`` records are listed individually; the rest collapse
    into one count.
    """
    lines = [f"Skipped malformed record at {record.describe()}" for record in skipped[:limit]]
    remaining = len(skipped) - limit
    if remaining > 0:
        lines.append(f"... and {remaining} more malformed record(s) skipped")
    return lines


def format_conversation(turns: Iterable[ConversationTurn]) -> str:
    """Render turns as "USER: ..." / "ASSISTANT: ..." lines for the generation step."""
    return "\n".join(turn.render() for turn in turns)
