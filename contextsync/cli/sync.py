"""CLI commands for Context Sync — extract session content, commit learnings."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import TextIO

import click

from .main import main

_CONTENT_START = "=== SESSION CONTENT FOR ANALYSIS ==="
_CONTENT_END = "=== END SESSION CONTENT ==="

_project_option = click.option(
    "--project",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Project directory. Defaults to current directory.",
)
_dry_run_option = click.option(
    "--dry-run",
    is_flag=True,
    default=False,
    help="Preview only; nothing is written or committed.",
)


def _resolve_project(project: Path | None) -> Path:
    return (project or Path.cwd()).absolute()


@main.command()
@_project_option
@_dry_run_option
def extract(project: Path | None, dry_run: bool) -> None:
    """Print the conversation text of recent sessions for analysis.

    Looks at sessions last active within the recency window (4 hours by
    default), skipping any touched in the last minute.

    \b
    Examples:
        context-sync extract
        context-sync extract --project ~/myapp --dry-run
    """
    from ..config import SyncConfig
    from ..sync.extractor import format_conversation, summarize_skipped
    from ..sync.models import Outcome
    from ..sync.pipeline import OUTCOME_MESSAGES, extract_session_content

    config = SyncConfig()
    report = extract_session_content(_resolve_project(project), config=config)
    outcome = report.outcome

    if outcome == Outcome.NO_SESSION_DIRECTORY:
        click.echo(f"{OUTCOME_MESSAGES[outcome]} Looked in: {report.location.session_dir}")
        return
    if outcome == Outcome.NO_INDEX:
        click.echo(f"{OUTCOME_MESSAGES[outcome]} Expected: {report.location.index_path}")
        return
    if outcome == Outcome.NO_RECENT_SESSIONS:
        click.echo(
            f"{OUTCOME_MESSAGES[outcome]} "
            f"(looking for sessions from the last {config.recency_hours:g} hours)"
        )
        click.echo("\nTip: Run this after completing a session, not during one.")
        return

    extraction = report.extraction
    for line in summarize_skipped(extraction.skipped, limit=config.skip_report_limit):
        click.echo(f"Warning: {line}", err=True)
    for missing in extraction.missing_files:
        click.echo(f"Warning: Session file not found: {missing}", err=True)

    if outcome == Outcome.NO_CONVERSATION_CONTENT:
        click.echo(OUTCOME_MESSAGES[outcome])
        return

    click.echo(f"Found {len(report.session_paths)} recent session(s).\n")
    click.echo(_CONTENT_START)
    click.echo("")
    click.echo(format_conversation(extraction.turns))
    click.echo("")
    click.echo(_CONTENT_END)

    if dry_run:
        click.echo("\n[dry-run mode - no changes will be made]")


@main.command()
@_project_option
@click.option(
    "--file",
    "learnings_file",
    type=click.File("r", encoding="utf-8"),
    default="-",
    help="File holding the generated learnings. Defaults to stdin.",
)
@_dry_run_option
@click.option("--no-commit", is_flag=True, default=False, help="Append without committing.")
@click.option("--no-push", is_flag=True, default=False, help="Commit without pushing.")
def commit(
    project: Path | None,
    learnings_file: TextIO,
    dry_run: bool,
    no_commit: bool,
    no_push: bool,
) -> None:
    """Scan generated learnings for secrets and append them to the knowledge file.

    \b
    Examples:
        echo "- Use uv run pytest" | context-sync commit
        context-sync commit --file learnings.md --dry-run
    """
    from ..config import SyncConfig
    from ..sync.models import Outcome
    from ..sync.pipeline import OUTCOME_MESSAGES, commit_learnings
    from ..sync.secrets import describe_reasons

    config = SyncConfig()
    body = learnings_file.read()
    report = commit_learnings(
        body,
        _resolve_project(project),
        config=config,
        dry_run=dry_run,
        publish=not no_commit,
        push=not no_push,
    )

    if report.outcome == Outcome.SECRETS_DETECTED:
        click.echo(OUTCOME_MESSAGES[report.outcome], err=True)
        for reason in describe_reasons(report.scan.reasons):
            click.echo(f"  - {reason}", err=True)
        click.echo("Edit the learnings to remove sensitive values and try again.", err=True)
        sys.exit(1)

    if report.outcome != Outcome.SUCCESS or report.write is None:
        click.echo(OUTCOME_MESSAGES[report.outcome])
        return

    write = report.write
    click.echo(f"{'[WOULD APPEND]' if write.dry_run else '[APPENDED]'} {write.path}")
    click.echo(f"{'─' * 50}")
    click.echo(write.appended.strip("\n"))
    click.echo(f"{'─' * 50}")

    if write.dry_run:
        click.echo("\n[dry-run mode - no changes will be made]")
        return

    published = report.publish
    if published is None:
        return
    if not published.committed:
        click.echo(f"Warning: learnings appended but not committed: {published.error}", err=True)
    elif published.pushed:
        click.echo("Committed and pushed.")
    elif no_push:
        click.echo("Committed locally.")
    else:
        click.echo(
            f"Warning: committed locally, push failed after {published.push_attempts} "
            f"attempt(s): {published.error}",
            err=True,
        )
