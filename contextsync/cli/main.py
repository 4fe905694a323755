"""Root command group for context-sync."""

from __future__ import annotations

import logging

import click

from .. import __version__


@click.group()
@click.version_option(__version__, prog_name="context-sync")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging.")
def main(verbose: bool) -> None:
    """Extract learnings from recent Claude Code sessions into the project."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


# Registers subcommands on ``main``
from . import sync  # noqa: E402, F401
