"""Command-line interface for context-sync."""

from .main import main

__all__ = ["main"]
