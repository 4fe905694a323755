"""context-sync — turn recent coding-assistant sessions into committed project learnings."""

__version__ = "0.1.0"
