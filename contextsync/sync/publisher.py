"""Git publisher — commit the knowledge file and push it upstream.

The local commit is what matters; pushing is best effort. A push is retried
with exponential backoff and a final failure is reported, not raised, so a
network outage never costs the learnings already appended.
"""

from __future__ import annotations

import logging
import subprocess
import time
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass
class PublishResult:
    """What the publisher managed to do."""

    committed: bool = False
    pushed: bool = False
    push_attempts: int = 0
    error: str = ""


class GitPublisher:
    """Stages, commits and pushes a single file in a git work tree."""

    def __init__(
        self,
        repo_path: Path,
        max_attempts: int = 3,
        base_delay: float = 1.0,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.repo_path = repo_path
        self.max_attempts = max(1, max_attempts)
        self.base_delay = base_delay
        self._sleep = sleep

    def _git(self, *args: str) -> subprocess.CompletedProcess[str]:
        return subprocess.run(
            ["git", *args],
            cwd=self.repo_path,
            capture_output=True,
            text=True,
            check=True,
        )

    def is_repository(self) -> bool:
        try:
            self._git("rev-parse", "--is-inside-work-tree")
        except (subprocess.CalledProcessError, OSError):
            return False
        return True

    def commit(self, path: Path, message: str) -> PublishResult:
        result = PublishResult()
        if not self.is_repository():
            result.error = f"{self.repo_path} is not a git repository"
            logger.warning("Not committing learnings: %s", result.error)
            return result

        try:
            self._git("add", "--", str(path))
            self._git("commit", "-m", message, "--", str(path))
        except subprocess.CalledProcessError as e:
            result.error = (e.stderr or e.stdout or str(e)).strip()
            logger.warning("git commit failed: %s", result.error)
            return result
        except OSError as e:
            result.error = str(e)
            logger.warning("git commit failed: %s", result.error)
            return result

        result.committed = True
        return result

    def push(self, result: PublishResult) -> PublishResult:
        """Push with exponential backoff, recording the outcome on ``result``."""
        for attempt in range(self.max_attempts):
            result.push_attempts = attempt + 1
            try:
                self._git("push")
            except (subprocess.CalledProcessError, OSError) as e:
                stderr = getattr(e, "stderr", None)
                result.error = (stderr or str(e)).strip()
                logger.debug("git push attempt %d failed: %s", attempt + 1, result.error)
                if attempt + 1 < self.max_attempts:
                    self._sleep(self.base_delay * (2**attempt))
                continue
            result.pushed = True
            result.error = ""
            return result

        logger.warning(
            "git push failed after %d attempt(s); learnings are committed locally: %s",
            result.push_attempts,
            result.error,
        )
        return result

    def publish(self, path: Path, message: str, push: bool = True) -> PublishResult:
        result = self.commit(path, message)
        if result.committed and push:
            self.push(result)
        return result
