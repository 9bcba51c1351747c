"""Version-control collaborator for the release flow.

Wraps the handful of git invocations the release needs: a porcelain status
query for the pre-flight cleanliness check, and the final commit and
annotated tag. Every command runs synchronously; a non-zero exit raises
:class:`VersionControlError` and is never retried.
"""

from __future__ import annotations

import logging
import subprocess
from typing import List, Optional, Sequence

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled

logger = logging.getLogger(__name__)


class VersionControlError(RuntimeError):
    """A git command exited with a non-zero status."""

    def __init__(self, command: Sequence[str], returncode: int, stderr: str = ""):
        self.command = list(command)
        self.returncode = returncode
        self.stderr = (stderr or "").strip()
        message = f"`{' '.join(self.command)}` exited with status {returncode}"
        if self.stderr:
            message = f"{message}: {self.stderr}"
        super().__init__(message)


class DirtyWorkingTreeError(RuntimeError):
    """Tracked files have uncommitted changes."""

    def __init__(self, changes: List[str]):
        self.changes = changes
        super().__init__(
            "Working directory is not clean. Please commit or stash your changes."
        )


class GitRunner:
    """Runs git commands inside a repository root."""

    def __init__(self, cwd: Optional[str] = None, executable: str = Constants.GIT_EXECUTABLE):
        self.cwd = cwd
        self.executable = executable

    def run(self, *args: str) -> str:
        """Run ``git <args>`` and return its stdout.

        Raises:
            VersionControlError: If the command cannot start or exits non-zero.
        """
        command = [self.executable, *args]
        if is_debug_enabled(logger):
            logger.debug(
                "Running git",
                extra=extra_context(
                    event="subprocess", component="git", action=args[0] if args else "",
                    target=" ".join(command),
                ),
            )
        try:
            result = subprocess.run(  # noqa: S603
                command,
                cwd=self.cwd,
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as exc:
            raise VersionControlError(command, -1, str(exc)) from exc
        if result.returncode != 0:
            raise VersionControlError(command, result.returncode, result.stderr)
        return result.stdout

    def status_porcelain(self) -> str:
        return self.run("status", "--porcelain")

    def commit_all(self, message: str) -> None:
        self.run("commit", "--all", f"--message={message}")

    def tag_annotated(self, name: str, message: str) -> None:
        self.run("tag", "-a", "-m", message, name)


def uncommitted_changes(status: str) -> List[str]:
    """Return porcelain status lines that describe tracked changes.

    Untracked entries (``??``) and blank lines are ignored.
    """
    return [
        line for line in status.splitlines()
        if line.strip() != "" and not line.startswith("?")
    ]


def ensure_clean_working_directory(runner: GitRunner) -> None:
    """Abort when tracked files have uncommitted changes.

    Raises:
        DirtyWorkingTreeError: If ``git status --porcelain`` lists tracked changes.
        VersionControlError: If git itself fails.
    """
    changes = uncommitted_changes(runner.status_porcelain())
    if changes:
        raise DirtyWorkingTreeError(changes)


def commit_and_tag(runner: GitRunner, version: str) -> str:
    """Commit every modified tracked file and tag the commit ``v<version>``.

    Returns:
        The tag name.
    """
    message = Constants.COMMIT_MESSAGE_TEMPLATE.format(version=version)
    tag = Constants.TAG_TEMPLATE.format(version=version)
    runner.commit_all(message)
    runner.tag_annotated(tag, message)
    return tag
