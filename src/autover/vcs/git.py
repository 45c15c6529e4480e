"""Git operations.

Thin wrapper around the ``git`` executable. Every call runs to completion
before returning; failures surface as ``GitError`` with git's stderr.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from autover.core.commits import ConventionalCommit, parse_commits
from autover.exceptions import GitError, NotAGitRepositoryError

logger = logging.getLogger(__name__)

# Separates commit messages in ``git log`` output
_COMMIT_SEPARATOR = "\x1e"


class GitRepository:
    """A git working tree rooted at ``path``."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def __repr__(self) -> str:
        return f"GitRepository({str(self.path)!r})"

    @classmethod
    def discover(cls, path: Path | str | None = None) -> GitRepository:
        """Find the repository containing ``path``.

        Raises:
            NotAGitRepositoryError: If ``path`` is not inside a git working tree
        """
        start = Path(path) if path else Path.cwd()
        if start.is_file():
            start = start.parent

        try:
            result = subprocess.run(
                ["git", "rev-parse", "--show-toplevel"],
                capture_output=True,
                text=True,
                check=True,
                cwd=start,
            )
        except (subprocess.CalledProcessError, FileNotFoundError, NotADirectoryError) as e:
            raise NotAGitRepositoryError(
                "The project path you have specified is not a valid git repository."
            ) from e

        root = result.stdout.strip()
        if not root:
            raise NotAGitRepositoryError(
                "The project path you have specified is not a valid git repository."
            )
        return cls(Path(root))

    def _run(self, *args: str) -> str:
        logger.debug("Running git %s", " ".join(args))
        try:
            result = subprocess.run(
                ["git", *args],
                capture_output=True,
                text=True,
                check=True,
                cwd=self.path,
            )
        except FileNotFoundError as e:
            raise GitError("git executable not found") from e
        except subprocess.CalledProcessError as e:
            raise GitError(
                f"git {args[0]} failed with exit code {e.returncode}",
                stderr=e.stderr,
            ) from e
        return result.stdout

    def get_tags(self) -> list[str]:
        output = self._run("tag", "--list")
        return [line.strip() for line in output.splitlines() if line.strip()]

    def get_commit_messages(self, since_tag: str | None = None) -> list[str]:
        """Get full commit messages, newest first.

        Args:
            since_tag: Only include commits after this tag. None means the
                whole history.
        """
        args = ["log", f"--format=%B{_COMMIT_SEPARATOR}"]
        if since_tag:
            args.append(f"{since_tag}..HEAD")

        output = self._run(*args)
        return [
            message.strip() for message in output.split(_COMMIT_SEPARATOR) if message.strip()
        ]

    def get_version_commits(self, since_tag: str | None = None) -> list[ConventionalCommit]:
        """Get the conventional commits made after ``since_tag``."""
        return parse_commits(self.get_commit_messages(since_tag))

    def get_file_by_tag(self, tag: str, relative_path: str | Path) -> bytes:
        """Read a file as it existed at ``tag``.

        Args:
            tag: Tag name
            relative_path: Path relative to the repository root
        """
        spec = f"{tag}:{Path(relative_path).as_posix()}"
        logger.debug("Running git show %s", spec)
        try:
            result = subprocess.run(
                ["git", "show", spec],
                capture_output=True,
                check=True,
                cwd=self.path,
            )
        except subprocess.CalledProcessError as e:
            raise GitError(
                f"Unable to read '{relative_path}' at tag '{tag}'",
                stderr=e.stderr.decode(errors="replace"),
            ) from e
        return result.stdout

    def stage_changes(self, path: str | Path) -> None:
        """Stage ``path``, including deletions."""
        self._run("add", "--all", "--", str(path))

    def commit(self, message: str) -> None:
        self._run("commit", "-m", message)

    def add_tag(self, name: str) -> None:
        self._run("tag", name)
