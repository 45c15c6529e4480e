"""Exception hierarchy for autover.

Errors fall into two groups:

- ``AutoVerError`` and its subclasses describe expected problems caused by
  the user's input or repository state (a malformed version, a missing
  project, no release tag). The CLI reports them and exits with the
  user-error status.
- ``AutoVerUnexpectedError`` wraps failures that point at the environment
  or a bug (I/O problems while loading or saving configuration). The CLI
  exits with the unhandled-exception status for these.
"""

from __future__ import annotations


class AutoVerError(Exception):
    """Base class for expected, user-facing errors."""


class InvalidVersionError(AutoVerError):
    """A version string is not a valid three part version."""


class InvalidArgumentError(AutoVerError):
    """A command argument has an invalid value."""


# Projects


class ProjectError(AutoVerError):
    """Base class for project discovery and update errors."""


class NoValidProjectError(ProjectError):
    """No project file could be found at the given path."""


class InvalidProjectError(ProjectError):
    """A project path or project file is not usable."""


class NoVersionTagError(ProjectError):
    """A project file has no version element to update."""


# Configuration


class ConfigError(AutoVerError):
    """Base class for configuration reconciliation errors."""


class ConfiguredProjectNotFoundError(ConfigError):
    """A project listed in the configuration was not discovered on disk."""


# Git


class GitError(AutoVerError):
    """A git command failed."""

    def __init__(self, message: str, stderr: str | None = None) -> None:
        super().__init__(message)
        self.stderr = stderr

    def __str__(self) -> str:
        if self.stderr:
            return f"{self.args[0]}\n{self.stderr.strip()}"
        return str(self.args[0])


class NotAGitRepositoryError(GitError):
    """The path is not inside a git working tree."""


# Changelog


class ChangelogError(AutoVerError):
    """Base class for changelog generation errors."""


class InvalidVersionTagError(ChangelogError):
    """The repository has no usable version tag."""


# Unexpected


class AutoVerUnexpectedError(Exception):
    """Base class for environment problems wrapped with context."""


class InvalidUserConfigurationError(AutoVerUnexpectedError):
    """The configuration file could not be read or validated."""


class ResetUserConfigurationFailedError(AutoVerUnexpectedError):
    """The configuration file could not be rewritten."""
