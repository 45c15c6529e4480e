"""Conventional commit parsing.

Parses commit messages following the Conventional Commits format:
    <type>[optional scope][!]: <description>

    [optional body]

    [optional footer(s)]

Messages that do not follow the format are not errors; they are simply
left out of the changelog.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from autover.core.version import IncrementType

if TYPE_CHECKING:
    from collections.abc import Iterable

# type(scope)!: description
CONVENTIONAL_COMMIT_PATTERN = re.compile(
    r"^(?P<type>[A-Za-z][\w-]*)"
    r"(?:\((?P<scope>[^)]*)\))?"
    r"(?P<breaking>!)?"
    r":\s(?P<description>.*)$"
)
BREAKING_CHANGE_PATTERN = re.compile(r"^BREAKING[ -]CHANGE:", re.MULTILINE)

MINOR_TYPES = frozenset({"feat"})
PATCH_TYPES = frozenset({"fix", "perf"})


@dataclass(frozen=True, slots=True)
class ConventionalCommit:
    """A commit message split into its conventional parts."""

    type: str
    scope: str
    description: str
    is_breaking: bool = False


def parse_conventional_commit(message: str) -> ConventionalCommit | None:
    """Parse a commit message.

    Only the subject line is matched against the conventional format; the
    body is inspected for a ``BREAKING CHANGE:`` footer.

    Args:
        message: Full commit message or a single subject line

    Returns:
        The parsed commit, or None if the subject is not conventional
    """
    subject, _, body = message.strip().partition("\n")
    match = CONVENTIONAL_COMMIT_PATTERN.match(subject.strip())
    if not match:
        return None

    description = match.group("description").strip()
    if not description:
        return None

    return ConventionalCommit(
        type=match.group("type"),
        scope=match.group("scope") or "",
        description=description,
        is_breaking=bool(match.group("breaking")) or bool(BREAKING_CHANGE_PATTERN.search(body)),
    )


def parse_commits(messages: Iterable[str]) -> list[ConventionalCommit]:
    """Parse commit messages, dropping the ones that are not conventional."""
    parsed = []
    for message in messages:
        commit = parse_conventional_commit(message)
        if commit is not None:
            parsed.append(commit)
    return parsed


def calculate_increment_type(
    commits: Iterable[ConventionalCommit],
    default: IncrementType = IncrementType.PATCH,
) -> IncrementType:
    """Suggest an increment type from a set of commits.

    Breaking changes win over features, features win over fixes. When no
    commit carries a releasable type the ``default`` is returned.
    """
    found = IncrementType.NONE
    for commit in commits:
        if commit.is_breaking:
            return IncrementType.MAJOR
        if commit.type in MINOR_TYPES:
            found = IncrementType.highest(found, IncrementType.MINOR)
        elif commit.type in PATCH_TYPES:
            found = IncrementType.highest(found, IncrementType.PATCH)

    return default if found == IncrementType.NONE else found
