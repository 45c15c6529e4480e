"""Core business logic for autover.

This module contains the fundamental building blocks:
- Three part version parsing and incrementing
- Conventional commit parsing
- Release history from version tags
- Changelog generation
"""

from __future__ import annotations

from autover.core.changelog import (
    generate_changelog,
    persist_changelog,
    resolve_category_label,
)
from autover.core.commits import (
    ConventionalCommit,
    calculate_increment_type,
    parse_commits,
    parse_conventional_commit,
)
from autover.core.history import ReleaseRange, get_version_dates, resolve_release_range
from autover.core.version import IncrementType, ThreePartVersion, get_next_version

__all__ = [
    # Version
    "IncrementType",
    "ThreePartVersion",
    "get_next_version",
    # Commits
    "ConventionalCommit",
    "calculate_increment_type",
    "parse_commits",
    "parse_conventional_commit",
    # History
    "ReleaseRange",
    "get_version_dates",
    "resolve_release_range",
    # Changelog
    "generate_changelog",
    "persist_changelog",
    "resolve_category_label",
]
