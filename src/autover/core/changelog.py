"""Changelog generation.

A changelog section covers one release: the commits (or change file
entries) between the newest version tag and the one before it. Sections
are rendered as Markdown and prepended to the changelog file, so the file
reads newest release first.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from autover.core.history import resolve_release_range
from autover.exceptions import InvalidProjectError
from autover.project.csproj import get_project_name

if TYPE_CHECKING:
    from collections.abc import Mapping

    from autover.config.models import UserConfiguration
    from autover.core.commits import ConventionalCommit
    from autover.vcs.git import GitRepository

logger = logging.getLogger(__name__)

DEFAULT_CHANGELOG_FILE_NAME = "CHANGELOG.md"

DEFAULT_CHANGELOG_CATEGORIES: dict[str, str] = {
    "feat": "Features",
    "fix": "Bug Fixes",
    "perf": "Performance Improvements",
    "refactor": "Code Refactoring",
    "docs": "Documentation",
    "style": "Styles",
    "test": "Tests",
    "build": "Builds",
    "ci": "Continuous Integration",
    "chore": "Chores",
    "revert": "Reverts",
}


def resolve_category_label(
    commit_type: str,
    overrides: Mapping[str, str] | None = None,
) -> str:
    """Display label for a commit type.

    The repository's own mapping wins, then the built-in one; unknown types
    are shown as-is.
    """
    for mapping in (overrides or {}, DEFAULT_CHANGELOG_CATEGORIES):
        if commit_type in mapping:
            return mapping[commit_type]
    return commit_type


def format_commit(commit: ConventionalCommit) -> str:
    if commit.scope:
        return f"* **{commit.scope}**: {commit.description}"
    return f"* {commit.description}"


def generate_changelog(config: UserConfiguration, repo: GitRepository) -> str:
    """Generate the changelog section for the latest release.

    Args:
        config: Reconciled configuration
        repo: Repository holding the version tags

    Returns:
        Markdown text starting with ``## Release <date>``

    Raises:
        InvalidVersionTagError: If the repository has no version tag
        InvalidProjectError: If a configured project is not resolved
    """
    release = resolve_release_range(repo)
    lines = [f"## Release {release.current:%Y-%m-%d}"]

    if config.use_commits_for_changelog:
        commits = repo.get_version_commits(release.previous_tag)
        logger.debug(
            "Rendering %d commit(s) since %s", len(commits), release.previous_tag or "the beginning"
        )
        lines.extend(_render_commits(commits, config.changelog_categories))
    else:
        lines.extend(_render_change_files(config))

    return "\n".join(lines) + "\n"


def _render_commits(
    commits: list[ConventionalCommit],
    categories: Mapping[str, str] | None,
) -> list[str]:
    lines = [""]
    for commit_type in sorted({commit.type for commit in commits}):
        # dict.fromkeys drops duplicates and keeps history order before the stable sort
        type_commits = sorted(
            dict.fromkeys(c for c in commits if c.type == commit_type),
            key=lambda c: c.scope,
        )
        lines.append(f"### {resolve_category_label(commit_type, categories)}")
        lines.extend(format_commit(commit) for commit in type_commits)
    return lines


def _render_change_files(config: UserConfiguration) -> list[str]:
    lines = []
    for project in config.projects:
        if project.project_definition is None:
            raise InvalidProjectError(f"The project '{project.path}' is invalid.")
        if not project.changelog:
            continue

        lines.append("")
        lines.append(f"### {get_project_name(project.project_definition.project_path)}")
        lines.append("")
        lines.extend(f"* {entry}" for entry in project.changelog)
    return lines


def persist_changelog(
    config: UserConfiguration,
    changelog: str,
    repo: GitRepository,
    path: str | Path | None = None,
) -> Path:
    """Prepend ``changelog`` to the changelog file and stage it.

    Args:
        config: Reconciled configuration
        changelog: Section to add
        repo: Repository used for staging
        path: Changelog file; defaults to ``CHANGELOG.md`` at the git root

    Returns:
        Path of the written file
    """
    if not config.git_root:
        raise InvalidProjectError(
            "The project path you have specified is not a valid git repository."
        )

    changelog_path = Path(path) if path else Path(config.git_root) / DEFAULT_CHANGELOG_FILE_NAME

    if changelog_path.exists():
        existing = changelog_path.read_text(encoding="utf-8")
        changelog_path.write_text(f"{changelog}\n{existing}", encoding="utf-8")
    else:
        changelog_path.write_text(changelog, encoding="utf-8")

    repo.stage_changes(changelog_path)
    logger.info("Wrote changelog to %s", changelog_path)
    return changelog_path
