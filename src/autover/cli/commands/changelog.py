"""Implementation of the 'changelog' command."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from rich.markup import escape

from autover.config import (
    UserConfigurationResetRequest,
    reset_user_configuration,
    retrieve_user_configuration,
)
from autover.core.changelog import generate_changelog, persist_changelog
from autover.core.version import IncrementType
from autover.vcs import GitRepository

if TYPE_CHECKING:
    from rich.console import Console


def run_changelog(
    path: str | None,
    tag: str | None,
    output_to_console: bool,
    changelog_path: str | None,
    console: Console,
) -> None:
    """Run the changelog command.

    Args:
        path: Optional path to search for projects
        tag: Read the configuration as it was at this tag
        output_to_console: Print the changelog instead of writing it
        changelog_path: File to prepend the changelog to
        console: Console for standard output
    """
    project_path = Path(path) if path else Path.cwd()
    repo = GitRepository.discover(project_path)
    config = retrieve_user_configuration(
        project_path,
        IncrementType.PATCH,
        tag_name=tag,
        repo=repo,
    )

    changelog = generate_changelog(config, repo)

    if output_to_console:
        console.print(changelog, markup=False, highlight=False, soft_wrap=True)
        return

    written = persist_changelog(config, changelog, repo, changelog_path)
    console.print(f"  [green]✓[/] Updated {escape(str(written))}")

    if not config.use_commits_for_changelog:
        if tag:
            # Reset the live configuration, not the one at the tag
            config = retrieve_user_configuration(project_path, IncrementType.PATCH, repo=repo)
        # The change files have been consumed by this release
        reset_user_configuration(
            config,
            UserConfigurationResetRequest(changelog=True, increment_type=True),
            repo,
        )
        console.print("  [green]✓[/] Cleared change files")
