"""Implementation of the 'version' command.

The version command increments the version of every configured project,
stages the changes and records the release with a commit and a version tag.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING

from rich.markup import escape
from rich.panel import Panel

from autover.config import (
    UserConfigurationResetRequest,
    reset_user_configuration,
    retrieve_user_configuration,
)
from autover.core.history import format_version_tag
from autover.core.version import ThreePartVersion
from autover.exceptions import InvalidArgumentError, NoVersionTagError
from autover.project.csproj import project_has_version_tag, update_version
from autover.vcs import GitRepository

if TYPE_CHECKING:
    from rich.console import Console

    from autover.core.version import IncrementType


def run_version(
    path: str | None,
    increment_type: IncrementType,
    next_version: str | None,
    commit: bool,
    console: Console,
) -> None:
    """Run the version command.

    Args:
        path: Optional path to search for projects
        increment_type: Increment for projects not yet in the configuration
        next_version: Explicit version for every project instead of incrementing
        commit: Whether to commit the changes and create the version tag
        console: Console for standard output
    """
    project_path = Path(path) if path else Path.cwd()
    repo = GitRepository.discover(project_path)
    config = retrieve_user_configuration(project_path, increment_type, repo=repo)

    # Check every project before touching any file
    if next_version and not ThreePartVersion.try_parse(next_version)[1]:
        raise InvalidArgumentError(
            f"The version '{next_version}' you are trying to update to is invalid."
        )
    for project in config.projects:
        definition = project.project_definition
        if not project_has_version_tag(definition):
            raise NoVersionTagError(
                f"The project '{definition.project_path}' does not have a Version tag. "
                "Add a Version tag and run the tool again."
            )
        if not next_version:
            ThreePartVersion.parse(definition.version.strip())

    console.print()
    for project in config.projects:
        definition = project.project_definition
        previous = definition.version.strip()
        new_version = update_version(
            definition,
            project.increment_type or config.default_increment_type,
            project.prerelease_label,
            next_version,
        )
        console.print(
            f"  [green]✓[/] [bold]{escape(project.name)}[/] [cyan]{escape(previous)}[/] "
            f"→ [green]{escape(str(new_version))}[/]"
        )

    for project in config.projects:
        repo.stage_changes(project.project_definition.project_path)

    if config.persist_configuration:
        reset_user_configuration(
            config,
            UserConfigurationResetRequest(increment_type=True),
            repo,
        )

    if not commit:
        console.print("\n[dim]Changes staged. Skipped commit and version tag.[/]")
        return

    released_at = datetime.now()
    tag = format_version_tag(released_at)
    repo.commit(f"Released {released_at:%Y-%m-%d}")
    repo.add_tag(tag)

    console.print(
        Panel(
            f"[green]Versioned {len(config.projects)} project(s)![/]\n\n"
            f"Created tag [cyan]{tag}[/]\n\n"
            "Next steps:\n"
            "  1. Generate the changelog: [cyan]autover changelog[/]\n"
            "  2. Push: [cyan]git push --follow-tags[/]",
            title="[green]Version Complete[/]",
            border_style="green",
        )
    )
