"""Implementation of the 'info' command."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from rich.markup import escape
from rich.table import Table

from autover.config import retrieve_user_configuration
from autover.core.commits import calculate_increment_type
from autover.core.history import format_version_tag, get_version_dates
from autover.vcs import GitRepository

if TYPE_CHECKING:
    from rich.console import Console

    from autover.core.version import IncrementType


def run_info(path: str | None, increment_type: IncrementType, console: Console) -> None:
    """Show the configured projects and the increment suggested by recent commits."""
    project_path = Path(path) if path else Path.cwd()
    repo = GitRepository.discover(project_path)
    config = retrieve_user_configuration(project_path, increment_type, repo=repo)

    table = Table(title="Projects")
    table.add_column("Name", style="bold")
    table.add_column("Path")
    table.add_column("Version", style="cyan")
    table.add_column("Increment")
    table.add_column("Pending changes", justify="right")

    for project in config.projects:
        definition = project.project_definition
        table.add_row(
            escape(project.name),
            escape(project.path),
            escape(definition.version) if definition.version else "[red]missing[/]",
            str(project.increment_type or config.default_increment_type),
            str(len(project.changelog)),
        )
    console.print(table)

    version_dates = get_version_dates(repo.get_tags())
    latest_tag = format_version_tag(version_dates[0]) if version_dates else None
    commits = repo.get_version_commits(latest_tag)
    suggested = calculate_increment_type(commits, config.default_increment_type)

    console.print(f"\nLatest version tag: [cyan]{latest_tag or 'none'}[/]")
    console.print(
        f"Conventional commits since then: {len(commits)} "
        f"(suggested increment: [green]{suggested}[/])"
    )
