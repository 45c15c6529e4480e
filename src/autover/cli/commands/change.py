"""Implementation of the 'change' command."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from rich.markup import escape

from autover.config import retrieve_user_configuration
from autover.config.change_files import create_change_file
from autover.vcs import GitRepository

if TYPE_CHECKING:
    from rich.console import Console

    from autover.core.version import IncrementType


def run_change(
    path: str | None,
    project_name: str,
    message: str,
    increment_type: IncrementType,
    console: Console,
) -> None:
    """Record a changelog entry for one project in a new change file."""
    project_path = Path(path) if path else Path.cwd()
    repo = GitRepository.discover(project_path)
    config = retrieve_user_configuration(project_path, increment_type, repo=repo)

    change_file = create_change_file(config, repo, project_name, increment_type, message)
    console.print(f"  [green]✓[/] Created {escape(str(change_file.relative_to(repo.path)))}")
