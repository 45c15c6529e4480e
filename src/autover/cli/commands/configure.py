"""Implementation of the 'configure' command."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from rich.markup import escape

from autover.config import retrieve_user_configuration, save_user_configuration
from autover.vcs import GitRepository

if TYPE_CHECKING:
    from rich.console import Console

    from autover.core.version import IncrementType


def run_configure(path: str | None, increment_type: IncrementType, console: Console) -> None:
    """Write a configuration file covering every discovered project.

    An existing configuration is left untouched.
    """
    project_path = Path(path) if path else Path.cwd()
    repo = GitRepository.discover(project_path)
    config = retrieve_user_configuration(project_path, increment_type, repo=repo)

    if config.persist_configuration:
        console.print("[yellow]A configuration already exists. Nothing to do.[/]")
        return

    config.default_increment_type = increment_type
    written = save_user_configuration(config, repo)
    console.print(
        f"  [green]✓[/] Wrote {escape(str(written.relative_to(repo.path)))} "
        f"with {len(config.projects)} project(s)"
    )
