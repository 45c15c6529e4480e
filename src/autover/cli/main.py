"""CLI entry point for autover."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from autover import __version__
from autover.core.version import IncrementType
from autover.exceptions import AutoVerError

# Process exit codes
SUCCESS = 0
UNHANDLED_EXCEPTION = -1
USER_ERROR = 1

console = Console()
err_console = Console(stderr=True)

app = typer.Typer(
    name="autover",
    help="An automatic versioning tool for multi-project git repositories.",
    no_args_is_help=True,
)

logger = logging.getLogger("autover")


def configure_logging(verbose: bool) -> None:
    """Send autover's log records to stderr through rich."""
    handler = RichHandler(console=err_console, show_path=False, show_time=False)
    handler.setFormatter(logging.Formatter("%(message)s"))

    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False


def run_command(command: Callable[..., None], *args: Any) -> None:
    """Run a command, turning failures into exit codes.

    Expected problems (``AutoVerError``) exit with ``USER_ERROR``; anything
    else is treated as a bug or environment issue.
    """
    try:
        command(*args)
    except AutoVerError as e:
        err_console.print(f"[red]Error:[/] {escape(str(e))}")
        raise typer.Exit(code=USER_ERROR) from e
    except Exception as e:
        message = f"[red]Unexpected error:[/] {escape(str(e))}"
        if e.__cause__ is not None:
            message += f"\n[dim]Caused by: {escape(repr(e.__cause__))}[/]"
        err_console.print(message)
        logger.debug("Unhandled exception", exc_info=True)
        raise typer.Exit(code=UNHANDLED_EXCEPTION) from e


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"autover {__version__}")
        raise typer.Exit(code=SUCCESS)


@app.callback()
def callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the autover version and exit.",
    ),
) -> None:
    """Automatic versioning and changelogs for .csproj projects in a git repository."""
    configure_logging(verbose)


@app.command("version")
def version_command(
    project_path: str | None = typer.Option(
        None, "--project-path", "-p", help="Path to the project(s). Defaults to cwd."
    ),
    increment_type: IncrementType = typer.Option(
        IncrementType.PATCH,
        "--increment-type",
        "-i",
        case_sensitive=False,
        help="Increment for projects without a configured one.",
    ),
    next_version: str | None = typer.Option(
        None, "--next-version", help="Set this exact version instead of incrementing."
    ),
    commit: bool = typer.Option(
        True, "--commit/--no-commit", help="Commit the changes and create a version tag."
    ),
) -> None:
    """Perform automated versioning of the specified project(s)."""
    from autover.cli.commands.version import run_version

    run_command(run_version, project_path, increment_type, next_version, commit, console)


@app.command("changelog")
def changelog_command(
    project_path: str | None = typer.Option(
        None, "--project-path", "-p", help="Path to the project(s). Defaults to cwd."
    ),
    tag: str | None = typer.Option(
        None, "--tag", help="Use the configuration as it was at this tag."
    ),
    output_to_console: bool = typer.Option(
        False, "--output-to-console", help="Print the changelog instead of writing it."
    ),
    changelog_path: str | None = typer.Option(
        None, "--changelog-path", help="Changelog file. Defaults to CHANGELOG.md at the git root."
    ),
) -> None:
    """Generate the changelog for the latest release."""
    from autover.cli.commands.changelog import run_changelog

    run_command(run_changelog, project_path, tag, output_to_console, changelog_path, console)


@app.command("change")
def change_command(
    project_name: str = typer.Option(..., "--project-name", "-n", help="Configured project name."),
    message: str = typer.Option(..., "--message", "-m", help="Changelog entry."),
    increment_type: IncrementType = typer.Option(
        IncrementType.PATCH, "--increment-type", "-i", case_sensitive=False
    ),
    project_path: str | None = typer.Option(None, "--project-path", "-p"),
) -> None:
    """Record a changelog entry in a change file."""
    from autover.cli.commands.change import run_change

    run_command(run_change, project_path, project_name, message, increment_type, console)


@app.command("info")
def info_command(
    project_path: str | None = typer.Option(None, "--project-path", "-p"),
    increment_type: IncrementType = typer.Option(
        IncrementType.PATCH, "--increment-type", "-i", case_sensitive=False
    ),
) -> None:
    """Retrieve versioning information on the specified project(s)."""
    from autover.cli.commands.info import run_info

    run_command(run_info, project_path, increment_type, console)


@app.command("configure")
def configure_command(
    project_path: str | None = typer.Option(None, "--project-path", "-p"),
    increment_type: IncrementType = typer.Option(
        IncrementType.PATCH, "--increment-type", "-i", case_sensitive=False
    ),
) -> None:
    """Create a configuration file for the discovered projects."""
    from autover.cli.commands.configure import run_configure

    run_command(run_configure, project_path, increment_type, console)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
