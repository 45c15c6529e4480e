"""Configuration loading, reconciliation and persistence.

The persisted configuration lists projects by path. Every run it is
reconciled against the project files actually found on disk, so each
configured project carries a reference to its discovered definition.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING

from autover.config.change_files import load_change_files, reset_change_files
from autover.config.models import (
    CONFIG_FILE_NAME,
    CONFIG_FOLDER_NAME,
    Project,
    UserConfiguration,
)
from autover.exceptions import (
    ConfiguredProjectNotFoundError,
    InvalidProjectError,
    InvalidUserConfigurationError,
    ResetUserConfigurationFailedError,
)
from autover.project.csproj import get_available_projects, get_project_name
from autover.vcs.git import GitRepository

if TYPE_CHECKING:
    from autover.config.models import UserConfigurationResetRequest
    from autover.core.version import IncrementType
    from autover.project.csproj import ProjectDefinition

logger = logging.getLogger(__name__)

CONFIG_RELATIVE_PATH = Path(CONFIG_FOLDER_NAME) / CONFIG_FILE_NAME


def get_config_path(config: UserConfiguration) -> Path:
    if not config.git_root:
        raise InvalidProjectError(
            "The project path you have specified is not a valid git repository."
        )
    return Path(config.git_root) / CONFIG_RELATIVE_PATH


def load_user_configuration(
    repo: GitRepository,
    tag_name: str | None = None,
) -> UserConfiguration | None:
    """Load the persisted configuration of a repository.

    Args:
        repo: Repository whose root holds the configuration folder
        tag_name: Read the configuration as it was at this tag instead of
            the working tree

    Returns:
        The configuration, or None if the repository has none

    Raises:
        InvalidUserConfigurationError: If the file cannot be read or validated
    """
    live_path = repo.path / CONFIG_RELATIVE_PATH
    config_path = CONFIG_RELATIVE_PATH if tag_name else live_path

    if not live_path.exists():
        return None

    try:
        if tag_name:
            content = repo.get_file_by_tag(tag_name, CONFIG_RELATIVE_PATH)
        else:
            content = live_path.read_bytes()
        return UserConfiguration.model_validate_json(content)
    except Exception as e:
        raise InvalidUserConfigurationError(
            f"There was an issue loading the user configuration at '{config_path}'."
        ) from e


def _normalize_path(path: str | Path) -> str:
    """Absolute, separator-agnostic form of a path used for comparisons."""
    text = str(path).replace("\\", "/")
    return os.path.normpath(os.path.abspath(text)).replace(os.sep, "/")


def _search_root(project_path: Path) -> Path:
    root = project_path.absolute()
    return root.parent if root.is_file() else root


def retrieve_user_configuration(
    project_path: str | Path | None,
    increment_type: IncrementType,
    tag_name: str | None = None,
    repo: GitRepository | None = None,
) -> UserConfiguration:
    """Load the configuration and bind it to the projects found on disk.

    With an existing configuration every configured project must match a
    discovered project file. Without one (or with an empty project list) a
    configuration covering every discovered project is created, using
    ``increment_type`` for all of them.

    Args:
        project_path: Directory to search for projects; defaults to the
            current directory
        increment_type: Increment type for freshly created project entries
        tag_name: Load the persisted configuration as of this tag
        repo: Repository to use; discovered from ``project_path`` when omitted

    Raises:
        NotAGitRepositoryError: If ``project_path`` is not in a git repository
        ConfiguredProjectNotFoundError: If a configured project does not exist
        NoValidProjectError: If no project file is found
    """
    project_path = Path(project_path) if project_path else Path.cwd()
    if repo is None:
        repo = GitRepository.discover(project_path)

    config = load_user_configuration(repo, tag_name)
    available_projects = get_available_projects(project_path)
    search_root = _search_root(project_path)

    if config is not None and config.projects:
        _bind_configured_projects(config, available_projects, search_root)
        config.persist_configuration = True
    else:
        if config is None:
            config = UserConfiguration()
        _seed_projects(config, available_projects, search_root, increment_type)

    config.git_root = str(repo.path)
    load_change_files(config)

    if not config.git_root:
        raise InvalidProjectError(
            "The project path you have specified is not a valid git repository."
        )
    unresolved = [p.path for p in config.projects if p.project_definition is None]
    if unresolved:
        raise ConfiguredProjectNotFoundError(
            f"The configured projects {unresolved} could not be resolved."
        )

    logger.debug(
        "Resolved %d project(s) in %s (persisted configuration: %s)",
        len(config.projects),
        config.git_root,
        config.persist_configuration,
    )
    return config


def _bind_configured_projects(
    config: UserConfiguration,
    available_projects: list[ProjectDefinition],
    search_root: Path,
) -> None:
    by_path = {_normalize_path(d.project_path): d for d in available_projects}

    for project in config.projects:
        configured_path = search_root / project.path.replace("\\", "/")
        definition = by_path.get(_normalize_path(configured_path))
        if definition is None:
            raise ConfiguredProjectNotFoundError(
                f"The configured project '{project.path}' does not exist "
                f"in the specified path '{search_root}'."
            )
        project.project_definition = definition


def _seed_projects(
    config: UserConfiguration,
    available_projects: list[ProjectDefinition],
    search_root: Path,
    increment_type: IncrementType,
) -> None:
    for definition in available_projects:
        path = Path(definition.project_path)
        try:
            relative = path.relative_to(search_root).as_posix()
        except ValueError:
            relative = path.as_posix()

        project = Project(
            name=get_project_name(definition.project_path),
            path=relative,
            increment_type=increment_type,
        )
        project.project_definition = definition
        config.projects.append(project)


def save_user_configuration(config: UserConfiguration, repo: GitRepository) -> Path:
    """Write the configuration file and stage it.

    Returns:
        Path of the written file
    """
    config_path = get_config_path(config)
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(config.to_json(), encoding="utf-8")
    repo.stage_changes(config_path)
    logger.info("Saved configuration to %s", config_path)
    return config_path


def reset_user_configuration(
    config: UserConfiguration,
    reset_request: UserConfigurationResetRequest,
    repo: GitRepository,
) -> None:
    """Clear per-release state from the persisted configuration.

    Does nothing when the repository has no configuration file.

    Raises:
        ResetUserConfigurationFailedError: If the file cannot be rewritten
    """
    config_path = get_config_path(config)
    if not config_path.exists():
        logger.debug("No configuration file at %s, nothing to reset", config_path)
        return

    try:
        if reset_request.changelog:
            reset_change_files(config, repo)

        if reset_request.increment_type:
            for project in config.projects:
                project.increment_type = config.default_increment_type

        config_path.write_text(config.to_json(), encoding="utf-8")
        repo.stage_changes(config_path)
    except Exception as e:
        raise ResetUserConfigurationFailedError(
            f"Unable to reset the configuration file '{config_path}'."
        ) from e
