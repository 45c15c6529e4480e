"""Change files: changelog entries recorded outside of commit history.

Each change file is a small JSON document under ``.autover/changes/``
naming one or more projects, an increment type and the changelog messages
for them. They are collected into ``Project.changelog`` when the
configuration is reconciled and deleted once a changelog has been written.
"""

from __future__ import annotations

import logging
import uuid
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import Field

from autover.config.models import CONFIG_FOLDER_NAME, PascalCaseModel
from autover.core.version import IncrementType
from autover.exceptions import (
    InvalidArgumentError,
    InvalidProjectError,
    InvalidUserConfigurationError,
)

if TYPE_CHECKING:
    from autover.config.models import UserConfiguration
    from autover.vcs.git import GitRepository

logger = logging.getLogger(__name__)

CHANGE_FILES_FOLDER_NAME = "changes"


class ChangeFileProject(PascalCaseModel):
    name: str
    type: IncrementType = IncrementType.PATCH
    changelog_messages: list[str] = Field(default_factory=list)


class ChangeFile(PascalCaseModel):
    projects: list[ChangeFileProject] = Field(default_factory=list)


def get_change_files_directory(config: UserConfiguration) -> Path:
    if not config.git_root:
        raise InvalidProjectError(
            "The project path you have specified is not a valid git repository."
        )
    return Path(config.git_root) / CONFIG_FOLDER_NAME / CHANGE_FILES_FOLDER_NAME


def list_change_files(config: UserConfiguration) -> list[Path]:
    directory = get_change_files_directory(config)
    if not directory.is_dir():
        return []
    return sorted(directory.glob("*.json"))


def create_change_file(
    config: UserConfiguration,
    repo: GitRepository,
    project_name: str,
    increment_type: IncrementType,
    message: str,
) -> Path:
    """Record a changelog message for a project and stage the new file.

    Raises:
        InvalidProjectError: If the configuration has no git root
        InvalidArgumentError: If the project is not configured or the message is empty
    """
    directory = get_change_files_directory(config)
    if config.find_project(project_name) is None:
        raise InvalidArgumentError(
            f"The project '{project_name}' does not exist in the configuration."
        )
    if not message.strip():
        raise InvalidArgumentError("The change message cannot be empty.")

    change_file = ChangeFile(
        projects=[
            ChangeFileProject(
                name=project_name,
                type=increment_type,
                changelog_messages=[message.strip()],
            )
        ]
    )

    directory.mkdir(parents=True, exist_ok=True)
    path = directory / f"{uuid.uuid4()}.json"
    path.write_text(change_file.model_dump_json(by_alias=True, indent=2) + "\n", encoding="utf-8")

    repo.stage_changes(path)
    logger.info("Created change file %s", path)
    return path


def load_change_files(config: UserConfiguration) -> None:
    """Collect change file messages into the configured projects.

    When ``change_files_determine_increment_type`` is set, each project's
    increment type becomes the highest type recorded for it.
    """
    votes: dict[str, list[IncrementType]] = {}

    for path in list_change_files(config):
        try:
            change_file = ChangeFile.model_validate_json(path.read_bytes())
        except Exception as e:
            raise InvalidUserConfigurationError(
                f"There was an issue loading the change file at '{path}'."
            ) from e
        for entry in change_file.projects:
            project = config.find_project(entry.name)
            if project is None:
                logger.warning(
                    "Change file %s references unknown project '%s'", path.name, entry.name
                )
                continue
            project.changelog.extend(entry.changelog_messages)
            votes.setdefault(project.name, []).append(entry.type)

    if config.change_files_determine_increment_type:
        for project in config.projects:
            if project.name in votes:
                project.increment_type = IncrementType.highest(*votes[project.name])


def reset_change_files(config: UserConfiguration, repo: GitRepository) -> None:
    """Delete all change files, stage the deletion and clear collected entries."""
    paths = list_change_files(config)
    for path in paths:
        path.unlink()

    if paths:
        # The changes folder may be gone now; stage through its parent
        repo.stage_changes(get_change_files_directory(config).parent)

    for project in config.projects:
        project.changelog.clear()
