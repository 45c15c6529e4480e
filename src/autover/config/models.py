"""Pydantic models for autover configuration.

The configuration lives in ``<git root>/.autover/autover.json``. JSON keys
are PascalCase; Python attributes are snake_case.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr
from pydantic.alias_generators import to_pascal

from autover.core.version import IncrementType

if TYPE_CHECKING:
    from autover.project.csproj import ProjectDefinition

CONFIG_FOLDER_NAME = ".autover"
CONFIG_FILE_NAME = "autover.json"


class PascalCaseModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_pascal,
        populate_by_name=True,
        extra="ignore",
    )


class Project(PascalCaseModel):
    """A configured project.

    ``path`` is relative to the directory autover searched for projects.
    ``changelog`` holds the entries collected from change files and is
    never written to the configuration file.
    """

    name: str
    path: str
    increment_type: IncrementType | None = None
    prerelease_label: str | None = None
    changelog: list[str] = Field(default_factory=list, exclude=True)

    _project_definition: ProjectDefinition | None = PrivateAttr(default=None)

    @property
    def project_definition(self) -> ProjectDefinition | None:
        """The discovered project file, resolved on every reconciliation."""
        return self._project_definition

    @project_definition.setter
    def project_definition(self, value: ProjectDefinition | None) -> None:
        self._project_definition = value


class UserConfiguration(PascalCaseModel):
    """Per-repository versioning preferences."""

    projects: list[Project] = Field(default_factory=list)
    use_commits_for_changelog: bool = True
    default_increment_type: IncrementType = IncrementType.PATCH
    changelog_categories: dict[str, str] | None = None
    change_files_determine_increment_type: bool = False

    _git_root: str | None = PrivateAttr(default=None)
    _persist_configuration: bool = PrivateAttr(default=False)

    @property
    def git_root(self) -> str | None:
        return self._git_root

    @git_root.setter
    def git_root(self, value: str | None) -> None:
        self._git_root = value

    @property
    def persist_configuration(self) -> bool:
        """Whether the configuration came from an existing file."""
        return self._persist_configuration

    @persist_configuration.setter
    def persist_configuration(self, value: bool) -> None:
        self._persist_configuration = value

    def find_project(self, name: str) -> Project | None:
        return next((project for project in self.projects if project.name == name), None)

    def to_json(self) -> str:
        """Serialize for the configuration file: indented, None fields omitted."""
        return self.model_dump_json(by_alias=True, exclude_none=True, indent=2) + "\n"


class UserConfigurationResetRequest(BaseModel):
    """What to reset after a release."""

    changelog: bool = False
    increment_type: bool = False
