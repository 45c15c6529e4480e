"""Project file handling."""

from __future__ import annotations

from autover.project.csproj import (
    ProjectDefinition,
    get_available_projects,
    get_project_name,
    project_has_version_tag,
    update_version,
)

__all__ = [
    "ProjectDefinition",
    "get_available_projects",
    "get_project_name",
    "project_has_version_tag",
    "update_version",
]
