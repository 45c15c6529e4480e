"""Project file discovery and version manipulation.

Projects are ``.csproj`` XML documents carrying their version in a
``<Version>`` element. Reading goes through an XML parser; updating uses a
targeted regex replacement so the rest of the document keeps its exact
formatting and comments.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from xml.etree import ElementTree

from autover.core.version import IncrementType, ThreePartVersion, get_next_version
from autover.exceptions import (
    InvalidArgumentError,
    InvalidProjectError,
    NoValidProjectError,
    NoVersionTagError,
)

logger = logging.getLogger(__name__)

PROJECT_FILE_EXTENSION = ".csproj"
VERSION_TAG = "Version"

_VERSION_ELEMENT_PATTERN = re.compile(
    # Comments and CDATA sections are matched too so that they can be skipped
    r"<!--.*?-->|<!\[CDATA\[.*?\]\]>"
    rf"|(<{VERSION_TAG}(?:\s[^>]*)?>)(.*?)(</{VERSION_TAG}\s*>)",
    re.DOTALL,
)


@dataclass
class ProjectDefinition:
    """A discovered project file."""

    project_path: str
    contents: str
    document: ElementTree.Element
    version: str | None = None

    @classmethod
    def load(cls, project_path: str | Path) -> ProjectDefinition:
        """Read and parse a project file.

        Raises:
            InvalidProjectError: If the file is not well-formed XML
        """
        path = Path(project_path)
        contents = path.read_text(encoding="utf-8")
        document = _parse_document(path, contents)

        version_element = _find_version_element(document)
        version = None if version_element is None else (version_element.text or "")
        return cls(str(path), contents, document, version)


def _parse_document(path: Path, contents: str) -> ElementTree.Element:
    try:
        return ElementTree.fromstring(contents)
    except ElementTree.ParseError as e:
        raise InvalidProjectError(f"The project '{path}' is not a valid XML document: {e}") from e


def _local_name(tag: str) -> str:
    # "{namespace}Version" -> "Version"
    return tag.rsplit("}", 1)[-1]


def _find_version_element(document: ElementTree.Element) -> ElementTree.Element | None:
    for element in document.iter():
        if isinstance(element.tag, str) and _local_name(element.tag) == VERSION_TAG:
            return element
    return None


def get_available_projects(project_path: str | Path | None) -> list[ProjectDefinition]:
    """Find every project file under ``project_path``.

    Args:
        project_path: Directory to search recursively, or a single project file

    Returns:
        Project definitions in discovery order

    Raises:
        NoValidProjectError: If no project file is found
        InvalidProjectError: If a project file cannot be used
    """
    candidates: list[Path] = []

    if project_path:
        root = Path(project_path).absolute()
        if root.is_dir():
            candidates = [p for p in root.rglob(f"*{PROJECT_FILE_EXTENSION}") if p.is_file()]
        elif root.is_file():
            candidates = [root]

    if not candidates:
        raise NoValidProjectError(
            f"Failed to find a valid {PROJECT_FILE_EXTENSION} file at path {project_path}"
        )

    definitions = []
    for candidate in candidates:
        if candidate.suffix != PROJECT_FILE_EXTENSION:
            raise InvalidProjectError(
                f"Invalid project path {candidate}. "
                f"The project path must point to a {PROJECT_FILE_EXTENSION} file"
            )
        definition = ProjectDefinition.load(candidate)
        logger.debug("Discovered project %s (version %s)", candidate, definition.version)
        definitions.append(definition)

    return definitions


def project_has_version_tag(definition: ProjectDefinition) -> bool:
    return _find_version_match(definition) is not None


def _find_version_match(definition: ProjectDefinition) -> re.Match[str] | None:
    """Locate the ``<Version>`` element the XML parser reports, as raw text.

    Returns ``None`` when the first element outside comments and CDATA does
    not hold the same text as the parsed element.
    """
    version_element = _find_version_element(definition.document)
    if version_element is None:
        return None

    for match in _VERSION_ELEMENT_PATTERN.finditer(definition.contents):
        if match.group(1) is None:
            continue
        if match.group(2) == (version_element.text or ""):
            return match
        return None
    return None


def update_version(
    definition: ProjectDefinition,
    increment_type: IncrementType,
    prerelease_label: str | None = None,
    override_version: str | None = None,
) -> ThreePartVersion:
    """Rewrite the version of a project file.

    Args:
        definition: Project to update, modified in place
        increment_type: Component to increment
        prerelease_label: Label for the new version, replacing any existing one
        override_version: Explicit version to set instead of incrementing

    Returns:
        The version written to the file

    Raises:
        NoVersionTagError: If the project has no version element
        InvalidArgumentError: If ``override_version`` is not a valid version
        InvalidVersionError: If the current version cannot be parsed
    """
    match = _find_version_match(definition)
    if match is None:
        raise NoVersionTagError(
            f"The project '{definition.project_path}' does not have a {VERSION_TAG} tag. "
            f"Add a {VERSION_TAG} tag and run the tool again."
        )

    if override_version:
        new_version, valid = ThreePartVersion.try_parse(override_version)
        if not valid:
            raise InvalidArgumentError(
                f"The version '{override_version}' you are trying to update to is invalid."
            )
    else:
        new_version = get_next_version(match.group(2).strip(), increment_type, prerelease_label)

    contents = (
        definition.contents[: match.start()]
        + f"{match.group(1)}{new_version}{match.group(3)}"
        + definition.contents[match.end() :]
    )

    path = Path(definition.project_path)
    definition.document = _parse_document(path, contents)
    definition.contents = contents
    definition.version = str(new_version)
    path.write_text(contents, encoding="utf-8")

    logger.debug("Updated %s to version %s", path, new_version)
    return new_version


def get_project_name(project_path: str | Path) -> str:
    """Derive a project name from its file path.

    The final path segment with its extension removed, whichever separator
    the path uses: ``src/Core/Core.csproj`` -> ``Core``.

    Raises:
        InvalidProjectError: If the file name has no extension
    """
    file_name = str(project_path).replace("\\", "/").rstrip("/").split("/")[-1]
    stem, dot, extension = file_name.rpartition(".")
    if not dot or not stem or not extension:
        raise InvalidProjectError(f"The project '{project_path}' is invalid.")
    return stem
