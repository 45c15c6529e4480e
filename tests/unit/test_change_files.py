"""Tests for change files."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from autover.config.change_files import (
    create_change_file,
    get_change_files_directory,
    list_change_files,
    load_change_files,
    reset_change_files,
)
from autover.config.loader import retrieve_user_configuration
from autover.config.models import UserConfiguration
from autover.core.version import IncrementType
from autover.exceptions import (
    InvalidArgumentError,
    InvalidProjectError,
    InvalidUserConfigurationError,
)


@pytest.fixture
def config(mock_repo: MagicMock, projects_dir: Path) -> UserConfiguration:
    return retrieve_user_configuration(projects_dir, IncrementType.PATCH, repo=mock_repo)


def write_change_file(config: UserConfiguration, name: str, projects: list[dict]) -> Path:
    directory = get_change_files_directory(config)
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / name
    path.write_text(json.dumps({"Projects": projects}))
    return path


class TestCreateChangeFile:
    """Tests for create_change_file()."""

    def test_creates_and_stages(self, config: UserConfiguration, mock_repo: MagicMock):
        path = create_change_file(config, mock_repo, "Core", IncrementType.MINOR, " Added cache ")

        assert path.parent == get_change_files_directory(config)
        assert json.loads(path.read_text()) == {
            "Projects": [{"Name": "Core", "Type": "Minor", "ChangelogMessages": ["Added cache"]}]
        }
        mock_repo.stage_changes.assert_called_once_with(path)

    def test_unique_names(self, config: UserConfiguration, mock_repo: MagicMock):
        first = create_change_file(config, mock_repo, "Core", IncrementType.PATCH, "one")
        second = create_change_file(config, mock_repo, "Core", IncrementType.PATCH, "two")

        assert first != second
        assert len(list_change_files(config)) == 2

    def test_unknown_project_raises(self, config: UserConfiguration, mock_repo: MagicMock):
        with pytest.raises(InvalidArgumentError, match="does not exist"):
            create_change_file(config, mock_repo, "Nope", IncrementType.PATCH, "message")

    def test_empty_message_raises(self, config: UserConfiguration, mock_repo: MagicMock):
        with pytest.raises(InvalidArgumentError, match="cannot be empty"):
            create_change_file(config, mock_repo, "Core", IncrementType.PATCH, "   ")

    def test_requires_git_root(self, mock_repo: MagicMock):
        with pytest.raises(InvalidProjectError):
            create_change_file(UserConfiguration(), mock_repo, "Core", IncrementType.PATCH, "m")


class TestLoadChangeFiles:
    """Tests for load_change_files()."""

    def test_collects_in_file_name_order(self, config: UserConfiguration):
        write_change_file(config, "b.json", [{"Name": "Core", "ChangelogMessages": ["second"]}])
        write_change_file(config, "a.json", [{"Name": "Core", "ChangelogMessages": ["first"]}])

        load_change_files(config)

        assert config.find_project("Core").changelog == ["first", "second"]

    def test_malformed_change_file_raises(self, config: UserConfiguration):
        """The failing file is named in the error."""
        path = write_change_file(config, "a.json", [{"Name": "Core", "Type": "Huge"}])

        with pytest.raises(InvalidUserConfigurationError, match="a.json") as excinfo:
            load_change_files(config)

        assert str(path) in str(excinfo.value)

    def test_unknown_project_ignored(self, config: UserConfiguration):
        write_change_file(config, "a.json", [{"Name": "Other", "ChangelogMessages": ["x"]}])

        load_change_files(config)

        assert all(p.changelog == [] for p in config.projects)

    def test_increment_type_unchanged_by_default(self, config: UserConfiguration):
        """Change file types are ignored unless the option is enabled."""
        write_change_file(config, "a.json", [{"Name": "Core", "Type": "Major"}])

        load_change_files(config)

        assert config.find_project("Core").increment_type == IncrementType.PATCH

    def test_highest_increment_type_wins(self, config: UserConfiguration):
        config.change_files_determine_increment_type = True
        write_change_file(config, "a.json", [{"Name": "Core", "Type": "Minor"}])
        write_change_file(
            config, "b.json", [{"Name": "Core", "Type": "Patch"}, {"Name": "Web", "Type": "None"}]
        )

        load_change_files(config)

        assert config.find_project("Core").increment_type == IncrementType.MINOR
        assert config.find_project("Web").increment_type == IncrementType.NONE


class TestResetChangeFiles:
    """Tests for reset_change_files()."""

    def test_deletes_and_stages(self, config: UserConfiguration, mock_repo: MagicMock):
        write_change_file(config, "a.json", [{"Name": "Core", "ChangelogMessages": ["x"]}])
        load_change_files(config)

        reset_change_files(config, mock_repo)

        assert list_change_files(config) == []
        assert config.find_project("Core").changelog == []
        mock_repo.stage_changes.assert_called_once_with(get_change_files_directory(config).parent)

    def test_nothing_to_reset(self, config: UserConfiguration, mock_repo: MagicMock):
        reset_change_files(config, mock_repo)

        mock_repo.stage_changes.assert_not_called()
