"""Shared pytest fixtures."""

from __future__ import annotations

import subprocess
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from autover.vcs.git import GitRepository

CSPROJ_TEMPLATE = """\
<Project Sdk="Microsoft.NET.Sdk">

  <PropertyGroup>
    <!-- keep this comment -->
    <TargetFramework>net8.0</TargetFramework>
    <Version>{version}</Version>
  </PropertyGroup>

</Project>
"""

CSPROJ_WITHOUT_VERSION = """\
<Project Sdk="Microsoft.NET.Sdk">
  <PropertyGroup>
    <TargetFramework>net8.0</TargetFramework>
  </PropertyGroup>
</Project>
"""


def write_csproj(path: Path, version: str | None = "1.0.0") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    if version is None:
        path.write_text(CSPROJ_WITHOUT_VERSION)
    else:
        path.write_text(CSPROJ_TEMPLATE.format(version=version))
    return path


@pytest.fixture
def projects_dir(tmp_path: Path) -> Path:
    """A source tree with two projects."""
    write_csproj(tmp_path / "src" / "Core" / "Core.csproj", "1.2.3")
    write_csproj(tmp_path / "src" / "Web" / "Web.csproj", "0.4.0-beta")
    return tmp_path


@pytest.fixture
def mock_repo(projects_dir: Path) -> MagicMock:
    """A GitRepository double rooted at the projects directory."""
    repo = MagicMock(spec=GitRepository)
    repo.path = projects_dir
    repo.get_tags.return_value = []
    repo.get_version_commits.return_value = []
    return repo


def _git(cwd: Path, *args: str) -> None:
    subprocess.run(["git", *args], cwd=cwd, check=True, capture_output=True)


@pytest.fixture
def git_repo(projects_dir: Path) -> Path:
    """A real git repository containing the two projects and one commit."""
    _git(projects_dir, "init", "-q")
    _git(projects_dir, "config", "user.name", "Test")
    _git(projects_dir, "config", "user.email", "test@example.com")
    _git(projects_dir, "config", "commit.gpgsign", "false")
    _git(projects_dir, "config", "tag.gpgsign", "false")
    _git(projects_dir, "add", "-A")
    _git(projects_dir, "commit", "-q", "-m", "chore: initial commit")
    return projects_dir


@pytest.fixture
def commit_in(git_repo: Path):
    """Create an empty commit with the given message."""

    def _commit(message: str) -> None:
        _git(git_repo, "commit", "-q", "--allow-empty", "-m", message)

    return _commit


@pytest.fixture
def tag_in(git_repo: Path):
    """Create a lightweight tag at HEAD."""

    def _tag(name: str) -> None:
        _git(git_repo, "tag", name)

    return _tag


@pytest.fixture
def make_csproj():
    """Write a project file; ``version=None`` omits the Version element."""
    return write_csproj
