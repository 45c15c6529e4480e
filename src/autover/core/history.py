"""Release history derived from version tags.

A release is marked by a tag named ``version_<yyyy-MM-dd.HH.mm.ss>``. The
timestamp orders releases; the newest tag is the current release and the
one before it bounds the commits that belong to it.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING

from autover.exceptions import InvalidVersionTagError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from autover.vcs.git import GitRepository

VERSION_TAG_PREFIX = "version_"
VERSION_TAG_DATE_FORMAT = "%Y-%m-%d.%H.%M.%S"

_VERSION_TAG_PATTERN = re.compile(
    rf"^{VERSION_TAG_PREFIX}(?P<date>\d{{4}}-\d{{2}}-\d{{2}}\.\d{{2}}\.\d{{2}}\.\d{{2}})$"
)


@dataclass(frozen=True, slots=True)
class ReleaseRange:
    """The current release and the tag of the release before it."""

    current: datetime
    previous_tag: str | None = None

    @property
    def current_tag(self) -> str:
        return format_version_tag(self.current)


def format_version_tag(moment: datetime) -> str:
    return f"{VERSION_TAG_PREFIX}{moment.strftime(VERSION_TAG_DATE_FORMAT)}"


def parse_version_tag(tag: str) -> datetime | None:
    """Return the timestamp encoded in ``tag``, or None if it is not a version tag."""
    match = _VERSION_TAG_PATTERN.match(tag)
    if not match:
        return None
    try:
        return datetime.strptime(match.group("date"), VERSION_TAG_DATE_FORMAT)
    except ValueError:
        # Right shape, impossible date (e.g. month 13)
        return None


def get_version_dates(tags: Iterable[str]) -> list[datetime]:
    """Timestamps of all version tags, newest first."""
    dates = (parse_version_tag(tag) for tag in tags)
    return sorted((d for d in dates if d is not None), reverse=True)


def resolve_release_range(repo: GitRepository) -> ReleaseRange:
    """Find the current release and the tag bounding its commits.

    Raises:
        InvalidVersionTagError: If the repository has no version tag
    """
    version_dates = get_version_dates(repo.get_tags())
    if not version_dates:
        raise InvalidVersionTagError(
            f"The Git repository '{repo.path}' does not have a valid version tag. "
            "Please run 'autover version' first."
        )

    previous_tag = format_version_tag(version_dates[1]) if len(version_dates) > 1 else None
    return ReleaseRange(current=version_dates[0], previous_tag=previous_tag)
